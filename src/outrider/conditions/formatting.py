"""Width-constrained line breaking for rendered condition expressions.

Generated conditions can get long, so before they are written into a
workflow file they are split into several lines. Splitting never changes
the expression: joining the lines with single spaces gives back the input
up to whitespace. Quoted strings are never split.

Two passes are applied:
1. Break after a `&&` or `||` once the current line exceeds the break
   threshold.
2. Lines still over the maximum are broken after a balanced parenthesis
   group that is followed by a logical operator.
"""

from __future__ import annotations

from outrider.conditions.tokenizer import QUOTE_CHARS, skip_quoted
from outrider.constants import (
    EXPRESSION_BREAK_THRESHOLD,
    MAX_EXPRESSION_LINE_LENGTH,
    PAREN_BREAK_THRESHOLD,
)
from outrider.logging import get_logger

__all__ = [
    "break_long_expression",
    "break_at_parentheses",
]

logger = get_logger(__name__)

_LOGICAL_OPERATORS = ("&&", "||")
_BLANKS = " \t"


def _skip_blanks(expression: str, i: int) -> int:
    while i < len(expression) and expression[i] in _BLANKS:
        i += 1
    return i


def break_long_expression(
    expression: str,
    *,
    max_line_length: int = MAX_EXPRESSION_LINE_LENGTH,
    break_threshold: int = EXPRESSION_BREAK_THRESHOLD,
    paren_break_threshold: int = PAREN_BREAK_THRESHOLD,
) -> list[str]:
    """Break a long expression into lines at logical operators.

    Args:
        expression: Rendered expression text.
        max_line_length: Expressions this long or shorter are returned as-is.
        break_threshold: A line is ended after the first `&&`/`||` at which
            its trimmed length exceeds this value.
        paren_break_threshold: Passed to break_at_parentheses() for lines
            still longer than ``max_line_length``.

    Returns:
        Lines in order, each trimmed. The caller joins them with newlines.

    Example:
        >>> break_long_expression("a && b")
        ['a && b']
    """
    if len(expression) <= max_line_length:
        return [expression]

    logger.debug("breaking_long_expression", length=len(expression))

    lines: list[str] = []
    current = ""
    i = 0
    while i < len(expression):
        char = expression[i]

        if char in QUOTE_CHARS:
            end = skip_quoted(expression, i)
            current += expression[i:end]
            i = end
            continue

        operator = expression[i : i + 2]
        if operator in _LOGICAL_OPERATORS:
            current += operator
            i += 2
            if len(current.strip()) > break_threshold:
                lines.append(current.strip())
                current = ""
                i = _skip_blanks(expression, i)
            continue

        current += char
        i += 1

    if current.strip():
        lines.append(current.strip())

    final_lines: list[str] = []
    for line in lines:
        if len(line) > max_line_length:
            final_lines.extend(
                break_at_parentheses(
                    line,
                    max_line_length=max_line_length,
                    paren_break_threshold=paren_break_threshold,
                )
            )
        else:
            final_lines.append(line)
    return final_lines


def break_at_parentheses(
    expression: str,
    *,
    max_line_length: int = MAX_EXPRESSION_LINE_LENGTH,
    paren_break_threshold: int = PAREN_BREAK_THRESHOLD,
) -> list[str]:
    """Break a long line after balanced parenthesis groups.

    A break is made only where the parenthesis depth returns to zero, the
    line so far is longer than ``paren_break_threshold``, and a `&&`/`||`
    follows the group; the operator stays on the first line. Parentheses
    inside quoted strings are ignored.

    Args:
        expression: A single line of expression text.
        max_line_length: Lines this long or shorter are returned as-is.
        paren_break_threshold: Minimum line length before breaking.

    Returns:
        Lines in order, each trimmed.
    """
    if len(expression) <= max_line_length:
        return [expression]

    lines: list[str] = []
    current = ""
    depth = 0
    i = 0
    last = len(expression) - 1
    while i < len(expression):
        char = expression[i]

        if char in QUOTE_CHARS:
            end = skip_quoted(expression, i)
            current += expression[i:end]
            i = end
            continue

        current += char
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0 and len(current) > paren_break_threshold and i < last:
                j = _skip_blanks(expression, i + 1)
                if expression[j : j + 2] in _LOGICAL_OPERATORS:
                    current += expression[i + 1 : j + 2]
                    lines.append(current.strip())
                    current = ""
                    i = _skip_blanks(expression, j + 2)
                    continue
        i += 1

    if current.strip():
        lines.append(current.strip())
    return lines
