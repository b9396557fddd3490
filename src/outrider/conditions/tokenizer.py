"""Tokenizer for condition expressions.

Splits a raw condition string into a flat list of tokens: the logical
operators `&&`, `||`, `!`, grouping parentheses, and opaque literal runs.
Literals are never interpreted. A literal run keeps its own balanced
parentheses (so `contains(a, b)` is one token) and its quoted substrings
(so `'&&'` inside a string is not an operator).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from outrider.conditions.errors import ConditionTokenizeError
from outrider.logging import get_logger

__all__ = [
    "TokenKind",
    "Token",
    "tokenize",
    "QUOTE_CHARS",
    "skip_quoted",
]

logger = get_logger(__name__)

#: Characters that open and close a quoted substring
QUOTE_CHARS = frozenset("'\"`")


class TokenKind(str, Enum):
    """Kind of token produced by the tokenizer."""

    LITERAL = "literal"
    AND = "and"  # &&
    OR = "or"  # ||
    NOT = "not"  # !
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"
    EOF = "eof"


@dataclass(frozen=True, slots=True)
class Token:
    """A single token of a condition expression.

    Attributes:
        kind: Token kind.
        value: Source text of the token ("" for EOF).
        position: Character offset of the token in the expression.
    """

    kind: TokenKind
    value: str
    position: int


def skip_quoted(expression: str, i: int) -> int:
    """Return the index just past the quoted substring starting at ``i``.

    ``expression[i]`` must be a quote character. A backslash skips the
    character after it. An unterminated quote runs to the end of the string.
    """
    quote = expression[i]
    i += 1
    while i < len(expression):
        if expression[i] == quote:
            return i + 1
        if expression[i] == "\\" and i + 1 < len(expression):
            i += 2
        else:
            i += 1
    return i


def _is_not_operator(expression: str, i: int) -> bool:
    # `!` followed by `=` belongs to a `!=` comparison inside a literal
    return expression[i] == "!" and (
        i + 1 >= len(expression) or expression[i + 1] != "="
    )


def _scan_literal(expression: str, start: int) -> int:
    """Return the end index of the literal run starting at ``start``."""
    i = start
    paren_depth = 0

    while i < len(expression):
        ch = expression[i]

        if ch in QUOTE_CHARS:
            i = skip_quoted(expression, i)
            continue

        if ch == "(":
            paren_depth += 1
            i += 1
            continue
        if ch == ")":
            if paren_depth == 0:
                # Closes an enclosing group, not part of this literal
                break
            paren_depth -= 1
            i += 1
            continue

        if paren_depth == 0:
            if expression[i : i + 2] in ("&&", "||"):
                break
            if _is_not_operator(expression, i):
                break

        i += 1

    return i


def tokenize(expression: str) -> list[Token]:
    """Tokenize a condition expression.

    Args:
        expression: Expression string to tokenize (without ${{ }} wrapper).

    Returns:
        List of tokens, always terminated by an EOF token positioned at
        ``len(expression)``.

    Raises:
        ConditionTokenizeError: If a literal run is empty.

    Examples:
        >>> [t.kind.value for t in tokenize("a && !b")]
        ['literal', 'and', 'not', 'literal', 'eof']
        >>> tokenize("contains(x, '&&')")[0].value
        "contains(x, '&&')"
    """
    logger.debug("tokenizing_expression", length=len(expression))
    tokens: list[Token] = []
    i = 0

    while i < len(expression):
        if expression[i].isspace():
            i += 1
            continue

        pair = expression[i : i + 2]
        if pair == "&&":
            tokens.append(Token(TokenKind.AND, "&&", i))
            i += 2
        elif pair == "||":
            tokens.append(Token(TokenKind.OR, "||", i))
            i += 2
        elif _is_not_operator(expression, i):
            tokens.append(Token(TokenKind.NOT, "!", i))
            i += 1
        elif expression[i] == "(":
            tokens.append(Token(TokenKind.LEFT_PAREN, "(", i))
            i += 1
        elif expression[i] == ")":
            tokens.append(Token(TokenKind.RIGHT_PAREN, ")", i))
            i += 1
        else:
            start = i
            i = _scan_literal(expression, start)
            literal = expression[start:i].strip()
            if not literal:
                raise ConditionTokenizeError(
                    f"unexpected empty literal at position {start}",
                    expression=expression,
                    position=start,
                )
            tokens.append(Token(TokenKind.LITERAL, literal, start))

    tokens.append(Token(TokenKind.EOF, "", i))
    return tokens
