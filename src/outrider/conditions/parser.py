"""Condition expression parser.

Parses boolean condition strings such as

    github.event_name == 'issues' && (contains(github.event.issue.body, '/bot') || !cancelled())

into a ``ConditionNode`` tree. Literals are never interpreted: comparisons,
property paths and function calls all become opaque ``ExpressionNode``
leaves. Richer node types are only produced by ``outrider.conditions.builders``.

Implementation:
The grammar (grammar.lark) is parsed with a Lark LALR parser. Lark is fed by
a custom lexer that wraps ``tokenize()``, so the quote and parenthesis rules
for literal runs are applied before Lark sees the input.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from functools import reduce
from pathlib import Path
from typing import Any

from lark import Lark, Transformer
from lark import Token as LarkToken
from lark.exceptions import UnexpectedToken
from lark.lexer import Lexer

from outrider.conditions.errors import ConditionSyntaxError
from outrider.conditions.nodes import (
    AndNode,
    ConditionNode,
    DisjunctionNode,
    ExpressionNode,
    NotNode,
    OrNode,
)
from outrider.conditions.tokenizer import Token, TokenKind, tokenize
from outrider.constants import EXPRESSION_CLOSE, EXPRESSION_OPEN
from outrider.logging import get_logger

__all__ = [
    "parse_condition",
    "strip_expression_wrapper",
    "visit_expression_tree",
    "normalize_expression_for_comparison",
]

logger = get_logger(__name__)

_TERMINALS: dict[TokenKind, str] = {
    TokenKind.LITERAL: "LITERAL",
    TokenKind.AND: "_AND",
    TokenKind.OR: "_OR",
    TokenKind.NOT: "_NOT",
    TokenKind.LEFT_PAREN: "_LPAR",
    TokenKind.RIGHT_PAREN: "_RPAR",
}

# Terminals that can start an operand
_OPERAND_TERMINALS = frozenset({"LITERAL", "_LPAR", "_NOT"})


class _ConditionLexer(Lexer):
    """Adapts ``tokenize()`` output to Lark tokens."""

    def __init__(self, lexer_conf: Any) -> None:
        pass

    def lex(self, data: str) -> Iterator[LarkToken]:  # type: ignore[override]
        tokens = tokenize(data)
        return iter(
            [
                LarkToken(_TERMINALS[token.kind], token.value, start_pos=token.position)
                for token in tokens
                if token.kind is not TokenKind.EOF
            ]
        )


_GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"
_GRAMMAR = _GRAMMAR_PATH.read_text()

_parser = Lark(
    _GRAMMAR,
    parser="lalr",
    lexer=_ConditionLexer,
    start="start",
)


class _ConditionTransformer(Transformer[LarkToken, ConditionNode]):
    """Transform the Lark parse tree into ConditionNode objects."""

    def start(self, items: list[ConditionNode]) -> ConditionNode:
        return items[0]

    def or_expr(self, items: list[ConditionNode]) -> ConditionNode:
        """Fold `a || b || c` into left-nested OrNodes."""
        return reduce(lambda left, right: OrNode(left=left, right=right), items)

    def and_expr(self, items: list[ConditionNode]) -> ConditionNode:
        """Fold `a && b && c` into left-nested AndNodes."""
        return reduce(lambda left, right: AndNode(left=left, right=right), items)

    def not_expr(self, items: list[ConditionNode]) -> ConditionNode:
        return NotNode(child=items[0])

    def literal(self, items: list[LarkToken]) -> ConditionNode:
        return ExpressionNode(expression=str(items[0]))


def strip_expression_wrapper(expression: str) -> str:
    """Strip a surrounding ${{ }} wrapper and trim whitespace.

    Args:
        expression: Expression string (may or may not have the wrapper).

    Returns:
        The inner expression, trimmed.

    Examples:
        >>> strip_expression_wrapper("${{ github.event_name == 'push' }}")
        "github.event_name == 'push'"
        >>> strip_expression_wrapper("  always()  ")
        'always()'
    """
    stripped = expression.strip()
    if stripped.startswith(EXPRESSION_OPEN) and stripped.endswith(EXPRESSION_CLOSE):
        return stripped[len(EXPRESSION_OPEN) : -len(EXPRESSION_CLOSE)].strip()
    return stripped


def _paren_depth_before(tokens: list[Token], position: int) -> int:
    depth = 0
    for token in tokens:
        if token.position >= position:
            break
        if token.kind is TokenKind.LEFT_PAREN:
            depth += 1
        elif token.kind is TokenKind.RIGHT_PAREN:
            depth -= 1
    return depth


def _syntax_error(
    error: UnexpectedToken, expression: str, tokens: list[Token]
) -> ConditionSyntaxError:
    """Map a Lark UnexpectedToken onto the condition error taxonomy."""
    if error.token.type == "$END":
        position = len(expression)
        value = ""
    else:
        position = error.token.start_pos or 0
        value = str(error.token)

    expects_operand = bool(_OPERAND_TERMINALS & set(error.expected))
    if not expects_operand and _paren_depth_before(tokens, position) > 0:
        return ConditionSyntaxError(
            f"expected ')' at position {position}",
            expression=expression,
            position=position,
            token=value,
        )
    return ConditionSyntaxError(
        f"unexpected token '{value}' at position {position}",
        expression=expression,
        position=position,
        token=value,
    )


def parse_condition(expression: str) -> ConditionNode:
    """Parse a condition string into a ConditionNode tree.

    Supports `&&` (AND), `||` (OR), `!` (NOT), and parentheses for grouping.
    AND binds tighter than OR and NOT binds tightest.

    Args:
        expression: Condition string to parse (without ${{ }} wrapper;
            see strip_expression_wrapper()).

    Returns:
        Root node of the parsed tree.

    Raises:
        ConditionTokenizeError: If the expression contains an empty literal.
        ConditionSyntaxError: For empty input, unmatched parentheses,
            misplaced operators, or trailing tokens.

    Examples:
        >>> parse_condition("a || b && c").render()
        '(a) || ((b) && (c))'
        >>> parse_condition("!a && b").render()
        '(!(a)) && (b)'
    """
    logger.debug("parsing_condition", expression=expression)

    if not expression.strip():
        raise ConditionSyntaxError("empty expression", expression=expression)

    tokens = tokenize(expression)

    try:
        tree = _parser.parse(expression)
    except UnexpectedToken as e:
        error = _syntax_error(e, expression, tokens)
        logger.debug("condition_parse_failed", error=error.message)
        raise error from e

    result: ConditionNode = _ConditionTransformer().transform(tree)
    logger.debug("condition_parsed", tokens=len(tokens))
    return result


def visit_expression_tree(
    node: ConditionNode | None,
    visitor: Callable[[ExpressionNode], None],
) -> None:
    """Call ``visitor`` on every ExpressionNode leaf, depth-first, left to right.

    Recurses through AndNode, OrNode, NotNode, and DisjunctionNode. Every
    other node type is treated as an atomic expression and is not entered.
    An exception raised by ``visitor`` stops the walk and propagates.

    Args:
        node: Root of the tree to walk. None is accepted and ignored.
        visitor: Callback invoked with each ExpressionNode.
    """
    if node is None:
        return

    if isinstance(node, ExpressionNode):
        visitor(node)
    elif isinstance(node, (AndNode, OrNode)):
        visit_expression_tree(node.left, visitor)
        visit_expression_tree(node.right, visitor)
    elif isinstance(node, NotNode):
        visit_expression_tree(node.child, visitor)
    elif isinstance(node, DisjunctionNode):
        for term in node.terms:
            visit_expression_tree(term, visitor)


def normalize_expression_for_comparison(expression: str) -> str:
    """Collapse newlines, tabs and runs of spaces into single spaces.

    Used to compare multi-line expression output with its single-line form.

    Examples:
        >>> normalize_expression_for_comparison("a &&\\n  b")
        'a && b'
    """
    normalized = expression.replace("\n", " ").replace("\t", " ")
    while "  " in normalized:
        normalized = normalized.replace("  ", " ")
    return normalized.strip()
