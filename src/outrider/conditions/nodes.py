"""Condition expression tree.

Every node is an immutable dataclass implementing a single operation,
``render()``, which serializes the subtree into platform expression text.
The tree has no evaluation semantics.

Composite nodes (``AndNode``, ``OrNode``, ``NotNode``) parenthesize their
operands unconditionally, so rendered output re-parses to the same
structure regardless of operator precedence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Final

from outrider.logging import get_logger

__all__ = [
    "ConditionNode",
    "ExpressionNode",
    "AndNode",
    "OrNode",
    "NotNode",
    "ParenthesesNode",
    "DisjunctionNode",
    "FunctionCallNode",
    "PropertyAccessNode",
    "StringLiteralNode",
    "BooleanLiteralNode",
    "NumberLiteralNode",
    "ComparisonNode",
    "TernaryNode",
    "ContainsNode",
    "COMPARISON_OPERATORS",
]

logger = get_logger(__name__)

COMPARISON_OPERATORS: Final = frozenset({"==", "!=", "<", ">", "<=", ">="})


class ConditionNode(ABC):
    """A node in a condition expression tree."""

    __slots__ = ()

    @abstractmethod
    def render(self) -> str:
        """Serialize this subtree into expression text."""
        ...


@dataclass(frozen=True, slots=True)
class ExpressionNode(ConditionNode):
    """Leaf holding opaque expression text.

    Attributes:
        expression: Expression text, rendered verbatim.
        description: Optional comment emitted above the term when the node
            is a term of a multiline disjunction.
    """

    expression: str
    description: str = ""

    def render(self) -> str:
        return self.expression


@dataclass(frozen=True, slots=True)
class AndNode(ConditionNode):
    """Logical AND of two conditions."""

    left: ConditionNode
    right: ConditionNode

    def render(self) -> str:
        return f"({self.left.render()}) && ({self.right.render()})"


@dataclass(frozen=True, slots=True)
class OrNode(ConditionNode):
    """Logical OR of two conditions."""

    left: ConditionNode
    right: ConditionNode

    def render(self) -> str:
        return f"({self.left.render()}) || ({self.right.render()})"


@dataclass(frozen=True, slots=True)
class NotNode(ConditionNode):
    """Logical negation of a condition."""

    child: ConditionNode

    def render(self) -> str:
        # The platform reads `!(f())` as an object expression in some
        # contexts, so function calls are negated as `!f()`
        if isinstance(self.child, FunctionCallNode):
            return f"!{self.child.render()}"
        return f"!({self.child.render()})"


@dataclass(frozen=True, slots=True)
class ParenthesesNode(ConditionNode):
    """Explicit grouping of a condition."""

    child: ConditionNode

    def render(self) -> str:
        return f"({self.child.render()})"


@dataclass(frozen=True, slots=True)
class DisjunctionNode(ConditionNode):
    """N-ary OR, used instead of deeply nested ``OrNode`` chains.

    Attributes:
        terms: Ordered terms of the disjunction.
        multiline: Render one term per line, with a ``# description``
            comment line above every ``ExpressionNode`` term that has one.
    """

    terms: tuple[ConditionNode, ...]
    multiline: bool = False

    def render(self) -> str:
        if not self.terms:
            return ""
        if len(self.terms) == 1:
            return self.terms[0].render()
        if self.multiline:
            return self.render_multiline()
        return " || ".join(term.render() for term in self.terms)

    def render_multiline(self) -> str:
        """Render each term on its own line with `||` trailing all but the last."""
        if not self.terms:
            return ""
        if len(self.terms) == 1:
            return self.terms[0].render()

        logger.debug("rendering_multiline_disjunction", terms=len(self.terms))

        last = len(self.terms) - 1
        lines: list[str] = []
        for index, term in enumerate(self.terms):
            line = ""
            if isinstance(term, ExpressionNode) and term.description:
                line = f"# {term.description}\n"
            line += term.render()
            if index < last:
                line += " ||"
            lines.append(line)
        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class FunctionCallNode(ConditionNode):
    """Function call such as ``startsWith(github.ref, 'refs/tags/')``."""

    function_name: str
    arguments: tuple[ConditionNode, ...] = ()

    def render(self) -> str:
        args = ", ".join(arg.render() for arg in self.arguments)
        return f"{self.function_name}({args})"


@dataclass(frozen=True, slots=True)
class PropertyAccessNode(ConditionNode):
    """Dotted property path such as ``github.event.action``."""

    property_path: str

    def render(self) -> str:
        return self.property_path


@dataclass(frozen=True, slots=True)
class StringLiteralNode(ConditionNode):
    """Single-quoted string literal."""

    value: str

    def render(self) -> str:
        return f"'{self.value}'"


@dataclass(frozen=True, slots=True)
class BooleanLiteralNode(ConditionNode):
    value: bool

    def render(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, slots=True)
class NumberLiteralNode(ConditionNode):
    """Numeric literal, kept as its source text."""

    value: str

    def render(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ComparisonNode(ConditionNode):
    """Binary comparison using one of ``COMPARISON_OPERATORS``."""

    left: ConditionNode
    operator: str
    right: ConditionNode

    def __post_init__(self) -> None:
        if self.operator not in COMPARISON_OPERATORS:
            raise ValueError(
                f"Invalid comparison operator '{self.operator}', expected one of "
                f"{', '.join(sorted(COMPARISON_OPERATORS))}"
            )

    def render(self) -> str:
        return f"{self.left.render()} {self.operator} {self.right.render()}"


@dataclass(frozen=True, slots=True)
class TernaryNode(ConditionNode):
    """Conditional value: ``condition ? true_value : false_value``."""

    condition: ConditionNode
    true_value: ConditionNode
    false_value: ConditionNode

    def render(self) -> str:
        return (
            f"{self.condition.render()} ? "
            f"{self.true_value.render()} : {self.false_value.render()}"
        )


@dataclass(frozen=True, slots=True)
class ContainsNode(ConditionNode):
    """Membership check rendered as ``contains(array, value)``."""

    array: ConditionNode
    value: ConditionNode

    def render(self) -> str:
        return f"contains({self.array.render()}, {self.value.render()})"
