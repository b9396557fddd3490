"""Constructors for assembling condition trees programmatically.

These helpers let higher-level code compose conditions without writing
node literals by hand. They check structure only; callers are responsible
for semantic correctness (for example, not comparing incompatible types).

Example:
    >>> condition = build_and(
    ...     build_event_type_equals("issues"),
    ...     build_contains(
    ...         build_property_access("github.event.issue.body"),
    ...         build_string_literal("/bot"),
    ...     ),
    ... )
    >>> condition.render()
    "(github.event_name == 'issues') && (contains(github.event.issue.body, '/bot'))"
"""

from __future__ import annotations

from outrider.conditions.nodes import (
    AndNode,
    BooleanLiteralNode,
    ComparisonNode,
    ConditionNode,
    ContainsNode,
    DisjunctionNode,
    ExpressionNode,
    FunctionCallNode,
    NotNode,
    NumberLiteralNode,
    OrNode,
    ParenthesesNode,
    PropertyAccessNode,
    StringLiteralNode,
    TernaryNode,
)
from outrider.constants import (
    EVENT_ACTION_PATH,
    EVENT_NAME_PATH,
    PR_LABEL_NAMES_PATH,
    REF_PATH,
)

__all__ = [
    "build_and",
    "build_or",
    "build_not",
    "build_parentheses",
    "build_comparison",
    "build_equals",
    "build_not_equals",
    "build_contains",
    "build_function_call",
    "build_property_access",
    "build_string_literal",
    "build_boolean_literal",
    "build_number_literal",
    "build_null_literal",
    "build_ternary",
    "build_event_type_equals",
    "build_action_equals",
    "build_ref_starts_with",
    "build_label_contains",
    "build_disjunction",
    "build_condition_tree",
]


def build_and(left: ConditionNode, right: ConditionNode) -> ConditionNode:
    return AndNode(left=left, right=right)


def build_or(left: ConditionNode, right: ConditionNode) -> ConditionNode:
    return OrNode(left=left, right=right)


def build_not(child: ConditionNode) -> ConditionNode:
    return NotNode(child=child)


def build_parentheses(child: ConditionNode) -> ConditionNode:
    return ParenthesesNode(child=child)


def build_comparison(
    left: ConditionNode, operator: str, right: ConditionNode
) -> ConditionNode:
    """Build ``left <operator> right``.

    Raises:
        ValueError: If operator is not one of ==, !=, <, >, <=, >=.
    """
    return ComparisonNode(left=left, operator=operator, right=right)


def build_equals(left: ConditionNode, right: ConditionNode) -> ConditionNode:
    return ComparisonNode(left=left, operator="==", right=right)


def build_not_equals(left: ConditionNode, right: ConditionNode) -> ConditionNode:
    return ComparisonNode(left=left, operator="!=", right=right)


def build_contains(array: ConditionNode, value: ConditionNode) -> ConditionNode:
    return ContainsNode(array=array, value=value)


def build_function_call(name: str, *arguments: ConditionNode) -> ConditionNode:
    return FunctionCallNode(function_name=name, arguments=tuple(arguments))


def build_property_access(path: str) -> ConditionNode:
    return PropertyAccessNode(property_path=path)


def build_string_literal(value: str) -> ConditionNode:
    return StringLiteralNode(value=value)


def build_boolean_literal(value: bool) -> ConditionNode:
    return BooleanLiteralNode(value=value)


def build_number_literal(value: str | int | float) -> ConditionNode:
    return NumberLiteralNode(value=str(value))


def build_null_literal() -> ConditionNode:
    return ExpressionNode(expression="null")


def build_ternary(
    condition: ConditionNode,
    true_value: ConditionNode,
    false_value: ConditionNode,
) -> ConditionNode:
    return TernaryNode(
        condition=condition, true_value=true_value, false_value=false_value
    )


def build_event_type_equals(event_name: str) -> ConditionNode:
    """Build ``github.event_name == '<event_name>'``."""
    return build_equals(
        build_property_access(EVENT_NAME_PATH),
        build_string_literal(event_name),
    )


def build_action_equals(action: str) -> ConditionNode:
    """Build ``github.event.action == '<action>'``."""
    return build_equals(
        build_property_access(EVENT_ACTION_PATH),
        build_string_literal(action),
    )


def build_ref_starts_with(prefix: str) -> ConditionNode:
    """Build ``startsWith(github.ref, '<prefix>')``."""
    return build_function_call(
        "startsWith",
        build_property_access(REF_PATH),
        build_string_literal(prefix),
    )


def build_label_contains(label: str) -> ConditionNode:
    """Build a check that the pull request carries ``label``."""
    return build_contains(
        build_property_access(PR_LABEL_NAMES_PATH),
        build_string_literal(label),
    )


def build_disjunction(multiline: bool, *terms: ConditionNode) -> ConditionNode:
    """Build an n-ary OR of ``terms``.

    A single term is returned unwrapped instead of as a one-term disjunction.

    Args:
        multiline: Render one term per line (see DisjunctionNode).
        *terms: Terms of the disjunction, in order.
    """
    if len(terms) == 1:
        return terms[0]
    return DisjunctionNode(terms=tuple(terms), multiline=multiline)


def build_condition_tree(existing_condition: str, extra_condition: str) -> ConditionNode:
    """AND a raw existing condition with a raw extra condition.

    An empty existing condition yields the extra condition alone.
    """
    extra = ExpressionNode(expression=extra_condition)
    if not existing_condition.strip():
        return extra
    return AndNode(left=ExpressionNode(expression=existing_condition), right=extra)
