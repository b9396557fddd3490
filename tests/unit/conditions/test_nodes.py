"""Unit tests for condition tree nodes and rendering."""

from __future__ import annotations

import dataclasses

import pytest

from outrider.conditions.nodes import (
    COMPARISON_OPERATORS,
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


class TestLogicalNodes:
    """Test rendering of AND, OR, and NOT."""

    def test_and_parenthesizes_operands(self) -> None:
        node = AndNode(ExpressionNode("a"), ExpressionNode("b"))
        assert node.render() == "(a) && (b)"

    def test_or_parenthesizes_operands(self) -> None:
        node = OrNode(ExpressionNode("a"), ExpressionNode("b"))
        assert node.render() == "(a) || (b)"

    def test_nested(self) -> None:
        node = OrNode(
            AndNode(ExpressionNode("a"), ExpressionNode("b")),
            NotNode(ExpressionNode("c")),
        )
        assert node.render() == "((a) && (b)) || (!(c))"

    def test_not_expression(self) -> None:
        assert NotNode(ExpressionNode("a")).render() == "!(a)"

    def test_not_function_call_has_no_parentheses(self) -> None:
        assert NotNode(FunctionCallNode("cancelled")).render() == "!cancelled()"

    def test_not_comparison(self) -> None:
        node = NotNode(
            ComparisonNode(
                PropertyAccessNode("github.event_name"),
                "==",
                StringLiteralNode("push"),
            )
        )
        assert node.render() == "!(github.event_name == 'push')"

    def test_parentheses_node(self) -> None:
        assert ParenthesesNode(ExpressionNode("a || b")).render() == "(a || b)"

    def test_render_is_repeatable(self) -> None:
        node = AndNode(NotNode(FunctionCallNode("failure")), ExpressionNode("x"))
        assert node.render() == node.render()


class TestDisjunctionNode:
    """Test n-ary OR rendering."""

    def test_single_line(self) -> None:
        node = DisjunctionNode(
            terms=(ExpressionNode("a"), ExpressionNode("b"), ExpressionNode("c"))
        )
        assert node.render() == "a || b || c"

    def test_empty(self) -> None:
        assert DisjunctionNode(terms=()).render() == ""
        assert DisjunctionNode(terms=(), multiline=True).render_multiline() == ""

    def test_single_term(self) -> None:
        node = DisjunctionNode(terms=(ExpressionNode("a"),), multiline=True)
        assert node.render() == "a"

    def test_multiline_with_descriptions(self) -> None:
        node = DisjunctionNode(
            terms=(
                ExpressionNode("a", description="first check"),
                ExpressionNode("b"),
                ExpressionNode("c", description="last check"),
            ),
            multiline=True,
        )
        assert node.render() == "# first check\na ||\nb ||\n# last check\nc"

    def test_render_multiline_ignores_flag(self) -> None:
        node = DisjunctionNode(terms=(ExpressionNode("a"), ExpressionNode("b")))
        assert node.render_multiline() == "a ||\nb"

    def test_description_only_on_expression_terms(self) -> None:
        node = DisjunctionNode(
            terms=(NotNode(ExpressionNode("a")), ExpressionNode("b")),
            multiline=True,
        )
        assert node.render() == "!(a) ||\nb"


class TestValueNodes:
    """Test leaf and value node rendering."""

    def test_expression_verbatim(self) -> None:
        assert ExpressionNode("github.event_name == 'x'").render() == (
            "github.event_name == 'x'"
        )

    def test_function_call_with_arguments(self) -> None:
        node = FunctionCallNode(
            "startsWith",
            (PropertyAccessNode("github.ref"), StringLiteralNode("refs/tags/")),
        )
        assert node.render() == "startsWith(github.ref, 'refs/tags/')"

    def test_function_call_without_arguments(self) -> None:
        assert FunctionCallNode("always").render() == "always()"

    def test_property_access(self) -> None:
        assert PropertyAccessNode("github.event.action").render() == (
            "github.event.action"
        )

    def test_string_literal(self) -> None:
        assert StringLiteralNode("bug").render() == "'bug'"

    def test_boolean_literals(self) -> None:
        assert BooleanLiteralNode(True).render() == "true"
        assert BooleanLiteralNode(False).render() == "false"

    def test_number_literal(self) -> None:
        assert NumberLiteralNode("3.5").render() == "3.5"

    def test_ternary(self) -> None:
        node = TernaryNode(
            ExpressionNode("github.event.pull_request.draft"),
            StringLiteralNode("draft"),
            StringLiteralNode("ready"),
        )
        assert node.render() == "github.event.pull_request.draft ? 'draft' : 'ready'"

    def test_contains(self) -> None:
        node = ContainsNode(
            PropertyAccessNode("github.event.issue.labels.*.name"),
            StringLiteralNode("bug"),
        )
        assert node.render() == "contains(github.event.issue.labels.*.name, 'bug')"


class TestComparisonNode:
    """Test comparison rendering and operator validation."""

    @pytest.mark.parametrize("operator", sorted(COMPARISON_OPERATORS))
    def test_valid_operators(self, operator: str) -> None:
        node = ComparisonNode(ExpressionNode("a"), operator, NumberLiteralNode("1"))
        assert node.render() == f"a {operator} 1"

    @pytest.mark.parametrize("operator", ["=", "===", "=~", "&&", ""])
    def test_invalid_operator_raises(self, operator: str) -> None:
        with pytest.raises(ValueError, match="Invalid comparison operator"):
            ComparisonNode(ExpressionNode("a"), operator, ExpressionNode("b"))


class TestNodeImmutability:
    """Test that nodes are immutable values."""

    def test_frozen(self) -> None:
        node = ExpressionNode("a")
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.expression = "b"  # type: ignore[misc]

    def test_equality_by_value(self) -> None:
        assert AndNode(ExpressionNode("a"), ExpressionNode("b")) == AndNode(
            ExpressionNode("a"), ExpressionNode("b")
        )

    def test_base_class_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            ConditionNode()  # type: ignore[abstract]
