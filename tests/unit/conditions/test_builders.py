"""Unit tests for condition builder helpers."""

from __future__ import annotations

import pytest

from outrider.conditions.builders import (
    build_action_equals,
    build_and,
    build_boolean_literal,
    build_comparison,
    build_condition_tree,
    build_contains,
    build_disjunction,
    build_equals,
    build_event_type_equals,
    build_function_call,
    build_label_contains,
    build_not,
    build_not_equals,
    build_null_literal,
    build_number_literal,
    build_or,
    build_parentheses,
    build_property_access,
    build_ref_starts_with,
    build_string_literal,
    build_ternary,
)
from outrider.conditions.nodes import (
    AndNode,
    DisjunctionNode,
    ExpressionNode,
    OrNode,
)


class TestLogicalBuilders:
    """Test AND/OR/NOT builders."""

    def test_build_and(self) -> None:
        node = build_and(ExpressionNode("a"), ExpressionNode("b"))
        assert node == AndNode(ExpressionNode("a"), ExpressionNode("b"))

    def test_build_or(self) -> None:
        node = build_or(ExpressionNode("a"), ExpressionNode("b"))
        assert node == OrNode(ExpressionNode("a"), ExpressionNode("b"))

    def test_build_not_function_call(self) -> None:
        assert build_not(build_function_call("cancelled")).render() == "!cancelled()"

    def test_build_parentheses(self) -> None:
        assert build_parentheses(ExpressionNode("a")).render() == "(a)"


class TestValueBuilders:
    """Test builders for comparisons and literals."""

    def test_build_equals(self) -> None:
        node = build_equals(
            build_property_access("github.event.action"),
            build_string_literal("opened"),
        )
        assert node.render() == "github.event.action == 'opened'"

    def test_build_not_equals_null(self) -> None:
        node = build_not_equals(
            build_property_access("github.event.issue.pull_request"),
            build_null_literal(),
        )
        assert node.render() == "github.event.issue.pull_request != null"

    def test_build_comparison(self) -> None:
        node = build_comparison(
            build_property_access("github.run_attempt"), ">", build_number_literal(1)
        )
        assert node.render() == "github.run_attempt > 1"

    def test_build_comparison_rejects_unknown_operator(self) -> None:
        with pytest.raises(ValueError):
            build_comparison(ExpressionNode("a"), "<>", ExpressionNode("b"))

    def test_build_contains(self) -> None:
        node = build_contains(
            build_property_access("github.event.issue.body"),
            build_string_literal("/bot"),
        )
        assert node.render() == "contains(github.event.issue.body, '/bot')"

    def test_build_function_call_with_arguments(self) -> None:
        node = build_function_call(
            "format", build_string_literal("{0}"), build_property_access("github.ref")
        )
        assert node.render() == "format('{0}', github.ref)"

    def test_build_function_call_without_arguments(self) -> None:
        assert build_function_call("always").render() == "always()"

    @pytest.mark.parametrize(
        ("value", "expected"), [(42, "42"), (1.5, "1.5"), ("007", "007")]
    )
    def test_build_number_literal(self, value: str | int | float, expected: str) -> None:
        assert build_number_literal(value).render() == expected

    def test_build_boolean_literal(self) -> None:
        assert build_boolean_literal(True).render() == "true"

    def test_build_null_literal(self) -> None:
        assert build_null_literal() == ExpressionNode("null")

    def test_build_ternary(self) -> None:
        node = build_ternary(
            build_property_access("inputs.debug"),
            build_string_literal("debug"),
            build_string_literal("info"),
        )
        assert node.render() == "inputs.debug ? 'debug' : 'info'"


class TestPlatformBuilders:
    """Test builders for common platform checks."""

    def test_build_event_type_equals(self) -> None:
        assert build_event_type_equals("issues").render() == (
            "github.event_name == 'issues'"
        )

    def test_build_action_equals(self) -> None:
        assert build_action_equals("opened").render() == (
            "github.event.action == 'opened'"
        )

    def test_build_ref_starts_with(self) -> None:
        assert build_ref_starts_with("refs/tags/").render() == (
            "startsWith(github.ref, 'refs/tags/')"
        )

    def test_build_label_contains(self) -> None:
        assert build_label_contains("bug").render() == (
            "contains(github.event.pull_request.labels.*.name, 'bug')"
        )


class TestBuildDisjunction:
    """Test n-ary OR construction."""

    def test_single_term_is_unwrapped(self) -> None:
        term = ExpressionNode("a")
        assert build_disjunction(True, term) is term

    def test_multiple_terms(self) -> None:
        node = build_disjunction(False, ExpressionNode("a"), ExpressionNode("b"))
        assert isinstance(node, DisjunctionNode)
        assert node.render() == "a || b"

    def test_multiline_flag(self) -> None:
        node = build_disjunction(True, ExpressionNode("a"), ExpressionNode("b"))
        assert isinstance(node, DisjunctionNode)
        assert node.multiline is True
        assert node.render() == "a ||\nb"


class TestBuildConditionTree:
    """Test combining raw condition strings."""

    def test_with_existing_condition(self) -> None:
        node = build_condition_tree("github.ref == 'main'", "always()")
        assert node.render() == "(github.ref == 'main') && (always())"

    def test_without_existing_condition(self) -> None:
        assert build_condition_tree("  ", "always()") == ExpressionNode("always()")
