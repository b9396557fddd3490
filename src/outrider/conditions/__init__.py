"""Condition expression compiler for Outrider workflows.

Workflow jobs and steps are gated by boolean conditions written in the
platform's expression language. This package parses, builds, renders, and
formats those conditions.

Condition Syntax
----------------
Conditions combine opaque literals with logical operators:
- AND: ``a && b``
- OR: ``a || b``
- NOT: ``!a``
- Grouping: ``(a || b) && c``

Literals are passed through untouched. They may contain comparisons
(``github.event_name == 'push'``), function calls with balanced parentheses
(``contains(github.event.issue.labels.*.name, 'bug')``), and quoted strings
in single, double, or backtick quotes.

Examples
--------
    >>> parse_condition("a || b && c").render()
    '(a) || ((b) && (c))'

    >>> build_event_aware_command_condition(["bot"], ["issues"]).render()
    "(github.event_name == 'issues') && (contains(github.event.issue.body, '/bot'))"

Module Structure
----------------
- tokenizer.py: Token stream for condition strings
- parser.py: Lark-based parser, tree visitor, wrapper stripping
- nodes.py: Condition tree node types and rendering
- builders.py: Helpers for composing trees in code
- events.py: Comment-bearing trigger event table
- command.py: Command trigger condition synthesis
- formatting.py: Width-constrained line breaking
- extraction.py: ${{ }} extraction from markdown
- errors.py: Condition error types

Everything here is pure and stateless, and safe to call concurrently.
"""

from __future__ import annotations

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
from outrider.conditions.command import (
    build_event_aware_command_condition,
    expand_slash_command_shorthand,
    parse_slash_command_shorthand,
)
from outrider.conditions.errors import (
    CommandConditionError,
    ConditionError,
    ConditionSyntaxError,
    ConditionTokenizeError,
    SlashCommandError,
)
from outrider.conditions.events import (
    COMMENT_EVENTS,
    CommentEventMapping,
    filter_comment_events,
    get_actual_event_name,
    get_all_comment_events,
    get_comment_event_by_identifier,
    get_comment_event_names,
    merge_events_for_trigger,
    parse_command_events,
)
from outrider.conditions.extraction import (
    ExpressionExtractor,
    ExpressionMapping,
    substitute_import_inputs,
)
from outrider.conditions.formatting import break_at_parentheses, break_long_expression
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
from outrider.conditions.parser import (
    normalize_expression_for_comparison,
    parse_condition,
    strip_expression_wrapper,
    visit_expression_tree,
)
from outrider.conditions.tokenizer import Token, TokenKind, tokenize

__all__: list[str] = [
    # Error types
    "ConditionError",
    "ConditionTokenizeError",
    "ConditionSyntaxError",
    "CommandConditionError",
    "SlashCommandError",
    # Tokens
    "Token",
    "TokenKind",
    "tokenize",
    # Nodes
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
    # Parsing
    "parse_condition",
    "strip_expression_wrapper",
    "visit_expression_tree",
    "normalize_expression_for_comparison",
    # Builders
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
    # Events
    "CommentEventMapping",
    "COMMENT_EVENTS",
    "get_all_comment_events",
    "get_comment_event_by_identifier",
    "parse_command_events",
    "filter_comment_events",
    "get_comment_event_names",
    "get_actual_event_name",
    "merge_events_for_trigger",
    # Command triggers
    "build_event_aware_command_condition",
    "parse_slash_command_shorthand",
    "expand_slash_command_shorthand",
    # Formatting
    "break_long_expression",
    "break_at_parentheses",
    # Extraction
    "ExpressionExtractor",
    "ExpressionMapping",
    "substitute_import_inputs",
]
