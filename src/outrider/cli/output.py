"""Output formatting utilities for the Outrider CLI."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from rich.text import Text
from rich.tree import Tree

from outrider.cli.console import err_console
from outrider.conditions.nodes import (
    AndNode,
    ComparisonNode,
    ConditionNode,
    ContainsNode,
    DisjunctionNode,
    ExpressionNode,
    FunctionCallNode,
    NotNode,
    OrNode,
    ParenthesesNode,
    TernaryNode,
)
from outrider.exceptions import OutriderError

__all__ = [
    "OutputFormat",
    "format_error",
    "print_error",
    "format_json",
    "condition_tree",
]


class OutputFormat(str, Enum):
    """Supported output formats for CLI commands."""

    TEXT = "text"
    JSON = "json"


def format_error(
    message: str, details: list[str] | None = None, suggestion: str | None = None
) -> str:
    """Format an error message with optional details and suggestion.

    Args:
        message: Primary error message.
        details: Optional list of detail lines to include.
        suggestion: Optional suggestion for resolving the error.

    Returns:
        Formatted error string with details and suggestion if provided.

    Example:
        >>> print(format_error("empty expression", suggestion="Pass a condition"))
        Error: empty expression
        Suggestion: Pass a condition
    """
    lines = [f"Error: {message}"]

    if details:
        for detail in details:
            lines.append(f"  {detail}")

    if suggestion:
        lines.append(f"Suggestion: {suggestion}")

    return "\n".join(lines)


def print_error(error: OutriderError) -> None:
    """Print an Outrider error and its detail lines to stderr.

    Markup is disabled so condition text with brackets prints verbatim.
    """
    err_console.print(
        format_error(error.message, details=error.details()), markup=False
    )


def format_json(data: Any) -> str:
    """Format data as indented JSON."""
    return json.dumps(data, indent=2)


def _children(node: ConditionNode) -> tuple[ConditionNode, ...]:
    if isinstance(node, (AndNode, OrNode)):
        return (node.left, node.right)
    if isinstance(node, (NotNode, ParenthesesNode)):
        return (node.child,)
    if isinstance(node, DisjunctionNode):
        return node.terms
    if isinstance(node, FunctionCallNode):
        return node.arguments
    if isinstance(node, ComparisonNode):
        return (node.left, node.right)
    if isinstance(node, TernaryNode):
        return (node.condition, node.true_value, node.false_value)
    if isinstance(node, ContainsNode):
        return (node.array, node.value)
    return ()


def _label(node: ConditionNode) -> Text:
    label = Text(type(node).__name__, style="bold cyan")
    if isinstance(node, ComparisonNode):
        label.append(f" {node.operator}", style="yellow")
    elif isinstance(node, FunctionCallNode):
        label.append(f" {node.function_name}", style="yellow")
    elif not _children(node):
        label.append(" ")
        label.append(node.render(), style="green")
        if isinstance(node, ExpressionNode) and node.description:
            label.append(f"  # {node.description}", style="dim")
    return label


def condition_tree(node: ConditionNode, tree: Tree | None = None) -> Tree:
    """Build a Rich tree showing the structure of a condition."""
    branch = Tree(_label(node)) if tree is None else tree.add(_label(node))
    for child in _children(node):
        condition_tree(child, branch)
    return branch
