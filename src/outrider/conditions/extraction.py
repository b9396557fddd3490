"""Extraction of ${{ }} expressions from markdown instructions.

Agent instructions are plain markdown, but they may reference platform
expressions such as ``${{ github.event.issue.number }}``. Interpolating those
directly into a prompt would allow template injection, so each unique
expression is mapped to an environment variable and the markdown refers to
it through a ``__VAR__`` placeholder instead.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from typing import Any

from outrider.constants import ENV_VAR_PREFIX
from outrider.logging import get_logger

__all__ = [
    "ExpressionMapping",
    "ExpressionExtractor",
    "substitute_import_inputs",
]

logger = get_logger(__name__)

_EXPRESSION_PATTERN = re.compile(r"\$\{\{(.*?)\}\}")

# Simple property access chains such as github.event.issue.number
_SIMPLE_IDENTIFIER_PATTERN = re.compile(
    r"^[a-zA-Z_][a-zA-Z0-9_]*(\.[a-zA-Z_][a-zA-Z0-9_]*)*$"
)

_IMPORT_INPUT_PATTERN = re.compile(
    r"\$\{\{\s*github\.aw\.inputs\.([a-zA-Z0-9_-]+)\s*\}\}"
)


@dataclass(frozen=True, slots=True)
class ExpressionMapping:
    """A markdown expression and the environment variable that carries it.

    Attributes:
        original: The full expression including the ${{ }} wrapper.
        env_var: Environment variable name (e.g., GH_AW_GITHUB_ACTOR).
        content: The trimmed expression without the wrapper.
    """

    original: str
    env_var: str
    content: str


def _env_var_name(content: str) -> str:
    if _SIMPLE_IDENTIFIER_PATTERN.match(content):
        return f"{ENV_VAR_PREFIX}{content.replace('.', '_').upper()}"
    digest = hashlib.sha256(content.encode()).hexdigest()
    return f"{ENV_VAR_PREFIX}EXPR_{digest[:8].upper()}"


class ExpressionExtractor:
    """Collects ${{ }} expressions from markdown and maps them to env vars.

    Example:
        >>> extractor = ExpressionExtractor()
        >>> [m.env_var for m in extractor.extract_expressions("${{ github.actor }}")]
        ['GH_AW_GITHUB_ACTOR']
        >>> extractor.replace_expressions_with_env_vars("hi ${{ github.actor }}")
        'hi __GH_AW_GITHUB_ACTOR__'
    """

    def __init__(self) -> None:
        self._mappings: dict[str, ExpressionMapping] = {}

    def extract_expressions(self, markdown: str) -> list[ExpressionMapping]:
        """Record every unique expression in ``markdown``.

        Returns:
            All mappings recorded so far, sorted by original expression text.
        """
        matches = list(_EXPRESSION_PATTERN.finditer(markdown))
        logger.debug(
            "extracting_expressions", content_length=len(markdown), matches=len(matches)
        )

        for match in matches:
            original = match.group(0)
            if original in self._mappings:
                continue
            content = match.group(1).strip()
            self._mappings[original] = ExpressionMapping(
                original=original,
                env_var=_env_var_name(content),
                content=content,
            )

        return sorted(self._mappings.values(), key=lambda m: m.original)

    def replace_expressions_with_env_vars(self, markdown: str) -> str:
        """Replace each recorded expression with its ``__ENV_VAR__`` placeholder."""
        result = markdown
        # Longest first so no expression is replaced inside a longer one
        for mapping in sorted(
            self._mappings.values(), key=lambda m: len(m.original), reverse=True
        ):
            result = result.replace(mapping.original, f"__{mapping.env_var}__")
        return result

    def get_mappings(self) -> list[ExpressionMapping]:
        """Return all recorded mappings sorted by environment variable name."""
        return sorted(self._mappings.values(), key=lambda m: m.env_var)


def _format_input_value(value: Any) -> str:
    """Render an import input the way it reads in workflow text.

    Booleans use the lower-case spelling of the expression language and
    lists render as their space-separated items in brackets.

    Examples:
        >>> _format_input_value(True)
        'true'
        >>> _format_input_value(["a", False, 3])
        '[a false 3]'
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format_input_value(item) for item in value) + "]"
    return str(value)


def substitute_import_inputs(content: str, import_inputs: dict[str, Any]) -> str:
    """Replace ``${{ github.aw.inputs.<key> }}`` with values from ``import_inputs``.

    Keys missing from ``import_inputs`` are left untouched.
    """
    if not import_inputs:
        return content

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in import_inputs:
            return _format_input_value(import_inputs[key])
        logger.debug("import_input_not_found", key=key)
        return match.group(0)

    return _IMPORT_INPUT_PATTERN.sub(_replace, content)
