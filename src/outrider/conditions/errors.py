"""Condition-specific error types for the Outrider condition compiler.

This module defines exceptions for tokenizing, parsing, and synthesizing
condition expressions, following the pattern from outrider.exceptions.
None of these errors is ever recovered from inside the compiler: a
malformed guard aborts compilation of the enclosing workflow.
"""

from __future__ import annotations

from outrider.exceptions import OutriderError


class ConditionError(OutriderError):
    """Base exception for all condition-related errors.

    Attributes:
        message: Human-readable error message.
        expression: The expression that caused the error (if known).
    """

    def __init__(
        self,
        message: str,
        expression: str | None = None,
    ) -> None:
        """Initialize the ConditionError.

        Args:
            message: Human-readable error message.
            expression: The expression that caused the error.
        """
        self.expression = expression
        super().__init__(message)


class _PositionedConditionError(ConditionError):
    """Condition error pinned to a character offset in the expression."""

    def __init__(
        self,
        message: str,
        expression: str,
        position: int = 0,
    ) -> None:
        self.position = position
        super().__init__(message, expression=expression)
        # Keep .message as the bare message; str() adds a caret line
        if expression:
            self.args = ("\n".join([message, *self.details()]),)

    def details(self) -> list[str]:
        """Return the expression and a caret under the offending position."""
        if not self.expression:
            return []
        return [self.expression, " " * max(self.position, 0) + "^"]


class ConditionTokenizeError(_PositionedConditionError):
    """Exception raised when an expression cannot be split into tokens.

    The tokenizer is lenient: the only failure is an empty literal run.

    Attributes:
        message: Human-readable error message.
        expression: The expression that failed to tokenize.
        position: Character offset where the empty literal starts.
    """


class ConditionSyntaxError(_PositionedConditionError):
    """Exception raised for syntax errors in condition expressions.

    Raised for empty input, trailing tokens, unmatched parentheses, and
    operators in positions where an operand was expected.

    Attributes:
        message: Human-readable error message.
        expression: The expression that failed to parse.
        position: Character offset of the offending token.
        token: Text of the offending token ("" at end of input).
    """

    def __init__(
        self,
        message: str,
        expression: str,
        position: int = 0,
        token: str = "",
    ) -> None:
        """Initialize the ConditionSyntaxError.

        Args:
            message: Human-readable error message.
            expression: The expression that failed to parse.
            position: Character offset of the offending token.
            token: Text of the offending token.
        """
        self.token = token
        super().__init__(message, expression=expression, position=position)


class CommandConditionError(ConditionError):
    """Exception raised when a command trigger condition cannot be built.

    Raised when no command names are supplied or when none of the requested
    comment events resolves to a known event mapping.

    Attributes:
        message: Human-readable error message.
        command_names: The command names the condition was requested for.
    """

    def __init__(
        self,
        message: str,
        command_names: tuple[str, ...] = (),
    ) -> None:
        self.command_names = command_names
        super().__init__(message)


class SlashCommandError(ConditionError):
    """Exception raised for a malformed "/command" trigger shorthand."""
