from __future__ import annotations

from typing import Any

from outrider.exceptions.base import OutriderError


class ConfigError(OutriderError):
    """Raised when outrider.yaml, the user config or OUTRIDER_* variables are invalid.

    Attributes:
        message: What went wrong, e.g. "Invalid configuration: ...".
        field: Dotted path of the offending setting
            (e.g. "expressions.max_line_length"), if known.
        value: The rejected value, if known.

    Example:
        ```python
        raise ConfigError(
            "Invalid configuration: break_threshold must not exceed max_line_length",
            field="expressions",
            value={"max_line_length": 60, "break_threshold": 90},
        )
        ```
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        self.field = field
        self.value = value
        super().__init__(message)

    def details(self) -> list[str]:
        """Return "Field: ..." and "Value: ..." lines for whatever is known."""
        lines = []
        if self.field:
            lines.append(f"Field: {self.field}")
        if self.value is not None:
            lines.append(f"Value: {self.value}")
        return lines
