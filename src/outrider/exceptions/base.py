from __future__ import annotations


class OutriderError(Exception):
    """Base exception class for all Outrider-specific errors.

    Every error the condition compiler or the configuration layer raises
    derives from this class, so the CLI can report them all the same way:
    ``message`` as the headline and ``details()`` as indented lines below it.

    Attributes:
        message: Human-readable error message without any detail lines.

    Example:
        ```python
        try:
            node = parse_condition(text)
        except OutriderError as e:
            err_console.print(format_error(e.message, details=e.details()))
        ```
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def details(self) -> list[str]:
        """Return supporting lines shown under the message. Empty by default."""
        return []
