"""Rich consoles shared by the Outrider CLI commands.

``console`` prints condition trees to stdout. ``err_console`` prints error
reports to stderr. Condition text is printed verbatim: no highlighting
and no wrapping, so a caret line stays aligned with the expression above it.
"""

from __future__ import annotations

from rich.console import Console

__all__ = ["console", "err_console"]

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)
