"""Outrider exception hierarchy.

All exceptions can be imported from this package:
    from outrider.exceptions import OutriderError, ConfigError

Condition-specific errors live beside the condition compiler in
``outrider.conditions.errors`` and also derive from OutriderError.
"""

from __future__ import annotations

from outrider.exceptions.base import OutriderError
from outrider.exceptions.config import ConfigError

__all__ = [
    "OutriderError",
    "ConfigError",
]
