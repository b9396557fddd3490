"""Structured logging for Outrider.

The condition compiler only emits DEBUG diagnostics; nothing it logs
influences parsing, rendering, or line breaking. All output goes to stderr
so stdout stays reserved for compiled conditions.

Rendering is chosen once by ``configure_logging``:

- ``OUTRIDER_LOG_FORMAT=json`` writes one JSON object per line.
- Anything else writes structlog's console format.

The level comes from, in order: the ``level`` argument, ``OUTRIDER_LOG_LEVEL``,
then WARNING. The CLI derives its argument from ``-q``/``-v`` and the
``verbosity`` setting via ``level_from_verbosity``.

Usage:
    from outrider.logging import configure_logging, get_logger, log_context

    configure_logging()
    log = get_logger(__name__)
    with log_context(command="condition parse"):
        log.debug("condition_parsed", tokens=7)
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.types import Processor

__all__ = [
    "configure_logging",
    "get_logger",
    "level_from_verbosity",
    "log_context",
    "VERBOSITY_LEVELS",
]

LOG_FORMAT_ENV_VAR = "OUTRIDER_LOG_FORMAT"
LOG_LEVEL_ENV_VAR = "OUTRIDER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

#: Names accepted by the ``verbosity`` setting.
VERBOSITY_LEVELS: dict[str, int] = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def _env_log_level() -> int:
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.WARNING


def level_from_verbosity(
    verbosity: str | None = None, *, verbose: int = 0, quiet: bool = False
) -> int:
    """Resolve the effective log level from CLI flags and configuration.

    ``quiet`` wins over ``verbose``, which wins over ``verbosity``. One
    ``-v`` means INFO, two or more mean DEBUG. An unknown or missing
    ``verbosity`` name means WARNING.

    Examples:
        >>> level_from_verbosity("debug", quiet=True) == logging.ERROR
        True
        >>> level_from_verbosity("error", verbose=2) == logging.DEBUG
        True
    """
    if quiet:
        return logging.ERROR
    if verbose > 0:
        return logging.INFO if verbose == 1 else logging.DEBUG
    return VERBOSITY_LEVELS.get((verbosity or "").lower(), logging.WARNING)


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _render_processors(use_json: bool) -> list[Processor]:
    if use_json:
        return [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(
    *,
    force_json: bool = False,
    level: int | None = None,
) -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Safe to call more than once; each call replaces the previous handler.

    Args:
        force_json: Render JSON regardless of OUTRIDER_LOG_FORMAT.
        level: Log level. If None, read from OUTRIDER_LOG_LEVEL.
    """
    use_json = force_json or os.environ.get(LOG_FORMAT_ENV_VAR, "").lower() == "json"
    log_level = level if level is not None else _env_log_level()

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_render_processors(use_json),
            ],
            foreign_pre_chain=_shared_processors(),
        )
    )

    root_logger = logging.getLogger()
    for old in root_logger.handlers[:]:
        root_logger.removeHandler(old)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, usually with ``__name__``."""
    log: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return log


@contextmanager
def log_context(**context: Any) -> Iterator[None]:
    """Attach ``context`` to every log line emitted inside the block.

    Keys bound by an enclosing block are restored on exit.

    Example:
        with log_context(command="condition command", commands=["bot"]):
            build_event_aware_command_condition(["bot"])
    """
    with structlog.contextvars.bound_contextvars(**context):
        yield
