"""Comment-bearing trigger events.

A command trigger ("/name" typed into an issue, pull request, discussion,
or comment) can only fire on events whose payload carries user-authored
text. This module holds the fixed table of those events and the helpers
that resolve user-supplied event identifiers against it.

``pull_request_comment`` is not a platform event of its own: it is the
``issue_comment`` event restricted to comments on pull requests.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from outrider.logging import get_logger

__all__ = [
    "CommentEventMapping",
    "COMMENT_EVENTS",
    "get_all_comment_events",
    "get_comment_event_by_identifier",
    "parse_command_events",
    "filter_comment_events",
    "get_comment_event_names",
    "get_actual_event_name",
    "merge_events_for_trigger",
]

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CommentEventMapping:
    """A comment-bearing trigger event.

    Attributes:
        event_name: Event identifier (e.g., "issues", "pull_request_comment").
        types: Activity types the trigger listens for (e.g., "opened").
        is_pr_comment: issue_comment restricted to pull request comments.
        is_issue_comment: issue_comment restricted to issue comments.
    """

    event_name: str
    types: tuple[str, ...]
    is_pr_comment: bool = False
    is_issue_comment: bool = False


COMMENT_EVENTS: tuple[CommentEventMapping, ...] = (
    CommentEventMapping("issues", ("opened", "edited", "reopened")),
    CommentEventMapping("issue_comment", ("created", "edited"), is_issue_comment=True),
    CommentEventMapping(
        "pull_request_comment", ("created", "edited"), is_pr_comment=True
    ),
    CommentEventMapping("pull_request", ("opened", "edited", "reopened")),
    CommentEventMapping("pull_request_review_comment", ("created", "edited")),
    CommentEventMapping("discussion", ("created", "edited")),
    CommentEventMapping("discussion_comment", ("created", "edited")),
)


def get_all_comment_events() -> list[CommentEventMapping]:
    """Return every comment-bearing event, in table order."""
    return list(COMMENT_EVENTS)


def get_comment_event_by_identifier(
    identifier: str,
    table: Sequence[CommentEventMapping] = COMMENT_EVENTS,
) -> CommentEventMapping | None:
    """Look up the mapping for an event identifier, or None if unknown."""
    for mapping in table:
        if mapping.event_name == identifier:
            return mapping
    return None


def parse_command_events(value: Any) -> list[str] | None:
    """Parse the ``events`` field of a command trigger configuration.

    Args:
        value: Raw frontmatter value: None, "*", a single event name, or a
            list of event names.

    Returns:
        Event identifiers to enable, or None for all comment events.

    Examples:
        >>> parse_command_events("*") is None
        True
        >>> parse_command_events(["issues", 3, "discussion"])
        ['issues', 'discussion']
    """
    if value is None:
        logger.debug("command_events_default")
        return None

    if isinstance(value, str):
        if value == "*":
            logger.debug("command_events_wildcard")
            return None
        return [value]

    if isinstance(value, list):
        result = [item for item in value if isinstance(item, str)]
        if result:
            logger.debug("command_events_list", count=len(result))
            return result

    logger.debug("command_events_unparsed", value_type=type(value).__name__)
    return None


def filter_comment_events(
    identifiers: Iterable[str] | None,
    table: Sequence[CommentEventMapping] = COMMENT_EVENTS,
) -> list[CommentEventMapping]:
    """Resolve event identifiers against the event table.

    None or an empty collection selects the whole table. Unknown identifiers
    are dropped silently. The result follows the order of ``identifiers``.
    """
    requested = list(identifiers) if identifiers is not None else []
    if not requested:
        return list(table)

    result: list[CommentEventMapping] = []
    for identifier in requested:
        mapping = get_comment_event_by_identifier(identifier, table)
        if mapping is not None:
            result.append(mapping)
        else:
            logger.debug("unknown_comment_event_dropped", identifier=identifier)
    return result


def get_comment_event_names(mappings: Iterable[CommentEventMapping]) -> list[str]:
    return [mapping.event_name for mapping in mappings]


def get_actual_event_name(identifier: str) -> str:
    """Return the platform event that delivers ``identifier``.

    Examples:
        >>> get_actual_event_name("pull_request_comment")
        'issue_comment'
        >>> get_actual_event_name("discussion")
        'discussion'
    """
    if identifier in ("pull_request_comment", "issue_comment"):
        return "issue_comment"
    return identifier


def merge_events_for_trigger(
    mappings: Iterable[CommentEventMapping],
) -> list[CommentEventMapping]:
    """Merge comment events into the platform events a workflow subscribes to.

    ``issue_comment`` and ``pull_request_comment`` share one platform event:
    when both are present they collapse into a single unrestricted
    ``issue_comment`` entry (appended last). A lone ``pull_request_comment``
    becomes an ``issue_comment`` entry flagged ``is_pr_comment``.
    """
    mappings = list(mappings)
    names = {mapping.event_name for mapping in mappings}

    if {"issue_comment", "pull_request_comment"} <= names:
        result = [
            mapping
            for mapping in mappings
            if mapping.event_name not in ("issue_comment", "pull_request_comment")
        ]
        result.append(CommentEventMapping("issue_comment", ("created", "edited")))
        return result

    result = []
    for mapping in mappings:
        if mapping.event_name == "pull_request_comment":
            result.append(
                CommentEventMapping(
                    "issue_comment", mapping.types, is_pr_comment=True
                )
            )
        else:
            result.append(mapping)
    return result
