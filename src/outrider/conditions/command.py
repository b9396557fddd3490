"""Command trigger condition synthesis.

A command trigger activates a workflow when "/<name>" appears in the text
of an issue, pull request, discussion, or comment. The condition built here
checks the body field that belongs to each enabled event type, and, when the
workflow also has unrelated triggers (schedule, push, dispatch, ...), lets
those through unconditionally:

    (<comment event> && <command check>) || !(<comment event>)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from outrider.conditions.builders import (
    build_contains,
    build_disjunction,
    build_equals,
    build_event_type_equals,
    build_not_equals,
    build_null_literal,
    build_property_access,
    build_string_literal,
)
from outrider.conditions.errors import CommandConditionError, SlashCommandError
from outrider.conditions.events import (
    COMMENT_EVENTS,
    CommentEventMapping,
    filter_comment_events,
    get_actual_event_name,
    get_comment_event_names,
)
from outrider.conditions.nodes import AndNode, ConditionNode, NotNode, OrNode
from outrider.logging import get_logger

__all__ = [
    "build_event_aware_command_condition",
    "parse_slash_command_shorthand",
    "expand_slash_command_shorthand",
]

logger = get_logger(__name__)

_COMMENT_BODY = "github.event.comment.body"
_ISSUE_PULL_REQUEST = "github.event.issue.pull_request"


@dataclass(frozen=True, slots=True)
class _CommandGuard:
    """Where the command text lives for one event identifier.

    Attributes:
        identifier: Event identifier from the comment event table.
        body_path: Property path of the user-authored text.
        on_pull_request: For issue_comment deliveries, restrict to comments
            on pull requests (True) or on issues (False).
    """

    identifier: str
    body_path: str
    on_pull_request: bool | None = None


_COMMAND_GUARDS: tuple[_CommandGuard, ...] = (
    _CommandGuard("issues", "github.event.issue.body"),
    _CommandGuard("issue_comment", _COMMENT_BODY, on_pull_request=False),
    _CommandGuard("pull_request_comment", _COMMENT_BODY, on_pull_request=True),
    _CommandGuard("pull_request_review_comment", _COMMENT_BODY),
    _CommandGuard("pull_request", "github.event.pull_request.body"),
    _CommandGuard("discussion", "github.event.discussion.body"),
    _CommandGuard("discussion_comment", _COMMENT_BODY),
)

_GUARDED_IDENTIFIERS = frozenset(guard.identifier for guard in _COMMAND_GUARDS)


def _build_command_check(
    command_names: Sequence[str], body_path: str
) -> ConditionNode:
    checks = [
        build_contains(
            build_property_access(body_path),
            build_string_literal(f"/{name}"),
        )
        for name in command_names
    ]
    return build_disjunction(False, *checks)


def _build_guard(guard: _CommandGuard, command_names: Sequence[str]) -> ConditionNode:
    event_check = build_event_type_equals(get_actual_event_name(guard.identifier))
    command_check = _build_command_check(command_names, guard.body_path)

    if guard.on_pull_request is None:
        return AndNode(left=event_check, right=command_check)

    pull_request = build_property_access(_ISSUE_PULL_REQUEST)
    if guard.on_pull_request:
        target_check = build_not_equals(pull_request, build_null_literal())
    else:
        target_check = build_equals(pull_request, build_null_literal())
    return AndNode(
        left=event_check,
        right=AndNode(left=command_check, right=target_check),
    )


def build_event_aware_command_condition(
    command_names: Sequence[str],
    command_events: Sequence[str] | None = None,
    has_other_events: bool = False,
    *,
    event_table: Sequence[CommentEventMapping] = COMMENT_EVENTS,
) -> ConditionNode:
    """Build the condition gating a workflow on a command trigger.

    Args:
        command_names: Command names (without the leading "/").
        command_events: Event identifiers the command is active on.
            None or empty enables every event in ``event_table``.
            Unknown identifiers are ignored.
        has_other_events: The workflow also has triggers that are not
            comment-bearing events; those must always be allowed to run.
        event_table: Comment event table to resolve identifiers against.

    Returns:
        Condition tree. Without other events this is the OR of the per-event
        command guards; with other events it is
        ``(discriminator && guards) || !(discriminator)``.

    Raises:
        CommandConditionError: If no command names are given or no enabled
            event resolves to a known comment event.

    Example:
        >>> build_event_aware_command_condition(["bot"], ["issues"]).render()
        "(github.event_name == 'issues') && (contains(github.event.issue.body, '/bot'))"
    """
    names = tuple(command_names)
    logger.debug(
        "building_command_condition",
        commands=list(names),
        event_count=len(command_events or ()),
        has_other_events=has_other_events,
    )

    if not names:
        raise CommandConditionError("no command names provided")

    event_names = get_comment_event_names(
        filter_comment_events(command_events, event_table)
    )
    logger.debug("filtered_command_events", events=event_names)

    guarded_names = [name for name in event_names if name in _GUARDED_IDENTIFIERS]
    guards = [
        _build_guard(guard, names)
        for guard in _COMMAND_GUARDS
        if guard.identifier in guarded_names
    ]
    if not guards:
        raise CommandConditionError(
            f"no valid comment events specified for commands {list(names)} "
            "- at least one event must be enabled",
            command_names=names,
        )

    command_condition = build_disjunction(False, *guards)
    if not has_other_events:
        return command_condition

    # One discriminator term per platform event; issue_comment and
    # pull_request_comment share a single term
    seen: set[str] = set()
    discriminator_terms: list[ConditionNode] = []
    for event_name in guarded_names:
        actual_name = get_actual_event_name(event_name)
        if actual_name not in seen:
            seen.add(actual_name)
            discriminator_terms.append(build_event_type_equals(actual_name))

    discriminator = build_disjunction(False, *discriminator_terms)
    return OrNode(
        left=AndNode(left=discriminator, right=command_condition),
        right=NotNode(child=discriminator),
    )


def parse_slash_command_shorthand(text: str) -> tuple[str, bool]:
    """Parse a "/name" trigger shorthand.

    Args:
        text: Raw trigger value from the workflow frontmatter.

    Returns:
        Tuple of (command name, whether text was a slash command).
        Non-slash text returns ("", False).

    Raises:
        SlashCommandError: If text is "/" with no command name.

    Examples:
        >>> parse_slash_command_shorthand("/deploy")
        ('deploy', True)
        >>> parse_slash_command_shorthand("push")
        ('', False)
    """
    if not text.startswith("/"):
        return "", False

    name = text[1:]
    if not name:
        raise SlashCommandError(
            "slash command shorthand cannot be empty after '/'", expression=text
        )

    logger.debug("parsed_slash_command_shorthand", command=name)
    return name, True


def expand_slash_command_shorthand(command_name: str) -> dict[str, Any]:
    """Expand a command name into its trigger configuration.

    The shorthand enables the command trigger plus manual dispatch.
    """
    return {
        "slash_command": command_name,
        "workflow_dispatch": None,
    }
