"""Outrider constants shared by the condition compiler and its callers.

This module is the single source of truth for the output width limits of
generated condition expressions and for the platform context paths the
condition builders reference.
"""

from __future__ import annotations

# =============================================================================
# Expression Line Breaking
# =============================================================================

#: Longest line the pretty-printer leaves untouched
MAX_EXPRESSION_LINE_LENGTH: int = 120

#: Accumulated line length after which a logical operator becomes a break point
EXPRESSION_BREAK_THRESHOLD: int = 100

#: Line length after which a balanced parenthesis group becomes a break point
PAREN_BREAK_THRESHOLD: int = 80

# =============================================================================
# Platform Context Paths
# =============================================================================

#: Property path of the triggering event's name
EVENT_NAME_PATH: str = "github.event_name"

#: Property path of the triggering event's activity type
EVENT_ACTION_PATH: str = "github.event.action"

#: Property path of the ref that triggered the run
REF_PATH: str = "github.ref"

#: Property path of the names of the labels attached to a pull request
PR_LABEL_NAMES_PATH: str = "github.event.pull_request.labels.*.name"

# =============================================================================
# Expression Extraction
# =============================================================================

#: Prefix for environment variables that carry extracted expressions
ENV_VAR_PREFIX: str = "GH_AW_"

#: Wrapper delimiters around platform expressions
EXPRESSION_OPEN: str = "${{"
EXPRESSION_CLOSE: str = "}}"
