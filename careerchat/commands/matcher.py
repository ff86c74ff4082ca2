"""Command keyword detection."""

from __future__ import annotations

from typing import Iterable, Optional

from careerchat.models.records import CommandKind

# Priority order: the first keyword present in a message wins.
PRIORITY: tuple[CommandKind, ...] = (
    CommandKind.JOB_DATA,
    CommandKind.COMMUNITY,
    CommandKind.COURSES,
    CommandKind.RESUME,
    CommandKind.JOB_PORTALS,
)


def detect_command(
    message: str,
    kinds: Iterable[CommandKind] = PRIORITY,
) -> Optional[CommandKind]:
    """Return the first kind whose keyword occurs anywhere in *message*.

    Matching is a plain case-insensitive substring search, so a keyword
    mentioned in prose ("see /resume below") also matches.
    """
    if not message or not isinstance(message, str):
        return None
    lower = message.lower()
    for kind in kinds:
        if kind.keyword in lower:
            return kind
    return None
