"""Render dispatch: map a chat message to a render descriptor.

The registry is a tagged mapping ``CommandKind -> parser``.  Detection walks
kinds in registration order, so registration order is match priority.
Adding a command means registering one more parser; ``renderable_for`` does
not change.
"""

from __future__ import annotations

import logging
from functools import lru_cache, partial
from typing import Callable, Iterable, Optional

from careerchat.commands import extractors
from careerchat.commands.matcher import PRIORITY, detect_command
from careerchat.config import Settings
from careerchat.models.records import CommandKind, RenderDescriptor, StructuredRecord

logger = logging.getLogger("careerchat.commands")

Parser = Callable[[str], Iterable[StructuredRecord]]


class UnknownCommandError(LookupError):
    """Raised when records are requested for a kind with no registered parser."""


class CommandRegistry:
    """Ordered registry of command parsers."""

    def __init__(self) -> None:
        self._parsers: dict[CommandKind, Parser] = {}

    def register(self, kind: CommandKind, parser: Parser) -> None:
        self._parsers[kind] = parser

    @property
    def kinds(self) -> tuple[CommandKind, ...]:
        return tuple(self._parsers)

    def detect(self, message: str) -> Optional[CommandKind]:
        return detect_command(message, self.kinds)

    def extract(self, kind: CommandKind, message: str) -> tuple[StructuredRecord, ...]:
        """Run the parser registered for *kind* over *message*."""
        try:
            parser = self._parsers[kind]
        except KeyError:
            raise UnknownCommandError(f"No parser registered for {kind!r}") from None
        return tuple(parser(message))

    def renderable_for(self, message: str) -> Optional[RenderDescriptor]:
        """Return ``(kind, records)`` for *message*, or None when nothing renders."""
        kind = self.detect(message)
        if kind is None:
            logger.debug("no_command_detected")
            return None

        records = self.extract(kind, message)
        if not records:
            logger.debug("empty_result_set: kind=%s", kind.value)
            return None

        logger.debug("render: kind=%s records=%d", kind.value, len(records))
        return RenderDescriptor(kind=kind, records=records)


BUILTIN_PARSERS: dict[CommandKind, Parser] = {
    CommandKind.JOB_DATA: extractors.parse_job_data,
    CommandKind.COMMUNITY: extractors.parse_community,
    CommandKind.COURSES: extractors.parse_courses,
    CommandKind.RESUME: extractors.parse_resume,
    CommandKind.JOB_PORTALS: extractors.parse_job_portals,
}


def build_registry(settings: Optional[Settings] = None) -> CommandRegistry:
    """Create a registry with the built-in commands in priority order.

    *settings* overrides the configured job-portal catalog.
    """
    registry = CommandRegistry()
    for kind in PRIORITY:
        registry.register(kind, BUILTIN_PARSERS[kind])
    if settings is not None:
        registry.register(
            CommandKind.JOB_PORTALS, partial(extractors.parse_job_portals, settings=settings),
        )
    return registry


@lru_cache
def default_registry() -> CommandRegistry:
    """Return the shared registry of built-in commands."""
    return build_registry()


def renderable_for(message: str) -> Optional[RenderDescriptor]:
    return default_registry().renderable_for(message)
