"""Per-command payload grammars.

Every parser here is a generator over typed records.  Malformed input never
raises: lines or objects that do not satisfy the grammar are dropped and a
DEBUG line is written to the ``careerchat.commands`` logger so the drop can be
traced without changing what the user sees.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Iterator, Optional
from urllib.parse import urlparse

from pydantic import ValidationError

from careerchat.config import Settings, get_settings
from careerchat.models.records import (
    CommandKind,
    JobRecord,
    LinkedEntityRecord,
    ResumeRecord,
)

logger = logging.getLogger("careerchat.commands")

RESUME_PATTERN = re.compile(r"/resume\s*:\s*(https?://\S+)", re.IGNORECASE)

_RESUME_PREFIX = re.compile(r"^resume_")
_TIMESTAMP_SUFFIX = re.compile(r"_\d{4}-\d{2}-\d{2}T[\d-]+Z\.pdf$")
_UUID_PREFIX = re.compile(r"^[a-f0-9-]{36}_")
_REPEATED_UNDERSCORES = re.compile(r"_+")

DEFAULT_RESUME_FILENAME = "resume.pdf"


# ── /jobdata ──────────────────────────────────────────────────────────────────


def _json_array_span(message: str) -> Optional[str]:
    """Return the text from the first ``[`` after the keyword to the last ``]``."""
    start = message.lower().find(CommandKind.JOB_DATA.keyword)
    if start < 0:
        return None
    open_idx = message.find("[", start)
    close_idx = message.rfind("]")
    if open_idx < 0 or close_idx < open_idx:
        return None
    return message[open_idx : close_idx + 1]


def parse_job_data(message: str) -> Iterator[JobRecord]:
    span = _json_array_span(message)
    if span is None:
        logger.debug("malformed_payload: no JSON array after /jobdata")
        return
    try:
        items = json.loads(span)
    except json.JSONDecodeError as exc:
        logger.debug("malformed_payload: /jobdata JSON did not decode: %s", exc)
        return
    if not isinstance(items, list):
        return

    for index, item in enumerate(items):
        if not isinstance(item, dict):
            logger.debug("malformed_payload: /jobdata item %d is not an object", index)
            continue
        try:
            yield JobRecord.model_validate(item)
        except ValidationError as exc:
            logger.debug(
                "malformed_payload: /jobdata item %d dropped (%d errors)",
                index, exc.error_count(),
            )


# ── /community and /courses ───────────────────────────────────────────────────


def _parse_linked_lines(message: str, kind: CommandKind) -> Iterator[LinkedEntityRecord]:
    found_command = False
    for line in message.split("\n"):
        stripped = line.strip()
        if not found_command:
            found_command = stripped.lower() == kind.keyword
            continue
        if not stripped:
            continue

        parts = line.split(":")
        if len(parts) < 3:
            logger.debug("malformed_payload: %s line skipped: %r", kind.keyword, stripped[:80])
            continue
        name = parts[0].strip()
        platform = parts[1].strip()
        # URLs carry their own colons (scheme, port)
        link = ":".join(parts[2:]).strip()
        if not name or not link:
            continue
        yield LinkedEntityRecord(name=name, platform_or_category=platform, link=link)


def parse_community(message: str) -> Iterator[LinkedEntityRecord]:
    return _parse_linked_lines(message, CommandKind.COMMUNITY)


def parse_courses(message: str) -> Iterator[LinkedEntityRecord]:
    return _parse_linked_lines(message, CommandKind.COURSES)


# ── /resume ───────────────────────────────────────────────────────────────────


def derive_resume_filename(url: str) -> str:
    """Turn a hosted resume URL into a readable filename.

    ``.../3f2b..._resume_2024-01-01T00-00-00Z.pdf`` becomes ``resume.pdf``;
    ``.../3f2b..._Jane_Doe_2024-01-01T00-00-00Z.pdf`` becomes ``Jane_Doe.pdf``.
    """
    try:
        path = urlparse(url).path
    except ValueError:
        return DEFAULT_RESUME_FILENAME
    filename = path.rsplit("/", 1)[-1] or DEFAULT_RESUME_FILENAME

    cleaned = _RESUME_PREFIX.sub("", filename)
    cleaned = _TIMESTAMP_SUFFIX.sub(".pdf", cleaned)
    cleaned = _UUID_PREFIX.sub("", cleaned)
    cleaned = _REPEATED_UNDERSCORES.sub("_", cleaned)
    cleaned = cleaned.lstrip("_")

    if cleaned.startswith(".") or not cleaned:
        # Nothing but the UUID and timestamp were left
        return "resume" + cleaned if cleaned else DEFAULT_RESUME_FILENAME
    return cleaned


def parse_resume(message: str) -> Iterator[ResumeRecord]:
    match = RESUME_PATTERN.search(message)
    if not match:
        logger.debug("malformed_payload: /resume without an http(s) URL")
        return
    url = match.group(1)
    yield ResumeRecord(url=url, derived_filename=derive_resume_filename(url))


# ── /jobportals ───────────────────────────────────────────────────────────────


def job_portal_records(settings: Settings | None = None) -> tuple[LinkedEntityRecord, ...]:
    """Build records for the configured portal catalog."""
    settings = settings or get_settings()
    return tuple(
        LinkedEntityRecord(
            name=portal.name,
            platform_or_category=portal.category,
            link=portal.link,
            description=portal.description or None,
        )
        for portal in settings.job_portals
    )


def parse_job_portals(message: str, settings: Settings | None = None) -> Iterator[LinkedEntityRecord]:
    # The keyword alone selects the catalog; the rest of the message is ignored
    yield from job_portal_records(settings)
