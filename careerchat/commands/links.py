"""Display hints for linked records: favicons, platform icons and colours."""

from __future__ import annotations

from urllib.parse import urlencode, urlparse

from careerchat.config import Settings, get_settings
from careerchat.models.records import (
    CommandKind,
    DisplayHint,
    JobRecord,
    RenderDescriptor,
    ResumeRecord,
)

DEFAULT_ICON = "language"
DEFAULT_COLOR = "#49654E"

# platform or category (lower-cased) -> (material icon, brand colour)
PLATFORM_STYLES: dict[str, tuple[str, str]] = {
    # communities
    "facebook": ("facebook", "#1877F2"),
    "linkedin": ("language", "#0A66C2"),
    "discord": ("chat", "#5865F2"),
    "twitter": ("alternate-email", "#1DA1F2"),
    "reddit": ("forum", "#FF4500"),
    "github": ("code", "#333333"),
    "instagram": ("photo-camera", "#E4405F"),
    "youtube": ("play-circle-filled", "#FF0000"),
    "telegram": ("send", "#0088CC"),
    "slack": ("chat-bubble", "#4A154B"),
    # courses
    "coursera": ("school", "#0056D3"),
    "udemy": ("play-circle-filled", "#A435F0"),
    "edx": ("menu-book", "#02262B"),
    "linkedin learning": ("business", "#0A66C2"),
    "pluralsight": ("computer", "#F15B2A"),
    "udacity": ("science", "#01B3E3"),
    "codecademy": ("code", "#1F4056"),
    "khan academy": ("lightbulb", "#14BF96"),
    "freecodecamp": ("code", "#006400"),
    "skillshare": ("palette", "#00FF88"),
    "masterclass": ("star", "#000000"),
    # portal categories
    "tech": ("computer", "#2E7D32"),
    "professional": ("business-center", "#388E3C"),
    "career": ("trending-up", "#4CAF50"),
    "training": ("school", "#66BB6A"),
    "startup": ("rocket-launch", "#66BB6A"),
    "certification": ("verified", "#81C784"),
}


def favicon_url(link: str, settings: Settings | None = None) -> str:
    """Return a favicon-service URL for *link*'s host, or the placeholder image.

    Never raises; the returned URL is fetched later by whatever loads images.
    """
    settings = settings or get_settings()
    try:
        parsed = urlparse(link)
        host = parsed.hostname
    except (TypeError, ValueError, AttributeError):
        return settings.placeholder_icon_url
    if parsed.scheme not in ("http", "https") or not host:
        return settings.placeholder_icon_url
    query = urlencode({"domain": host, "sz": settings.favicon_size})
    return f"{settings.favicon_service_url}?{query}"


def platform_style(name: str) -> tuple[str, str]:
    """Return ``(icon, colour)`` for a platform or category name."""
    return PLATFORM_STYLES.get((name or "").strip().lower(), (DEFAULT_ICON, DEFAULT_COLOR))


def course_level(platform: str, course_name: str) -> str:
    """Rough difficulty label shown on course cards."""
    name = course_name.lower()
    platform = platform.lower()
    if any(word in name for word in ("beginner", "basics", "introduction")):
        return "Beginner"
    if "advanced" in name or "master" in name:
        return "Advanced"
    if platform == "youtube":
        return "Free"
    if platform in ("coursera", "edx"):
        return "Academic"
    return "Intermediate"


def display_hints(descriptor: RenderDescriptor, settings: Settings | None = None) -> list[DisplayHint]:
    """Per-record icon and colour hints, in the same order as the records."""
    settings = settings or get_settings()
    hints: list[DisplayHint] = []
    for record in descriptor.records:
        if isinstance(record, JobRecord):
            icon_url = record.employer_logo_url or favicon_url(record.apply_link, settings)
            hints.append(DisplayHint(icon_url=icon_url, icon="work", color=DEFAULT_COLOR))
        elif isinstance(record, ResumeRecord):
            hints.append(DisplayHint(icon_url=None, icon="picture-as-pdf", color="#D32F2F"))
        else:
            icon, color = platform_style(record.platform_or_category)
            level = None
            if descriptor.kind is CommandKind.COURSES:
                level = course_level(record.platform_or_category, record.name)
            hints.append(
                DisplayHint(
                    icon_url=favicon_url(record.link, settings),
                    icon=icon,
                    color=color,
                    level=level,
                )
            )
    return hints
