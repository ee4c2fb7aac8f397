"""Template substitution and fallback content for notifications."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final

from notification_engine.domain.entities import NotificationTemplate

DEFAULT_BRAND_NAME: Final[str] = "GramorX"
DEFAULT_FALLBACK_MESSAGE: Final[str] = "You have a new notification"

LEGACY_MESSAGE_KEYS: Final[tuple[str, ...]] = ("message", "body", "title")

_PLACEHOLDER_PATTERN: Final[re.Pattern[str]] = re.compile(r"\{\{\s*([\w.]+)\s*\}\}")
_TITLE_SEPARATORS: Final[re.Pattern[str]] = re.compile(r"[_\s-]+")

_MISSING = object()


@dataclass(frozen=True)
class RenderedContent:
    """Title and body ready to be persisted for one channel."""

    title: str
    body: str


def resolve_path(payload: Mapping[str, Any], path: str) -> Any:
    """Follow the dotted ``path`` through nested mappings of ``payload``."""

    current: Any = payload
    for part in path.split("."):
        if isinstance(current, Mapping) and part in current:
            current = current[part]
        else:
            return _MISSING
    return current


def _stringify(value: Any) -> str:
    if value is _MISSING or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)


def render_template(source: str | None, payload: Mapping[str, Any]) -> str | None:
    """Substitute ``{{ dotted.path }}`` placeholders in ``source``.

    Unresolvable paths become empty strings. Returns ``None`` when the trimmed
    result is empty so callers can fall back to generated content.
    """

    if not source:
        return None
    rendered = _PLACEHOLDER_PATTERN.sub(
        lambda match: _stringify(resolve_path(payload, match.group(1))), source
    )
    value = rendered.strip()
    return value or None


def fallback_title(event_key: str, brand_name: str = DEFAULT_BRAND_NAME) -> str:
    """Build a title from ``event_key``: ``mock_submitted`` -> ``Mock Submitted``."""

    parts = [part for part in _TITLE_SEPARATORS.split(event_key or "") if part]
    if not parts:
        return f"{brand_name} update"
    return " ".join(part[:1].upper() + part[1:] for part in parts)


def fallback_body(
    payload: Mapping[str, Any],
    fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
) -> str:
    """Return the first non-empty legacy message field of ``payload``."""

    for key in LEGACY_MESSAGE_KEYS:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return fallback_message


def render_content(
    template: NotificationTemplate | None,
    payload: Mapping[str, Any],
    event_key: str,
    *,
    brand_name: str = DEFAULT_BRAND_NAME,
    fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
) -> RenderedContent:
    title_source = template.title_template if template is not None else None
    body_source = template.body_template if template is not None else None

    title = render_template(title_source, payload) or fallback_title(event_key, brand_name)
    body = render_template(body_source, payload) or fallback_body(payload, fallback_message)
    return RenderedContent(title=title, body=body)


__all__ = [
    "DEFAULT_BRAND_NAME",
    "DEFAULT_FALLBACK_MESSAGE",
    "LEGACY_MESSAGE_KEYS",
    "RenderedContent",
    "resolve_path",
    "render_template",
    "fallback_title",
    "fallback_body",
    "render_content",
]
