"""Input validation for notification dispatch."""

from __future__ import annotations

from collections.abc import Iterable

from notification_engine.domain.entities import normalize_channel
from notification_engine.domain.errors import ValidationError


def ensure_user_id(user_id: object) -> str:
    """Return the trimmed user identifier or raise :class:`ValidationError`."""

    normalized = str(user_id).strip() if user_id is not None else ""
    if not normalized:
        raise ValidationError("A user id is required to dispatch a notification")
    return normalized


def ensure_event_key(event_key: object) -> str:
    """Return the trimmed event key or raise :class:`ValidationError`."""

    normalized = event_key.strip() if isinstance(event_key, str) else ""
    if not normalized:
        raise ValidationError("An event key is required to dispatch a notification")
    return normalized


def ensure_known_channel(value: object) -> str:
    """Return the canonical channel for ``value`` or raise :class:`ValidationError`."""

    channel = normalize_channel(value)
    if channel is None:
        raise ValidationError(f"Unknown notification channel '{value}'")
    return channel


def ensure_known_channels(values: Iterable[object] | None) -> list[str]:
    """Validate every caller supplied channel name, preserving order."""

    if values is None:
        return []
    if isinstance(values, str):
        raise ValidationError("Channels must be provided as a list of names")
    return [ensure_known_channel(value) for value in values]


def normalize_idempotency_key(value: str | None) -> str | None:
    """Treat blank idempotency keys as absent."""

    if value is None:
        return None
    normalized = value.strip()
    return normalized or None


__all__ = [
    "ensure_user_id",
    "ensure_event_key",
    "ensure_known_channel",
    "ensure_known_channels",
    "normalize_idempotency_key",
]
