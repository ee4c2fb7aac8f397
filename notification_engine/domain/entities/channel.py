"""Delivery channels supported by the dispatch engine."""

from __future__ import annotations

from typing import Final

CHANNEL_IN_APP: Final[str] = "in_app"
CHANNEL_EMAIL: Final[str] = "email"
CHANNEL_WHATSAPP: Final[str] = "whatsapp"
CHANNEL_PUSH: Final[str] = "push"

CHANNELS: Final[tuple[str, ...]] = (
    CHANNEL_IN_APP,
    CHANNEL_EMAIL,
    CHANNEL_WHATSAPP,
    CHANNEL_PUSH,
)

_CHANNEL_ALIASES: Final[dict[str, str]] = {"sms": CHANNEL_WHATSAPP}


def normalize_channel(value: object) -> str | None:
    """Return the canonical channel for ``value`` or ``None`` if unrecognised.

    Names are trimmed and lower-cased; ``sms`` is accepted as ``whatsapp``.
    """

    if not isinstance(value, str):
        return None
    token = value.strip().lower()
    if not token:
        return None
    token = _CHANNEL_ALIASES.get(token, token)
    if token in CHANNELS:
        return token
    return None


__all__ = [
    "CHANNEL_IN_APP",
    "CHANNEL_EMAIL",
    "CHANNEL_WHATSAPP",
    "CHANNEL_PUSH",
    "CHANNELS",
    "normalize_channel",
]
