"""Resolution of the channels a dispatch should attempt."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from notification_engine.domain.entities import (
    CHANNEL_IN_APP,
    CHANNELS,
    NotificationTemplate,
    normalize_channel,
)


def resolve_channels(
    channel_override: str | None,
    channels: Iterable[str] | None,
    templates: Sequence[NotificationTemplate],
) -> list[str]:
    """Return the ordered, de-duplicated channels to attempt.

    The caller's override and explicit channels win. When the caller expresses
    no preference, the channels of the registered templates are used. ``in_app``
    is always part of the result.
    """

    resolved: list[str] = []

    def _add(value: object) -> None:
        channel = normalize_channel(value)
        if channel is not None and channel not in resolved:
            resolved.append(channel)

    if channel_override:
        _add(channel_override)
    for value in channels or ():
        _add(value)

    if not resolved:
        for template in templates:
            _add(template.channel)

    _add(CHANNEL_IN_APP)
    return [channel for channel in resolved if channel in CHANNELS]


__all__ = ["resolve_channels"]
