"""Per-user channel preferences and the normalisation of legacy rows."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace

from .channel import (
    CHANNEL_EMAIL,
    CHANNEL_IN_APP,
    CHANNEL_PUSH,
    CHANNEL_WHATSAPP,
    normalize_channel,
)


@dataclass(frozen=True)
class ChannelPreferences:
    """Canonical opt-in map for one user.

    The defaults apply to users without any preference rows.
    """

    in_app: bool = True
    email: bool = True
    whatsapp: bool = False
    push: bool = False

    def is_enabled(self, channel: str) -> bool:
        return bool(getattr(self, channel))

    def with_channel(self, channel: str, enabled: bool) -> "ChannelPreferences":
        return replace(self, **{channel: enabled})

    def as_dict(self) -> dict[str, bool]:
        return {
            CHANNEL_IN_APP: self.in_app,
            CHANNEL_EMAIL: self.email,
            CHANNEL_WHATSAPP: self.whatsapp,
            CHANNEL_PUSH: self.push,
        }


@dataclass(frozen=True)
class PreferenceRow:
    """One stored opt-in row in any of its three historical shapes.

    A row either names a ``channel`` with an ``enabled`` flag, or carries the
    older ``email_opt_in``/``wa_opt_in`` flags and/or a ``channels`` list of
    enabled channel names.
    """

    user_id: str
    channel: str | None = None
    enabled: bool | None = None
    email_opt_in: bool | None = None
    wa_opt_in: bool | None = None
    channels: Sequence[str] = field(default_factory=tuple)


def normalize_preference_rows(rows: Iterable[PreferenceRow]) -> ChannelPreferences:
    """Collapse ``rows`` into a single :class:`ChannelPreferences`.

    Entries from a ``channels`` list only ever enable a channel and never touch
    ``in_app``. Unrecognised channel names are ignored.
    """

    preferences = ChannelPreferences()
    for row in rows:
        channel = normalize_channel(row.channel)
        if channel is not None:
            if isinstance(row.enabled, bool):
                preferences = preferences.with_channel(channel, row.enabled)
            continue

        if isinstance(row.email_opt_in, bool):
            preferences = preferences.with_channel(CHANNEL_EMAIL, row.email_opt_in)
        if isinstance(row.wa_opt_in, bool):
            preferences = preferences.with_channel(CHANNEL_WHATSAPP, row.wa_opt_in)
        for name in row.channels or ():
            listed = normalize_channel(name)
            if listed is None or listed == CHANNEL_IN_APP:
                continue
            preferences = preferences.with_channel(listed, True)
    return preferences


__all__ = ["ChannelPreferences", "PreferenceRow", "normalize_preference_rows"]
