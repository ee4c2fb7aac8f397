"""Domain entities exposed by the dispatch engine."""

from .channel import (
    CHANNEL_EMAIL,
    CHANNEL_IN_APP,
    CHANNEL_PUSH,
    CHANNEL_WHATSAPP,
    CHANNELS,
    normalize_channel,
)
from .delivery import (
    DELIVERY_STATUS_FAILED,
    DELIVERY_STATUS_QUEUED,
    DELIVERY_STATUS_SENT,
    DELIVERY_STATUSES,
    Delivery,
)
from .dispatch import (
    DispatchDuplicate,
    DispatchFailed,
    DispatchOutcome,
    DispatchResult,
    DispatchSucceeded,
)
from .event import NotificationEvent
from .notification import Notification
from .preference import ChannelPreferences, PreferenceRow, normalize_preference_rows
from .template import NotificationTemplate, build_template, find_template_for_channel

__all__ = [
    "CHANNEL_EMAIL",
    "CHANNEL_IN_APP",
    "CHANNEL_PUSH",
    "CHANNEL_WHATSAPP",
    "CHANNELS",
    "normalize_channel",
    "Delivery",
    "DELIVERY_STATUS_SENT",
    "DELIVERY_STATUS_QUEUED",
    "DELIVERY_STATUS_FAILED",
    "DELIVERY_STATUSES",
    "DispatchResult",
    "DispatchSucceeded",
    "DispatchDuplicate",
    "DispatchFailed",
    "DispatchOutcome",
    "NotificationEvent",
    "Notification",
    "ChannelPreferences",
    "PreferenceRow",
    "normalize_preference_rows",
    "NotificationTemplate",
    "build_template",
    "find_template_for_channel",
]
