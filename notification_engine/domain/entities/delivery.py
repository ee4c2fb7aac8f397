"""Domain entity describing one delivery attempt on one channel."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

DELIVERY_STATUS_SENT = "sent"
DELIVERY_STATUS_QUEUED = "queued"
DELIVERY_STATUS_FAILED = "failed"

DELIVERY_STATUSES = (
    DELIVERY_STATUS_SENT,
    DELIVERY_STATUS_QUEUED,
    DELIVERY_STATUS_FAILED,
)


@dataclass
class Delivery:
    """Audit record linking an event to a channel hand-off."""

    id: int | None
    event_id: int
    channel: str
    status: str
    attempt_count: int = 0
    template_id: int | None = None
    notification_id: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    sent_at: datetime | None = None
    error: str | None = None


__all__ = [
    "Delivery",
    "DELIVERY_STATUS_SENT",
    "DELIVERY_STATUS_QUEUED",
    "DELIVERY_STATUS_FAILED",
    "DELIVERY_STATUSES",
]
