"""Domain entity representing an in-app notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .channel import CHANNEL_IN_APP


@dataclass
class Notification:
    """Message shown to a user inside the product.

    ``message`` mirrors ``body`` for readers that predate the ``body`` column.
    """

    id: int | None
    user_id: str
    type: str
    title: str
    body: str
    url: str | None = None
    channel: str = CHANNEL_IN_APP
    meta: dict[str, Any] = field(default_factory=dict)
    template_id: int | None = None
    read: bool = False
    read_at: datetime | None = None
    sent_at: datetime | None = None
    created_at: datetime | None = None

    @property
    def message(self) -> str:
        return self.body


__all__ = ["Notification"]
