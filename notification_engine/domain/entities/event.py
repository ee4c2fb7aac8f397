"""Domain entity representing a recorded notification event."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class NotificationEvent:
    """Immutable ledger entry for one raised domain event."""

    id: int | None
    user_id: str
    event_key: str
    payload: dict[str, Any] = field(default_factory=dict)
    idempotency_key: str | None = None
    created_at: datetime | None = None


__all__ = ["NotificationEvent"]
