"""Pydantic models describing notification dispatch payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class NotificationEnqueueRequest(BaseModel):
    """Payload used to raise a notification event for a user."""

    user_id: str = Field(..., min_length=1, description="Recipient identifier")
    event_key: str = Field(
        default="nudge_manual",
        min_length=1,
        description="Event key, e.g. mock_submitted; manual nudges by default",
    )
    payload: dict[str, Any] = Field(default_factory=dict)
    channels: list[str] | None = Field(
        default=None, description="Channels to attempt besides in_app"
    )
    channel_override: str | None = Field(
        default=None, description="Single channel forced for this dispatch"
    )
    idempotency_key: str | None = Field(
        default=None,
        max_length=255,
        description="Deduplication token; defaults to one per event, user and day",
    )


class NotificationRead(BaseModel):
    """Representation of an in-app notification created by a dispatch."""

    id: int
    user_id: str
    type: str
    title: str
    body: str
    message: str
    url: str | None = None
    channel: str
    read: bool = False
    read_at: datetime | None = None
    created_at: datetime | None = None


class NotificationEnqueueResponse(BaseModel):
    """Result of a successful dispatch."""

    event_id: int
    notifications: list[NotificationRead] = Field(default_factory=list)
    skipped_channels: list[str] = Field(default_factory=list)


class NotificationDuplicateResponse(BaseModel):
    """Body returned when the idempotency key was already used."""

    detail: str = "notification_event_duplicate"
    existing_event_id: int | None = None


class EventCatalogEntry(BaseModel):
    """One registered event key."""

    name: str
    key: str


__all__ = [
    "NotificationEnqueueRequest",
    "NotificationRead",
    "NotificationEnqueueResponse",
    "NotificationDuplicateResponse",
    "EventCatalogEntry",
]
