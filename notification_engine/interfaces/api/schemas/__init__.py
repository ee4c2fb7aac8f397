"""Pydantic schemas for API payloads."""

from .notification import (
    EventCatalogEntry,
    NotificationDuplicateResponse,
    NotificationEnqueueRequest,
    NotificationEnqueueResponse,
    NotificationRead,
)

__all__ = [
    "EventCatalogEntry",
    "NotificationDuplicateResponse",
    "NotificationEnqueueRequest",
    "NotificationEnqueueResponse",
    "NotificationRead",
]
