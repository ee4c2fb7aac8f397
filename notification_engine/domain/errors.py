"""Error taxonomy raised by the notification dispatch engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from notification_engine.domain.entities import Notification


class NotificationError(Exception):
    """Base class for every error raised by the dispatch engine."""


class ValidationError(NotificationError, ValueError):
    """Raised when dispatch inputs are malformed; nothing has been written."""


class PersistenceError(NotificationError, RuntimeError):
    """Raised when the store rejects a read or a write for any other reason."""


class PartialDeliveryError(PersistenceError):
    """Raised when an in-app notification was stored but its delivery row was not.

    ``notification`` is the committed row, so callers can still report it.
    """

    def __init__(self, message: str, notification: Notification) -> None:
        super().__init__(message)
        self.notification = notification


class DuplicateEventError(NotificationError):
    """Raised when an idempotency key has already been recorded.

    ``existing_event_id`` is ``None`` when the pre-existing event could not be
    looked up after the conflict.
    """

    def __init__(self, existing_event_id: int | None = None) -> None:
        super().__init__("notification_event_duplicate")
        self.existing_event_id = existing_event_id


__all__ = [
    "NotificationError",
    "ValidationError",
    "PersistenceError",
    "PartialDeliveryError",
    "DuplicateEventError",
]
