"""Outcomes returned by the dispatch entry point."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

from notification_engine.domain.errors import DuplicateEventError, NotificationError

from .delivery import Delivery
from .notification import Notification


@dataclass(frozen=True)
class DispatchResult:
    """Rows produced by a completed dispatch."""

    event_id: int
    notifications: list[Notification] = field(default_factory=list)
    skipped_channels: list[str] = field(default_factory=list)
    deliveries: list[Delivery] = field(default_factory=list)


@dataclass(frozen=True)
class DispatchSucceeded:
    """Every resolved channel was recorded or skipped by preference."""

    result: DispatchResult
    status: Literal["ok"] = "ok"

    @property
    def event_id(self) -> int:
        return self.result.event_id

    def unwrap(self) -> DispatchResult:
        return self.result


@dataclass(frozen=True)
class DispatchDuplicate:
    """The idempotency key was already recorded; nothing new was written."""

    existing_event_id: int | None
    status: Literal["duplicate"] = "duplicate"

    def unwrap(self) -> DispatchResult:
        raise DuplicateEventError(self.existing_event_id)


@dataclass(frozen=True)
class DispatchFailed:
    """The dispatch stopped on an error.

    ``event_id`` together with ``notifications`` and ``skipped_channels``
    describe what had already been committed when the error happened; all are
    empty when the failure occurred before the event was recorded.
    """

    cause: NotificationError
    event_id: int | None = None
    notifications: list[Notification] = field(default_factory=list)
    skipped_channels: list[str] = field(default_factory=list)
    failed_channel: str | None = None
    status: Literal["error"] = "error"

    def unwrap(self) -> DispatchResult:
        raise self.cause


DispatchOutcome = Union[DispatchSucceeded, DispatchDuplicate, DispatchFailed]


__all__ = [
    "DispatchResult",
    "DispatchSucceeded",
    "DispatchDuplicate",
    "DispatchFailed",
    "DispatchOutcome",
]
