"""Persistence helpers for the notification event ledger."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from notification_engine.domain.entities import NotificationEvent
from notification_engine.domain.errors import DuplicateEventError, PersistenceError
from notification_engine.infrastructure.models import (
    IDEMPOTENCY_CONSTRAINT_NAME,
    NotificationEventModel,
)
from notification_engine.utils import ensure_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)

_IDEMPOTENCY_MARKERS = (IDEMPOTENCY_CONSTRAINT_NAME, "idempotency_key")


def _is_idempotency_conflict(exc: IntegrityError) -> bool:
    """Return whether ``exc`` was raised by the idempotency unique constraint."""

    message = str(exc.orig if exc.orig is not None else exc).lower()
    return any(marker in message for marker in _IDEMPOTENCY_MARKERS)


class NotificationEventRepository:
    """Append events to the ledger and look them up again."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def append(
        self,
        *,
        user_id: str,
        event_key: str,
        payload: dict[str, Any] | None = None,
        idempotency_key: str | None = None,
    ) -> int:
        """Insert a new event row and return its identifier.

        The insert is always attempted; the store's unique constraint decides
        whether ``idempotency_key`` was seen before. On such a conflict a
        :class:`DuplicateEventError` carrying the existing event id is raised.
        """

        model = NotificationEventModel(
            user_id=user_id,
            event_key=event_key,
            payload=payload or {},
            idempotency_key=idempotency_key,
            created_at=now_in_app_timezone(),
        )
        try:
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        except IntegrityError as exc:
            self.session.rollback()
            if idempotency_key is not None and _is_idempotency_conflict(exc):
                existing_id = self._find_existing_id(idempotency_key)
                logger.info(
                    "Notification event '%s' already recorded for key %s (event %s)",
                    event_key,
                    idempotency_key,
                    existing_id,
                )
                raise DuplicateEventError(existing_id) from exc
            raise PersistenceError(f"Failed to record notification event: {exc}") from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError(f"Failed to record notification event: {exc}") from exc

        return model.id

    def get(self, event_id: int) -> NotificationEvent | None:
        try:
            model = self.session.get(NotificationEventModel, event_id)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to load notification event: {exc}") from exc
        return self._to_entity(model) if model is not None else None

    def get_by_idempotency_key(self, idempotency_key: str) -> NotificationEvent | None:
        try:
            model = (
                self.session.query(NotificationEventModel)
                .filter(NotificationEventModel.idempotency_key == idempotency_key)
                .one_or_none()
            )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to load notification event: {exc}") from exc
        return self._to_entity(model) if model is not None else None

    def count_for_idempotency_key(self, idempotency_key: str) -> int:
        try:
            return (
                self.session.query(NotificationEventModel)
                .filter(NotificationEventModel.idempotency_key == idempotency_key)
                .count()
            )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to count notification events: {exc}") from exc

    def _find_existing_id(self, idempotency_key: str) -> int | None:
        try:
            existing = self.get_by_idempotency_key(idempotency_key)
        except PersistenceError:
            logger.warning(
                "Could not look up the event recorded for idempotency key %s",
                idempotency_key,
            )
            return None
        return existing.id if existing is not None else None

    @staticmethod
    def _to_entity(model: NotificationEventModel) -> NotificationEvent:
        return NotificationEvent(
            id=model.id,
            user_id=model.user_id,
            event_key=model.event_key,
            payload=model.payload or {},
            idempotency_key=model.idempotency_key,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationEventRepository"]
