"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from notification_engine.domain.entities import Notification
from notification_engine.domain.errors import PersistenceError
from notification_engine.infrastructure.models import NotificationModel
from notification_engine.utils import ensure_app_timezone, now_in_app_timezone


class NotificationRepository:
    """Create and list :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: str,
        *,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel)
        query = query.filter(NotificationModel.user_id == user_id)
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        try:
            models = query.all()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to list notifications: {exc}") from exc
        return [self._to_entity(model) for model in models]

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        try:
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError(f"Failed to create notification: {exc}") from exc
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel,
        notification: Notification,
    ) -> None:
        model.created_at = notification.created_at or now_in_app_timezone()
        model.user_id = notification.user_id
        model.type = notification.type
        model.title = notification.title
        model.body = notification.body
        model.message = notification.message
        model.url = notification.url
        model.channel = notification.channel
        model.meta = notification.meta or {}
        model.template_id = notification.template_id
        model.read = notification.read
        model.read_at = notification.read_at
        model.sent_at = notification.sent_at

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            title=model.title,
            body=model.body if model.body is not None else model.message,
            url=model.url,
            channel=model.channel,
            meta=model.meta or {},
            template_id=model.template_id,
            read=bool(model.read),
            read_at=ensure_app_timezone(model.read_at),
            sent_at=ensure_app_timezone(model.sent_at),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
