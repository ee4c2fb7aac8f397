"""Persistence helpers for delivery audit rows."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from notification_engine.domain.entities import Delivery
from notification_engine.domain.errors import PersistenceError
from notification_engine.infrastructure.models import NotificationDeliveryModel
from notification_engine.utils import ensure_app_timezone, now_in_app_timezone


class NotificationDeliveryRepository:
    """Write delivery rows; a transport worker updates them afterwards."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, delivery: Delivery) -> Delivery:
        model = NotificationDeliveryModel(
            event_id=delivery.event_id,
            template_id=delivery.template_id,
            channel=delivery.channel,
            status=delivery.status,
            attempt_count=delivery.attempt_count,
            delivery_metadata=delivery.metadata or {},
            notification_id=delivery.notification_id,
            created_at=delivery.created_at or now_in_app_timezone(),
            sent_at=delivery.sent_at,
            error=delivery.error,
        )
        try:
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError(
                f"Failed to record {delivery.channel} delivery: {exc}"
            ) from exc
        return self._to_entity(model)

    def list_for_event(self, event_id: int) -> Sequence[Delivery]:
        try:
            models = (
                self.session.query(NotificationDeliveryModel)
                .filter(NotificationDeliveryModel.event_id == event_id)
                .order_by(NotificationDeliveryModel.id.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to list deliveries: {exc}") from exc
        return [self._to_entity(model) for model in models]

    @staticmethod
    def _to_entity(model: NotificationDeliveryModel) -> Delivery:
        return Delivery(
            id=model.id,
            event_id=model.event_id,
            channel=model.channel,
            status=model.status,
            attempt_count=model.attempt_count,
            template_id=model.template_id,
            notification_id=model.notification_id,
            metadata=model.delivery_metadata or {},
            created_at=ensure_app_timezone(model.created_at),
            sent_at=ensure_app_timezone(model.sent_at),
            error=model.error,
        )


__all__ = ["NotificationDeliveryRepository"]
