"""Persist the outcome of one resolved channel for a dispatched event."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from notification_engine.domain.entities import (
    CHANNEL_IN_APP,
    DELIVERY_STATUS_QUEUED,
    DELIVERY_STATUS_SENT,
    ChannelPreferences,
    Delivery,
    Notification,
    NotificationTemplate,
)
from notification_engine.domain.errors import PartialDeliveryError, PersistenceError
from notification_engine.infrastructure.repositories import (
    NotificationDeliveryRepository,
    NotificationRepository,
)
from notification_engine.utils import now_in_app_timezone

from .rendering import RenderedContent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryRecord:
    """Rows written for one channel; both are ``None`` when it was skipped."""

    channel: str
    notification: Notification | None = None
    delivery: Delivery | None = None

    @property
    def skipped(self) -> bool:
        return self.delivery is None


class DeliveryRecorder:
    """Write notification and delivery rows for resolved channels.

    ``in_app`` is delivered immediately. Every other channel gets a ``queued``
    delivery row for the transport worker to pick up.
    """

    def __init__(self, session: Session) -> None:
        self._notifications = NotificationRepository(session)
        self._deliveries = NotificationDeliveryRepository(session)

    def record(
        self,
        channel: str,
        *,
        event_id: int,
        user_id: str,
        event_key: str,
        template: NotificationTemplate | None,
        rendered: RenderedContent,
        payload: dict[str, Any],
        preferences: ChannelPreferences,
    ) -> DeliveryRecord:
        if channel != CHANNEL_IN_APP and not preferences.is_enabled(channel):
            logger.debug(
                "Skipping %s delivery for event %s: disabled by user %s",
                channel,
                event_id,
                user_id,
            )
            return DeliveryRecord(channel=channel)

        template_id = template.id if template is not None else None
        now = now_in_app_timezone()

        if channel == CHANNEL_IN_APP:
            url = payload.get("url")
            notification = self._notifications.create(
                Notification(
                    id=None,
                    user_id=user_id,
                    type=event_key,
                    title=rendered.title,
                    body=rendered.body,
                    url=url if isinstance(url, str) else None,
                    channel=CHANNEL_IN_APP,
                    meta=payload,
                    template_id=template_id,
                    read=False,
                    read_at=None,
                    sent_at=now,
                    created_at=now,
                )
            )
            try:
                delivery = self._deliveries.create(
                    Delivery(
                        id=None,
                        event_id=event_id,
                        channel=channel,
                        status=DELIVERY_STATUS_SENT,
                        attempt_count=1,
                        template_id=template_id,
                        notification_id=notification.id,
                        metadata={"payload": payload},
                        created_at=now,
                        sent_at=now,
                    )
                )
            except PersistenceError as exc:
                raise PartialDeliveryError(str(exc), notification) from exc
            return DeliveryRecord(channel=channel, notification=notification, delivery=delivery)

        delivery = self._deliveries.create(
            Delivery(
                id=None,
                event_id=event_id,
                channel=channel,
                status=DELIVERY_STATUS_QUEUED,
                attempt_count=0,
                template_id=template_id,
                notification_id=None,
                metadata={"payload": payload},
                created_at=now,
                sent_at=None,
            )
        )
        return DeliveryRecord(channel=channel, delivery=delivery)


__all__ = ["DeliveryRecord", "DeliveryRecorder"]
