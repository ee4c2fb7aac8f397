"""Dispatch a raised domain event to every applicable channel."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy.orm import Session

from notification_engine.config import Settings, get_settings
from notification_engine.domain.catalog import DEFAULT_EVENT_CATALOG, EventCatalog
from notification_engine.domain.entities import (
    Delivery,
    DispatchDuplicate,
    DispatchFailed,
    DispatchOutcome,
    DispatchResult,
    DispatchSucceeded,
    Notification,
    find_template_for_channel,
)
from notification_engine.domain.errors import (
    DuplicateEventError,
    PartialDeliveryError,
    PersistenceError,
    ValidationError,
)
from notification_engine.infrastructure.repositories import (
    NotificationEventRepository,
    NotificationPreferenceRepository,
    NotificationTemplateRepository,
)

from .channels import resolve_channels
from .deliveries import DeliveryRecorder
from .rendering import render_content
from .validators import (
    ensure_event_key,
    ensure_known_channel,
    ensure_known_channels,
    ensure_user_id,
    normalize_idempotency_key,
)

logger = logging.getLogger(__name__)


def enqueue_notification(
    session: Session,
    *,
    user_id: str,
    event_key: str,
    payload: Mapping[str, Any] | None = None,
    channels: Iterable[str] | None = None,
    channel_override: str | None = None,
    idempotency_key: str | None = None,
    catalog: EventCatalog = DEFAULT_EVENT_CATALOG,
    settings: Settings | None = None,
) -> DispatchOutcome:
    """Record ``event_key`` for ``user_id`` and fan it out to its channels.

    The event row is committed first; a repeated ``idempotency_key`` yields a
    :class:`DispatchDuplicate` without touching any other table. Channels are
    then processed one by one, each insert committing on its own. The first
    failing channel stops the loop and the returned :class:`DispatchFailed`
    lists what had already been written.
    """

    try:
        user_id = ensure_user_id(user_id)
        event_key = ensure_event_key(event_key)
        override = ensure_known_channel(channel_override) if channel_override else None
        requested = ensure_known_channels(channels)
        idempotency_key = normalize_idempotency_key(idempotency_key)
    except ValidationError as exc:
        logger.info("Rejected notification dispatch: %s", exc)
        return DispatchFailed(cause=exc)

    if not catalog.is_known(event_key):
        logger.warning("Dispatching unregistered notification event '%s'", event_key)

    settings = settings or get_settings()
    event_payload = dict(payload or {})

    try:
        event_id = NotificationEventRepository(session).append(
            user_id=user_id,
            event_key=event_key,
            payload=event_payload,
            idempotency_key=idempotency_key,
        )
    except DuplicateEventError as exc:
        return DispatchDuplicate(existing_event_id=exc.existing_event_id)
    except PersistenceError as exc:
        logger.exception("Could not record notification event '%s'", event_key)
        return DispatchFailed(cause=exc)

    try:
        templates = NotificationTemplateRepository(session).list_for_event(event_key)
        preferences = NotificationPreferenceRepository(session).load_preferences(user_id)
    except PersistenceError as exc:
        logger.exception("Could not load dispatch inputs for event %s", event_id)
        return DispatchFailed(cause=exc, event_id=event_id)

    resolved = resolve_channels(override, requested, templates)
    recorder = DeliveryRecorder(session)

    notifications: list[Notification] = []
    deliveries: list[Delivery] = []
    skipped: list[str] = []

    for channel in resolved:
        template = find_template_for_channel(templates, channel)
        rendered = render_content(
            template,
            event_payload,
            event_key,
            brand_name=settings.notification_brand_name,
            fallback_message=settings.notification_fallback_message,
        )
        try:
            record = recorder.record(
                channel,
                event_id=event_id,
                user_id=user_id,
                event_key=event_key,
                template=template,
                rendered=rendered,
                payload=event_payload,
                preferences=preferences,
            )
        except PersistenceError as exc:
            if isinstance(exc, PartialDeliveryError):
                notifications.append(exc.notification)
            logger.exception(
                "Delivery on %s failed for event %s; remaining channels aborted",
                channel,
                event_id,
            )
            return DispatchFailed(
                cause=exc,
                event_id=event_id,
                notifications=notifications,
                skipped_channels=skipped,
                failed_channel=channel,
            )

        if record.skipped:
            skipped.append(channel)
            continue
        if record.notification is not None:
            notifications.append(record.notification)
        deliveries.append(record.delivery)

    logger.info(
        "Dispatched event %s (%s) to %s; skipped %s",
        event_id,
        event_key,
        [delivery.channel for delivery in deliveries],
        skipped,
    )
    return DispatchSucceeded(
        result=DispatchResult(
            event_id=event_id,
            notifications=notifications,
            skipped_channels=skipped,
            deliveries=deliveries,
        )
    )


__all__ = ["enqueue_notification"]
