"""Endpoints that raise notification events."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from notification_engine.application.use_cases.notifications import enqueue_notification
from notification_engine.domain.catalog import EventCatalog
from notification_engine.domain.entities import (
    DispatchDuplicate,
    DispatchFailed,
    Notification,
)
from notification_engine.domain.errors import ValidationError
from notification_engine.infrastructure.database import get_db
from notification_engine.interfaces.api.dependencies import get_event_catalog
from notification_engine.interfaces.api.schemas import (
    EventCatalogEntry,
    NotificationDuplicateResponse,
    NotificationEnqueueRequest,
    NotificationEnqueueResponse,
    NotificationRead,
)
from notification_engine.utils import now_in_app_timezone

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        user_id=notification.user_id,
        type=notification.type,
        title=notification.title,
        body=notification.body,
        message=notification.message,
        url=notification.url,
        channel=notification.channel,
        read=notification.read,
        read_at=notification.read_at,
        created_at=notification.created_at,
    )


def _idempotency_key(request: NotificationEnqueueRequest) -> str:
    """Return the caller key, or one that allows a single dispatch per user and day."""

    supplied = (request.idempotency_key or "").strip()
    if supplied:
        return supplied
    today = now_in_app_timezone().date().isoformat()
    return f"{request.event_key.strip()}:{request.user_id.strip()}:{today}"


@router.post(
    "/events",
    response_model=NotificationEnqueueResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_409_CONFLICT: {"model": NotificationDuplicateResponse}},
)
def enqueue_notification_event(
    request: NotificationEnqueueRequest,
    db: Session = Depends(get_db),
    catalog: EventCatalog = Depends(get_event_catalog),
):
    """Record an event and fan it out to the user's channels."""

    outcome = enqueue_notification(
        db,
        user_id=request.user_id,
        event_key=request.event_key,
        payload=request.payload,
        channels=request.channels,
        channel_override=request.channel_override,
        idempotency_key=_idempotency_key(request),
        catalog=catalog,
    )

    if isinstance(outcome, DispatchDuplicate):
        body = NotificationDuplicateResponse(existing_event_id=outcome.existing_event_id)
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=body.model_dump())

    if isinstance(outcome, DispatchFailed):
        if isinstance(outcome.cause, ValidationError):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(outcome.cause)
            )
        logger.error(
            "Notification dispatch failed for event %s on channel %s",
            outcome.event_id,
            outcome.failed_channel,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to dispatch notification",
        )

    result = outcome.unwrap()
    return NotificationEnqueueResponse(
        event_id=result.event_id,
        notifications=[_notification_to_schema(item) for item in result.notifications],
        skipped_channels=result.skipped_channels,
    )


@router.get("/catalog", response_model=list[EventCatalogEntry])
def list_event_catalog(
    catalog: EventCatalog = Depends(get_event_catalog),
) -> list[EventCatalogEntry]:
    """Return every registered event key."""

    return [EventCatalogEntry(name=name, key=key) for name, key in catalog.items()]
