"""Fixed-copy notification publishing kept for older callers.

Unlike :func:`enqueue_notification` this path is not template driven, writes a
single in-app notification and records the matching event on a best-effort
basis without enforcing idempotency.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from notification_engine.domain.catalog import DEFAULT_EVENT_CATALOG, EventCatalog
from notification_engine.domain.entities import Notification
from notification_engine.domain.errors import NotificationError
from notification_engine.infrastructure.repositories import (
    NotificationEventRepository,
    NotificationRepository,
)
from notification_engine.utils import now_in_app_timezone

from .rendering import RenderedContent

logger = logging.getLogger(__name__)

_MODULE_LABELS = {
    "listening": "Listening",
    "reading": "Reading",
    "writing": "Writing",
    "speaking": "Speaking",
}


def _module_label(module: Any) -> str:
    if not module:
        return "IELTS"
    return _MODULE_LABELS.get(module, str(module))


def _submitted_url(payload: Mapping[str, Any]) -> str | None:
    attempt_id = payload.get("attemptId")
    module = payload.get("module")
    if attempt_id and module:
        return f"/mock/{module}/submitted?attempt={attempt_id}"
    return None


def render_legacy_notification(
    event_type: str,
    payload: Mapping[str, Any] | None = None,
    *,
    catalog: EventCatalog = DEFAULT_EVENT_CATALOG,
) -> tuple[RenderedContent, str | None]:
    """Return the hard-coded copy and link for ``event_type``."""

    payload = payload or {}
    module = _module_label(payload.get("module"))

    if event_type == catalog.get("MOCK_SUBMITTED"):
        return (
            RenderedContent(
                title=f"{module} mock submitted",
                body=(
                    f"Your {module.lower()} mock has been submitted. "
                    "We'll notify you when the band score is ready."
                ),
            ),
            _submitted_url(payload),
        )
    if event_type == catalog.get("MOCK_RESULT_READY"):
        return (
            RenderedContent(
                title=f"{module} mock results ready",
                body=(
                    f"Your {module.lower()} mock results are ready to review. "
                    "Tap to see detailed feedback."
                ),
            ),
            _submitted_url(payload),
        )
    if event_type == catalog.get("STREAK_WARNING"):
        streak_days = payload.get("streakDays") or 0
        return (
            RenderedContent(
                title="Study streak at risk",
                body=(
                    f"You have {streak_days} days left to keep your streak alive. "
                    "Hop back into a mock or lesson."
                ),
            ),
            "/dashboard",
        )
    if event_type == catalog.get("PLAN_UPGRADED"):
        return (
            RenderedContent(
                title="Plan upgraded",
                body="Thanks for upgrading! Premium mock analytics and AI reviews are now unlocked.",
            ),
            "/pricing",
        )
    if event_type == catalog.get("NEW_MOCK_UNLOCKED"):
        mock_id = payload.get("mockId")
        raw_module = payload.get("module")
        url = (
            f"/mock/{raw_module}/overview?mockId={mock_id}"
            if raw_module and mock_id
            else None
        )
        return (
            RenderedContent(
                title=f"{module} mock unlocked",
                body="A new full-length mock is ready. Try it today to keep your streak alive.",
            ),
            url,
        )
    return (
        RenderedContent(title="Notification", body="You have a new notification."),
        None,
    )


def publish_notification_event(
    session: Session,
    *,
    event_type: str,
    user_id: str,
    payload: Mapping[str, Any] | None = None,
    catalog: EventCatalog = DEFAULT_EVENT_CATALOG,
) -> Notification:
    """Persist a fixed-copy notification and log the event best-effort.

    Failures writing the notification propagate as
    :class:`~notification_engine.domain.errors.PersistenceError`; failures
    recording the event are logged and ignored.
    """

    event_payload = dict(payload or {})
    rendered, url = render_legacy_notification(event_type, event_payload, catalog=catalog)
    now = now_in_app_timezone()

    saved = NotificationRepository(session).create(
        Notification(
            id=None,
            user_id=user_id,
            type=event_type,
            title=rendered.title,
            body=rendered.body,
            url=url,
            meta=event_payload,
            read=False,
            sent_at=now,
            created_at=now,
        )
    )

    attempt_id = event_payload.get("attemptId")
    try:
        NotificationEventRepository(session).append(
            user_id=user_id,
            event_key=event_type,
            payload=event_payload,
            idempotency_key=str(attempt_id) if attempt_id else None,
        )
    except NotificationError as exc:
        logger.warning(
            "Notification %s saved but its '%s' event was not recorded: %s",
            saved.id,
            event_type,
            exc,
        )

    return saved


__all__ = ["render_legacy_notification", "publish_notification_event"]
