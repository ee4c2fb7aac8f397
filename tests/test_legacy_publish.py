"""Tests for the fixed-copy publishing path."""

from __future__ import annotations

import pytest

from notification_engine.application.use_cases.notifications import (
    publish_notification_event,
    render_legacy_notification,
)
from notification_engine.domain.errors import PersistenceError
from notification_engine.infrastructure.models import NotificationEventModel, NotificationModel
from notification_engine.infrastructure.repositories import NotificationEventRepository


@pytest.mark.parametrize(
    ("event_type", "payload", "title", "url"),
    [
        (
            "mock_submitted",
            {"module": "listening", "attemptId": "a1"},
            "Listening mock submitted",
            "/mock/listening/submitted?attempt=a1",
        ),
        (
            "mock_result_ready",
            {"module": "reading"},
            "Reading mock results ready",
            None,
        ),
        ("streak_warning", {"streakDays": 2}, "Study streak at risk", "/dashboard"),
        ("plan_upgraded", None, "Plan upgraded", "/pricing"),
        (
            "new_mock_unlocked",
            {"module": "writing", "mockId": "m9"},
            "Writing mock unlocked",
            "/mock/writing/overview?mockId=m9",
        ),
        ("something_else", {}, "Notification", None),
    ],
)
def test_render_legacy_notification(event_type, payload, title, url):
    rendered, link = render_legacy_notification(event_type, payload)

    assert rendered.title == title
    assert link == url


def test_module_label_defaults_to_ielts():
    rendered, _ = render_legacy_notification("mock_submitted", {})

    assert rendered.title == "IELTS mock submitted"
    assert rendered.body.startswith("Your ielts mock has been submitted.")


def test_streak_warning_mentions_days():
    rendered, _ = render_legacy_notification("streak_warning", {"streakDays": 3})

    assert "You have 3 days left" in rendered.body


def test_publish_writes_notification_and_event(session):
    notification = publish_notification_event(
        session,
        event_type="mock_submitted",
        user_id="u1",
        payload={"module": "speaking", "attemptId": "att-1"},
    )

    assert notification.id is not None
    assert notification.title == "Speaking mock submitted"
    assert notification.url == "/mock/speaking/submitted?attempt=att-1"
    assert notification.read is False
    event = NotificationEventRepository(session).get_by_idempotency_key("att-1")
    assert event is not None
    assert event.event_key == "mock_submitted"


def test_publish_swallows_event_failures(session):
    """Republishing the same attempt keeps the notification but not a second event."""

    payload = {"module": "listening", "attemptId": "att-2"}
    publish_notification_event(session, event_type="mock_submitted", user_id="u1", payload=payload)
    publish_notification_event(session, event_type="mock_submitted", user_id="u1", payload=payload)

    assert session.query(NotificationModel).count() == 2
    assert session.query(NotificationEventModel).count() == 1


def test_publish_propagates_notification_failures(session, engine):
    NotificationModel.__table__.drop(bind=engine)

    with pytest.raises(PersistenceError):
        publish_notification_event(session, event_type="plan_upgraded", user_id="u1")

    assert session.query(NotificationEventModel).count() == 0
