"""Behavioural tests for the dispatch orchestrator."""

from __future__ import annotations

import pytest

from notification_engine.application.use_cases.notifications import enqueue_notification
from notification_engine.domain.catalog import EventCatalog
from notification_engine.domain.entities import (
    DispatchDuplicate,
    DispatchFailed,
    DispatchSucceeded,
)
from notification_engine.domain.errors import (
    DuplicateEventError,
    PartialDeliveryError,
    PersistenceError,
    ValidationError,
)
from notification_engine.infrastructure.models import (
    NotificationDeliveryModel,
    NotificationEventModel,
    NotificationModel,
)
from notification_engine.infrastructure.repositories import (
    NotificationDeliveryRepository,
    NotificationRepository,
)


def _count(session, model) -> int:
    return session.query(model).count()


def _deliveries_by_channel(session, event_id):
    deliveries = NotificationDeliveryRepository(session).list_for_event(event_id)
    return {delivery.channel: delivery for delivery in deliveries}


def test_default_scenario_creates_in_app_notification_only(session, settings):
    """No preferences, channels or templates: only in_app with fallback copy."""

    outcome = enqueue_notification(
        session, user_id="u1", event_key="streak_warning", settings=settings
    )

    assert isinstance(outcome, DispatchSucceeded)
    result = outcome.unwrap()
    assert result.skipped_channels == []
    assert [n.title for n in result.notifications] == ["Streak Warning"]
    assert result.notifications[0].body == "You have a new notification"
    assert result.notifications[0].message == "You have a new notification"
    assert result.notifications[0].type == "streak_warning"

    deliveries = _deliveries_by_channel(session, result.event_id)
    assert list(deliveries) == ["in_app"]
    in_app = deliveries["in_app"]
    assert in_app.status == "sent"
    assert in_app.attempt_count == 1
    assert in_app.notification_id == result.notifications[0].id
    assert in_app.sent_at is not None
    assert _count(session, NotificationModel) == 1


def test_same_idempotency_key_records_one_event(session, settings):
    first = enqueue_notification(
        session,
        user_id="u1",
        event_key="mock_submitted",
        idempotency_key="attempt-42",
        settings=settings,
    )
    second = enqueue_notification(
        session,
        user_id="u1",
        event_key="mock_submitted",
        idempotency_key="attempt-42",
        settings=settings,
    )

    assert isinstance(first, DispatchSucceeded)
    assert isinstance(second, DispatchDuplicate)
    assert second.existing_event_id == first.event_id
    assert _count(session, NotificationEventModel) == 1
    assert _count(session, NotificationModel) == 1
    assert _count(session, NotificationDeliveryModel) == 1

    with pytest.raises(DuplicateEventError) as excinfo:
        second.unwrap()
    assert excinfo.value.existing_event_id == first.event_id


def test_disabled_channel_is_skipped(session, settings, add_preference):
    add_preference("u1", channel="whatsapp", enabled=False)

    outcome = enqueue_notification(
        session,
        user_id="u1",
        event_key="mock_result_ready",
        channels=["whatsapp"],
        settings=settings,
    )

    result = outcome.unwrap()
    assert result.skipped_channels == ["whatsapp"]
    assert len(result.notifications) == 1
    assert list(_deliveries_by_channel(session, result.event_id)) == ["in_app"]


def test_external_channels_are_queued(session, settings):
    outcome = enqueue_notification(
        session,
        user_id="u1",
        event_key="plan_upgraded",
        channels=["email"],
        settings=settings,
    )

    result = outcome.unwrap()
    deliveries = _deliveries_by_channel(session, result.event_id)
    assert set(deliveries) == {"email", "in_app"}
    email = deliveries["email"]
    assert email.status == "queued"
    assert email.attempt_count == 0
    assert email.notification_id is None
    assert email.sent_at is None
    assert email.metadata == {"payload": {}}
    assert len(result.notifications) == 1


def test_default_preferences_skip_push(session, settings):
    outcome = enqueue_notification(
        session,
        user_id="u1",
        event_key="new_mock_unlocked",
        channel_override="push",
        settings=settings,
    )

    result = outcome.unwrap()
    assert result.skipped_channels == ["push"]
    assert [delivery.channel for delivery in result.deliveries] == ["in_app"]


def test_templates_drive_channels_and_content(session, settings, add_template):
    in_app_id = add_template(
        event_key="mock_result_ready",
        channel="in_app",
        title_template="Results for {{ module }}",
        body_template="Hello {{user.name}}, band {{result.band}}",
    )
    email_id = add_template(
        template_key="mock_result_ready",
        channel="email",
        subject="Your band: {{result.band}}",
        body="See {{url}}",
    )
    add_template(event_key="other_event", channel="push", title_template="Nope")

    outcome = enqueue_notification(
        session,
        user_id="u1",
        event_key="mock_result_ready",
        payload={
            "module": "Listening",
            "user": {"name": "Ana"},
            "result": {"band": 6.5},
            "url": "/mock/listening/submitted?attempt=a1",
        },
        settings=settings,
    )

    result = outcome.unwrap()
    notification = result.notifications[0]
    assert notification.title == "Results for Listening"
    assert notification.body == "Hello Ana, band 6.5"
    assert notification.url == "/mock/listening/submitted?attempt=a1"
    assert notification.template_id == in_app_id

    deliveries = _deliveries_by_channel(session, result.event_id)
    assert set(deliveries) == {"in_app", "email"}
    assert deliveries["email"].template_id == email_id
    assert deliveries["email"].status == "queued"


def test_payload_body_used_when_template_missing(session, settings):
    outcome = enqueue_notification(
        session,
        user_id="u1",
        event_key="nudge",
        payload={"title": "X", "message": "Y"},
        settings=settings,
    )

    assert outcome.unwrap().notifications[0].body == "Y"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"user_id": "", "event_key": "mock_submitted"},
        {"user_id": "u1", "event_key": "   "},
        {"user_id": "u1", "event_key": "mock_submitted", "channels": ["fax"]},
        {"user_id": "u1", "event_key": "mock_submitted", "channel_override": "pigeon"},
    ],
)
def test_invalid_input_is_rejected_before_any_write(session, settings, kwargs):
    outcome = enqueue_notification(session, settings=settings, **kwargs)

    assert isinstance(outcome, DispatchFailed)
    assert isinstance(outcome.cause, ValidationError)
    assert outcome.event_id is None
    assert _count(session, NotificationEventModel) == 0
    with pytest.raises(ValidationError):
        outcome.unwrap()


def test_sms_is_accepted_as_whatsapp(session, settings, add_preference):
    add_preference("u1", wa_opt_in=True)

    outcome = enqueue_notification(
        session,
        user_id="u1",
        event_key="mock_submitted",
        channels=["SMS"],
        settings=settings,
    )

    result = outcome.unwrap()
    assert {delivery.channel for delivery in result.deliveries} == {"whatsapp", "in_app"}


def test_unknown_catalog_key_is_dispatched(session, settings, caplog):
    catalog = EventCatalog({"ONLY": "only_event"})

    with caplog.at_level("WARNING"):
        outcome = enqueue_notification(
            session,
            user_id="u1",
            event_key="something_new",
            catalog=catalog,
            settings=settings,
        )

    assert isinstance(outcome, DispatchSucceeded)
    assert "something_new" in caplog.text


def test_channel_failure_stops_dispatch_and_reports_committed_rows(
    session, settings, monkeypatch
):
    original_create = NotificationDeliveryRepository.create

    def _failing_create(self, delivery):
        if delivery.channel == "email":
            raise PersistenceError("email delivery insert failed")
        return original_create(self, delivery)

    monkeypatch.setattr(NotificationDeliveryRepository, "create", _failing_create)

    outcome = enqueue_notification(
        session,
        user_id="u1",
        event_key="mock_submitted",
        channels=["in_app", "email", "push"],
        settings=settings,
    )

    assert isinstance(outcome, DispatchFailed)
    assert isinstance(outcome.cause, PersistenceError)
    assert outcome.failed_channel == "email"
    assert outcome.event_id is not None
    assert len(outcome.notifications) == 1
    assert outcome.skipped_channels == []
    assert _count(session, NotificationEventModel) == 1
    assert _count(session, NotificationDeliveryModel) == 1
    assert len(NotificationRepository(session).list_for_user("u1")) == 1


def test_in_app_delivery_failure_still_reports_stored_notification(
    session, settings, monkeypatch
):
    def _failing_create(self, delivery):
        raise PersistenceError("delivery insert failed")

    monkeypatch.setattr(NotificationDeliveryRepository, "create", _failing_create)

    outcome = enqueue_notification(
        session,
        user_id="u1",
        event_key="mock_submitted",
        channels=["in_app", "email"],
        settings=settings,
    )

    assert isinstance(outcome, DispatchFailed)
    assert isinstance(outcome.cause, PartialDeliveryError)
    assert outcome.failed_channel == "in_app"
    assert len(outcome.notifications) == 1
    stored = NotificationRepository(session).list_for_user("u1")
    assert [item.id for item in stored] == [outcome.notifications[0].id]
    assert _count(session, NotificationDeliveryModel) == 0
    with pytest.raises(PersistenceError):
        outcome.unwrap()


def test_event_write_failure_returns_failed_outcome(session, settings, engine):
    NotificationEventModel.__table__.drop(bind=engine)

    outcome = enqueue_notification(
        session, user_id="u1", event_key="mock_submitted", settings=settings
    )

    assert isinstance(outcome, DispatchFailed)
    assert isinstance(outcome.cause, PersistenceError)
    assert outcome.event_id is None
    with pytest.raises(PersistenceError):
        outcome.unwrap()


def test_custom_fallbacks_come_from_settings(session):
    from notification_engine.config import Settings

    custom = Settings(
        database_url="sqlite://",
        notification_fallback_message="Open the app",
    )

    outcome = enqueue_notification(
        session, user_id="u1", event_key="streak_warning", settings=custom
    )

    assert outcome.unwrap().notifications[0].body == "Open the app"
