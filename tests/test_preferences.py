"""Tests for the normalisation of stored opt-in rows."""

from __future__ import annotations

from notification_engine.domain.entities import (
    ChannelPreferences,
    PreferenceRow,
    normalize_preference_rows,
)
from notification_engine.infrastructure.repositories import (
    NotificationPreferenceRepository,
)

DEFAULTS = {"in_app": True, "email": True, "whatsapp": False, "push": False}


def test_no_rows_returns_defaults():
    assert normalize_preference_rows([]).as_dict() == DEFAULTS


def test_channel_rows_overwrite_defaults():
    rows = [
        PreferenceRow(user_id="u1", channel="email", enabled=False),
        PreferenceRow(user_id="u1", channel="push", enabled=True),
    ]

    preferences = normalize_preference_rows(rows)

    assert preferences.email is False
    assert preferences.push is True
    assert preferences.in_app is True


def test_channel_row_without_enabled_flag_is_ignored():
    preferences = normalize_preference_rows(
        [PreferenceRow(user_id="u1", channel="email", enabled=None, email_opt_in=False)]
    )

    assert preferences.email is True


def test_sms_is_a_synonym_for_whatsapp():
    preferences = normalize_preference_rows(
        [PreferenceRow(user_id="u1", channel=" SMS ", enabled=True)]
    )

    assert preferences.whatsapp is True


def test_legacy_boolean_flags():
    preferences = normalize_preference_rows(
        [PreferenceRow(user_id="u1", email_opt_in=False, wa_opt_in=True)]
    )

    assert preferences.as_dict() == {
        "in_app": True,
        "email": False,
        "whatsapp": True,
        "push": False,
    }


def test_channel_array_only_enables():
    """Array entries enable channels, never touch in_app, and drop unknown names."""

    rows = [
        PreferenceRow(user_id="u1", channel="in_app", enabled=False),
        PreferenceRow(user_id="u1", channels=("push", "sms", "in_app", "pigeon")),
    ]

    preferences = normalize_preference_rows(rows)

    assert preferences.push is True
    assert preferences.whatsapp is True
    assert preferences.in_app is False
    assert preferences.email is True


def test_unknown_channel_row_falls_through_to_legacy_fields():
    preferences = normalize_preference_rows(
        [PreferenceRow(user_id="u1", channel="fax", enabled=True, wa_opt_in=True)]
    )

    assert preferences.whatsapp is True


def test_is_enabled_reads_the_channel_flag():
    preferences = ChannelPreferences(push=True)

    assert preferences.is_enabled("push") is True
    assert preferences.is_enabled("whatsapp") is False


def test_repository_loads_rows_for_user_only(session, add_preference):
    add_preference("u1", channel="whatsapp", enabled=True)
    add_preference("u1", email_opt_in=False, channels=["push"])
    add_preference("u2", channel="email", enabled=True)

    preferences = NotificationPreferenceRepository(session).load_preferences("u1")

    assert preferences.as_dict() == {
        "in_app": True,
        "email": False,
        "whatsapp": True,
        "push": True,
    }


def test_repository_defaults_for_unknown_user(session):
    preferences = NotificationPreferenceRepository(session).load_preferences("nobody")

    assert preferences.as_dict() == DEFAULTS
