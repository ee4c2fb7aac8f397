"""Shared fixtures for the dispatch engine tests."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_TIMEZONE", "UTC")

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from notification_engine.config import Settings, reset_settings_cache
from notification_engine.infrastructure.database import initialize_database
from notification_engine.infrastructure.models import (
    NotificationOptInModel,
    NotificationTemplateModel,
)


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Re-read configuration for every test and again afterwards."""

    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture()
def engine():
    """Return an isolated in-memory SQLite engine with every table created."""

    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    initialize_database(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def settings() -> Settings:
    return Settings(database_url="sqlite://")


@pytest.fixture()
def add_template(session):
    """Insert a template row and return its id."""

    def _add(**values) -> int:
        model = NotificationTemplateModel(**values)
        session.add(model)
        session.commit()
        return model.id

    return _add


@pytest.fixture()
def add_preference(session):
    """Insert an opt-in row for a user."""

    def _add(user_id: str, **values) -> None:
        session.add(NotificationOptInModel(user_id=user_id, **values))
        session.commit()

    return _add
