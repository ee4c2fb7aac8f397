"""SQLAlchemy model for the append-only notification event ledger."""

from sqlalchemy import JSON, Column, DateTime, Integer, String, UniqueConstraint

from notification_engine.infrastructure.database import Base
from notification_engine.utils import now_in_app_timezone

IDEMPOTENCY_CONSTRAINT_NAME = "uq_notification_events_idempotency_key"


class NotificationEventModel(Base):
    """Database representation of a raised notification event."""

    __tablename__ = "notification_events"
    __table_args__ = (
        UniqueConstraint("idempotency_key", name=IDEMPOTENCY_CONSTRAINT_NAME),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    event_key = Column(String(100), nullable=False, index=True)
    payload = Column(JSON, nullable=False, default=dict)
    idempotency_key = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )


__all__ = ["NotificationEventModel", "IDEMPOTENCY_CONSTRAINT_NAME"]
