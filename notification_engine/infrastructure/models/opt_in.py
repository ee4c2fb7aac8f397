"""SQLAlchemy model for per-user notification opt-in rows."""

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String

from notification_engine.infrastructure.database import Base
from notification_engine.utils import now_in_app_timezone


class NotificationOptInModel(Base):
    """Database representation of a user's channel preference.

    Rows either set ``channel``/``enabled`` or use the older ``email_opt_in``,
    ``wa_opt_in`` and ``channels`` columns.
    """

    __tablename__ = "notifications_opt_in"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    channel = Column(String(20), nullable=True)
    enabled = Column(Boolean, nullable=True)
    email_opt_in = Column(Boolean, nullable=True)
    wa_opt_in = Column(Boolean, nullable=True)
    channels = Column(JSON, nullable=True)
    updated_at = Column(
        DateTime(timezone=True), nullable=True, onupdate=now_in_app_timezone
    )


__all__ = ["NotificationOptInModel"]
