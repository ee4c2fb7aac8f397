"""SQLAlchemy model for persisted in-app notifications."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.sql import expression

from notification_engine.infrastructure.database import Base
from notification_engine.utils import now_in_app_timezone


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    type = Column(String(100), nullable=False)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    url = Column(String(500), nullable=True)
    channel = Column(String(20), nullable=False, default="in_app")
    meta = Column(JSON, nullable=False, default=dict)
    template_id = Column(
        Integer,
        ForeignKey("notification_templates.id", ondelete="SET NULL"),
        nullable=True,
    )
    read = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    read_at = Column(DateTime(timezone=True), nullable=True)
    sent_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )


__all__ = ["NotificationModel"]
