"""SQLAlchemy model for notification content templates."""

from sqlalchemy import Boolean, Column, Integer, String, Text
from sqlalchemy.sql import expression

from notification_engine.infrastructure.database import Base


class NotificationTemplateModel(Base):
    """Database representation of a channel-specific template.

    ``template_key``, ``subject`` and ``body`` are the legacy column names still
    populated by older seed data.
    """

    __tablename__ = "notification_templates"

    id = Column(Integer, primary_key=True, index=True)
    event_key = Column(String(100), nullable=True, index=True)
    template_key = Column(String(100), nullable=True, index=True)
    channel = Column(String(20), nullable=False)
    title_template = Column(Text, nullable=True)
    body_template = Column(Text, nullable=True)
    subject = Column(Text, nullable=True)
    body = Column(Text, nullable=True)
    default_enabled = Column(
        Boolean,
        nullable=False,
        default=True,
        server_default=expression.true(),
    )


__all__ = ["NotificationTemplateModel"]
