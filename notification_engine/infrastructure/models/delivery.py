"""SQLAlchemy model for per-channel delivery audit rows."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from notification_engine.infrastructure.database import Base
from notification_engine.utils import now_in_app_timezone


class NotificationDeliveryModel(Base):
    """Database representation of one channel hand-off for an event."""

    __tablename__ = "notification_deliveries"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(
        Integer,
        ForeignKey("notification_events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    template_id = Column(
        Integer,
        ForeignKey("notification_templates.id", ondelete="SET NULL"),
        nullable=True,
    )
    channel = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False)
    attempt_count = Column(Integer, nullable=False, default=0)
    # ``metadata`` is reserved on declarative classes.
    delivery_metadata = Column("metadata", JSON, nullable=False, default=dict)
    notification_id = Column(
        Integer,
        ForeignKey("notifications.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    sent_at = Column(DateTime(timezone=True), nullable=True)
    error = Column(Text, nullable=True)

    event = relationship("NotificationEventModel", lazy="select")
    notification = relationship("NotificationModel", lazy="select")


__all__ = ["NotificationDeliveryModel"]
