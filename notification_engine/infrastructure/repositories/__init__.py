"""Repository implementations backed by SQLAlchemy."""

from .delivery_repository import NotificationDeliveryRepository
from .event_repository import NotificationEventRepository
from .notification_repository import NotificationRepository
from .preference_repository import NotificationPreferenceRepository
from .template_repository import NotificationTemplateRepository

__all__ = [
    "NotificationDeliveryRepository",
    "NotificationEventRepository",
    "NotificationRepository",
    "NotificationPreferenceRepository",
    "NotificationTemplateRepository",
]
