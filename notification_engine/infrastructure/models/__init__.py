"""ORM models used by the application infrastructure."""

from .delivery import NotificationDeliveryModel
from .event import IDEMPOTENCY_CONSTRAINT_NAME, NotificationEventModel
from .notification import NotificationModel
from .opt_in import NotificationOptInModel
from .template import NotificationTemplateModel

__all__ = [
    "NotificationDeliveryModel",
    "NotificationEventModel",
    "IDEMPOTENCY_CONSTRAINT_NAME",
    "NotificationModel",
    "NotificationOptInModel",
    "NotificationTemplateModel",
]
