"""Public helpers for dispatching domain notifications."""

from .channels import resolve_channels
from .deliveries import DeliveryRecord, DeliveryRecorder
from .enqueue import enqueue_notification
from .legacy import publish_notification_event, render_legacy_notification
from .rendering import (
    RenderedContent,
    fallback_body,
    fallback_title,
    render_content,
    render_template,
)

__all__ = [
    "resolve_channels",
    "DeliveryRecord",
    "DeliveryRecorder",
    "enqueue_notification",
    "publish_notification_event",
    "render_legacy_notification",
    "RenderedContent",
    "fallback_body",
    "fallback_title",
    "render_content",
    "render_template",
]
