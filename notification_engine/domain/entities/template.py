"""Domain entity representing a channel-specific content template."""

from __future__ import annotations

from dataclasses import dataclass

from .channel import normalize_channel


@dataclass(frozen=True)
class NotificationTemplate:
    """Title/body patterns registered for an event key on one channel.

    ``channel`` is ``None`` when the stored channel name is not recognised;
    such templates never match a resolved channel.
    """

    id: int | None
    event_key: str | None
    channel: str | None
    title_template: str | None = None
    body_template: str | None = None
    default_enabled: bool = True


def build_template(
    *,
    id: int | None,
    event_key: str | None,
    template_key: str | None,
    channel: str | None,
    title_template: str | None,
    body_template: str | None,
    subject: str | None = None,
    body: str | None = None,
    default_enabled: bool | None = True,
) -> NotificationTemplate:
    """Fold the legacy column aliases of a template row into one entity.

    ``template_key`` stands in for ``event_key``; ``subject`` and ``body`` stand
    in for the title and body patterns when the newer columns are empty.
    """

    return NotificationTemplate(
        id=id,
        event_key=event_key or template_key,
        channel=normalize_channel(channel),
        title_template=title_template if title_template is not None else subject,
        body_template=body_template if body_template is not None else body,
        default_enabled=True if default_enabled is None else bool(default_enabled),
    )


def find_template_for_channel(
    templates: list[NotificationTemplate] | tuple[NotificationTemplate, ...],
    channel: str,
) -> NotificationTemplate | None:
    """Return the first template registered for ``channel``."""

    for template in templates:
        if template.channel == channel:
            return template
    return None


__all__ = ["NotificationTemplate", "build_template", "find_template_for_channel"]
