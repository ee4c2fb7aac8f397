"""Read access to notification content templates."""

from __future__ import annotations

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from notification_engine.domain.entities import NotificationTemplate, build_template
from notification_engine.domain.errors import PersistenceError
from notification_engine.infrastructure.models import NotificationTemplateModel


class NotificationTemplateRepository:
    """Load the templates registered for an event key."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_event(self, event_key: str) -> list[NotificationTemplate]:
        """Return templates whose ``event_key`` or legacy ``template_key`` match.

        An empty list is a valid answer: every channel then renders fallback
        content.
        """

        try:
            models = (
                self.session.query(NotificationTemplateModel)
                .filter(
                    or_(
                        NotificationTemplateModel.event_key == event_key,
                        NotificationTemplateModel.template_key == event_key,
                    )
                )
                .order_by(NotificationTemplateModel.id.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to load notification templates: {exc}") from exc
        return [self._to_entity(model) for model in models]

    @staticmethod
    def _to_entity(model: NotificationTemplateModel) -> NotificationTemplate:
        return build_template(
            id=model.id,
            event_key=model.event_key,
            template_key=model.template_key,
            channel=model.channel,
            title_template=model.title_template,
            body_template=model.body_template,
            subject=model.subject,
            body=model.body,
            default_enabled=model.default_enabled,
        )


__all__ = ["NotificationTemplateRepository"]
