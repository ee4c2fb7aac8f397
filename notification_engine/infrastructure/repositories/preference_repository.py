"""Read access to per-user notification preferences."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from notification_engine.domain.entities import (
    ChannelPreferences,
    PreferenceRow,
    normalize_preference_rows,
)
from notification_engine.domain.errors import PersistenceError
from notification_engine.infrastructure.models import NotificationOptInModel


class NotificationPreferenceRepository:
    """Load opt-in rows and normalise them into :class:`ChannelPreferences`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_rows(self, user_id: str) -> list[PreferenceRow]:
        try:
            models = (
                self.session.query(NotificationOptInModel)
                .filter(NotificationOptInModel.user_id == user_id)
                .order_by(NotificationOptInModel.id.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to load notification preferences: {exc}") from exc
        return [self._to_row(model) for model in models]

    def load_preferences(self, user_id: str) -> ChannelPreferences:
        return normalize_preference_rows(self.list_rows(user_id))

    @staticmethod
    def _to_row(model: NotificationOptInModel) -> PreferenceRow:
        channels = model.channels if isinstance(model.channels, list) else []
        return PreferenceRow(
            user_id=model.user_id,
            channel=model.channel,
            enabled=model.enabled,
            email_opt_in=model.email_opt_in,
            wa_opt_in=model.wa_opt_in,
            channels=tuple(str(value) for value in channels),
        )


__all__ = ["NotificationPreferenceRepository"]
