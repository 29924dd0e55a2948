"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from yumix.domain.entities import Audience, Notification
from yumix.infrastructure.models import AdminNotificationModel, UserNotificationModel
from yumix.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_naive_datetime,
)

_MODELS = {
    Audience.ADMIN: AdminNotificationModel,
    Audience.USER: UserNotificationModel,
}


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects of one audience.

    Every query that touches existing rows filters on ``recipient_id`` so a
    recipient can never reach another recipient's notifications.
    """

    def __init__(self, session: Session, audience: Audience) -> None:
        self.session = session
        self.audience = audience
        self.model = _MODELS[audience]

    def create(self, notification: Notification) -> Notification:
        model = self.model()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_recent(self, recipient_id: int, *, limit: int | None = 50) -> Sequence[Notification]:
        query = (
            self._owned_by(recipient_id)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, recipient_id: int) -> int:
        return self._owned_by(recipient_id).filter(self.model.read.is_(False)).count()

    def mark_as_read(self, recipient_id: int, notification_id: int) -> Notification | None:
        model = self._owned_by(recipient_id).filter(self.model.id == notification_id).first()
        if model is None:
            return None
        if not model.read:
            model.read = True
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def mark_all_as_read(self, recipient_id: int) -> int:
        modified = (
            self._owned_by(recipient_id)
            .filter(self.model.read.is_(False))
            .update(
                {
                    self.model.read: True,
                    self.model.updated_at: now_in_app_naive_datetime(),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return modified

    def delete(self, recipient_id: int, notification_id: int) -> bool:
        model = self._owned_by(recipient_id).filter(self.model.id == notification_id).first()
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def delete_for_recipient(
        self, recipient_id: int, *, older_than: datetime | None = None
    ) -> int:
        """Delete the recipient's notifications, optionally only those created before ``older_than``."""

        query = self._owned_by(recipient_id)
        if older_than is not None:
            query = query.filter(
                self.model.created_at < ensure_app_naive_datetime(older_than)
            )
        deleted = query.delete(synchronize_session=False)
        self.session.commit()
        return deleted

    def delete_older_than(self, cutoff: datetime) -> int:
        """Delete every notification of this audience created before ``cutoff``."""

        deleted = (
            self.session.query(self.model)
            .filter(self.model.created_at < ensure_app_naive_datetime(cutoff))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    def _owned_by(self, recipient_id: int):
        return self.session.query(self.model).filter(
            self.model.recipient_id == recipient_id
        )

    @staticmethod
    def _apply_entity_to_model(model, notification: Notification) -> None:
        created_at = (
            ensure_app_naive_datetime(notification.created_at)
            or now_in_app_naive_datetime()
        )
        model.recipient_id = notification.recipient_id
        model.title = notification.title
        model.message = notification.message
        model.type = notification.type
        model.read = False
        model.data = dict(notification.data or {})
        model.created_at = created_at
        model.updated_at = created_at

    @staticmethod
    def _to_entity(model) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            title=model.title,
            message=model.message,
            type=model.type,
            read=bool(model.read),
            data=dict(model.data or {}),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationRepository"]
