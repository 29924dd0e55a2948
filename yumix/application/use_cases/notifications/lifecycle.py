"""Create, list, read and remove notifications for one recipient.

Notifications are only persisted; clients discover them by polling
:func:`list_notifications`. Store failures are rolled back, logged and
re-raised as :class:`~yumix.domain.errors.StoreError` so the HTTP layer can
answer with a uniform failure body. :func:`create_notification` is the
exception: it is fire-and-forget for the calling workflow and reports every
problem by returning ``None``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from yumix.config import get_settings
from yumix.domain.entities import Admin, Audience, Notification, NotificationList, User
from yumix.domain.entities.notification_types import (
    parse_notification_type,
    preference_key_for,
)
from yumix.domain.errors import NotificationNotFoundError, StoreError
from yumix.infrastructure.repositories import (
    AdminRepository,
    NotificationRepository,
    UserRepository,
)
from yumix.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

# Audiences whose list requests also purge the caller's expired notifications.
INLINE_SWEEP_AUDIENCES = frozenset({Audience.ADMIN})


def retention_cutoff(now: datetime | None = None) -> datetime:
    """Return the instant before which notifications are considered expired."""

    days = get_settings().notification_retention_days
    return (now or now_in_app_timezone()) - timedelta(days=days)


def not_found_message(audience: Audience) -> str:
    if audience is Audience.ADMIN:
        return "Admin notification not found"
    return "Notification not found"


def _store_failure(session: Session, message: str) -> StoreError:
    session.rollback()
    logger.exception(message)
    return StoreError(message)


def _load_recipient(session: Session, audience: Audience, recipient_id: int) -> Admin | User | None:
    if audience is Audience.ADMIN:
        return AdminRepository(session).get(recipient_id)
    return UserRepository(session).get(recipient_id)


def _is_suppressed(audience: Audience, recipient: Admin | User, notification_type) -> bool:
    preferences = recipient.preferences
    if not preferences:
        return False
    key = preference_key_for(audience, notification_type)
    return key is not None and preferences.get(key) is False


def create_notification(
    session: Session,
    audience: Audience,
    *,
    recipient_id: int | None,
    message: str,
    title: str | None = None,
    type: str = "info",
    data: dict[str, Any] | None = None,
) -> Notification | None:
    """Persist an unread notification for ``recipient_id``.

    Returns ``None`` without creating anything when the recipient id is missing,
    the recipient does not exist, ``type`` is not valid for the audience, the
    recipient switched that kind of notification off, or the store fails.
    """

    if not recipient_id:
        logger.error("Recipient id is required for %s notification", audience.value)
        return None

    try:
        notification_type = parse_notification_type(audience, type)
    except ValueError:
        logger.error(
            "Unknown %s notification type %r for recipient %s",
            audience.value,
            type,
            recipient_id,
        )
        return None

    try:
        recipient = _load_recipient(session, audience, recipient_id)
        if recipient is None:
            logger.error(
                "%s not found for notification: %s", audience.value.capitalize(), recipient_id
            )
            return None

        if _is_suppressed(audience, recipient, notification_type):
            logger.info(
                "Notification of type %s not sent - disabled in preferences for %s %s",
                notification_type.value,
                audience.value,
                recipient_id,
            )
            return None

        saved = NotificationRepository(session, audience).create(
            Notification(
                id=None,
                recipient_id=recipient_id,
                title=title,
                message=message,
                type=notification_type.value,
                data=dict(data or {}),
            )
        )
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Error creating %s notification", audience.value)
        return None

    logger.info(
        'Created %s notification %s of type "%s" for recipient %s',
        audience.value,
        saved.id,
        saved.type,
        recipient_id,
    )
    return saved


def list_notifications(
    session: Session,
    audience: Audience,
    recipient_id: int,
    *,
    count_only: bool = False,
) -> NotificationList:
    """Return the unread count and, unless ``count_only``, the newest notifications."""

    settings = get_settings()
    repository = NotificationRepository(session, audience)
    try:
        if audience in INLINE_SWEEP_AUDIENCES:
            purged = repository.delete_for_recipient(
                recipient_id, older_than=retention_cutoff()
            )
            if purged:
                logger.debug(
                    "Purged %d expired notifications for %s %s",
                    purged,
                    audience.value,
                    recipient_id,
                )

        unread_count = repository.count_unread(recipient_id)
        if count_only:
            return NotificationList(unread_count=unread_count)

        notifications = list(
            repository.list_recent(recipient_id, limit=settings.notification_list_limit)
        )
    except SQLAlchemyError as exc:
        raise _store_failure(session, "Failed to fetch notifications") from exc

    logger.debug(
        "Found %d notifications, %d unread for %s %s",
        len(notifications),
        unread_count,
        audience.value,
        recipient_id,
    )
    return NotificationList(unread_count=unread_count, notifications=notifications)


def mark_notification_as_read(
    session: Session, audience: Audience, recipient_id: int, notification_id: int
) -> Notification:
    """Flag one of the recipient's notifications as read and return it."""

    try:
        notification = NotificationRepository(session, audience).mark_as_read(
            recipient_id, notification_id
        )
    except SQLAlchemyError as exc:
        raise _store_failure(session, "Failed to mark notification as read") from exc

    if notification is None:
        raise NotificationNotFoundError(not_found_message(audience))
    return notification


def mark_all_notifications_as_read(
    session: Session, audience: Audience, recipient_id: int
) -> int:
    """Flag every unread notification of the recipient; return how many changed."""

    try:
        return NotificationRepository(session, audience).mark_all_as_read(recipient_id)
    except SQLAlchemyError as exc:
        raise _store_failure(session, "Failed to mark all notifications as read") from exc


def delete_notification(
    session: Session, audience: Audience, recipient_id: int, notification_id: int
) -> None:
    """Remove one of the recipient's notifications."""

    try:
        deleted = NotificationRepository(session, audience).delete(
            recipient_id, notification_id
        )
    except SQLAlchemyError as exc:
        raise _store_failure(session, "Failed to delete notification") from exc

    if not deleted:
        raise NotificationNotFoundError(not_found_message(audience))


def clear_notifications(
    session: Session,
    audience: Audience,
    recipient_id: int,
    *,
    clear_all: bool = False,
) -> int:
    """Delete the recipient's expired notifications, or all of them with ``clear_all``."""

    older_than = None if clear_all else retention_cutoff()
    try:
        deleted = NotificationRepository(session, audience).delete_for_recipient(
            recipient_id, older_than=older_than
        )
    except SQLAlchemyError as exc:
        raise _store_failure(session, "Failed to clear notifications") from exc

    logger.info(
        "Cleared %d %snotifications for %s %s",
        deleted,
        "" if clear_all else "old ",
        audience.value,
        recipient_id,
    )
    return deleted


__all__ = [
    "INLINE_SWEEP_AUDIENCES",
    "clear_notifications",
    "create_notification",
    "delete_notification",
    "list_notifications",
    "mark_all_notifications_as_read",
    "mark_notification_as_read",
    "not_found_message",
    "retention_cutoff",
]
