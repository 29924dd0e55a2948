"""Global retention sweep for expired notifications."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from yumix.domain.entities import Audience
from yumix.infrastructure.repositories import NotificationRepository

from ..notifications.lifecycle import retention_cutoff

logger = logging.getLogger(__name__)


def sweep_expired_notifications(
    session: Session, *, now: datetime | None = None
) -> dict[str, int | None]:
    """Delete notifications older than the retention threshold in every audience.

    Returns the number of deleted rows per audience; an audience whose sweep
    failed reports ``None`` and does not stop the others.
    """

    cutoff = retention_cutoff(now)
    logger.info("Running notification retention sweep (cutoff %s)", cutoff.isoformat())

    deleted: dict[str, int | None] = {}
    for audience in Audience:
        try:
            deleted[audience.value] = NotificationRepository(
                session, audience
            ).delete_older_than(cutoff)
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Error sweeping expired %s notifications", audience.value)
            deleted[audience.value] = None

    logger.info(
        "Notification cleanup completed: %s",
        ", ".join(f"{name}={count}" for name, count in deleted.items()),
    )
    return deleted


__all__ = ["sweep_expired_notifications"]
