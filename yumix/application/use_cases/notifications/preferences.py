"""Read and update the notification switches of an administrator."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from yumix.domain.entities import DEFAULT_ADMIN_PREFERENCES
from yumix.domain.errors import RecipientNotFoundError, StoreError
from yumix.infrastructure.repositories import AdminRepository

logger = logging.getLogger(__name__)


def get_admin_preferences(session: Session, admin_id: int) -> dict[str, bool]:
    """Return the admin's preferences with unset keys filled from the defaults."""

    try:
        admin = AdminRepository(session).get(admin_id)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Error loading preferences for admin %s", admin_id)
        raise StoreError("Failed to fetch preferences") from exc
    if admin is None:
        raise RecipientNotFoundError("Admin not found")
    return {**DEFAULT_ADMIN_PREFERENCES, **(admin.preferences or {})}


def update_admin_preferences(
    session: Session, admin_id: int, changes: Mapping[str, bool]
) -> dict[str, bool]:
    """Merge ``changes`` into the stored preferences and return the result.

    Only known preference keys are accepted; the caller validates the payload.
    """

    repository = AdminRepository(session)
    try:
        admin = repository.get(admin_id)
        if admin is None:
            raise RecipientNotFoundError("Admin not found")
        merged = {**DEFAULT_ADMIN_PREFERENCES, **(admin.preferences or {}), **changes}
        updated = repository.update_preferences(admin_id, merged)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Error updating preferences for admin %s", admin_id)
        raise StoreError("Failed to update preferences") from exc
    if updated is None:
        raise RecipientNotFoundError("Admin not found")

    logger.info("Updated notification preferences for admin %s", admin_id)
    return dict(updated.preferences or {})


__all__ = ["get_admin_preferences", "update_admin_preferences"]
