"""Recurring jobs and the scheduler that runs them."""

from __future__ import annotations

import logging
from typing import Any, Callable

from sqlalchemy.orm import Session

from yumix.config import Settings, get_settings
from yumix.infrastructure import database
from yumix.infrastructure.scheduler import Scheduler

from .use_cases.retention import sweep_expired_notifications, sweep_stale_recipes
from .use_cases.subscriptions import notify_expiring_subscriptions

logger = logging.getLogger(__name__)

SUBSCRIPTION_EXPIRY_CHECK = "subscription_expiry_check"
RECIPE_CLEANUP = "recipe_cleanup"
NOTIFICATION_CLEANUP = "notification_cleanup"


def _in_session(work: Callable[[Session], Any]) -> Any:
    session = database.SessionLocal()
    try:
        return work(session)
    finally:
        session.close()


def run_subscription_expiry_check() -> dict[str, int]:
    """Warn users whose subscription expires within the configured window."""

    return _in_session(lambda session: notify_expiring_subscriptions(session).as_dict())


def run_recipe_cleanup() -> dict[str, object]:
    """Remove external recipes outside the keep-set."""

    return _in_session(lambda session: sweep_stale_recipes(session).as_dict())


def run_notification_cleanup() -> dict[str, int | None]:
    """Delete notifications older than the retention threshold."""

    return _in_session(sweep_expired_notifications)


def build_scheduler(settings: Settings | None = None) -> Scheduler:
    """Return a scheduler with the three daily jobs registered."""

    settings = settings or get_settings()
    scheduler = Scheduler()
    scheduler.register(
        SUBSCRIPTION_EXPIRY_CHECK,
        run_subscription_expiry_check,
        at=settings.subscription_expiry_check_at,
    )
    scheduler.register(RECIPE_CLEANUP, run_recipe_cleanup, at=settings.recipe_cleanup_at)
    scheduler.register(
        NOTIFICATION_CLEANUP,
        run_notification_cleanup,
        at=settings.notification_cleanup_at,
    )
    logger.debug("Registered %d scheduled jobs", len(scheduler.jobs))
    return scheduler


__all__ = [
    "NOTIFICATION_CLEANUP",
    "RECIPE_CLEANUP",
    "SUBSCRIPTION_EXPIRY_CHECK",
    "build_scheduler",
    "run_notification_cleanup",
    "run_recipe_cleanup",
    "run_subscription_expiry_check",
]
