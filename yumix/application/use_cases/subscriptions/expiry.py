"""Warn users whose subscription is about to expire."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from yumix.config import get_settings
from yumix.domain.entities import Audience, Subscription, UserNotificationType
from yumix.infrastructure.repositories import SubscriptionRepository
from yumix.utils import now_in_app_timezone

from ..notifications.lifecycle import create_notification

logger = logging.getLogger(__name__)


@dataclass
class ExpiryCheckResult:
    """Outcome of one expiry check run."""

    found: int = 0
    notified: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)

    def as_dict(self) -> dict[str, int]:
        return {
            "found": self.found,
            "notified": len(self.notified),
            "failed": len(self.failed),
        }


def _warn(session: Session, subscription: Subscription) -> bool:
    notification = create_notification(
        session,
        Audience.USER,
        recipient_id=subscription.user_id,
        title="Subscription Expiring Soon",
        message=(
            f"Your {subscription.plan_type} subscription will expire in a few days. "
            "Renew now to avoid interruption!"
        ),
        type=UserNotificationType.SUBSCRIPTION.value,
        data={
            "subscriptionId": subscription.id,
            "planType": subscription.plan_type,
            "expiryDate": subscription.expiry_date.isoformat(),
        },
    )
    return notification is not None


def notify_expiring_subscriptions(
    session: Session,
    *,
    now: datetime | None = None,
    window_days: int | None = None,
) -> ExpiryCheckResult:
    """Send one warning per subscription expiring within the window.

    ``notification_sent`` is set only after the notification was stored, so a
    subscription whose warning could not be created is retried on the next run.
    """

    if window_days is None:
        window_days = get_settings().subscription_expiry_window_days
    start = now or now_in_app_timezone()
    end = start + timedelta(days=window_days)
    result = ExpiryCheckResult()

    logger.info("Running scheduled job: check expiring subscriptions")
    repository = SubscriptionRepository(session)
    try:
        expiring = repository.list_expiring_unnotified(start=start, end=end)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Error checking for expiring subscriptions")
        return result

    result.found = len(expiring)
    logger.info("Found %d subscriptions expiring soon", result.found)

    for subscription in expiring:
        if not _warn(session, subscription):
            logger.error(
                "Expiration notification not created for subscription %s; will retry",
                subscription.id,
            )
            result.failed.append(subscription.id)
            continue
        try:
            repository.mark_notification_sent(subscription.id)
        except (SQLAlchemyError, ValueError):
            session.rollback()
            logger.exception(
                "Error flagging subscription %s as notified", subscription.id
            )
            result.failed.append(subscription.id)
            continue
        result.notified.append(subscription.id)
        logger.info("Expiration notification sent for subscription %s", subscription.id)

    logger.info("Expiring subscriptions check completed")
    return result


__all__ = ["ExpiryCheckResult", "notify_expiring_subscriptions"]
