"""Helpers that turn domain events into notifications.

Callers invoke these after the triggering action has succeeded; none of them
raise, so a notification problem never blocks the action itself.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from yumix.domain.entities import (
    AdminNotificationType,
    Audience,
    Notification,
    Subscription,
    User,
    UserNotificationType,
)
from yumix.infrastructure.repositories import AdminRepository
from yumix.utils import now_in_app_timezone

from .lifecycle import create_notification

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return now_in_app_timezone().isoformat()


def _active_admin_ids(session: Session) -> list[int]:
    try:
        return [admin.id for admin in AdminRepository(session).list_active()]
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Error loading active admins for notification fan-out")
        return []


def _notify_admins(
    session: Session,
    *,
    title: str,
    message: str,
    type: AdminNotificationType,
    data: dict,
) -> list[Notification]:
    created = []
    for admin_id in _active_admin_ids(session):
        notification = create_notification(
            session,
            Audience.ADMIN,
            recipient_id=admin_id,
            title=title,
            message=message,
            type=type.value,
            data=data,
        )
        if notification is not None:
            created.append(notification)
    return created


def notify_user_registered(
    session: Session, *, user: User, signup_method: str = "Email"
) -> list[Notification]:
    """Welcome the new user and tell every active admin about the signup."""

    created = []
    welcome = create_notification(
        session,
        Audience.USER,
        recipient_id=user.id,
        title="Welcome to YuMix!",
        message="Thank you for joining. Explore recipes, save favorites and more!",
        type=UserNotificationType.ACCOUNT.value,
        data={"timestamp": _timestamp()},
    )
    if welcome is not None:
        created.append(welcome)

    created.extend(
        _notify_admins(
            session,
            title="New User Registration",
            message=f"New user registered: {user.name} ({user.email})",
            type=AdminNotificationType.USER,
            data={
                "userId": user.id,
                "name": user.name,
                "email": user.email,
                "signupMethod": signup_method,
                "timestamp": _timestamp(),
            },
        )
    )
    return created


def notify_subscription_purchased(
    session: Session, *, user: User, subscription: Subscription
) -> list[Notification]:
    """Confirm the purchase to the user and inform the active admins."""

    created = []
    confirmation = create_notification(
        session,
        Audience.USER,
        recipient_id=user.id,
        title="Subscription Activated",
        message=f"Your {subscription.plan_type} subscription is now active. Enjoy!",
        type=UserNotificationType.SUBSCRIPTION.value,
        data={
            "subscriptionId": subscription.id,
            "planType": subscription.plan_type,
            "expiryDate": subscription.expiry_date.isoformat(),
        },
    )
    if confirmation is not None:
        created.append(confirmation)

    created.extend(
        _notify_admins(
            session,
            title="New Subscription",
            message=(
                f"{user.name} subscribed to {subscription.plan_type} plan "
                f"for ₹{subscription.amount:g}"
            ),
            type=AdminNotificationType.SUBSCRIPTION,
            data={
                "userId": user.id,
                "userName": user.name,
                "userEmail": user.email,
                "planType": subscription.plan_type,
                "amount": subscription.amount,
                "subscriptionId": subscription.id,
                "timestamp": _timestamp(),
            },
        )
    )
    return created


def notify_payment_refunded(
    session: Session,
    *,
    admin_id: int,
    user: User,
    amount: float,
    plan_type: str,
    payment_id: int | str,
    refund_id: str | None = None,
    reason: str | None = None,
) -> list[Notification]:
    """Record a processed refund for the acting admin and the refunded user."""

    created = []
    admin_notification = create_notification(
        session,
        Audience.ADMIN,
        recipient_id=admin_id,
        title="Refund Processed",
        message=f"Refund processed: ₹{amount:g} to {user.name}",
        type=AdminNotificationType.PAYMENT.value,
        data={
            "userId": user.id,
            "amount": amount,
            "paymentId": payment_id,
            "refundId": refund_id,
            "reason": reason,
            "status": "refunded",
            "timestamp": _timestamp(),
        },
    )
    if admin_notification is not None:
        created.append(admin_notification)

    user_notification = create_notification(
        session,
        Audience.USER,
        recipient_id=user.id,
        title="Refund Processed Successfully",
        message=(
            f"Your payment of ₹{amount:g} for {plan_type} subscription has been "
            "refunded. The amount should be credited to your original payment "
            "method within 5-7 business days."
        ),
        type=UserNotificationType.PAYMENT.value,
        data={
            "paymentId": payment_id,
            "refundId": refund_id,
            "amount": amount,
            "timestamp": _timestamp(),
        },
    )
    if user_notification is not None:
        created.append(user_notification)
    return created


def notify_report_generated(
    session: Session, *, admin_id: int, report_type: str
) -> Notification | None:
    """Tell the requesting admin that a report finished generating."""

    label = report_type.capitalize()
    return create_notification(
        session,
        Audience.ADMIN,
        recipient_id=admin_id,
        title=f"{label} Report Generated",
        message=f"{label} report has been generated",
        type=AdminNotificationType.REPORT.value,
        data={"reportType": report_type, "timestamp": _timestamp()},
    )


def notify_ai_recipe_created(
    session: Session, *, user_id: int, recipe_name: str
) -> Notification | None:
    """Tell the user that their generated recipe is ready."""

    return create_notification(
        session,
        Audience.USER,
        recipient_id=user_id,
        title="AI Recipe Created",
        message=f'Your recipe "{recipe_name}" has been generated successfully!',
        type=UserNotificationType.RECIPE.value,
        data={"recipeName": recipe_name, "timestamp": _timestamp()},
    )


__all__ = [
    "notify_ai_recipe_created",
    "notify_payment_refunded",
    "notify_report_generated",
    "notify_subscription_purchased",
    "notify_user_registered",
]
