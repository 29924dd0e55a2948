"""Aggregate application use cases."""

from .notifications import create_notification, list_notifications
from .retention import sweep_expired_notifications, sweep_stale_recipes
from .subscriptions import notify_expiring_subscriptions

__all__ = [
    "create_notification",
    "list_notifications",
    "notify_expiring_subscriptions",
    "sweep_expired_notifications",
    "sweep_stale_recipes",
]
