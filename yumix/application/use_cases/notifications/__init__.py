"""Notification lifecycle operations and domain event helpers."""

from .events import (
    notify_ai_recipe_created,
    notify_payment_refunded,
    notify_report_generated,
    notify_subscription_purchased,
    notify_user_registered,
)
from .lifecycle import (
    clear_notifications,
    create_notification,
    delete_notification,
    list_notifications,
    mark_all_notifications_as_read,
    mark_notification_as_read,
    not_found_message,
    retention_cutoff,
)
from .preferences import get_admin_preferences, update_admin_preferences

__all__ = [
    "clear_notifications",
    "create_notification",
    "delete_notification",
    "get_admin_preferences",
    "list_notifications",
    "mark_all_notifications_as_read",
    "mark_notification_as_read",
    "not_found_message",
    "notify_ai_recipe_created",
    "notify_payment_refunded",
    "notify_report_generated",
    "notify_subscription_purchased",
    "notify_user_registered",
    "retention_cutoff",
    "update_admin_preferences",
]
