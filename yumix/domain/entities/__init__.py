"""Domain entities exposed by the application."""

from .admin import ADMIN_STATUS_ACTIVE, ADMIN_STATUS_INACTIVE, Admin
from .notification import Notification, NotificationList
from .notification_types import (
    AdminNotificationType,
    AdminPreference,
    Audience,
    DEFAULT_ADMIN_PREFERENCES,
    UserNotificationType,
)
from .recipe import EXTERNAL_SOURCE_TYPES, Recipe, RecipeHistoryEntry
from .subscription import Subscription
from .user import User

__all__ = [
    "ADMIN_STATUS_ACTIVE",
    "ADMIN_STATUS_INACTIVE",
    "Admin",
    "AdminNotificationType",
    "AdminPreference",
    "Audience",
    "DEFAULT_ADMIN_PREFERENCES",
    "EXTERNAL_SOURCE_TYPES",
    "Notification",
    "NotificationList",
    "Recipe",
    "RecipeHistoryEntry",
    "Subscription",
    "User",
    "UserNotificationType",
]
