"""ORM models used by the application infrastructure."""

from .admin import AdminModel
from .notification import (
    AdminNotificationModel,
    NotificationColumnsMixin,
    UserNotificationModel,
)
from .recipe import RecipeHistoryModel, RecipeModel
from .subscription import SubscriptionModel
from .user import UserModel

__all__ = [
    "AdminModel",
    "AdminNotificationModel",
    "NotificationColumnsMixin",
    "RecipeHistoryModel",
    "RecipeModel",
    "SubscriptionModel",
    "UserModel",
    "UserNotificationModel",
]
