"""Repository implementations for infrastructure layer."""

from .admin_repository import AdminRepository
from .notification_repository import NotificationRepository
from .recipe_repository import RecipeHistoryRepository, RecipeRepository
from .subscription_repository import SubscriptionRepository
from .user_repository import UserRepository

__all__ = [
    "AdminRepository",
    "NotificationRepository",
    "RecipeHistoryRepository",
    "RecipeRepository",
    "SubscriptionRepository",
    "UserRepository",
]
