"""Subscription related scheduled work."""

from .expiry import ExpiryCheckResult, notify_expiring_subscriptions

__all__ = ["ExpiryCheckResult", "notify_expiring_subscriptions"]
