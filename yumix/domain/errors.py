"""Exceptions raised by the application layer and translated at the HTTP edge."""


class NotificationNotFoundError(LookupError):
    """No notification with the given id belongs to the requesting recipient."""


class RecipientNotFoundError(LookupError):
    """The admin or user referenced by an operation does not exist."""


class StoreError(RuntimeError):
    """A persistence operation failed; the underlying error is chained."""


__all__ = ["NotificationNotFoundError", "RecipientNotFoundError", "StoreError"]
