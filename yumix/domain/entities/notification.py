"""Domain entity representing a notification addressed to an admin or a user."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Notification:
    """Message persisted for a single recipient and discovered by polling."""

    id: int | None
    recipient_id: int
    message: str
    type: str
    title: str | None = None
    read: bool = False
    data: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class NotificationList:
    """Result of a list request; ``notifications`` is ``None`` on the count-only path."""

    unread_count: int
    notifications: list[Notification] | None = None


__all__ = ["Notification", "NotificationList"]
