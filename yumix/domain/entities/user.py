"""Domain entity representing a registered user."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    password: str
    is_subscribed: bool = False
    preferences: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["User"]
