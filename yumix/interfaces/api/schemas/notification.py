"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class NotificationRead(CamelModel):
    """Representation of a notification delivered to the client."""

    id: int
    recipient_id: int
    title: str | None = None
    message: str
    type: str
    read: bool
    data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime | None = None


class NotificationListData(CamelModel):
    """List payload; ``notifications`` is left unset on the count-only path."""

    notifications: list[NotificationRead] | None = None
    unread_count: int


class NotificationListResponse(BaseModel):
    success: bool = True
    data: NotificationListData


class NotificationResponse(BaseModel):
    success: bool = True
    data: NotificationRead


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ClearNotificationsResponse(MessageResponse):
    count: int


class FailureResponse(BaseModel):
    """Body returned by every failed notification operation."""

    success: bool = False
    message: str
    error: str | None = None


__all__ = [
    "ClearNotificationsResponse",
    "FailureResponse",
    "MessageResponse",
    "NotificationListData",
    "NotificationListResponse",
    "NotificationRead",
    "NotificationResponse",
]
