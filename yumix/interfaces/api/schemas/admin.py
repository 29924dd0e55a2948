"""Schemas for admin settings and scheduled job endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AdminPreferencesUpdate(BaseModel):
    """Partial update of the admin notification switches."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )

    user_signups: bool | None = None
    payment_alerts: bool | None = None
    new_subscriptions: bool | None = None
    report_generation: bool | None = None
    login_alerts: bool | None = None

    def changes(self) -> dict[str, bool]:
        """Return only the provided switches keyed by their stored names."""

        return self.model_dump(by_alias=True, exclude_none=True)


class AdminPreferencesResponse(BaseModel):
    success: bool = True
    message: str | None = None
    data: dict[str, bool]


class ScheduledJobRead(BaseModel):
    name: str
    at: str
    description: str
    next_run: str | None = None
    last_run: dict[str, Any] | None = None


class ScheduledJobListResponse(BaseModel):
    success: bool = True
    running: bool
    data: list[ScheduledJobRead] = Field(default_factory=list)


class JobRunResponse(BaseModel):
    success: bool
    data: dict[str, Any]


__all__ = [
    "AdminPreferencesResponse",
    "AdminPreferencesUpdate",
    "JobRunResponse",
    "ScheduledJobListResponse",
    "ScheduledJobRead",
]
