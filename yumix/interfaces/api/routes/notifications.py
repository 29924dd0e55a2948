"""Polling endpoints for the admin and user notification inboxes."""

from __future__ import annotations

from typing import Callable

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from yumix.application.use_cases.notifications import (
    clear_notifications as clear_notifications_uc,
    delete_notification as delete_notification_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_as_read as mark_all_notifications_as_read_uc,
    mark_notification_as_read as mark_notification_as_read_uc,
    not_found_message,
)
from yumix.domain.entities import Audience, Notification
from yumix.domain.errors import NotificationNotFoundError, StoreError
from yumix.infrastructure.database import get_db
from yumix.interfaces.api.dependencies import get_current_admin, get_current_user
from yumix.interfaces.api.responses import failure_response
from yumix.interfaces.api.schemas import (
    ClearNotificationsResponse,
    FailureResponse,
    MessageResponse,
    NotificationListData,
    NotificationListResponse,
    NotificationRead,
    NotificationResponse,
)

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": FailureResponse}}
_SERVER_ERROR = {status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": FailureResponse}}


def _flag(value: str | None) -> bool:
    return value == "true"


def _parse_id(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        recipient_id=notification.recipient_id,
        title=notification.title,
        message=notification.message,
        type=notification.type,
        read=notification.read,
        data=notification.data or {},
        created_at=notification.created_at,
        updated_at=notification.updated_at,
    )


def build_notifications_router(
    audience: Audience, current_recipient: Callable
) -> APIRouter:
    """Return the router serving ``/notifications/{audience}`` for one audience."""

    router = APIRouter(prefix=f"/notifications/{audience.value}", tags=["notifications"])

    @router.get(
        "",
        response_model=NotificationListResponse,
        responses=_SERVER_ERROR,
        name=f"list_{audience.value}_notifications",
    )
    def list_notifications(
        count_only: str | None = Query(None, alias="countOnly"),
        db: Session = Depends(get_db),
        recipient=Depends(current_recipient),
    ):
        """Return the unread count and, unless ``countOnly``, the newest notifications."""

        try:
            result = list_notifications_uc(
                db, audience, recipient.id, count_only=_flag(count_only)
            )
        except StoreError as exc:
            return failure_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), error=exc.__cause__)

        fields: dict = {"unread_count": result.unread_count}
        if result.notifications is not None:
            fields["notifications"] = [
                _notification_to_schema(notification) for notification in result.notifications
            ]
        data = NotificationListData(**fields)
        # exclude_unset keeps ``notifications`` out of count-only responses.
        return JSONResponse(
            content={
                "success": True,
                "data": data.model_dump(mode="json", by_alias=True, exclude_unset=True),
            }
        )

    @router.put(
        "/mark-all-read",
        response_model=MessageResponse,
        responses=_SERVER_ERROR,
        name=f"mark_all_{audience.value}_notifications_read",
    )
    def mark_all_as_read(
        db: Session = Depends(get_db),
        recipient=Depends(current_recipient),
    ):
        """Mark every unread notification of the caller as read."""

        try:
            modified = mark_all_notifications_as_read_uc(db, audience, recipient.id)
        except StoreError as exc:
            return failure_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), error=exc.__cause__)
        return MessageResponse(message=f"Marked {modified} notifications as read")

    @router.delete(
        "/clear",
        response_model=ClearNotificationsResponse,
        responses=_SERVER_ERROR,
        name=f"clear_{audience.value}_notifications",
    )
    def clear_notifications(
        all_param: str | None = Query(None, alias="all"),
        db: Session = Depends(get_db),
        recipient=Depends(current_recipient),
    ):
        """Delete the caller's expired notifications, or all of them with ``all=true``."""

        clear_all = _flag(all_param)
        try:
            deleted = clear_notifications_uc(db, audience, recipient.id, clear_all=clear_all)
        except StoreError as exc:
            return failure_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), error=exc.__cause__)
        label = "" if clear_all else "old "
        return ClearNotificationsResponse(
            message=f"Cleared {deleted} {label}notifications", count=deleted
        )

    @router.put(
        "/{notification_id}/read",
        response_model=NotificationResponse,
        responses={**_NOT_FOUND, **_SERVER_ERROR},
        name=f"mark_{audience.value}_notification_read",
    )
    def mark_as_read(
        notification_id: str,
        db: Session = Depends(get_db),
        recipient=Depends(current_recipient),
    ):
        """Mark one of the caller's notifications as read."""

        parsed_id = _parse_id(notification_id)
        if parsed_id is None:
            return failure_response(status.HTTP_404_NOT_FOUND, not_found_message(audience))
        try:
            notification = mark_notification_as_read_uc(db, audience, recipient.id, parsed_id)
        except NotificationNotFoundError as exc:
            return failure_response(status.HTTP_404_NOT_FOUND, str(exc))
        except StoreError as exc:
            return failure_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), error=exc.__cause__)
        return NotificationResponse(data=_notification_to_schema(notification))

    @router.delete(
        "/{notification_id}",
        response_model=MessageResponse,
        responses={**_NOT_FOUND, **_SERVER_ERROR},
        name=f"delete_{audience.value}_notification",
    )
    def delete_notification(
        notification_id: str,
        db: Session = Depends(get_db),
        recipient=Depends(current_recipient),
    ):
        """Delete one of the caller's notifications."""

        parsed_id = _parse_id(notification_id)
        if parsed_id is None:
            return failure_response(status.HTTP_404_NOT_FOUND, not_found_message(audience))
        try:
            delete_notification_uc(db, audience, recipient.id, parsed_id)
        except NotificationNotFoundError as exc:
            return failure_response(status.HTTP_404_NOT_FOUND, str(exc))
        except StoreError as exc:
            return failure_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), error=exc.__cause__)
        return MessageResponse(message="Notification deleted successfully")

    return router


admin_router = build_notifications_router(Audience.ADMIN, get_current_admin)
user_router = build_notifications_router(Audience.USER, get_current_user)


__all__ = ["admin_router", "build_notifications_router", "user_router"]
