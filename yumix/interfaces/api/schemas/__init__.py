from .admin import (
    AdminPreferencesResponse,
    AdminPreferencesUpdate,
    JobRunResponse,
    ScheduledJobListResponse,
    ScheduledJobRead,
)
from .notification import (
    ClearNotificationsResponse,
    FailureResponse,
    MessageResponse,
    NotificationListData,
    NotificationListResponse,
    NotificationRead,
    NotificationResponse,
)

__all__ = [
    "AdminPreferencesResponse",
    "AdminPreferencesUpdate",
    "ClearNotificationsResponse",
    "FailureResponse",
    "JobRunResponse",
    "MessageResponse",
    "NotificationListData",
    "NotificationListResponse",
    "NotificationRead",
    "NotificationResponse",
    "ScheduledJobListResponse",
    "ScheduledJobRead",
]
