"""Notification audiences, their closed type sets and preference gating keys."""

from __future__ import annotations

from enum import Enum


class Audience(str, Enum):
    """Recipient population that owns a notification collection."""

    ADMIN = "admin"
    USER = "user"


class AdminNotificationType(str, Enum):
    USER = "user"
    PAYMENT = "payment"
    ALERT = "alert"
    SUBSCRIPTION = "subscription"
    REPORT = "report"
    REFERRAL = "referral"
    INFO = "info"
    TEST = "test"


class UserNotificationType(str, Enum):
    RECIPE = "recipe"
    PAYMENT = "payment"
    SUBSCRIPTION = "subscription"
    ACCOUNT = "account"
    FEATURE = "feature"
    INFO = "info"
    TEST = "test"


class AdminPreference(str, Enum):
    """Boolean switches stored in ``admin.preferences``."""

    USER_SIGNUPS = "userSignups"
    PAYMENT_ALERTS = "paymentAlerts"
    NEW_SUBSCRIPTIONS = "newSubscriptions"
    REPORT_GENERATION = "reportGeneration"
    LOGIN_ALERTS = "loginAlerts"


DEFAULT_ADMIN_PREFERENCES: dict[str, bool] = {
    preference.value: True for preference in AdminPreference
}

# ``None`` means the type is always delivered. Every member of the type enum
# must be listed; ``_check_exhaustive`` enforces it on import.
ADMIN_PREFERENCE_KEYS: dict[AdminNotificationType, AdminPreference | None] = {
    AdminNotificationType.USER: AdminPreference.USER_SIGNUPS,
    AdminNotificationType.PAYMENT: AdminPreference.PAYMENT_ALERTS,
    AdminNotificationType.SUBSCRIPTION: AdminPreference.NEW_SUBSCRIPTIONS,
    AdminNotificationType.REPORT: AdminPreference.REPORT_GENERATION,
    AdminNotificationType.ALERT: AdminPreference.LOGIN_ALERTS,
    AdminNotificationType.REFERRAL: None,
    AdminNotificationType.INFO: None,
    AdminNotificationType.TEST: None,
}

USER_PREFERENCE_KEYS: dict[UserNotificationType, str | None] = {
    UserNotificationType.RECIPE: None,
    UserNotificationType.PAYMENT: None,
    UserNotificationType.SUBSCRIPTION: None,
    UserNotificationType.ACCOUNT: None,
    UserNotificationType.FEATURE: None,
    UserNotificationType.INFO: None,
    UserNotificationType.TEST: None,
}


def _check_exhaustive(enum_cls: type[Enum], mapping: dict) -> None:
    missing = set(enum_cls) - set(mapping)
    if missing:
        names = ", ".join(sorted(member.value for member in missing))
        raise RuntimeError(
            f"{enum_cls.__name__} members without a preference decision: {names}"
        )


_check_exhaustive(AdminNotificationType, ADMIN_PREFERENCE_KEYS)
_check_exhaustive(UserNotificationType, USER_PREFERENCE_KEYS)


def notification_type_enum(audience: Audience) -> type[Enum]:
    """Return the closed type enumeration accepted by ``audience``."""

    if audience is Audience.ADMIN:
        return AdminNotificationType
    return UserNotificationType


def parse_notification_type(audience: Audience, value: str) -> Enum:
    """Return the enum member for ``value`` or raise ``ValueError``."""

    return notification_type_enum(audience)(value)


def preference_key_for(audience: Audience, notification_type: Enum) -> str | None:
    """Return the preference key gating ``notification_type``, if any."""

    if audience is Audience.ADMIN:
        key = ADMIN_PREFERENCE_KEYS[notification_type]  # type: ignore[index]
        return key.value if key is not None else None
    return USER_PREFERENCE_KEYS[notification_type]  # type: ignore[index]


__all__ = [
    "ADMIN_PREFERENCE_KEYS",
    "AdminNotificationType",
    "AdminPreference",
    "Audience",
    "DEFAULT_ADMIN_PREFERENCES",
    "USER_PREFERENCE_KEYS",
    "UserNotificationType",
    "notification_type_enum",
    "parse_notification_type",
    "preference_key_for",
]
