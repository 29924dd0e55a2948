"""Tests for notification type parsing and preference gating keys."""

from __future__ import annotations

from enum import Enum

import pytest

from yumix.domain.entities import notification_types
from yumix.domain.entities.notification_types import (
    ADMIN_PREFERENCE_KEYS,
    USER_PREFERENCE_KEYS,
    AdminNotificationType,
    AdminPreference,
    Audience,
    UserNotificationType,
    parse_notification_type,
    preference_key_for,
)


def test_every_type_has_a_preference_decision() -> None:
    """Both mappings cover their enumeration completely."""

    assert set(ADMIN_PREFERENCE_KEYS) == set(AdminNotificationType)
    assert set(USER_PREFERENCE_KEYS) == set(UserNotificationType)


def test_incomplete_mapping_is_rejected() -> None:
    """A type without a decision is reported at import time."""

    class Partial(str, Enum):
        A = "a"
        B = "b"

    with pytest.raises(RuntimeError, match="Partial members without a preference decision: b"):
        notification_types._check_exhaustive(Partial, {Partial.A: None})


@pytest.mark.parametrize(
    ("type_", "expected"),
    [
        ("user", AdminPreference.USER_SIGNUPS.value),
        ("payment", AdminPreference.PAYMENT_ALERTS.value),
        ("subscription", AdminPreference.NEW_SUBSCRIPTIONS.value),
        ("report", AdminPreference.REPORT_GENERATION.value),
        ("alert", AdminPreference.LOGIN_ALERTS.value),
        ("referral", None),
        ("info", None),
        ("test", None),
    ],
)
def test_admin_preference_keys(type_: str, expected: str | None) -> None:
    """Admin types map to the switch that gates them."""

    parsed = parse_notification_type(Audience.ADMIN, type_)

    assert preference_key_for(Audience.ADMIN, parsed) == expected


def test_user_types_are_never_gated() -> None:
    """No user type has a preference key."""

    for member in UserNotificationType:
        assert preference_key_for(Audience.USER, member) is None


def test_parse_rejects_foreign_types() -> None:
    """Types of the other audience are invalid."""

    with pytest.raises(ValueError):
        parse_notification_type(Audience.USER, "report")
    assert parse_notification_type(Audience.USER, "recipe") is UserNotificationType.RECIPE
