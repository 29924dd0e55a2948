"""Tests for the subscription expiry watcher."""

from __future__ import annotations

from datetime import timedelta

import pytest

from yumix.application.use_cases.subscriptions import expiry, notify_expiring_subscriptions
from yumix.domain.entities import Audience, Subscription
from yumix.infrastructure.repositories import NotificationRepository, SubscriptionRepository
from yumix.utils import now_in_app_timezone


@pytest.fixture()
def make_subscription(session):
    def factory(user_id: int, *, expires_in_days: float, notification_sent: bool = False):
        return SubscriptionRepository(session).create(
            Subscription(
                id=None,
                user_id=user_id,
                plan_type="monthly",
                expiry_date=now_in_app_timezone() + timedelta(days=expires_in_days),
                amount=199.0,
                notification_sent=notification_sent,
            )
        )

    return factory


def test_expiring_subscription_is_warned_once(session, make_user, make_subscription) -> None:
    """A second run does not send a duplicate warning."""

    user = make_user()
    subscription = make_subscription(user.id, expires_in_days=2)

    first = notify_expiring_subscriptions(session)
    second = notify_expiring_subscriptions(session)

    assert first.as_dict() == {"found": 1, "notified": 1, "failed": 0}
    assert second.as_dict() == {"found": 0, "notified": 0, "failed": 0}
    assert SubscriptionRepository(session).get(subscription.id).notification_sent is True

    [notification] = NotificationRepository(session, Audience.USER).list_recent(user.id)
    assert notification.title == "Subscription Expiring Soon"
    assert notification.type == "subscription"
    assert notification.message == (
        "Your monthly subscription will expire in a few days. "
        "Renew now to avoid interruption!"
    )
    assert notification.data["subscriptionId"] == subscription.id
    assert notification.data["planType"] == "monthly"


def test_subscriptions_outside_the_window_are_ignored(
    session, make_user, make_subscription
) -> None:
    """Only subscriptions expiring within three days that were not warned qualify."""

    user = make_user()
    make_subscription(user.id, expires_in_days=5)
    make_subscription(user.id, expires_in_days=-1)
    make_subscription(user.id, expires_in_days=1, notification_sent=True)

    result = notify_expiring_subscriptions(session)

    assert result.found == 0
    assert NotificationRepository(session, Audience.USER).count_unread(user.id) == 0


def test_failed_warning_is_retried_next_run(
    session, make_user, make_subscription, monkeypatch: pytest.MonkeyPatch
) -> None:
    """The flag stays unset when the notification could not be created."""

    user = make_user()
    subscription = make_subscription(user.id, expires_in_days=1)
    monkeypatch.setattr(expiry, "create_notification", lambda *args, **kwargs: None)

    result = notify_expiring_subscriptions(session)

    assert result.failed == [subscription.id]
    assert SubscriptionRepository(session).get(subscription.id).notification_sent is False

    monkeypatch.undo()
    retry = notify_expiring_subscriptions(session)

    assert retry.notified == [subscription.id]


def test_one_failure_does_not_block_the_others(
    session, make_user, make_subscription, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Each subscription is processed independently."""

    first_user = make_user()
    second_user = make_user()
    failing = make_subscription(first_user.id, expires_in_days=1)
    passing = make_subscription(second_user.id, expires_in_days=2)
    original = expiry.create_notification

    def flaky(session, audience, **kwargs):
        if kwargs["recipient_id"] == first_user.id:
            return None
        return original(session, audience, **kwargs)

    monkeypatch.setattr(expiry, "create_notification", flaky)

    result = notify_expiring_subscriptions(session)

    assert result.found == 2
    assert result.failed == [failing.id]
    assert result.notified == [passing.id]


def test_window_is_configurable(session, make_user, make_subscription) -> None:
    """A wider window picks up later expiries."""

    user = make_user()
    make_subscription(user.id, expires_in_days=5)

    assert notify_expiring_subscriptions(session, window_days=7).found == 1
