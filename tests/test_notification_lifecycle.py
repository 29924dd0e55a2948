"""Tests for the notification lifecycle use cases."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from yumix.application.use_cases.notifications import (
    clear_notifications,
    create_notification,
    delete_notification,
    list_notifications,
    mark_all_notifications_as_read,
    mark_notification_as_read,
)
from yumix.domain.entities import Audience
from yumix.domain.errors import NotificationNotFoundError, StoreError
from yumix.infrastructure.repositories import NotificationRepository


def _broken(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("database is locked"))


def test_create_notification_persists_unread_entry(session, make_user) -> None:
    """A created notification is unread and carries the given payload."""

    user = make_user()

    notification = create_notification(
        session,
        Audience.USER,
        recipient_id=user.id,
        title="Welcome",
        message="Hello there",
        type="account",
        data={"source": "signup"},
    )

    assert notification is not None
    assert notification.id is not None
    assert notification.recipient_id == user.id
    assert notification.read is False
    assert notification.type == "account"
    assert notification.data == {"source": "signup"}
    assert notification.created_at is not None


def test_create_notification_defaults_to_info(session, make_admin) -> None:
    """The type falls back to ``info`` and data to an empty mapping."""

    admin = make_admin()

    notification = create_notification(
        session, Audience.ADMIN, recipient_id=admin.id, message="Heads up"
    )

    assert notification is not None
    assert notification.type == "info"
    assert notification.data == {}
    assert notification.title is None


@pytest.mark.parametrize("recipient_id", [None, 0])
def test_create_notification_requires_recipient_id(session, recipient_id) -> None:
    """Missing recipient ids are a soft failure."""

    assert (
        create_notification(
            session, Audience.USER, recipient_id=recipient_id, message="Hi"
        )
        is None
    )


def test_create_notification_for_unknown_recipient_returns_none(session) -> None:
    """Nothing is stored when the recipient does not exist."""

    assert (
        create_notification(session, Audience.ADMIN, recipient_id=999, message="Hi")
        is None
    )
    assert NotificationRepository(session, Audience.ADMIN).count_unread(999) == 0


@pytest.mark.parametrize(
    ("audience", "type_"),
    [(Audience.USER, "referral"), (Audience.ADMIN, "recipe"), (Audience.USER, "bogus")],
)
def test_create_notification_rejects_types_outside_the_audience(
    session, make_admin, make_user, audience: Audience, type_: str
) -> None:
    """Each audience only accepts its own closed set of types."""

    recipient = make_admin() if audience is Audience.ADMIN else make_user()

    assert (
        create_notification(
            session, audience, recipient_id=recipient.id, message="Hi", type=type_
        )
        is None
    )
    assert NotificationRepository(session, audience).count_unread(recipient.id) == 0


def test_disabled_preference_suppresses_only_its_type(session, make_admin) -> None:
    """Turning off payment alerts suppresses ``payment`` but not ``alert``."""

    admin = make_admin(preferences={"paymentAlerts": False})

    suppressed = create_notification(
        session, Audience.ADMIN, recipient_id=admin.id, message="Refund", type="payment"
    )
    delivered = create_notification(
        session, Audience.ADMIN, recipient_id=admin.id, message="Login", type="alert"
    )

    assert suppressed is None
    assert delivered is not None
    assert NotificationRepository(session, Audience.ADMIN).count_unread(admin.id) == 1


def test_unmapped_types_are_never_suppressed(session, make_admin) -> None:
    """Types without a preference key are delivered even with every key off."""

    admin = make_admin(
        preferences={
            "userSignups": False,
            "paymentAlerts": False,
            "newSubscriptions": False,
            "reportGeneration": False,
            "loginAlerts": False,
        }
    )

    for type_ in ("referral", "info", "test"):
        assert (
            create_notification(
                session, Audience.ADMIN, recipient_id=admin.id, message="Hi", type=type_
            )
            is not None
        )


def test_missing_preference_key_counts_as_enabled(session, make_admin) -> None:
    """Only an explicit ``False`` suppresses a notification."""

    admin = make_admin(preferences={"loginAlerts": True})

    assert (
        create_notification(
            session, Audience.ADMIN, recipient_id=admin.id, message="New", type="user"
        )
        is not None
    )


def test_create_notification_swallows_store_errors(
    session, make_user, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A failing insert is logged and reported as ``None``."""

    user = make_user()
    monkeypatch.setattr(NotificationRepository, "create", _broken)

    assert (
        create_notification(session, Audience.USER, recipient_id=user.id, message="Hi")
        is None
    )


def test_list_notifications_is_newest_first_and_scoped(
    session, make_user, add_notification
) -> None:
    """Listing returns only the caller's notifications, newest first."""

    owner = make_user()
    other = make_user()
    oldest = add_notification(Audience.USER, owner.id, days_ago=2, message="oldest")
    newest = add_notification(Audience.USER, owner.id, days_ago=0, message="newest")
    middle = add_notification(Audience.USER, owner.id, days_ago=1, message="middle")
    add_notification(Audience.USER, other.id, message="not yours")

    result = list_notifications(session, Audience.USER, owner.id)

    assert [item.id for item in result.notifications] == [newest.id, middle.id, oldest.id]
    assert result.unread_count == 3


def test_list_notifications_caps_the_page(session, make_user, add_notification) -> None:
    """At most the configured number of notifications is returned."""

    user = make_user()
    for index in range(55):
        add_notification(Audience.USER, user.id, message=f"n{index}")

    result = list_notifications(session, Audience.USER, user.id)

    assert len(result.notifications) == 50
    assert result.unread_count == 55


def test_count_only_omits_notifications(session, make_user, add_notification) -> None:
    """The count-only path never carries the notification list."""

    user = make_user()
    add_notification(Audience.USER, user.id)
    add_notification(Audience.USER, user.id)

    result = list_notifications(session, Audience.USER, user.id, count_only=True)

    assert result.unread_count == 2
    assert result.notifications is None


@pytest.mark.parametrize("count_only", [False, True])
def test_admin_listing_purges_expired_notifications(
    session, make_admin, add_notification, count_only: bool
) -> None:
    """Admin list requests delete the caller's notifications past retention."""

    admin = make_admin()
    other = make_admin()
    add_notification(Audience.ADMIN, admin.id, days_ago=11)
    kept = add_notification(Audience.ADMIN, admin.id, days_ago=9)
    add_notification(Audience.ADMIN, other.id, days_ago=11)

    result = list_notifications(session, Audience.ADMIN, admin.id, count_only=count_only)

    assert result.unread_count == 1
    if not count_only:
        assert [item.id for item in result.notifications] == [kept.id]
    repository = NotificationRepository(session, Audience.ADMIN)
    assert repository.count_unread(other.id) == 1


def test_user_listing_keeps_expired_notifications(
    session, make_user, add_notification
) -> None:
    """User list requests leave old notifications to the scheduled sweep."""

    user = make_user()
    add_notification(Audience.USER, user.id, days_ago=11)

    result = list_notifications(session, Audience.USER, user.id)

    assert result.unread_count == 1
    assert len(result.notifications) == 1


def test_list_notifications_raises_store_error(
    session, make_user, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Store failures surface as :class:`StoreError`."""

    user = make_user()
    monkeypatch.setattr(NotificationRepository, "count_unread", _broken)

    with pytest.raises(StoreError, match="Failed to fetch notifications"):
        list_notifications(session, Audience.USER, user.id)


def test_mark_as_read_is_monotonic(session, make_user, add_notification) -> None:
    """Marking twice keeps the notification read."""

    user = make_user()
    notification = add_notification(Audience.USER, user.id)

    first = mark_notification_as_read(session, Audience.USER, user.id, notification.id)
    second = mark_notification_as_read(session, Audience.USER, user.id, notification.id)

    assert first.read is True
    assert second.read is True
    assert list_notifications(session, Audience.USER, user.id).unread_count == 0


def test_mark_as_read_of_foreign_notification_is_not_found(
    session, make_user, add_notification
) -> None:
    """Recipients cannot touch another recipient's notification."""

    owner = make_user()
    intruder = make_user()
    notification = add_notification(Audience.USER, owner.id)

    with pytest.raises(NotificationNotFoundError, match="Notification not found"):
        mark_notification_as_read(session, Audience.USER, intruder.id, notification.id)

    assert list_notifications(session, Audience.USER, owner.id).unread_count == 1


def test_admin_not_found_message(session, make_admin) -> None:
    """The admin audience reports its own not-found message."""

    admin = make_admin()

    with pytest.raises(NotificationNotFoundError, match="Admin notification not found"):
        mark_notification_as_read(session, Audience.ADMIN, admin.id, 12345)


def test_mark_all_as_read_is_idempotent(session, make_user, add_notification) -> None:
    """The second call finds nothing left to change."""

    user = make_user()
    other = make_user()
    add_notification(Audience.USER, user.id)
    add_notification(Audience.USER, user.id)
    add_notification(Audience.USER, other.id)

    assert mark_all_notifications_as_read(session, Audience.USER, user.id) == 2
    assert mark_all_notifications_as_read(session, Audience.USER, user.id) == 0
    assert list_notifications(session, Audience.USER, other.id).unread_count == 1


def test_delete_notification_is_scoped_to_owner(
    session, make_admin, add_notification
) -> None:
    """Deleting requires ownership; a second delete is not found."""

    owner = make_admin()
    intruder = make_admin()
    notification = add_notification(Audience.ADMIN, owner.id)

    with pytest.raises(NotificationNotFoundError):
        delete_notification(session, Audience.ADMIN, intruder.id, notification.id)

    delete_notification(session, Audience.ADMIN, owner.id, notification.id)

    with pytest.raises(NotificationNotFoundError):
        delete_notification(session, Audience.ADMIN, owner.id, notification.id)


def test_clear_removes_only_old_notifications_by_default(
    session, make_user, add_notification
) -> None:
    """Without ``clear_all`` only notifications past retention are removed."""

    user = make_user()
    add_notification(Audience.USER, user.id, days_ago=15)
    add_notification(Audience.USER, user.id, days_ago=11)
    add_notification(Audience.USER, user.id, days_ago=1)

    assert clear_notifications(session, Audience.USER, user.id) == 2
    assert list_notifications(session, Audience.USER, user.id).unread_count == 1


def test_clear_all_removes_everything_for_the_recipient(
    session, make_user, add_notification
) -> None:
    """``clear_all`` empties the caller's notifications and nobody else's."""

    user = make_user()
    other = make_user()
    add_notification(Audience.USER, user.id, days_ago=1)
    add_notification(Audience.USER, user.id)
    add_notification(Audience.USER, other.id)

    assert clear_notifications(session, Audience.USER, user.id, clear_all=True) == 2
    assert list_notifications(session, Audience.USER, user.id).unread_count == 0
    assert list_notifications(session, Audience.USER, other.id).unread_count == 1


def test_clear_raises_store_error(
    session, make_user, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Clearing reports store failures as :class:`StoreError`."""

    user = make_user()
    monkeypatch.setattr(NotificationRepository, "delete_for_recipient", _broken)

    with pytest.raises(StoreError, match="Failed to clear notifications"):
        clear_notifications(session, Audience.USER, user.id, clear_all=True)
