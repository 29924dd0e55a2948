"""SQLAlchemy models for the admin and user notification collections."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declared_attr
from sqlalchemy.sql import expression

from yumix.utils import now_in_app_naive_datetime
from yumix.infrastructure.database import Base


class NotificationColumnsMixin:
    """Columns shared by both notification tables.

    Subclasses set ``__recipient_table__`` to the table their ``recipient_id``
    references.
    """

    __recipient_table__: str

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=True)
    message = Column(Text, nullable=False)
    type = Column(String(30), nullable=False)
    read = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    @declared_attr
    def recipient_id(cls):
        return Column(
            Integer,
            ForeignKey(f"{cls.__recipient_table__}.id", ondelete="CASCADE"),
            nullable=False,
        )

    @declared_attr
    def __table_args__(cls):
        return (
            Index(f"ix_{cls.__tablename__}_recipient_created", "recipient_id", "created_at"),
            Index(f"ix_{cls.__tablename__}_recipient_read", "recipient_id", "read"),
        )


class AdminNotificationModel(NotificationColumnsMixin, Base):
    """Notifications addressed to administrators."""

    __tablename__ = "admin_notification"
    __recipient_table__ = "admin"


class UserNotificationModel(NotificationColumnsMixin, Base):
    """Notifications addressed to registered users."""

    __tablename__ = "user_notification"
    __recipient_table__ = "user"


__all__ = [
    "AdminNotificationModel",
    "NotificationColumnsMixin",
    "UserNotificationModel",
]
