"""SQLAlchemy model for user subscriptions."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    func,
)
from sqlalchemy.sql import expression

from yumix.infrastructure.database import Base


class SubscriptionModel(Base):
    """Database representation of a subscription purchased by a user."""

    __tablename__ = "subscription"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    plan_type = Column(String(50), nullable=False)
    start_date = Column(DateTime, nullable=False, server_default=func.now())
    expiry_date = Column(DateTime, nullable=False, index=True)
    payment_status = Column(String(20), nullable=False, default="completed")
    amount = Column(Float, nullable=False)
    notification_sent = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())


__all__ = ["SubscriptionModel"]
