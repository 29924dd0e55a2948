"""Domain entity representing a paid plan held by a user."""

from dataclasses import dataclass
from datetime import datetime

PAYMENT_STATUS_PENDING = "pending"
PAYMENT_STATUS_COMPLETED = "completed"
PAYMENT_STATUS_FAILED = "failed"


@dataclass
class Subscription:
    """Subscription whose expiry triggers a single warning notification."""

    id: int | None
    user_id: int
    plan_type: str
    expiry_date: datetime
    amount: float
    start_date: datetime | None = None
    payment_status: str = PAYMENT_STATUS_COMPLETED
    notification_sent: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "PAYMENT_STATUS_COMPLETED",
    "PAYMENT_STATUS_FAILED",
    "PAYMENT_STATUS_PENDING",
    "Subscription",
]
