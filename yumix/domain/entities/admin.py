"""Domain entity representing a back-office administrator."""

from dataclasses import dataclass, field
from datetime import datetime

ADMIN_STATUS_ACTIVE = "active"
ADMIN_STATUS_INACTIVE = "inactive"


@dataclass
class Admin:
    """Administrator that receives admin-audience notifications."""

    id: int | None
    name: str
    email: str
    password: str
    status: str = ADMIN_STATUS_ACTIVE
    preferences: dict[str, bool] | None = field(default=None)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_active(self) -> bool:
        """Return ``True`` when the administrator account is enabled."""

        return self.status == ADMIN_STATUS_ACTIVE


__all__ = ["ADMIN_STATUS_ACTIVE", "ADMIN_STATUS_INACTIVE", "Admin"]
