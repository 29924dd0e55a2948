"""Persistence layer for administrator accounts."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from yumix.domain.entities import ADMIN_STATUS_ACTIVE, Admin
from yumix.infrastructure.models import AdminModel


class AdminRepository:
    """Provide CRUD operations for :class:`Admin` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, admin_id: int) -> Admin | None:
        model = self.session.get(AdminModel, admin_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> Admin | None:
        model = self.session.query(AdminModel).filter(AdminModel.email == email).first()
        return self._to_entity(model) if model else None

    def list_active(self) -> Sequence[Admin]:
        query = (
            self.session.query(AdminModel)
            .filter(AdminModel.status == ADMIN_STATUS_ACTIVE)
            .order_by(AdminModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, admin: Admin) -> Admin:
        model = AdminModel()
        self._apply_entity_to_model(model, admin)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_preferences(self, admin_id: int, preferences: dict[str, bool]) -> Admin | None:
        model = self.session.get(AdminModel, admin_id)
        if model is None:
            return None
        # Reassign so the JSON column is flagged as modified.
        model.preferences = dict(preferences)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: AdminModel, admin: Admin) -> None:
        model.name = admin.name
        model.email = admin.email
        model.password = admin.password
        model.status = admin.status
        model.preferences = dict(admin.preferences) if admin.preferences is not None else None

    @staticmethod
    def _to_entity(model: AdminModel) -> Admin:
        return Admin(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            status=model.status,
            preferences=dict(model.preferences) if model.preferences is not None else None,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


__all__ = ["AdminRepository"]
