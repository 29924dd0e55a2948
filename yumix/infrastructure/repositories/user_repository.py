"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy.orm import Session

from yumix.domain.entities import User
from yumix.infrastructure.models import UserModel


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self.session.query(UserModel).filter(UserModel.email == email).first()
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel()
        model.name = user.name
        model.email = user.email
        model.password = user.password
        model.is_subscribed = user.is_subscribed
        model.preferences = dict(user.preferences) if user.preferences is not None else None
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            is_subscribed=model.is_subscribed,
            preferences=dict(model.preferences) if model.preferences is not None else None,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


__all__ = ["UserRepository"]
