"""Persistence layer for subscriptions."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import false, or_
from sqlalchemy.orm import Session

from yumix.domain.entities import Subscription
from yumix.infrastructure.models import SubscriptionModel
from yumix.utils import ensure_app_naive_datetime, ensure_app_timezone


class SubscriptionRepository:
    """Provide the queries the subscription jobs rely on."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, subscription_id: int) -> Subscription | None:
        model = self.session.get(SubscriptionModel, subscription_id)
        return self._to_entity(model) if model else None

    def create(self, subscription: Subscription) -> Subscription:
        model = SubscriptionModel()
        model.user_id = subscription.user_id
        model.plan_type = subscription.plan_type
        if subscription.start_date is not None:
            model.start_date = ensure_app_naive_datetime(subscription.start_date)
        model.expiry_date = ensure_app_naive_datetime(subscription.expiry_date)
        model.payment_status = subscription.payment_status
        model.amount = subscription.amount
        model.notification_sent = subscription.notification_sent
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_expiring_unnotified(
        self, *, start: datetime, end: datetime
    ) -> Sequence[Subscription]:
        """Return subscriptions expiring in ``[start, end]`` that were not warned yet."""

        query = (
            self.session.query(SubscriptionModel)
            .filter(SubscriptionModel.expiry_date >= ensure_app_naive_datetime(start))
            .filter(SubscriptionModel.expiry_date <= ensure_app_naive_datetime(end))
            .filter(
                or_(
                    SubscriptionModel.notification_sent.is_(None),
                    SubscriptionModel.notification_sent == false(),
                )
            )
            .order_by(SubscriptionModel.expiry_date, SubscriptionModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def mark_notification_sent(self, subscription_id: int) -> None:
        model = self.session.get(SubscriptionModel, subscription_id)
        if model is None:
            msg = f"Subscription with id {subscription_id} not found"
            raise ValueError(msg)
        model.notification_sent = True
        self.session.add(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: SubscriptionModel) -> Subscription:
        return Subscription(
            id=model.id,
            user_id=model.user_id,
            plan_type=model.plan_type,
            start_date=ensure_app_timezone(model.start_date),
            expiry_date=ensure_app_timezone(model.expiry_date),
            payment_status=model.payment_status,
            amount=model.amount,
            notification_sent=bool(model.notification_sent),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


__all__ = ["SubscriptionRepository"]
