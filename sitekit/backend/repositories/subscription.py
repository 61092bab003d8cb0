"""
Subscription Repositories.
"""

from datetime import date

from sitekit.backend.models.subscription import (
    Subscription,
    SubscriptionPayment,
    SubscriptionPlan,
)
from sitekit.backend.repositories.base import BaseRepository


class PlanRepository(BaseRepository[SubscriptionPlan]):
    model = SubscriptionPlan
    not_found_message = "Plan not found"

    async def list_plans(self, active_only: bool = False) -> list[SubscriptionPlan]:
        where = [SubscriptionPlan.active.is_(True)] if active_only else []
        return await self.find(
            *where,
            order_by=[SubscriptionPlan.sort_order, SubscriptionPlan.price, SubscriptionPlan.id],
        )

    async def get_active(self, plan_id: int) -> SubscriptionPlan:
        plan = await self.find_one(
            SubscriptionPlan.id == plan_id,
            SubscriptionPlan.active.is_(True),
        )
        if plan is None:
            raise self.not_found_error()
        return plan


class SubscriptionRepository(BaseRepository[Subscription]):
    model = Subscription
    not_found_message = "Subscription not found"

    async def list_subscriptions(self, status: str | None = None) -> list[Subscription]:
        where = [Subscription.status == status] if status else []
        return await self.find(
            *where,
            order_by=[Subscription.created_at.desc(), Subscription.id.desc()],
        )

    async def count_for_plan(self, plan_id: int) -> int:
        return await self.count(Subscription.plan_id == plan_id)

    async def due_by(self, day: date) -> list[Subscription]:
        return await self.find(
            Subscription.status == "active",
            Subscription.next_billing_date.is_not(None),
            Subscription.next_billing_date <= day,
            order_by=[Subscription.next_billing_date, Subscription.id],
        )


class PaymentRepository(BaseRepository[SubscriptionPayment]):
    model = SubscriptionPayment
    not_found_message = "Payment not found"
