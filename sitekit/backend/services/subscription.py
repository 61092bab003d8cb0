"""
Subscription Service.

Billing dates move by the plan interval. Month and year steps are
calendar-aware: Jan 31 plus one month is the last day of February.
"""

import calendar
from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.exceptions import ConflictError, ValidationError
from sitekit.backend.core.utils import utc_now
from sitekit.backend.models.subscription import (
    SUBSCRIPTION_STATUSES,
    Subscription,
    SubscriptionPayment,
    SubscriptionPlan,
)
from sitekit.backend.repositories.subscription import (
    PaymentRepository,
    PlanRepository,
    SubscriptionRepository,
)
from sitekit.backend.schemas.subscription import (
    PaymentCreate,
    PlanCreate,
    PlanUpdate,
    SubscribeRequest,
    SubscriptionResponse,
    SubscriptionStats,
)
from sitekit.backend.services.base import BaseService

DUE_SOON_DAYS = 7
WEEKS_PER_MONTH = 52 / 12


def add_months(start: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def next_billing_date(start: date, interval: str, count: int = 1) -> date:
    """Date `count` intervals after `start`."""
    if interval == "week":
        return start + timedelta(weeks=count)
    if interval == "month":
        return add_months(start, count)
    if interval == "year":
        return add_months(start, 12 * count)
    raise ValueError(f"Unknown billing interval: {interval}")


def billing_date_after(start: date, after: date, interval: str, count: int = 1) -> date:
    """
    First date of the billing schedule anchored at `start` that is later
    than `after`. A subscription started on the 31st stays on the last
    day of short months and returns to the 31st when it can.
    """
    periods = count
    candidate = next_billing_date(start, interval, periods)
    while candidate <= after:
        periods += count
        candidate = next_billing_date(start, interval, periods)
    return candidate


def monthly_price(plan: SubscriptionPlan) -> float:
    """Plan price normalised to one month."""
    count = max(plan.interval_count, 1)
    if plan.interval == "week":
        return plan.price * WEEKS_PER_MONTH / count
    if plan.interval == "year":
        return plan.price / (12 * count)
    return plan.price / count


class SubscriptionService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.plans = PlanRepository(session)
        self.subscriptions = SubscriptionRepository(session)
        self.payments = PaymentRepository(session)

    # Public

    async def active_plans(self) -> list[SubscriptionPlan]:
        return await self.plans.list_plans(active_only=True)

    async def subscribe(self, data: SubscribeRequest) -> Subscription:
        self._validate_required(
            data.model_dump(),
            ["plan_id", "client_name", "client_email"],
            message="Required: plan_id, client_name, client_email",
        )
        plan = await self.plans.get_active(data.plan_id)
        today = utc_now().date()
        subscription = await self.subscriptions.create(
            plan_id=plan.id,
            client_name=data.client_name.strip(),
            client_email=data.client_email.strip(),
            client_phone=data.client_phone or None,
            notes=data.notes,
            start_date=today,
            next_billing_date=next_billing_date(today, plan.interval, plan.interval_count),
        )
        self._log_operation("Subscription created", subscription_id=subscription.id, plan_id=plan.id)
        return subscription

    # Admin

    async def list_subscriptions(self, status: str | None = None) -> list[Subscription]:
        return await self.subscriptions.list_subscriptions(status)

    async def stats(self) -> SubscriptionStats:
        active = await self.subscriptions.list_subscriptions("active")
        revenue = sum(monthly_price(s.plan) for s in active if s.plan is not None)
        due = await self.subscriptions.due_by(utc_now().date() + timedelta(days=DUE_SOON_DAYS))
        return SubscriptionStats(
            active_count=len(active),
            cancelled_count=await self.subscriptions.count(Subscription.status == "cancelled"),
            paused_count=await self.subscriptions.count(Subscription.status == "paused"),
            monthly_revenue=round(revenue, 2),
            due_soon=[SubscriptionResponse.from_model(s, with_payments=False) for s in due],
        )

    async def update_status(self, subscription_id: int, status: str) -> Subscription:
        self._validate_choice(
            status,
            SUBSCRIPTION_STATUSES,
            f"Status must be: {', '.join(SUBSCRIPTION_STATUSES)}",
        )
        subscription = await self.subscriptions.get_by_id(subscription_id)
        changes: dict[str, object] = {"status": status}
        if status == "cancelled":
            changes["cancelled_at"] = utc_now()
        return await self.subscriptions.update_instance(subscription, **changes)

    async def record_payment(self, subscription_id: int, data: PaymentCreate) -> SubscriptionPayment:
        """Record a payment; a completed one moves the billing date forward."""
        subscription = await self.subscriptions.get_by_id(subscription_id)
        payment = await self.payments.create(
            subscription_id=subscription.id,
            amount=data.amount,
            currency=subscription.plan.currency if subscription.plan else "PLN",
            status=data.status,
            payment_date=utc_now().date(),
            notes=data.notes,
        )
        if data.status == "completed" and subscription.plan is not None:
            current = subscription.next_billing_date or utc_now().date()
            subscription.next_billing_date = billing_date_after(
                subscription.start_date,
                current,
                subscription.plan.interval,
                subscription.plan.interval_count,
            )
            await self.session.flush()
        await self.session.refresh(subscription)
        self._log_operation(
            "Payment recorded",
            subscription_id=subscription.id,
            status=data.status,
            next_billing_date=str(subscription.next_billing_date),
        )
        return payment

    # Plans

    async def list_plans(self) -> list[SubscriptionPlan]:
        return await self.plans.list_plans()

    async def create_plan(self, data: PlanCreate) -> SubscriptionPlan:
        if not data.name.strip() or data.price is None:
            raise ValidationError("Name and price required")
        return await self.plans.create(**data.model_dump())

    async def update_plan(self, plan_id: int, data: PlanUpdate) -> SubscriptionPlan:
        changes = self._changes(data, self.plans.model)
        return await self._execute_db_operation("update_plan", self.plans.update(plan_id, **changes))

    async def delete_plan(self, plan_id: int) -> None:
        plan = await self.plans.get_by_id(plan_id)
        if await self.subscriptions.count_for_plan(plan.id):
            raise ConflictError("Plan has subscriptions; deactivate it instead")
        await self.session.delete(plan)
        await self.session.flush()
