"""
Subscription Schemas.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from sitekit.backend.models.subscription import Subscription

Interval = Literal["week", "month", "year"]


class PlanCreate(BaseModel):
    name: str = ""
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    currency: str = "PLN"
    interval: Interval = "month"
    interval_count: int = Field(default=1, ge=1)
    features: list[str] = Field(default_factory=list)
    active: bool = True
    sort_order: int = 0


class PlanUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    currency: str | None = None
    interval: Interval | None = None
    interval_count: int | None = Field(default=None, ge=1)
    features: list[str] | None = None
    active: bool | None = None
    sort_order: int | None = None


class PlanResponse(BaseModel):
    id: int
    name: str
    description: str | None
    price: float
    currency: str
    interval: str
    interval_count: int
    features: list[str]
    active: bool
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


class SubscribeRequest(BaseModel):
    plan_id: int | None = None
    client_name: str = ""
    client_email: str = ""
    client_phone: str | None = None
    notes: str | None = None


class SubscribeResult(BaseModel):
    message: str = "Subscription created"
    subscription_id: int
    plan: str
    next_billing: date


class PaymentCreate(BaseModel):
    amount: float = Field(default=0, ge=0)
    status: Literal["pending", "completed", "failed", "refunded"] = "completed"
    notes: str | None = None


class PaymentResponse(BaseModel):
    id: int
    amount: float
    currency: str
    status: str
    payment_date: date | None
    notes: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SubscriptionStatusUpdate(BaseModel):
    status: str


class SubscriptionResponse(BaseModel):
    id: int
    plan_id: int
    plan_name: str | None = None
    plan_price: float | None = None
    plan_interval: str | None = None
    client_name: str
    client_email: str
    client_phone: str | None
    status: str
    start_date: date
    next_billing_date: date | None
    cancelled_at: datetime | None
    notes: str | None
    created_at: datetime
    payments: list[PaymentResponse] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_model(cls, subscription: Subscription, with_payments: bool = True) -> "SubscriptionResponse":
        response = cls.model_validate(subscription)
        if subscription.plan is not None:
            response.plan_name = subscription.plan.name
            response.plan_price = subscription.plan.price
            response.plan_interval = subscription.plan.interval
        if not with_payments:
            response.payments = []
        return response


class SubscriptionStats(BaseModel):
    active_count: int
    cancelled_count: int
    paused_count: int
    monthly_revenue: float
    due_soon: list[SubscriptionResponse]
