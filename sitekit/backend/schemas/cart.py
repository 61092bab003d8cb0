"""
Cart and Checkout Schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field


class CartAddRequest(BaseModel):
    product_id: int
    quantity: int = Field(default=1, ge=1)


class CartQuantityUpdate(BaseModel):
    quantity: int = Field(ge=1)


class CartItemResponse(BaseModel):
    id: int
    product_id: int
    product_name: str
    product_price: float
    quantity: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def subtotal(self) -> float:
        return self.product_price * self.quantity


class CartResponse(BaseModel):
    items: list[CartItemResponse]
    total: float
    count: int


class CartCountResponse(BaseModel):
    message: str
    count: int


class CheckoutRequest(BaseModel):
    client_name: str = Field(default="", max_length=255)
    client_phone: str = Field(default="", max_length=64)
    client_email: str | None = Field(default=None, max_length=255)
    client_address: str | None = Field(default=None, max_length=1000)
    notes: str | None = Field(default=None, max_length=5000)


class CheckoutResult(BaseModel):
    order_number: str
    total: float


class OrderTrackingResponse(BaseModel):
    order_number: str
    status: str
    total: float
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CheckoutOrderItemResponse(BaseModel):
    id: int
    product_id: int | None
    product_name: str
    product_price: float
    quantity: int

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def subtotal(self) -> float:
        return self.product_price * self.quantity


class CheckoutOrderResponse(BaseModel):
    id: int
    order_number: str
    client_name: str
    client_phone: str
    client_email: str | None
    client_address: str | None
    notes: str | None
    total: float
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CheckoutOrderDetail(CheckoutOrderResponse):
    items: list[CheckoutOrderItemResponse] = Field(default_factory=list)


class CheckoutStatusUpdate(BaseModel):
    status: str = ""


class MonthSummary(BaseModel):
    orders: int
    revenue: float


class CheckoutStats(BaseModel):
    total_orders: int
    total_revenue: float
    by_status: dict[str, int]
    this_month: MonthSummary
