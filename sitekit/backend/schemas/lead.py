"""
Lead Capture Schemas.

Website forms post camelCase or snake_case keys; both are accepted.
Validation beyond types (name length, phone digits) happens in the
service so the error messages match what the forms display.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class _LeadBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    phone: str = ""
    email: str | None = None
    api_key: str | None = Field(default=None, validation_alias=AliasChoices("apiKey", "api_key"))


class LeadItem(BaseModel):
    name: str = ""
    price: float = 0
    quantity: int = Field(default=1, validation_alias=AliasChoices("quantity", "qty"))
    size: str | None = None

    model_config = ConfigDict(populate_by_name=True)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class OrderLead(_LeadBase):
    """Single product order or a cart passed as `items`."""

    address: str | None = None
    product: str | None = None
    product_id: str | None = Field(default=None, validation_alias=AliasChoices("productId", "product_id"))
    price: float | None = None
    size: str | None = None
    quantity: int | None = None
    site: str | None = None
    items: list[LeadItem] | None = None


class CartOrderLead(_LeadBase):
    address: str | None = None
    items: list[LeadItem] = Field(default_factory=list)
    total: float | None = None
    site: str | None = None


class ContactLead(_LeadBase):
    message: str = ""
    site: str | None = None


class SpecRequestLead(_LeadBase):
    equipment: str | None = None
    period: str | None = None
    comment: str | None = None
    page: str | None = None


class SpecContactLead(_LeadBase):
    subject: str | None = None
    message: str | None = None


class LeadResult(BaseModel):
    message: str = "Message sent successfully"
