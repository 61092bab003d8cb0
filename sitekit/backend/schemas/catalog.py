"""
Catalog Schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CatalogProductCreate(BaseModel):
    """Name and price are checked by the service so both report as 400."""

    sku: str | None = Field(default=None, max_length=64)
    name: str = Field(default="", max_length=255)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    sale_price: float | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, max_length=8)
    stock: int = Field(default=0, ge=0)
    category: str | None = Field(default=None, max_length=128)
    brand: str | None = Field(default=None, max_length=128)
    weight: float | None = None
    dimensions: str | None = Field(default=None, max_length=128)
    visible: bool = True
    featured: bool = False


class CatalogProductUpdate(BaseModel):
    """Partial update; only fields present in the body are changed."""

    sku: str | None = Field(default=None, max_length=64)
    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    sale_price: float | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, max_length=8)
    stock: int | None = Field(default=None, ge=0)
    category: str | None = Field(default=None, max_length=128)
    brand: str | None = Field(default=None, max_length=128)
    weight: float | None = None
    dimensions: str | None = Field(default=None, max_length=128)
    visible: bool | None = None
    featured: bool | None = None
    sort_order: int | None = None


class StockUpdate(BaseModel):
    stock: int = Field(ge=0)


class CatalogImageResponse(BaseModel):
    id: int
    product_id: int
    image_path: str
    is_primary: bool
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


class CatalogProductResponse(BaseModel):
    id: int
    sku: str
    name: str
    description: str | None
    price: float
    sale_price: float | None
    currency: str
    stock: int
    category: str | None
    brand: str | None
    weight: float | None
    dimensions: str | None
    visible: bool
    featured: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime
    images: list[CatalogImageResponse] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class CatalogCategoryCount(BaseModel):
    category: str
    count: int
