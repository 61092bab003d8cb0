"""
Product Schemas.

Products are created and updated with multipart forms (an optional image
plus a `translations` JSON field), so only batch bodies and responses
are modelled here.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from sitekit.backend.models.product import Product


class ProductTranslationData(BaseModel):
    title: str | None = None
    subtitle: str | None = None
    description: str | None = None
    advantages: str | None = None
    specs: str | None = None


class ProductResponse(BaseModel):
    """Product with its category names and translations keyed by language."""

    id: int
    site: str
    category_id: int | None
    category_key: str | None = None
    category_name_pl: str | None = None
    category_name_en: str | None = None
    category_name_de: str | None = None
    category_name_ru: str | None = None
    product_key: str
    image: str | None
    price: str | None
    subcategory_type: str | None
    visible: bool
    sort_order: int
    created_at: datetime
    translations: dict[str, ProductTranslationData] = Field(default_factory=dict)

    @classmethod
    def from_model(cls, product: Product) -> "ProductResponse":
        category = product.category
        return cls(
            id=product.id,
            site=product.site,
            category_id=product.category_id,
            category_key=category.key if category else None,
            category_name_pl=category.name_pl if category else None,
            category_name_en=category.name_en if category else None,
            category_name_de=category.name_de if category else None,
            category_name_ru=category.name_ru if category else None,
            product_key=product.product_key,
            image=product.image,
            price=product.price,
            subcategory_type=product.subcategory_type,
            visible=product.visible,
            sort_order=product.sort_order,
            created_at=product.created_at,
            translations={
                t.lang: ProductTranslationData(
                    title=t.title,
                    subtitle=t.subtitle,
                    description=t.description,
                    advantages=t.advantages,
                    specs=t.specs,
                )
                for t in product.translations
            },
        )


class BatchVisibilityRequest(BaseModel):
    ids: list[int] = Field(default_factory=list)
    visible: bool = True


class BatchCategoryRequest(BaseModel):
    ids: list[int] = Field(default_factory=list)
    category_id: int | None = None


class BatchDeleteRequest(BaseModel):
    ids: list[int] = Field(default_factory=list)


class BatchResult(BaseModel):
    updated: int = 0
    deleted: int = 0
