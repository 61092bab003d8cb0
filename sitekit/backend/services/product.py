"""
Product Service.

Per-site storefront products with per-language translations and an
optional image stored through UploadStorage.
"""

import json
from dataclasses import dataclass
from typing import Any

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.exceptions import ValidationError
from sitekit.backend.models.product import PRODUCT_LANGUAGES, Product, ProductTranslation
from sitekit.backend.repositories.category import CategoryRepository
from sitekit.backend.repositories.product import ProductRepository
from sitekit.backend.services.base import BaseService
from sitekit.backend.services.storage import UploadStorage

TRANSLATION_FIELDS = ("title", "subtitle", "description", "advantages", "specs")
UPLOAD_SUBDIR = "products"


@dataclass
class ProductForm:
    """Multipart form fields for create and update."""

    product_key: str = ""
    category_id: int | None = None
    price: str | None = None
    subcategory_type: str | None = None
    visible: bool = True
    translations: str | None = None


def parse_translations(raw: str | dict | None) -> dict[str, dict[str, Any]]:
    """
    Parse the `translations` form field.

    Accepts a JSON object keyed by language; languages other than
    en/de/ru and non-object entries are ignored.

    Raises:
        ValidationError: If the value is not a JSON object
    """
    if raw is None or raw == "":
        return {}
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValidationError("Translations must be valid JSON") from e
    if not isinstance(raw, dict):
        raise ValidationError("Translations must be an object keyed by language")
    return {
        lang: value
        for lang, value in raw.items()
        if lang in PRODUCT_LANGUAGES and isinstance(value, dict)
    }


class ProductService(BaseService):
    def __init__(self, session: AsyncSession, storage: UploadStorage | None = None) -> None:
        super().__init__(session)
        self.repo = ProductRepository(session)
        self.category_repo = CategoryRepository(session)
        self.storage = storage

    async def list_products(
        self,
        site: str,
        category_id: int | None = None,
        category_key: str | None = None,
        visible_only: bool = False,
    ) -> list[Product]:
        return await self.repo.list_for_site(
            site,
            category_id=category_id,
            category_key=category_key,
            visible_only=visible_only,
        )

    async def get_product(self, site: str, product_id: int) -> Product:
        return await self.repo.get_for_site(site, product_id)

    async def _check_category(self, site: str, category_id: int | None) -> None:
        if category_id is None:
            return
        if await self.category_repo.find_one(
            self.category_repo.model.site == site,
            self.category_repo.model.id == category_id,
        ) is None:
            raise ValidationError("Category not found for this site")

    def _apply_translations(self, product: Product, translations: dict[str, dict[str, Any]]) -> None:
        """Upsert one translation row per language present in the payload."""
        existing = {t.lang: t for t in product.translations}
        for lang, values in translations.items():
            fields = {name: values.get(name) or "" for name in TRANSLATION_FIELDS}
            if lang in existing:
                for name, value in fields.items():
                    setattr(existing[lang], name, value)
            else:
                product.translations.append(ProductTranslation(lang=lang, **fields))

    async def create_product(
        self,
        site: str,
        form: ProductForm,
        image: UploadFile | None = None,
    ) -> Product:
        """
        Create a product at the end of the site's ordering.

        Raises:
            ValidationError: If product_key is missing or data is invalid
        """
        self._validate_required({"product_key": form.product_key}, ["product_key"], "Product key is required")
        translations = parse_translations(form.translations)
        await self._check_category(site, form.category_id)

        image_url = None
        if image is not None and image.filename:
            image_url = await self.storage.save(image, UPLOAD_SUBDIR, "product")
            self.storage.delete_on_rollback(self.session, image_url)

        product = Product(
            site=site,
            category_id=form.category_id,
            product_key=form.product_key.strip(),
            image=image_url,
            price=form.price or "",
            subcategory_type=form.subcategory_type or None,
            visible=form.visible,
            sort_order=await self.repo.next_sort_order(Product.site == site),
            translations=[],
        )
        self._apply_translations(product, translations)
        self.session.add(product)

        self._log_operation("Creating product", site=site, product_key=product.product_key)
        await self._execute_db_operation("create_product", self.session.flush())
        await self.session.refresh(product)
        return product

    async def update_product(
        self,
        site: str,
        product_id: int,
        form: ProductForm,
        image: UploadFile | None = None,
    ) -> Product:
        """
        Replace a product's fields, upsert its translations and optionally
        swap its image (the old file is removed on commit).
        """
        product = await self.repo.get_for_site(site, product_id)
        self._validate_required({"product_key": form.product_key}, ["product_key"], "Product key is required")
        translations = parse_translations(form.translations)
        await self._check_category(site, form.category_id)

        old_image = None
        if image is not None and image.filename:
            old_image = product.image
            product.image = await self.storage.save(image, UPLOAD_SUBDIR, "product")
            self.storage.delete_on_rollback(self.session, product.image)

        product.category_id = form.category_id
        product.product_key = form.product_key.strip()
        product.price = form.price or ""
        product.subcategory_type = form.subcategory_type or None
        product.visible = form.visible
        self._apply_translations(product, translations)

        self._log_operation("Updating product", site=site, product_id=product_id)
        await self._execute_db_operation("update_product", self.session.flush())
        await self.session.refresh(product)

        self.storage.delete_after_commit(self.session, [old_image])
        return product

    async def set_visibility(self, site: str, product_id: int, visible: bool) -> Product:
        product = await self.repo.get_for_site(site, product_id)
        return await self.repo.update_instance(product, visible=visible)

    def _require_ids(self, ids: list[int]) -> None:
        if not ids:
            raise ValidationError("IDs array is required")

    async def batch_visibility(self, site: str, ids: list[int], visible: bool) -> int:
        self._require_ids(ids)
        products = await self.repo.get_many_for_site(site, ids)
        for product in products:
            product.visible = visible
        await self.session.flush()
        self._log_operation("Batch visibility", site=site, count=len(products), visible=visible)
        return len(products)

    async def batch_category(self, site: str, ids: list[int], category_id: int | None) -> int:
        self._require_ids(ids)
        await self._check_category(site, category_id)
        products = await self.repo.get_many_for_site(site, ids)
        for product in products:
            product.category_id = category_id
        await self.session.flush()
        self._log_operation("Batch category", site=site, count=len(products), category_id=category_id)
        return len(products)

    async def batch_delete(self, site: str, ids: list[int]) -> int:
        self._require_ids(ids)
        products = await self.repo.get_many_for_site(site, ids)
        images = [product.image for product in products]
        for product in products:
            await self.session.delete(product)
        await self.session.flush()
        self.storage.delete_after_commit(self.session, images)
        self._log_operation("Batch delete", site=site, count=len(products))
        return len(products)

    async def reorder(self, site: str, pairs: list[tuple[int, int]]) -> int:
        return await self.repo.reorder(pairs, Product.site == site)

    async def delete_product(self, site: str, product_id: int) -> None:
        """Delete a product, its translations and its image file."""
        product = await self.repo.get_for_site(site, product_id)
        image = product.image
        await self.session.delete(product)
        await self.session.flush()
        self.storage.delete_after_commit(self.session, [image])
        self._log_operation("Deleted product", site=site, product_id=product_id)
