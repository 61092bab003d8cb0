"""
Catalog Service.

SKU-addressed products with stock, sale prices and multiple images.
"""

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.exceptions import ValidationError
from sitekit.backend.core.utils import unix_ms
from sitekit.backend.models.catalog import CatalogImage, CatalogProduct
from sitekit.backend.repositories.catalog import CatalogImageRepository, CatalogProductRepository
from sitekit.backend.schemas.catalog import (
    CatalogCategoryCount,
    CatalogProductCreate,
    CatalogProductUpdate,
)
from sitekit.backend.services.base import BaseService
from sitekit.backend.services.storage import UploadStorage

UPLOAD_SUBDIR = "catalog"
DEFAULT_CURRENCY = "PLN"


class CatalogService(BaseService):
    def __init__(self, session: AsyncSession, storage: UploadStorage | None = None) -> None:
        super().__init__(session)
        self.repo = CatalogProductRepository(session)
        self.images = CatalogImageRepository(session)
        self.storage = storage

    async def search(
        self,
        category: str | None = None,
        search: str | None = None,
        sort: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[CatalogProduct], int]:
        return await self.repo.search_visible(category, search, sort, limit, offset)

    async def get_visible(self, product_id: int) -> CatalogProduct:
        return await self.repo.get_visible(product_id)

    async def categories(self) -> list[CatalogCategoryCount]:
        return [
            CatalogCategoryCount(category=category, count=count)
            for category, count in await self.repo.category_counts()
        ]

    async def list_all(self) -> list[CatalogProduct]:
        return await self.repo.list_all()

    async def get_product(self, product_id: int) -> CatalogProduct:
        return await self.repo.get_by_id(product_id)

    async def create_product(self, data: CatalogProductCreate) -> CatalogProduct:
        """
        Create a product; the SKU defaults to SKU-<unix ms>.

        Raises:
            ValidationError: If name or price is missing
            ConflictError: If the SKU is taken
        """
        if not data.name or data.price is None:
            raise ValidationError("Name and price are required")

        fields = data.model_dump()
        fields["sku"] = data.sku or f"SKU-{unix_ms()}"
        fields["currency"] = data.currency or DEFAULT_CURRENCY
        product = await self._execute_db_operation(
            "create_catalog_product",
            self.repo.create(**fields),
            conflict_message="SKU already exists",
        )
        self._log_operation("Catalog product created", product_id=product.id, sku=product.sku)
        return product

    async def update_product(self, product_id: int, data: CatalogProductUpdate) -> CatalogProduct:
        product = await self.repo.get_by_id(product_id)
        changes = self._changes(data, self.repo.model)
        for required in ("sku", "name", "price", "currency"):
            if required in changes and changes[required] in (None, ""):
                raise ValidationError(f"{required} cannot be empty")
        return await self._execute_db_operation(
            "update_catalog_product",
            self.repo.update_instance(product, **changes),
            conflict_message="SKU already exists",
        )

    async def update_stock(self, product_id: int, stock: int) -> CatalogProduct:
        product = await self.repo.get_by_id(product_id)
        return await self.repo.update_instance(product, stock=stock)

    async def delete_product(self, product_id: int) -> None:
        """Delete a product together with its image rows and files."""
        product = await self.repo.get_by_id(product_id)
        files = [image.image_path for image in product.images]
        await self.session.delete(product)
        await self.session.flush()
        self.storage.delete_after_commit(self.session, files)
        self._log_operation("Catalog product deleted", product_id=product_id)

    async def add_image(
        self,
        product_id: int,
        image: UploadFile | None,
        is_primary: bool = False,
        sort_order: int = 0,
    ) -> CatalogImage:
        """Attach an image; a primary image demotes the previous primary."""
        if image is None or not image.filename:
            raise ValidationError("No image uploaded")
        product = await self.repo.get_by_id(product_id)
        path = await self.storage.save(image, UPLOAD_SUBDIR, "catalog")
        self.storage.delete_on_rollback(self.session, path)
        if is_primary:
            await self.images.clear_primary(product.id)
        return await self.images.create(
            product_id=product.id,
            image_path=path,
            is_primary=is_primary,
            sort_order=sort_order,
        )

    async def delete_image(self, image_id: int) -> None:
        image = await self.images.delete(image_id)
        self.storage.delete_after_commit(self.session, [image.image_path])
