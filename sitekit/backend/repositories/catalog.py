"""
Catalog Repositories.
"""

from sqlalchemy import ColumnElement, func, or_, select, update

from sitekit.backend.models.catalog import CatalogImage, CatalogProduct
from sitekit.backend.repositories.base import BaseRepository

CATALOG_SORTS = {
    "price_asc": (CatalogProduct.price.asc(), CatalogProduct.id.desc()),
    "price_desc": (CatalogProduct.price.desc(), CatalogProduct.id.desc()),
    "name": (CatalogProduct.name.asc(), CatalogProduct.id.desc()),
    "newest": (CatalogProduct.created_at.desc(), CatalogProduct.id.desc()),
}
DEFAULT_SORT = (CatalogProduct.sort_order.asc(), CatalogProduct.id.desc())


class CatalogProductRepository(BaseRepository[CatalogProduct]):
    model = CatalogProduct
    not_found_message = "Product not found"

    @staticmethod
    def _public_filters(category: str | None, search: str | None) -> list[ColumnElement[bool]]:
        where: list[ColumnElement[bool]] = [CatalogProduct.visible.is_(True)]
        if category:
            where.append(CatalogProduct.category == category)
        if search:
            pattern = f"%{search}%"
            where.append(
                or_(
                    CatalogProduct.name.ilike(pattern),
                    CatalogProduct.description.ilike(pattern),
                )
            )
        return where

    async def search_visible(
        self,
        category: str | None = None,
        search: str | None = None,
        sort: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[CatalogProduct], int]:
        """One page of visible products and the total number matching."""
        where = self._public_filters(category, search)
        order_by = CATALOG_SORTS.get(sort or "", DEFAULT_SORT)
        items = await self.find(*where, order_by=order_by, limit=limit, offset=offset)
        return items, await self.count(*where)

    async def get_visible(self, product_id: int) -> CatalogProduct:
        product = await self.find_one(
            CatalogProduct.id == product_id,
            CatalogProduct.visible.is_(True),
        )
        if product is None:
            raise self.not_found_error()
        return product

    async def list_all(self) -> list[CatalogProduct]:
        return await self.find(order_by=DEFAULT_SORT)

    async def category_counts(self) -> list[tuple[str, int]]:
        result = await self.session.execute(
            select(CatalogProduct.category, func.count())
            .where(
                CatalogProduct.visible.is_(True),
                CatalogProduct.category.is_not(None),
                CatalogProduct.category != "",
            )
            .group_by(CatalogProduct.category)
            .order_by(CatalogProduct.category)
        )
        return [(category, count) for category, count in result.all()]


class CatalogImageRepository(BaseRepository[CatalogImage]):
    model = CatalogImage
    not_found_message = "Image not found"

    async def clear_primary(self, product_id: int) -> None:
        await self.session.execute(
            update(CatalogImage)
            .where(CatalogImage.product_id == product_id)
            .values(is_primary=False)
            .execution_options(synchronize_session="fetch")
        )
