"""
Product Repository.
"""

from sqlalchemy import select

from sitekit.backend.models.category import Category
from sitekit.backend.models.product import Product
from sitekit.backend.repositories.base import SortableRepository


class ProductRepository(SortableRepository[Product]):
    model = Product
    not_found_message = "Product not found"

    async def list_for_site(
        self,
        site: str,
        category_id: int | None = None,
        category_key: str | None = None,
        visible_only: bool = False,
    ) -> list[Product]:
        """
        Products of a site ordered by sort_order, then id.

        Args:
            site: Tenant key
            category_id: Only products in this category
            category_key: Only products whose category has this key
            visible_only: Skip hidden products
        """
        stmt = select(Product).where(Product.site == site)
        if category_id is not None:
            stmt = stmt.where(Product.category_id == category_id)
        if category_key:
            stmt = stmt.join(Category, Product.category_id == Category.id).where(
                Category.key == category_key
            )
        if visible_only:
            stmt = stmt.where(Product.visible.is_(True))
        result = await self.session.execute(stmt.order_by(Product.sort_order, Product.id))
        return list(result.scalars().all())

    async def get_for_site(self, site: str, product_id: int) -> Product:
        product = await self.find_one(Product.site == site, Product.id == product_id)
        if product is None:
            raise self.not_found_error()
        return product

    async def get_many_for_site(self, site: str, ids: list[int]) -> list[Product]:
        return await self.find(Product.site == site, Product.id.in_(ids))
