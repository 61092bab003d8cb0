"""
Category Repository.
"""

from sitekit.backend.models.category import Category
from sitekit.backend.repositories.base import SortableRepository


class CategoryRepository(SortableRepository[Category]):
    model = Category
    not_found_message = "Category not found"

    async def list_for_site(self, site: str, visible_only: bool = False) -> list[Category]:
        where = [Category.site == site]
        if visible_only:
            where.append(Category.visible.is_(True))
        return await self.find(*where, order_by=[Category.sort_order, Category.id])

    async def get_for_site(self, site: str, category_id: int) -> Category:
        category = await self.find_one(Category.site == site, Category.id == category_id)
        if category is None:
            raise self.not_found_error()
        return category

    async def get_by_key(self, site: str, key: str) -> Category | None:
        return await self.find_one(Category.site == site, Category.key == key)
