"""
FAQ Repositories.
"""

from sqlalchemy import update

from sitekit.backend.models.faq import FaqCategory, FaqItem
from sitekit.backend.repositories.base import BaseRepository


class FaqCategoryRepository(BaseRepository[FaqCategory]):
    model = FaqCategory
    not_found_message = "Category not found"

    async def list_ordered(self) -> list[FaqCategory]:
        return await self.find(order_by=[FaqCategory.sort_order, FaqCategory.id])


class FaqItemRepository(BaseRepository[FaqItem]):
    model = FaqItem
    not_found_message = "FAQ item not found"

    async def list_items(
        self,
        category_id: int | None = None,
        visible_only: bool = False,
    ) -> list[FaqItem]:
        where = []
        if category_id is not None:
            where.append(FaqItem.category_id == category_id)
        if visible_only:
            where.append(FaqItem.visible.is_(True))
        return await self.find(*where, order_by=[FaqItem.sort_order, FaqItem.id])

    async def detach_category(self, category_id: int) -> None:
        await self.session.execute(
            update(FaqItem)
            .where(FaqItem.category_id == category_id)
            .values(category_id=None)
            .execution_options(synchronize_session="fetch")
        )
