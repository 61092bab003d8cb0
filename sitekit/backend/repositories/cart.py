"""
Cart and Checkout Repositories.
"""

from datetime import datetime

from sqlalchemy import delete, func, select

from sitekit.backend.models.cart import CartItem, CheckoutOrder
from sitekit.backend.repositories.base import BaseRepository


class CartItemRepository(BaseRepository[CartItem]):
    model = CartItem
    not_found_message = "Cart item not found"

    async def list_for_session(self, session_id: str) -> list[CartItem]:
        return await self.find(
            CartItem.session_id == session_id,
            order_by=[CartItem.created_at, CartItem.id],
        )

    async def get_for_session(self, session_id: str, item_id: int) -> CartItem:
        item = await self.find_one(CartItem.session_id == session_id, CartItem.id == item_id)
        if item is None:
            raise self.not_found_error()
        return item

    async def find_line(self, session_id: str, product_id: int) -> CartItem | None:
        return await self.find_one(
            CartItem.session_id == session_id,
            CartItem.product_id == product_id,
        )

    async def count_for_session(self, session_id: str) -> int:
        return await self.count(CartItem.session_id == session_id)

    async def clear(self, session_id: str) -> int:
        result = await self.session.execute(
            delete(CartItem)
            .where(CartItem.session_id == session_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0


class CheckoutOrderRepository(BaseRepository[CheckoutOrder]):
    model = CheckoutOrder
    not_found_message = "Order not found"

    async def list_orders(self, status: str | None = None) -> list[CheckoutOrder]:
        where = [CheckoutOrder.status == status] if status else []
        return await self.find(
            *where,
            order_by=[CheckoutOrder.created_at.desc(), CheckoutOrder.id.desc()],
        )

    async def get_by_number(self, order_number: str) -> CheckoutOrder:
        order = await self.find_one(CheckoutOrder.order_number == order_number)
        if order is None:
            raise self.not_found_error()
        return order

    async def count_by_status(self) -> dict[str, int]:
        result = await self.session.execute(
            select(CheckoutOrder.status, func.count()).group_by(CheckoutOrder.status)
        )
        return {status: count for status, count in result.all()}

    async def revenue(self, since: datetime | None = None) -> tuple[int, float]:
        """Order count and revenue, excluding cancelled orders."""
        stmt = select(func.count(), func.coalesce(func.sum(CheckoutOrder.total), 0)).where(
            CheckoutOrder.status != "cancelled"
        )
        if since is not None:
            stmt = stmt.where(CheckoutOrder.created_at >= since)
        count, total = (await self.session.execute(stmt)).one()
        return count, float(total)
