"""
Cart and Checkout Service.

Carts belong to an anonymous cart session. Lines snapshot the catalog
product's name and current price (sale price when set) when added.
"""

import secrets
import time

from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.exceptions import NotFoundError, ValidationError
from sitekit.backend.core.utils import utc_now
from sitekit.backend.models.cart import CHECKOUT_STATUSES, CartItem, CheckoutOrder, CheckoutOrderItem
from sitekit.backend.repositories.cart import CartItemRepository, CheckoutOrderRepository
from sitekit.backend.repositories.catalog import CatalogProductRepository
from sitekit.backend.schemas.cart import CheckoutRequest, CheckoutStats, MonthSummary
from sitekit.backend.services.base import BaseService


def generate_order_number() -> str:
    """ORD-<unix seconds>-<4 random digits>."""
    return f"ORD-{int(time.time())}-{1000 + secrets.randbelow(9000)}"


def cart_total(items: list[CartItem]) -> float:
    return sum(item.product_price * item.quantity for item in items)


class CartService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.items = CartItemRepository(session)
        self.orders = CheckoutOrderRepository(session)
        self.products = CatalogProductRepository(session)

    # Cart

    async def get_cart(self, session_id: str) -> list[CartItem]:
        return await self.items.list_for_session(session_id)

    async def add_item(self, session_id: str, product_id: int, quantity: int = 1) -> int:
        """
        Add a product to the cart, merging with an existing line.

        Returns:
            Number of lines in the cart

        Raises:
            NotFoundError: If the product does not exist or is hidden
        """
        try:
            product = await self.products.get_visible(product_id)
        except NotFoundError:
            raise NotFoundError("Product not found") from None

        line = await self.items.find_line(session_id, product_id)
        if line is not None:
            await self.items.update_instance(line, quantity=line.quantity + quantity)
        else:
            price = product.sale_price if product.sale_price is not None else product.price
            await self.items.create(
                session_id=session_id,
                product_id=product.id,
                product_name=product.name,
                product_price=price,
                quantity=quantity,
            )
        return await self.items.count_for_session(session_id)

    async def update_quantity(self, session_id: str, item_id: int, quantity: int) -> CartItem:
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")
        item = await self.items.get_for_session(session_id, item_id)
        return await self.items.update_instance(item, quantity=quantity)

    async def remove_item(self, session_id: str, item_id: int) -> None:
        item = await self.items.get_for_session(session_id, item_id)
        await self.session.delete(item)
        await self.session.flush()

    async def clear(self, session_id: str) -> None:
        await self.items.clear(session_id)

    # Checkout

    async def checkout(self, session_id: str, data: CheckoutRequest) -> CheckoutOrder:
        """
        Turn the cart into an order and empty it.

        Raises:
            ValidationError: If client name or phone is missing, or the
                cart is empty
        """
        self._validate_required(
            {"client_name": data.client_name, "client_phone": data.client_phone},
            ["client_name", "client_phone"],
            message="Client name and phone are required",
        )
        lines = await self.items.list_for_session(session_id)
        if not lines:
            raise ValidationError("Cart is empty")

        order = CheckoutOrder(
            order_number=generate_order_number(),
            client_name=data.client_name.strip(),
            client_phone=data.client_phone.strip(),
            client_email=data.client_email or None,
            client_address=data.client_address or None,
            notes=data.notes or None,
            total=cart_total(lines),
            status="new",
            items=[
                CheckoutOrderItem(
                    product_id=line.product_id,
                    product_name=line.product_name,
                    product_price=line.product_price,
                    quantity=line.quantity,
                )
                for line in lines
            ],
        )
        self.session.add(order)
        await self._execute_db_operation(
            "checkout",
            self.session.flush(),
            conflict_message="Could not allocate an order number, please retry",
        )
        await self.items.clear(session_id)
        self._log_operation(
            "Checkout completed",
            order_number=order.order_number,
            items=len(lines),
            total=order.total,
        )
        return order

    async def track(self, order_number: str) -> CheckoutOrder:
        return await self.orders.get_by_number(order_number)

    # Admin

    async def list_orders(self, status: str | None = None) -> list[CheckoutOrder]:
        return await self.orders.list_orders(status)

    async def get_order(self, order_id: int) -> CheckoutOrder:
        return await self.orders.get_by_id(order_id)

    async def update_status(self, order_id: int, status: str) -> CheckoutOrder:
        self._validate_choice(status, CHECKOUT_STATUSES, f"Status must be: {', '.join(CHECKOUT_STATUSES)}")
        order = await self.orders.get_by_id(order_id)
        return await self.orders.update_instance(order, status=status)

    async def delete_order(self, order_id: int) -> None:
        await self.orders.delete(order_id)

    async def stats(self) -> CheckoutStats:
        counts = await self.orders.count_by_status()
        by_status = {status: counts.get(status, 0) for status in CHECKOUT_STATUSES}
        _, revenue = await self.orders.revenue()
        month_start = utc_now().replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        month_orders, month_revenue = await self.orders.revenue(since=month_start)
        return CheckoutStats(
            total_orders=sum(counts.values()),
            total_revenue=revenue,
            by_status=by_status,
            this_month=MonthSummary(orders=month_orders, revenue=month_revenue),
        )
