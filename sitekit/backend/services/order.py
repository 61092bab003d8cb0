"""
Order Service.

Storefront leads: storage, status workflow and dashboard statistics.
"""

from datetime import date, datetime, time, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.utils import sanitize_input, utc_now
from sitekit.backend.models.order import ORDER_STATUSES, Order
from sitekit.backend.repositories.order import OrderRepository
from sitekit.backend.schemas.order import DailyCount, OrderCreate, OrderStats, PopularProduct
from sitekit.backend.services.base import BaseService

CHART_DAYS = 7


class OrderService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = OrderRepository(session)

    async def list_orders(
        self,
        site: str,
        status: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[Order]:
        if status == "all":
            status = None
        return await self.repo.list_for_site(site, status, date_from, date_to)

    async def get_order(self, site: str, order_id: int) -> Order:
        return await self.repo.get_for_site(site, order_id)

    async def create_order(self, site: str, data: OrderCreate) -> Order:
        """
        Store a public order. Free-text fields are sanitised.

        Raises:
            ValidationError: If name or phone is missing
        """
        self._validate_required(
            {"name": data.name, "phone": data.phone},
            ["name", "phone"],
            message="Name and phone are required",
        )
        order = await self._execute_db_operation(
            "create_order",
            self.repo.create(
                site=site,
                name=sanitize_input(data.name),
                phone=sanitize_input(data.phone),
                email=sanitize_input(data.email) or "",
                rental_period=sanitize_input(data.rental_period) or "",
                comment=sanitize_input(data.comment) or "",
                page=data.page or "",
                product_key=sanitize_input(data.product_key) or "",
                status="new",
            ),
        )
        self._log_operation("Order created", site=site, order_id=order.id)
        return order

    async def record_lead(self, site: str, **fields: str | None) -> Order:
        """Store an order captured by a lead form; values are stored as given."""
        return await self.repo.create(site=site, status="new", **fields)

    async def update_status(self, site: str, order_id: int, status: str) -> Order:
        self._validate_choice(status, ORDER_STATUSES, "Invalid status")
        order = await self.repo.get_for_site(site, order_id)
        self._log_operation("Order status changed", order_id=order_id, status=status)
        return await self.repo.update_instance(order, status=status)

    async def update_notes(self, site: str, order_id: int, notes: str | None) -> Order:
        order = await self.repo.get_for_site(site, order_id)
        return await self.repo.update_instance(order, notes=notes or "")

    async def delete_order(self, site: str, order_id: int) -> None:
        order = await self.repo.get_for_site(site, order_id)
        await self.session.delete(order)
        await self.session.flush()
        self._log_operation("Order deleted", site=site, order_id=order_id)

    async def get_stats(self, site: str) -> OrderStats:
        counts = await self.repo.count_by_status(site)
        return OrderStats(
            total=sum(counts.values()),
            new=counts.get("new", 0),
            in_progress=counts.get("in_progress", 0),
            completed=counts.get("completed", 0),
        )

    async def get_chart(self, site: str, today: date | None = None) -> list[DailyCount]:
        """Order counts for the last seven days, oldest first, zero days included."""
        today = today or utc_now().date()
        first_day = today - timedelta(days=CHART_DAYS - 1)
        counts = await self.repo.daily_counts(site, datetime.combine(first_day, time.min))
        days = [first_day + timedelta(days=offset) for offset in range(CHART_DAYS)]
        return [
            DailyCount(date=day.isoformat(), count=counts.get(day.isoformat(), 0))
            for day in days
        ]

    async def get_popular(self, site: str) -> list[PopularProduct]:
        rows = await self.repo.popular_products(site)
        return [PopularProduct(product_key=key, count=count) for key, count in rows]
