"""
Order Repository.

Lead orders plus the aggregate queries behind the dashboard widgets.
"""

from datetime import date, datetime, time, timedelta

from sqlalchemy import func, select

from sitekit.backend.models.order import Order
from sitekit.backend.repositories.base import BaseRepository


class OrderRepository(BaseRepository[Order]):
    model = Order
    not_found_message = "Order not found"

    async def list_for_site(
        self,
        site: str,
        status: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[Order]:
        """Newest first. `date_to` includes the whole day."""
        where = [Order.site == site]
        if status:
            where.append(Order.status == status)
        if date_from:
            where.append(Order.created_at >= datetime.combine(date_from, time.min))
        if date_to:
            where.append(Order.created_at < datetime.combine(date_to + timedelta(days=1), time.min))
        return await self.find(*where, order_by=[Order.created_at.desc(), Order.id.desc()])

    async def get_for_site(self, site: str, order_id: int) -> Order:
        order = await self.find_one(Order.site == site, Order.id == order_id)
        if order is None:
            raise self.not_found_error()
        return order

    async def count_by_status(self, site: str) -> dict[str, int]:
        result = await self.session.execute(
            select(Order.status, func.count())
            .where(Order.site == site)
            .group_by(Order.status)
        )
        return {status: count for status, count in result.all()}

    async def daily_counts(self, site: str, since: datetime) -> dict[str, int]:
        """Order counts per calendar day (YYYY-MM-DD) from `since` onward."""
        day = func.date(Order.created_at)
        result = await self.session.execute(
            select(day, func.count())
            .where(Order.site == site, Order.created_at >= since)
            .group_by(day)
        )
        return {str(row_day): count for row_day, count in result.all()}

    async def popular_products(self, site: str, limit: int = 5) -> list[tuple[str, int]]:
        count = func.count().label("count")
        result = await self.session.execute(
            select(Order.product_key, count)
            .where(
                Order.site == site,
                Order.product_key.is_not(None),
                Order.product_key != "",
            )
            .group_by(Order.product_key)
            .order_by(count.desc(), Order.product_key)
            .limit(limit)
        )
        return [(key, n) for key, n in result.all()]
