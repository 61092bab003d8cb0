"""
Hexagon Repository.
"""

from sitekit.backend.models.hexagon import Hexagon
from sitekit.backend.repositories.base import SortableRepository


class HexagonRepository(SortableRepository[Hexagon]):
    model = Hexagon
    not_found_message = "Hexagon not found"

    async def list_for_site(self, site: str, visible_only: bool = False) -> list[Hexagon]:
        where = [Hexagon.site == site]
        if visible_only:
            where.append(Hexagon.visible.is_(True))
        return await self.find(*where, order_by=[Hexagon.sort_order, Hexagon.id])

    async def get_for_site(self, site: str, hexagon_id: int) -> Hexagon:
        hexagon = await self.find_one(Hexagon.site == site, Hexagon.id == hexagon_id)
        if hexagon is None:
            raise self.not_found_error()
        return hexagon
