"""
Hexagon Service.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.models.hexagon import Hexagon
from sitekit.backend.repositories.hexagon import HexagonRepository
from sitekit.backend.schemas.hexagon import HexagonCreate, HexagonUpdate
from sitekit.backend.services.base import BaseService

DUPLICATE_KEY_MESSAGE = "Hexagon with this key already exists"


class HexagonService(BaseService):
    """Feature tiles; keys are unique across all sites."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = HexagonRepository(session)

    async def list_hexagons(self, site: str, visible_only: bool = False) -> list[Hexagon]:
        return await self.repo.list_for_site(site, visible_only=visible_only)

    async def get_hexagon(self, site: str, hexagon_id: int) -> Hexagon:
        return await self.repo.get_for_site(site, hexagon_id)

    async def create_hexagon(self, site: str, data: HexagonCreate) -> Hexagon:
        self._validate_required(
            data.model_dump(),
            ["key", "name_en"],
            message="Key and name_en are required",
        )
        sort_order = await self.repo.next_sort_order(Hexagon.site == site)
        self._log_operation("Creating hexagon", site=site, key=data.key)
        return await self._execute_db_operation(
            "create_hexagon",
            self.repo.create(site=site, sort_order=sort_order, **data.model_dump()),
            conflict_message=DUPLICATE_KEY_MESSAGE,
        )

    async def update_hexagon(self, site: str, hexagon_id: int, data: HexagonUpdate) -> Hexagon:
        hexagon = await self.repo.get_for_site(site, hexagon_id)
        update_data = self._changes(data, self.repo.model)
        for field in ("key", "name_en"):
            if field in update_data:
                self._validate_required(update_data, [field], message="Key and name_en are required")

        if not update_data:
            return hexagon

        return await self._execute_db_operation(
            "update_hexagon",
            self.repo.update_instance(hexagon, **update_data),
            conflict_message=DUPLICATE_KEY_MESSAGE,
        )

    async def set_visibility(self, site: str, hexagon_id: int, visible: bool) -> Hexagon:
        hexagon = await self.repo.get_for_site(site, hexagon_id)
        return await self.repo.update_instance(hexagon, visible=visible)

    async def reorder(self, site: str, pairs: list[tuple[int, int]]) -> int:
        return await self.repo.reorder(pairs, Hexagon.site == site)

    async def delete_hexagon(self, site: str, hexagon_id: int) -> None:
        hexagon = await self.repo.get_for_site(site, hexagon_id)
        self._log_operation("Deleting hexagon", site=site, hexagon_id=hexagon_id)
        await self.session.delete(hexagon)
        await self.session.flush()
