"""
Site Settings and Contacts Repositories.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.models.site import SiteContact, SiteSetting
from sitekit.backend.repositories.base import BaseRepository


class SiteSettingRepository:
    """Key/value settings. Keys are strings, so this does not extend BaseRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_value(self, key: str) -> str | None:
        setting = await self.session.get(SiteSetting, key)
        return setting.value if setting else None

    async def list_with_prefix(self, prefix: str) -> list[SiteSetting]:
        result = await self.session.execute(
            select(SiteSetting)
            .where(SiteSetting.key.startswith(prefix, autoescape=True))
            .order_by(SiteSetting.key)
        )
        return list(result.scalars().all())

    async def upsert(self, key: str, value: str | None) -> SiteSetting:
        setting = await self.session.get(SiteSetting, key)
        if setting is None:
            setting = SiteSetting(key=key, value=value)
            self.session.add(setting)
        else:
            setting.value = value
        await self.session.flush()
        return setting


class SiteContactRepository(BaseRepository[SiteContact]):
    model = SiteContact
    not_found_message = "Contacts not found"

    async def get_by_site(self, site: str) -> SiteContact | None:
        return await self.find_one(SiteContact.site == site)

    async def list_all(self) -> list[SiteContact]:
        return await self.find(order_by=[SiteContact.site])
