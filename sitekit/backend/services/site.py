"""
Site Service.

Per-site contact cards and key/value settings.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.models.site import SiteContact
from sitekit.backend.repositories.site import SiteContactRepository, SiteSettingRepository
from sitekit.backend.schemas.site import ContactUpdate
from sitekit.backend.services.base import BaseService


def _setting_value(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class SiteService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.contacts = SiteContactRepository(session)
        self.settings = SiteSettingRepository(session)

    async def list_contacts(self) -> list[SiteContact]:
        return await self.contacts.list_all()

    async def get_contact(self, site: str) -> SiteContact:
        contact = await self.contacts.get_by_site(site)
        if contact is None:
            raise self.contacts.not_found_error()
        return contact

    async def find_contact(self, site: str) -> SiteContact | None:
        return await self.contacts.get_by_site(site)

    async def upsert_contact(self, site: str, data: ContactUpdate) -> SiteContact:
        """
        Create or replace a site's contact card.

        Raises:
            ValidationError: If phone or email is missing
        """
        self._validate_required(
            data.model_dump(),
            ["phone", "email"],
            message="Phone and email are required",
        )
        contact = await self.contacts.get_by_site(site)
        self._log_operation("Saving contacts", site=site, created=contact is None)
        if contact is None:
            return await self.contacts.create(site=site, **data.model_dump())
        return await self.contacts.update_instance(contact, **data.model_dump())

    async def get_settings(self, site: str) -> dict[str, str | None]:
        """Settings of a site keyed without the `<site>_` prefix."""
        prefix = f"{site}_"
        rows = await self.settings.list_with_prefix(prefix)
        return {row.key[len(prefix):]: row.value for row in rows}

    async def update_settings(self, site: str, values: dict[str, Any]) -> dict[str, str | None]:
        for key, value in values.items():
            await self.settings.upsert(f"{site}_{key}", _setting_value(value))
        self._log_operation("Settings updated", site=site, keys=sorted(values))
        return await self.get_settings(site)
