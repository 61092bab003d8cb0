"""
Demo Data Service.

Seeds a site with placeholder categories, contacts, hexagons and products
so a fresh install has something to render. Each part is only seeded
while the site has none of it, so running the seed twice is harmless.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.models.category import Category
from sitekit.backend.models.hexagon import Hexagon
from sitekit.backend.models.product import Product, ProductTranslation
from sitekit.backend.repositories.category import CategoryRepository
from sitekit.backend.repositories.hexagon import HexagonRepository
from sitekit.backend.repositories.product import ProductRepository
from sitekit.backend.repositories.site import SiteContactRepository
from sitekit.backend.services.base import BaseService

DEMO_CATEGORIES = [
    ("category-1", "Kategoria 1", "Category 1", "Kategorie 1", "Категория 1", "1"),
    ("category-2", "Kategoria 2", "Category 2", "Kategorie 2", "Категория 2", "2"),
    ("category-3", "Kategoria 3", "Category 3", "Kategorie 3", "Категория 3", "3"),
]

DEMO_CONTACT = {
    "phone": "+XX XXX XXX XXX",
    "email": "contact@example.com",
    "address": "Your Address",
    "contact_person": "Your Name",
}

DEMO_HEXAGONS = [
    ("quality", "Jakość", "Quality", "Qualität", "Качество", 1),
    ("delivery", "Dostawa", "Delivery", "Lieferung", "Доставка", 2),
    ("support", "Wsparcie", "Support", "Unterstützung", "Поддержка", 3),
]


@dataclass
class DemoSeedResult:
    categories: int = 0
    contacts: int = 0
    hexagons: int = 0
    products: int = 0


class DemoDataService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.categories = CategoryRepository(session)
        self.contacts = SiteContactRepository(session)
        self.hexagons = HexagonRepository(session)
        self.products = ProductRepository(session)

    async def seed(self, site: str) -> DemoSeedResult:
        result = DemoSeedResult()

        categories = await self.categories.list_for_site(site)
        if not categories:
            for index, (key, name_pl, name_en, name_de, name_ru, icon) in enumerate(DEMO_CATEGORIES, 1):
                self.session.add(
                    Category(
                        site=site,
                        key=key,
                        name_pl=name_pl,
                        name_en=name_en,
                        name_de=name_de,
                        name_ru=name_ru,
                        icon=icon,
                        sort_order=index,
                    )
                )
            await self.session.flush()
            categories = await self.categories.list_for_site(site)
            result.categories = len(categories)

        if await self.contacts.get_by_site(site) is None:
            await self.contacts.create(site=site, **DEMO_CONTACT)
            result.contacts = 1

        if not await self.hexagons.list_for_site(site):
            for key, name_pl, name_en, name_de, name_ru, icon_number in DEMO_HEXAGONS:
                self.session.add(
                    Hexagon(
                        site=site,
                        key=f"{site}-{key}",
                        name_pl=name_pl,
                        name_en=name_en,
                        name_de=name_de,
                        name_ru=name_ru,
                        icon_number=icon_number,
                        sort_order=icon_number,
                    )
                )
                result.hexagons += 1

        if not await self.products.list_for_site(site):
            for index, category in enumerate(categories, 1):
                self.session.add(
                    Product(
                        site=site,
                        category_id=category.id,
                        product_key=f"product-{index}",
                        price="100",
                        sort_order=index,
                        translations=[
                            ProductTranslation(lang="en", title=f"Product {index}"),
                            ProductTranslation(lang="de", title=f"Produkt {index}"),
                        ],
                    )
                )
                result.products += 1

        await self.session.flush()
        self._log_operation(
            "Demo data seeded",
            site=site,
            categories=result.categories,
            contacts=result.contacts,
            hexagons=result.hexagons,
            products=result.products,
        )
        return result
