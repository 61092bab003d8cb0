"""
Site Configurator Schemas.

The configurator wizard posts camelCase keys (`siteType`, `basePrice`,
`botConfig`, `clientName`...); snake_case is accepted as well.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WizardModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class _Named(_WizardModel):
    id: str | None = None
    name: str | None = None
    name_en: str | None = Field(default=None, alias="name_en")
    name_ru: str | None = Field(default=None, alias="name_ru")

    @property
    def label(self) -> str:
        return self.name_ru or self.name_en or self.name or self.id or ""


class PriceOption(_Named):
    """A module tier or add-on."""

    price: float = 0


class ConfiguratorModule(_Named):
    price: float = 0
    tiers: list[PriceOption] | None = None
    addons: list[PriceOption] | None = None


class SiteType(_Named):
    base_price: float = 0


class PackageChoice(_Named):
    discount: float = 0


class BotConfig(_WizardModel):
    tier_id: str | None = None
    addons: list[str] = Field(default_factory=list)


class ConfigurationRequest(_WizardModel):
    """
    A configurator submission.

    `modules` is validated by the service so a non-list is reported as a
    400 with a readable message rather than a schema error.
    """

    site_type: SiteType | None = None
    modules: Any = None
    package: PackageChoice | None = None
    discount: float | None = None
    bot_config: BotConfig | None = None
    currency: str = "EUR"
    total: float | None = None
    client_name: str = ""
    client_phone: str = ""
    client_email: str | None = None
    site: str | None = None


class PriceBreakdown(BaseModel):
    base: float
    modules_sum: float
    discount_pct: float
    discount_amount: int
    total: float


class QuoteResponse(BaseModel):
    currency: str
    breakdown: PriceBreakdown


class SubmitResponse(BaseModel):
    message: str
    total: float
