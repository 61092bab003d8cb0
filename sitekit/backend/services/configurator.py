"""
Site Configurator Service.

Prices a wizard configuration and forwards submitted configurations to
Telegram, storing each one as an order whose comment is the
configuration JSON.
"""

import json

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.config import get_app_config
from sitekit.backend.core.exceptions import ValidationError
from sitekit.backend.core.logging import get_logger
from sitekit.backend.core.utils import escape_html
from sitekit.backend.gateway.adapters.telegram import TelegramFactory
from sitekit.backend.schemas.configurator import (
    ConfigurationRequest,
    ConfiguratorModule,
    PriceBreakdown,
)
from sitekit.backend.services.leads import format_amount, is_valid_name, is_valid_phone
from sitekit.backend.services.order import OrderService
from sitekit.backend.services.pricing import calculate_breakdown, effective_module_price
from sitekit.backend.services.telegram import TelegramNotifier, local_timestamp

logger = get_logger(__name__)

CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "RUB": "₽"}

_modules_adapter = TypeAdapter(list[ConfiguratorModule])


def currency_symbol(currency: str | None) -> str:
    return CURRENCY_SYMBOLS.get((currency or "").upper(), CURRENCY_SYMBOLS["EUR"])


def parse_modules(raw: object, required: bool = True) -> list[ConfiguratorModule]:
    """
    Validate the submitted module list.

    Raises:
        ValidationError: If modules is not a list of module objects
    """
    if raw is None and not required:
        return []
    if not isinstance(raw, list):
        raise ValidationError("Modules must be an array")
    try:
        return _modules_adapter.validate_python(raw)
    except PydanticValidationError as e:
        raise ValidationError("Invalid module entry") from e


def discount_percent(request: ConfigurationRequest) -> float:
    """Explicit discount, else the selected package's discount."""
    if request.discount is not None:
        return request.discount
    if request.package is not None:
        return request.package.discount
    return 0


def price_configuration(request: ConfigurationRequest, modules: list[ConfiguratorModule]) -> PriceBreakdown:
    base = request.site_type.base_price if request.site_type else 0
    prices = [effective_module_price(module, request.bot_config) for module in modules]
    return calculate_breakdown(base, prices, discount_percent(request))


def format_configuration_message(
    request: ConfigurationRequest,
    modules: list[ConfiguratorModule],
    breakdown: PriceBreakdown,
    total: float,
) -> str:
    symbol = currency_symbol(request.currency)
    site_type = request.site_type

    if modules:
        module_lines = "\n".join(
            f"  • {escape_html(module.label)}: {symbol}{format_amount(effective_module_price(module, request.bot_config))}"
            for module in modules
        )
    else:
        module_lines = "  <i>No modules selected</i>"

    lines = [
        "🔧 <b>NEW WEBSITE REQUEST</b>",
        "",
        f"<b>Site type:</b> {escape_html(site_type.label)}",
        f"<b>Base price:</b> {symbol}{format_amount(site_type.base_price)}",
    ]
    if request.package is not None:
        lines.append(f"<b>Package:</b> {escape_html(request.package.label)}")
    lines += ["", "<b>Selected modules:</b>", module_lines]

    bot = request.bot_config
    if bot is not None:
        addons = f" + {', '.join(escape_html(a) for a in bot.addons)}" if bot.addons else ""
        lines.append(f"<b>Telegram bot:</b> {escape_html(bot.tier_id)}{addons}")
    if breakdown.discount_pct > 0:
        lines.append(
            f"<b>Discount:</b> {format_amount(breakdown.discount_pct)}% (-{symbol}{breakdown.discount_amount})"
        )

    lines += [
        "",
        f"<b>TOTAL:</b> {symbol}{format_amount(total)}",
        "",
        f"<b>Client:</b> {escape_html(request.client_name)}",
        f"<b>Phone:</b> {escape_html(request.client_phone)}",
    ]
    if request.client_email:
        lines.append(f"<b>Email:</b> {escape_html(request.client_email)}")
    lines += ["", f"<b>Time:</b> {local_timestamp()}"]
    return "\n".join(lines)


class ConfiguratorService:
    def __init__(self, session: AsyncSession, factory: TelegramFactory | None = None) -> None:
        self.session = session
        self.factory = factory
        self.orders = OrderService(session)

    def quote(self, request: ConfigurationRequest) -> PriceBreakdown:
        modules = parse_modules(request.modules, required=False)
        return price_configuration(request, modules)

    async def submit(self, request: ConfigurationRequest) -> float:
        """
        Validate, price and forward a configuration.

        Returns:
            The total reported to the client (the client's own total when
            supplied, otherwise the server-side computation)
        """
        if not is_valid_name(request.client_name):
            raise ValidationError("Invalid name. Minimum 2 characters.")
        if not is_valid_phone(request.client_phone):
            raise ValidationError("Invalid phone. Minimum 9 digits.")
        if request.site_type is None or not request.site_type.id:
            raise ValidationError("Site type is required")
        modules = parse_modules(request.modules)

        breakdown = price_configuration(request, modules)
        total = request.total if request.total else breakdown.total
        site = request.site or get_app_config().telegram.lead_sites.configurator

        message = format_configuration_message(request, modules, breakdown, total)
        await TelegramNotifier(self.session, self.factory).send(site, message)

        configuration = {
            "siteType": request.site_type.model_dump(by_alias=True, exclude_none=True),
            "modules": [m.model_dump(by_alias=True, exclude_none=True) for m in modules],
            "package": request.package.model_dump(by_alias=True, exclude_none=True) if request.package else None,
            "discount": breakdown.discount_pct,
            "breakdown": breakdown.model_dump(),
            "total": total,
            "botConfig": request.bot_config.model_dump(by_alias=True) if request.bot_config else None,
            "currency": request.currency,
        }
        try:
            async with self.session.begin_nested():
                await self.orders.record_lead(
                    site,
                    name=request.client_name,
                    phone=request.client_phone,
                    email=request.client_email or "",
                    comment=json.dumps(configuration, ensure_ascii=False),
                )
        except SQLAlchemyError as e:
            logger.error("Failed to store configuration", extra={"site": site, "error": str(e)})

        logger.info(
            "Configuration forwarded",
            extra={"site": site, "modules": len(modules), "total": total},
        )
        return total
