"""
Configurator Pricing.

Pure functions shared by the quote and submit endpoints. Rounding is
half-up to whole currency units, as the wizard displays prices.
"""

import math
from collections.abc import Iterable

from sitekit.backend.schemas.configurator import BotConfig, ConfiguratorModule, PriceBreakdown


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def effective_module_price(module: ConfiguratorModule, bot_config: BotConfig | None = None) -> float:
    """
    Price of a module as configured.

    Tiered modules cost the selected tier (or the module price when no
    tier matches) plus every selected add-on.
    """
    if not module.tiers:
        return module.price

    config = bot_config or BotConfig()
    tier = next((t for t in module.tiers if t.id == config.tier_id), None)
    price = tier.price if tier is not None else module.price

    addons = {addon.id: addon.price for addon in module.addons or []}
    return price + sum(addons.get(addon_id, 0) for addon_id in config.addons)


def calculate_breakdown(base: float, module_prices: Iterable[float], discount_pct: float = 0) -> PriceBreakdown:
    modules_sum = sum(module_prices)
    subtotal = base + modules_sum
    discount_amount = round_half_up(subtotal * discount_pct / 100) if discount_pct > 0 else 0
    return PriceBreakdown(
        base=base,
        modules_sum=modules_sum,
        discount_pct=discount_pct,
        discount_amount=discount_amount,
        total=subtotal - discount_amount,
    )


def package_price(base: float, module_prices: Iterable[float], discount_pct: float = 0) -> int:
    """Displayed price of a package: subtotal less its discount, rounded."""
    subtotal = base + sum(module_prices)
    return round_half_up(subtotal - subtotal * discount_pct / 100)
