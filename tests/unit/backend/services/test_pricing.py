"""
Unit tests for configurator pricing.
"""

import pytest

from sitekit.backend.core.exceptions import ValidationError
from sitekit.backend.schemas.configurator import BotConfig, ConfigurationRequest, ConfiguratorModule
from sitekit.backend.services.configurator import currency_symbol, discount_percent, parse_modules
from sitekit.backend.services.pricing import (
    calculate_breakdown,
    effective_module_price,
    package_price,
    round_half_up,
)

BOT_MODULE = ConfiguratorModule(
    id="bot",
    price=300,
    tiers=[{"id": "basic", "price": 200}, {"id": "pro", "price": 350}],
    addons=[{"id": "payments", "price": 100}, {"id": "crm", "price": 150}],
)


class TestRoundHalfUp:
    @pytest.mark.parametrize(("value", "expected"), [(94.5, 95), (94.49, 94), (0.5, 1), (2.5, 3), (100, 100)])
    def test_rounds_half_away_from_zero(self, value, expected):
        assert round_half_up(value) == expected


class TestEffectiveModulePrice:
    def test_plain_module_uses_price(self):
        assert effective_module_price(ConfiguratorModule(price=120)) == 120

    def test_selected_tier_and_addons(self):
        config = BotConfig(tier_id="pro", addons=["payments", "crm"])

        assert effective_module_price(BOT_MODULE, config) == 600

    def test_unknown_tier_falls_back_to_module_price(self):
        assert effective_module_price(BOT_MODULE, BotConfig(tierId="vip")) == 300

    def test_unknown_addons_ignored(self):
        config = BotConfig(tier_id="basic", addons=["payments", "nonexistent"])

        assert effective_module_price(BOT_MODULE, config) == 300


class TestBreakdown:
    def test_discount_rounded_half_up(self):
        breakdown = calculate_breakdown(500, [300, 150], discount_pct=10)

        assert breakdown.modules_sum == 450
        assert breakdown.discount_amount == 95
        assert breakdown.total == 855

    def test_no_discount(self):
        breakdown = calculate_breakdown(500, [])

        assert breakdown.discount_amount == 0
        assert breakdown.total == 500

    def test_package_price(self):
        assert package_price(500, [300, 150], 20) == 760


class TestConfiguratorHelpers:
    @pytest.mark.parametrize(
        ("currency", "symbol"),
        [("EUR", "€"), ("usd", "$"), ("RUB", "₽"), ("PLN", "€"), (None, "€")],
    )
    def test_currency_symbol(self, currency, symbol):
        assert currency_symbol(currency) == symbol

    def test_parse_modules_requires_list(self):
        with pytest.raises(ValidationError, match="Modules must be an array"):
            parse_modules({"id": "bot"})

    def test_parse_modules_optional_when_not_required(self):
        assert parse_modules(None, required=False) == []

    def test_parse_modules_validates_entries(self):
        with pytest.raises(ValidationError, match="Invalid module entry"):
            parse_modules([{"id": "bot", "price": "a lot"}])

    def test_explicit_discount_wins_over_package(self):
        request = ConfigurationRequest(discount=5, package={"id": "start", "discount": 20})

        assert discount_percent(request) == 5

    def test_package_discount_used_when_no_explicit_discount(self):
        request = ConfigurationRequest(package={"id": "start", "discount": 20})

        assert discount_percent(request) == 20
