"""
Unit tests for lead validation and Telegram message formatting.
"""

from datetime import datetime, timezone

import pytest

from sitekit.backend.core.config import get_settings
from sitekit.backend.core.exceptions import AuthorizationError
from sitekit.backend.models.order import Order
from sitekit.backend.schemas.lead import (
    ContactLead,
    LeadItem,
    OrderLead,
    SpecContactLead,
    SpecRequestLead,
)
from sitekit.backend.services.leads import (
    cart_total,
    format_amount,
    format_cart_message,
    format_contact_message,
    format_single_order_message,
    format_site_order_message,
    format_spec_contact_message,
    format_spec_request_message,
    is_valid_name,
    is_valid_phone,
    verify_api_key,
)
from sitekit.backend.services.telegram import local_timestamp


class TestValidation:
    @pytest.mark.parametrize(("name", "valid"), [("Al", True), (" A ", False), ("", False), (None, False)])
    def test_name(self, name, valid):
        assert is_valid_name(name) is valid

    @pytest.mark.parametrize(
        ("phone", "valid"),
        [("+48 600 100 200", True), ("600-100-200", True), ("600 100 20", False), ("12345678", False), (None, False)],
    )
    def test_phone_counts_digits_only(self, phone, valid):
        assert is_valid_phone(phone) is valid


class TestApiKey:
    def test_no_key_configured_accepts_anything(self):
        verify_api_key(None)
        verify_api_key("whatever")

    def test_configured_key_must_match(self, monkeypatch):
        monkeypatch.setenv("WEBSITE_API_KEY", "site-key")
        get_settings.cache_clear()

        verify_api_key("site-key")
        with pytest.raises(AuthorizationError, match="Invalid API key"):
            verify_api_key("wrong")
        with pytest.raises(AuthorizationError):
            verify_api_key(None)


class TestAmounts:
    @pytest.mark.parametrize(("value", "text"), [(1200.0, "1200"), (12.5, "12.5"), (0, "0"), (900.5, "900.5")])
    def test_format_amount(self, value, text):
        assert format_amount(value) == text

    def test_cart_total(self):
        items = [LeadItem(name="Pillow", price=50, qty=2), LeadItem(name="Mattress", price=900.5)]

        assert cart_total(items) == 1000.5


class TestLocalTimestamp:
    def test_winter_time(self):
        now = datetime(2030, 1, 15, 12, 0, tzinfo=timezone.utc)

        assert local_timestamp(now) == "15.01.2030, 13:00:00"

    def test_summer_time(self):
        now = datetime(2030, 7, 15, 12, 0, tzinfo=timezone.utc)

        assert local_timestamp(now) == "15.07.2030, 14:00:00"


class TestMessages:
    def test_cart_message_lists_items(self):
        items = [LeadItem(name="Pillow", price=50, quantity=2), LeadItem(name="Bed", price=900, size="160x200")]

        text = format_cart_message(items, 1000, "Anna", "600100200", None, "Main St 1")

        assert text.startswith("🛒 <b>NEW CART ORDER</b>")
        assert "• Pillow - 2 × 50 zł" in text
        assert "• Bed (160x200) - 1 × 900 zł" in text
        assert "<b>Total:</b> 1000 zł" in text
        assert "<b>Address:</b> Main St 1" in text
        assert "<b>Email:</b>" not in text

    def test_single_order_escapes_user_input(self):
        lead = OrderLead(name="Anna <script>", phone="600100200", product="Oak & Pine", price=1200)

        text = format_single_order_message(lead)

        assert "<b>Client:</b> Anna &lt;script&gt;" in text
        assert "<b>Product:</b> Oak &amp; Pine" in text
        assert "<b>Price:</b> 1200 zł" in text
        assert "<b>Quantity:</b>" not in text

    def test_single_order_without_product(self):
        text = format_single_order_message(OrderLead(name="Anna", phone="600100200"))

        assert "<b>Product:</b> Not specified" in text
        assert "<b>Price:</b>" not in text

    def test_contact_message(self):
        text = format_contact_message(ContactLead(name="Anna", email="a@example.com", message="Call me back please"))

        assert text.startswith("📩 <b>WEBSITE MESSAGE</b>")
        assert "<b>Email:</b> a@example.com" in text
        assert "<b>Phone:</b>" not in text
        assert "Call me back please" in text

    def test_spec_request_defaults_page_to_home(self):
        text = format_spec_request_message(SpecRequestLead(name="Jan", phone="600100200", period="2 weeks"))

        assert "<b>Rental period:</b> 2 weeks" in text
        assert "<b>Page:</b> Home" in text

    @pytest.mark.parametrize(
        ("subject", "label"),
        [("rental", "Equipment rental"), ("payment", "Payment question"), ("warranty", "warranty"), (None, "Not specified")],
    )
    def test_spec_contact_subject_labels(self, subject, label):
        text = format_spec_contact_message(SpecContactLead(name="Jan", phone="600100200", subject=subject))

        assert f"<b>Subject:</b> {label}" in text
        assert "No message" in text

    def test_site_order_message_skips_empty_fields(self):
        order = Order(site="mattress", name="Anna", phone="600100200", email="", page="index", comment="")

        text = format_site_order_message(order)

        assert text.startswith("<b>New request!</b>")
        assert "<b>Page:</b> index" in text
        assert "<b>Email:</b>" not in text
        assert "<b>Comment:</b>" not in text
