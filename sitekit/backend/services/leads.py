"""
Lead Capture Service.

Turns website form submissions into Telegram messages for the site's
chat and stores them as orders. Messages use Telegram HTML parse mode;
every user-supplied value is escaped before it is embedded.

Delivery failures propagate (502 / 500 when Telegram is not set up).
Failures to store the order after a successful delivery are logged only.
"""

import json
from collections.abc import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.config import get_app_config, get_settings
from sitekit.backend.core.exceptions import (
    AuthorizationError,
    ExternalServiceError,
    ServiceNotConfiguredError,
    ValidationError,
)
from sitekit.backend.core.logging import get_logger
from sitekit.backend.core.utils import count_digits, escape_html
from sitekit.backend.gateway.adapters.telegram import TelegramFactory
from sitekit.backend.models.order import Order
from sitekit.backend.schemas.lead import (
    CartOrderLead,
    ContactLead,
    LeadItem,
    OrderLead,
    SpecContactLead,
    SpecRequestLead,
)
from sitekit.backend.services.order import OrderService
from sitekit.backend.services.telegram import TelegramNotifier, local_timestamp

logger = get_logger(__name__)

MIN_NAME_LENGTH = 2
MIN_PHONE_DIGITS = 9
MIN_CONTACT_MESSAGE_LENGTH = 10

SPEC_CONTACT_SUBJECTS = {
    "rental": "Equipment rental",
    "partnership": "Long-term partnership",
    "payment": "Payment question",
    "other": "Other",
}


def verify_api_key(provided: str | None) -> None:
    """
    Compare a form's API key with WEBSITE_API_KEY.

    No check is made when WEBSITE_API_KEY is not set.

    Raises:
        AuthorizationError: On a missing or wrong key
    """
    expected = get_settings().website_api_key
    if expected and provided != expected:
        raise AuthorizationError("Invalid API key")


def is_valid_name(name: str | None) -> bool:
    return bool(name) and len(name.strip()) >= MIN_NAME_LENGTH


def is_valid_phone(phone: str | None) -> bool:
    return bool(phone) and count_digits(phone) >= MIN_PHONE_DIGITS


def format_amount(value: float) -> str:
    """Render 1200.0 as "1200" and 12.5 as "12.5"."""
    return f"{value:g}" if value != int(value) else str(int(value))


def _lines(*lines: str | None) -> str:
    return "\n".join(line for line in lines if line is not None)


def _optional(label: str, value: object) -> str | None:
    if value in (None, ""):
        return None
    return f"<b>{label}:</b> {escape_html(value)}"


def _items_block(items: Iterable[LeadItem]) -> str:
    rows = []
    for item in items:
        size = f" ({escape_html(item.size)})" if item.size else ""
        rows.append(
            f"• {escape_html(item.name)}{size} - {item.quantity} × {format_amount(item.price)} zł"
        )
    return "\n".join(rows)


def _client_block(name: str, phone: str | None, email: str | None, address: str | None = None) -> str:
    return _lines(
        f"<b>Client:</b> {escape_html(name)}",
        _optional("Phone", phone),
        _optional("Email", email),
        _optional("Address", address),
    )


def cart_total(items: Iterable[LeadItem]) -> float:
    return sum(item.line_total for item in items)


def format_cart_message(
    items: list[LeadItem],
    total: float,
    name: str,
    phone: str,
    email: str | None,
    address: str | None,
) -> str:
    return _lines(
        "🛒 <b>NEW CART ORDER</b>",
        "",
        "<b>Items:</b>",
        _items_block(items),
        "",
        f"<b>Total:</b> {format_amount(total)} zł",
        "",
        _client_block(name, phone, email, address),
        "",
        f"<b>Time:</b> {local_timestamp()}",
    )


def format_single_order_message(data: OrderLead) -> str:
    return _lines(
        "🛒 <b>NEW ORDER</b>",
        "",
        f"<b>Product:</b> {escape_html(data.product or 'Not specified')}",
        _optional("ID", data.product_id),
        f"<b>Price:</b> {format_amount(data.price)} zł" if data.price else None,
        _optional("Size", data.size),
        f"<b>Quantity:</b> {data.quantity}" if data.quantity else None,
        "",
        _client_block(data.name, data.phone, data.email, data.address),
        "",
        f"<b>Time:</b> {local_timestamp()}",
    )


def format_contact_message(data: ContactLead) -> str:
    return _lines(
        "📩 <b>WEBSITE MESSAGE</b>",
        "",
        f"<b>Name:</b> {escape_html(data.name)}",
        _optional("Email", data.email),
        _optional("Phone", data.phone),
        "",
        "<b>Message:</b>",
        escape_html(data.message),
        "",
        local_timestamp(),
    )


def format_spec_request_message(data: SpecRequestLead) -> str:
    return _lines(
        "🔔 <b>NEW EQUIPMENT REQUEST</b>",
        "",
        f"<b>Name:</b> {escape_html(data.name)}",
        f"<b>Phone:</b> {escape_html(data.phone)}",
        _optional("Email", data.email),
        _optional("Equipment", data.equipment),
        _optional("Rental period", data.period),
        _optional("Comment", data.comment),
        "",
        f"<b>Page:</b> {escape_html(data.page or 'Home')}",
        f"<b>Time:</b> {local_timestamp()}",
    )


def format_spec_contact_message(data: SpecContactLead) -> str:
    subject = SPEC_CONTACT_SUBJECTS.get(data.subject or "", data.subject or "Not specified")
    return _lines(
        "📩 <b>EQUIPMENT CONTACT FORM</b>",
        "",
        f"<b>Name:</b> {escape_html(data.name)}",
        f"<b>Phone:</b> {escape_html(data.phone)}",
        _optional("Email", data.email),
        f"<b>Subject:</b> {escape_html(subject)}",
        "",
        "<b>Message:</b>",
        escape_html(data.message or "No message"),
        "",
        local_timestamp(),
    )


def format_site_order_message(order: Order) -> str:
    return _lines(
        "<b>New request!</b>",
        "",
        f"<b>Name:</b> {escape_html(order.name)}",
        f"<b>Phone:</b> {escape_html(order.phone)}",
        _optional("Email", order.email),
        _optional("Period", order.rental_period),
        _optional("Product", order.product_key),
        _optional("Page", order.page),
        _optional("Comment", order.comment),
    )


class LeadService:
    """Validates, forwards and records website leads."""

    def __init__(self, session: AsyncSession, factory: TelegramFactory) -> None:
        self.session = session
        self.notifier = TelegramNotifier(session, factory)
        self.orders = OrderService(session)
        self.sites = get_app_config().telegram.lead_sites

    def _check_contact(self, name: str, phone: str | None, phone_required: bool = True) -> None:
        if not is_valid_name(name):
            raise ValidationError("Name must be at least 2 characters")
        if phone_required or phone:
            if not is_valid_phone(phone):
                raise ValidationError("Invalid phone number (minimum 9 digits)")

    async def _store(self, site: str, **fields: str | None) -> None:
        try:
            async with self.session.begin_nested():
                await self.orders.record_lead(site, **fields)
        except SQLAlchemyError as e:
            logger.error(
                "Failed to store lead",
                extra={"site": site, "error": str(e)},
            )

    async def submit_order(self, data: OrderLead) -> None:
        self._check_contact(data.name, data.phone)
        site = data.site or self.sites.default

        if data.items:
            message = format_cart_message(
                data.items,
                cart_total(data.items),
                data.name,
                data.phone,
                data.email,
                data.address,
            )
            comment = json.dumps([item.model_dump() for item in data.items], ensure_ascii=False)
        else:
            message = format_single_order_message(data)
            comment = data.product or ""

        await self.notifier.send(site, message, copy_to_personal=True)
        await self._store(
            site,
            name=data.name,
            phone=data.phone,
            email=data.email or "",
            comment=comment,
            product_key=data.product_id or "",
        )
        logger.info("Order lead forwarded", extra={"site": site, "cart": bool(data.items)})

    async def submit_cart_order(self, data: CartOrderLead) -> None:
        self._check_contact(data.name, data.phone)
        if not data.items:
            raise ValidationError("Cart is empty")
        site = data.site or self.sites.default

        total = data.total if data.total else cart_total(data.items)
        message = format_cart_message(data.items, total, data.name, data.phone, data.email, data.address)
        await self.notifier.send(site, message, copy_to_personal=True)
        await self._store(
            site,
            name=data.name,
            phone=data.phone,
            email=data.email or "",
            comment=json.dumps([item.model_dump() for item in data.items], ensure_ascii=False),
        )
        logger.info("Cart lead forwarded", extra={"site": site, "items": len(data.items)})

    async def submit_contact(self, data: ContactLead) -> None:
        self._check_contact(data.name, data.phone, phone_required=False)
        if len(data.message.strip()) < MIN_CONTACT_MESSAGE_LENGTH:
            raise ValidationError("Message too short")
        site = data.site or self.sites.default

        await self.notifier.send(site, format_contact_message(data), copy_to_personal=True)
        logger.info("Contact lead forwarded", extra={"site": site})

    async def submit_spec_request(self, data: SpecRequestLead) -> None:
        self._check_contact(data.name, data.phone)
        site = self.sites.spec

        await self.notifier.send(site, format_spec_request_message(data), copy_to_personal=True)
        await self._store(
            site,
            name=data.name,
            phone=data.phone,
            email=data.email or "",
            rental_period=data.period or "",
            comment=data.comment or "",
            page=data.page or "index",
        )
        logger.info("Equipment request forwarded", extra={"site": site})

    async def submit_spec_contact(self, data: SpecContactLead) -> None:
        self._check_contact(data.name, data.phone)
        site = self.sites.spec

        await self.notifier.send(site, format_spec_contact_message(data), copy_to_personal=True)
        await self._store(
            site,
            name=data.name,
            phone=data.phone,
            email=data.email or "",
            comment=f"[{data.subject or 'other'}] {data.message or ''}",
        )
        logger.info("Equipment contact forwarded", extra={"site": site})

    async def notify_site_order(self, order: Order) -> bool:
        """
        Best-effort notification for an order stored through the public API.

        Returns:
            True if the message was delivered
        """
        try:
            await self.notifier.send(order.site, format_site_order_message(order))
        except ServiceNotConfiguredError:
            return False
        except ExternalServiceError as e:
            logger.warning(
                "Order notification failed",
                extra={"site": order.site, "order_id": order.id, "error": str(e)},
            )
            return False
        return True
