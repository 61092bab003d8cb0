"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

import html
import re
import secrets
import time
from datetime import datetime, timezone

_UNSAFE_INPUT_CHARS = re.compile(r"['\";\\]")
_NON_DIGITS = re.compile(r"\D")
_SLUG_STRIP = re.compile(r"[^a-z0-9\s-]")
_SLUG_SPACES = re.compile(r"\s+")
_SLUG_DASHES = re.compile(r"-+")


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application should be timezone-naive
    and assumed to be UTC. This ensures consistent behavior across
    the codebase and simplifies database storage.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def unix_ms() -> int:
    """Current Unix time in milliseconds."""
    return int(time.time() * 1000)


def sanitize_input(value: str | None) -> str | None:
    """Strip quotes, semicolons and backslashes from free text and trim it."""
    if value is None:
        return None
    return _UNSAFE_INPUT_CHARS.sub("", value).strip()


def escape_html(value: object) -> str:
    """
    Escape text for Telegram's HTML parse mode.

    Only &, <, > and " are replaced; None renders as an empty string.
    """
    if value is None:
        return ""
    return html.escape(str(value), quote=False).replace('"', "&quot;")


def count_digits(value: str) -> int:
    """Number of decimal digits in a string, ignoring any formatting."""
    return len(_NON_DIGITS.sub("", value))


def random_hex(nbytes: int = 16) -> str:
    """Random hex token (two characters per byte)."""
    return secrets.token_hex(nbytes)


def slugify(text: str) -> str:
    """
    URL slug: lowercase ASCII letters, digits and single dashes.

    Characters outside [a-z0-9], whitespace and dashes are dropped.
    """
    slug = _SLUG_STRIP.sub("", text.lower())
    slug = _SLUG_SPACES.sub("-", slug.strip())
    return _SLUG_DASHES.sub("-", slug)
