"""
Unit tests for core utilities.
"""

import pytest

from sitekit.backend.core.utils import (
    count_digits,
    escape_html,
    random_hex,
    sanitize_input,
    slugify,
    unix_ms,
    utc_now,
)


class TestSlugify:
    @pytest.mark.parametrize(
        ("text", "slug"),
        [
            ("Hello World", "hello-world"),
            ("  Spring   Sale 2030 ", "spring-sale-2030"),
            ("Beds & Mattresses!", "beds-mattresses"),
            ("a -- b", "a-b"),
            ("Łóżka", "ka"),
            ("???", ""),
        ],
    )
    def test_slugify(self, text, slug):
        assert slugify(text) == slug


class TestSanitizeInput:
    def test_strips_quotes_semicolons_and_backslashes(self):
        assert sanitize_input(" O'Neil; \"x\" \\ ") == "ONeil x"

    def test_none_passes_through(self):
        assert sanitize_input(None) is None


class TestEscapeHtml:
    def test_escapes_markup(self):
        assert escape_html('<b>"A" & B</b>') == "&lt;b&gt;&quot;A&quot; &amp; B&lt;/b&gt;"

    def test_apostrophe_left_alone(self):
        assert escape_html("it's") == "it's"

    def test_none_and_numbers(self):
        assert escape_html(None) == ""
        assert escape_html(12.5) == "12.5"


class TestMisc:
    def test_count_digits(self):
        assert count_digits("+48 (600) 100-200") == 11

    def test_random_hex_length(self):
        assert len(random_hex()) == 32
        assert len(random_hex(4)) == 8
        assert random_hex() != random_hex()

    def test_utc_now_is_naive(self):
        assert utc_now().tzinfo is None

    def test_unix_ms_is_milliseconds(self):
        assert unix_ms() > 1_600_000_000_000
