"""Tests for shared parsing helpers."""

from datetime import date

import pytest

from subtrack.email_parsing.utilities import (
    build_content,
    currency_from_symbol,
    extract_sender_domain,
    html_to_text,
    normalize_amount,
    parse_date_string,
    parse_sender_email,
    sender_display_name,
)

# ============================================================================
# CONTENT AND AMOUNTS
# ============================================================================


def test_build_content_lowercases_and_joins():
    assert build_content("Your RECEIPT", "Charged $5.00", "Snip") == "your receipt charged $5.00 snip"


def test_build_content_handles_none():
    assert build_content(None, None, None) == "  "


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("15.99", "15.99"),
        ("1,234.56", "1234.56"),
        ("12,345,678.90", "12345678.90"),
        ("0.00", "0.00"),
        ("", None),
        ("abc", None),
        ("-5.00", None),
        ("9" * 30 + ".99", None),
    ],
)
def test_normalize_amount(raw, expected):
    assert normalize_amount(raw) == expected


def test_currency_from_symbol():
    assert currency_from_symbol("£") == "GBP"
    assert currency_from_symbol("€") == "EUR"
    assert currency_from_symbol("$") == "USD"
    assert currency_from_symbol("¥") is None
    assert currency_from_symbol(None) is None


# ============================================================================
# DATES
# ============================================================================


@pytest.mark.parametrize(
    "text,expected",
    [
        ("January 15, 2025", date(2025, 1, 15)),
        ("march 3, 2025", date(2025, 3, 3)),
        ("Mar 3 2025", date(2025, 3, 3)),
        ("2025-02-28", date(2025, 2, 28)),
        ("February 30, 2025", None),
        ("soon", None),
        ("", None),
    ],
)
def test_parse_date_string(text, expected):
    assert parse_date_string(text) == expected


# ============================================================================
# SENDERS
# ============================================================================


def test_sender_display_name_strips_quotes():
    assert sender_display_name("'Acme' <billing@acme.io>") == "Acme"


def test_sender_display_name_empty():
    assert sender_display_name("") is None
    assert sender_display_name("<billing@acme.io>") is None


@pytest.mark.parametrize(
    "header,expected",
    [
        ('"Netflix" <info@netflix.com>', ("info@netflix.com", "Netflix")),
        ("Netflix <info@netflix.com>", ("info@netflix.com", "Netflix")),
        ("<info@netflix.com>", ("info@netflix.com", "")),
        ("info@netflix.com", ("info@netflix.com", "")),
        ("", ("", "")),
    ],
)
def test_parse_sender_email(header, expected):
    assert parse_sender_email(header) == expected


def test_extract_sender_domain():
    assert extract_sender_domain("Billing@Stripe.COM") == "stripe.com"
    assert extract_sender_domain("not-an-address") == ""
    assert extract_sender_domain("") == ""


# ============================================================================
# HTML
# ============================================================================


def test_html_to_text_drops_scripts_and_collapses_whitespace():
    html = """
    <html>
      <head><title>Receipt</title><meta charset="utf-8"></head>
      <body>
        <h1>Thanks!</h1>
        <p>Total:
           <b>$9.99</b></p>
        <script>track()</script>
        <noscript>enable js</noscript>
      </body>
    </html>
    """

    assert html_to_text(html) == "Thanks! Total: $9.99"


def test_html_to_text_empty():
    assert html_to_text("") == ""
    assert html_to_text(None) == ""
