"""Tests for merchant resolution: registry first, then the sender name."""

import pytest

from subtrack.email_parsing.merchant_resolution import resolve_merchant
from subtrack.email_parsing.types import MerchantMatch, MerchantNotFound
from subtrack.email_parsing.utilities import build_content

# ============================================================================
# REGISTRY MATCHES
# ============================================================================


def test_registry_match_from_sender():
    result = resolve_merchant("info@netflix.com", "your receipt")

    assert isinstance(result, MerchantMatch)
    assert result.name == "Netflix"
    assert result.category == "entertainment"
    assert result.from_registry
    assert result.signature.key == "netflix.com"


def test_registry_match_from_content():
    """Test a key in the body resolves even when the sender is generic."""
    content = build_content("Receipt", "Thanks for subscribing to chatgpt plus at openai.com", "")

    result = resolve_merchant("receipts@mailer.example.com", content)

    assert result.name == "OpenAI"
    assert result.category == "ai_tools"


def test_registry_wins_over_display_name():
    result = resolve_merchant("Netflix Billing <info@netflix.com>", "")

    assert result.name == "Netflix"
    assert result.from_registry


# ============================================================================
# SENDER NAME HEURISTIC
# ============================================================================


@pytest.mark.parametrize(
    "sender,expected",
    [
        ("Billing <billing@unknownvendor.io>", "Billing"),
        ('"Acme Billing" <billing@acme.io>', "Acme Billing"),
        ("Receipt from Acme Cloud <billing@acme.io>", "Acme Cloud"),
        ("billing@acme.io", "billing"),
        ("  Linear  <hello@linear.app>", "Linear"),
    ],
)
def test_display_name_recovered(sender, expected):
    result = resolve_merchant(sender, "thanks for your payment")

    assert isinstance(result, MerchantMatch)
    assert result.name == expected
    assert result.category is None
    assert not result.from_registry


@pytest.mark.parametrize("sender", ["", "<billing@acme.io>", "@acme.io", '"" <billing@acme.io>'])
def test_merchant_not_found(sender):
    result = resolve_merchant(sender, "thanks for your payment")

    assert isinstance(result, MerchantNotFound)
    assert result.sender == sender
    assert result.reason == "Could not identify merchant"


def test_none_sender_is_treated_as_empty():
    result = resolve_merchant(None, "")

    assert isinstance(result, MerchantNotFound)
