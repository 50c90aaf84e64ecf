"""Tests for parse result values and their validation."""

from datetime import date

import pytest

from subtrack.email_parsing.types import (
    BillingCycle,
    Confidence,
    ParsedSubscription,
    ParseMethod,
    ParseResult,
    SubscriptionStatus,
)

# ============================================================================
# PARSED SUBSCRIPTION
# ============================================================================


def test_defaults():
    sub = ParsedSubscription(merchant_name="Netflix", amount="15.49")

    assert sub.currency == "USD"
    assert sub.billing_cycle == BillingCycle.MONTHLY
    assert sub.status == SubscriptionStatus.ACTIVE
    assert sub.confidence == Confidence.HIGH
    assert sub.plan_name is None
    assert sub.trial_end_date is None
    assert sub.category is None


def test_to_dict():
    sub = ParsedSubscription(
        merchant_name="Notion",
        amount="10.00",
        billing_cycle=BillingCycle.MONTHLY,
        status=SubscriptionStatus.TRIAL,
        trial_end_date=date(2025, 1, 29),
        plan_name="Plus",
        category="productivity",
    )

    assert sub.to_dict() == {
        "merchant_name": "Notion",
        "plan_name": "Plus",
        "amount": "10.00",
        "currency": "USD",
        "billing_cycle": "monthly",
        "status": "trial",
        "trial_end_date": "2025-01-29",
        "confidence": "high",
        "category": "productivity",
    }


def test_is_immutable():
    sub = ParsedSubscription(merchant_name="Netflix", amount="15.49")

    with pytest.raises(AttributeError):
        sub.amount = "0.00"


def test_amount_decimal():
    assert str(ParsedSubscription(merchant_name="X", amount="0.00").amount_decimal) == "0.00"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"merchant_name": "", "amount": "15.49"},
        {"merchant_name": "   ", "amount": "15.49"},
        {"merchant_name": "Netflix", "amount": "15.4"},
        {"merchant_name": "Netflix", "amount": "-15.49"},
        {"merchant_name": "Netflix", "amount": "1,234.56"},
        {"merchant_name": "Netflix", "amount": "NaN"},
        {"merchant_name": "Netflix", "amount": "15.49", "currency": "usd"},
        {"merchant_name": "Netflix", "amount": "15.49", "currency": "US"},
        {"merchant_name": "Netflix", "amount": "15.49", "category": "streaming"},
        {"merchant_name": "Netflix", "amount": "15.49", "trial_end_date": date(2025, 2, 1)},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValueError):
        ParsedSubscription(**kwargs)


def test_enum_values_serialise_as_strings():
    assert BillingCycle.ANNUAL == "annual"
    assert ParseMethod.AI.value == "ai"


# ============================================================================
# PARSE RESULT
# ============================================================================


def test_ok_result_to_dict():
    sub = ParsedSubscription(merchant_name="Netflix", amount="15.49", category="entertainment")

    result = ParseResult.ok(sub, ParseMethod.PATTERN)

    assert result.success
    assert result.error is None
    assert result.to_dict() == {"success": True, "method": "pattern", "data": sub.to_dict()}


def test_fail_result_to_dict():
    result = ParseResult.fail("Could not extract amount", ParseMethod.FAILED)

    assert not result.success
    assert result.data is None
    assert result.to_dict() == {
        "success": False,
        "method": "failed",
        "error": "Could not extract amount",
    }
