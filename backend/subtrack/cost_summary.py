"""
Subscription Cost Summary

Aggregates parsed subscriptions into monthly/annual spend and counts by
category and status.
"""

from collections import Counter
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from subtrack.email_parsing.categories import OTHER_CATEGORY
from subtrack.email_parsing.types import BillingCycle, ParsedSubscription, SubscriptionStatus

# Cycle -> (monthly multiplier, annual multiplier)
CYCLE_MULTIPLIERS = {
    BillingCycle.MONTHLY: (Decimal("1"), Decimal("12")),
    BillingCycle.ANNUAL: (Decimal("1") / Decimal("12"), Decimal("1")),
    BillingCycle.QUARTERLY: (Decimal("1") / Decimal("3"), Decimal("4")),
    BillingCycle.WEEKLY: (Decimal("4.33"), Decimal("52")),  # ~4.33 weeks per month
}

CENTS = Decimal("0.01")


@dataclass
class CostSummary:
    total_subscriptions: int = 0
    total_monthly_cost: str = "0.00"
    total_annual_cost: str = "0.00"
    by_category: dict = field(default_factory=dict)
    by_status: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total_subscriptions": self.total_subscriptions,
            "total_monthly_cost": self.total_monthly_cost,
            "total_annual_cost": self.total_annual_cost,
            "by_category": dict(self.by_category),
            "by_status": dict(self.by_status),
        }


def summarize_subscriptions(subscriptions: Iterable[ParsedSubscription]) -> CostSummary:
    """
    Summarise subscription spend.

    Totals and category counts cover active subscriptions only; status
    counts cover every subscription. Amounts are summed as-is regardless
    of currency.

    Args:
        subscriptions: Parsed subscriptions

    Returns:
        CostSummary with two-decimal cost strings
    """
    subscriptions = list(subscriptions)
    active = [sub for sub in subscriptions if sub.status == SubscriptionStatus.ACTIVE]

    monthly_total = Decimal("0")
    annual_total = Decimal("0")
    for sub in active:
        monthly_factor, annual_factor = CYCLE_MULTIPLIERS[sub.billing_cycle]
        monthly_total += sub.amount_decimal * monthly_factor
        annual_total += sub.amount_decimal * annual_factor

    by_category = Counter(sub.category or OTHER_CATEGORY for sub in active)
    by_status = Counter(sub.status.value for sub in subscriptions)

    return CostSummary(
        total_subscriptions=len(active),
        total_monthly_cost=str(monthly_total.quantize(CENTS, rounding=ROUND_HALF_UP)),
        total_annual_cost=str(annual_total.quantize(CENTS, rounding=ROUND_HALF_UP)),
        by_category=dict(by_category),
        by_status=dict(by_status),
    )
