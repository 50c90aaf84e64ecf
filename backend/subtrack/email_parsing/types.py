"""
Subscription Parsing Types

Result values passed between the parsing stages. Every stage returns either
its success value or a typed failure; nothing in the pipeline raises for
an unparseable email.
"""

import re
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Union

from .categories import is_known_category

AMOUNT_FORMAT = re.compile(r"^\d+\.\d{2}$")
CURRENCY_FORMAT = re.compile(r"^[A-Z]{3}$")


class BillingCycle(str, Enum):
    """Recurrence period of a subscription charge"""
    MONTHLY = "monthly"
    ANNUAL = "annual"
    QUARTERLY = "quarterly"
    WEEKLY = "weekly"


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    TRIAL = "trial"


class Confidence(str, Enum):
    """Reliability tag reflecting which strategy produced the data"""
    HIGH = "high"
    MEDIUM = "medium"  # reserved for partial registry matches
    LOW = "low"


class ParseMethod(str, Enum):
    PATTERN = "pattern"
    AI = "ai"
    FAILED = "failed"


@dataclass(frozen=True)
class ParsedSubscription:
    """Subscription details extracted from a single email."""

    merchant_name: str
    amount: str
    currency: str = "USD"
    billing_cycle: BillingCycle = BillingCycle.MONTHLY
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    confidence: Confidence = Confidence.HIGH
    plan_name: Optional[str] = None
    trial_end_date: Optional[date] = None
    category: Optional[str] = None

    def __post_init__(self):
        if not self.merchant_name or not self.merchant_name.strip():
            raise ValueError("merchant_name must not be empty")

        if not AMOUNT_FORMAT.match(self.amount or ""):
            raise ValueError(f"Invalid amount: {self.amount!r} (expected e.g. '15.99')")
        try:
            value = Decimal(self.amount)
        except InvalidOperation:
            raise ValueError(f"Invalid amount: {self.amount!r}")
        if not value.is_finite() or value < 0:
            raise ValueError(f"Amount must be a non-negative finite decimal: {self.amount!r}")

        if not CURRENCY_FORMAT.match(self.currency or ""):
            raise ValueError(f"Invalid currency code: {self.currency!r}")

        if self.category is not None and not is_known_category(self.category):
            raise ValueError(f"Unknown category: {self.category!r}")

        if self.trial_end_date is not None and self.status != SubscriptionStatus.TRIAL:
            raise ValueError("trial_end_date is only valid for trial subscriptions")

    @property
    def amount_decimal(self) -> Decimal:
        return Decimal(self.amount)

    def to_dict(self) -> dict:
        """Serialise to a JSON-ready dict (dates as ISO strings)."""
        return {
            "merchant_name": self.merchant_name,
            "plan_name": self.plan_name,
            "amount": self.amount,
            "currency": self.currency,
            "billing_cycle": self.billing_cycle.value,
            "status": self.status.value,
            "trial_end_date": self.trial_end_date.isoformat() if self.trial_end_date else None,
            "confidence": self.confidence.value,
            "category": self.category,
        }


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one email: data on success, error otherwise."""

    success: bool
    method: ParseMethod
    data: Optional[ParsedSubscription] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: ParsedSubscription, method: ParseMethod) -> "ParseResult":
        return cls(success=True, method=method, data=data)

    @classmethod
    def fail(cls, error: str, method: ParseMethod) -> "ParseResult":
        return cls(success=False, method=method, error=error)

    def to_dict(self) -> dict:
        result = {"success": self.success, "method": self.method.value}
        if self.success:
            result["data"] = self.data.to_dict()
        else:
            result["error"] = self.error
        return result


# ============================================================================
# STAGE VALUES
# ============================================================================


@dataclass(frozen=True)
class MerchantMatch:
    """Merchant resolved from the registry, or recovered from the sender.

    Sender-recovered matches carry no signature and no category.
    """

    name: str
    category: Optional[str] = None
    signature: Optional["MerchantSignature"] = None

    @property
    def from_registry(self) -> bool:
        return self.signature is not None


@dataclass(frozen=True)
class MerchantNotFound:
    sender: str
    reason: str = "Could not identify merchant"


@dataclass(frozen=True)
class FieldSet:
    """Fields extracted from email text by the primary extractor."""

    amount: str
    currency: str
    billing_cycle: BillingCycle
    status: SubscriptionStatus
    confidence: Confidence = Confidence.HIGH
    trial_end_date: Optional[date] = None
    plan_name: Optional[str] = None


@dataclass(frozen=True)
class ExtractionFailed:
    reason: str


@dataclass(frozen=True)
class MerchantSignature:
    """Registry entry mapping a sender/content key to a canonical merchant.

    amount_pattern must expose an ``amount`` group and may expose
    ``currency`` and ``symbol`` groups.
    """

    key: str
    canonical_name: str
    category: Optional[str] = None
    amount_pattern: Optional[re.Pattern] = None
    cycle_keywords: dict = field(default_factory=dict, hash=False)

    def matches(self, sender: str, content: str) -> bool:
        """Substring match of the key against lower-cased sender or content."""
        return self.key in sender or self.key in content


ResolveOutcome = Union[MerchantMatch, MerchantNotFound]
ExtractOutcome = Union[FieldSet, ExtractionFailed]
