"""
Subscription Email Parser Package

Classifies already-fetched emails as recurring payments and extracts
structured subscription data.

Architecture:
- types: Result values (ParsedSubscription, ParseResult, stage outcomes)
- merchant_registry: Ordered registry of known merchant signatures
- merchant_resolution: Registry lookup with sender-name fallback
- field_extraction: Amount, currency, billing cycle, trial and plan patterns
- fallback_extraction: Low-confidence best-effort extraction
- categories: Merchant name to category inference
- orchestrator: Main parsing coordination
- batch: Batch runs producing storable records
- utilities: Shared text helpers

Public API:
- parse_subscription_email(subject, sender, body, snippet) - Parse one email
- parse_email_batch(emails, processed_ids) - Parse a batch of emails
- infer_category(merchant_name) - Categorise a merchant name
"""

from .batch import (
    BatchSummary,
    EmailContent,
    ParsedEmailRecord,
    build_record,
    parse_email_batch,
)
from .categories import (
    CATEGORIES,
    CATEGORY_KEYWORDS,
    infer_category,
)
from .fallback_extraction import fallback_extract
from .field_extraction import (
    detect_billing_cycle,
    detect_trial,
    extract_amount,
    extract_fields,
    extract_plan_name,
)
from .merchant_registry import (
    MERCHANT_SIGNATURES,
    find_signature,
)
from .merchant_resolution import resolve_merchant
from .orchestrator import (
    parse_subscription_email,
    parse_with_fallback,
    parse_with_patterns,
)
from .types import (
    BillingCycle,
    Confidence,
    ExtractionFailed,
    FieldSet,
    MerchantMatch,
    MerchantNotFound,
    MerchantSignature,
    ParsedSubscription,
    ParseMethod,
    ParseResult,
    SubscriptionStatus,
)
from .utilities import (
    extract_sender_domain,
    html_to_text,
    parse_sender_email,
)

__all__ = [
    # Main orchestrator functions (primary API)
    "parse_subscription_email",
    "parse_with_patterns",
    "parse_with_fallback",
    # Batch processing
    "parse_email_batch",
    "build_record",
    "EmailContent",
    "ParsedEmailRecord",
    "BatchSummary",
    # Pipeline stages
    "resolve_merchant",
    "extract_fields",
    "extract_amount",
    "detect_billing_cycle",
    "detect_trial",
    "extract_plan_name",
    "fallback_extract",
    "infer_category",
    # Registry
    "MERCHANT_SIGNATURES",
    "find_signature",
    "CATEGORIES",
    "CATEGORY_KEYWORDS",
    # Types
    "ParsedSubscription",
    "ParseResult",
    "ParseMethod",
    "BillingCycle",
    "SubscriptionStatus",
    "Confidence",
    "MerchantMatch",
    "MerchantNotFound",
    "MerchantSignature",
    "FieldSet",
    "ExtractionFailed",
    # Utility functions
    "html_to_text",
    "parse_sender_email",
    "extract_sender_domain",
]
