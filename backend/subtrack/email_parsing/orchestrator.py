"""
Subscription Email Orchestrator

Coordinates the parsing flow: merchant resolution → field extraction →
fallback extraction. Every stage reports failure as a value; the
orchestrator decides which stage runs next.
"""

from datetime import date
from typing import Optional

from subtrack.logging_config import get_logger

from .categories import OTHER_CATEGORY, infer_category
from .fallback_extraction import fallback_extract
from .field_extraction import extract_fields
from .merchant_resolution import resolve_merchant
from .types import (
    ExtractionFailed,
    MerchantNotFound,
    ParsedSubscription,
    ParseMethod,
    ParseResult,
)
from .utilities import build_content

# Initialize logger
logger = get_logger(__name__)


def parse_with_patterns(
    subject: str,
    sender: str,
    body: str,
    snippet: str,
    today: Optional[date] = None,
) -> ParseResult:
    """
    Parse an email with the registry and regex patterns.

    Args:
        subject: Email subject line
        sender: Raw From header
        body: Plain text body
        snippet: Provider-generated snippet
        today: Reference date for relative trial durations

    Returns:
        ParseResult with method 'pattern'
    """
    content = build_content(subject, body, snippet)

    # STEP 1: Identify merchant
    merchant = resolve_merchant(sender, content)
    if isinstance(merchant, MerchantNotFound):
        return ParseResult.fail(merchant.reason, ParseMethod.PATTERN)

    # STEP 2: Extract amount, cycle, trial and plan
    fields = extract_fields(content, subject or '', merchant.signature, today)
    if isinstance(fields, ExtractionFailed):
        return ParseResult.fail(fields.reason, ParseMethod.PATTERN)

    # Sender-derived merchants have no registry category
    category = merchant.category
    if category is None:
        inferred = infer_category(merchant.name)
        category = inferred if inferred != OTHER_CATEGORY else None

    data = ParsedSubscription(
        merchant_name=merchant.name,
        plan_name=fields.plan_name,
        amount=fields.amount,
        currency=fields.currency,
        billing_cycle=fields.billing_cycle,
        status=fields.status,
        trial_end_date=fields.trial_end_date,
        confidence=fields.confidence,
        category=category,
    )
    return ParseResult.ok(data, ParseMethod.PATTERN)


def parse_with_fallback(subject: str, sender: str, body: str) -> ParseResult:
    """
    Parse an email with the best-effort fallback extractor.

    The subject is accepted for signature parity with parse_with_patterns
    but not used.

    Returns:
        ParseResult with method 'ai' on success, 'failed' otherwise
    """
    outcome = fallback_extract(sender, body)
    if isinstance(outcome, ExtractionFailed):
        return ParseResult.fail(outcome.reason, ParseMethod.FAILED)

    return ParseResult.ok(outcome, ParseMethod.AI)


def parse_subscription_email(
    subject: str,
    sender: str,
    body: str,
    snippet: str,
    today: Optional[date] = None,
) -> ParseResult:
    """
    Main entry point for parsing a subscription email.

    Tries pattern matching first and falls back to best-effort extraction.

    Args:
        subject: Email subject line
        sender: Raw From header
        body: Plain text body (already decoded)
        snippet: Provider-generated snippet
        today: Reference date for relative trial durations (defaults to today)

    Returns:
        ParseResult: success with data, or failure with method 'failed'
    """
    subject = subject or ''
    sender = sender or ''
    body = body or ''
    snippet = snippet or ''

    pattern_result = parse_with_patterns(subject, sender, body, snippet, today)
    if pattern_result.success:
        logger.debug(
            "Pattern parsing succeeded",
            extra={"merchant": pattern_result.data.merchant_name, "parse_method": "pattern"},
        )
        return pattern_result

    logger.info(
        f"Pattern matching failed ({pattern_result.error}), trying fallback parser",
        extra={"merchant": sender, "parse_method": "pattern"},
    )

    fallback_result = parse_with_fallback(subject, sender, body)
    if not fallback_result.success:
        return ParseResult.fail(
            f"{pattern_result.error}; {fallback_result.error}",
            ParseMethod.FAILED,
        )

    return fallback_result
