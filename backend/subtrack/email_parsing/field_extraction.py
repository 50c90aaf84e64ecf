"""
Subscription Field Extraction

Regex pattern-based extraction of amount, currency, billing cycle, trial
status and plan tier from subscription email text.
"""

import re
from datetime import date, timedelta
from typing import Optional, Tuple

from .types import (
    BillingCycle,
    Confidence,
    ExtractOutcome,
    ExtractionFailed,
    FieldSet,
    MerchantSignature,
    SubscriptionStatus,
)
from .utilities import (
    AMOUNT_NUMBER,
    CURRENCY_CODES,
    DEFAULT_CURRENCY,
    currency_from_symbol,
    normalize_amount,
    parse_date_string,
)

# $15.99, £1,234.56 GBP, 20.00 usd
AMOUNT_PATTERN = re.compile(
    r'(?P<symbol>[$£€])?\s?'
    + AMOUNT_NUMBER
    + r'(?:\s*(?P<currency>' + '|'.join(CURRENCY_CODES) + r')(?![a-z]))?',
    re.IGNORECASE,
)

# Checked in this order; monthly is the default, never a positive match
CYCLE_PATTERNS = (
    (BillingCycle.ANNUAL, re.compile(r'\bannual\b|\bper year\b|\byearly\b|\b/yr\b|\byear\b', re.IGNORECASE)),
    (BillingCycle.QUARTERLY, re.compile(r'\bquarterly\b|\bper quarter\b|\b3 months\b', re.IGNORECASE)),
    (BillingCycle.WEEKLY, re.compile(r'\bweekly\b|\bper week\b|\b/wk\b|\bweek\b', re.IGNORECASE)),
)

TRIAL_START_PATTERN = re.compile(r'\bfree trial\b|\btrial period\b|\btrial starts\b', re.IGNORECASE)
TRIAL_END_PATTERN = re.compile(r'trial ends?\s+on\s+(\w+\s+\d+,?\s+\d{4})', re.IGNORECASE)
TRIAL_DAYS_PATTERN = re.compile(r'(\d+)[\s-]day free trial', re.IGNORECASE)

PLAN_PATTERN = re.compile(r'\b(pro|premium|plus|basic|starter|enterprise|team)\b', re.IGNORECASE)


def _has_word(keyword: str, content: str) -> bool:
    return re.search(r'\b' + re.escape(keyword) + r'\b', content, re.IGNORECASE) is not None


def extract_amount(
    content: str,
    signature: Optional[MerchantSignature] = None,
) -> Optional[Tuple[str, str]]:
    """
    Extract the first amount and its currency.

    Args:
        content: Email text
        signature: Registry entry whose amount_pattern overrides the generic one

    Returns:
        Tuple of (amount, currency_code) or None when no amount is present
    """
    pattern = AMOUNT_PATTERN
    if signature and signature.amount_pattern:
        pattern = signature.amount_pattern

    match = pattern.search(content or '')
    if not match:
        return None

    amount = normalize_amount(match.group('amount'))
    if amount is None:
        return None

    groups = match.groupdict()
    if groups.get('currency'):
        currency = groups['currency'].upper()
    else:
        currency = currency_from_symbol(groups.get('symbol')) or DEFAULT_CURRENCY

    return amount, currency


def detect_billing_cycle(
    content: str,
    signature: Optional[MerchantSignature] = None,
) -> BillingCycle:
    """
    Detect the billing cycle: annual, then quarterly, then weekly.

    Signature cycle keywords count as a match for their cycle within the
    same priority order, as whole words like the generic patterns. Anything else is monthly.
    """
    content = content or ''
    keywords = signature.cycle_keywords if signature else {}

    for cycle, pattern in CYCLE_PATTERNS:
        if pattern.search(content):
            return cycle
        if any(_has_word(keyword, content) for keyword in keywords.get(cycle, ())):
            return cycle

    return BillingCycle.MONTHLY


def detect_trial(
    content: str,
    today: Optional[date] = None,
) -> Tuple[SubscriptionStatus, Optional[date]]:
    """
    Detect trial status and, when derivable, the trial end date.

    Tries an explicit "trial ends on <date>" phrase, then an
    "<N>-day free trial" duration counted from today.

    Returns:
        Tuple of (status, trial_end_date)
    """
    content = content or ''
    if not TRIAL_START_PATTERN.search(content):
        return SubscriptionStatus.ACTIVE, None

    end_match = TRIAL_END_PATTERN.search(content)
    if end_match:
        trial_end = parse_date_string(end_match.group(1))
        if trial_end:
            return SubscriptionStatus.TRIAL, trial_end

    days_match = TRIAL_DAYS_PATTERN.search(content)
    if days_match:
        today = today or date.today()
        try:
            return SubscriptionStatus.TRIAL, today + timedelta(days=int(days_match.group(1)))
        except (OverflowError, ValueError):
            # Duration runs past date.max
            return SubscriptionStatus.TRIAL, None

    return SubscriptionStatus.TRIAL, None


def extract_plan_name(subject: str) -> Optional[str]:
    """Return the first plan tier keyword in the subject, as written."""
    match = PLAN_PATTERN.search(subject or '')
    return match.group(1) if match else None


def extract_fields(
    content: str,
    subject: str = '',
    signature: Optional[MerchantSignature] = None,
    today: Optional[date] = None,
) -> ExtractOutcome:
    """
    Extract subscription fields from email text.

    Args:
        content: Lower-cased subject/body/snippet text
        subject: Original subject line (plan tier is read from here only)
        signature: Resolved registry entry, if any
        today: Reference date for relative trial durations

    Returns:
        FieldSet, or ExtractionFailed when no amount is found
    """
    amount = extract_amount(content, signature)
    if amount is None:
        return ExtractionFailed(reason='Could not extract amount')

    value, currency = amount
    status, trial_end_date = detect_trial(content, today)

    return FieldSet(
        amount=value,
        currency=currency,
        billing_cycle=detect_billing_cycle(content, signature),
        status=status,
        confidence=Confidence.HIGH,
        trial_end_date=trial_end_date,
        plan_name=extract_plan_name(subject),
    )
