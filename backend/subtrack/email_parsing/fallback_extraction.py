"""
Fallback Extraction

Best-effort extraction used when the registry/pattern path fails. Takes
the first amount in the raw body and the sender's display name, nothing
else: no cycle, trial or currency detection is attempted here, so results
are always monthly, active, USD and low confidence.
"""

import re
from typing import Union

from subtrack.logging_config import get_logger

from .types import (
    BillingCycle,
    Confidence,
    ExtractionFailed,
    ParsedSubscription,
    SubscriptionStatus,
)
from .utilities import AMOUNT_NUMBER, DEFAULT_CURRENCY, SENDER_NAME_PATTERN, normalize_amount

logger = get_logger(__name__)

FALLBACK_AMOUNT_PATTERN = re.compile(r'\$?' + AMOUNT_NUMBER)


def fallback_extract(sender: str, body: str) -> Union[ParsedSubscription, ExtractionFailed]:
    """
    Extract a low-confidence subscription from sender and body.

    Args:
        sender: Raw From header
        body: Plain text body (not lower-cased)

    Returns:
        ParsedSubscription, or ExtractionFailed when either the amount or
        the sender name is missing
    """
    amount_match = FALLBACK_AMOUNT_PATTERN.search(body or '')
    name_match = SENDER_NAME_PATTERN.match(sender or '')

    merchant_name = name_match.group(1).strip() if name_match else ''
    amount = normalize_amount(amount_match.group('amount')) if amount_match else None

    if not amount or not merchant_name:
        logger.debug(
            "Fallback extraction found no amount or sender name",
            extra={"merchant": sender},
        )
        return ExtractionFailed(reason='Fallback extraction failed: no amount or sender name')

    return ParsedSubscription(
        merchant_name=merchant_name,
        amount=amount,
        currency=DEFAULT_CURRENCY,
        billing_cycle=BillingCycle.MONTHLY,
        status=SubscriptionStatus.ACTIVE,
        confidence=Confidence.LOW,
    )
