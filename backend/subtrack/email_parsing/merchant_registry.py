"""
Merchant Signature Registry

Known subscription merchants, keyed by a sender domain or keyword.

Lookup is first-match-wins over MERCHANT_SIGNATURES in declaration order:
an earlier key that is a substring of the sender or content shadows every
later entry. Order is part of the contract; append new merchants unless
they must take priority.
"""

import re
from typing import Optional

from .types import BillingCycle, MerchantSignature
from .utilities import AMOUNT_NUMBER

# Payment processors quote the currency code after the amount: "$20.00 USD"
PROCESSOR_AMOUNT_PATTERN = re.compile(
    r'(?P<symbol>\$)?' + AMOUNT_NUMBER + r'(?:\s*(?P<currency>usd|eur|gbp)(?![a-z]))?',
    re.IGNORECASE,
)


MERCHANT_SIGNATURES = (
    MerchantSignature(
        key='stripe.com',
        canonical_name='Stripe',
        category='finance',
        amount_pattern=PROCESSOR_AMOUNT_PATTERN,
    ),
    MerchantSignature(
        key='paypal',
        canonical_name='PayPal',
        category='finance',
        amount_pattern=PROCESSOR_AMOUNT_PATTERN,
    ),
    MerchantSignature(
        key='netflix.com',
        canonical_name='Netflix',
        category='entertainment',
        cycle_keywords={BillingCycle.MONTHLY: ('monthly', 'month')},
    ),
    MerchantSignature(
        key='spotify.com',
        canonical_name='Spotify',
        category='entertainment',
        cycle_keywords={
            BillingCycle.MONTHLY: ('monthly',),
            BillingCycle.ANNUAL: ('annual', 'yearly'),
        },
    ),
    MerchantSignature(
        key='openai.com',
        canonical_name='OpenAI',
        category='ai_tools',
        cycle_keywords={BillingCycle.MONTHLY: ('monthly',)},
    ),
    MerchantSignature(key='figma.com', canonical_name='Figma', category='design'),
    MerchantSignature(key='adobe.com', canonical_name='Adobe', category='design'),
    MerchantSignature(key='github.com', canonical_name='GitHub', category='development'),
    MerchantSignature(key='vercel.com', canonical_name='Vercel', category='development'),
    MerchantSignature(key='notion.so', canonical_name='Notion', category='productivity'),
    MerchantSignature(key='canva.com', canonical_name='Canva', category='design'),
)


def find_signature(sender: str, content: str) -> Optional[MerchantSignature]:
    """
    Return the first registry entry whose key appears in sender or content.

    Args:
        sender: From header (any case)
        content: Subject/body/snippet text (any case)

    Returns:
        MerchantSignature or None
    """
    sender = (sender or '').lower()
    content = (content or '').lower()

    for signature in MERCHANT_SIGNATURES:
        if signature.matches(sender, content):
            return signature

    return None


def get_signature(key: str) -> Optional[MerchantSignature]:
    """Look up a registry entry by its exact key."""
    for signature in MERCHANT_SIGNATURES:
        if signature.key == key:
            return signature
    return None
