"""
Merchant Resolution

Identifies the merchant behind a subscription email: registry signatures
first, then the sender's display name.
"""

from subtrack.logging_config import get_logger

from .merchant_registry import find_signature
from .types import MerchantMatch, MerchantNotFound, ResolveOutcome
from .utilities import sender_display_name

logger = get_logger(__name__)


def resolve_merchant(sender: str, content: str) -> ResolveOutcome:
    """
    Resolve the merchant for an email.

    Flow:
    1. Registry: first signature whose key is a substring of the
       lower-cased sender or content
    2. Sender heuristic: display name before '<' or '@' (no category,
       no signature)
    3. MerchantNotFound

    Args:
        sender: Raw From header
        content: Lower-cased subject/body/snippet text

    Returns:
        MerchantMatch or MerchantNotFound
    """
    sender = sender or ''

    signature = find_signature(sender.lower(), content or '')
    if signature:
        return MerchantMatch(
            name=signature.canonical_name,
            category=signature.category,
            signature=signature,
        )

    name = sender_display_name(sender)
    if name:
        logger.debug(f"No registry match, using sender name '{name}'", extra={"merchant": name})
        return MerchantMatch(name=name)

    return MerchantNotFound(sender=sender)
