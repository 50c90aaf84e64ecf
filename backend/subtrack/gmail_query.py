"""
Gmail Search Query Builder

Builds the inbox search string used by the mail-fetching collaborator to
find candidate subscription emails. No network access happens here.
"""

from datetime import datetime
from typing import Optional

# Keywords that typically appear in subscription email subjects
SUBSCRIPTION_SUBJECT_KEYWORDS = [
    "subscription",
    "receipt",
    "invoice",
    "payment confirmation",
    "trial",
    "billing",
    "membership",
]

# Payment processors and generic no-reply senders
SUBSCRIPTION_SENDERS = [
    "stripe.com",
    "paypal.com",
    "apple.com",
    "google.com",
    "no-reply@",
    "noreply@",
]

# Phrases anywhere in the message
SUBSCRIPTION_PHRASES = [
    "your subscription",
    "monthly charge",
    "annual renewal",
    "free trial",
]


def _quote(term: str) -> str:
    return f'"{term}"' if " " in term else term


def build_subscription_query(
    since: Optional[datetime] = None,
    lookback: str = "6m",
) -> str:
    """
    Build Gmail search query for subscription emails.

    Args:
        since: Only match emails after this time (incremental scans)
        lookback: Relative window used when since is not given (e.g. '6m')

    Returns:
        Gmail search query string
    """
    subject_query = " OR ".join(_quote(kw) for kw in SUBSCRIPTION_SUBJECT_KEYWORDS)
    from_query = " OR ".join(_quote(sender) for sender in SUBSCRIPTION_SENDERS)
    phrase_query = " OR ".join(_quote(phrase) for phrase in SUBSCRIPTION_PHRASES)

    base_query = f"(subject:({subject_query}) OR from:({from_query}) OR ({phrase_query}))"

    if since:
        return f"{base_query} after:{int(since.timestamp())}"

    return f"{base_query} newer_than:{lookback}"
