"""
Subscription Parser Utilities

Common utility functions for parsing subscription emails.
Includes:
- Content assembly for matching
- Amount normalisation and currency symbol mapping
- Calendar date parsing
- Sender header parsing
- HTML to text conversion
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Tuple

from bs4 import BeautifulSoup

DEFAULT_CURRENCY = "USD"

CURRENCY_CODES = ('USD', 'EUR', 'GBP', 'CAD', 'AUD')

# Digits with optional thousands separators and exactly two decimals
AMOUNT_NUMBER = r'(?P<amount>(?:\d{1,3}(?:,\d{3})+|\d+)\.\d{2})(?!\d)'

# Currency symbols mapping
CURRENCY_SYMBOLS = {
    '$': 'USD',
    '£': 'GBP',
    '€': 'EUR',
}

# Date formats accepted for explicit dates ("trial ends on march 3, 2025")
DATE_FORMATS = [
    '%B %d, %Y',
    '%B %d %Y',
    '%b %d, %Y',
    '%b %d %Y',
    '%Y-%m-%d',
]

# Display name before an angle bracket or @: "Acme Billing <billing@acme.io>"
SENDER_NAME_PATTERN = re.compile(r'^([^<@]+)')
# "Receipt from Acme <...>" style senders
SENDER_FROM_PATTERN = re.compile(r'from\s+([^<@]+)', re.IGNORECASE)


def build_content(subject: str, body: str, snippet: str) -> str:
    """
    Assemble the lower-cased text used for merchant and field matching.

    Args:
        subject: Email subject line
        body: Plain text body
        snippet: Provider-generated snippet

    Returns:
        Lower-cased "subject body snippet" string
    """
    return f"{subject or ''} {body or ''} {snippet or ''}".lower()


def normalize_amount(raw: str) -> Optional[str]:
    """
    Normalise a matched amount to a two-decimal string.

    Thousands separators are stripped: '1,234.56' -> '1234.56'.

    Args:
        raw: Amount text as matched

    Returns:
        Decimal string with exactly two fractional digits, or None
    """
    if not raw:
        return None

    cleaned = raw.replace(',', '').strip()
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None

    if not value.is_finite() or value < 0:
        return None

    # More digits than the decimal context holds
    try:
        return f"{value.quantize(Decimal('0.01'))}"
    except InvalidOperation:
        return None


def currency_from_symbol(symbol: Optional[str]) -> Optional[str]:
    """Map a currency symbol to its code, or None if unknown/absent."""
    if not symbol:
        return None
    return CURRENCY_SYMBOLS.get(symbol.strip())


def parse_date_string(date_str: str) -> Optional[date]:
    """
    Parse a calendar date such as 'January 15, 2025' or '2025-01-15'.

    Args:
        date_str: Date text (any case)

    Returns:
        date or None if the text is not a valid calendar date
    """
    if not date_str:
        return None

    cleaned = re.sub(r'\s+', ' ', date_str.strip())

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue

    return None


def sender_display_name(sender: str) -> Optional[str]:
    """
    Recover a merchant name from a From header.

    Tries a "from <name>" phrase first, then the text before the first
    '<' or '@'. Whitespace and surrounding quotes are trimmed.

    Args:
        sender: Raw From header

    Returns:
        Display name or None when nothing usable remains
    """
    if not sender:
        return None

    match = SENDER_FROM_PATTERN.search(sender) or SENDER_NAME_PATTERN.match(sender)
    if not match:
        return None

    name = match.group(1).strip().strip('"\'').strip()
    return name or None


def parse_sender_email(from_header: str) -> Tuple[str, str]:
    """
    Parse email address and display name from From header.

    Args:
        from_header: Raw From header string

    Returns:
        Tuple of (email, display_name)
    """
    if not from_header:
        return "", ""

    # Pattern: "Display Name" <email@example.com>
    match = re.match(r'^(?:"?([^"<]*?)"?\s*)?<([^>]+)>$', from_header.strip())

    if match:
        display_name = match.group(1).strip() if match.group(1) else ""
        email = match.group(2).strip()
        return email, display_name

    # Fallback - treat entire string as email
    return from_header.strip(), ""


def extract_sender_domain(email: str) -> str:
    """
    Extract domain from email address.

    Args:
        email: Email address string

    Returns:
        Lower-cased domain, or '' when there is no '@'
    """
    if email and "@" in email:
        return email.split("@")[-1].strip().rstrip(">").lower()
    return ""


def html_to_text(html: str) -> str:
    """
    Convert HTML to plain text.

    Args:
        html: HTML content

    Returns:
        Plain text content
    """
    if not html:
        return ''

    soup = BeautifulSoup(html, 'html.parser')

    # Remove script and style elements
    for element in soup(['script', 'style', 'head', 'meta', 'noscript']):
        element.decompose()

    # Get text and clean up whitespace
    text = soup.get_text(separator=' ')
    text = re.sub(r'\s+', ' ', text)

    return text.strip()
