"""
Subscription Category Inference

Maps a free-text merchant name to one of a closed set of categories using
substring keyword matching. Used by the parsing pipeline for merchants that
are not in the registry, and on its own for manually entered subscriptions.
"""

from typing import Optional

OTHER_CATEGORY = "other"

# Category -> keywords, checked in declaration order (first match wins).
# Keywords are substrings of the lower-cased merchant name, not words.
CATEGORY_KEYWORDS = {
    'ai_tools': ['openai', 'anthropic', 'claude', 'chatgpt', 'midjourney', 'dall-e'],
    'design': ['figma', 'canva', 'adobe', 'sketch', 'invision'],
    'video_editing': ['adobe premiere', 'final cut', 'davinci', 'filmora'],
    'productivity': ['notion', 'asana', 'trello', 'monday', 'clickup', 'airtable'],
    'analytics': ['google analytics', 'mixpanel', 'amplitude', 'segment'],
    'marketing': ['mailchimp', 'hubspot', 'sendgrid', 'convertkit'],
    'development': ['github', 'gitlab', 'vercel', 'netlify', 'heroku', 'aws'],
    'finance': ['stripe', 'paypal', 'quickbooks', 'xero'],
    'entertainment': ['netflix', 'spotify', 'hulu', 'disney', 'youtube'],
    'education': ['udemy', 'coursera', 'skillshare', 'masterclass'],
}

CATEGORIES = tuple(CATEGORY_KEYWORDS) + (OTHER_CATEGORY,)


def infer_category(merchant_name: Optional[str]) -> str:
    """
    Infer a subscription category from a merchant name.

    Args:
        merchant_name: Merchant display name (any case)

    Returns:
        Category key, or 'other' when no keyword matches

    Examples:
        >>> infer_category("OpenAI")
        'ai_tools'
        >>> infer_category("Acme Corp")
        'other'
    """
    if not merchant_name:
        return OTHER_CATEGORY

    name = merchant_name.lower()

    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in name for keyword in keywords):
            return category

    return OTHER_CATEGORY


def is_known_category(category: Optional[str]) -> bool:
    return category in CATEGORIES
