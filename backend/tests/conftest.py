"""Core test fixtures for subscription parsing tests.

Provides sample emails, a fixed reference date for trial calculations,
and an environment scrubbed of SUBTRACK_* settings so tests never depend
on the developer's .env.
"""

import json
import sys
from datetime import date, datetime
from pathlib import Path

import pytest

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from subtrack.email_parsing import EmailContent  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"

SUBTRACK_ENV_VARS = (
    "SUBTRACK_SNIPPET_MAX_LENGTH",
    "SUBTRACK_RETENTION_DAYS",
    "SUBTRACK_BATCH_SIZE",
    "SUBTRACK_SCAN_LOOKBACK",
    "SUBTRACK_LOG_DIR",
    "SUBTRACK_LOG_LEVEL",
)


# ============================================================================
# ENVIRONMENT
# ============================================================================


@pytest.fixture(autouse=True)
def clean_subtrack_env(monkeypatch):
    """Remove SUBTRACK_* variables for every test."""
    for name in SUBTRACK_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


# ============================================================================
# REFERENCE TIME
# ============================================================================


@pytest.fixture
def today():
    """Fixed date used for relative trial durations."""
    return date(2025, 1, 15)


@pytest.fixture
def now():
    """Fixed processing time for batch runs."""
    return datetime(2025, 1, 15, 9, 30)


# ============================================================================
# SAMPLE EMAILS
# ============================================================================


@pytest.fixture
def sample_emails_path():
    """Path to the JSON file of sample subscription emails."""
    return FIXTURES_DIR / "sample_emails" / "subscriptions.json"


@pytest.fixture
def sample_email_dicts(sample_emails_path):
    """Load the sample emails as raw dicts."""
    with open(sample_emails_path, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def sample_emails(sample_email_dicts):
    """Sample emails as EmailContent objects."""
    return [EmailContent.from_dict(item) for item in sample_email_dicts]


@pytest.fixture
def netflix_email():
    """Canonical Netflix receipt."""
    return {
        "subject": "Your Netflix subscription receipt",
        "sender": "info@netflix.com",
        "body": "You were charged $15.49 monthly",
        "snippet": "",
    }
