"""
Parser Configuration Management
Handles environment variables, validation, and defaults for parse runs
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Gmail-style relative window: 30d, 6m, 1y
LOOKBACK_PATTERN = re.compile(r"^\d+[dmy]$")


def load_env_file() -> None:
    """Load a .env file from the backend directory or the working directory."""
    env_path = Path(__file__).resolve().parents[2] / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)
    else:
        load_dotenv(override=False)


@dataclass
class ParserConfig:
    """Parser configuration object"""
    snippet_max_length: int = 500
    retention_days: int = 30
    batch_size: int = 10
    scan_lookback: str = "6m"

    def __post_init__(self):
        """Validate configuration after initialization"""
        self.validate()

    def validate(self):
        """Validate parser configuration"""
        if self.snippet_max_length <= 0:
            raise ValueError("SUBTRACK_SNIPPET_MAX_LENGTH must be greater than 0")

        if self.retention_days <= 0:
            raise ValueError("SUBTRACK_RETENTION_DAYS must be greater than 0")

        if self.batch_size <= 0:
            raise ValueError("SUBTRACK_BATCH_SIZE must be greater than 0")

        if not LOOKBACK_PATTERN.match(self.scan_lookback or ""):
            raise ValueError(
                f"Invalid SUBTRACK_SCAN_LOOKBACK: {self.scan_lookback} "
                "(expected a window like '30d', '6m' or '1y')"
            )


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def load_parser_config() -> ParserConfig:
    """
    Load parser configuration from environment variables.

    Environment variables:
        SUBTRACK_SNIPPET_MAX_LENGTH: Stored snippet length (default: 500)
        SUBTRACK_RETENTION_DAYS: Days to keep parsed-email records (default: 30)
        SUBTRACK_BATCH_SIZE: Emails processed per batch (default: 10)
        SUBTRACK_SCAN_LOOKBACK: Inbox window for first scans (default: 6m)

    Returns:
        ParserConfig

    Raises:
        ValueError: If a variable is present but invalid
    """
    load_env_file()

    return ParserConfig(
        snippet_max_length=_int_env("SUBTRACK_SNIPPET_MAX_LENGTH", 500),
        retention_days=_int_env("SUBTRACK_RETENTION_DAYS", 30),
        batch_size=_int_env("SUBTRACK_BATCH_SIZE", 10),
        scan_lookback=os.getenv("SUBTRACK_SCAN_LOOKBACK", "6m").strip(),
    )
