"""Tests for parser configuration loading and validation."""

import pytest

from subtrack.config import ParserConfig, load_parser_config


def test_defaults():
    config = load_parser_config()

    assert config.snippet_max_length == 500
    assert config.retention_days == 30
    assert config.batch_size == 10
    assert config.scan_lookback == "6m"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("SUBTRACK_SNIPPET_MAX_LENGTH", "200")
    monkeypatch.setenv("SUBTRACK_RETENTION_DAYS", " 90 ")
    monkeypatch.setenv("SUBTRACK_BATCH_SIZE", "25")
    monkeypatch.setenv("SUBTRACK_SCAN_LOOKBACK", "1y")

    config = load_parser_config()

    assert config == ParserConfig(
        snippet_max_length=200,
        retention_days=90,
        batch_size=25,
        scan_lookback="1y",
    )


def test_blank_value_uses_default(monkeypatch):
    monkeypatch.setenv("SUBTRACK_BATCH_SIZE", "")

    assert load_parser_config().batch_size == 10


@pytest.mark.parametrize(
    "name,value",
    [
        ("SUBTRACK_BATCH_SIZE", "ten"),
        ("SUBTRACK_BATCH_SIZE", "0"),
        ("SUBTRACK_RETENTION_DAYS", "-1"),
        ("SUBTRACK_SNIPPET_MAX_LENGTH", "1.5"),
        ("SUBTRACK_SCAN_LOOKBACK", "6 months"),
        ("SUBTRACK_SCAN_LOOKBACK", "m6"),
    ],
)
def test_invalid_environment_raises(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=name):
        load_parser_config()


def test_direct_construction_validates():
    with pytest.raises(ValueError):
        ParserConfig(snippet_max_length=0)

    with pytest.raises(ValueError):
        ParserConfig(scan_lookback="")
