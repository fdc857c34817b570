"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from backoffice.infrastructure.config import DEFAULT_DATA_DIR, Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.data_dir == DEFAULT_DATA_DIR
    assert settings.log_level == "WARNING"
    assert settings.low_stock_threshold == 5


def test_overrides():
    settings = Settings.from_env({
        "BACKOFFICE_DATA_DIR": "/srv/backoffice",
        "BACKOFFICE_LOG_LEVEL": "debug",
        "BACKOFFICE_LOW_STOCK_THRESHOLD": "0",
    })
    assert settings.data_dir == Path("/srv/backoffice")
    assert settings.log_level == "DEBUG"
    assert settings.low_stock_threshold == 0


@pytest.mark.parametrize("raw", ["many", "-1"])
def test_bad_threshold(raw):
    with pytest.raises(ValueError, match="BACKOFFICE_LOW_STOCK_THRESHOLD"):
        Settings.from_env({"BACKOFFICE_LOW_STOCK_THRESHOLD": raw})
