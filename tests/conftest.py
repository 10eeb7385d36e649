"""Shared fixtures: deterministic clocks and zones."""

from __future__ import annotations

import pytest
from dateutil import tz

from approxidate.environment import Environment

# Tuesday 2023-11-14 22:13:20 UTC
NOW = 1_700_000_000


@pytest.fixture
def now() -> int:
    return NOW


@pytest.fixture
def utc_env() -> Environment:
    return Environment.fixed(NOW)


@pytest.fixture
def plus_one_env() -> Environment:
    """Fixed clock in a zone one hour east of UTC."""
    return Environment.fixed(NOW, tz.tzoffset("CET", 3600))


@pytest.fixture
def minus_five_env() -> Environment:
    return Environment.fixed(NOW, tz.tzoffset("EST", -5 * 3600))


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config.json"


@pytest.fixture(autouse=True)
def clean_settings_environment(monkeypatch) -> None:
    """Keep the caller's APPROXIDATE_* variables out of the tests."""
    for name in ("APPROXIDATE_DATE_FORMAT", "APPROXIDATE_TIMEZONE", "APPROXIDATE_WINDOW_DAYS"):
        monkeypatch.delenv(name, raising=False)
