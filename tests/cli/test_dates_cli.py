"""Tests for the approxidate command line."""

from __future__ import annotations

import json
import re
from pathlib import Path

import pytest
from typer.testing import CliRunner

from approxidate.cli import cli
from approxidate.models import TIMESTAMP_MAX

runner = CliRunner()


def invoke(*args: str):
    return runner.invoke(cli, list(args))


@pytest.fixture
def utc_config(config_path: Path) -> Path:
    result = invoke("config", "init", "--config-path", str(config_path), "--timezone", "UTC", "--format", "iso")
    assert result.exit_code == 0, result.output
    return config_path


# ---------------------------------------------------------------------------
# dates
# ---------------------------------------------------------------------------


def test_parse_with_explicit_zone(config_path: Path) -> None:
    result = invoke("dates", "parse", "Thu, 7 Apr 2005 22:13:13 +0200", "--config-path", str(config_path))
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "1112904793 +0200"


def test_parse_json(config_path: Path) -> None:
    result = invoke("dates", "parse", "@1112904793 -0530", "--json", "--config-path", str(config_path))
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"timestamp": 1112904793, "offset": -330}


def test_parse_rejects_relative_phrase(config_path: Path) -> None:
    result = invoke("dates", "parse", "yesterday", "--config-path", str(config_path))
    assert result.exit_code == 1
    assert "Suggestion:" in result.output


def test_approx_uses_configured_zone_and_format(utc_config: Path) -> None:
    result = invoke("dates", "approx", "@1112904793 +0200", "--config-path", str(utc_config))
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "2005-04-07 20:13:13 +0000"


def test_approx_format_option_wins(utc_config: Path) -> None:
    result = invoke("dates", "approx", "@1112904793 +0200", "--format", "short", "--config-path", str(utc_config))
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "2005-04-07"


def test_approx_json(utc_config: Path) -> None:
    result = invoke("dates", "approx", "@1112904793 +0200", "--json", "--config-path", str(utc_config))
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload == {"timestamp": 1112904793, "offset": 0, "formatted": "2005-04-07 20:13:13 +0000"}


def test_approx_unrecognized_text_fails(utc_config: Path) -> None:
    result = invoke("dates", "approx", "whenever", "--config-path", str(utc_config))
    assert result.exit_code == 1


def test_show_with_offset_and_format(config_path: Path) -> None:
    result = invoke(
        "dates", "show", "1112904793", "--offset", "+0200", "--format", "rfc2822", "--config-path", str(config_path)
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "Thu, 7 Apr 2005 22:13:13 +0200"


def test_show_negative_offset(config_path: Path) -> None:
    result = invoke(
        "dates", "show", "1112904793", "--offset=-05:30", "--format", "iso-strict", "--config-path", str(config_path)
    )
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "2005-04-07T14:43:13-05:30"


def test_show_rejects_unknown_format(config_path: Path) -> None:
    result = invoke("dates", "show", "0", "--format", "unix", "--config-path", str(config_path))
    assert result.exit_code == 1
    assert "Valid formats" in result.output


def test_show_rejects_malformed_offset(config_path: Path) -> None:
    result = invoke("dates", "show", "0", "--offset", "+0590", "--config-path", str(config_path))
    assert result.exit_code == 1


@pytest.mark.parametrize("text,expected", [("never", "0"), ("false", "0"), ("now", str(TIMESTAMP_MAX))])
def test_expiry(config_path: Path, text: str, expected: str) -> None:
    result = invoke("dates", "expiry", text, "--config-path", str(config_path))
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == expected


def test_now_in_configured_zone(utc_config: Path) -> None:
    result = invoke("dates", "now", "--config-path", str(utc_config))
    assert result.exit_code == 0, result.output
    assert re.fullmatch(r"\d+ \+0000", result.stdout.strip())


def test_verbose_flag(config_path: Path) -> None:
    result = invoke("--verbose", "dates", "expiry", "never", "--config-path", str(config_path))
    assert result.exit_code == 0, result.output


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------


def test_config_init_writes_file(config_path: Path) -> None:
    result = invoke("config", "init", "--config-path", str(config_path), "--format", "short", "--window-days", "5")
    assert result.exit_code == 0, result.output
    assert "Configuration initialized" in result.stdout

    data = json.loads(config_path.read_text())
    assert data["dates"]["date_format"] == "short"
    assert data["dates"]["disambiguation_window_days"] == 5


def test_config_init_rejects_bad_timezone(config_path: Path) -> None:
    result = invoke("config", "init", "--config-path", str(config_path), "--timezone", "Not/AZone")
    assert result.exit_code == 1


def test_config_show(utc_config: Path) -> None:
    result = invoke("config", "show", "--config-path", str(utc_config))
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["dates"]["timezone"] == "UTC"


def test_config_set(utc_config: Path) -> None:
    result = invoke("config", "set", "dates.date_format", "rfc", "--config-path", str(utc_config))
    assert result.exit_code == 0, result.output
    assert "Updated dates.date_format" in result.stdout
    assert json.loads(utc_config.read_text())["dates"]["date_format"] == "rfc2822"


def test_config_set_rejects_invalid_value(utc_config: Path) -> None:
    result = invoke("config", "set", "dates.date_format", "unix", "--config-path", str(utc_config))
    assert result.exit_code == 1
    assert json.loads(utc_config.read_text())["dates"]["date_format"] == "iso8601"


def test_config_validate(utc_config: Path) -> None:
    result = invoke("config", "validate", "--config-path", str(utc_config))
    assert result.exit_code == 0, result.output
    assert "Configuration valid" in result.stdout
    assert "Format: iso8601" in result.stdout
    assert "Time zone: UTC" in result.stdout


def test_config_validate_missing_file(config_path: Path) -> None:
    result = invoke("config", "validate", "--config-path", str(config_path))
    assert result.exit_code == 1


def test_config_show_missing_file(config_path: Path) -> None:
    result = invoke("config", "show", "--config-path", str(config_path))
    assert result.exit_code == 1
    assert "config init" in result.output
