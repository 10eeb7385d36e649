"""Typed settings for approxidate.

User preferences (default output format, time zone used for "local time",
the disambiguation window for numeric dates) are kept in a JSON file and
validated through Pydantic models so the CLI and library callers can rely on
them.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dateutil import tz
from pydantic import BaseModel, Field, ValidationError, field_validator

from approxidate.errors import InvalidConfigError, UnknownFormatNameError
from approxidate.formatter import decode_format_name
from approxidate.models import DISAMBIGUATION_WINDOW_DAYS, FormatMode

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".approxidate" / "config.json"


class DateSettings(BaseModel):
    """Date interpretation and display preferences."""

    date_format: FormatMode = Field(FormatMode.DEFAULT, description="Default output format")
    timezone: Optional[str] = Field(
        default=None, description="Zone name for local time, e.g. Europe/Berlin (None = system)"
    )
    disambiguation_window_days: int = Field(
        DISAMBIGUATION_WINDOW_DAYS,
        ge=0,
        le=366,
        description="How far in the future an ambiguous numeric date may lie",
    )

    @field_validator("date_format", mode="before")
    def _validate_date_format(cls, value: Any) -> Any:
        if isinstance(value, FormatMode) or not isinstance(value, str):
            return value
        try:
            return decode_format_name(value)
        except UnknownFormatNameError as exc:
            raise ValueError(exc.message) from exc

    @field_validator("timezone")
    def _validate_timezone(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        if tz.gettz(value) is None:
            raise ValueError(f"Unknown time zone {value!r}")
        return value


class Settings(BaseModel):
    """Root configuration state."""

    dates: DateSettings = Field(default_factory=DateSettings)


def load_settings(path: Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Load settings from disk or raise if invalid."""

    if not path.exists():
        raise FileNotFoundError(f"Settings file not found at {path}")
    try:
        payload = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise InvalidConfigError(f"Configuration at {path} is not valid JSON: {exc}") from exc
    try:
        return Settings.model_validate(payload)
    except ValidationError as exc:
        raise InvalidConfigError(f"Invalid configuration: {exc}", details={"path": str(path)}) from exc


def save_settings(settings: Settings, path: Path = DEFAULT_CONFIG_PATH) -> None:
    """Persist settings to disk."""

    payload = settings.model_dump(mode="json")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2))


def bootstrap_settings(
    *,
    path: Path = DEFAULT_CONFIG_PATH,
    overrides: Optional[Dict[str, Any]] = None,
) -> Settings:
    """Create or load settings respecting overrides and environment variables."""

    overrides = overrides or {}

    if path.exists():
        settings = load_settings(path)
    else:
        logger.info(f"Creating default configuration at {path}")
        settings = Settings()
        save_settings(settings, path)

    merged = settings.model_dump(mode="python")
    merged = _apply_overrides(merged, overrides)
    merged = _apply_env_overrides(merged)

    try:
        resolved = Settings.model_validate(merged)
    except ValidationError as exc:
        raise InvalidConfigError(f"Invalid configuration: {exc}", details={"path": str(path)}) from exc
    save_settings(resolved, path)
    return resolved


def _apply_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = base.copy()
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _apply_overrides(merged[key], value)
        else:
            merged[key] = value
    return merged


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    dates = data.setdefault("dates", {})
    _set_env_override(dates, "date_format", "APPROXIDATE_DATE_FORMAT")
    _set_env_override(dates, "timezone", "APPROXIDATE_TIMEZONE")
    _set_env_override(dates, "disambiguation_window_days", "APPROXIDATE_WINDOW_DAYS", cast_int=True)
    return data


def _set_env_override(
    mapping: Dict[str, Any],
    key: str,
    env_name: str,
    *,
    cast_int: bool = False,
) -> None:
    raw = os.getenv(env_name)
    if raw is None:
        return
    if cast_int:
        try:
            mapping[key] = int(raw)
        except ValueError as exc:
            raise InvalidConfigError(
                f"{env_name} must be an integer, got {raw!r}", details={"variable": env_name}
            ) from exc
    else:
        mapping[key] = raw
