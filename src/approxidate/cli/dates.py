"""Date CLI commands.

Commands:
    approxidate dates parse "Thu, 7 Apr 2005 22:13:13 +0200"
    approxidate dates approx "3 weeks ago" --format iso
    approxidate dates show 1112904793 --offset +0200 --format rfc2822
    approxidate dates expiry 2.weeks.ago
    approxidate dates now
"""

import json
import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer

from approxidate.configuration.settings import DEFAULT_CONFIG_PATH, Settings, load_settings
from approxidate.dates import datestamp, parse_expiry, parse_relative
from approxidate.environment import Environment
from approxidate.errors import ApproxidateError, handle_error
from approxidate.formatter import DateFormatter, decode_format_name
from approxidate.models import FormatMode
from approxidate.parser import DateParser
from approxidate.timezones import decode_numeric_offset, format_offset, local_offset_at, parse_numeric_offset

logger = logging.getLogger(__name__)

dates_app = typer.Typer(help="Parse and format dates")


def _load_settings(config_path: Path) -> Settings:
    """Settings from disk, or defaults when no file exists yet."""
    if not config_path.exists():
        logger.debug(f"No configuration at {config_path}, using defaults")
        return Settings()
    return load_settings(config_path)


def _fail(error: ApproxidateError) -> NoReturn:
    typer.echo(handle_error(error), err=True)
    raise typer.Exit(code=1)


def _resolve_mode(name: Optional[str], settings: Settings) -> FormatMode:
    if name is None:
        return settings.dates.date_format
    return decode_format_name(name)


@dates_app.command("parse")
def parse_command(
    text: str = typer.Argument(..., help="Date text, e.g. 'Thu, 7 Apr 2005 22:13:13 +0200'"),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config"),
) -> None:
    """Parse an absolute date into '<timestamp> +HHMM'."""
    try:
        settings = _load_settings(config_path)
        timestamp, offset = DateParser.from_settings(settings).parse_absolute(text)
    except ApproxidateError as e:
        _fail(e)

    if output_json:
        typer.echo(json.dumps({"timestamp": timestamp, "offset": offset}))
    else:
        typer.echo(f"{timestamp} {format_offset(offset)}")


@dates_app.command("approx")
def approx_command(
    text: str = typer.Argument(..., help="Date or relative phrase, e.g. '3 weeks ago'"),
    date_format: Optional[str] = typer.Option(None, "--format", help="Output format"),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config"),
) -> None:
    """Interpret a date or relative phrase and print it formatted."""
    try:
        settings = _load_settings(config_path)
        mode = _resolve_mode(date_format, settings)
        environment = Environment.from_settings(settings)
        timestamp = parse_relative(
            text,
            environment=environment,
            window_days=settings.dates.disambiguation_window_days,
        )
    except ApproxidateError as e:
        _fail(e)

    offset = decode_numeric_offset(local_offset_at(timestamp, environment))
    formatted = DateFormatter(environment, default_mode=mode).format(timestamp, offset)
    if output_json:
        typer.echo(json.dumps({"timestamp": timestamp, "offset": offset, "formatted": formatted}))
    else:
        typer.echo(formatted)


@dates_app.command("show")
def show_command(
    timestamp: int = typer.Argument(..., help="Seconds since the epoch"),
    offset: str = typer.Option("+0000", "--offset", help="Offset such as +0200 or -05:30"),
    date_format: Optional[str] = typer.Option(None, "--format", help="Output format"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config"),
) -> None:
    """Format a timestamp."""
    try:
        settings = _load_settings(config_path)
        mode = _resolve_mode(date_format, settings)
        minutes = parse_numeric_offset(offset)
    except ApproxidateError as e:
        _fail(e)

    formatter = DateFormatter(Environment.from_settings(settings), default_mode=mode)
    typer.echo(formatter.format(timestamp, minutes))


@dates_app.command("expiry")
def expiry_command(
    text: str = typer.Argument(..., help="Expiry such as 'never', 'now' or '2.weeks.ago'"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config"),
) -> None:
    """Print the expiry cut-off timestamp."""
    try:
        settings = _load_settings(config_path)
        timestamp = parse_expiry(text, environment=Environment.from_settings(settings))
    except ApproxidateError as e:
        _fail(e)
    typer.echo(str(timestamp))


@dates_app.command("now")
def now_command(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config"),
) -> None:
    """Print the current instant as '<timestamp> +HHMM'."""
    try:
        settings = _load_settings(config_path)
    except ApproxidateError as e:
        _fail(e)
    typer.echo(datestamp(Environment.from_settings(settings)))
