"""Command line entry points for approxidate."""

import logging

from typer import Option, Typer

from .dates import dates_app
from ..configuration.cli import config_app


cli = Typer(help="approxidate command line tools")


@cli.callback()
def main(verbose: bool = Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    """Parse and format approximate dates."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


cli.add_typer(dates_app, name="dates")
cli.add_typer(config_app, name="config")

__all__ = ["cli", "dates_app", "config_app"]
