"""Command line entry points for orgtime."""

import logging

import typer
from typer import Typer

from ..configuration.cli import config_app
from ..configuration.settings import DEFAULT_CONFIG_PATH, configure, load_settings
from ..errors import ConfigurationError
from .timestamps import timestamps_app

logger = logging.getLogger(__name__)


cli = Typer(help="orgtime command line tools")
cli.add_typer(timestamps_app, name="ts")
cli.add_typer(config_app, name="config")


@cli.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Load stored settings (if any) before running a command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if DEFAULT_CONFIG_PATH.exists():
        try:
            configure(load_settings(DEFAULT_CONFIG_PATH))
        except ConfigurationError as exc:
            logger.warning("Using default settings: %s", exc)


__all__ = ["cli", "config_app", "timestamps_app"]
