"""CLI entry point for de430."""

import click

from .fetch import fetch
from .storage import convert, info, parse
from . import common as common
from ..logging import get_logger


# Create a logger for this module
logger = get_logger(__name__)


@click.group()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times: -v, -vv)",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging (equivalent to -vv)",
)
@click.option(
    "--quiet",
    is_flag=True,
    help="Suppress all logging except errors",
)
def cli(verbose: int, debug: bool, quiet: bool) -> None:
    """DE430 ephemeris CLI."""
    common.configure_logging(
        {
            "quiet": quiet,
            "debug": debug,
            "verbose": verbose,
        }
    )
    logger.debug("Debug logging enabled")


cli.add_command(fetch)
cli.add_command(parse)
cli.add_command(convert)
cli.add_command(info)

if __name__ == "__main__":
    cli()
