"""
Command-line interface utilities for de430.

This module provides logging configuration from the verbosity flags and the
shared error reporting used by every command.
"""

import logging
import sys
from typing import Any, Dict, NoReturn

import click

from ..errors import De430Error
from ..logging import set_log_level


def configure_logging(args: Dict[str, Any]) -> None:
    """
    Configure logging based on command line arguments.

    Args:
        args: Parsed verbosity flags: quiet, debug and verbose (a count)
    """
    quiet = args.get("quiet", False)
    debug = args.get("debug", False)
    verbosity = args.get("verbose", 0)

    if quiet:
        log_level = logging.ERROR
    elif debug:
        log_level = logging.DEBUG
    else:
        # 0 -> WARNING, 1 -> INFO, 2+ -> DEBUG
        if verbosity == 0:
            log_level = logging.WARNING
        elif verbosity == 1:
            log_level = logging.INFO
        else:
            log_level = logging.DEBUG

    set_log_level(log_level)
    logging.getLogger("de430").debug(
        f"Logging configured with level {logging.getLevelName(log_level)}"
    )


def fail(error: De430Error) -> NoReturn:
    """Report a de430 error on stderr and exit with status 1."""
    click.echo(f"Error: {error.message}: {error}", err=True)
    sys.exit(1)
