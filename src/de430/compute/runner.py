"""Run the external ephemeris tool and parse what it prints."""

import subprocess
from typing import Optional

from ..errors import CommandFailedError
from ..logging import get_logger
from ..model import EphemerisCollection
from ..parsers import RecordParser
from .command import build_docker_command, format_command
from .config import De430Config

logger = get_logger(__name__)


def get_ephemeris(
    config: De430Config, image: Optional[str] = None
) -> EphemerisCollection:
    """Compute ephemeris data for the configured objects.

    The tool's standard output is parsed line by line as it is produced.

    Args:
        config: The request configuration
        image: Container image, defaults to DE430_DOCKER_IMAGE or the built-in image

    Returns:
        A collection with one series per requested object

    Raises:
        InvalidConfigError: If the object list is empty or invalid
        CommandFailedError: If the tool cannot be started or exits with an error
        AllocationError: If point storage cannot be allocated
    """
    # Validate the object list before starting anything
    parser = RecordParser.from_config(config)

    argv = build_docker_command(config, image)
    logger.info(f"Executing command: {format_command(argv)}")

    try:
        process = subprocess.Popen(
            argv,
            stdout=subprocess.PIPE,
            text=True,
            encoding="utf-8",
        )
    except OSError as e:
        raise CommandFailedError(f"Failed to execute {argv[0]}: {e}") from e

    with process:
        try:
            collection = parser.parse(process.stdout)  # type: ignore[arg-type]
        except Exception:
            process.kill()
            raise
        returncode = process.wait()

    if returncode != 0:
        collection.release()
        raise CommandFailedError(f"Ephemeris command exited with status {returncode}")

    return collection
