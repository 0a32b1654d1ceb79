"""
CLI commands for parsing raw tool output and working with stored ephemerides.
"""

import sys
from typing import Optional

import click

from ..codecs import FORMAT_NAMES, codec_for_path
from ..errors import De430Error, FileIOError
from ..model import EphemerisCollection, ObjectSeries
from ..parsers import RecordParser
from ..logging import get_logger
from . import common

logger = get_logger(__name__)

FORMAT_CHOICE = click.Choice(FORMAT_NAMES, case_sensitive=False)


def read_raw_output(input_path: str, parser: RecordParser) -> EphemerisCollection:
    """Parse raw tool output from a file, or from stdin when the path is "-"."""
    if input_path == "-":
        logger.debug("Reading raw ephemeris output from stdin")
        return parser.parse(sys.stdin)
    try:
        with open(input_path, "r", encoding="utf-8") as f:
            return parser.parse(f)
    except OSError as e:
        raise FileIOError(f"Failed to read {input_path}: {e}") from e


def format_series_summary(series: ObjectSeries) -> str:
    """Summarize one series with details of its first point."""
    lines = [
        f"Object: {series.object_name}",
        f"Number of data points: {series.count}",
    ]
    if series.count > 0:
        first = series.points[0]
        lines.append(f"  First point (JD {first.jd:.1f}):")
        lines.append(
            "    Position (XYZ): "
            + ", ".join(f"{value:.6f}" for value in first.position)
        )
        lines.append(f"    RA/Dec: {first.ra_dec[0]:.6f}, {first.ra_dec[1]:.6f}")
        lines.append(f"    Magnitude: {first.magnitude:.3f}")
        lines.append(f"    Distance from Earth: {first.earth_dist:.6f} AU")
        if first.constellation:
            lines.append(f"    Constellation: {first.constellation}")
    return "\n".join(lines)


@click.command()
@click.argument("input_path", metavar="INPUT", type=click.Path(dir_okay=False))
@click.argument("output", type=click.Path(dir_okay=False))
@click.option(
    "--objects", required=True, help="Comma-separated object names, in output order"
)
@click.option(
    "--constellations",
    is_flag=True,
    help="Each object's fields end with a constellation label",
)
@click.option(
    "--format",
    "format_name",
    type=FORMAT_CHOICE,
    help="Storage format (default: inferred from OUTPUT)",
)
def parse(
    input_path: str,
    output: str,
    objects: str,
    constellations: bool,
    format_name: Optional[str],
) -> None:
    """Parse raw DE430 tool output from INPUT ("-" for stdin) and save it to OUTPUT."""
    try:
        codec = codec_for_path(output, format_name)
        parser = RecordParser(objects, output_constellations=constellations)
        with read_raw_output(input_path, parser) as collection:
            codec.save(collection, output)
            click.echo(
                f"Saved {collection.object_count} objects to {output} ({codec.format_name})"
            )
    except De430Error as e:
        common.fail(e)


@click.command()
@click.argument("input_path", metavar="INPUT", type=click.Path(dir_okay=False))
@click.argument("output", type=click.Path(dir_okay=False))
@click.option(
    "--from",
    "from_format",
    type=FORMAT_CHOICE,
    help="Input format (default: inferred from INPUT)",
)
@click.option(
    "--to",
    "to_format",
    type=FORMAT_CHOICE,
    help="Output format (default: inferred from OUTPUT)",
)
def convert(
    input_path: str,
    output: str,
    from_format: Optional[str],
    to_format: Optional[str],
) -> None:
    """Convert a stored ephemeris file between binary, CSV and JSON."""
    try:
        reader = codec_for_path(input_path, from_format)
        writer = codec_for_path(output, to_format)
        with reader.load(input_path) as collection:
            writer.save(collection, output)
            click.echo(
                f"Converted {collection.object_count} objects from "
                f"{reader.format_name} to {writer.format_name}"
            )
    except De430Error as e:
        common.fail(e)


@click.command()
@click.argument("input_path", metavar="INPUT", type=click.Path(dir_okay=False))
@click.option(
    "--format",
    "format_name",
    type=FORMAT_CHOICE,
    help="Storage format (default: inferred from INPUT)",
)
def info(input_path: str, format_name: Optional[str]) -> None:
    """Print a summary of each object in a stored ephemeris file."""
    try:
        codec = codec_for_path(input_path, format_name)
        with codec.load(input_path) as collection:
            click.echo(f"Loaded {collection.object_count} objects from {input_path}")
            for series in collection:
                click.echo(format_series_summary(series))
    except De430Error as e:
        common.fail(e)
