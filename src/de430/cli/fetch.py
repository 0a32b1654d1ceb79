"""
CLI command for computing ephemerides with the DE430 tool and saving them.
"""

from typing import List, Optional

import click

from ..codecs import FORMAT_NAMES, codec_for_path
from ..compute import De430Config, J2000, get_ephemeris
from ..errors import De430Error, InvalidConfigError
from ..logging import get_logger
from . import common

logger = get_logger(__name__)


def parse_jd_list(value: Optional[str]) -> Optional[List[float]]:
    """
    Parse a comma-separated list of Julian dates.

    Args:
        value: Text such as "2451545.0,2451546.0", or None

    Returns:
        The dates, or None when no list was given

    Raises:
        InvalidConfigError: If an entry is not a number
    """
    if value is None or not value.strip():
        return None
    dates = []
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        try:
            dates.append(float(item))
        except ValueError:
            raise InvalidConfigError(f"Invalid Julian date in --jd-list: {item!r}")
    return dates


@click.command()
@click.argument("output", type=click.Path(dir_okay=False))
@click.option(
    "--objects",
    default="jupiter",
    show_default=True,
    help="Comma-separated object names",
)
@click.option("--jd-min", type=float, default=2451544.5, show_default=True)
@click.option("--jd-max", type=float, default=2451574.5, show_default=True)
@click.option("--jd-step", type=float, default=1.0, show_default=True)
@click.option(
    "--jd-list",
    help="Comma-separated Julian dates, used instead of the min/max/step range",
)
@click.option("--latitude", type=float, default=0.0, show_default=True)
@click.option("--longitude", type=float, default=0.0, show_default=True)
@click.option(
    "--topocentric",
    is_flag=True,
    help="Apply the topocentric correction for --latitude/--longitude",
)
@click.option("--epoch", type=float, default=J2000, show_default=True)
@click.option(
    "--output-format",
    type=click.IntRange(-1, 3),
    default=0,
    show_default=True,
    help="Tool output format",
)
@click.option("--orbital-elements", is_flag=True, help="Output orbital elements")
@click.option(
    "--constellations", is_flag=True, help="Output the constellation of each point"
)
@click.option(
    "--format",
    "format_name",
    type=click.Choice(FORMAT_NAMES, case_sensitive=False),
    help="Storage format (default: inferred from OUTPUT)",
)
@click.option("--image", help="Container image (default: DE430_DOCKER_IMAGE)")
def fetch(
    output: str,
    objects: str,
    jd_min: float,
    jd_max: float,
    jd_step: float,
    jd_list: Optional[str],
    latitude: float,
    longitude: float,
    topocentric: bool,
    epoch: float,
    output_format: int,
    orbital_elements: bool,
    constellations: bool,
    format_name: Optional[str],
    image: Optional[str],
) -> None:
    """Compute ephemerides with the DE430 tool and save them to OUTPUT."""
    try:
        codec = codec_for_path(output, format_name)
        config = De430Config(
            jd_min=jd_min,
            jd_max=jd_max,
            jd_step=jd_step,
            jd_list=parse_jd_list(jd_list),
            latitude=latitude,
            longitude=longitude,
            enable_topocentric=topocentric,
            epoch=epoch,
            objects=objects,
            output_format=output_format,
            use_orbital_elements=orbital_elements,
            output_constellations=constellations,
        )
        logger.debug(f"Fetching {objects} with {config}")
        with get_ephemeris(config, image=image) as collection:
            codec.save(collection, output)
            click.echo(
                f"Saved {collection.object_count} objects to {output} ({codec.format_name})"
            )
    except De430Error as e:
        common.fail(e)
