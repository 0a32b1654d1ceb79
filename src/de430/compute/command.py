"""Command lines for the external DE430 ephemeris tool."""

import os
import shlex
from typing import List, Optional

from .config import De430Config

DEFAULT_DOCKER_IMAGE = "ephemeris-compute-de430:v6"
EPHEMERIS_BINARY = "./bin/ephem.bin"


def get_docker_image() -> str:
    """Container image to run, overridable with DE430_DOCKER_IMAGE."""
    return os.environ.get("DE430_DOCKER_IMAGE", "").strip() or DEFAULT_DOCKER_IMAGE


def build_ephemeris_args(config: De430Config) -> List[str]:
    """Build the argument list for ephem.bin from a request configuration.

    Args:
        config: The request configuration

    Returns:
        Arguments in the order the tool documents them
    """
    args: List[str] = []

    if config.uses_jd_list:
        args += ["--jd_list", ",".join(f"{jd:.15f}" for jd in config.jd_list or [])]
    else:
        args += [
            "--jd_min",
            f"{config.jd_min:.15f}",
            "--jd_max",
            f"{config.jd_max:.15f}",
            "--jd_step",
            f"{config.jd_step:.15f}",
        ]

    if config.enable_topocentric:
        args += [
            "--latitude",
            f"{config.latitude:.6f}",
            "--longitude",
            f"{config.longitude:.6f}",
            "--enable_topocentric_correction",
            "1",
        ]

    args += [
        "--epoch",
        f"{config.epoch:.15f}",
        "--objects",
        config.objects,
        "--output_format",
        str(config.output_format),
        "--use_orbital_elements",
        str(int(config.use_orbital_elements)),
        "--output_constellations",
        str(int(config.output_constellations)),
    ]
    return args


def build_docker_command(config: De430Config, image: Optional[str] = None) -> List[str]:
    """Build the full command that runs ephem.bin inside its container."""
    return [
        "docker",
        "run",
        "--rm",
        image or get_docker_image(),
        EPHEMERIS_BINARY,
    ] + build_ephemeris_args(config)


def format_command(argv: List[str]) -> str:
    """Render a command for logs, quoted as a shell would need it."""
    return " ".join(shlex.quote(arg) for arg in argv)
