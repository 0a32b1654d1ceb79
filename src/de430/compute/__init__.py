"""
Access to the external DE430 ephemeris tool.

This module provides the request configuration, the command line builder
and the runner that streams the tool's output into the record parser.
"""

from .config import De430Config, J2000
from .command import (
    DEFAULT_DOCKER_IMAGE,
    build_docker_command,
    build_ephemeris_args,
    format_command,
    get_docker_image,
)
from .runner import get_ephemeris

__all__ = [
    "De430Config",
    "J2000",
    "DEFAULT_DOCKER_IMAGE",
    "build_docker_command",
    "build_ephemeris_args",
    "format_command",
    "get_docker_image",
    "get_ephemeris",
]
