"""
Storage codecs for ephemeris collections.

This module provides the three on-disk formats (binary, CSV and JSON) and
helpers for choosing a codec by name or by file extension.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from ..errors import InvalidConfigError
from .base import EphemerisCodec
from .binary import BinaryCodec
from .structured import StructuredTextCodec
from .table import TextTableCodec

CODECS: Dict[str, EphemerisCodec] = {
    codec.format_name: codec
    for codec in (BinaryCodec(), TextTableCodec(), StructuredTextCodec())
}

FORMAT_NAMES: List[str] = list(CODECS)


def get_codec(format_name: str) -> EphemerisCodec:
    """Get the codec for a format name ("binary", "csv" or "json").

    Raises:
        InvalidConfigError: If the format is unknown
    """
    try:
        return CODECS[format_name.lower()]
    except KeyError:
        raise InvalidConfigError(f"Unknown storage format: {format_name}")


def codec_for_path(
    path: Union[str, Path], format_name: Optional[str] = None
) -> EphemerisCodec:
    """Choose a codec from an explicit format name or the file extension.

    Raises:
        InvalidConfigError: If no format is given and the extension is not recognized
    """
    if format_name:
        return get_codec(format_name)

    suffix = Path(path).suffix.lower()
    for codec in CODECS.values():
        if suffix in codec.extensions:
            return codec
    raise InvalidConfigError(
        f"Cannot infer storage format from {str(path)!r}; use one of {', '.join(FORMAT_NAMES)}"
    )


__all__ = [
    "EphemerisCodec",
    "BinaryCodec",
    "TextTableCodec",
    "StructuredTextCodec",
    "CODECS",
    "FORMAT_NAMES",
    "get_codec",
    "codec_for_path",
]
