"""
Parse DE430 ephemeris tool output and store it as binary, CSV or JSON.
"""

from .errors import (
    AllocationError,
    CommandFailedError,
    De430Error,
    ErrorCode,
    FileIOError,
    InvalidConfigError,
    JSONParseError,
    ParseError,
    error_message,
)
from .model import EphemerisCollection, EphemerisPoint, ObjectSeries
from .parsers import RecordParser
from .codecs import BinaryCodec, StructuredTextCodec, TextTableCodec
from .compute import De430Config, get_ephemeris

__all__ = [
    "AllocationError",
    "CommandFailedError",
    "De430Error",
    "ErrorCode",
    "FileIOError",
    "InvalidConfigError",
    "JSONParseError",
    "ParseError",
    "error_message",
    "EphemerisCollection",
    "EphemerisPoint",
    "ObjectSeries",
    "RecordParser",
    "BinaryCodec",
    "StructuredTextCodec",
    "TextTableCodec",
    "De430Config",
    "get_ephemeris",
]
