"""
In-memory model for parsed ephemeris data.

This module provides the point, series and collection types that the
record parser produces and that every storage codec reads and writes.
"""

from .point import (
    EphemerisPoint,
    MAX_CONSTELLATION_BYTES,
    MAX_OBJECT_NAME_BYTES,
    NUMERIC_FIELD_COUNT,
    SCALAR_FIELDS,
    VECTOR_LENGTHS,
    encoded_length,
    truncate_label,
)
from .collection import EphemerisCollection, ObjectSeries
from .buffer import INITIAL_CAPACITY, PointBuffer

__all__ = [
    "EphemerisPoint",
    "ObjectSeries",
    "EphemerisCollection",
    "PointBuffer",
    "INITIAL_CAPACITY",
    "MAX_CONSTELLATION_BYTES",
    "MAX_OBJECT_NAME_BYTES",
    "NUMERIC_FIELD_COUNT",
    "SCALAR_FIELDS",
    "VECTOR_LENGTHS",
    "encoded_length",
    "truncate_label",
]
