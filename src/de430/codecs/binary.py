"""
Compact binary storage format for ephemeris collections.

Layout (little-endian, no padding):
- file header: magic "DE43" (4 bytes), version (uint32), object count (uint32),
  reserved (uint32)
- per object: name length (uint32, terminator included), point count (uint32),
  then the NUL-terminated name
- per point: 18 doubles (jd, position[3], ra_dec[2], the nine scalars,
  ecliptic[3]), label length (uint32, terminator included), then the
  NUL-terminated constellation label

Text fields may not contain NUL; the writer rejects them and the reader stops
each field at its first NUL.
"""

import struct
from typing import IO, List

from ..errors import AllocationError, InvalidConfigError, ParseError
from ..logging import get_logger
from ..model import (
    MAX_CONSTELLATION_BYTES,
    MAX_OBJECT_NAME_BYTES,
    NUMERIC_FIELD_COUNT,
    EphemerisCollection,
    EphemerisPoint,
    ObjectSeries,
)
from .base import EphemerisCodec

logger = get_logger(__name__)

MAGIC = b"DE43"
VERSION = 1

FILE_HEADER = struct.Struct("<4sIII")
OBJECT_HEADER = struct.Struct("<II")
POINT_FIXED = struct.Struct("<" + "d" * NUMERIC_FIELD_COUNT + "I")

# Field capacities including the terminator byte
NAME_CAPACITY = MAX_OBJECT_NAME_BYTES + 1
CONSTELLATION_CAPACITY = MAX_CONSTELLATION_BYTES + 1


def _encode_text(text: str, capacity: int, what: str) -> bytes:
    """Encode a text field with its terminator.

    Raises:
        InvalidConfigError: If the text contains NUL or does not fit in capacity
    """
    if "\x00" in text:
        raise InvalidConfigError(f"{what} {text!r} contains a NUL character")
    raw = text.encode("utf-8") + b"\x00"
    if len(raw) > capacity:
        raise InvalidConfigError(f"{what} {text!r} does not fit in {capacity} bytes")
    return raw


def _read_exact(stream: IO[bytes], size: int, what: str) -> bytes:
    """Read exactly size bytes or fail.

    Raises:
        ParseError: If the stream ends early
    """
    data = stream.read(size)
    if len(data) != size:
        raise ParseError(f"Truncated {what}: expected {size} bytes, got {len(data)}")
    return data


def _read_text(stream: IO[bytes], length: int, capacity: int, what: str) -> str:
    """Read a NUL-terminated text field of a declared length.

    Raises:
        ParseError: If the length is zero or exceeds capacity, the data is
            truncated, or the text is not valid UTF-8
    """
    if length == 0:
        raise ParseError(f"{what} length must include the terminator")
    if length > capacity:
        raise ParseError(f"{what} length {length} exceeds capacity {capacity}")
    raw = _read_exact(stream, length, what)
    try:
        return raw.split(b"\x00", 1)[0].decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(f"{what} is not valid UTF-8") from e


class BinaryCodec(EphemerisCodec):
    """Reader and writer for the length-prefixed DE43 binary format."""

    format_name = "binary"
    extensions = (".bin", ".de43")
    binary = True

    def write(self, collection: EphemerisCollection, stream: IO[bytes]) -> None:
        self.require_collection(collection)

        # Nothing is written unless every text field fits
        names = []
        labels = []
        for series in collection:
            names.append(_encode_text(series.object_name, NAME_CAPACITY, "Object name"))
            labels.append(
                [
                    _encode_text(
                        point.constellation, CONSTELLATION_CAPACITY, "Constellation label"
                    )
                    for point in series.points
                ]
            )

        stream.write(FILE_HEADER.pack(MAGIC, VERSION, collection.object_count, 0))
        for series, name, series_labels in zip(collection, names, labels):
            stream.write(OBJECT_HEADER.pack(len(name), series.count))
            stream.write(name)

            for point, label in zip(series.points, series_labels):
                stream.write(POINT_FIXED.pack(*point.to_values(), len(label)))
                stream.write(label)

    def read(self, stream: IO[bytes]) -> EphemerisCollection:
        header = _read_exact(stream, FILE_HEADER.size, "file header")
        magic, version, object_count, _reserved = FILE_HEADER.unpack(header)

        if magic != MAGIC:
            raise ParseError(f"Bad magic bytes {magic!r}, expected {MAGIC!r}")
        if version != VERSION:
            raise ParseError(f"Unsupported format version {version}")

        series: List[ObjectSeries] = []
        try:
            for index in range(object_count):
                series.append(self._read_series(stream, index))

            if stream.read(1):
                raise ParseError("Unexpected data after the last object")

            collection = EphemerisCollection(series)
        except ParseError:
            series.clear()
            raise
        except ValueError as e:
            series.clear()
            raise ParseError(f"Invalid object data: {e}") from e
        except MemoryError as e:
            series.clear()
            raise AllocationError("Out of memory while decoding binary data") from e

        logger.debug(f"Decoded {object_count} objects from binary data")
        return collection

    def _read_series(self, stream: IO[bytes], index: int) -> ObjectSeries:
        """Read one object header, its name and all of its points."""
        name_length, point_count = OBJECT_HEADER.unpack(
            _read_exact(stream, OBJECT_HEADER.size, f"header of object {index}")
        )
        name = _read_text(stream, name_length, NAME_CAPACITY, f"name of object {index}")

        points: List[EphemerisPoint] = []
        for _ in range(point_count):
            fields = POINT_FIXED.unpack(
                _read_exact(stream, POINT_FIXED.size, f"point of object {name!r}")
            )
            constellation = _read_text(
                stream, fields[-1], CONSTELLATION_CAPACITY, f"label of object {name!r}"
            )
            points.append(EphemerisPoint.from_values(list(fields[:-1]), constellation))

        return ObjectSeries(name, points)
