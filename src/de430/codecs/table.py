"""
Comma-delimited tabular storage format for ephemeris collections.

One header row followed by one row per (object, point), object-major:

    object_name,jd,pos_x,...,ecliptic_lat,constellation
    mars,2451544.5,...,Sagittarius
"""

import csv
import io
from typing import IO, Dict, Iterator, List, Optional

from ..errors import AllocationError, ParseError
from ..logging import get_logger
from ..model import (
    MAX_CONSTELLATION_BYTES,
    NUMERIC_FIELD_COUNT,
    EphemerisCollection,
    EphemerisPoint,
    ObjectSeries,
    encoded_length,
)
from ..parsers.tokens import coerce_float
from .base import EphemerisCodec

logger = get_logger(__name__)

DELIMITER = ","

COLUMNS = [
    "object_name",
    "jd",
    "pos_x",
    "pos_y",
    "pos_z",
    "ra",
    "dec",
    "magnitude",
    "phase",
    "angular_size",
    "physical_size",
    "albedo",
    "sun_dist",
    "earth_dist",
    "sun_ang_dist",
    "theta_edo",
    "ecliptic_lng",
    "ecliptic_dist",
    "ecliptic_lat",
    "constellation",
]

# Significant digits written for every numeric field
PRECISION = 15


def format_value(value: float) -> str:
    return format(value, f".{PRECISION}g")


def sanitize_field(text: str) -> str:
    """Replace the delimiter inside a text field with a space."""
    return text.replace(DELIMITER, " ")


class TextTableCodec(EphemerisCodec):
    """Reader and writer for the flat CSV format.

    Decoding makes two passes over the stream: the first counts rows per
    object so that the second can allocate each object's points at their
    exact size before filling them.
    """

    format_name = "csv"
    extensions = (".csv",)
    binary = False

    def write(self, collection: EphemerisCollection, stream: IO[str]) -> None:
        self.require_collection(collection)

        writer = csv.writer(stream, delimiter=DELIMITER, lineterminator="\n")
        writer.writerow(COLUMNS)
        for series in collection:
            name = sanitize_field(series.object_name)
            for point in series.points:
                writer.writerow(
                    [name]
                    + [format_value(value) for value in point.to_values()]
                    + [sanitize_field(point.constellation)]
                )

    def read(self, stream: IO[str]) -> EphemerisCollection:
        if not stream.seekable():
            stream = io.StringIO(stream.read())

        start = stream.tell()
        try:
            counts = self._count_rows(stream)

            stream.seek(start)
            points = self._read_points(stream, counts)

            collection = EphemerisCollection(
                [ObjectSeries(name, points[name]) for name in counts]
            )
        except ParseError:
            raise
        except csv.Error as e:
            raise ParseError(f"Malformed table data: {e}") from e
        except ValueError as e:
            raise ParseError(f"Invalid table data: {e}") from e
        except MemoryError as e:
            raise AllocationError("Out of memory while decoding table data") from e

        logger.debug(f"Decoded {collection.object_count} objects from table data")
        return collection

    def _rows(self, stream: IO[str]) -> Iterator[List[str]]:
        """Return a row reader positioned after the header.

        Raises:
            ParseError: If the stream has no header row
        """
        reader = csv.reader(stream, delimiter=DELIMITER)
        header = next(reader, None)
        if header is None:
            raise ParseError("Table has no header row")
        if header != COLUMNS:
            logger.debug(f"Unexpected table header {header!r}, reading by position")
        return reader

    def _count_rows(self, stream: IO[str]) -> Dict[str, int]:
        """First pass: count data rows per object name, in first-seen order."""
        counts: Dict[str, int] = {}
        for row in self._rows(stream):
            if len(row) < 2:
                continue
            counts[row[0]] = counts.get(row[0], 0) + 1
        return counts

    def _read_points(
        self, stream: IO[str], counts: Dict[str, int]
    ) -> Dict[str, List[EphemerisPoint]]:
        """Second pass: fill exactly-sized point lists for every counted object."""
        buffers: Dict[str, List[Optional[EphemerisPoint]]] = {
            name: [None] * count for name, count in counts.items()
        }
        next_index = {name: 0 for name in counts}

        for row in self._rows(stream):
            if len(row) < 2:
                continue
            name = row[0]
            if name not in buffers or next_index[name] >= counts[name]:
                logger.debug(f"Skipping row for unexpected object {name!r}")
                continue

            buffers[name][next_index[name]] = self._row_to_point(row)
            next_index[name] += 1

        for name in buffers:
            if next_index[name] != counts[name]:
                raise ParseError(
                    f"Object {name!r} changed between passes: "
                    f"counted {counts[name]} rows, read {next_index[name]}"
                )
        return buffers  # type: ignore[return-value]

    @staticmethod
    def _row_to_point(row: List[str]) -> EphemerisPoint:
        """Convert one data row; missing numeric fields become 0.0."""
        numeric = row[1 : 1 + NUMERIC_FIELD_COUNT]
        values = [coerce_float(token) for token in numeric]
        values += [0.0] * (NUMERIC_FIELD_COUNT - len(values))

        # The label is the last column; anything after it belongs to it
        label_fields = row[1 + NUMERIC_FIELD_COUNT :]
        constellation = DELIMITER.join(label_fields).rstrip("\r\n")
        if encoded_length(constellation) > MAX_CONSTELLATION_BYTES:
            raise ParseError(
                f"Constellation label exceeds {MAX_CONSTELLATION_BYTES} bytes: {constellation!r}"
            )
        return EphemerisPoint.from_values(values, constellation)
