"""Parser for the raw text produced by the external ephemeris tool."""

import io
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Tuple

from ..errors import AllocationError, InvalidConfigError, ParseError
from ..logging import get_logger
from ..model import (
    MAX_OBJECT_NAME_BYTES,
    SCALAR_FIELDS,
    EphemerisCollection,
    EphemerisPoint,
    INITIAL_CAPACITY,
    ObjectSeries,
    PointBuffer,
    encoded_length,
    truncate_label,
)
from .tokens import coerce_float, split_object_names

if TYPE_CHECKING:
    from ..compute.config import De430Config

logger = get_logger(__name__)

# (field, component) pairs in the order tokens appear in each object block.
# component is None for scalar fields.
_NUMERIC_SLOTS: List[Tuple[str, Optional[int]]] = (
    [("position", i) for i in range(3)]
    + [("ra_dec", i) for i in range(2)]
    + [(name, None) for name in SCALAR_FIELDS]
    + [("ecliptic", i) for i in range(3)]
)


class RecordParser:
    """Parser for whitespace-delimited ephemeris records.

    Each input line is one time sample: a Julian date followed by one block
    of columns per requested object, in the order the objects were named:

        2451544.5  x y z  ra dec  mag phase ang_size phys_size albedo
                   sun_dist earth_dist sun_ang_dist theta_edo  lng dist lat  [constellation]
                   ... next object ...

    Example:
        parser = RecordParser(objects="jupiter,mars", output_constellations=True)
        with open("ephem.txt") as f:
            collection = parser.parse(f)

    Args:
        objects: Comma-separated object names
        output_constellations: Whether every object block ends with a constellation label
        initial_capacity: Number of point slots reserved per object before the first growth
    """

    def __init__(
        self,
        objects: str,
        output_constellations: bool = False,
        initial_capacity: int = INITIAL_CAPACITY,
    ) -> None:
        """Initialize the parser and validate the object list.

        Raises:
            InvalidConfigError: If no object names are given, a name is too long,
                or a name is repeated
        """
        self.object_names = split_object_names(objects or "")
        if not self.object_names:
            raise InvalidConfigError(f"No objects named in {objects!r}")

        seen = set()
        for name in self.object_names:
            if encoded_length(name) > MAX_OBJECT_NAME_BYTES:
                raise InvalidConfigError(
                    f"Object name exceeds {MAX_OBJECT_NAME_BYTES} bytes: {name!r}"
                )
            if name in seen:
                raise InvalidConfigError(f"Object {name!r} is listed more than once")
            seen.add(name)

        self.output_constellations = output_constellations
        self.initial_capacity = initial_capacity

    @classmethod
    def from_config(cls, config: "De430Config") -> "RecordParser":
        """Create a parser for the objects and label flag of a request."""
        return cls(config.objects, config.output_constellations)

    @property
    def object_count(self) -> int:
        return len(self.object_names)

    def parse(self, lines: Iterable[str]) -> EphemerisCollection:
        """Parse ephemeris records into a collection.

        Args:
            lines: Text lines, e.g. an open file or a subprocess stdout pipe

        Returns:
            A collection with one series per object, all of equal length

        Raises:
            AllocationError: If point storage cannot be allocated or grown
            ParseError: If the input is not valid UTF-8 text
        """
        buffers: List[PointBuffer] = []
        try:
            buffers = [PointBuffer(self.initial_capacity) for _ in self.object_names]

            index = 0
            for line_number, line in enumerate(lines, start=1):
                tokens = line.rstrip("\r\n").split()
                if not tokens:
                    continue

                for buffer in buffers:
                    buffer.ensure_index(index)

                self._parse_line(line_number, tokens, index, buffers)
                index += 1

            series = [
                ObjectSeries(name, buffer.take(index))
                for name, buffer in zip(self.object_names, buffers)
            ]
        except AllocationError:
            self._release(buffers)
            raise
        except MemoryError as e:
            self._release(buffers)
            raise AllocationError("Out of memory while parsing ephemeris records") from e
        except UnicodeDecodeError as e:
            self._release(buffers)
            raise ParseError(f"Ephemeris output is not valid UTF-8 text: {e}") from e

        logger.info(
            f"Parsed {index} records for {len(series)} objects: "
            f"{', '.join(self.object_names)}"
        )
        return EphemerisCollection(series)

    def parse_text(self, text: str) -> EphemerisCollection:
        """Parse ephemeris records held in a string."""
        return self.parse(io.StringIO(text))

    def _parse_line(
        self,
        line_number: int,
        tokens: List[str],
        index: int,
        buffers: List[PointBuffer],
    ) -> None:
        """Fill slot index of every buffer from one line's tokens."""
        julian_date = coerce_float(tokens[0])
        remaining = iter(tokens[1:])
        exhausted = False

        for name, buffer in zip(self.object_names, buffers):
            point = EphemerisPoint(jd=julian_date)
            if not exhausted and not self._fill_point(point, remaining):
                exhausted = True
                logger.warning(
                    f"Line {line_number}: not enough tokens for object {name!r}, "
                    f"remaining fields left at zero"
                )
            buffer.set(index, point)

    def _fill_point(self, point: EphemerisPoint, tokens: Iterator[str]) -> bool:
        """Consume one object block from tokens.

        Returns:
            False if the tokens ran out before the numeric block was complete
        """
        for field_name, component in _NUMERIC_SLOTS:
            token = next(tokens, None)
            if token is None:
                return False
            value = coerce_float(token)
            if component is None:
                setattr(point, field_name, value)
            else:
                getattr(point, field_name)[component] = value

        if self.output_constellations:
            token = next(tokens, None)
            if token is not None:
                point.constellation = truncate_label(token)

        return True

    @staticmethod
    def _release(buffers: List[PointBuffer]) -> None:
        for buffer in buffers:
            buffer.release()
