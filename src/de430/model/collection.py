from typing import Iterator, List, Optional, Sequence

from ..errors import InvalidConfigError
from .point import MAX_OBJECT_NAME_BYTES, EphemerisPoint, encoded_length


class ObjectSeries:
    """One object's chronologically ordered ephemeris points."""

    def __init__(self, object_name: str, points: Optional[Sequence[EphemerisPoint]] = None):
        """
        Initialize a series.

        Args:
            object_name: Identifier of the object, at most 63 UTF-8 bytes
            points: Points in chronological order

        Raises:
            ValueError: If the name is empty or too long
        """
        if not object_name:
            raise ValueError("Object name must not be empty")
        if encoded_length(object_name) > MAX_OBJECT_NAME_BYTES:
            raise ValueError(
                f"Object name exceeds {MAX_OBJECT_NAME_BYTES} bytes: {object_name!r}"
            )
        self.object_name = object_name
        self.points: List[EphemerisPoint] = list(points) if points is not None else []

    @property
    def count(self) -> int:
        """Number of points; always the length of the point list."""
        return len(self.points)

    @property
    def julian_dates(self) -> List[float]:
        return [point.jd for point in self.points]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[EphemerisPoint]:
        return iter(self.points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjectSeries):
            return NotImplemented
        return self.object_name == other.object_name and self.points == other.points

    def __repr__(self) -> str:
        return f"ObjectSeries(object_name={self.object_name!r}, count={self.count})"


class EphemerisCollection:
    """
    All objects of one ephemeris request, sharing a single Julian-date axis.

    The collection is owned by whoever received it from a parser or decoder.
    Calling release() drops every point buffer; it must happen exactly once.
    The collection can also be used as a context manager that releases on exit.
    """

    def __init__(self, series: Optional[Sequence[ObjectSeries]] = None):
        """
        Initialize a collection.

        Args:
            series: Object series in request order

        Raises:
            ValueError: If two series share an object name
        """
        self._series: List[ObjectSeries] = list(series) if series is not None else []
        self._released = False

        seen = set()
        for item in self._series:
            if item.object_name in seen:
                raise ValueError(f"Duplicate object name: {item.object_name!r}")
            seen.add(item.object_name)

    @property
    def series(self) -> List[ObjectSeries]:
        return self._series

    @property
    def object_count(self) -> int:
        return len(self._series)

    @property
    def object_names(self) -> List[str]:
        return [item.object_name for item in self._series]

    @property
    def released(self) -> bool:
        return self._released

    def get(self, object_name: str) -> Optional[ObjectSeries]:
        """Look up a series by object name."""
        for item in self._series:
            if item.object_name == object_name:
                return item
        return None

    def is_cotemporal(self) -> bool:
        """Check that every series has the same length and Julian dates."""
        if not self._series:
            return True
        reference = self._series[0].julian_dates
        return all(item.julian_dates == reference for item in self._series[1:])

    def release(self) -> None:
        """
        Drop all point data held by the collection.

        Raises:
            InvalidConfigError: If the collection was already released
        """
        if self._released:
            raise InvalidConfigError("Collection has already been released")
        for item in self._series:
            item.points = []
        self._series = []
        self._released = True

    def __enter__(self) -> "EphemerisCollection":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:  # type: ignore[no-untyped-def]
        if not self._released:
            self.release()

    def __len__(self) -> int:
        return len(self._series)

    def __iter__(self) -> Iterator[ObjectSeries]:
        return iter(self._series)

    def __getitem__(self, index: int) -> ObjectSeries:
        return self._series[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EphemerisCollection):
            return NotImplemented
        return self._series == other._series

    def __repr__(self) -> str:
        return f"EphemerisCollection(objects={self.object_names!r})"
