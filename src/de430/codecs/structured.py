"""
JSON storage format for ephemeris collections.

Document shape:

    {
      "object_count": 2,
      "objects": [
        {
          "object_name": "jupiter",
          "count": 31,
          "points": [
            {"jd": 2451544.5, "magnitude": -2.7, ..., "constellation": "Pisces",
             "position": [x, y, z], "ra_dec": [ra, dec], "ecliptic": [lng, dist, lat]}
          ]
        }
      ]
    }
"""

import json
from typing import IO, Any, Dict, List

from ..errors import AllocationError, JSONParseError
from ..logging import get_logger
from ..model import (
    MAX_CONSTELLATION_BYTES,
    SCALAR_FIELDS,
    VECTOR_LENGTHS,
    EphemerisCollection,
    EphemerisPoint,
    ObjectSeries,
    encoded_length,
)
from .base import EphemerisCodec

logger = get_logger(__name__)

INDENT = 2


def _is_number(node: Any) -> bool:
    return isinstance(node, (int, float)) and not isinstance(node, bool)


def point_to_tree(point: EphemerisPoint) -> Dict[str, Any]:
    """Build the JSON object for one point."""
    tree: Dict[str, Any] = {"jd": point.jd}
    for name in SCALAR_FIELDS:
        tree[name] = getattr(point, name)
    tree["constellation"] = point.constellation
    for name in VECTOR_LENGTHS:
        tree[name] = list(getattr(point, name))
    return tree


def series_to_tree(series: ObjectSeries) -> Dict[str, Any]:
    """Build the JSON object for one series."""
    return {
        "object_name": series.object_name,
        "count": series.count,
        "points": [point_to_tree(point) for point in series.points],
    }


def collection_to_tree(collection: EphemerisCollection) -> Dict[str, Any]:
    """Build the JSON document for a collection."""
    return {
        "object_count": collection.object_count,
        "objects": [series_to_tree(series) for series in collection],
    }


def tree_to_point(tree: Any, where: str) -> EphemerisPoint:
    """Read one point object.

    Missing or non-numeric fields are left at zero, as are missing vector
    components.

    Raises:
        JSONParseError: If the node is not an object or the label is too long
    """
    if not isinstance(tree, dict):
        raise JSONParseError(f"{where} is not an object")

    point = EphemerisPoint()
    if _is_number(tree.get("jd")):
        point.jd = float(tree["jd"])
    for name in SCALAR_FIELDS:
        if _is_number(tree.get(name)):
            setattr(point, name, float(tree[name]))

    constellation = tree.get("constellation")
    if isinstance(constellation, str):
        if encoded_length(constellation) > MAX_CONSTELLATION_BYTES:
            raise JSONParseError(
                f"{where}: constellation label exceeds {MAX_CONSTELLATION_BYTES} bytes"
            )
        point.constellation = constellation

    for name, length in VECTOR_LENGTHS.items():
        items = tree.get(name)
        if not isinstance(items, list):
            continue
        vector = getattr(point, name)
        for i, item in enumerate(items[:length]):
            if _is_number(item):
                vector[i] = float(item)

    return point


def tree_to_series(tree: Any, where: str) -> ObjectSeries:
    """Read one object entry.

    Raises:
        JSONParseError: If required fields are missing or have the wrong type,
            or a stored count disagrees with the number of points
    """
    if not isinstance(tree, dict):
        raise JSONParseError(f"{where} is not an object")

    object_name = tree.get("object_name")
    if not isinstance(object_name, str):
        raise JSONParseError(f"{where} has no string object_name")

    points = tree.get("points")
    if not isinstance(points, list):
        raise JSONParseError(f"{where} ({object_name!r}) has no points array")

    count = tree.get("count")
    if count is not None:
        if not _is_number(count):
            raise JSONParseError(f"{where} ({object_name!r}) count is not a number")
        if count != len(points):
            raise JSONParseError(
                f"{where} ({object_name!r}) count {count} does not match "
                f"{len(points)} points"
            )

    try:
        return ObjectSeries(
            object_name,
            [
                tree_to_point(point, f"{where} point {i}")
                for i, point in enumerate(points)
            ],
        )
    except JSONParseError:
        raise
    except ValueError as e:
        raise JSONParseError(f"{where}: {e}") from e


def tree_to_collection(tree: Any) -> EphemerisCollection:
    """Read a whole document.

    Raises:
        JSONParseError: If the document shape is wrong
    """
    if not isinstance(tree, dict):
        raise JSONParseError("Document root is not an object")

    object_count = tree.get("object_count")
    if not _is_number(object_count):
        raise JSONParseError("object_count is missing or not a number")

    objects = tree.get("objects")
    if not isinstance(objects, list) or object_count != len(objects):
        raise JSONParseError(
            f"objects array does not hold object_count={object_count} entries"
        )

    series: List[ObjectSeries] = []
    for i, entry in enumerate(objects):
        series.append(tree_to_series(entry, f"objects[{i}]"))

    try:
        return EphemerisCollection(series)
    except ValueError as e:
        raise JSONParseError(str(e)) from e


class StructuredTextCodec(EphemerisCodec):
    """Reader and writer for the JSON document format."""

    format_name = "json"
    extensions = (".json",)
    binary = False

    def write(self, collection: EphemerisCollection, stream: IO[str]) -> None:
        self.require_collection(collection)
        try:
            tree = collection_to_tree(collection)
            text = json.dumps(tree, indent=INDENT)
        except MemoryError as e:
            raise AllocationError("Out of memory while building JSON document") from e
        stream.write(text)

    def read(self, stream: IO[str]) -> EphemerisCollection:
        try:
            tree = json.loads(stream.read())
            collection = tree_to_collection(tree)
        except JSONParseError:
            raise
        except json.JSONDecodeError as e:
            raise JSONParseError(f"Invalid JSON: {e}") from e
        except (OverflowError, ValueError) as e:
            # e.g. integer literals too large for a float or for the int digit limit
            raise JSONParseError(f"Invalid number in JSON document: {e}") from e
        except RecursionError as e:
            raise JSONParseError("JSON document is nested too deeply") from e
        except MemoryError as e:
            raise AllocationError("Out of memory while decoding JSON document") from e

        logger.debug(f"Decoded {collection.object_count} objects from JSON data")
        return collection
