"""Token helpers shared by the record parser and the tabular codec."""

from typing import List, Optional

from ..logging import get_logger

logger = get_logger(__name__)


def coerce_float(token: Optional[str]) -> float:
    """Convert a numeric token, treating missing or unparsable input as 0.0.

    Args:
        token: The token text, or None if the field was absent

    Returns:
        The parsed value, or 0.0
    """
    if token is None:
        return 0.0
    try:
        return float(token)
    except ValueError:
        logger.debug(f"Unparsable numeric token {token!r}, using 0.0")
        return 0.0


def split_object_names(objects: str) -> List[str]:
    """Split a comma-separated object list into names.

    Empty segments are dropped and leading spaces are trimmed from each name.
    Names made only of whitespace are dropped as well.

    Args:
        objects: Comma-separated object names, e.g. "jupiter, mars,saturn"

    Returns:
        The object names in the order given
    """
    names = []
    for segment in objects.split(","):
        name = segment.lstrip(" ")
        if name.strip():
            names.append(name)
    return names
