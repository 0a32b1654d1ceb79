"""
Growable point storage used while the number of records is still unknown.
"""

from typing import List, Optional

from ..errors import AllocationError
from .point import EphemerisPoint

INITIAL_CAPACITY = 1000


class PointBuffer:
    """
    Fixed-capacity slot array for one object's points that doubles when full.

    Slots are written by index so that several buffers can be advanced in
    lockstep by a shared record counter.
    """

    def __init__(self, capacity: int = INITIAL_CAPACITY):
        """
        Initialize an empty buffer.

        Args:
            capacity: Number of slots to reserve up front

        Raises:
            ValueError: If capacity is not positive
            AllocationError: If the slots cannot be reserved
        """
        if capacity <= 0:
            raise ValueError("Capacity must be positive")
        try:
            self._slots: List[Optional[EphemerisPoint]] = [None] * capacity
        except MemoryError as e:
            raise AllocationError(f"Cannot reserve {capacity} point slots") from e

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def ensure_index(self, index: int) -> None:
        """Double the capacity until index is a valid slot.

        Raises:
            AllocationError: If growing the buffer fails
            ValueError: If the buffer was already released
        """
        if not self._slots:
            raise ValueError("Point buffer has been released")
        while index >= len(self._slots):
            try:
                self._slots.extend([None] * len(self._slots))
            except MemoryError as e:
                raise AllocationError(
                    f"Cannot grow point buffer beyond {len(self._slots)} slots"
                ) from e

    def set(self, index: int, point: EphemerisPoint) -> None:
        self.ensure_index(index)
        self._slots[index] = point

    def get(self, index: int) -> Optional[EphemerisPoint]:
        return self._slots[index] if index < len(self._slots) else None

    def take(self, length: int) -> List[EphemerisPoint]:
        """Return the first length points and release the buffer.

        Raises:
            ValueError: If any slot below length was never written
        """
        points = self._slots[:length]
        if any(point is None for point in points):
            raise ValueError("Point buffer has unwritten slots")
        self.release()
        return points  # type: ignore[return-value]

    def release(self) -> None:
        self._slots = []
