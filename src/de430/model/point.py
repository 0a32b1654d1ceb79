from dataclasses import dataclass, field
from typing import List

# Capacities of the fixed text fields, terminator excluded
MAX_OBJECT_NAME_BYTES = 63
MAX_CONSTELLATION_BYTES = 31

# Field order shared by the raw ephemeris output and every storage format
SCALAR_FIELDS = (
    "magnitude",
    "phase",
    "angular_size",
    "physical_size",
    "albedo",
    "sun_dist",
    "earth_dist",
    "sun_ang_dist",
    "theta_edo",
)

VECTOR_LENGTHS = {
    "position": 3,
    "ra_dec": 2,
    "ecliptic": 3,
}

# jd, the three vectors and the nine scalars
NUMERIC_FIELD_COUNT = 1 + sum(VECTOR_LENGTHS.values()) + len(SCALAR_FIELDS)


def encoded_length(text: str) -> int:
    """Length of a text field once stored as UTF-8."""
    return len(text.encode("utf-8"))


def truncate_label(text: str, max_bytes: int = MAX_CONSTELLATION_BYTES) -> str:
    """Cut a label down to at most max_bytes of UTF-8 without splitting a character."""
    raw = text.encode("utf-8")
    if len(raw) <= max_bytes:
        return text
    return raw[:max_bytes].decode("utf-8", errors="ignore")


@dataclass
class EphemerisPoint:
    """One time sample for one celestial object."""

    jd: float = 0.0
    position: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    ra_dec: List[float] = field(default_factory=lambda: [0.0, 0.0])
    magnitude: float = 0.0
    phase: float = 0.0
    angular_size: float = 0.0
    physical_size: float = 0.0
    albedo: float = 0.0
    sun_dist: float = 0.0  # distance from the central body
    earth_dist: float = 0.0  # distance from the observer
    sun_ang_dist: float = 0.0
    theta_edo: float = 0.0  # elongation parameter
    ecliptic: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    constellation: str = ""

    def __post_init__(self) -> None:
        """Validate vector lengths and the label capacity."""
        for name, length in VECTOR_LENGTHS.items():
            values = list(getattr(self, name))
            if len(values) != length:
                raise ValueError(
                    f"{name} must have {length} components, got {len(values)}"
                )
            setattr(self, name, [float(v) for v in values])
        if encoded_length(self.constellation) > MAX_CONSTELLATION_BYTES:
            raise ValueError(
                f"Constellation label exceeds {MAX_CONSTELLATION_BYTES} bytes: "
                f"{self.constellation!r}"
            )

    def scalars(self) -> List[float]:
        """Scalar fields in storage order."""
        return [getattr(self, name) for name in SCALAR_FIELDS]

    def to_values(self) -> List[float]:
        """All numeric fields flattened in storage order.

        Order: jd, position[3], ra_dec[2], the nine scalars, ecliptic[3].
        """
        return (
            [self.jd]
            + list(self.position)
            + list(self.ra_dec)
            + self.scalars()
            + list(self.ecliptic)
        )

    @classmethod
    def from_values(cls, values: List[float], constellation: str = "") -> "EphemerisPoint":
        """Build a point from the flattened numeric fields produced by to_values().

        Args:
            values: Exactly 18 numbers in storage order
            constellation: Optional label

        Raises:
            ValueError: If the number of values is wrong
        """
        if len(values) != NUMERIC_FIELD_COUNT:
            raise ValueError(
                f"Expected {NUMERIC_FIELD_COUNT} values, got {len(values)}"
            )
        scalars = dict(zip(SCALAR_FIELDS, values[6:15]))
        return cls(
            jd=values[0],
            position=list(values[1:4]),
            ra_dec=list(values[4:6]),
            ecliptic=list(values[15:18]),
            constellation=constellation,
            **scalars,
        )
