from dataclasses import dataclass
from typing import List, Optional

from ..errors import InvalidConfigError

J2000 = 2451545.0


@dataclass
class De430Config:
    """Parameters of one request to the external ephemeris tool.

    The record parser only reads ``objects`` and ``output_constellations``;
    the remaining fields are passed through to the tool's command line.
    """

    jd_min: float = 2451544.5  # J2000.0 midnight
    jd_max: float = 2451574.5  # 30 days later
    jd_step: float = 1.0  # in days
    jd_list: Optional[List[float]] = None  # explicit dates override the range
    latitude: float = 0.0  # in degrees, positive north
    longitude: float = 0.0  # in degrees, positive east
    enable_topocentric: bool = False
    epoch: float = J2000
    objects: str = "jupiter"  # comma-separated object names
    output_format: int = 0  # -1 to 3, 0 is XYZ ICRS
    use_orbital_elements: bool = False
    output_constellations: bool = False

    def __post_init__(self) -> None:
        """Validate the request parameters."""
        if not -90 <= self.latitude <= 90:
            raise InvalidConfigError("Latitude must be between -90 and 90 degrees")
        if not -180 <= self.longitude <= 180:
            raise InvalidConfigError("Longitude must be between -180 and 180 degrees")
        if not -1 <= self.output_format <= 3:
            raise InvalidConfigError("Output format must be between -1 and 3")
        if not self.jd_list:
            if self.jd_step <= 0:
                raise InvalidConfigError("JD step must be positive")
            if self.jd_min > self.jd_max:
                raise InvalidConfigError("jd_min must not be after jd_max")

    @property
    def uses_jd_list(self) -> bool:
        return bool(self.jd_list)
