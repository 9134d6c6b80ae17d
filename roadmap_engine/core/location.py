"""Location - Projected 2D coordinate for road network geometry.

A Location is a point in a flat kilometre plane centred on the map centre
(see ProjectionConfig). Nodes and segment polylines are stored as Locations
so that the A* heuristic is a plain Euclidean distance.
"""

from dataclasses import dataclass
from math import cos, hypot, radians

import numpy as np

from roadmap_engine.constants import ProjectionConfig

# Kilometres per degree of longitude at the map centre
_KM_PER_DEGREE_LON = ProjectionConfig.KM_PER_DEGREE * cos(radians(ProjectionConfig.CENTRE_LAT))


@dataclass(frozen=True)
class Location:
    """A point in the projected kilometre plane.

    Attributes:
        x: Kilometres east of the map centre
        y: Kilometres north of the map centre

    Example:
        loc = Location.from_lat_lon(lat=-36.85, lon=174.77)
        loc.distance_to(other=Location(x=0.0, y=0.0))
    """

    x: float
    y: float

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if not (np.isfinite(self.x) and np.isfinite(self.y)):
            raise ValueError(f"Location must have finite coordinates, got ({self.x}, {self.y})")

    @classmethod
    def from_lat_lon(cls, lat: float, lon: float) -> "Location":
        """Project latitude/longitude (decimal degrees) onto the kilometre plane."""
        y = (lat - ProjectionConfig.CENTRE_LAT) * ProjectionConfig.KM_PER_DEGREE
        x = (lon - ProjectionConfig.CENTRE_LON) * _KM_PER_DEGREE_LON
        return cls(x=x, y=y)

    def to_lat_lon(self) -> tuple[float, float]:
        """Inverse projection, returns (lat, lon)."""
        lat = ProjectionConfig.CENTRE_LAT + self.y / ProjectionConfig.KM_PER_DEGREE
        lon = ProjectionConfig.CENTRE_LON + self.x / _KM_PER_DEGREE_LON
        return (lat, lon)

    @property
    def xy(self) -> tuple[float, float]:
        """Return (x, y) tuple - Shapely order."""
        return (self.x, self.y)

    def distance_to(self, other: "Location") -> float:
        """Straight-line distance to another location in kilometres."""
        return hypot(other.x - self.x, other.y - self.y)

    def __repr__(self) -> str:
        return f"({self.x:.3f}, {self.y:.3f})"
