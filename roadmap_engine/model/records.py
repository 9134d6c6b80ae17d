"""Parsed entity records handed to RoadGraph.build().

Records are plain values with integer cross-references. The loader produces
them from the data files; tests build them directly.
"""

from dataclasses import dataclass, field

from roadmap_engine.core.location import Location


@dataclass(frozen=True)
class NodeRecord:
    """An intersection: id plus WGS84 coordinates."""

    node_id: int
    lat: float
    lon: float

    @property
    def location(self) -> Location:
        return Location.from_lat_lon(lat=self.lat, lon=self.lon)


@dataclass(frozen=True)
class RoadRecord:
    """Road metadata. Flags are stored as booleans (the files use 0/1)."""

    road_id: int
    name: str
    city: str = ""
    one_way: bool = False
    not_for_car: bool = False
    road_type: int = 0
    speed: int = 0
    road_class: int = 0
    not_for_pedestrian: bool = False
    not_for_bicycle: bool = False


@dataclass(frozen=True)
class SegmentRecord:
    """A directed road piece between two nodes.

    Attributes:
        road_id: Owning road
        length: Length in kilometres (>= 0)
        start_node_id: First node id in the file row
        end_node_id: Second node id in the file row
        coords: Flat lat, lon, lat, lon, ... polyline (even length)
    """

    road_id: int
    length: float
    start_node_id: int
    end_node_id: int
    coords: tuple[float, ...] = field(default=())

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if len(self.coords) % 2 != 0:
            raise ValueError(f"Segment coords must hold lat/lon pairs, got {len(self.coords)} values")
        if self.length < 0:
            raise ValueError(f"Segment length must be >= 0, got {self.length}")

    @property
    def locations(self) -> tuple[Location, ...]:
        """Polyline projected to Locations."""
        return tuple(
            Location.from_lat_lon(lat=self.coords[i], lon=self.coords[i + 1]) for i in range(0, len(self.coords), 2)
        )
