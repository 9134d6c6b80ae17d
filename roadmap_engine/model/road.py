"""Road - Named road made of segments.

A Road carries the metadata from the road file and owns its segments.
Mirror segments created for two-way traversal are never added here, so
summing a road's segments never double counts.

Roads are frozen. RoadGraph.build() attaches each segment once while the
graph is assembled; afterwards the segment set is only exposed read-only.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from roadmap_engine.model.records import RoadRecord

if TYPE_CHECKING:
    from roadmap_engine.model.segment import Segment


@dataclass(frozen=True, eq=False)
class Road:
    """A road in the network.

    Attributes:
        road_id: Unique integer identifier
        name: Road label (not unique, many roads share a name)
        city: City the road belongs to
        one_way: Traffic only flows start -> end on this road's segments
        not_for_car: Road is closed to cars (paths, cycleways)
        segments: Owned segments, unique and unordered (read-only view)
    """

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
    _segments: set["Segment"] = field(default_factory=set, init=False, repr=False)

    @classmethod
    def from_record(cls, record: RoadRecord) -> "Road":
        """Create Road from a parsed record."""
        return cls(
            road_id=record.road_id,
            name=record.name,
            city=record.city,
            one_way=record.one_way,
            not_for_car=record.not_for_car,
            road_type=record.road_type,
            speed=record.speed,
            road_class=record.road_class,
            not_for_pedestrian=record.not_for_pedestrian,
            not_for_bicycle=record.not_for_bicycle,
        )

    @property
    def segments(self) -> frozenset["Segment"]:
        return frozenset(self._segments)

    def _attach_segment(self, segment: "Segment") -> None:
        """Attach an original (non-mirror) segment. Called by RoadGraph.build() only."""
        if segment.is_mirror:
            raise ValueError(f"Mirror segments are not owned by roads: {segment}")
        if segment.road is not self:
            raise ValueError(f"{segment} belongs to road {segment.road.road_id}, not {self.road_id}")
        self._segments.add(segment)

    @property
    def total_length(self) -> float:
        """Sum of owned segment lengths in kilometres."""
        return sum(seg.length for seg in self._segments)

    def __repr__(self) -> str:
        return f"Road({self.road_id}, {self.name!r})"
