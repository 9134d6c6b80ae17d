"""Segment - Directed edge between two nodes.

Every segment belongs to exactly one road and carries its length plus a
polyline used only for rendering. Two-way roads get a mirror segment per
original (see reverse()); mirrors exist for traversal only.
"""

from dataclasses import dataclass, field

from shapely.geometry import LineString

from roadmap_engine.core.location import Location
from roadmap_engine.model.node import Node
from roadmap_engine.model.road import Road


@dataclass(frozen=True, eq=False)
class Segment:
    """A directed road segment.

    Segments compare by identity: an original and its mirror are distinct
    even though they join the same nodes.

    Attributes:
        road: Owning road
        start: Node the segment leaves
        end: Node the segment enters (may equal start for a self-loop)
        length: Length in kilometres, >= 0
        points: Polyline from start to end (rendering only)
        is_mirror: True for the reverse copy of a two-way road segment
    """

    road: Road
    start: Node
    end: Node
    length: float
    points: tuple[Location, ...] = field(default=(), repr=False)
    is_mirror: bool = False

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if self.length < 0:
            raise ValueError(f"Segment length must be >= 0, got {self.length}")

    @property
    def is_self_loop(self) -> bool:
        return self.start.node_id == self.end.node_id

    def other_end(self, node: Node) -> Node:
        """Endpoint opposite to node (undirected view)."""
        if self.end.node_id == node.node_id:
            return self.start
        if self.start.node_id == node.node_id:
            return self.end
        raise ValueError(f"{node} is not an endpoint of {self}")

    def reverse(self) -> "Segment":
        """Mirror segment: swapped endpoints, reversed polyline, same road and length."""
        return Segment(
            road=self.road,
            start=self.end,
            end=self.start,
            length=self.length,
            points=tuple(reversed(self.points)),
            is_mirror=True,
        )

    def get_linestring(self) -> LineString:
        """Get Shapely LineString for segment geometry.

        Falls back to the endpoint locations when the polyline is missing.
        """
        coords = [p.xy for p in self.points]
        if len(coords) < 2:
            coords = [self.start.location.xy, self.end.location.xy]
        return LineString(coords)

    def __repr__(self) -> str:
        mirror = ", mirror" if self.is_mirror else ""
        return (
            f"Segment(road={self.road.road_id}, {self.length:4.2f}km "
            f"from {self.start.node_id} to {self.end.node_id}{mirror})"
        )
