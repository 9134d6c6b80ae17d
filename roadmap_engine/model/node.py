"""Node - Intersection point in the road graph.

A Node represents a place where road segments meet. It wraps a Location
(single source of truth for geometry); the integer ID provides topological
identity.

Nodes are frozen. Their adjacency lives in RoadGraph, and algorithm state
(scores, depths, parents) lives in per-call workspaces, never on the node.
"""

from dataclasses import dataclass

from roadmap_engine.core.location import Location


@dataclass(frozen=True)
class Node:
    """An intersection in the road graph.

    Attributes:
        node_id: Unique integer identifier from the data files
        location: Projected coordinates of the intersection

    Example:
        node = Node(node_id=12, location=Location.from_lat_lon(lat=-36.85, lon=174.76))
    """

    node_id: int
    location: Location

    @property
    def x(self) -> float:
        """Projected x delegated from location."""
        return self.location.x

    @property
    def y(self) -> float:
        """Projected y delegated from location."""
        return self.location.y

    def distance_to(self, other: "Node") -> float:
        """Straight-line distance to another node in kilometres."""
        return self.location.distance_to(other=other.location)

    def __repr__(self) -> str:
        return f"Node({self.node_id}, {self.location})"
