"""Data model classes for the road network graph.

- NodeRecord / RoadRecord / SegmentRecord: Parsed input records (integer cross-references)
- Node: Intersection (id + Location)
- Road: Named road owning its segments
- Segment: Directed edge between nodes, mirrored for two-way roads
- RoadGraph: Central owner of all entities, adjacency and lookups
- Errors: RoadGraphError and its subclasses
"""

from roadmap_engine.model.errors import (
    DataFormatError,
    GraphReferenceError,
    NotFoundError,
    PathReconstructionError,
    RoadGraphError,
)
from roadmap_engine.model.node import Node
from roadmap_engine.model.records import NodeRecord, RoadRecord, SegmentRecord
from roadmap_engine.model.road import Road
from roadmap_engine.model.road_graph import RoadGraph
from roadmap_engine.model.segment import Segment

__all__ = [
    "NodeRecord",
    "RoadRecord",
    "SegmentRecord",
    "Node",
    "Road",
    "Segment",
    "RoadGraph",
    "RoadGraphError",
    "GraphReferenceError",
    "NotFoundError",
    "PathReconstructionError",
    "DataFormatError",
]
