"""RoadGraph - Central owner of road network entities.

Owns all nodes, roads and segments of one loaded dataset.
Provides operations for:
- Building the network from parsed records (adjacency + mirror segments)
- Directed and undirected neighbour views
- Lookup by id, nearest-node picking, node descriptions
- Network statistics

Topology is frozen after build(): there is no API to add or remove entities.
A new dataset means a new RoadGraph.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Optional

from roadmap_engine.core.location import Location
from roadmap_engine.model.errors import GraphReferenceError, NotFoundError
from roadmap_engine.model.node import Node
from roadmap_engine.model.records import NodeRecord, RoadRecord, SegmentRecord
from roadmap_engine.model.road import Road
from roadmap_engine.model.segment import Segment

logger = logging.getLogger(__name__)


class RoadGraph:
    """Road network graph.

    Nodes and roads are keyed by their integer ids. Adjacency is stored per
    node id as tuples of segments:
    - outgoing: segments leaving the node (used by route search)
    - incoming: segments entering the node

    For a two-way road every segment has a mirror in the opposite lists.

    Example:
        graph = RoadGraph.build(nodes=node_records, roads=road_records, segments=segment_records)
        for seg in graph.neighbours_out(graph.get_node(12)):
            print(seg.end)
    """

    def __init__(
        self,
        nodes: Mapping[int, Node],
        roads: Mapping[int, Road],
        segments: Iterable[Segment],
        outgoing: Mapping[int, Iterable[Segment]],
        incoming: Mapping[int, Iterable[Segment]],
    ) -> None:
        """Wrap fully-built entities. Use build() to create a graph from records.

        Arguments are copied into private containers, so later changes to the
        caller's dicts or lists do not reach the graph.
        """
        self._nodes = dict(nodes)
        self._roads = dict(roads)
        self._segments = tuple(segments)
        self._outgoing = {node_id: tuple(segs) for node_id, segs in outgoing.items()}
        self._incoming = {node_id: tuple(segs) for node_id, segs in incoming.items()}

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def build(
        cls,
        nodes: Iterable[NodeRecord],
        roads: Iterable[RoadRecord],
        segments: Iterable[SegmentRecord],
    ) -> "RoadGraph":
        """Build the graph from parsed records.

        Every segment goes into its start node's outgoing list and its end
        node's incoming list. Segments of two-way roads also get a mirror in
        the end node's outgoing list and the start node's incoming list; the
        mirror is not added to the road.

        Args:
            nodes: Node records (unique ids)
            roads: Road records (unique ids)
            segments: Segment records referencing node and road ids

        Returns:
            The built RoadGraph.

        Raises:
            GraphReferenceError: If a segment references an unknown node or
                road id, or an id is duplicated. Nothing is returned then.
        """
        node_map: dict[int, Node] = {}
        for record in nodes:
            if record.node_id in node_map:
                raise GraphReferenceError(
                    f"Duplicate node id {record.node_id}", entity="node", entity_id=record.node_id
                )
            node_map[record.node_id] = Node(node_id=record.node_id, location=record.location)

        road_map: dict[int, Road] = {}
        for record in roads:
            if record.road_id in road_map:
                raise GraphReferenceError(
                    f"Duplicate road id {record.road_id}", entity="road", entity_id=record.road_id
                )
            road_map[record.road_id] = Road.from_record(record=record)

        outgoing: dict[int, list[Segment]] = {node_id: [] for node_id in node_map}
        incoming: dict[int, list[Segment]] = {node_id: [] for node_id in node_map}
        segment_list: list[Segment] = []
        mirror_count = 0

        for record in segments:
            road = road_map.get(record.road_id)
            if road is None:
                raise GraphReferenceError(
                    f"Segment references unknown road id {record.road_id}",
                    entity="road",
                    entity_id=record.road_id,
                )
            for node_id in (record.start_node_id, record.end_node_id):
                if node_id not in node_map:
                    raise GraphReferenceError(
                        f"Segment of road {record.road_id} references unknown node id {node_id}",
                        entity="node",
                        entity_id=node_id,
                    )

            segment = Segment(
                road=road,
                start=node_map[record.start_node_id],
                end=node_map[record.end_node_id],
                length=record.length,
                points=record.locations,
            )
            road._attach_segment(segment=segment)
            segment_list.append(segment)
            outgoing[record.start_node_id].append(segment)
            incoming[record.end_node_id].append(segment)

            if not road.one_way:
                mirror = segment.reverse()
                outgoing[record.end_node_id].append(mirror)
                incoming[record.start_node_id].append(mirror)
                mirror_count += 1

        logger.info(
            f"Graph built: {len(node_map)} nodes, {len(road_map)} roads, "
            f"{len(segment_list)} segments (+{mirror_count} mirrors)"
        )

        return cls(
            nodes=node_map,
            roads=road_map,
            segments=segment_list,
            outgoing=outgoing,
            incoming=incoming,
        )

    # =========================================================================
    # Entity Access
    # =========================================================================

    @property
    def nodes(self) -> Mapping[int, Node]:
        """Read-only view of nodes by id."""
        return MappingProxyType(self._nodes)

    @property
    def roads(self) -> Mapping[int, Road]:
        """Read-only view of roads by id."""
        return MappingProxyType(self._roads)

    @property
    def segments(self) -> tuple[Segment, ...]:
        """All road segments in load order. Mirrors are not included."""
        return self._segments

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node: object) -> bool:
        return isinstance(node, Node) and self._nodes.get(node.node_id) == node

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    def get_node(self, node_id: int) -> Node:
        """Look up a node by id.

        Raises:
            NotFoundError: If no node has this id.
        """
        try:
            return self._nodes[node_id]
        except KeyError:
            raise NotFoundError(f"Unknown node id {node_id}", entity="node", entity_id=node_id) from None

    def get_road(self, road_id: int) -> Road:
        """Look up a road by id.

        Raises:
            NotFoundError: If no road has this id.
        """
        try:
            return self._roads[road_id]
        except KeyError:
            raise NotFoundError(f"Unknown road id {road_id}", entity="road", entity_id=road_id) from None

    # =========================================================================
    # Adjacency
    # =========================================================================

    def _require(self, node: Node) -> int:
        if node not in self:
            raise NotFoundError(f"{node} is not part of this graph", entity="node", entity_id=node.node_id)
        return node.node_id

    def neighbours_out(self, node: Node) -> tuple[Segment, ...]:
        """Segments leaving node (directed traversal)."""
        return self._outgoing[self._require(node)]

    def neighbours_in(self, node: Node) -> tuple[Segment, ...]:
        """Segments entering node."""
        return self._incoming[self._require(node)]

    def neighbours_all(self, node: Node) -> tuple[Segment, ...]:
        """Incoming followed by outgoing segments (undirected view).

        The neighbour reached through a segment is segment.other_end(node).
        """
        node_id = self._require(node)
        return self._incoming[node_id] + self._outgoing[node_id]

    def segments_between(self, start: Node, end: Node) -> tuple[Segment, ...]:
        """Outgoing segments of start that end at end (parallel roads included)."""
        return tuple(seg for seg in self.neighbours_out(start) if seg.end.node_id == end.node_id)

    # =========================================================================
    # Query Operations
    # =========================================================================

    def find_nearest_node(
        self,
        location: Location,
        max_distance: Optional[float] = None,
    ) -> Optional[Node]:
        """Find the node closest to a location.

        Args:
            location: Target point (e.g. a click converted to map coordinates)
            max_distance: Optional limit in km (see MapConfig.MAX_CLICKED_DISTANCE)

        Returns:
            Nearest Node, or None if the graph is empty or none is within max_distance.
        """
        best_dist = float("inf")
        best_node = None

        for node in self._nodes.values():
            dist = node.location.distance_to(other=location)
            if dist < best_dist or (dist == best_dist and best_node is not None and node.node_id < best_node.node_id):
                best_dist = dist
                best_node = node

        if best_node is not None and max_distance is not None and best_dist >= max_distance:
            return None
        return best_node

    def describe_node(self, node: Node) -> str:
        """Text shown when a node is selected: id, location and outgoing road names."""
        names: list[str] = []
        for seg in self.neighbours_out(node):
            if seg.road.name not in names:
                names.append(seg.road.name)
        return f"ID: {node.node_id}  loc: {node.location}\nroads: {', '.join(names)}"

    def get_stats(self) -> dict:
        """Get network statistics."""
        mirror_count = sum(1 for segs in self._outgoing.values() for seg in segs if seg.is_mirror)
        return {
            "total_nodes": len(self._nodes),
            "total_roads": len(self._roads),
            "total_segments": len(self._segments),
            "total_mirror_segments": mirror_count,
            "one_way_roads": sum(1 for road in self._roads.values() if road.one_way),
            "total_length_km": sum(seg.length for seg in self._segments),
        }

    def __repr__(self) -> str:
        return f"RoadGraph({len(self._nodes)} nodes, {len(self._roads)} roads, {len(self._segments)} segments)"
