"""A* route search over the road graph.

Finds the shortest route between two nodes following outgoing segments
only (one-way roads are respected). The heuristic is the straight-line
distance to the goal, which never overestimates on a road network where a
segment is at least as long as the straight line between its endpoints, so
the first time the goal is popped its route is optimal.

All search state (g/f scores, parents, closed set) lives in a SearchWorkspace
created for each call. The graph is only read, so searches can be repeated
or run side by side without resetting anything.

Open-set ties on f_score are broken by ascending node id, which makes
results reproducible.
"""

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Optional

from shapely.geometry import LineString

from roadmap_engine.constants import SearchConfig
from roadmap_engine.model.errors import NotFoundError, PathReconstructionError
from roadmap_engine.model.node import Node
from roadmap_engine.model.road_graph import RoadGraph
from roadmap_engine.model.segment import Segment

logger = logging.getLogger(__name__)


@dataclass
class SearchWorkspace:
    """Per-call A* state keyed by node id.

    Attributes:
        g_score: Best known cost from start (missing = infinity)
        f_score: g_score + heuristic, the open-set priority
        parent: Predecessor on the best route found so far
        parent_segment: Segment used to reach the node from its parent
        closed: Node ids whose cost has been finalized
    """

    g_score: dict[int, float] = field(default_factory=dict)
    f_score: dict[int, float] = field(default_factory=dict)
    parent: dict[int, Node] = field(default_factory=dict)
    parent_segment: dict[int, Segment] = field(default_factory=dict)
    closed: set[int] = field(default_factory=set)

    def g(self, node_id: int) -> float:
        return self.g_score.get(node_id, SearchConfig.INFINITY)

    def reconstruct(self, start: Node, goal: Node) -> tuple[tuple[Node, ...], tuple[Segment, ...]]:
        """Follow parents from goal back to start and return both in start -> goal order.

        Raises:
            PathReconstructionError: If a node without parent other than start
                is reached (no completed search for this goal).
        """
        nodes = [goal]
        segments: list[Segment] = []
        node = goal
        while node.node_id != start.node_id:
            parent = self.parent.get(node.node_id)
            if parent is None:
                raise PathReconstructionError(
                    f"Node {node.node_id} has no parent on a route from {start.node_id} to {goal.node_id}",
                    node_id=node.node_id,
                )
            segments.append(self.parent_segment[node.node_id])
            nodes.append(parent)
            node = parent

        nodes.reverse()
        segments.reverse()
        return tuple(nodes), tuple(segments)


class _OpenSet:
    """Binary-heap priority queue of nodes ordered by (f_score, node_id).

    Re-inserting a node invalidates its previous entry, so at most one live
    entry per node is ever in the heap.
    """

    def __init__(self) -> None:
        self._heap: list[list] = []
        self._entries: dict[int, list] = {}
        self._counter = itertools.count()

    def push(self, node: Node, f_score: float) -> None:
        stale = self._entries.pop(node.node_id, None)
        if stale is not None:
            stale[-1] = None
        entry = [f_score, node.node_id, next(self._counter), node]
        self._entries[node.node_id] = entry
        heapq.heappush(self._heap, entry)

    def pop(self) -> Node:
        while self._heap:
            *_, node = heapq.heappop(self._heap)
            if node is not None:
                del self._entries[node.node_id]
                return node
        raise KeyError("pop from an empty open set")

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)


@dataclass(frozen=True)
class RouteResult:
    """Outcome of one route search.

    An unreachable goal is a normal result with no nodes (found is False).

    Attributes:
        start: Search start node
        goal: Search goal node
        nodes: Route from start to goal inclusive (empty if no route)
        segments: Segments traversed, len(nodes) - 1 of them (mirrors included as traversed)
        total_length: Route length in km (infinity if no route)
        expanded: Number of nodes popped from the open set
    """

    start: Node
    goal: Node
    nodes: tuple[Node, ...] = ()
    segments: tuple[Segment, ...] = ()
    total_length: float = SearchConfig.INFINITY
    expanded: int = 0

    @property
    def found(self) -> bool:
        return len(self.nodes) > 0

    def roads_along_path(self) -> dict[str, float]:
        """Summed segment length per road name, in route order.

        A mirror segment counts once, under its own road.
        """
        lengths: dict[str, float] = {}
        for seg in self.segments:
            lengths[seg.road.name] = lengths.get(seg.road.name, 0.0) + seg.length
        return lengths

    def summary_lines(self) -> list[str]:
        """Printable route description for the viewer's text panel."""
        if not self.found:
            return [f"No path from Node {self.start.node_id} to Node {self.goal.node_id}"]

        lines = [f"From Node {self.start.node_id} to Node {self.goal.node_id}"]
        for name, length in self.roads_along_path().items():
            lines.append(f"{name} -- {length:.3f} km")
        lines.append(f"Total length is: {self.total_length:.3f} km")
        return lines

    def get_linestring(self) -> LineString:
        """Shapely LineString following the route polylines (empty if fewer than 2 points)."""
        coords: list[tuple[float, float]] = []
        for seg in self.segments:
            for xy in seg.get_linestring().coords:
                if not coords or coords[-1] != tuple(xy):
                    coords.append(tuple(xy))
        if len(coords) < 2:
            return LineString()
        return LineString(coords)


class AStarPathFinder:
    """A* shortest-route search on a RoadGraph.

    Algorithm:
    1. Seed the open set with start (g = 0, f = h(start))
    2. Pop the node with lowest f (ties: lowest node id), mark it closed
    3. Stop when the goal is popped
    4. Relax every outgoing segment: skip closed children that would not
       improve, otherwise record the better parent/score and re-insert
    5. An empty open set means the goal is unreachable

    Example:
        finder = AStarPathFinder(graph=graph)
        route = finder.find_path(start=graph.get_node(1), goal=graph.get_node(9))
        if route.found:
            print(route.summary_lines())
    """

    def __init__(self, graph: RoadGraph) -> None:
        self.graph = graph

    @staticmethod
    def heuristic(node: Node, goal: Node) -> float:
        """Straight-line distance from node to goal in km."""
        return node.location.distance_to(other=goal.location)

    def find_path(self, start: Node, goal: Node) -> RouteResult:
        """Find the shortest route from start to goal.

        Args:
            start: Departure node (must belong to the graph)
            goal: Destination node (must belong to the graph)

        Returns:
            RouteResult; result.found is False when goal is unreachable.

        Raises:
            NotFoundError: If start or goal is not part of the graph.
        """
        for node in (start, goal):
            if node not in self.graph:
                raise NotFoundError(f"{node} is not part of this graph", entity="node", entity_id=node.node_id)

        workspace = SearchWorkspace()
        found, expanded = self._search(start=start, goal=goal, workspace=workspace)

        if not found:
            logger.info(f"No path from node {start.node_id} to node {goal.node_id} ({expanded} nodes expanded)")
            return RouteResult(start=start, goal=goal, expanded=expanded)

        nodes, segments = workspace.reconstruct(start=start, goal=goal)
        total_length = workspace.g(goal.node_id)

        logger.info(
            f"Route found: {start.node_id} -> {goal.node_id}, {len(nodes)} nodes, "
            f"{total_length:.3f} km, {expanded} nodes expanded"
        )

        return RouteResult(
            start=start,
            goal=goal,
            nodes=nodes,
            segments=segments,
            total_length=total_length,
            expanded=expanded,
        )

    def _search(self, start: Node, goal: Node, workspace: SearchWorkspace) -> tuple[bool, int]:
        """Run the A* loop, filling workspace. Returns (goal reached, nodes expanded)."""
        h_cache: dict[int, float] = {}

        def h(node: Node) -> float:
            if node.node_id not in h_cache:
                h_cache[node.node_id] = self.heuristic(node=node, goal=goal)
            return h_cache[node.node_id]

        open_set = _OpenSet()
        workspace.g_score[start.node_id] = 0.0
        workspace.f_score[start.node_id] = h(start)
        open_set.push(node=start, f_score=workspace.f_score[start.node_id])

        expanded = 0
        while open_set:
            current = open_set.pop()
            workspace.closed.add(current.node_id)
            expanded += 1

            if current.node_id == goal.node_id:
                return True, expanded

            current_g = workspace.g(current.node_id)
            for seg in self.graph.neighbours_out(current):
                child = seg.end
                tentative_g = current_g + seg.length

                if child.node_id in workspace.closed and tentative_g + h(child) >= workspace.f_score[child.node_id]:
                    continue

                if tentative_g < workspace.g(child.node_id):
                    workspace.parent[child.node_id] = current
                    workspace.parent_segment[child.node_id] = seg
                    workspace.g_score[child.node_id] = tentative_g
                    workspace.f_score[child.node_id] = tentative_g + h(child)
                    open_set.push(node=child, f_score=workspace.f_score[child.node_id])

        logger.debug(f"Open set exhausted after {expanded} expansions")
        return False, expanded


def find_path(graph: RoadGraph, start: Node, goal: Node) -> Optional[tuple[Node, ...]]:
    """Shortest route as a node sequence, or None if goal is unreachable."""
    route = AStarPathFinder(graph=graph).find_path(start=start, goal=goal)
    return route.nodes if route.found else None
