"""Articulation points of the road network (biconnectivity analysis).

An articulation point is a node whose removal splits its connected
component. The graph is treated as undirected (incoming + outgoing
segments), and every component is analysed in one run.

The depth-first search is iterative: an explicit stack of frames, one per
node on the current DFS path, each moving through
DISCOVERED -> EXPANDING -> FINISHED. Deep networks (long chains of
intersections) therefore never hit Python's recursion limit.

Per frame:
- DISCOVERED: low_link = depth, stage every neighbour except the DFS parent
- EXPANDING: take one staged neighbour per step; an already visited one is
  a back edge (low_link = min(low_link, its depth)), an unvisited one gets
  depth + 1 and its own frame on top of the stack
- FINISHED: nothing staged is left; unless this is the subtree's first node,
  the parent is an articulation point when low_link >= parent depth, and the
  parent's low_link absorbs this one

The DFS root is an articulation point when it has more than one subtree.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum

from roadmap_engine.model.node import Node
from roadmap_engine.model.road_graph import RoadGraph

logger = logging.getLogger(__name__)


class FrameState(Enum):
    """Lifecycle of a node on the DFS stack."""

    DISCOVERED = "discovered"
    EXPANDING = "expanding"
    FINISHED = "finished"


_TRANSITIONS = {
    FrameState.DISCOVERED: FrameState.EXPANDING,
    FrameState.EXPANDING: FrameState.FINISHED,
}


@dataclass
class _Frame:
    """DFS stack entry for one node."""

    node: Node
    parent: Node
    depth: int
    low_link: int = 0
    state: FrameState = FrameState.DISCOVERED
    pending: deque[Node] = field(default_factory=deque)

    def advance(self, to: FrameState) -> None:
        if _TRANSITIONS.get(self.state) is not to:
            raise RuntimeError(f"Illegal frame transition {self.state.value} -> {to.value} for {self.node}")
        self.state = to


@dataclass(frozen=True)
class ComponentReport:
    """Articulation summary for one connected component.

    Attributes:
        index: 1-based component number in discovery order
        root_id: Node id the DFS started from
        node_count: Nodes in the component
        articulation_count: Articulation points found in the component
    """

    index: int
    root_id: int
    node_count: int
    articulation_count: int


@dataclass(frozen=True)
class ArticulationResult:
    """All articulation points of a graph plus per-component counts."""

    points: frozenset[Node]
    components: tuple[ComponentReport, ...]

    @property
    def total(self) -> int:
        return len(self.points)

    @property
    def point_ids(self) -> list[int]:
        """Articulation point ids, ascending."""
        return sorted(node.node_id for node in self.points)

    def summary_lines(self) -> list[str]:
        """Printable report for the viewer's text panel."""
        lines = [f"Component {c.index} has {c.articulation_count} articulation points" for c in self.components]
        lines.append(f"This data has this total of articulation points: {self.total}")
        return lines


class ArticulationPointFinder:
    """Finds articulation points across all components of a RoadGraph.

    Roots are taken in ascending node id order, so component numbering is
    reproducible.

    Example:
        result = ArticulationPointFinder(graph=graph).run()
        print(result.point_ids)
    """

    def __init__(self, graph: RoadGraph) -> None:
        self.graph = graph

    def run(self) -> ArticulationResult:
        """Analyse every connected component.

        Returns:
            ArticulationResult with the point set and one report per component.

        Raises:
            ValueError: If the graph has no nodes.
        """
        if len(self.graph) == 0:
            raise ValueError("Articulation point analysis needs a graph with at least one node")

        depth: dict[int, int] = {}  # node id -> DFS depth, missing = unvisited
        points: set[Node] = set()
        components: list[ComponentReport] = []

        for node_id in sorted(self.graph.nodes):
            if node_id in depth:
                continue

            visited_before = len(depth)
            points_before = len(points)
            self._run_root(root=self.graph.nodes[node_id], depth=depth, points=points)

            report = ComponentReport(
                index=len(components) + 1,
                root_id=node_id,
                node_count=len(depth) - visited_before,
                articulation_count=len(points) - points_before,
            )
            components.append(report)
            logger.debug(f"Component {report.index} has {report.articulation_count} articulation points")

        logger.info(f"Articulation analysis: {len(points)} points in {len(components)} components")
        return ArticulationResult(points=frozenset(points), components=tuple(components))

    def _neighbours(self, node: Node) -> list[Node]:
        """Undirected neighbours (other endpoint of every incident segment)."""
        return [seg.other_end(node) for seg in self.graph.neighbours_all(node)]

    def _run_root(self, root: Node, depth: dict[int, int], points: set[Node]) -> None:
        """DFS from a fresh root, applying the root rule (more than one subtree)."""
        depth[root.node_id] = 0
        subtrees = 0

        for neighbour in self._neighbours(root):
            if neighbour.node_id not in depth:
                self._traverse(first=neighbour, root=root, depth=depth, points=points)
                subtrees += 1

        if subtrees > 1:
            points.add(root)

    def _traverse(self, first: Node, root: Node, depth: dict[int, int], points: set[Node]) -> None:
        """Explicit-stack DFS over the subtree hanging from root through first."""
        depth[first.node_id] = 1
        stack = [_Frame(node=first, parent=root, depth=1)]

        while stack:
            frame = stack[-1]

            if frame.state is FrameState.DISCOVERED:
                frame.low_link = frame.depth
                frame.pending.extend(n for n in self._neighbours(frame.node) if n.node_id != frame.parent.node_id)
                frame.advance(to=FrameState.EXPANDING)

            elif frame.pending:
                child = frame.pending.popleft()
                child_depth = depth.get(child.node_id)
                if child_depth is not None:
                    frame.low_link = min(frame.low_link, child_depth)
                else:
                    depth[child.node_id] = frame.depth + 1
                    stack.append(_Frame(node=child, parent=frame.node, depth=frame.depth + 1))

            else:
                frame.advance(to=FrameState.FINISHED)
                stack.pop()
                if frame.node.node_id != first.node_id:
                    parent_frame = stack[-1]
                    if frame.low_link >= parent_frame.depth:
                        points.add(parent_frame.node)
                    parent_frame.low_link = min(parent_frame.low_link, frame.low_link)


def find_articulation_points(graph: RoadGraph) -> frozenset[Node]:
    """All articulation points of graph, across every connected component."""
    return ArticulationPointFinder(graph=graph).run().points
