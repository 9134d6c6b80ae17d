"""Graph algorithms over the road network.

- AStarPathFinder / find_path: Single-pair shortest route (A*, Euclidean heuristic)
- RouteResult: Immutable route outcome with per-road length summary
- dijkstra_lengths / shortest_length: Reference distances via SciPy (verification)
- ArticulationPointFinder / find_articulation_points: Iterative biconnectivity analysis
"""

from roadmap_engine.routing.articulation import (
    ArticulationPointFinder,
    ArticulationResult,
    ComponentReport,
    FrameState,
    find_articulation_points,
)
from roadmap_engine.routing.astar import (
    AStarPathFinder,
    RouteResult,
    SearchWorkspace,
    find_path,
)
from roadmap_engine.routing.dijkstra import (
    build_adjacency_matrix,
    dijkstra_lengths,
    shortest_length,
)

__all__ = [
    # A*
    "AStarPathFinder",
    "RouteResult",
    "SearchWorkspace",
    "find_path",
    # Reference Dijkstra
    "build_adjacency_matrix",
    "dijkstra_lengths",
    "shortest_length",
    # Articulation points
    "ArticulationPointFinder",
    "ArticulationResult",
    "ComponentReport",
    "FrameState",
    "find_articulation_points",
]
