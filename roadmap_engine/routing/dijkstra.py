"""Reference single-source Dijkstra using SciPy's sparse graph routines.

Builds a sparse adjacency matrix from outgoing segments (mirrors included,
so two-way roads are traversable both ways) and runs
scipy.sparse.csgraph.dijkstra. Used to verify that A* routes are optimal.
"""

import logging

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import dijkstra

from roadmap_engine.constants import SearchConfig
from roadmap_engine.model.node import Node
from roadmap_engine.model.road_graph import RoadGraph

logger = logging.getLogger(__name__)


def build_adjacency_matrix(graph: RoadGraph) -> tuple[csr_matrix, list[int]]:
    """Directed CSR matrix of segment lengths.

    Parallel segments between the same pair keep the shortest length.
    Self-loops are dropped (they never shorten a route).

    Returns:
        (matrix, node_ids) where row/column i belongs to node_ids[i].
    """
    node_ids = sorted(graph.nodes)
    index = {node_id: i for i, node_id in enumerate(node_ids)}

    weights: dict[tuple[int, int], float] = {}
    for node in graph:
        for seg in graph.neighbours_out(node):
            if seg.is_self_loop:
                continue
            key = (index[seg.start.node_id], index[seg.end.node_id])
            if key not in weights or seg.length < weights[key]:
                weights[key] = seg.length

    n = len(node_ids)
    rows = np.fromiter((k[0] for k in weights), dtype=np.int64, count=len(weights))
    cols = np.fromiter((k[1] for k in weights), dtype=np.int64, count=len(weights))
    data = np.fromiter(weights.values(), dtype=np.float64, count=len(weights))
    return csr_matrix((data, (rows, cols)), shape=(n, n)), node_ids


def dijkstra_lengths(graph: RoadGraph, start: Node) -> dict[int, float]:
    """Shortest directed distance from start to every reachable node.

    Returns:
        Dict node_id -> distance in km. Unreachable nodes are omitted.
    """
    matrix, node_ids = build_adjacency_matrix(graph=graph)
    start_index = node_ids.index(graph.get_node(start.node_id).node_id)
    distances = dijkstra(csgraph=matrix, directed=True, indices=start_index)

    reachable = {node_ids[i]: float(d) for i, d in enumerate(distances) if np.isfinite(d)}
    logger.debug(f"Dijkstra from {start.node_id}: {len(reachable)} of {len(node_ids)} nodes reachable")
    return reachable


def shortest_length(graph: RoadGraph, start: Node, goal: Node) -> float:
    """Shortest directed distance from start to goal, infinity if unreachable."""
    return dijkstra_lengths(graph=graph, start=start).get(goal.node_id, SearchConfig.INFINITY)
