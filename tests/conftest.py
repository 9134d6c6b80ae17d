"""Shared pytest fixtures for roadmap_engine tests.

Provides make_graph() and reusable small road networks for all tests.

COORDINATE SYSTEM:
    Test networks are laid out directly in the projected kilometre plane
    (x east, y north of the map centre) and converted to lat/lon records,
    so segment lengths and straight-line distances share one unit.
    Lengths default to the straight-line distance plus a small margin, which
    keeps the A* heuristic admissible despite projection round-off.
"""

from collections.abc import Sequence
from typing import Union

import pytest

from roadmap_engine.core.location import Location
from roadmap_engine.model.records import NodeRecord, RoadRecord, SegmentRecord
from roadmap_engine.model.road_graph import RoadGraph

# Added to every default segment length (km)
LENGTH_MARGIN = 0.001

# (start, end) or (start, end, length)
Edge = Union[tuple[int, int], tuple[int, int, float]]


def node_records(positions: dict[int, tuple[float, float]]) -> list[NodeRecord]:
    """NodeRecords for nodes placed at (x, y) km."""
    records = []
    for node_id, (x, y) in positions.items():
        lat, lon = Location(x=x, y=y).to_lat_lon()
        records.append(NodeRecord(node_id=node_id, lat=lat, lon=lon))
    return records


def make_graph(
    positions: dict[int, tuple[float, float]],
    edges: Sequence[Edge],
    one_way: Union[bool, Sequence[bool]] = False,
    road_names: Union[Sequence[str], None] = None,
) -> RoadGraph:
    """Build a RoadGraph with one road per edge.

    Args:
        positions: node_id -> (x, y) in km
        edges: (start, end) pairs, optionally with an explicit length
        one_way: One flag for all roads, or one flag per edge
        road_names: Optional name per edge (default "Road <i>")

    Returns:
        Built RoadGraph; road i+1 owns edge i.
    """
    flags = [one_way] * len(edges) if isinstance(one_way, bool) else list(one_way)
    roads = []
    segments = []
    for i, edge in enumerate(edges):
        a, b = edge[0], edge[1]
        if len(edge) == 3:
            length = edge[2]
        else:
            (ax, ay), (bx, by) = positions[a], positions[b]
            length = Location(x=ax, y=ay).distance_to(other=Location(x=bx, y=by)) + LENGTH_MARGIN
        name = road_names[i] if road_names else f"Road {i + 1}"
        roads.append(RoadRecord(road_id=i + 1, name=name, city="Testville", one_way=flags[i]))

        a_lat, a_lon = Location(x=positions[a][0], y=positions[a][1]).to_lat_lon()
        b_lat, b_lon = Location(x=positions[b][0], y=positions[b][1]).to_lat_lon()
        segments.append(
            SegmentRecord(
                road_id=i + 1,
                length=length,
                start_node_id=a,
                end_node_id=b,
                coords=(a_lat, a_lon, b_lat, b_lon),
            )
        )
    return RoadGraph.build(nodes=node_records(positions), roads=roads, segments=segments)


def grid_positions(rows: int, cols: int, spacing: float = 1.0) -> dict[int, tuple[float, float]]:
    """Node ids row * cols + col + 1, placed on a square grid."""
    return {r * cols + c + 1: (c * spacing, r * spacing) for r in range(rows) for c in range(cols)}


def grid_edges(rows: int, cols: int) -> list[tuple[int, int]]:
    """4-neighbour grid edges."""
    edges = []
    for r in range(rows):
        for c in range(cols):
            node_id = r * cols + c + 1
            if c + 1 < cols:
                edges.append((node_id, node_id + 1))
            if r + 1 < rows:
                edges.append((node_id, node_id + cols))
    return edges


# =============================================================================
# NETWORK FIXTURES
# =============================================================================


@pytest.fixture
def grid_graph() -> RoadGraph:
    """4x4 two-way grid, 1 km spacing, nodes 1..16 (row-major from the origin)."""
    return make_graph(positions=grid_positions(rows=4, cols=4), edges=grid_edges(rows=4, cols=4))


@pytest.fixture
def bridge_graph() -> RoadGraph:
    """Two triangles (1-2-3 and 4-5-6) joined by the bridge 3-4.

    6 nodes, 7 edges. Articulation points: exactly 3 and 4.
    """
    positions = {1: (0.0, 0.0), 2: (0.0, 2.0), 3: (1.0, 1.0), 4: (3.0, 1.0), 5: (4.0, 0.0), 6: (4.0, 2.0)}
    edges = [(1, 2), (2, 3), (3, 1), (3, 4), (4, 5), (5, 6), (6, 4)]
    return make_graph(positions=positions, edges=edges)


@pytest.fixture
def one_way_graph() -> RoadGraph:
    """Square 1 -> 2 -> 3 -> 4 -> 1 of one-way roads plus a two-way diagonal 1-3.

    Road ids 1-4 are one-way, road 5 (the diagonal) is two-way.
    """
    positions = {1: (0.0, 0.0), 2: (1.0, 0.0), 3: (1.0, 1.0), 4: (0.0, 1.0)}
    edges = [(1, 2), (2, 3), (3, 4), (4, 1), (1, 3)]
    return make_graph(positions=positions, edges=edges, one_way=[True, True, True, True, False])


@pytest.fixture
def two_component_graph() -> RoadGraph:
    """Path 1-2-3 and, far away, path 10-11. Node 2 is the only articulation point."""
    positions = {1: (0.0, 0.0), 2: (1.0, 0.0), 3: (2.0, 0.0), 10: (10.0, 10.0), 11: (11.0, 10.0)}
    return make_graph(positions=positions, edges=[(1, 2), (2, 3), (10, 11)])
