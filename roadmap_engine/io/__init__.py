"""Data file loading for the road map engine."""

from roadmap_engine.io.loader import (
    load_graph,
    load_graph_files,
    read_nodes,
    read_roads,
    read_segments,
)

__all__ = [
    "load_graph",
    "load_graph_files",
    "read_nodes",
    "read_roads",
    "read_segments",
]
