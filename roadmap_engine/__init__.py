"""Road Map Engine - Graph engine for an interactive road-map viewer.

Features:
- Road network model with one-way handling (mirror segments for two-way roads)
- A* route finding with per-road route summaries
- Articulation point detection over all components, without recursion
- Loader for tab-separated node, road and segment files

Modules:
    core: Geometry (projected Location)
    model: Data structures (Node, Road, Segment, RoadGraph, errors)
    routing: Algorithms (A*, reference Dijkstra, articulation points)
    io: Data file loader

Example:
    from roadmap_engine.io import load_graph
    from roadmap_engine.routing import AStarPathFinder, find_articulation_points
"""
