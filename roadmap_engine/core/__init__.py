"""Core geometry for the road map engine.

- Location: Projected 2D coordinate (kilometre plane) with Euclidean distance
"""

from roadmap_engine.core.location import Location

__all__ = [
    "Location",
]
