"""Configuration constants for the road map engine.

All configurable parameters are centralized here for easy tuning.

Classes:
    ProjectionConfig: Lat/lon to kilometre-plane projection
    MapConfig: Node picking parameters used by the viewer
    DataConfig: Data file names and tab format
    SearchConfig: Route search parameters
"""

from pathlib import Path

# Package root directory (where roadmap_engine/ lives)
PACKAGE_DIR = Path(__file__).parent

# Project root directory (parent of roadmap_engine/)
PROJECT_ROOT = PACKAGE_DIR.parent

# Data directory outside package (road datasets are not shipped with the package)
DATA_DIR = PROJECT_ROOT / "data"


class ProjectionConfig:
    """Equirectangular projection around a fixed map centre.

    Locations are stored in kilometres east (x) and north (y) of the centre,
    so segment lengths from the data files (km) and straight-line distances
    share one unit.
    """

    # Map centre: Auckland, New Zealand
    CENTRE_LAT = -36.847622
    CENTRE_LON = 174.763444

    # 1 degree of latitude ≈ 111 km
    KM_PER_DEGREE = 111.0


class MapConfig:
    """Node picking parameters."""

    # How far (km) from a node a click may land and still select it
    MAX_CLICKED_DISTANCE = 0.15


class DataConfig:
    """Tab-separated data file layout."""

    NODES_FILE = "nodeID-lat-lon.tab"
    ROADS_FILE = "roadID-roadInfo.tab"
    SEGMENTS_FILE = "roadSeg-roadID-length-nodeID-nodeID-coords.tab"

    DELIMITER = "\t"

    NODE_COLUMNS = 3  # id, lat, lon
    ROAD_COLUMNS = 10  # roadid, type, label, city, oneway, speed, roadclass, notforcar, notforpede, notforbicy
    SEGMENT_MIN_COLUMNS = 4  # roadid, length, nodeid1, nodeid2 (+ lat/lon pairs)


class SearchConfig:
    """Route search parameters."""

    # Unreached g_score / unvisited depth
    INFINITY = float("inf")
