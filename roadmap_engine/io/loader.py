"""Loader for the road map's tab-separated data files.

Three files make up a dataset (see DataConfig for names). A file may start
with a title row, recognised by a first field that is not an integer id;
blank lines are skipped.

    nodes:     id  lat  lon
    roads:     roadid  type  label  city  oneway  speed  roadclass  notforcar  notforpede  notforbicy
    segments:  roadid  length  nodeid1  nodeid2  lat1  lon1  lat2  lon2 ...

Rows are turned into records and handed to RoadGraph.build(). Any malformed
row aborts the load with DataFormatError naming the file and line.
"""

import csv
import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TypeVar, Union

from roadmap_engine.constants import DATA_DIR, DataConfig
from roadmap_engine.model.errors import DataFormatError
from roadmap_engine.model.records import NodeRecord, RoadRecord, SegmentRecord
from roadmap_engine.model.road_graph import RoadGraph

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
T = TypeVar("T")


def _flag(value: str) -> bool:
    return int(value) != 0


def _is_title_row(fields: list[str]) -> bool:
    """True when the first field is not an integer id (column titles)."""
    try:
        int(fields[0])
    except ValueError:
        return True
    return False


def _rows(path: Path) -> Iterator[tuple[int, list[str]]]:
    """Yield (line_number, fields) for every data row.

    Only the first non-blank line may be a title row; later rows with a
    non-integer id are data errors.
    """
    with open(path, "r", encoding="utf-8", newline="") as fh:
        reader = csv.reader(fh, delimiter=DataConfig.DELIMITER, quoting=csv.QUOTE_NONE)
        first = True
        for line_number, fields in enumerate(reader, start=1):
            fields = [f.strip() for f in fields]
            if not any(fields):
                continue
            if first:
                first = False
                if _is_title_row(fields):
                    continue
            yield line_number, fields


def _read(path: PathLike, parse_row: Callable[[list[str]], T], kind: str) -> list[T]:
    path = Path(path)
    records: list[T] = []
    for line_number, fields in _rows(path):
        try:
            records.append(parse_row(fields))
        except (ValueError, IndexError) as e:
            raise DataFormatError(
                f"Malformed {kind} row in {path.name} line {line_number}",
                cause=e,
                file_path=str(path),
                line_number=line_number,
            ) from e
    logger.info(f"Read {len(records)} {kind}s from {path.name}")
    return records


def _parse_node(fields: list[str]) -> NodeRecord:
    if len(fields) < DataConfig.NODE_COLUMNS:
        raise ValueError(f"expected {DataConfig.NODE_COLUMNS} columns, got {len(fields)}")
    return NodeRecord(node_id=int(fields[0]), lat=float(fields[1]), lon=float(fields[2]))


def _parse_road(fields: list[str]) -> RoadRecord:
    if len(fields) < DataConfig.ROAD_COLUMNS:
        raise ValueError(f"expected {DataConfig.ROAD_COLUMNS} columns, got {len(fields)}")
    return RoadRecord(
        road_id=int(fields[0]),
        road_type=int(fields[1]),
        name=fields[2],
        city=fields[3],
        one_way=_flag(fields[4]),
        speed=int(fields[5]),
        road_class=int(fields[6]),
        not_for_car=_flag(fields[7]),
        not_for_pedestrian=_flag(fields[8]),
        not_for_bicycle=_flag(fields[9]),
    )


def _parse_segment(fields: list[str]) -> SegmentRecord:
    if len(fields) < DataConfig.SEGMENT_MIN_COLUMNS:
        raise ValueError(f"expected at least {DataConfig.SEGMENT_MIN_COLUMNS} columns, got {len(fields)}")
    return SegmentRecord(
        road_id=int(fields[0]),
        length=float(fields[1]),
        start_node_id=int(fields[2]),
        end_node_id=int(fields[3]),
        coords=tuple(float(v) for v in fields[4:]),
    )


def read_nodes(path: PathLike) -> list[NodeRecord]:
    """Read the node file."""
    return _read(path=path, parse_row=_parse_node, kind="node")


def read_roads(path: PathLike) -> list[RoadRecord]:
    """Read the road info file."""
    return _read(path=path, parse_row=_parse_road, kind="road")


def read_segments(path: PathLike) -> list[SegmentRecord]:
    """Read the road segment file."""
    return _read(path=path, parse_row=_parse_segment, kind="segment")


def load_graph_files(nodes_path: PathLike, roads_path: PathLike, segments_path: PathLike) -> RoadGraph:
    """Read the three files and build a RoadGraph.

    Raises:
        DataFormatError: If a row cannot be parsed.
        GraphReferenceError: If a segment references an unknown node or road.
    """
    return RoadGraph.build(
        nodes=read_nodes(path=nodes_path),
        roads=read_roads(path=roads_path),
        segments=read_segments(path=segments_path),
    )


def load_graph(data_dir: PathLike = DATA_DIR) -> RoadGraph:
    """Load a dataset directory holding the standard file names (see DataConfig).

    Defaults to the project-level data/ directory.
    """
    data_dir = Path(data_dir)
    logger.info(f"Loading road graph from {data_dir}")
    return load_graph_files(
        nodes_path=data_dir / DataConfig.NODES_FILE,
        roads_path=data_dir / DataConfig.ROADS_FILE,
        segments_path=data_dir / DataConfig.SEGMENTS_FILE,
    )
