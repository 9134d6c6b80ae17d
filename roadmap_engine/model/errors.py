"""Typed errors for the road graph engine.

All errors inherit from RoadGraphError. Where a builtin exception already
describes the failure (KeyError for lookups, ValueError for bad data,
RuntimeError for misuse) it is mixed in so callers can catch either.

"No path" is not an error: route searches return an empty RouteResult.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RoadGraphError(Exception):
    """Base error for the road graph engine.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class GraphReferenceError(RoadGraphError):
    """A record refers to a node or road id that does not exist (or is duplicated).

    Fatal to the whole load: no partial graph is returned.

    Attributes:
        entity: "node" or "road"
        entity_id: The offending id
    """

    entity: str = ""
    entity_id: Optional[int] = None


@dataclass
class NotFoundError(RoadGraphError, KeyError):
    """Lookup by id found nothing.

    Attributes:
        entity: "node" or "road"
        entity_id: The id that was looked up
    """

    entity: str = ""
    entity_id: Optional[int] = None


@dataclass
class PathReconstructionError(RoadGraphError, RuntimeError):
    """Path reconstruction reached a node with no parent that is not the start.

    Means reconstruction ran without a completed search.

    Attributes:
        node_id: Node where the parent chain broke
    """

    node_id: Optional[int] = None


@dataclass
class DataFormatError(RoadGraphError, ValueError):
    """A data file row could not be parsed.

    Attributes:
        file_path: Path of the file being read
        line_number: 1-based line number of the bad row
    """

    file_path: Optional[str] = None
    line_number: Optional[int] = None
