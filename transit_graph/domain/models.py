"""Domain models for the transit graph preparation.

Raw records are frozen dataclasses with slots, decoded from the loosely
typed rows produced by the tabular loader. Graph views are read-only
snapshots of node and edge attributes handed to the rendering layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Mapping, Optional, Union

from .errors import ParseError

if TYPE_CHECKING:
    from ..graph.dataset import Dataset

Row = Mapping[str, Any]


def _required(
    row: Row, column: str, location: str, row_number: Optional[int]
) -> Any:
    if column not in row:
        raise ParseError(
            f"Missing column {column!r}",
            location=location,
            row_number=row_number,
        )
    value = row[column]
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ParseError(
            f"Empty value for column {column!r}",
            location=location,
            row_number=row_number,
        )
    return value


def _as_id(value: Any) -> str:
    # Numeric ids are inferred as numbers by the loader
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def _as_float(
    value: Any, column: str, location: str, row_number: Optional[int]
) -> float:
    if isinstance(value, bool):
        raise ParseError(
            f"Expected a number for column {column!r}, got {value!r}",
            location=location,
            row_number=row_number,
        )
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ParseError(
            f"Expected a number for column {column!r}, got {value!r}",
            location=location,
            row_number=row_number,
            cause=e,
        )


def parse_routes(value: Any, separator: str = "|") -> frozenset[str]:
    """Decode a routes cell into a set of route identifiers.

    Args:
        value: The raw cell value (None, a delimited string or a number).
        separator: Separator between route identifiers in a string cell.

    Returns:
        The set of non-empty, stripped route identifiers.
    """
    if value is None:
        return frozenset()
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [_as_id(item) for item in value]
    elif isinstance(value, str):
        items = [item.strip() for item in value.split(separator)]
    else:
        items = [_as_id(value)]
    return frozenset(item for item in items if item)


@dataclass(frozen=True, slots=True)
class NodeRecord:
    """A station row as read from the nodes dataset.

    Attributes:
        id: Unique station identifier
        name: Human-readable station name
        lat: Latitude in degrees
        lng: Longitude in degrees
    """

    id: str
    name: str
    lat: float
    lng: float

    @classmethod
    def from_row(
        cls,
        row: Row,
        *,
        location: str = "",
        row_number: Optional[int] = None,
    ) -> NodeRecord:
        """Decode a typed record from a parsed CSV row.

        Raises:
            ParseError: If a column is missing or has the wrong type.
        """
        node_id = _as_id(_required(row, "id", location, row_number))
        name = row.get("name")
        lat = _required(row, "lat", location, row_number)
        lng = _required(row, "lng", location, row_number)
        return cls(
            id=node_id,
            name=node_id if name is None else str(name),
            lat=_as_float(lat, "lat", location, row_number),
            lng=_as_float(lng, "lng", location, row_number),
        )


@dataclass(frozen=True, slots=True)
class EdgeRecord:
    """A connection row as read from the edges dataset.

    Attributes:
        id: Unique edge identifier
        source: Id of the departure node
        target: Id of the arrival node
        frequency: Service frequency on this connection
        routes: Route identifiers serving this connection
    """

    id: str
    source: str
    target: str
    frequency: float
    routes: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_row(
        cls,
        row: Row,
        *,
        location: str = "",
        row_number: Optional[int] = None,
        routes_separator: str = "|",
    ) -> EdgeRecord:
        """Decode a typed record from a parsed CSV row.

        Raises:
            ParseError: If a column is missing or has the wrong type.
        """
        frequency = _required(row, "frequency", location, row_number)
        return cls(
            id=_as_id(_required(row, "id", location, row_number)),
            source=_as_id(_required(row, "source", location, row_number)),
            target=_as_id(_required(row, "target", location, row_number)),
            frequency=_as_float(frequency, "frequency", location, row_number),
            routes=parse_routes(row.get("routes"), routes_separator),
        )


@dataclass(frozen=True, slots=True)
class GraphNode:
    """Display attributes of a node in the prepared graph."""

    id: str
    label: str
    x: float
    y: float
    size: float
    color: str
    routes: frozenset[str]


@dataclass(frozen=True, slots=True)
class GraphEdge:
    """Display attributes of an edge in the prepared graph."""

    id: str
    source: str
    target: str
    size: float
    color: str
    routes: frozenset[str]


@dataclass(frozen=True, slots=True)
class IdleState:
    """Nothing has been requested yet."""

    kind: ClassVar[str] = "idle"


@dataclass(frozen=True, slots=True)
class LoadingState:
    """The preparation pipeline is running."""

    kind: ClassVar[str] = "loading"


@dataclass(frozen=True, slots=True)
class ReadyState:
    """The dataset is fully built and normalized."""

    dataset: Dataset
    kind: ClassVar[str] = "ready"


@dataclass(frozen=True, slots=True)
class ErrorState:
    """The preparation pipeline failed.

    Attributes:
        error: The exception raised by the failing stage
    """

    error: BaseException
    kind: ClassVar[str] = "error"


DataState = Union[IdleState, LoadingState, ReadyState, ErrorState]
