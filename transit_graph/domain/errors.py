"""Typed domain errors for the transit graph preparation.

Every stage of the preparation pipeline raises one of these errors
instead of a bare built-in exception, so that the load-state controller
can surface a single, meaningful cause to its consumer.

All errors inherit from TransitGraphError and can optionally
wrap a root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TransitGraphError(Exception):
    """Base error for the transit graph domain.

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
class SourceUnavailableError(TransitGraphError):
    """A tabular source could not be fetched.

    Attributes:
        location: URL or filesystem path of the source
    """

    location: str = ""


@dataclass
class ParseError(TransitGraphError):
    """A row could not be decoded against the expected shape.

    Attributes:
        location: URL or filesystem path of the source
        line: 1-based line number in the source text, if known
        row_number: 1-based index of the offending data row, if known
    """

    location: str = ""
    line: Optional[int] = None
    row_number: Optional[int] = None


@dataclass
class GraphBuildError(TransitGraphError):
    """Structural violation while building the graph."""


@dataclass
class DuplicateNodeIdError(GraphBuildError):
    """Two node rows share the same id.

    Attributes:
        node_id: The repeated node id
    """

    node_id: str = ""


@dataclass
class DuplicateEdgeIdError(GraphBuildError):
    """Two edge rows share the same id.

    Attributes:
        edge_id: The repeated edge id
    """

    edge_id: str = ""


@dataclass
class DanglingEdgeReferenceError(GraphBuildError):
    """An edge references a node id that was never added.

    Attributes:
        edge_id: The edge holding the reference
        missing_node_id: The unknown source or target id
    """

    edge_id: str = ""
    missing_node_id: str = ""


@dataclass
class EmptyGraphNormalizationError(TransitGraphError):
    """Sizes cannot be normalized because no usable maximum exists.

    Attributes:
        collection: Either "nodes" or "edges"
        maximum: The maximum that was found, if any
    """

    collection: str = ""
    maximum: Optional[float] = None


@dataclass
class ConfigurationError(TransitGraphError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
