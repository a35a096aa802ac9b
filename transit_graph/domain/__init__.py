"""Domain layer - Core records, load states and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    DanglingEdgeReferenceError,
    DuplicateEdgeIdError,
    DuplicateNodeIdError,
    EmptyGraphNormalizationError,
    GraphBuildError,
    ParseError,
    SourceUnavailableError,
    TransitGraphError,
)
from .models import (
    DataState,
    EdgeRecord,
    ErrorState,
    GraphEdge,
    GraphNode,
    IdleState,
    LoadingState,
    NodeRecord,
    ReadyState,
    parse_routes,
)

__all__ = [
    # Models
    "NodeRecord",
    "EdgeRecord",
    "GraphNode",
    "GraphEdge",
    "parse_routes",
    # Load states
    "DataState",
    "IdleState",
    "LoadingState",
    "ReadyState",
    "ErrorState",
    # Errors
    "TransitGraphError",
    "SourceUnavailableError",
    "ParseError",
    "GraphBuildError",
    "DuplicateNodeIdError",
    "DuplicateEdgeIdError",
    "DanglingEdgeReferenceError",
    "EmptyGraphNormalizationError",
    "ConfigurationError",
]
