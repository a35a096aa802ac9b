"""Graph-related utilities for representing the transit network.

This subpackage contains modules to build an attributed multigraph from
decoded CSV records, derive per-node attributes from incident edges,
normalize sizes for display and expose the result read-only.
"""

from .aggregate import aggregate_node_attributes, incident_edges
from .build_graph import build_graph, edge_size
from .dataset import Dataset
from .normalize import normalize_sizes
from .projection import equirectangular, get_projector, mercator

__all__ = [
    "Dataset",
    "aggregate_node_attributes",
    "build_graph",
    "edge_size",
    "equirectangular",
    "get_projector",
    "incident_edges",
    "mercator",
    "normalize_sizes",
]
