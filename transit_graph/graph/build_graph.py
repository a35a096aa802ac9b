"""Graph construction from decoded node and edge records.

The transit network is held in a ``networkx.MultiDiGraph``: edges are
directed, parallel edges between the same pair of stations are allowed
(each keyed by its edge id) and so are self-loops.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Set

import networkx as nx
import numpy as np

from ..config import DisplayConfig, get_config
from ..domain.errors import (
    DanglingEdgeReferenceError,
    DuplicateEdgeIdError,
    DuplicateNodeIdError,
)
from ..domain.models import EdgeRecord, NodeRecord
from .projection import Projector, equirectangular

logger = logging.getLogger(__name__)

# Initial size of a node before the aggregation pass
PLACEHOLDER_NODE_SIZE = 1.0


def edge_size(frequency: float) -> float:
    """Natural log of the frequency.

    Non-positive frequencies are not rejected: 0 gives ``-inf`` and a
    negative value gives ``nan``.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.log(frequency))


def build_graph(
    nodes: Iterable[NodeRecord],
    edges: Iterable[EdgeRecord],
    projector: Projector = equirectangular,
    display: Optional[DisplayConfig] = None,
) -> nx.MultiDiGraph:
    """Build the attributed multigraph from raw records.

    Every node is inserted before any edge, so edges may reference
    nodes in any order.

    Args:
        nodes: Decoded station records.
        edges: Decoded connection records.
        projector: Maps (lat, lng) to planar (x, y).
        display: Colors used for nodes and edges.

    Returns:
        A new MultiDiGraph with placeholder node sizes and routes.

    Raises:
        DuplicateNodeIdError: If two nodes share an id.
        DuplicateEdgeIdError: If two edges share an id.
        DanglingEdgeReferenceError: If an edge endpoint is unknown.
    """
    display = display or get_config().display
    graph = nx.MultiDiGraph()

    for node in nodes:
        if node.id in graph:
            raise DuplicateNodeIdError(
                f"Duplicate node id {node.id!r}",
                node_id=node.id,
            )
        x, y = projector(node.lat, node.lng)
        graph.add_node(
            node.id,
            id=node.id,
            label=node.name,
            x=x,
            y=y,
            size=PLACEHOLDER_NODE_SIZE,
            color=display.default_node_color,
            routes=frozenset(),
        )

    edge_ids: Set[str] = set()
    for edge in edges:
        if edge.id in edge_ids:
            raise DuplicateEdgeIdError(
                f"Duplicate edge id {edge.id!r}",
                edge_id=edge.id,
            )
        for endpoint in (edge.source, edge.target):
            if endpoint not in graph:
                raise DanglingEdgeReferenceError(
                    f"Edge {edge.id!r} references unknown node {endpoint!r}",
                    edge_id=edge.id,
                    missing_node_id=endpoint,
                )
        edge_ids.add(edge.id)
        graph.add_edge(
            edge.source,
            edge.target,
            key=edge.id,
            id=edge.id,
            size=edge_size(edge.frequency),
            color=display.default_edge_color,
            routes=frozenset(edge.routes),
        )

    logger.debug(
        "Graph built",
        extra={"nodes": graph.number_of_nodes(), "edges": graph.number_of_edges()},
    )
    return graph
