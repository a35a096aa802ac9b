"""Per-node attributes derived from incident edges."""

from __future__ import annotations

import logging
from functools import reduce
from typing import Any, Dict, Hashable, Iterator, Tuple

import networkx as nx

logger = logging.getLogger(__name__)

EdgeView = Tuple[Hashable, Hashable, Hashable, Dict[str, Any]]


def incident_edges(graph: nx.MultiDiGraph, node: Hashable) -> Iterator[EdgeView]:
    """Yield every edge touching ``node`` exactly once.

    Outgoing edges come first, then incoming ones. A self-loop is both
    outgoing and incoming and is only yielded with the outgoing edges.
    """
    yield from graph.out_edges(node, keys=True, data=True)
    for source, target, key, data in graph.in_edges(node, keys=True, data=True):
        if source != target:
            yield source, target, key, data


def incident_size(graph: nx.MultiDiGraph, node: Hashable) -> float:
    """Sum of the sizes of the edges incident to ``node``."""
    return reduce(
        lambda acc, edge: acc + edge[3]["size"],
        incident_edges(graph, node),
        0.0,
    )


def incident_routes(graph: nx.MultiDiGraph, node: Hashable) -> frozenset:
    """Union of the route sets of the edges incident to ``node``."""
    return reduce(
        lambda acc, edge: acc | edge[3]["routes"],
        incident_edges(graph, node),
        frozenset(),
    )


def aggregate_node_attributes(graph: nx.MultiDiGraph) -> None:
    """Overwrite every node's size and routes from its incident edges.

    Each node is computed independently of the others, so iteration
    order has no effect on the result.
    """
    for node, attrs in graph.nodes(data=True):
        attrs["size"] = incident_size(graph, node)
        attrs["routes"] = incident_routes(graph, node)

    logger.debug("Node attributes aggregated", extra={"nodes": graph.number_of_nodes()})
