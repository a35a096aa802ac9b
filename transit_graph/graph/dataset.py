"""Read-only view of a prepared transit graph.

A Dataset is only created once the graph has been built, aggregated
and normalized. It keeps a private frozen copy of that graph, and all
accessors return immutable GraphNode / GraphEdge snapshots.
"""

from __future__ import annotations

from dataclasses import InitVar, dataclass, field
from typing import Any, Dict, Hashable, Iterator, List, Optional, Set, Tuple

import networkx as nx

from ..domain.models import GraphEdge, GraphNode
from .aggregate import incident_edges


def _node_view(attrs: Dict[str, Any]) -> GraphNode:
    return GraphNode(
        id=attrs["id"],
        label=attrs["label"],
        x=attrs["x"],
        y=attrs["y"],
        size=attrs["size"],
        color=attrs["color"],
        routes=attrs["routes"],
    )


def _edge_view(source: Hashable, target: Hashable, attrs: Dict[str, Any]) -> GraphEdge:
    return GraphEdge(
        id=attrs["id"],
        source=str(source),
        target=str(target),
        size=attrs["size"],
        color=attrs["color"],
        routes=attrs["routes"],
    )


@dataclass
class Dataset:
    """A fully prepared, immutable transit graph.

    The graph passed in is copied and frozen; later changes to it are
    not seen. Attributes are only reachable through the GraphNode and
    GraphEdge snapshots.

    Args:
        graph: A built, aggregated and normalized MultiDiGraph
    """

    graph: InitVar[nx.MultiDiGraph]
    _graph: nx.MultiDiGraph = field(init=False, repr=False)
    _edge_index: Dict[str, Tuple[Hashable, Hashable]] = field(
        init=False, repr=False
    )

    def __post_init__(self, graph: nx.MultiDiGraph) -> None:
        # copy() gives the dataset its own attribute dicts
        self._graph = nx.freeze(graph.copy())
        self._edge_index = {
            str(key): (source, target)
            for source, target, key in self._graph.edges(keys=True)
        }

    @property
    def number_of_nodes(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def number_of_edges(self) -> int:
        return self._graph.number_of_edges()

    def nodes(self) -> Iterator[GraphNode]:
        """Iterate over all nodes in insertion order."""
        for _, attrs in self._graph.nodes(data=True):
            yield _node_view(attrs)

    def edges(self) -> Iterator[GraphEdge]:
        """Iterate over all edges."""
        for source, target, attrs in self._graph.edges(data=True):
            yield _edge_view(source, target, attrs)

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        """Get a node by id, or None if absent."""
        if node_id not in self._graph:
            return None
        return _node_view(self._graph.nodes[node_id])

    def get_edge(self, edge_id: str) -> Optional[GraphEdge]:
        """Get an edge by id, or None if absent."""
        endpoints = self._edge_index.get(edge_id)
        if endpoints is None:
            return None
        source, target = endpoints
        return _edge_view(source, target, self._graph.edges[source, target, edge_id])

    def incident_edges(self, node_id: str) -> List[GraphEdge]:
        """Edges touching a node, each listed once (self-loops included).

        Raises:
            KeyError: If the node does not exist.
        """
        if node_id not in self._graph:
            raise KeyError(node_id)
        return [
            _edge_view(source, target, attrs)
            for source, target, _, attrs in incident_edges(self._graph, node_id)
        ]

    def neighbors(self, node_id: str) -> Set[str]:
        """Ids of nodes connected to a node in either direction.

        Raises:
            KeyError: If the node does not exist.
        """
        if node_id not in self._graph:
            raise KeyError(node_id)
        successors = set(self._graph.successors(node_id))
        predecessors = set(self._graph.predecessors(node_id))
        return {str(node) for node in successors | predecessors}

    def routes(self) -> Set[str]:
        """All route ids served anywhere in the network."""
        found: Set[str] = set()
        for _, _, routes in self._graph.edges(data="routes"):
            found |= routes
        return found

    def to_dict(self) -> Dict[str, Any]:
        """Export nodes and edges as JSON-serializable dicts.

        Route sets are emitted as sorted lists.
        """
        return {
            "nodes": [
                {
                    "id": node.id,
                    "label": node.label,
                    "x": node.x,
                    "y": node.y,
                    "size": node.size,
                    "color": node.color,
                    "routes": sorted(node.routes),
                }
                for node in self.nodes()
            ],
            "edges": [
                {
                    "id": edge.id,
                    "source": edge.source,
                    "target": edge.target,
                    "size": edge.size,
                    "color": edge.color,
                    "routes": sorted(edge.routes),
                }
                for edge in self.edges()
            ],
        }
