"""Dataset preparation service - Main orchestrator.

This service runs the full preparation pipeline:
1. Download and parse the node and edge sources concurrently
2. Decode rows into typed records
3. Build the multigraph
4. Aggregate node sizes and routes from incident edges
5. Normalize node and edge sizes

Any failure aborts the whole preparation; no partial graph escapes.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..config import AppConfig, get_config
from ..domain.models import EdgeRecord, NodeRecord
from ..graph.aggregate import aggregate_node_attributes
from ..graph.build_graph import build_graph
from ..graph.dataset import Dataset
from ..graph.normalize import normalize_sizes
from ..graph.projection import get_projector
from ..ports.projection import ProjectorPort
from ..ports.source import TabularSourcePort

Rows = Sequence[Dict[str, Any]]


async def gather_all_or_fail(*coros: Any) -> List[Any]:
    """Run coroutines as tasks and return their results in order.

    The first failure is raised as soon as it happens. Tasks still
    running are cancelled and awaited before it propagates.
    """
    tasks = [asyncio.ensure_future(coro) for coro in coros]
    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        failures = [
            task.exception() for task in tasks if task in done and not task.cancelled()
        ]
        for failure in failures:
            if failure is not None:
                raise failure
        return [task.result() for task in tasks]
    finally:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)


@dataclass
class DatasetPreparationService:
    """Turns the configured node and edge sources into a Dataset.

    Attributes:
        source: Loader for the tabular sources
        config: Application configuration (paths, display, projection)
        projector: Optional projector override; defaults to the one
            named by ``config.projection.kind``
    """

    source: TabularSourcePort
    config: AppConfig = field(default_factory=get_config)
    projector: Optional[ProjectorPort] = None

    _projector: ProjectorPort = field(init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self._projector = self.projector or get_projector(
            self.config.projection.kind
        )

    async def prepare(self) -> Dataset:
        """Download both sources and build the prepared dataset.

        Returns:
            The fully built and normalized Dataset.

        Raises:
            SourceUnavailableError: If a source cannot be fetched.
            ParseError: If a row cannot be decoded.
            GraphBuildError: On duplicate ids or dangling references.
            EmptyGraphNormalizationError: If sizes cannot be normalized.
        """
        nodes_path = self.config.dataset.nodes_path
        edges_path = self.config.dataset.edges_path
        self._logger.info(
            "Preparing dataset",
            extra={"nodes_path": nodes_path, "edges_path": edges_path},
        )

        node_rows, edge_rows = await gather_all_or_fail(
            self.source.load(nodes_path),
            self.source.load(edges_path),
        )
        nodes, edges = self.decode(node_rows, edge_rows)
        return self.prepare_from_records(nodes, edges)

    def decode(
        self, node_rows: Rows, edge_rows: Rows
    ) -> Tuple[List[NodeRecord], List[EdgeRecord]]:
        """Decode parsed rows into typed records.

        Raises:
            ParseError: If a row does not have the expected shape.
        """
        dataset = self.config.dataset
        nodes = [
            NodeRecord.from_row(
                row, location=dataset.nodes_path, row_number=index + 1
            )
            for index, row in enumerate(node_rows)
        ]
        edges = [
            EdgeRecord.from_row(
                row,
                location=dataset.edges_path,
                row_number=index + 1,
                routes_separator=dataset.routes_separator,
            )
            for index, row in enumerate(edge_rows)
        ]
        return nodes, edges

    def prepare_from_records(
        self,
        nodes: Sequence[NodeRecord],
        edges: Sequence[EdgeRecord],
    ) -> Dataset:
        """Build, aggregate and normalize synchronously.

        Returns:
            The prepared Dataset; its graph is frozen.
        """
        graph = build_graph(
            nodes,
            edges,
            projector=self._projector,
            display=self.config.display,
        )
        aggregate_node_attributes(graph)
        normalize_sizes(graph, display=self.config.display)

        dataset = Dataset(graph)
        self._logger.info(
            "Dataset prepared",
            extra={
                "nodes": dataset.number_of_nodes,
                "edges": dataset.number_of_edges,
            },
        )
        return dataset
