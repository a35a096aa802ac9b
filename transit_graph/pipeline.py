"""High-level pipeline orchestration for the transit graph.

The pipeline is organized in several stages:

1. Source acquisition (two CSV documents, fetched concurrently).
2. Graph construction (nodes first, then edges).
3. Attribute aggregation (node size and routes from incident edges).
4. Normalization (sizes rescaled against dataset maxima).

This module wires these stages together behind a load controller and
exposes them on the command line. Each step delegates work to
dedicated, testable modules.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import AppConfig, get_config
from .container import Container
from .domain.models import DataState, ErrorState, ReadyState
from .graph.dataset import Dataset
from .logging_config import setup_logging
from .services import DataLoadController, DatasetPreparationService, describe_state

logger = logging.getLogger(__name__)


async def load_state(config: Optional[AppConfig] = None) -> DataState:
    """Run a fresh load controller to its terminal state."""
    container = Container.create_default(config)
    controller: DataLoadController = container.resolve(DataLoadController)
    return await controller.wait()


def prepare_dataset(config: Optional[AppConfig] = None) -> Dataset:
    """Prepare the configured dataset synchronously.

    Raises:
        TransitGraphError: If any preparation stage fails.
    """
    container = Container.create_default(config)
    service: DatasetPreparationService = container.resolve(DatasetPreparationService)
    return asyncio.run(service.prepare())


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transit-graph",
        description="Build a display-ready transit graph from node and edge CSVs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Use the bundled sample dataset
  python -m transit_graph

  # Remote sources, export the prepared graph
  python -m transit_graph --nodes https://example.org/nodes.csv \\
      --edges https://example.org/edges.csv --export graph.json
""",
    )
    parser.add_argument("--nodes", help="Nodes CSV path or URL")
    parser.add_argument("--edges", help="Edges CSV path or URL")
    parser.add_argument(
        "--projection",
        choices=["equirectangular", "mercator"],
        help="Projection used for node positions",
    )
    parser.add_argument(
        "--export",
        type=Path,
        help="Write the prepared graph as JSON to this file",
    )
    parser.add_argument("--log-level", help="Override the configured log level")
    return parser


def run_pipeline(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point.

    Returns:
        0 when the dataset is ready, 1 when preparation failed.
    """
    args = _build_parser().parse_args(argv)

    config = get_config()
    overrides = {}
    if args.nodes:
        overrides["nodes_path"] = args.nodes
    if args.edges:
        overrides["edges_path"] = args.edges
    if overrides:
        config = config.model_copy(
            update={"dataset": config.dataset.model_copy(update=overrides)}
        )
    if args.projection:
        config = config.model_copy(
            update={
                "projection": config.projection.model_copy(
                    update={"kind": args.projection}
                )
            }
        )

    setup_logging(config.observability, level=args.log_level)

    state = asyncio.run(load_state(config))
    print(describe_state(state))

    if isinstance(state, ErrorState):
        return 1

    if args.export and isinstance(state, ReadyState):
        args.export.write_text(
            json.dumps(state.dataset.to_dict(), indent=2),
            encoding="utf-8",
        )
        print(f"Graph exported to: {args.export}")
    return 0


if __name__ == "__main__":
    sys.exit(run_pipeline())
