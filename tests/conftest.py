"""
Shared pytest fixtures for transit_graph tests.

Fixtures here are available to all test files: sample CSV documents
written to a temporary directory, configurations pointing at them and
an in-memory tabular source for service-level tests.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from transit_graph.config import AppConfig, DatasetConfig, reset_config

NODES_CSV = """id,name,lat,lng
N1,Alpha,48.8,2.3
N2,Beta,45.7,4.8
"""

EDGES_CSV = """id,source,target,frequency,routes
E1,N1,N2,10,R1
"""


class InMemorySource:
    """Tabular source serving canned rows or errors by location."""

    def __init__(
        self,
        rows: Dict[str, List[Dict[str, Any]]],
        errors: Optional[Dict[str, Exception]] = None,
        delays: Optional[Dict[str, float]] = None,
    ) -> None:
        self.rows = rows
        self.errors = errors or {}
        self.delays = delays or {}
        self.calls: List[str] = []
        self.cancelled: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def load(self, location: str) -> List[Dict[str, Any]]:
        self.calls.append(location)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(location, 0))
        except asyncio.CancelledError:
            self.cancelled.append(location)
            raise
        finally:
            self.in_flight -= 1
        if location in self.errors:
            raise self.errors[location]
        return self.rows[location]


@pytest.fixture(autouse=True)
def fresh_config():
    """Make sure no test sees a configuration cached by another."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo any root logger changes made by setup_logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def csv_files(tmp_path: Path) -> Dict[str, Path]:
    """Write the two-station sample dataset to disk."""
    nodes = tmp_path / "nodes.csv"
    edges = tmp_path / "edges.csv"
    nodes.write_text(NODES_CSV, encoding="utf-8")
    edges.write_text(EDGES_CSV, encoding="utf-8")
    return {"nodes": nodes, "edges": edges}


@pytest.fixture
def app_config(csv_files: Dict[str, Path]) -> AppConfig:
    """Configuration pointing at the sample dataset on disk."""
    return AppConfig(
        dataset=DatasetConfig(
            nodes_path=str(csv_files["nodes"]),
            edges_path=str(csv_files["edges"]),
        )
    )


@pytest.fixture
def memory_config() -> AppConfig:
    """Configuration whose locations are keys of an InMemorySource."""
    return AppConfig(
        dataset=DatasetConfig(nodes_path="mem://nodes", edges_path="mem://edges")
    )


@pytest.fixture
def sample_rows() -> Dict[str, List[Dict[str, Any]]]:
    """Parsed rows of the two-station sample dataset."""
    return {
        "mem://nodes": [
            {"id": "N1", "name": "Alpha", "lat": 48.8, "lng": 2.3},
            {"id": "N2", "name": "Beta", "lat": 45.7, "lng": 4.8},
        ],
        "mem://edges": [
            {"id": "E1", "source": "N1", "target": "N2", "frequency": 10, "routes": "R1"},
        ],
    }
