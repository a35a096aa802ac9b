"""Tabular source port - Abstraction for fetching row-oriented datasets.

This protocol defines the contract for the loader that turns a source
location (URL or path) into parsed rows, so that the preparation
service can be exercised with in-memory sources in tests.
"""

from __future__ import annotations

from typing import Any, Dict, Protocol, Sequence


class TabularSourcePort(Protocol):
    """Port for loading tabular data.

    Implementation: adapters/source/csv_source.py

    Rows are dicts keyed by header field, with scalar values already
    type-inferred (None, bool, int, float or str).
    """

    async def load(self, location: str) -> Sequence[Dict[str, Any]]:
        """Fetch and parse a tabular source.

        Args:
            location: URL or filesystem path of the source.

        Returns:
            The parsed rows, in source order.

        Raises:
            SourceUnavailableError: If the source cannot be fetched.
            ParseError: If the content cannot be parsed.
        """
        ...
