"""CSV tabular source adapter.

This adapter implements TabularSourcePort for comma-separated files
reachable either over HTTP(S) or on the local filesystem:
- Remote sources are downloaded with httpx.AsyncClient
- Local files are read in a worker thread to keep the event loop free
- Fetch failures become SourceUnavailableError
- Malformed content becomes ParseError
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx

from ...config import DatasetConfig, HttpConfig, get_config
from ...domain.errors import SourceUnavailableError
from .csv_parsing import parse_csv


def is_remote(location: str) -> bool:
    """Check whether a location should be fetched over HTTP."""
    return location.lower().startswith(("http://", "https://"))


@dataclass
class CsvTabularSource:
    """Tabular source reading CSV documents from URLs or files.

    Attributes:
        config: Dataset configuration (delimiter)
        http: HTTP client configuration (timeout, user agent)
        transport: Optional httpx transport, mainly for tests
    """

    config: DatasetConfig = field(default_factory=lambda: get_config().dataset)
    http: HttpConfig = field(default_factory=lambda: get_config().http)
    transport: Optional[httpx.AsyncBaseTransport] = field(default=None, repr=False)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def load(self, location: str) -> List[Dict[str, Any]]:
        """Fetch and parse a CSV source.

        Args:
            location: URL or filesystem path of the source.

        Returns:
            The parsed rows, in source order.

        Raises:
            SourceUnavailableError: If the source cannot be fetched.
            ParseError: If the content cannot be parsed.
        """
        self._logger.debug("Loading source", extra={"location": location})

        if is_remote(location):
            text = await self._download(location)
        else:
            text = await self._read_file(location)

        rows = parse_csv(text, delimiter=self.config.delimiter, location=location)
        self._logger.info(
            "Source loaded",
            extra={"location": location, "rows": len(rows)},
        )
        return rows

    async def _download(self, url: str) -> str:
        try:
            async with httpx.AsyncClient(
                timeout=self.http.timeout_seconds,
                transport=self.transport,
            ) as client:
                response = await client.get(
                    url,
                    headers={"User-Agent": self.http.user_agent},
                    follow_redirects=True,
                )
        except httpx.TimeoutException as e:
            raise SourceUnavailableError(
                f"Timed out fetching {url}",
                location=url,
                cause=e,
            )
        except httpx.HTTPError as e:
            raise SourceUnavailableError(
                f"Failed to fetch {url}",
                location=url,
                cause=e,
            )

        if response.status_code >= 400:
            raise SourceUnavailableError(
                f"HTTP {response.status_code} fetching {url}",
                location=url,
            )
        return response.text

    async def _read_file(self, location: str) -> str:
        path = Path(location)
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceUnavailableError(
                f"Failed to read {location}",
                location=location,
                cause=e,
            )
