"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
dataset locations, display constants used by the normalizer, the
projection used for node positions, HTTP client settings and logging.

Configuration can be overridden via environment variables:
- TG_DATASET_NODES_PATH=https://example.org/nodes.csv
- TG_DISPLAY_MAX_NODE_SIZE=20
- TG_PROJECTION_KIND=mercator
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class DatasetConfig(BaseSettings):
    """Dataset source configuration.

    Environment variables prefixed with TG_DATASET_.
    Paths may be filesystem paths or http(s) URLs.
    """

    model_config = SettingsConfigDict(env_prefix="TG_DATASET_")

    nodes_path: str = str(DATA_DIR / "nodes.csv")
    edges_path: str = str(DATA_DIR / "edges.csv")
    delimiter: str = Field(default=",", min_length=1, max_length=1)
    routes_separator: str = Field(default="|", min_length=1)


class DisplayConfig(BaseSettings):
    """Fixed display attributes and normalization targets.

    Environment variables prefixed with TG_DISPLAY_.
    """

    model_config = SettingsConfigDict(env_prefix="TG_DISPLAY_")

    default_node_color: str = "#0088ce"
    default_edge_color: str = "#b9b9b9"
    max_node_size: float = Field(default=15.0, gt=0)
    max_edge_size: float = Field(default=5.0, gt=0)


class ProjectionConfig(BaseSettings):
    """Geographic to planar projection configuration.

    Environment variables prefixed with TG_PROJECTION_.
    """

    model_config = SettingsConfigDict(env_prefix="TG_PROJECTION_")

    kind: Literal["equirectangular", "mercator"] = "equirectangular"


class HttpConfig(BaseSettings):
    """HTTP client configuration for remote sources.

    Environment variables prefixed with TG_HTTP_.
    """

    model_config = SettingsConfigDict(env_prefix="TG_HTTP_")

    timeout_seconds: float = 30.0
    user_agent: str = "transit-graph/0.1"


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with TG_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="TG_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    This is the main entry point for configuration. Sub-configurations
    can be accessed via attributes:

        config = get_config()
        print(config.dataset.nodes_path)
        print(config.display.max_node_size)

    Environment variables prefixed with TG_.
    """

    model_config = SettingsConfigDict(env_prefix="TG_")

    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    projection: ProjectionConfig = Field(default_factory=ProjectionConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
