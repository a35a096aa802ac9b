"""Tests for the settings layer."""

import pytest
from pydantic import ValidationError

from transit_graph.config import AppConfig, DisplayConfig, get_config, reset_config


def test_defaults_point_at_bundled_dataset():
    config = AppConfig()

    assert config.dataset.nodes_path.endswith("nodes.csv")
    assert config.dataset.edges_path.endswith("edges.csv")
    assert config.dataset.delimiter == ","
    assert config.display.max_node_size > 0
    assert config.projection.kind == "equirectangular"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TG_DATASET_NODES_PATH", "https://example.org/n.csv")
    monkeypatch.setenv("TG_DISPLAY_MAX_EDGE_SIZE", "8")
    monkeypatch.setenv("TG_PROJECTION_KIND", "mercator")
    monkeypatch.setenv("TG_LOG_STRUCTURED", "true")

    config = AppConfig()

    assert config.dataset.nodes_path == "https://example.org/n.csv"
    assert config.display.max_edge_size == 8.0
    assert config.projection.kind == "mercator"
    assert config.observability.structured is True


def test_invalid_values_are_rejected(monkeypatch):
    with pytest.raises(ValidationError):
        DisplayConfig(max_node_size=0)

    monkeypatch.setenv("TG_PROJECTION_KIND", "azimuthal")
    with pytest.raises(ValidationError):
        AppConfig()


def test_get_config_is_cached_until_reset(monkeypatch):
    first = get_config()
    assert get_config() is first

    monkeypatch.setenv("TG_DISPLAY_DEFAULT_NODE_COLOR", "#ff0000")
    reset_config()

    assert get_config() is not first
    assert get_config().display.default_node_color == "#ff0000"
