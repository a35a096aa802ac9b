"""Linear rescaling of node and edge sizes into display ranges."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

import networkx as nx
import numpy as np

from ..config import DisplayConfig, get_config
from ..domain.errors import EmptyGraphNormalizationError

logger = logging.getLogger(__name__)


def max_size(sizes: Iterable[float], collection: str) -> float:
    """Return the largest non-NaN size, refusing unusable maxima.

    NaN sizes are skipped so the result does not depend on order.

    Raises:
        EmptyGraphNormalizationError: If ``sizes`` is empty, or its
            maximum is not positive or not finite.
    """
    values = np.asarray(list(sizes), dtype=float)
    if values.size == 0:
        raise EmptyGraphNormalizationError(
            f"Cannot normalize {collection}: graph has no {collection}",
            collection=collection,
        )
    numbers = values[~np.isnan(values)]
    maximum = float(numbers.max()) if numbers.size else math.nan
    if not math.isfinite(maximum) or maximum <= 0:
        raise EmptyGraphNormalizationError(
            f"Cannot normalize {collection}: maximum size is {maximum}",
            collection=collection,
            maximum=maximum,
        )
    return maximum


def normalize_sizes(
    graph: nx.MultiDiGraph,
    display: Optional[DisplayConfig] = None,
) -> None:
    """Rescale sizes so the largest node and edge hit the display maxima.

    Both maxima are captured before any size is rewritten.

    Args:
        graph: A graph whose node sizes have been aggregated.
        display: Normalization targets.

    Raises:
        EmptyGraphNormalizationError: If there is no usable maximum.
    """
    display = display or get_config().display

    max_node_size = max_size(
        (size for _, size in graph.nodes(data="size")), "nodes"
    )
    max_edge_size = max_size(
        (size for _, _, size in graph.edges(data="size")), "edges"
    )

    for _, attrs in graph.nodes(data=True):
        attrs["size"] = attrs["size"] * display.max_node_size / max_node_size
    for _, _, attrs in graph.edges(data=True):
        attrs["size"] = attrs["size"] * display.max_edge_size / max_edge_size

    logger.debug(
        "Sizes normalized",
        extra={"max_node_size": max_node_size, "max_edge_size": max_edge_size},
    )
