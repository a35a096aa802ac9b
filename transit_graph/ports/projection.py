"""Projection port - Abstraction for geographic to planar conversion."""

from __future__ import annotations

from typing import Protocol, Tuple


class ProjectorPort(Protocol):
    """Port for coordinate projection.

    Implementations: graph/projection.py

    A projector must be pure: the same input always yields the same
    output and no state is touched.
    """

    def __call__(self, lat: float, lng: float) -> Tuple[float, float]:
        """Project latitude/longitude in degrees to planar (x, y)."""
        ...
