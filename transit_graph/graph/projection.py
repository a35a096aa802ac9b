"""Geographic to planar coordinate projections.

Both projections keep longitude as the x axis and return y growing
northwards, which is what 2D graph renderers expect.
"""

import math
from typing import Callable, Dict, Tuple

from ..domain.errors import ConfigurationError

# Web Mercator is undefined at the poles; clamp to its square extent
MERCATOR_MAX_LAT = 85.05112878

Projector = Callable[[float, float], Tuple[float, float]]


def equirectangular(lat: float, lng: float) -> Tuple[float, float]:
    """Plate carrée projection: ``x = lng``, ``y = lat``."""
    return float(lng), float(lat)


def mercator(lat: float, lng: float) -> Tuple[float, float]:
    """Spherical Mercator projection expressed in degree-like units.

    Parameters
    ----------
    lat:
        Latitude in degrees. Values beyond ``MERCATOR_MAX_LAT`` are
        clamped so that the function is defined on ``[-90, 90]``.
    lng:
        Longitude in degrees.

    Returns
    -------
    float, float
        ``(x, y)`` where ``x == lng`` and ``y`` is the Mercator
        ordinate scaled back to degrees.
    """
    clamped = max(-MERCATOR_MAX_LAT, min(MERCATOR_MAX_LAT, float(lat)))
    phi = math.radians(clamped)
    y = math.degrees(math.log(math.tan(math.pi / 4 + phi / 2)))
    return float(lng), y


PROJECTIONS: Dict[str, Projector] = {
    "equirectangular": equirectangular,
    "mercator": mercator,
}


def get_projector(kind: str) -> Projector:
    """Look up a projection by name.

    Raises:
        ConfigurationError: If the projection is unknown.
    """
    try:
        return PROJECTIONS[kind]
    except KeyError:
        raise ConfigurationError(
            f"Unknown projection: {kind!r}",
            setting_name="projection.kind",
            expected_type=" | ".join(sorted(PROJECTIONS)),
        ) from None
