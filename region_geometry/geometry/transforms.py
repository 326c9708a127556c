"""Coordinate transforms for downstream rendering.

Converts WGS 84 ``(lon, lat)`` to Web Mercator (EPSG:3857) and back, and
projects rings onto the British National Grid (EPSG:27700).  All
projection math is delegated to ``pyproj``; nothing here is used by the
validator, processor, or query engine.

One ``Transformer`` per CRS pair is built lazily and reused.  Transformers
hold no geometry state.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from region_geometry.core.constants import (
    BRITISH_NATIONAL_GRID_CRS,
    WEB_MERCATOR_CRS,
    WGS84_CRS,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pyproj import Transformer

    from region_geometry.models.geometry import Coordinate, CoordinateRing


@lru_cache(maxsize=8)
def get_transformer(source_crs: str, target_crs: str) -> Transformer:
    """Return a shared ``always_xy`` transformer between two CRSs."""
    from pyproj import Transformer

    return Transformer.from_crs(source_crs, target_crs, always_xy=True)


# ---------------------------------------------------------------------------
# Web Mercator (EPSG:3857)
# ---------------------------------------------------------------------------


def lonlat_to_web_mercator(lon: float, lat: float) -> tuple[float, float]:
    """Project a WGS 84 coordinate to Web Mercator metres ``(x, y)``."""
    x, y = get_transformer(WGS84_CRS, WEB_MERCATOR_CRS).transform(lon, lat)
    return (x, y)


def web_mercator_to_lonlat(x: float, y: float) -> Coordinate:
    """Unproject Web Mercator metres back to WGS 84 ``(lon, lat)``."""
    lon, lat = get_transformer(WEB_MERCATOR_CRS, WGS84_CRS).transform(x, y)
    return (lon, lat)


def ring_to_web_mercator(ring: CoordinateRing) -> tuple[tuple[float, float], ...]:
    """Project every coordinate of a ring to Web Mercator."""
    return _transform_ring(ring, WGS84_CRS, WEB_MERCATOR_CRS)


def ring_from_web_mercator(points: Iterable[tuple[float, float]]) -> CoordinateRing:
    """Unproject a sequence of Web Mercator points to a WGS 84 ring."""
    return _transform_ring(points, WEB_MERCATOR_CRS, WGS84_CRS)


# ---------------------------------------------------------------------------
# British National Grid (EPSG:27700)
# ---------------------------------------------------------------------------


def ring_to_british_national_grid(ring: CoordinateRing) -> tuple[tuple[float, float], ...]:
    """Project a WGS 84 ring to British National Grid eastings/northings (metres)."""
    return _transform_ring(ring, WGS84_CRS, BRITISH_NATIONAL_GRID_CRS)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _transform_ring(
    points: Iterable[tuple[float, float]], source_crs: str, target_crs: str
) -> tuple[tuple[float, float], ...]:
    coords = list(points)
    if not coords:
        return ()
    xs, ys = zip(*coords)
    out_xs, out_ys = get_transformer(source_crs, target_crs).transform(xs, ys)
    return tuple(zip(out_xs, out_ys))
