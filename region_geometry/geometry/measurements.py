"""Derived geometry measurements: bounding box, area, centroid.

Area uses the Shoelace formula after projecting each ring onto an
approximate equirectangular metre grid (``x = R·λ·cos φ``, ``y = R·φ``).
It is accurate enough for region-sized polygons at UK latitudes.  It is
not a geodesic area.

The centroid is a *vertex* centroid: the arithmetic mean of the exterior
ring's distinct vertices.  It is not area-weighted, and for a
MultiPolygon the per-polygon centroids are averaged without weighting
either.  Callers use it as a label anchor and as a rough proximity
target, never as a true centre of mass.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from region_geometry.core.constants import EARTH_RADIUS_M
from region_geometry.models.geometry import MultiPolygon, Polygon
from region_geometry.models.results import BoundingBox

if TYPE_CHECKING:
    from collections.abc import Iterable

    from region_geometry.models.geometry import (
        Coordinate,
        CoordinateRing,
        PolygonCoordinates,
        RegionGeometry,
    )

ORIGIN: Coordinate = (0.0, 0.0)


# ---------------------------------------------------------------------------
# Bounding box
# ---------------------------------------------------------------------------


def compute_rings_bbox(rings: Iterable[CoordinateRing]) -> BoundingBox | None:
    """Bounding box over every coordinate of ``rings``; ``None`` if there are none."""
    lons: list[float] = []
    lats: list[float] = []
    for ring in rings:
        for lon, lat in ring:
            lons.append(lon)
            lats.append(lat)
    if not lons:
        return None
    return BoundingBox(north=max(lats), south=min(lats), east=max(lons), west=min(lons))


def compute_polygon_bbox(polygon: PolygonCoordinates) -> BoundingBox | None:
    """Bounding box across all rings of one polygon."""
    return compute_rings_bbox(polygon)


def compute_exterior_bbox(polygon: PolygonCoordinates) -> BoundingBox | None:
    """Bounding box of a polygon's exterior ring only."""
    if not polygon:
        return None
    return compute_rings_bbox(polygon[:1])


def compute_bbox(geometry: RegionGeometry) -> BoundingBox | None:
    """Bounding box of a geometry (union across a MultiPolygon's polygons)."""
    return compute_rings_bbox(geometry.rings)


# ---------------------------------------------------------------------------
# Area (square metres, equirectangular approximation)
# ---------------------------------------------------------------------------


def _to_metres(coord: Coordinate) -> tuple[float, float]:
    lon, lat = coord
    lat_rad = math.radians(lat)
    lon_rad = math.radians(lon)
    return (EARTH_RADIUS_M * lon_rad * math.cos(lat_rad), EARTH_RADIUS_M * lat_rad)


def compute_ring_signed_area(ring: CoordinateRing) -> float:
    """Signed Shoelace area of one ring in square metres.

    The ring is assumed closed; the closing edge is the one between the
    last and first stored coordinates, which coincide.
    """
    if len(ring) < 3:
        return 0.0
    projected = [_to_metres(c) for c in ring]
    total = 0.0
    for (x1, y1), (x2, y2) in zip(projected, projected[1:]):
        total += x1 * y2 - x2 * y1
    return total / 2


def compute_polygon_area(polygon: PolygonCoordinates) -> float:
    """Area of one polygon in square metres: ``|exterior − Σ holes|``."""
    if not polygon:
        return 0.0
    exterior, *holes = polygon
    area = compute_ring_signed_area(exterior)
    for hole in holes:
        area -= compute_ring_signed_area(hole)
    return abs(area)


def compute_area(geometry: RegionGeometry) -> float:
    """Total area of a geometry in square metres (sum over a MultiPolygon)."""
    return sum(compute_polygon_area(polygon) for polygon in geometry.polygons)


# ---------------------------------------------------------------------------
# Centroid (vertex mean)
# ---------------------------------------------------------------------------


def compute_polygon_centroid(polygon: PolygonCoordinates) -> Coordinate:
    """Mean of the exterior ring's vertices, excluding the closing vertex.

    Returns the origin for an empty polygon or a ring of fewer than two
    coordinates.
    """
    if not polygon:
        return ORIGIN
    vertices = polygon[0][:-1]
    if not vertices:
        return ORIGIN
    count = len(vertices)
    return (
        sum(lon for lon, _ in vertices) / count,
        sum(lat for _, lat in vertices) / count,
    )


def compute_centroid(geometry: RegionGeometry) -> Coordinate:
    """Vertex centroid of a geometry.

    A Polygon uses its exterior ring; a MultiPolygon averages the
    centroids of its constituent polygons.
    """
    if isinstance(geometry, Polygon):
        return compute_polygon_centroid(geometry.coordinates)
    if isinstance(geometry, MultiPolygon) and geometry.coordinates:
        centroids = [compute_polygon_centroid(p) for p in geometry.coordinates]
        count = len(centroids)
        return (
            sum(lon for lon, _ in centroids) / count,
            sum(lat for _, lat in centroids) / count,
        )
    return ORIGIN
