"""Spatial predicates and the spatial query dispatcher.

All functions are pure and total for well-formed input.  Geometry given
as a raw mapping that cannot be normalised yields ``False`` rather than
an exception: callers treat such a region as boundary-less.

Limitations:
- ``geometries_intersect`` compares **bounding boxes** of exterior rings
  only.  It over-approximates true polygon intersection and must not be
  used for exact topology.
- Distances to a region are measured to its vertex centroid, not to the
  nearest boundary point.  They are proximity hints for "nearby region"
  suggestions.
"""

from __future__ import annotations

import enum
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from region_geometry.core.constants import EARTH_RADIUS_M
from region_geometry.core.exceptions import GeometryStructureError, SpatialQueryContractError
from region_geometry.geometry.measurements import compute_exterior_bbox, compute_polygon_centroid
from region_geometry.geometry.normalization import parse_region_geometry
from region_geometry.models.results import BoundingBox, SpatialQueryResult

if TYPE_CHECKING:
    from region_geometry.models.geometry import (
        Coordinate,
        CoordinateRing,
        PolygonCoordinates,
        RegionGeometry,
    )

logger = logging.getLogger("region_geometry.geometry.spatial")


# ---------------------------------------------------------------------------
# Query model
# ---------------------------------------------------------------------------


class SpatialOperation(enum.Enum):
    """Operations understood by ``execute_spatial_query``.

    Values:
        CONTAINS:   Target contains ``point``.
        INTERSECTS: Target's bounding box intersects ``geometry``'s.
        WITHIN:     ``point`` is inside both ``geometry`` and the target.
        DISTANCE:   Distance from ``point`` to the target's centroid,
                    optionally matched against a ``buffer`` radius.
    """

    CONTAINS = "contains"
    INTERSECTS = "intersects"
    WITHIN = "within"
    DISTANCE = "distance"


_REQUIRED_ARGUMENTS: dict[SpatialOperation, tuple[str, ...]] = {
    SpatialOperation.CONTAINS: ("point",),
    SpatialOperation.INTERSECTS: ("geometry",),
    SpatialOperation.WITHIN: ("point", "geometry"),
    SpatialOperation.DISTANCE: ("point",),
}


@dataclass(frozen=True, slots=True)
class SpatialQuery:
    """A single spatial query against a target geometry.

    Construction enforces the operation's required arguments, so a query
    that exists is always executable.

    Attributes:
        operation: The operation to run (enum or its string value).
        point: Query point ``(lon, lat)``.
        geometry: Query geometry (built or raw GeoJSON mapping).
        buffer: Radius in metres for ``DISTANCE`` matching.

    Raises:
        SpatialQueryContractError: If a required argument is missing.
        ValueError: If ``operation`` is not a known operation name.
    """

    operation: SpatialOperation
    point: Coordinate | None = None
    geometry: RegionGeometry | Mapping[str, object] | None = None
    buffer: float | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.operation, SpatialOperation):
            object.__setattr__(self, "operation", SpatialOperation(str(self.operation).lower()))
        missing = tuple(
            name for name in _REQUIRED_ARGUMENTS[self.operation] if getattr(self, name) is None
        )
        if missing:
            raise SpatialQueryContractError(self.operation.value, missing)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> SpatialQuery:
        """Build from ``{"operation", "point"?, "geometry"?, "buffer"?}``."""
        point_raw = data.get("point")
        buffer_raw = data.get("buffer")
        return cls(
            operation=data.get("operation", ""),  # type: ignore[arg-type]
            point=tuple(point_raw) if point_raw is not None else None,  # type: ignore[arg-type]
            geometry=data.get("geometry"),  # type: ignore[arg-type]
            buffer=float(buffer_raw) if buffer_raw is not None else None,  # type: ignore[arg-type]
        )


# ---------------------------------------------------------------------------
# Point in polygon
# ---------------------------------------------------------------------------


def point_in_ring(point: Coordinate, ring: CoordinateRing) -> bool:
    """Ray-casting point-in-ring test.

    Uses the half-open edge rule
    ``((yi > y) != (yj > y)) and x < xi + (y − yi)/(yj − yi)·(xj − xi)`` so
    that a ray through a shared vertex is counted exactly once.
    """
    x, y = point
    inside = False
    j = len(ring) - 1
    for i in range(len(ring)):
        xi, yi = ring[i]
        xj, yj = ring[j]
        if (yi > y) != (yj > y) and x < xi + (y - yi) / (yj - yi) * (xj - xi):
            inside = not inside
        j = i
    return inside


def point_in_polygon(point: Coordinate, polygon: PolygonCoordinates) -> bool:
    """Inside the exterior ring and outside every hole."""
    if not polygon:
        return False
    exterior, *holes = polygon
    if not point_in_ring(point, exterior):
        return False
    return not any(point_in_ring(point, hole) for hole in holes)


def point_in_geometry(point: Coordinate, geometry: RegionGeometry | Mapping[str, object]) -> bool:
    """Whether ``point`` lies in the geometry (any polygon of a MultiPolygon)."""
    region_geometry = _coerce_geometry(geometry)
    if region_geometry is None:
        return False
    return any(point_in_polygon(point, polygon) for polygon in region_geometry.polygons)


# ---------------------------------------------------------------------------
# Distance
# ---------------------------------------------------------------------------


def haversine_distance(point1: Coordinate, point2: Coordinate) -> float:
    """Great-circle distance in metres on a sphere of radius 6,371 km."""
    lon1, lat1 = point1
    lon2, lat2 = point2
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # Rounding can push a just outside [0, 1] for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance_to_geometry(
    point: Coordinate, geometry: RegionGeometry | Mapping[str, object]
) -> float | None:
    """Metres from ``point`` to the vertex centroid of the geometry's first polygon.

    Returns ``None`` when the geometry is malformed or has no polygons.
    """
    region_geometry = _coerce_geometry(geometry)
    if region_geometry is None or not region_geometry.polygons:
        return None
    centroid = compute_polygon_centroid(region_geometry.polygons[0])
    return haversine_distance(point, centroid)


# ---------------------------------------------------------------------------
# Intersection (bounding-box only)
# ---------------------------------------------------------------------------


def bounding_boxes_intersect(bbox1: BoundingBox | None, bbox2: BoundingBox | None) -> bool:
    """Whether two boxes overlap; a missing box never intersects."""
    if bbox1 is None or bbox2 is None:
        return False
    return bbox1.intersects(bbox2)


def polygons_intersect(polygon1: PolygonCoordinates, polygon2: PolygonCoordinates) -> bool:
    """Whether the exterior-ring bounding boxes of two polygons intersect."""
    return bounding_boxes_intersect(
        compute_exterior_bbox(polygon1), compute_exterior_bbox(polygon2)
    )


def geometries_intersect(
    geometry1: RegionGeometry | Mapping[str, object],
    geometry2: RegionGeometry | Mapping[str, object],
) -> bool:
    """Bounding-box intersection between any pair of constituent polygons.

    This is a conservative over-approximation of polygon intersection.
    """
    first = _coerce_geometry(geometry1)
    second = _coerce_geometry(geometry2)
    if first is None or second is None:
        return False
    return any(
        polygons_intersect(p1, p2) for p1 in first.polygons for p2 in second.polygons
    )


# ---------------------------------------------------------------------------
# Query dispatcher
# ---------------------------------------------------------------------------


def execute_spatial_query(
    geometry: RegionGeometry | Mapping[str, object], query: SpatialQuery
) -> SpatialQueryResult:
    """Run ``query`` against the target ``geometry``.

    ``WITHIN`` is a conjunction: the point must lie inside both the query
    geometry and the target.  It is not containment of one geometry by
    another.
    """
    target = _coerce_geometry(geometry)
    if target is None:
        return SpatialQueryResult(matches=False)

    operation = query.operation
    if operation is SpatialOperation.CONTAINS:
        return SpatialQueryResult(matches=point_in_geometry(query.point, target))  # type: ignore[arg-type]

    if operation is SpatialOperation.INTERSECTS:
        return SpatialQueryResult(matches=geometries_intersect(target, query.geometry))  # type: ignore[arg-type]

    if operation is SpatialOperation.WITHIN:
        return SpatialQueryResult(
            matches=point_in_geometry(query.point, query.geometry)  # type: ignore[arg-type]
            and point_in_geometry(query.point, target)  # type: ignore[arg-type]
        )

    distance = distance_to_geometry(query.point, target)  # type: ignore[arg-type]
    if distance is None:
        return SpatialQueryResult(matches=False)
    matches = distance <= query.buffer if query.buffer is not None else True
    return SpatialQueryResult(matches=matches, distance=distance)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _coerce_geometry(geometry: object) -> RegionGeometry | None:
    """Normalise ``geometry``; ``None`` if it is missing or malformed."""
    if geometry is None:
        return None
    try:
        return parse_region_geometry(geometry)
    except GeometryStructureError as exc:
        logger.debug("Ignoring malformed geometry in spatial operation | reason=%s", exc.message)
        return None
