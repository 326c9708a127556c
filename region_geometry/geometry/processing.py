"""Geometry processing: metadata derivation and simplification.

Produces a ``ProcessedGeometry`` for a region boundary: its validation
report, bounding box, area, vertex centroid, and optionally a simplified
copy for rendering at lower zoom levels.

Simplification is a single forward sweep per ring, an approximation of
Douglas-Peucker: each interior point is measured against the segment
from the *last kept point* to the *next raw point*, and kept only if its
distance exceeds the tolerance.  The first and last points are always
kept.  Unlike recursive Douglas-Peucker it does not pick the globally
worst point per span, so the kept subset is not optimal, and a ring can
shrink below four points at coarse tolerances.  That is acceptable for
rendering; area- or topology-sensitive callers should use the original
geometry.

Unlike ``validate_geometry``, ``process_geometry`` raises
``GeometryStructureError`` for a mapping that cannot be parsed into a
Polygon / MultiPolygon at all.  Batch callers get ``None`` for such a
region instead (see ``region_geometry.regions``).

Tolerances are in degrees.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import TYPE_CHECKING

from region_geometry.core.config import EngineConfig
from region_geometry.core.exceptions import ProcessingContractError
from region_geometry.geometry.measurements import compute_area, compute_bbox, compute_centroid
from region_geometry.geometry.normalization import parse_region_geometry
from region_geometry.geometry.primitives import coordinate_count
from region_geometry.geometry.validation import validate_geometry
from region_geometry.models.geometry import MultiPolygon, Polygon
from region_geometry.models.results import GeometryMetadata, ProcessedGeometry

if TYPE_CHECKING:
    from region_geometry.models.geometry import (
        Coordinate,
        CoordinateRing,
        PolygonCoordinates,
        RegionGeometry,
    )

logger = logging.getLogger("region_geometry.geometry.processing")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def process_geometry(
    geometry: RegionGeometry | Mapping[str, object],
    *,
    simplify: bool = False,
    tolerance: float | None = None,
    calculate_metadata: bool = True,
    config: EngineConfig | None = None,
) -> ProcessedGeometry:
    """Validate a geometry and derive everything a renderer or query needs.

    Args:
        geometry: A built geometry or a GeoJSON mapping.
        simplify: Produce a simplified copy (only for valid geometries).
        tolerance: Simplification tolerance in degrees; defaults to
            ``config.default_tolerance``.
        calculate_metadata: Compute area, centroid, and counts.  Skipped
            (zero-valued) for geometries with validation errors.
        config: Engine configuration.

    Returns:
        A new ``ProcessedGeometry``; the input is never modified.

    Raises:
        GeometryStructureError: If a mapping cannot be normalised into a
            Polygon / MultiPolygon at all.
        ProcessingContractError: If ``tolerance`` is negative.
    """
    cfg = config or EngineConfig()
    tol = cfg.default_tolerance if tolerance is None else tolerance
    check_tolerance(tol)

    region_geometry = parse_region_geometry(geometry)
    validation = validate_geometry(region_geometry, config=cfg)

    simplified: RegionGeometry | None = None
    if simplify and validation.is_valid:
        simplified = simplify_geometry(region_geometry, tol)
        logger.debug(
            "Geometry simplified | type=%s | tolerance=%g | coordinates=%d -> %d",
            region_geometry.type,
            tol,
            coordinate_count(region_geometry.rings),
            coordinate_count(simplified.rings),
        )

    metadata = GeometryMetadata()
    if calculate_metadata and validation.is_valid:
        metadata = GeometryMetadata(
            area=compute_area(region_geometry),
            centroid=compute_centroid(region_geometry),
            coordinate_count=coordinate_count(region_geometry.rings),
            ring_count=len(region_geometry.rings),
        )

    return ProcessedGeometry(
        original=region_geometry,
        simplified=simplified,
        bounding_box=compute_bbox(region_geometry),
        metadata=metadata,
        validation=validation,
    )


def zoom_tolerance(zoom_level: float, *, config: EngineConfig | None = None) -> float:
    """Simplification tolerance (degrees) for a map zoom level.

    ``max(min_tolerance, (reference_level − zoom) × step)``; with default
    configuration that is ``max(0.0001, (15 − zoom) × 0.001)``, so lower
    (more zoomed-out) levels simplify more aggressively.
    """
    cfg = config or EngineConfig()
    return max(
        cfg.min_zoom_tolerance,
        (cfg.zoom_reference_level - zoom_level) * cfg.zoom_tolerance_step,
    )


def optimize_for_zoom(
    geometry: RegionGeometry, zoom_level: float, *, config: EngineConfig | None = None
) -> RegionGeometry:
    """Return a copy of ``geometry`` simplified for ``zoom_level``."""
    return simplify_geometry(geometry, zoom_tolerance(zoom_level, config=config))


# ---------------------------------------------------------------------------
# Simplification
# ---------------------------------------------------------------------------


def simplify_geometry(geometry: RegionGeometry, tolerance: float) -> RegionGeometry:
    """Simplify every ring of a geometry, preserving its type."""
    check_tolerance(tolerance)
    if isinstance(geometry, MultiPolygon):
        return MultiPolygon(
            coordinates=tuple(simplify_polygon(p, tolerance) for p in geometry.coordinates)
        )
    return Polygon(coordinates=simplify_polygon(geometry.coordinates, tolerance))


def simplify_polygon(polygon: PolygonCoordinates, tolerance: float) -> PolygonCoordinates:
    """Simplify each ring of one polygon independently."""
    return tuple(simplify_ring(ring, tolerance) for ring in polygon)


def simplify_ring(ring: CoordinateRing, tolerance: float) -> CoordinateRing:
    """Single-sweep line simplification of one ring.

    The output never has more points than the input, and always starts
    and ends with the input's first and last points.  Rings of two points
    or fewer are returned unchanged.
    """
    if len(ring) <= 2:
        return tuple(ring)

    kept: list[Coordinate] = [ring[0]]
    for i in range(1, len(ring) - 1):
        if perpendicular_distance(ring[i], kept[-1], ring[i + 1]) > tolerance:
            kept.append(ring[i])
    kept.append(ring[-1])
    return tuple(kept)


def perpendicular_distance(
    point: Coordinate, line_start: Coordinate, line_end: Coordinate
) -> float:
    """Planar distance (degrees) from ``point`` to the segment ``line_start``–``line_end``.

    The projection is clamped to the segment, so points beyond either end
    are measured to the nearer endpoint.  A zero-length segment measures
    to its single point.
    """
    x0, y0 = point
    x1, y1 = line_start
    x2, y2 = line_end

    dx_seg = x2 - x1
    dy_seg = y2 - y1
    length_sq = dx_seg * dx_seg + dy_seg * dy_seg
    if length_sq == 0:
        return math.hypot(x0 - x1, y0 - y1)

    t = ((x0 - x1) * dx_seg + (y0 - y1) * dy_seg) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(x0 - (x1 + t * dx_seg), y0 - (y1 + t * dy_seg))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def check_tolerance(tolerance: float) -> None:
    """Raise ``ProcessingContractError`` for a negative or NaN tolerance."""
    if tolerance < 0 or math.isnan(tolerance):
        msg = f"Simplification tolerance must be >= 0 degrees, got {tolerance}"
        raise ProcessingContractError(msg)
