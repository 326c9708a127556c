"""Geometry validation.

Responsibilities:
- Top-level shape check (Polygon / MultiPolygon with matching nesting)
- Per-ring structure checks (vertex count, closure)
- Coordinate bounds checking (WGS 84) and advisory envelope checks
- Hole containment checks using shapely (advisory)
- Metadata derivation for geometries without errors

``validate_geometry`` is total: it never raises on bad input.  Every
problem found is reported in the returned ``ValidationReport``, errors and
warnings alike, so a single call tells the caller everything that is wrong
with a geometry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from region_geometry.core.config import EngineConfig
from region_geometry.core.constants import MIN_RING_COORDINATES
from region_geometry.core.exceptions import GeometryStructureError
from region_geometry.geometry.measurements import (
    compute_bbox,
    compute_polygon_area,
    compute_polygon_centroid,
)
from region_geometry.geometry.normalization import parse_region_geometry
from region_geometry.geometry.primitives import (
    coordinate_count,
    has_consecutive_duplicates,
    is_closed_ring,
    is_valid_latitude,
    is_valid_longitude,
)
from region_geometry.models.geometry import Polygon
from region_geometry.models.results import ValidationMetadata, ValidationReport

if TYPE_CHECKING:
    from region_geometry.models.geometry import (
        BoundingEnvelope,
        CoordinateRing,
        RegionGeometry,
    )

logger = logging.getLogger("region_geometry.geometry.validation")

INVALID_STRUCTURE_MESSAGE = "Invalid GeoJSON structure"
NO_RINGS_MESSAGE = "No coordinate rings found"
SMALL_AREA_MESSAGE = "Very small polygon area may indicate precision issues"


@dataclass(frozen=True, slots=True)
class _Findings:
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    def merge(self, other: _Findings) -> _Findings:
        return _Findings(self.errors + other.errors, self.warnings + other.warnings)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_geometry(raw: object, *, config: EngineConfig | None = None) -> ValidationReport:
    """Validate a raw or built geometry and derive its metadata.

    Args:
        raw: A GeoJSON geometry mapping, or an already-built
            ``Polygon`` / ``MultiPolygon``.
        config: Engine configuration (advisory envelope, thresholds).

    Returns:
        A ``ValidationReport``.  ``is_valid`` is ``False`` iff ``errors``
        is non-empty; ``metadata`` is populated only when there are no
        errors.
    """
    cfg = config or EngineConfig()

    try:
        geometry = parse_region_geometry(raw)
    except GeometryStructureError as exc:
        logger.warning("Geometry rejected | reason=%s", exc.message)
        return ValidationReport(is_valid=False, errors=(INVALID_STRUCTURE_MESSAGE,))

    rings = geometry.rings
    if not rings:
        logger.warning("Geometry rejected | type=%s | reason=no rings", geometry.type)
        return ValidationReport(is_valid=False, errors=(NO_RINGS_MESSAGE,))

    findings = _check_polygons_have_rings(geometry)
    for ring_index, ring in enumerate(rings):
        findings = findings.merge(_check_ring(ring, ring_index, cfg.advisory_envelope))

    metadata: ValidationMetadata | None = None
    if not findings.errors:
        if cfg.check_hole_containment:
            findings = findings.merge(_check_hole_containment(geometry))
        metadata, metadata_findings = _derive_metadata(geometry, cfg)
        findings = findings.merge(metadata_findings)

    report = ValidationReport(
        is_valid=not findings.errors,
        errors=findings.errors,
        warnings=findings.warnings,
        metadata=metadata,
    )
    if not report.is_valid:
        logger.warning(
            "Geometry failed validation | type=%s | errors=%d | first_error=%s",
            geometry.type,
            len(report.errors),
            report.errors[0],
        )
    logger.debug(
        "Geometry validated | type=%s | valid=%s | errors=%d | warnings=%d | rings=%d",
        geometry.type,
        report.is_valid,
        len(report.errors),
        len(report.warnings),
        len(rings),
    )
    return report


# ---------------------------------------------------------------------------
# Structural checks
# ---------------------------------------------------------------------------


def _check_polygons_have_rings(geometry: RegionGeometry) -> _Findings:
    """Every constituent polygon needs at least its exterior ring."""
    errors = tuple(
        f"Polygon {index} has no coordinate rings"
        for index, polygon in enumerate(geometry.polygons)
        if not polygon
    )
    return _Findings(errors=errors)


def _check_ring(
    ring: CoordinateRing, ring_index: int, envelope: BoundingEnvelope | None
) -> _Findings:
    """Check one ring: size, closure, coordinate bounds, duplicates."""
    errors: list[str] = []
    warnings: list[str] = []

    if len(ring) < MIN_RING_COORDINATES:
        errors.append(f"Ring {ring_index} has fewer than {MIN_RING_COORDINATES} coordinates")

    if not is_closed_ring(ring):
        errors.append(f"Ring {ring_index} is not closed")

    envelope_label = (envelope.name or "configured") if envelope is not None else ""
    for coord_index, (lon, lat) in enumerate(ring):
        if not is_valid_longitude(lon):
            errors.append(
                f"Invalid longitude {lon} at ring {ring_index}, coordinate {coord_index}"
            )
        if not is_valid_latitude(lat):
            errors.append(f"Invalid latitude {lat} at ring {ring_index}, coordinate {coord_index}")
        if envelope is not None and not envelope.contains((lon, lat)):
            warnings.append(
                f"Coordinate [{lon}, {lat}] is outside typical {envelope_label} bounds"
            )

    # One warning per ring, however many duplicates it has
    if has_consecutive_duplicates(ring):
        warnings.append(f"Duplicate consecutive coordinates at ring {ring_index}")

    return _Findings(errors=tuple(errors), warnings=tuple(warnings))


def _check_hole_containment(geometry: RegionGeometry) -> _Findings:
    """Warn about holes that are not covered by their polygon's exterior ring.

    Only meaningful for rings that already passed the structural checks.
    Uses shapely ``covers`` so a hole touching its exterior boundary is
    still considered enclosed.
    """
    from shapely.errors import GEOSException
    from shapely.geometry import Polygon as ShapelyPolygon

    warnings: list[str] = []
    for polygon_index, polygon in enumerate(geometry.polygons):
        if len(polygon) < 2:
            continue
        exterior, *holes = polygon
        try:
            exterior_shape = ShapelyPolygon(exterior)
            for hole_index, hole in enumerate(holes, start=1):
                if not exterior_shape.covers(ShapelyPolygon(hole)):
                    warnings.append(
                        f"Hole ring {hole_index} of polygon {polygon_index} "
                        "is not enclosed by its exterior ring"
                    )
        except (GEOSException, ValueError) as exc:
            warnings.append(
                f"Could not verify hole containment for polygon {polygon_index}: {exc}"
            )
    return _Findings(warnings=tuple(warnings))


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


def _derive_metadata(
    geometry: RegionGeometry, cfg: EngineConfig
) -> tuple[ValidationMetadata, _Findings]:
    """Compute bounds, counts, and (for Polygons) area and centroid."""
    rings = geometry.rings
    total_coordinates = coordinate_count(rings)

    area: float | None = None
    centroid = None
    if isinstance(geometry, Polygon):
        area = compute_polygon_area(geometry.coordinates)
        centroid = compute_polygon_centroid(geometry.coordinates)

    warnings: list[str] = []
    if total_coordinates > cfg.max_coordinate_count:
        warnings.append(f"High coordinate count ({total_coordinates}) may impact performance")
    if area is not None and area < cfg.min_area_m2:
        warnings.append(SMALL_AREA_MESSAGE)

    metadata = ValidationMetadata(
        area=area,
        centroid=centroid,
        bounding_box=compute_bbox(geometry),
        coordinate_count=total_coordinates,
        ring_count=len(rings),
    )
    return metadata, _Findings(warnings=tuple(warnings))
