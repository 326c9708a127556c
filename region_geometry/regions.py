"""Operations over collections of regions.

Batch entry points fan the pure geometry functions out across regions
keyed by an external integer id.  No element can abort a batch: a region
without geometry, or with geometry that cannot be parsed, yields ``None``
(processing) or a negative row (spatial lookups), and is logged.

Also provides record-level validation for full region rows supplied by the
persistence layer (name, code, type, hierarchy, geometry) and the
``BoundaryData`` helper used by map renderers.

Every lookup is a linear scan over the supplied regions.  There is no
spatial index.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from region_geometry.core.config import EngineConfig
from region_geometry.core.exceptions import GeometryStructureError
from region_geometry.geometry.measurements import compute_bbox
from region_geometry.geometry.normalization import parse_region_geometry
from region_geometry.geometry.processing import check_tolerance, process_geometry
from region_geometry.geometry.spatial import (
    distance_to_geometry,
    geometries_intersect,
    point_in_geometry,
)
from region_geometry.models.geometry import Polygon
from region_geometry.models.region import (
    BoundaryData,
    Region,
    RegionRecord,
    RegionRecordValidation,
)
from region_geometry.models.results import RegionContainment, RegionIntersection

if TYPE_CHECKING:
    from region_geometry.models.geometry import Coordinate, CoordinateRing, RegionGeometry
    from region_geometry.models.results import ProcessedGeometry

logger = logging.getLogger("region_geometry.regions")

NO_GEOMETRY_WITH_DATA_MESSAGE = "Region marked as having data but no geometry provided"


# ---------------------------------------------------------------------------
# Batch processing
# ---------------------------------------------------------------------------


def batch_process_geometries(
    regions: Iterable[Region | Mapping[str, object]],
    *,
    simplify: bool = False,
    tolerance: float | None = None,
    max_workers: int | None = None,
    config: EngineConfig | None = None,
) -> dict[int, ProcessedGeometry | None]:
    """Process every region's geometry.

    Args:
        regions: ``Region`` objects or ``{"id", "geometry"}`` mappings.
        simplify: Passed through to ``process_geometry``.
        tolerance: Simplification tolerance in degrees; defaults to
            ``config.default_tolerance``.
        max_workers: Thread count; defaults to ``config.batch_max_workers``.
            ``1`` processes sequentially.
        config: Engine configuration.

    Returns:
        ``{region_id: ProcessedGeometry | None}`` in input order.  ``None``
        marks a region with no geometry or with geometry that could not be
        parsed.  Invalid-but-parseable geometry gets a ``ProcessedGeometry``
        whose ``validation.is_valid`` is ``False``.

    Raises:
        ProcessingContractError: If ``tolerance`` is negative.  This is
            checked once, before any region is processed.
        TypeError: If a region mapping has no integer ``id``.
    """
    cfg = config or EngineConfig()
    workers = cfg.batch_max_workers if max_workers is None else max_workers
    check_tolerance(cfg.default_tolerance if tolerance is None else tolerance)
    batch = [_coerce_region(r) for r in regions]

    def _process(region: Region) -> ProcessedGeometry | None:
        return _safe_process(region, simplify=simplify, tolerance=tolerance, config=cfg)

    if workers > 1 and len(batch) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            processed = list(executor.map(_process, batch))
    else:
        processed = [_process(region) for region in batch]

    results = {region.region_id: result for region, result in zip(batch, processed)}

    valid = sum(1 for r in processed if r is not None and r.validation.is_valid)
    skipped = sum(1 for r in processed if r is None)
    logger.info(
        "Batch processed | regions=%d | valid=%d | invalid=%d | skipped=%d | workers=%d",
        len(batch),
        valid,
        len(batch) - valid - skipped,
        skipped,
        workers,
    )
    return results


def _safe_process(
    region: Region,
    *,
    simplify: bool,
    tolerance: float | None,
    config: EngineConfig,
) -> ProcessedGeometry | None:
    """Process one region; ``None`` when it has no usable geometry."""
    if region.geometry is None:
        return None
    try:
        return process_geometry(
            region.geometry, simplify=simplify, tolerance=tolerance, config=config
        )
    except GeometryStructureError as exc:
        exc.region_id = region.region_id
        logger.warning(
            "Region geometry skipped | region_id=%d | code=%s | reason=%s",
            region.region_id,
            exc.code,
            exc.message,
        )
        return None


# ---------------------------------------------------------------------------
# Spatial lookups
# ---------------------------------------------------------------------------


def find_regions_containing_point(
    point: Coordinate, regions: Iterable[Region | Mapping[str, object]]
) -> list[RegionContainment]:
    """Test ``point`` against every region.

    Regions that do not contain the point carry the distance (metres) from
    the point to the vertex centroid of their first polygon, a rough hint
    for "nearest region" suggestions.  Regions without geometry report
    ``contained=False`` and no distance.
    """
    rows: list[RegionContainment] = []
    for region in (_coerce_region(r) for r in regions):
        if region.geometry is None:
            rows.append(RegionContainment(region_id=region.region_id, contained=False))
            continue
        if point_in_geometry(point, region.geometry):
            rows.append(RegionContainment(region_id=region.region_id, contained=True))
            continue
        rows.append(
            RegionContainment(
                region_id=region.region_id,
                contained=False,
                distance=distance_to_geometry(point, region.geometry),
            )
        )

    logger.debug(
        "Point lookup | point=%s | regions=%d | containing=%d",
        point,
        len(rows),
        sum(1 for row in rows if row.contained),
    )
    return rows


def find_intersecting_regions(
    target: RegionGeometry | Mapping[str, object],
    regions: Iterable[Region | Mapping[str, object]],
) -> list[RegionIntersection]:
    """Bounding-box intersection of ``target`` against each region.

    Only the exterior ring of each region's first polygon is compared.
    """
    rows: list[RegionIntersection] = []
    for region in (_coerce_region(r) for r in regions):
        first_polygon = _first_polygon(region)
        intersects = first_polygon is not None and geometries_intersect(target, first_polygon)
        rows.append(RegionIntersection(region_id=region.region_id, intersects=intersects))
    return rows


def _first_polygon(region: Region) -> Polygon | None:
    if region.geometry is None:
        return None
    try:
        geometry = parse_region_geometry(region.geometry)
    except GeometryStructureError:
        logger.debug("Region geometry unparseable | region_id=%d", region.region_id)
        return None
    if not geometry.polygons:
        return None
    return Polygon(coordinates=geometry.polygons[0])


# ---------------------------------------------------------------------------
# Record validation
# ---------------------------------------------------------------------------


def validate_region_record(
    record: RegionRecord | Mapping[str, object], *, config: EngineConfig | None = None
) -> RegionRecordValidation:
    """Validate a full region row before it is stored or served.

    Blocking issues: empty name or code, a type outside
    ``config.region_types``, and geometry that fails validation or cannot
    be parsed.  Geometry warnings, a data-bearing region without geometry, and
    hierarchy problems (a root-type region with a parent, or a non-root
    region without one) are reported as issues but do not invalidate the
    record.
    """
    cfg = config or EngineConfig()
    row = record if isinstance(record, RegionRecord) else RegionRecord.from_dict(record)

    issues: list[str] = []
    is_valid = True

    if not row.name.strip():
        issues.append("Region name is empty")
        is_valid = False
    if not row.code.strip():
        issues.append("Region code is empty")
        is_valid = False
    if row.type not in cfg.region_types:
        issues.append(f"Invalid region type: {row.type}")
        is_valid = False

    processed: ProcessedGeometry | None = None
    if row.geometry is not None:
        try:
            processed = process_geometry(row.geometry, config=cfg)
        except GeometryStructureError as exc:
            issues.append(f"Geometry processing failed: {exc.message}")
            is_valid = False
        else:
            if not processed.validation.is_valid:
                is_valid = False
            issues.extend(processed.validation.errors)
            issues.extend(processed.validation.warnings)
    elif row.has_data:
        issues.append(NO_GEOMETRY_WITH_DATA_MESSAGE)

    if row.type == cfg.root_region_type:
        if row.parent_id is not None:
            issues.append(f"{cfg.root_region_type} region should not have a parent")
    elif row.parent_id is None:
        issues.append(f"Non-{cfg.root_region_type} region should have a parent")

    if not is_valid:
        logger.warning(
            "Region record invalid | region_id=%d | issues=%d | first_issue=%s",
            row.region_id,
            len(issues),
            issues[0],
        )
    return RegionRecordValidation(
        is_valid=is_valid, issues=tuple(issues), processed_geometry=processed
    )


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def create_boundary_data(
    geometry: RegionGeometry | Mapping[str, object] | None,
) -> BoundaryData:
    """Pair a geometry with its bounds for a map renderer.

    Missing or unparseable geometry yields ``BoundaryData(None, None)`` so
    the renderer treats the region as boundary-less.
    """
    if geometry is None:
        return BoundaryData(geometry=None)
    try:
        region_geometry = parse_region_geometry(geometry)
    except GeometryStructureError as exc:
        logger.warning("Boundary data dropped | reason=%s", exc.message)
        return BoundaryData(geometry=None)
    return BoundaryData(geometry=region_geometry, bounds=compute_bbox(region_geometry))


def extract_rings(geometry: RegionGeometry | Mapping[str, object]) -> list[CoordinateRing]:
    """All rings of a geometry, exterior first, flattened across polygons.

    Raises:
        GeometryStructureError: If a mapping cannot be parsed.
    """
    return list(parse_region_geometry(geometry).rings)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _coerce_region(region: Region | Mapping[str, object]) -> Region:
    if isinstance(region, Region):
        return region
    return Region.from_dict(region)
