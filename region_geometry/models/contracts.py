"""Canonical wire contracts for data crossing the engine boundary.

The persistence and presentation layers exchange plain JSON dicts with
the engine.  Each shape is defined here as a ``TypedDict`` so that field
names have a single source of truth; the models' ``to_dict()`` methods
produce exactly these shapes.

Design notes:
- Input contracts describe what the engine *accepts*; the validator is
  still the authority on whether a given dict is well formed.
- Output contracts use ``total=True`` so missing keys are flagged.
"""

from __future__ import annotations

from typing import Any, TypedDict

# ---------------------------------------------------------------------------
# Inputs (persistence layer → engine)
# ---------------------------------------------------------------------------


class GeometryPayload(TypedDict):
    """GeoJSON ``Polygon`` or ``MultiPolygon`` geometry object."""

    type: str
    coordinates: list[Any]


class RegionPayload(TypedDict):
    """A region row reduced to what batch operations need."""

    id: int
    geometry: GeometryPayload | None


# ---------------------------------------------------------------------------
# Outputs (engine → caller)
# ---------------------------------------------------------------------------


class BoundingBoxPayload(TypedDict):
    """Serialised ``BoundingBox``."""

    north: float
    south: float
    east: float
    west: float


class ValidationMetadataPayload(TypedDict):
    """Serialised ``ValidationMetadata``."""

    area: float | None
    centroid: tuple[float, float] | None
    bounding_box: BoundingBoxPayload | None
    coordinate_count: int | None
    ring_count: int | None


class ValidationReportPayload(TypedDict):
    """Serialised ``ValidationReport``, as produced by ``ValidationReport.model_dump()``."""

    is_valid: bool
    errors: tuple[str, ...]
    warnings: tuple[str, ...]
    metadata: ValidationMetadataPayload | None


class GeometryMetadataPayload(TypedDict):
    """Serialised ``GeometryMetadata``."""

    area: float
    centroid: tuple[float, float]
    coordinate_count: int
    ring_count: int


class ProcessedGeometryPayload(TypedDict):
    """Serialised ``ProcessedGeometry``, as produced by ``ProcessedGeometry.to_dict()``."""

    original: GeometryPayload
    simplified: GeometryPayload | None
    bounding_box: BoundingBoxPayload | None
    metadata: GeometryMetadataPayload
    validation: ValidationReportPayload


class ContainmentPayload(TypedDict):
    """Serialised ``RegionContainment``: one row of a point lookup."""

    id: int
    contained: bool
    distance: float | None


class IntersectionPayload(TypedDict):
    """Serialised ``RegionIntersection``."""

    id: int
    intersects: bool
