"""Data models and schemas.

Defines the data structures used throughout the engine:
- Polygon / MultiPolygon: the ``RegionGeometry`` tagged union
- BoundingEnvelope: named advisory envelope (e.g. the UK)
- ValidationReport, ProcessedGeometry: validator and processor outputs
- Region, RegionRecord: rows supplied by the persistence layer
"""

from region_geometry.models.geometry import (
    UK_ENVELOPE,
    BoundingEnvelope,
    Coordinate,
    CoordinateRing,
    MultiPolygon,
    Polygon,
    PolygonCoordinates,
    RegionGeometry,
)
from region_geometry.models.region import BoundaryData, Region, RegionRecord, RegionRecordValidation
from region_geometry.models.results import (
    BoundingBox,
    GeometryMetadata,
    ProcessedGeometry,
    RegionContainment,
    RegionIntersection,
    SpatialQueryResult,
    ValidationMetadata,
    ValidationReport,
)

__all__ = [
    "UK_ENVELOPE",
    "BoundaryData",
    "BoundingBox",
    "BoundingEnvelope",
    "Coordinate",
    "CoordinateRing",
    "GeometryMetadata",
    "MultiPolygon",
    "Polygon",
    "PolygonCoordinates",
    "ProcessedGeometry",
    "Region",
    "RegionContainment",
    "RegionGeometry",
    "RegionIntersection",
    "RegionRecord",
    "RegionRecordValidation",
    "SpatialQueryResult",
    "ValidationMetadata",
    "ValidationReport",
]
