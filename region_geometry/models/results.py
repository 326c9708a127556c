"""Result models returned by the validator, processor, and query engine.

The report-style models (``BoundingBox``, ``ValidationMetadata``,
``ValidationReport``, ``GeometryMetadata``) are frozen Pydantic models:
callers log or ship them as JSON, so they get ``model_dump()`` /
``model_dump_json()`` for free.  Carriers that hold geometry values
(``ProcessedGeometry``, ``SpatialQueryResult``, region match rows) are
frozen dataclasses, matching the geometry model itself.

Units: area in square metres, distance in metres, coordinates and bounds
in WGS 84 degrees.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

from region_geometry.models.geometry import Coordinate, RegionGeometry


class BoundingBox(BaseModel):
    """Axis-aligned bounds of a geometry, in degrees.

    Derived by the processor; callers never construct one from scratch.
    """

    model_config = ConfigDict(frozen=True)

    north: float
    south: float
    east: float
    west: float

    def intersects(self, other: BoundingBox) -> bool:
        """True unless one box lies entirely east/west/north/south of the other."""
        return not (
            self.east < other.west
            or other.east < self.west
            or self.north < other.south
            or other.north < self.south
        )

    def contains(self, coord: Coordinate) -> bool:
        """Whether ``coord`` lies inside or on the box."""
        lon, lat = coord
        return self.west <= lon <= self.east and self.south <= lat <= self.north


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class ValidationMetadata(BaseModel):
    """Metadata derived during validation.

    Populated only when validation found no errors.  ``area`` and
    ``centroid`` are only computed for single Polygons.
    """

    model_config = ConfigDict(frozen=True)

    area: float | None = None
    centroid: Coordinate | None = None
    bounding_box: BoundingBox | None = None
    coordinate_count: int | None = None
    ring_count: int | None = None


class ValidationReport(BaseModel):
    """Outcome of one ``validate_geometry`` call.

    Errors make the geometry unusable (``is_valid`` is ``False``);
    warnings are data-quality notes that never affect validity.
    """

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    metadata: ValidationMetadata | None = None


# ---------------------------------------------------------------------------
# Processing
# ---------------------------------------------------------------------------


class GeometryMetadata(BaseModel):
    """Derived metadata attached to a ``ProcessedGeometry``.

    Zero-valued when the geometry failed validation or metadata was not
    requested.
    """

    model_config = ConfigDict(frozen=True)

    area: float = 0.0
    centroid: Coordinate = (0.0, 0.0)
    coordinate_count: int = 0
    ring_count: int = 0


@dataclass(frozen=True, slots=True)
class ProcessedGeometry:
    """A geometry plus everything the processor derived from it.

    Attributes:
        original: The geometry as supplied.
        simplified: Simplified copy, when simplification was requested and
            the geometry is valid.
        bounding_box: Bounds across all rings; ``None`` for a geometry with
            no coordinates.
        metadata: Area, centroid, and counts.
        validation: The validation report computed as part of processing.
    """

    original: RegionGeometry
    simplified: RegionGeometry | None
    bounding_box: BoundingBox | None
    metadata: GeometryMetadata
    validation: ValidationReport

    def to_dict(self) -> dict[str, object]:
        """Serialise to a JSON-compatible dict."""
        return {
            "original": self.original.to_dict(),
            "simplified": self.simplified.to_dict() if self.simplified is not None else None,
            "bounding_box": (
                self.bounding_box.model_dump() if self.bounding_box is not None else None
            ),
            "metadata": self.metadata.model_dump(),
            "validation": self.validation.model_dump(),
        }


# ---------------------------------------------------------------------------
# Spatial queries
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SpatialQueryResult:
    """Outcome of ``execute_spatial_query``.

    Attributes:
        matches: Whether the target satisfied the query.
        distance: Distance in metres (``Distance`` queries only).
        area: Reserved for area-returning operations; currently unset.
    """

    matches: bool
    distance: float | None = None
    area: float | None = None


@dataclass(frozen=True, slots=True)
class RegionContainment:
    """One row of ``find_regions_containing_point``.

    Attributes:
        region_id: External region identifier.
        contained: Whether the point lies inside the region.
        distance: Metres from the point to the region's vertex centroid
            when not contained; ``None`` when contained or no geometry.
    """

    region_id: int
    contained: bool
    distance: float | None = None

    def to_dict(self) -> dict[str, object]:
        """Serialise to a ``ContainmentPayload`` dict."""
        return {"id": self.region_id, "contained": self.contained, "distance": self.distance}


@dataclass(frozen=True, slots=True)
class RegionIntersection:
    """One row of ``find_intersecting_regions``."""

    region_id: int
    intersects: bool

    def to_dict(self) -> dict[str, object]:
        """Serialise to an ``IntersectionPayload`` dict."""
        return {"id": self.region_id, "intersects": self.intersects}
