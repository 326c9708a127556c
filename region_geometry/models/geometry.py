"""Data model for region boundary geometry.

A ``RegionGeometry`` is a tagged union of two frozen dataclasses,
``Polygon`` and ``MultiPolygon``.  The two shapes share no behaviour
beyond "is a sequence of polygons", so algorithms branch explicitly on
the concrete type rather than dispatching through a class hierarchy.

All coordinate containers are tuples: once constructed a geometry never
changes, and every processing step returns a new value.

Coordinates are WGS 84 ``(longitude, latitude)`` degrees (EPSG:4326).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, TypeAlias

from region_geometry.core.constants import (
    UK_MAX_LATITUDE,
    UK_MAX_LONGITUDE,
    UK_MIN_LATITUDE,
    UK_MIN_LONGITUDE,
)
from region_geometry.core.exceptions import GeometryStructureError

Coordinate: TypeAlias = tuple[float, float]
CoordinateRing: TypeAlias = tuple[Coordinate, ...]
PolygonCoordinates: TypeAlias = tuple[CoordinateRing, ...]


# ---------------------------------------------------------------------------
# Geometry variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Polygon:
    """A single polygon: exterior ring followed by zero or more holes.

    Attributes:
        coordinates: ``(exterior, *holes)``, each ring a tuple of
            ``(lon, lat)`` tuples.
    """

    type: ClassVar[str] = "Polygon"

    coordinates: PolygonCoordinates = ()

    @property
    def polygons(self) -> tuple[PolygonCoordinates, ...]:
        """The constituent polygons (always exactly one)."""
        return (self.coordinates,)

    @property
    def rings(self) -> tuple[CoordinateRing, ...]:
        """All rings, exterior first."""
        return self.coordinates

    def to_dict(self) -> dict[str, object]:
        """Serialise to a GeoJSON geometry dict."""
        return {
            "type": self.type,
            "coordinates": [[list(c) for c in ring] for ring in self.coordinates],
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> Polygon:
        """Deserialise from a GeoJSON geometry dict.

        Raises:
            GeometryStructureError: If the dict is not a well-formed Polygon.
        """
        from region_geometry.geometry.normalization import parse_region_geometry

        geometry = parse_region_geometry(data)
        if not isinstance(geometry, Polygon):
            msg = f"Expected a Polygon, got {geometry.type}"
            raise GeometryStructureError(msg)
        return geometry


@dataclass(frozen=True, slots=True)
class MultiPolygon:
    """A collection of polygons treated as one region boundary.

    Attributes:
        coordinates: One ``PolygonCoordinates`` per constituent polygon.
    """

    type: ClassVar[str] = "MultiPolygon"

    coordinates: tuple[PolygonCoordinates, ...] = ()

    @property
    def polygons(self) -> tuple[PolygonCoordinates, ...]:
        """The constituent polygons."""
        return self.coordinates

    @property
    def rings(self) -> tuple[CoordinateRing, ...]:
        """All rings of all polygons, flattened in order."""
        return tuple(ring for polygon in self.coordinates for ring in polygon)

    def to_dict(self) -> dict[str, object]:
        """Serialise to a GeoJSON geometry dict."""
        return {
            "type": self.type,
            "coordinates": [
                [[list(c) for c in ring] for ring in polygon] for polygon in self.coordinates
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> MultiPolygon:
        """Deserialise from a GeoJSON geometry dict.

        Raises:
            GeometryStructureError: If the dict is not a well-formed MultiPolygon.
        """
        from region_geometry.geometry.normalization import parse_region_geometry

        geometry = parse_region_geometry(data)
        if not isinstance(geometry, MultiPolygon):
            msg = f"Expected a MultiPolygon, got {geometry.type}"
            raise GeometryStructureError(msg)
        return geometry


RegionGeometry: TypeAlias = Polygon | MultiPolygon


# ---------------------------------------------------------------------------
# Advisory envelope
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BoundingEnvelope:
    """A named lon/lat envelope used for advisory (warning-only) checks.

    Attributes:
        min_lon: Western bound in degrees.
        min_lat: Southern bound in degrees.
        max_lon: Eastern bound in degrees.
        max_lat: Northern bound in degrees.
        name: Label used in warning messages (e.g. ``"UK"``).
    """

    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float
    name: str = ""

    def contains(self, coord: Coordinate) -> bool:
        """Whether ``coord`` lies inside or on the envelope."""
        lon, lat = coord
        return self.min_lon <= lon <= self.max_lon and self.min_lat <= lat <= self.max_lat


UK_ENVELOPE = BoundingEnvelope(
    min_lon=UK_MIN_LONGITUDE,
    min_lat=UK_MIN_LATITUDE,
    max_lon=UK_MAX_LONGITUDE,
    max_lat=UK_MAX_LATITUDE,
    name="UK",
)
