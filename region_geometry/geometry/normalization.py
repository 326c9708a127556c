"""Raw GeoJSON → ``RegionGeometry`` normalisation.

Responsibilities:
- Recognise the two supported shapes (``Polygon``, ``MultiPolygon``)
- Check that ``coordinates`` nesting depth matches the declared type
- Convert raw coordinate arrays to clean ``(lon, lat)`` float tuples,
  dropping altitude if present

Only *structure* is checked here.  Semantic problems (too few points,
unclosed rings, out-of-range values) survive normalisation so that the
validator can report every one of them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from region_geometry.core.exceptions import GeometryStructureError
from region_geometry.geometry.primitives import is_number
from region_geometry.models.geometry import MultiPolygon, Polygon

if TYPE_CHECKING:
    from region_geometry.models.geometry import (
        Coordinate,
        CoordinateRing,
        PolygonCoordinates,
        RegionGeometry,
    )

SUPPORTED_TYPES = ("Polygon", "MultiPolygon")


def parse_region_geometry(raw: object) -> RegionGeometry:
    """Normalise a GeoJSON geometry mapping into a ``Polygon`` or ``MultiPolygon``.

    Already-built geometries are returned unchanged.

    Raises:
        GeometryStructureError: If ``raw`` is not a mapping, declares an
            unsupported ``type``, or has coordinates whose nesting does not
            match that type.
    """
    if isinstance(raw, Polygon | MultiPolygon):
        return raw
    if not isinstance(raw, Mapping):
        msg = f"Geometry must be a mapping, got {type(raw).__name__}"
        raise GeometryStructureError(msg)

    geom_type = raw.get("type")
    if geom_type not in SUPPORTED_TYPES:
        msg = f"Unsupported geometry type {geom_type!r}: expected one of {SUPPORTED_TYPES}"
        raise GeometryStructureError(msg)

    coordinates = raw.get("coordinates")
    if geom_type == "Polygon":
        return Polygon(coordinates=polygon_to_tuples(coordinates))
    if not isinstance(coordinates, list | tuple):
        msg = f"MultiPolygon coordinates must be a list, got {type(coordinates).__name__}"
        raise GeometryStructureError(msg)
    return MultiPolygon(coordinates=tuple(polygon_to_tuples(p) for p in coordinates))


def polygon_to_tuples(raw_polygon: object) -> PolygonCoordinates:
    """Convert a GeoJSON polygon (list of rings) to nested tuples.

    Raises:
        GeometryStructureError: If any level of nesting is malformed.
    """
    if not isinstance(raw_polygon, list | tuple):
        msg = f"Polygon coordinates must be a list of rings, got {type(raw_polygon).__name__}"
        raise GeometryStructureError(msg)
    return tuple(ring_to_tuples(ring) for ring in raw_polygon)


def ring_to_tuples(raw_ring: object) -> CoordinateRing:
    """Convert a GeoJSON ring to a tuple of ``(lon, lat)`` tuples.

    Raises:
        GeometryStructureError: If the ring is not a list of coordinates.
    """
    if not isinstance(raw_ring, list | tuple):
        msg = f"Ring must be a list of coordinates, got {type(raw_ring).__name__}"
        raise GeometryStructureError(msg)
    return tuple(coordinate_to_tuple(c, idx) for idx, c in enumerate(raw_ring))


def coordinate_to_tuple(raw_coord: object, idx: int = 0) -> Coordinate:
    """Convert one GeoJSON position to ``(lon, lat)``; altitude is dropped.

    Raises:
        GeometryStructureError: If the position is malformed.
    """
    if not isinstance(raw_coord, list | tuple):
        msg = (
            f"Malformed coordinate at index {idx}: expected list/tuple, "
            f"got {type(raw_coord).__name__}"
        )
        raise GeometryStructureError(msg)
    if len(raw_coord) < 2:
        msg = (
            f"Malformed coordinate at index {idx}: expected at least 2 elements, "
            f"got {len(raw_coord)}"
        )
        raise GeometryStructureError(msg)
    lon, lat = raw_coord[0], raw_coord[1]
    if not (is_number(lon) and is_number(lat)):
        msg = f"Malformed coordinate at index {idx}: non-numeric value (lon={lon!r}, lat={lat!r})"
        raise GeometryStructureError(msg)
    try:
        return (float(lon), float(lat))
    except (OverflowError, ValueError) as exc:
        msg = f"Malformed coordinate at index {idx}: {exc}"
        raise GeometryStructureError(msg) from exc
