"""Tests for raw GeoJSON normalisation.

Covers:
- Polygon / MultiPolygon recognition and tuple conversion
- Altitude dropping
- Rejection of unsupported types and mismatched nesting depth
- Pass-through of already-built geometries
"""

from __future__ import annotations

import pytest

from region_geometry.core.exceptions import GeometryStructureError
from region_geometry.geometry.normalization import (
    coordinate_to_tuple,
    parse_region_geometry,
)
from region_geometry.models.geometry import MultiPolygon, Polygon


class TestParsePolygon:
    def test_polygon(self, square: dict[str, object]) -> None:
        geometry = parse_region_geometry(square)
        assert isinstance(geometry, Polygon)
        assert geometry.coordinates[0][0] == (0.0, 0.0)
        assert len(geometry.rings) == 1

    def test_ints_converted_to_float(self) -> None:
        geometry = parse_region_geometry(
            {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 0]]]}
        )
        lon, lat = geometry.coordinates[0][1]
        assert isinstance(lon, float)
        assert isinstance(lat, float)

    def test_altitude_dropped(self) -> None:
        geometry = parse_region_geometry(
            {"type": "Polygon", "coordinates": [[[0, 0, 10], [1, 0, 10], [1, 1, 10], [0, 0, 10]]]}
        )
        assert geometry.coordinates[0][0] == (0.0, 0.0)

    def test_hole_kept_as_second_ring(self, square_with_hole: dict[str, object]) -> None:
        geometry = parse_region_geometry(square_with_hole)
        assert len(geometry.rings) == 2
        assert geometry.rings[1][0] == (0.25, 0.25)

    def test_semantic_problems_survive(self, invalid_polygon: dict[str, object]) -> None:
        """Short, unclosed rings are left for the validator to report."""
        geometry = parse_region_geometry(invalid_polygon)
        assert len(geometry.rings[0]) == 2


class TestParseMultiPolygon:
    def test_multipolygon(self, uk_multipolygon: dict[str, object]) -> None:
        geometry = parse_region_geometry(uk_multipolygon)
        assert isinstance(geometry, MultiPolygon)
        assert len(geometry.polygons) == 2
        assert len(geometry.rings) == 2

    def test_empty_multipolygon_is_structurally_valid(self) -> None:
        geometry = parse_region_geometry({"type": "MultiPolygon", "coordinates": []})
        assert geometry.rings == ()


class TestParseRejects:
    """Anything that is not a well-nested Polygon/MultiPolygon raises."""

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            "Polygon",
            [[0, 0], [1, 1]],
            {"type": "Point", "coordinates": [0, 0]},
            {"type": "LineString", "coordinates": [[0, 0], [1, 1]]},
            {"coordinates": [[[0, 0], [1, 0], [1, 1], [0, 0]]]},
            {"type": "Polygon"},
            {"type": "MultiPolygon", "coordinates": None},
        ],
    )
    def test_rejected(self, raw: object) -> None:
        with pytest.raises(GeometryStructureError):
            parse_region_geometry(raw)

    def test_polygon_nested_too_deep(self, square: dict[str, object]) -> None:
        raw = {"type": "Polygon", "coordinates": [square["coordinates"]]}
        with pytest.raises(GeometryStructureError, match="Malformed coordinate"):
            parse_region_geometry(raw)

    def test_multipolygon_nested_too_shallow(self, square: dict[str, object]) -> None:
        raw = {"type": "MultiPolygon", "coordinates": square["coordinates"]}
        with pytest.raises(GeometryStructureError):
            parse_region_geometry(raw)

    def test_non_numeric_coordinate(self) -> None:
        raw = {"type": "Polygon", "coordinates": [[["a", 0], [1, 0], [1, 1], ["a", 0]]]}
        with pytest.raises(GeometryStructureError, match="non-numeric"):
            parse_region_geometry(raw)

    def test_error_carries_stage_and_code(self) -> None:
        with pytest.raises(GeometryStructureError) as exc_info:
            parse_region_geometry({"type": "Point"})
        assert exc_info.value.stage == "normalization"
        assert exc_info.value.code == "GEOMETRY_STRUCTURE_INVALID"


class TestPassThrough:
    def test_built_geometry_returned_unchanged(self) -> None:
        polygon = Polygon(coordinates=(((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 0.0)),))
        assert parse_region_geometry(polygon) is polygon


class TestCoordinateToTuple:
    def test_short_coordinate(self) -> None:
        with pytest.raises(GeometryStructureError, match="at least 2 elements"):
            coordinate_to_tuple([1.0], 3)

    def test_bool_rejected(self) -> None:
        with pytest.raises(GeometryStructureError):
            coordinate_to_tuple([True, False])

    def test_integer_too_large_for_float(self) -> None:
        with pytest.raises(GeometryStructureError, match="index 2"):
            coordinate_to_tuple([10**400, 0], 2)

    def test_overflow_inside_polygon(self) -> None:
        raw = {"type": "Polygon", "coordinates": [[[0, 0], [10**400, 0], [1, 1], [0, 0]]]}
        with pytest.raises(GeometryStructureError):
            parse_region_geometry(raw)
