"""Tests for the geometry, region, and result models."""

from __future__ import annotations

import dataclasses

import pytest

from region_geometry.core.exceptions import GeometryStructureError
from region_geometry.models.geometry import UK_ENVELOPE, BoundingEnvelope, MultiPolygon, Polygon
from region_geometry.models.region import Region, RegionRecord
from region_geometry.models.results import BoundingBox, ValidationReport


class TestPolygonModel:
    def test_type_tag(self) -> None:
        assert Polygon.type == "Polygon"
        assert MultiPolygon.type == "MultiPolygon"

    def test_from_dict_to_dict(self, england: dict[str, object]) -> None:
        polygon = Polygon.from_dict(england)
        assert polygon.to_dict() == england

    def test_from_dict_wrong_type(self, uk_multipolygon: dict[str, object]) -> None:
        with pytest.raises(GeometryStructureError, match="Expected a Polygon"):
            Polygon.from_dict(uk_multipolygon)

    def test_immutable(self, england: dict[str, object]) -> None:
        polygon = Polygon.from_dict(england)
        with pytest.raises(dataclasses.FrozenInstanceError):
            polygon.coordinates = ()  # type: ignore[misc]

    def test_rings_and_polygons(self, square_with_hole: dict[str, object]) -> None:
        polygon = Polygon.from_dict(square_with_hole)
        assert len(polygon.polygons) == 1
        assert len(polygon.rings) == 2


class TestMultiPolygonModel:
    def test_from_dict_to_dict(self, uk_multipolygon: dict[str, object]) -> None:
        multipolygon = MultiPolygon.from_dict(uk_multipolygon)
        assert multipolygon.to_dict() == uk_multipolygon

    def test_from_dict_wrong_type(self, england: dict[str, object]) -> None:
        with pytest.raises(GeometryStructureError, match="Expected a MultiPolygon"):
            MultiPolygon.from_dict(england)

    def test_rings_flattened_in_order(self, uk_multipolygon: dict[str, object]) -> None:
        multipolygon = MultiPolygon.from_dict(uk_multipolygon)
        assert [ring[0] for ring in multipolygon.rings] == [(-2.0, 50.0), (-4.0, 55.0)]


class TestEnvelopeAndBox:
    def test_uk_envelope(self) -> None:
        assert UK_ENVELOPE.contains((-0.5, 52.0))
        assert not UK_ENVELOPE.contains((5.0, 45.0))

    def test_custom_envelope(self) -> None:
        envelope = BoundingEnvelope(min_lon=-1.0, min_lat=-1.0, max_lon=1.0, max_lat=1.0)
        assert envelope.contains((0.0, 0.0))
        assert envelope.name == ""

    def test_envelope_edge_is_inside(self) -> None:
        envelope = BoundingEnvelope(min_lon=-1.0, min_lat=-1.0, max_lon=1.0, max_lat=1.0)
        assert envelope.contains((1.0, -1.0))
        assert not envelope.contains((1.0, 1.000001))

    def test_bbox_contains(self) -> None:
        bbox = BoundingBox(north=55.0, south=50.0, east=1.0, west=-2.0)
        assert bbox.contains((-0.5, 52.0))
        assert bbox.contains((1.0, 55.0))
        assert not bbox.contains((2.0, 52.0))

    def test_bbox_serialises(self) -> None:
        bbox = BoundingBox(north=1.0, south=0.0, east=1.0, west=0.0)
        assert bbox.model_dump() == {"north": 1.0, "south": 0.0, "east": 1.0, "west": 0.0}


class TestValidationReportModel:
    def test_defaults(self) -> None:
        report = ValidationReport(is_valid=True)
        assert report.errors == ()
        assert report.warnings == ()
        assert report.metadata is None

    def test_json_round_trip(self) -> None:
        report = ValidationReport(is_valid=False, errors=("Ring 0 is not closed",))
        assert ValidationReport.model_validate_json(report.model_dump_json()) == report


class TestRegionModels:
    def test_region_from_dict(self, england: dict[str, object]) -> None:
        region = Region.from_dict({"id": 4, "geometry": england})
        assert region.region_id == 4
        assert region.geometry == england

    def test_region_id_alias(self) -> None:
        assert Region.from_dict({"region_id": 9}).region_id == 9

    @pytest.mark.parametrize("data", [{}, {"id": "1"}, {"id": True}, {"id": 1.5}])
    def test_region_bad_id(self, data: dict[str, object]) -> None:
        with pytest.raises(TypeError, match="Region id must be an int"):
            Region.from_dict(data)

    def test_record_from_dict_defaults(self) -> None:
        record = RegionRecord.from_dict({"id": 1})
        assert record.name == ""
        assert record.code == ""
        assert record.type == ""
        assert record.parent_id is None
        assert record.has_data is False
        assert record.geometry is None

    def test_record_from_dict(self) -> None:
        record = RegionRecord.from_dict(
            {"id": 5, "name": "Wales", "code": "W92000004", "type": "Country", "parent_id": 1}
        )
        assert record.name == "Wales"
        assert record.parent_id == 1
