"""Contract drift detection tests.

These tests verify that serialised model keys match the canonical payload
contracts defined in ``region_geometry.models.contracts``.  If a key is
added to or removed from a model's serialised form without updating the
contract TypedDict, these tests fail.
"""

from __future__ import annotations

import unittest
from typing import get_type_hints

from region_geometry.geometry.processing import process_geometry
from region_geometry.models.contracts import (
    BoundingBoxPayload,
    ContainmentPayload,
    GeometryMetadataPayload,
    GeometryPayload,
    IntersectionPayload,
    ProcessedGeometryPayload,
    RegionPayload,
    ValidationMetadataPayload,
    ValidationReportPayload,
)
from region_geometry.models.region import Region
from region_geometry.models.results import RegionContainment, RegionIntersection

ENGLAND = {
    "type": "Polygon",
    "coordinates": [[[-2.0, 50.0], [1.0, 50.0], [1.0, 55.0], [-2.0, 55.0], [-2.0, 50.0]]],
}


def _contract_keys(td: type) -> set[str]:
    """Extract the declared field names from a TypedDict class."""
    return set(get_type_hints(td).keys())


# ---------------------------------------------------------------------------
# Geometry ↔ GeometryPayload
# ---------------------------------------------------------------------------


class TestGeometryContract(unittest.TestCase):
    """Polygon.to_dict() keys must match GeometryPayload contract."""

    def test_keys_match(self) -> None:
        processed = process_geometry(ENGLAND)
        actual = set(processed.original.to_dict().keys())
        expected = _contract_keys(GeometryPayload)
        assert actual == expected, f"Drift detected: {actual.symmetric_difference(expected)}"


class TestRegionContract(unittest.TestCase):
    """Region.from_dict() accepts the RegionPayload shape."""

    def test_payload_accepted(self) -> None:
        payload: RegionPayload = {"id": 1, "geometry": ENGLAND}  # type: ignore[typeddict-item]
        assert set(payload) == _contract_keys(RegionPayload)
        assert Region.from_dict(payload).region_id == 1


# ---------------------------------------------------------------------------
# ProcessedGeometry ↔ ProcessedGeometryPayload
# ---------------------------------------------------------------------------


class TestProcessedGeometryContract(unittest.TestCase):
    """ProcessedGeometry.to_dict() and its nested shapes match their contracts."""

    def setUp(self) -> None:
        self.payload = process_geometry(ENGLAND, simplify=True).to_dict()

    def test_top_level_keys(self) -> None:
        assert set(self.payload) == _contract_keys(ProcessedGeometryPayload)

    def test_bounding_box_keys(self) -> None:
        assert set(self.payload["bounding_box"]) == _contract_keys(BoundingBoxPayload)  # type: ignore[arg-type]

    def test_metadata_keys(self) -> None:
        assert set(self.payload["metadata"]) == _contract_keys(GeometryMetadataPayload)  # type: ignore[arg-type]

    def test_validation_keys(self) -> None:
        validation = self.payload["validation"]
        assert set(validation) == _contract_keys(ValidationReportPayload)  # type: ignore[arg-type]
        metadata = validation["metadata"]  # type: ignore[index]
        assert set(metadata) == _contract_keys(ValidationMetadataPayload)


# ---------------------------------------------------------------------------
# Region lookup rows
# ---------------------------------------------------------------------------


class TestLookupRowContracts(unittest.TestCase):
    def test_containment_keys(self) -> None:
        row = RegionContainment(region_id=1, contained=False, distance=10.0)
        assert set(row.to_dict()) == _contract_keys(ContainmentPayload)

    def test_intersection_keys(self) -> None:
        row = RegionIntersection(region_id=1, intersects=True)
        assert set(row.to_dict()) == _contract_keys(IntersectionPayload)
