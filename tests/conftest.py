"""Shared pytest fixtures for the region geometry test suite."""

from __future__ import annotations

import pytest

from region_geometry.core.config import EngineConfig

# ---------------------------------------------------------------------------
# Reference rings
# ---------------------------------------------------------------------------

UNIT_SQUARE = [[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0], [0.0, 0.0]]
UNIT_SQUARE_HOLE = [[0.25, 0.25], [0.75, 0.25], [0.75, 0.75], [0.25, 0.75], [0.25, 0.25]]

# Simplified UK boundary: England- and Scotland-shaped boxes
ENGLAND_RING = [[-2.0, 50.0], [1.0, 50.0], [1.0, 55.0], [-2.0, 55.0], [-2.0, 50.0]]
SCOTLAND_RING = [[-4.0, 55.0], [-1.0, 55.0], [-1.0, 59.0], [-4.0, 59.0], [-4.0, 55.0]]

# Two points, unclosed
INVALID_RING = [[-2.0, 50.0], [1.0, 50.0]]


# ---------------------------------------------------------------------------
# Geometry fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def square() -> dict[str, object]:
    """Unit square Polygon at the origin (outside the UK envelope)."""
    return {"type": "Polygon", "coordinates": [UNIT_SQUARE]}


@pytest.fixture()
def square_with_hole() -> dict[str, object]:
    """Unit square Polygon with a centred 0.5 x 0.5 hole."""
    return {"type": "Polygon", "coordinates": [UNIT_SQUARE, UNIT_SQUARE_HOLE]}


@pytest.fixture()
def england() -> dict[str, object]:
    """England-shaped box Polygon inside the UK envelope."""
    return {"type": "Polygon", "coordinates": [ENGLAND_RING]}


@pytest.fixture()
def scotland() -> dict[str, object]:
    """Scotland-shaped box Polygon inside the UK envelope."""
    return {"type": "Polygon", "coordinates": [SCOTLAND_RING]}


@pytest.fixture()
def uk_multipolygon() -> dict[str, object]:
    """England and Scotland boxes as one MultiPolygon."""
    return {"type": "MultiPolygon", "coordinates": [[ENGLAND_RING], [SCOTLAND_RING]]}


@pytest.fixture()
def invalid_polygon() -> dict[str, object]:
    """Polygon whose only ring has two points and is not closed."""
    return {"type": "Polygon", "coordinates": [INVALID_RING]}


# ---------------------------------------------------------------------------
# Configuration fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def global_config() -> EngineConfig:
    """Configuration with the advisory envelope switched off."""
    return EngineConfig(advisory_envelope=None)
