"""Shared geometry constants.

Centralises the numeric literals used by the validator, processor,
spatial query engine, and coordinate transforms.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# WGS 84 coordinate bounds
# ---------------------------------------------------------------------------

MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0

# Minimum vertices for a valid ring (3 distinct + closing = 4)
MIN_RING_COORDINATES = 4

# ---------------------------------------------------------------------------
# Earth model
# ---------------------------------------------------------------------------

EARTH_RADIUS_M: float = 6_371_000.0
"""Mean Earth radius in metres, used for haversine distance and planar area."""

# ---------------------------------------------------------------------------
# Advisory thresholds (defaults for EngineConfig)
# ---------------------------------------------------------------------------

DEFAULT_MAX_COORDINATE_COUNT = 10_000
DEFAULT_MIN_AREA_M2 = 1_000.0

# ---------------------------------------------------------------------------
# Simplification
# ---------------------------------------------------------------------------

DEFAULT_TOLERANCE_DEG = 0.001
DEFAULT_ZOOM_REFERENCE_LEVEL = 15
DEFAULT_ZOOM_TOLERANCE_STEP_DEG = 0.001
DEFAULT_MIN_ZOOM_TOLERANCE_DEG = 0.0001

# ---------------------------------------------------------------------------
# UK advisory envelope (deployment-specific, see EngineConfig)
# ---------------------------------------------------------------------------

UK_MIN_LONGITUDE = -8.5
UK_MAX_LONGITUDE = 2.0
UK_MIN_LATITUDE = 49.5
UK_MAX_LATITUDE = 61.0

# ---------------------------------------------------------------------------
# Region records
# ---------------------------------------------------------------------------

DEFAULT_REGION_TYPES: tuple[str, ...] = ("UK", "Country", "Crown Dependency", "County Unitary")
DEFAULT_ROOT_REGION_TYPE = "UK"

# ---------------------------------------------------------------------------
# CRS identifiers
# ---------------------------------------------------------------------------

WGS84_CRS = "EPSG:4326"
WEB_MERCATOR_CRS = "EPSG:3857"
BRITISH_NATIONAL_GRID_CRS = "EPSG:27700"
