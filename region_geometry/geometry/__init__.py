"""Geometry engine stages.

- **primitives**: coordinate / ring predicates
- **normalization**: raw GeoJSON → ``Polygon`` / ``MultiPolygon``
- **validation**: structural validation producing a ``ValidationReport``
- **measurements**: bounding box, area, vertex centroid
- **processing**: ``process_geometry`` and zoom-adaptive simplification
- **spatial**: point-in-polygon, distance, bbox intersection, query dispatch
- **transforms**: Web Mercator / British National Grid projection helpers
"""

from __future__ import annotations

from region_geometry.geometry.measurements import (
    compute_area,
    compute_bbox,
    compute_centroid,
    compute_polygon_area,
    compute_polygon_centroid,
)
from region_geometry.geometry.normalization import parse_region_geometry
from region_geometry.geometry.primitives import (
    is_closed_ring,
    is_valid_coordinate,
    is_valid_ring,
    within_envelope,
)
from region_geometry.geometry.processing import (
    optimize_for_zoom,
    perpendicular_distance,
    process_geometry,
    simplify_geometry,
    simplify_polygon,
    simplify_ring,
    zoom_tolerance,
)
from region_geometry.geometry.spatial import (
    SpatialOperation,
    SpatialQuery,
    bounding_boxes_intersect,
    distance_to_geometry,
    execute_spatial_query,
    geometries_intersect,
    haversine_distance,
    point_in_geometry,
    point_in_polygon,
    point_in_ring,
)
from region_geometry.geometry.validation import validate_geometry

__all__ = [
    "SpatialOperation",
    "SpatialQuery",
    "bounding_boxes_intersect",
    "compute_area",
    "compute_bbox",
    "compute_centroid",
    "compute_polygon_area",
    "compute_polygon_centroid",
    "distance_to_geometry",
    "execute_spatial_query",
    "geometries_intersect",
    "haversine_distance",
    "is_closed_ring",
    "is_valid_coordinate",
    "is_valid_ring",
    "optimize_for_zoom",
    "parse_region_geometry",
    "perpendicular_distance",
    "point_in_geometry",
    "point_in_polygon",
    "point_in_ring",
    "process_geometry",
    "simplify_geometry",
    "simplify_polygon",
    "simplify_ring",
    "validate_geometry",
    "within_envelope",
    "zoom_tolerance",
]
