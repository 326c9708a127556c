"""Region Geometry Engine.

Validates, measures, simplifies, and spatially queries administrative
region boundaries supplied as GeoJSON-style Polygon / MultiPolygon
structures.  Everything here is a pure, synchronous library call: storage,
HTTP, and rendering live with the caller.
"""

__version__ = "0.1.0"
