"""Data model for regions supplied by the persistence layer.

The engine never reads storage.  A caller hands it ``Region`` pairs
(integer id + optional geometry) for batch processing and spatial lookups,
or full ``RegionRecord`` rows for record-level validation.

Geometry on these models is kept as supplied: either an already-built
``Polygon`` / ``MultiPolygon`` or the raw GeoJSON mapping read from the
database.  Normalisation happens inside the batch operations so that one
malformed row cannot abort construction of the whole batch.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from region_geometry.models.geometry import RegionGeometry
    from region_geometry.models.results import BoundingBox, ProcessedGeometry


@dataclass(frozen=True, slots=True)
class Region:
    """A region id paired with its (possibly missing) boundary.

    Attributes:
        region_id: External region identifier.
        geometry: Built geometry, raw GeoJSON mapping, or ``None`` when the
            region has no boundary.
    """

    region_id: int
    geometry: RegionGeometry | Mapping[str, object] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Region:
        """Build from a ``{"id": ..., "geometry": ...}`` mapping.

        Raises:
            TypeError: If ``id`` is missing or not an integer.
        """
        region_id = data.get("id", data.get("region_id"))
        if not isinstance(region_id, int) or isinstance(region_id, bool):
            msg = f"Region id must be an int, got {type(region_id).__name__}"
            raise TypeError(msg)
        return cls(region_id=region_id, geometry=data.get("geometry"))  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class RegionRecord:
    """A full region row as stored by the persistence layer.

    Attributes:
        region_id: External region identifier.
        name: Display name (e.g. ``"Cornwall"``).
        code: Short administrative code.
        type: Region type (e.g. ``"Country"``, ``"County Unitary"``).
        parent_id: Parent region id in the hierarchy, if any.
        has_data: Whether survey data exists for this region.
        geometry: Boundary geometry as supplied, or ``None``.
    """

    region_id: int
    name: str = ""
    code: str = ""
    type: str = ""
    parent_id: int | None = None
    has_data: bool = False
    geometry: RegionGeometry | Mapping[str, object] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> RegionRecord:
        """Build from a database row mapping.

        Missing text fields default to ``""`` so that record validation can
        report them instead of failing here.

        Raises:
            TypeError: If ``id`` is missing or not an integer.
        """
        region_id = data.get("id", data.get("region_id"))
        if not isinstance(region_id, int) or isinstance(region_id, bool):
            msg = f"Region id must be an int, got {type(region_id).__name__}"
            raise TypeError(msg)
        parent_raw = data.get("parent_id")
        return cls(
            region_id=region_id,
            name=str(data.get("name") or ""),
            code=str(data.get("code") or ""),
            type=str(data.get("type") or ""),
            parent_id=int(parent_raw) if parent_raw is not None else None,  # type: ignore[arg-type]
            has_data=bool(data.get("has_data", False)),
            geometry=data.get("geometry"),  # type: ignore[arg-type]
        )


@dataclass(frozen=True, slots=True)
class RegionRecordValidation:
    """Outcome of ``validate_region_record``.

    Attributes:
        is_valid: ``False`` if any blocking issue was found.
        issues: Every issue found, blocking or advisory, in check order.
        processed_geometry: Processed boundary, when the record had one
            that could be parsed.
    """

    is_valid: bool
    issues: tuple[str, ...] = field(default_factory=tuple)
    processed_geometry: ProcessedGeometry | None = None


@dataclass(frozen=True, slots=True)
class BoundaryData:
    """A geometry paired with its bounds, as handed to map renderers."""

    geometry: RegionGeometry | None
    bounds: BoundingBox | None = None
