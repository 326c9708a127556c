"""Coordinate and ring primitives.

Pure predicates with no dependencies beyond the constants module.  They
accept arbitrary values (not just well-typed tuples) so the validator can
apply them to raw input.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from region_geometry.core.constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
    MIN_RING_COORDINATES,
)

if TYPE_CHECKING:
    from region_geometry.models.geometry import BoundingEnvelope, Coordinate


def is_number(value: object) -> bool:
    """Real number check that rejects ``bool`` (a subclass of ``int``)."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def is_valid_longitude(lon: float) -> bool:
    return MIN_LONGITUDE <= lon <= MAX_LONGITUDE


def is_valid_latitude(lat: float) -> bool:
    return MIN_LATITUDE <= lat <= MAX_LATITUDE


def is_valid_coordinate(value: object) -> bool:
    """Whether ``value`` is a ``(lon, lat)`` pair inside WGS 84 bounds."""
    if not isinstance(value, Sequence) or isinstance(value, str) or len(value) != 2:
        return False
    lon, lat = value
    if not (is_number(lon) and is_number(lat)):
        return False
    return is_valid_longitude(lon) and is_valid_latitude(lat)


def is_closed_ring(ring: Sequence[Coordinate]) -> bool:
    """Whether the first and last coordinates are exactly equal."""
    if not ring:
        return False
    first, last = ring[0], ring[-1]
    return first[0] == last[0] and first[1] == last[1]


def is_valid_ring(value: object) -> bool:
    """Whether ``value`` is a closed ring of at least four valid coordinates."""
    if not isinstance(value, Sequence) or isinstance(value, str):
        return False
    if len(value) < MIN_RING_COORDINATES:
        return False
    if not all(is_valid_coordinate(c) for c in value):
        return False
    return is_closed_ring(value)


def has_consecutive_duplicates(ring: Sequence[Coordinate]) -> bool:
    """Whether any two neighbouring coordinates are identical."""
    return any(
        ring[i][0] == ring[i + 1][0] and ring[i][1] == ring[i + 1][1]
        for i in range(len(ring) - 1)
    )


def within_envelope(coord: Coordinate, envelope: BoundingEnvelope | None) -> bool:
    """Whether ``coord`` is a valid coordinate inside ``envelope``.

    With no envelope this reduces to the WGS 84 check.
    """
    if not is_valid_coordinate(coord):
        return False
    if envelope is None:
        return True
    return envelope.contains(coord)


def coordinate_count(rings: Sequence[Sequence[Coordinate]]) -> int:
    """Total number of coordinates across ``rings``."""
    return sum(len(ring) for ring in rings)
