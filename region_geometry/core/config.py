"""Engine configuration loaded from environment variables.

All configuration values have defaults matching the behaviour the
surrounding application was built around (UK administrative regions).
Every public engine function accepts an optional ``config``; ``None``
means ``EngineConfig()`` defaults.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from region_geometry.core.constants import (
    DEFAULT_MAX_COORDINATE_COUNT,
    DEFAULT_MIN_AREA_M2,
    DEFAULT_MIN_ZOOM_TOLERANCE_DEG,
    DEFAULT_REGION_TYPES,
    DEFAULT_ROOT_REGION_TYPE,
    DEFAULT_TOLERANCE_DEG,
    DEFAULT_ZOOM_REFERENCE_LEVEL,
    DEFAULT_ZOOM_TOLERANCE_STEP_DEG,
)
from region_geometry.core.exceptions import GeometryEngineError
from region_geometry.models.geometry import UK_ENVELOPE, BoundingEnvelope

_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})
_NONE_STRINGS = frozenset({"", "none", "off", "disabled"})


class ConfigValidationError(GeometryEngineError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Immutable engine configuration.

    Attributes:
        advisory_envelope: Deployment envelope; coordinates outside it
            produce a warning.  ``None`` disables the check.
        max_coordinate_count: Coordinate count above which a performance
            warning is emitted.
        min_area_m2: Area (square metres) below which a precision warning
            is emitted.
        default_tolerance: Simplification tolerance in degrees used when
            the caller does not pass one.
        zoom_reference_level: Zoom level at which zoom-adaptive tolerance
            bottoms out.
        zoom_tolerance_step: Tolerance (degrees) added per zoom level below
            the reference level.
        min_zoom_tolerance: Floor for zoom-adaptive tolerance (degrees).
        check_hole_containment: Warn when a hole is not enclosed by its
            exterior ring.
        batch_max_workers: Default thread count for batch operations
            (``1`` runs sequentially).
        region_types: Accepted region ``type`` values for region records.
        root_region_type: The region type that sits at the top of the
            hierarchy and must not have a parent.
    """

    advisory_envelope: BoundingEnvelope | None = UK_ENVELOPE
    max_coordinate_count: int = DEFAULT_MAX_COORDINATE_COUNT
    min_area_m2: float = DEFAULT_MIN_AREA_M2
    default_tolerance: float = DEFAULT_TOLERANCE_DEG
    zoom_reference_level: int = DEFAULT_ZOOM_REFERENCE_LEVEL
    zoom_tolerance_step: float = DEFAULT_ZOOM_TOLERANCE_STEP_DEG
    min_zoom_tolerance: float = DEFAULT_MIN_ZOOM_TOLERANCE_DEG
    check_hole_containment: bool = True
    batch_max_workers: int = 1
    region_types: tuple[str, ...] = field(default=DEFAULT_REGION_TYPES)
    root_region_type: str = DEFAULT_ROOT_REGION_TYPE

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or cannot
                be parsed (e.g. a malformed envelope).
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``GEOMETRY_MIN_AREA_M2=abc``).
        """
        region_types_raw = os.getenv("GEOMETRY_REGION_TYPES", "")
        region_types = (
            tuple(t.strip() for t in region_types_raw.split(",") if t.strip())
            if region_types_raw
            else DEFAULT_REGION_TYPES
        )
        config = cls(
            advisory_envelope=_parse_envelope(os.getenv("GEOMETRY_ADVISORY_ENVELOPE")),
            max_coordinate_count=int(
                os.getenv("GEOMETRY_MAX_COORDINATE_COUNT", str(DEFAULT_MAX_COORDINATE_COUNT))
            ),
            min_area_m2=float(os.getenv("GEOMETRY_MIN_AREA_M2", str(DEFAULT_MIN_AREA_M2))),
            default_tolerance=float(
                os.getenv("GEOMETRY_DEFAULT_TOLERANCE", str(DEFAULT_TOLERANCE_DEG))
            ),
            zoom_reference_level=int(
                os.getenv("GEOMETRY_ZOOM_REFERENCE_LEVEL", str(DEFAULT_ZOOM_REFERENCE_LEVEL))
            ),
            zoom_tolerance_step=float(
                os.getenv("GEOMETRY_ZOOM_TOLERANCE_STEP", str(DEFAULT_ZOOM_TOLERANCE_STEP_DEG))
            ),
            min_zoom_tolerance=float(
                os.getenv("GEOMETRY_MIN_ZOOM_TOLERANCE", str(DEFAULT_MIN_ZOOM_TOLERANCE_DEG))
            ),
            check_hole_containment=(
                os.getenv("GEOMETRY_CHECK_HOLE_CONTAINMENT", "true").strip().lower()
                not in _FALSE_STRINGS
            ),
            batch_max_workers=int(os.getenv("GEOMETRY_BATCH_MAX_WORKERS", "1")),
            region_types=region_types,
            root_region_type=os.getenv("GEOMETRY_ROOT_REGION_TYPE", DEFAULT_ROOT_REGION_TYPE),
        )
        _validate(config)
        return config


def _parse_envelope(raw: str | None) -> BoundingEnvelope | None:
    """Parse ``min_lon,min_lat,max_lon,max_lat`` (or ``none``) into an envelope."""
    if raw is None:
        return UK_ENVELOPE
    if raw.strip().lower() in _NONE_STRINGS:
        return None
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 4:
        raise ConfigValidationError(
            "GEOMETRY_ADVISORY_ENVELOPE",
            raw,
            "expected 'min_lon,min_lat,max_lon,max_lat' or 'none'",
        )
    try:
        min_lon, min_lat, max_lon, max_lat = (float(p) for p in parts)
    except ValueError as exc:
        raise ConfigValidationError(
            "GEOMETRY_ADVISORY_ENVELOPE", raw, "all four bounds must be numbers"
        ) from exc
    return BoundingEnvelope(
        min_lon=min_lon, min_lat=min_lat, max_lon=max_lon, max_lat=max_lat, name="configured"
    )


def _validate(config: EngineConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    envelope = config.advisory_envelope
    if envelope is not None and (
        envelope.min_lon > envelope.max_lon or envelope.min_lat > envelope.max_lat
    ):
        raise ConfigValidationError(
            "GEOMETRY_ADVISORY_ENVELOPE",
            envelope,
            "min bounds must not exceed max bounds",
        )

    if config.max_coordinate_count <= 0:
        raise ConfigValidationError(
            "GEOMETRY_MAX_COORDINATE_COUNT",
            config.max_coordinate_count,
            "must be > 0",
        )

    if config.min_area_m2 < 0:
        raise ConfigValidationError(
            "GEOMETRY_MIN_AREA_M2",
            config.min_area_m2,
            "must be >= 0 (square metres)",
        )

    if config.default_tolerance < 0:
        raise ConfigValidationError(
            "GEOMETRY_DEFAULT_TOLERANCE",
            config.default_tolerance,
            "must be >= 0 (degrees)",
        )

    if config.zoom_tolerance_step < 0:
        raise ConfigValidationError(
            "GEOMETRY_ZOOM_TOLERANCE_STEP",
            config.zoom_tolerance_step,
            "must be >= 0 (degrees)",
        )

    if config.min_zoom_tolerance < 0:
        raise ConfigValidationError(
            "GEOMETRY_MIN_ZOOM_TOLERANCE",
            config.min_zoom_tolerance,
            "must be >= 0 (degrees)",
        )

    if config.batch_max_workers < 1:
        raise ConfigValidationError(
            "GEOMETRY_BATCH_MAX_WORKERS",
            config.batch_max_workers,
            "must be >= 1",
        )

    if not config.region_types:
        raise ConfigValidationError(
            "GEOMETRY_REGION_TYPES",
            config.region_types,
            "must not be empty",
        )

    if config.root_region_type not in config.region_types:
        raise ConfigValidationError(
            "GEOMETRY_ROOT_REGION_TYPE",
            config.root_region_type,
            f"must be one of {list(config.region_types)}",
        )
