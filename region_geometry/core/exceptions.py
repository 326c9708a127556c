"""Unified geometry-engine exception taxonomy.

Provides a shared base exception hierarchy for the validator, processor,
and spatial query engine.  Every domain exception inherits from
``GeometryEngineError`` and carries structured context fields so callers
can log or surface failures consistently.

Taxonomy categories
-------------------
- ``ValidationError``: malformed input data (e.g. wrong GeoJSON nesting).
- ``ContractError``: the caller broke an API contract (e.g. a spatial
  query without its required argument).  These are programming errors,
  not data errors.

Data-quality problems found while validating a geometry are **not**
raised: they are returned inside a ``ValidationReport``.  Only structural
parse failures (caught by the validator) and contract violations use
exceptions.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging.
"""

from __future__ import annotations


class GeometryEngineError(Exception):
    """Base exception for all geometry-engine errors.

    Attributes:
        message: Human-readable error description.
        stage: Engine stage where the error occurred
            (e.g. ``"normalization"``, ``"spatial_query"``).
        code: Machine-readable error code (e.g. ``"GEOMETRY_STRUCTURE_INVALID"``).
        region_id: External region identifier, when the failure is tied
            to one region of a batch.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        region_id: int | None = None,
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.region_id = region_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        return "engine"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "region_id": self.region_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(GeometryEngineError):
    """Input data failed structural validation."""


class ContractError(GeometryEngineError):
    """An engine API was called in a way its contract forbids."""


# ---------------------------------------------------------------------------
# Concrete errors
# ---------------------------------------------------------------------------


class GeometryStructureError(ValidationError):
    """Raised when raw input is not a Polygon / MultiPolygon of the right shape."""

    default_stage = "normalization"
    default_code = "GEOMETRY_STRUCTURE_INVALID"


class SpatialQueryContractError(ContractError):
    """Raised when a spatial query lacks the argument its operation requires.

    Attributes:
        operation: The query operation (e.g. ``"contains"``).
        missing: Names of the missing arguments.
    """

    default_stage = "spatial_query"
    default_code = "SPATIAL_QUERY_CONTRACT_VIOLATED"

    def __init__(self, operation: str, missing: tuple[str, ...]) -> None:
        self.operation = operation
        self.missing = missing
        super().__init__(
            f"Spatial query operation '{operation}' requires: {', '.join(missing)}"
        )


class ProcessingContractError(ValueError, ContractError):
    """Raised when the processor is called with out-of-contract options."""

    default_stage = "processing"
    default_code = "PROCESSING_CONTRACT_VIOLATED"

    def __init__(self, message: str) -> None:
        ContractError.__init__(self, message)
