"""Validation results and the diagnostics they carry."""

from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Any
from pydantic import BaseModel, Field

from .building import Building, WallPosition


class IssueKind(str, Enum):
    BOUNDS = "bounds_violation"
    OVERLAP = "overlap_violation"
    HEIGHT = "height_violation"
    PROXIMITY = "proximity_warning"
    DENSITY = "structural_density_warning"
    DIMENSION_LOCK = "dimension_lock_rejection"
    INVALID_INPUT = "invalid_input"
    TRIM_DEFECT = "trim_defect"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Issue(BaseModel):
    """A single structured diagnostic."""
    kind: IssueKind
    severity: Severity
    message: str
    subject: str = ""               # Feature id, skylight label, wall name, ...
    edge: str | None = None         # Offending edge for bounds problems
    magnitude: float | None = None  # Overhang / overlap / excess, in feet


class ValidationResult(BaseModel):
    """
    Accumulates every problem found by a check.

    `errors` and `warnings` hold the display strings; `issues` holds the
    same diagnostics in structured form.
    """
    valid: bool = True
    errors: list[str] = []
    warnings: list[str] = []
    issues: list[Issue] = []

    def add_error(self, kind: IssueKind, message: str, **detail: Any) -> None:
        self.errors.append(message)
        self.issues.append(Issue(kind=kind, severity=Severity.ERROR, message=message, **detail))
        self.valid = False

    def add_warning(self, kind: IssueKind, message: str, **detail: Any) -> None:
        self.warnings.append(message)
        self.issues.append(Issue(kind=kind, severity=Severity.WARNING, message=message, **detail))

    def merge(self, other: ValidationResult) -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        self.issues.extend(other.issues)
        self.valid = self.valid and other.valid

    def issues_of(self, kind: IssueKind) -> list[Issue]:
        return [i for i in self.issues if i.kind == kind]


class FeatureHeightResult(ValidationResult):
    individual_valid: bool = True  # Feature fits the wall height at all
    position_valid: bool = True    # Feature fits where it is placed


class SkylightBounds(BaseModel):
    """Valid panel-local ranges for skylights, identical for both panels."""
    panel_width: float
    min_x_offset: float
    max_x_offset: float
    min_y_offset: float
    max_y_offset: float
    max_width: float
    max_length: float


class SkylightValidationResult(ValidationResult):
    bounds: SkylightBounds


class AllSkylightsResult(ValidationResult):
    per_skylight_results: list[SkylightValidationResult] = []


class SkylightOverlap(BaseModel):
    overlaps: bool
    overlap_area: float = 0.0


class SkylightSuggestion(BaseModel):
    suggested_x_offset: float
    suggested_y_offset: float
    suggested_width: float
    suggested_length: float
    adjustments: list[str] = []


class PositionSuggestion(BaseModel):
    y_offset: float
    height: float
    adjustments: list[str] = []


class MaxSkylightDimensions(BaseModel):
    max_width: float
    max_length: float


class RoofLineStatistics(BaseModel):
    total_segments: int = 0
    segments_by_type: dict[str, int] = {}
    average_segment_length: float = 0.0
    skylights_covered: int = 0


class RoofLineValidation(ValidationResult):
    statistics: RoofLineStatistics = Field(default_factory=RoofLineStatistics)


class MutationResult(ValidationResult):
    """Outcome of a mutation attempt: the new aggregate, or the reasons it was refused."""
    building: Building | None = None
    subject_id: str | None = None
    suggestion: PositionSuggestion | SkylightSuggestion | None = None


class LockType(str, Enum):
    DIMENSIONAL = "dimensional"
    POSITIONAL = "positional"
    FULL = "full"


class WallSegmentLock(BaseModel):
    """A stretch of wall occupied by one or more features."""
    segment_id: str
    wall_position: WallPosition
    start_position: float  # Feet from the wall's left edge
    end_position: float
    locked_by: list[str]
    lock_type: LockType
    lock_reason: str
    can_modify: bool


class WallBoundsProtection(BaseModel):
    """Snapshot of which parts of a wall are pinned by features."""
    wall_position: WallPosition
    protected_segments: list[WallSegmentLock] = []
    total_locked_length: float = 0.0
    available_length: float = 0.0
    minimum_wall_width: float = 0.0
    minimum_wall_height: float = 0.0
    modification_restrictions: list[str] = []
    last_modified: datetime


class WallLockCheck(BaseModel):
    can_modify: bool
    restrictions: list[str] = []


class DimensionChangeResult(BaseModel):
    accepted: bool
    restrictions: list[str] = []
    warnings: list[str] = []
    issues: list[Issue] = []
    building: Building | None = None
    protection: dict[WallPosition, WallBoundsProtection] = {}
