from .geometry import Point2D, Rect
from .building import (
    Alignment, Building, Feature, FeaturePosition, FeatureType, Footprint,
    RoofPanel, Skylight, WallPosition,
)
from .roof import LinePanel, RoofLine, RoofLineSegment, RoofLineType, SkylightRect
from .framing import BeamLayout, BeamSegment, BeamStats
from .parameters import BeamConfig, RoofLineParams, RuleConfig, ValidationParams
from .validation import (
    AllSkylightsResult, DimensionChangeResult, FeatureHeightResult, Issue, IssueKind,
    LockType, MaxSkylightDimensions, MutationResult, PositionSuggestion,
    RoofLineStatistics, RoofLineValidation, Severity, SkylightBounds, SkylightOverlap,
    SkylightSuggestion, SkylightValidationResult, ValidationResult, WallBoundsProtection,
    WallLockCheck, WallSegmentLock,
)
from .context import ChangeContext, ChangeKind

__all__ = [
    "Point2D", "Rect",
    "Alignment", "Building", "Feature", "FeaturePosition", "FeatureType", "Footprint",
    "RoofPanel", "Skylight", "WallPosition",
    "LinePanel", "RoofLine", "RoofLineSegment", "RoofLineType", "SkylightRect",
    "BeamLayout", "BeamSegment", "BeamStats",
    "BeamConfig", "RoofLineParams", "RuleConfig", "ValidationParams",
    "AllSkylightsResult", "DimensionChangeResult", "FeatureHeightResult", "Issue", "IssueKind",
    "LockType", "MaxSkylightDimensions", "MutationResult", "PositionSuggestion",
    "RoofLineStatistics", "RoofLineValidation", "Severity", "SkylightBounds", "SkylightOverlap",
    "SkylightSuggestion", "SkylightValidationResult", "ValidationResult", "WallBoundsProtection",
    "WallLockCheck", "WallSegmentLock",
    "ChangeContext", "ChangeKind",
]
