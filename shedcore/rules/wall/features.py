"""Wall feature rules: placement on the wall, corner clearance and opening density."""

from __future__ import annotations

from shedcore.core.wall_validation import (
    validate_feature_bounds, validate_new_feature, validate_wall_heights,
)
from shedcore.models import ChangeContext, ValidationResult
from shedcore.rules.base import ValidationRule, warnings_only


class FeaturePlacementRule(ValidationRule):
    """Feature fits the wall height and does not overlap its neighbours."""

    priority = 10

    def get_id(self) -> str:
        return "feature.placement"

    def get_name(self) -> str:
        return "Feature Placement"

    def applies(self, context: ChangeContext) -> bool:
        return context.is_feature_change and context.subject_feature() is not None

    def check(self, context: ChangeContext) -> ValidationResult:
        feature = context.subject_feature()
        building = context.proposed
        return validate_new_feature(
            feature,
            context.sibling_features(),
            building.footprint.height,
            building.wall_width(feature.wall_position),
        )


class FeatureBoundsRule(ValidationRule):
    """Feature stays clear of the corner zones at both ends of its wall."""

    priority = 20

    def get_id(self) -> str:
        return "feature.bounds"

    def get_name(self) -> str:
        return "Feature Wall Bounds"

    def applies(self, context: ChangeContext) -> bool:
        return context.is_feature_change and context.subject_feature() is not None

    def check(self, context: ChangeContext) -> ValidationResult:
        feature = context.subject_feature()
        width = context.proposed.wall_width(feature.wall_position)
        return validate_feature_bounds(feature, width, context.params)


class WallDensityRule(ValidationRule):
    """
    Structural density warnings for the proposed building.

    Overlap and height errors are already reported by placement, so
    only the stacking and opening ratio warnings are kept.
    """

    priority = 30
    dependencies = ["feature.placement"]

    def get_id(self) -> str:
        return "wall.density"

    def get_name(self) -> str:
        return "Wall Opening Density"

    def applies(self, context: ChangeContext) -> bool:
        return context.is_feature_change

    def check(self, context: ChangeContext) -> ValidationResult:
        building = context.proposed
        full = validate_wall_heights(building.footprint, building.features, context.params)
        return warnings_only(full)
