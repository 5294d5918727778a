"""Dimension-change lock coordinator.

A footprint change is accepted only if every feature on every wall it
affects still validates against the new dimensions, and every skylight
still fits its panel. The change is atomic: one violation rejects it
whole and the building is left untouched.
"""

from __future__ import annotations

from shedcore.core.analyzer import WallAnalyzer
from shedcore.core.skylight_validation import validate_all_skylights
from shedcore.core.surfaces import feature_rect, walls_for_dimension
from shedcore.core.wall_validation import (
    required_wall_width, validate_feature_against_height, validate_feature_bounds,
    validate_stacked_features, validate_wall_heights,
)
from shedcore.models import (
    Building, DimensionChangeResult, Footprint, Issue, IssueKind, Severity,
    ValidationParams, WallBoundsProtection, WallLockCheck, WallPosition,
)
from shedcore.utils.logging_config import get_logger

logger = get_logger(__name__)

FOOTPRINT_FIELDS = ("width", "length", "height", "roof_pitch")


def changed_fields(current: Footprint, proposed: Footprint) -> list[str]:
    return [name for name in FOOTPRINT_FIELDS if getattr(current, name) != getattr(proposed, name)]


class DimensionLockCoordinator:
    """
    Gatekeeper for footprint changes.

    Stateless apart from its parameters: the protection snapshot is
    recomputed from whatever building it is handed.
    """

    def __init__(
        self,
        params: ValidationParams | None = None,
        analyzer: WallAnalyzer | None = None,
    ) -> None:
        self.params = params or ValidationParams()
        self.analyzer = analyzer or WallAnalyzer(self.params)

    def affected_walls(self, current: Footprint, proposed: Footprint) -> list[WallPosition]:
        walls: set[WallPosition] = set()
        for name in changed_fields(current, proposed):
            walls.update(walls_for_dimension(name))
        return [w for w in WallPosition if w in walls]

    def check_wall_bounds_lock(
        self, building: Building, wall: WallPosition, proposed: Footprint,
    ) -> WallLockCheck:
        """Can `wall` take the proposed dimensions with its current features?"""
        restrictions: list[str] = []
        width = proposed.width if wall in (WallPosition.FRONT, WallPosition.BACK) else proposed.length
        features = building.features_on_wall(wall)

        for feature in features:
            bounds = validate_feature_bounds(feature, width, self.params)
            if not bounds.valid:
                needed = required_wall_width(feature, self.params)
                restrictions.append(
                    f"Cannot resize {wall.value} wall to {width:g}ft: {feature.label} "
                    f"requires at least {needed:g}ft"
                )

            height = validate_feature_against_height(feature, proposed.height)
            if not height.valid:
                restrictions.append(
                    f"Cannot set {wall.value} wall height to {proposed.height:g}ft: "
                    f"{feature.label} reaches {feature.top:g}ft"
                )

        # Center-aligned features move with the wall midpoint, edge-aligned ones stay put
        for i, feature in enumerate(features):
            rect = feature_rect(feature, width)
            for other in features[i + 1:]:
                if rect.overlap_area(feature_rect(other, width)) > 0:
                    restrictions.append(
                        f"Cannot resize {wall.value} wall to {width:g}ft: {feature.label} "
                        f"would overlap {other.label}"
                    )

        stacked = validate_stacked_features(features, proposed.height, wall, self.params)
        for error in stacked.errors:
            restrictions.append(f"Cannot change {wall.value} wall: {error}")

        return WallLockCheck(can_modify=not restrictions, restrictions=restrictions)

    def check_dimension_change(self, building: Building, proposed: Footprint) -> DimensionChangeResult:
        """
        Judge a proposed footprint.

        On acceptance the result carries the new building and its
        refreshed protection snapshot; on rejection every restriction
        found, each also as a `dimension_lock_rejection` issue. Density
        and proximity warnings for the new dimensions are reported either way.
        """
        fields = changed_fields(building.footprint, proposed)
        if not fields:
            return DimensionChangeResult(
                accepted=True, building=building, protection=self.refresh(building),
            )

        restrictions: list[str] = []
        issues: list[Issue] = []
        warnings: list[str] = []

        def warn(kind: IssueKind, message: str, subject: str = "") -> None:
            warnings.append(message)
            issues.append(Issue(
                kind=kind, severity=Severity.WARNING, message=message, subject=subject,
            ))

        for wall in self.affected_walls(building.footprint, proposed):
            check = self.check_wall_bounds_lock(building, wall, proposed)
            for restriction in check.restrictions:
                restrictions.append(restriction)
                issues.append(Issue(
                    kind=IssueKind.DIMENSION_LOCK, severity=Severity.ERROR,
                    message=restriction, subject=wall.value,
                ))

        if building.skylights and ("width" in fields or "length" in fields):
            roof = validate_all_skylights(building.skylights, proposed, self.params)
            for error in roof.errors:
                restriction = f"Cannot resize roof: {error}"
                restrictions.append(restriction)
                issues.append(Issue(
                    kind=IssueKind.DIMENSION_LOCK, severity=Severity.ERROR,
                    message=restriction, subject="roof",
                ))
            for issue in roof.issues:
                if issue.severity == Severity.WARNING:
                    warn(issue.kind, issue.message, issue.subject)

        walls = validate_wall_heights(proposed, building.features, self.params)
        for issue in walls.issues:
            if issue.severity == Severity.WARNING:
                warn(issue.kind, issue.message, issue.subject)

        if restrictions:
            logger.warning("Rejected dimension change %s: %d restrictions",
                           ", ".join(fields), len(restrictions))
            return DimensionChangeResult(
                accepted=False, restrictions=restrictions, warnings=warnings, issues=issues,
            )

        updated = building.with_footprint(proposed)
        logger.info("Accepted dimension change %s -> %sx%sx%s",
                    ", ".join(fields), proposed.width, proposed.length, proposed.height)
        return DimensionChangeResult(
            accepted=True, warnings=warnings, issues=issues,
            building=updated, protection=self.refresh(updated),
        )

    def refresh(self, building: Building) -> dict[WallPosition, WallBoundsProtection]:
        return self.analyzer.analyze(building)

    def get_wall_protection_status(self, building: Building, wall: WallPosition) -> WallBoundsProtection:
        return self.analyzer.analyze_wall(building, wall)
