"""Wall protection analysis: which stretches of each wall are pinned by features."""

from __future__ import annotations
from datetime import datetime, timezone

from shedcore.core.surfaces import feature_span
from shedcore.core.wall_validation import required_wall_width
from shedcore.models import (
    Building, Feature, LockType, ValidationParams, WallBoundsProtection,
    WallPosition, WallSegmentLock,
)


TOLERANCE = 0.01  # Spans closer than this are merged into one lock


class WallAnalyzer:
    """Builds the protection snapshot for each wall of a building."""

    def __init__(self, params: ValidationParams | None = None) -> None:
        self.params = params or ValidationParams()

    def analyze(self, building: Building) -> dict[WallPosition, WallBoundsProtection]:
        """Run the analysis for all four walls."""
        return {wall: self.analyze_wall(building, wall) for wall in WallPosition}

    def analyze_wall(self, building: Building, wall: WallPosition) -> WallBoundsProtection:
        features = building.features_on_wall(wall)
        width = building.wall_width(wall)
        wall_height = building.footprint.height

        locks = self._build_locks(wall, features, width, wall_height)
        locked = sum(lock.end_position - lock.start_position for lock in locks)
        usable = max(0.0, width - 2 * self.params.corner_clearance)

        min_width = 0.0
        min_height = 0.0
        width_blocker: Feature | None = None
        height_blocker: Feature | None = None
        for feature in features:
            needed = required_wall_width(feature, self.params)
            if needed > min_width:
                min_width, width_blocker = needed, feature
            if feature.top > min_height:
                min_height, height_blocker = feature.top, feature

        restrictions: list[str] = []
        if width_blocker is not None:
            restrictions.append(
                f"{wall.value.capitalize()} wall cannot be narrower than {min_width:g}ft "
                f"({width_blocker.label})"
            )
        if height_blocker is not None:
            restrictions.append(
                f"{wall.value.capitalize()} wall cannot be lower than {min_height:g}ft "
                f"({height_blocker.label})"
            )
        for lock in locks:
            if not lock.can_modify:
                restrictions.append(
                    f"Span {lock.start_position:g}-{lock.end_position:g}ft of the "
                    f"{wall.value} wall is fully locked"
                )

        return WallBoundsProtection(
            wall_position=wall,
            protected_segments=locks,
            total_locked_length=locked,
            available_length=max(0.0, usable - locked),
            minimum_wall_width=min_width,
            minimum_wall_height=min_height,
            modification_restrictions=restrictions,
            last_modified=datetime.now(timezone.utc),
        )

    def _build_locks(
        self,
        wall: WallPosition,
        features: list[Feature],
        width: float,
        wall_height: float,
    ) -> list[WallSegmentLock]:
        """Merge overlapping feature spans into one lock per occupied stretch."""
        spans: list[tuple[float, float, Feature]] = []
        for feature in features:
            left, right = feature_span(feature, width)
            spans.append((max(0.0, left), min(width, right), feature))
        spans.sort(key=lambda s: s[0])

        groups: list[tuple[float, float, list[Feature]]] = []
        for left, right, feature in spans:
            if groups and left <= groups[-1][1] + TOLERANCE:
                start, end, members = groups[-1]
                groups[-1] = (start, max(end, right), [*members, feature])
            else:
                groups.append((left, right, [feature]))

        locks: list[WallSegmentLock] = []
        for i, (start, end, members) in enumerate(groups):
            lock_type = self._lock_type(members, wall_height)
            locks.append(WallSegmentLock(
                segment_id=f"{wall.value}-lock-{i}",
                wall_position=wall,
                start_position=start,
                end_position=end,
                locked_by=[f.id for f in members],
                lock_type=lock_type,
                lock_reason="Occupied by " + ", ".join(f.label for f in members),
                can_modify=lock_type != LockType.FULL,
            ))
        return locks

    def _lock_type(self, members: list[Feature], wall_height: float) -> LockType:
        """Features reaching the head zone pin the wall height; the rest pin only position."""
        head_zone = wall_height - self.params.head_clearance
        dimensional = [f for f in members if f.top >= head_zone]
        if not dimensional:
            return LockType.POSITIONAL
        if len(dimensional) == len(members):
            return LockType.DIMENSIONAL
        return LockType.FULL
