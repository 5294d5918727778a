# File: tests/test_locks.py

"""Tests for the dimension-change lock coordinator and wall protection analysis."""

import pytest

from shedcore.core.analyzer import WallAnalyzer
from shedcore.core.locks import DimensionLockCoordinator, changed_fields
from shedcore.models import Building, IssueKind, LockType, Severity, WallPosition

from conftest import make_feature, make_skylight


@pytest.fixture
def coordinator():
    return DimensionLockCoordinator()


def _resized(footprint, **changes):
    return footprint.model_copy(update=changes)


class TestAffectedWalls:

    def test_changed_fields(self, footprint):
        assert changed_fields(footprint, _resized(footprint, width=20, height=10)) == ["width", "height"]

    def test_width_affects_front_and_back(self, coordinator, footprint):
        walls = coordinator.affected_walls(footprint, _resized(footprint, width=20))
        assert walls == [WallPosition.FRONT, WallPosition.BACK]

    def test_pitch_affects_no_wall(self, coordinator, footprint):
        assert coordinator.affected_walls(footprint, _resized(footprint, roof_pitch=6)) == []


class TestCheckDimensionChange:

    def test_width_too_narrow_for_door(self, coordinator, building_with_door, footprint):
        result = coordinator.check_dimension_change(building_with_door, _resized(footprint, width=5))
        assert not result.accepted
        assert result.building is None
        restriction = result.restrictions[0]
        assert "front wall" in restriction
        assert "door (front-door)" in restriction
        assert "7ft" in restriction
        assert all(i.kind == IssueKind.DIMENSION_LOCK for i in result.issues)

    def test_width_at_minimum_is_accepted(self, coordinator, building_with_door, footprint):
        result = coordinator.check_dimension_change(building_with_door, _resized(footprint, width=7))
        assert result.accepted
        assert result.building.footprint.width == 7
        assert set(result.protection) == set(WallPosition)

    def test_height_below_door_rejected(self, coordinator, building_with_door, footprint):
        result = coordinator.check_dimension_change(building_with_door, _resized(footprint, height=6))
        assert not result.accepted
        assert any("height" in r and "front" in r for r in result.restrictions)

    def test_length_does_not_touch_front_wall(self, coordinator, building_with_door, footprint):
        result = coordinator.check_dimension_change(building_with_door, _resized(footprint, length=10))
        assert result.accepted

    def test_side_wall_feature_blocks_length(self, coordinator, footprint):
        building = Building(
            footprint=footprint,
            features=[make_feature(wall="left", width=8, feature_id="side")],
        )
        result = coordinator.check_dimension_change(building, _resized(footprint, length=10))
        assert not result.accepted
        assert "left wall" in result.restrictions[0]

    def test_skylight_blocks_width_shrink(self, coordinator, footprint):
        building = Building(footprint=footprint, skylights=[make_skylight(width=10, length=10)])
        result = coordinator.check_dimension_change(building, _resized(footprint, width=20))
        assert not result.accepted
        assert any(r.startswith("Cannot resize roof") for r in result.restrictions)

    def test_every_violation_reported(self, coordinator, footprint):
        building = Building(
            footprint=footprint,
            features=[
                make_feature(feature_id="a"),
                make_feature(feature_id="b", wall="back", alignment="left", x_offset=10),
            ],
        )
        result = coordinator.check_dimension_change(building, _resized(footprint, width=5))
        assert len(result.restrictions) == 2

    def test_no_change_is_accepted(self, coordinator, building_with_door, footprint):
        result = coordinator.check_dimension_change(building_with_door, footprint)
        assert result.accepted
        assert result.building is building_with_door

    def test_check_wall_bounds_lock(self, coordinator, building_with_door, footprint):
        check = coordinator.check_wall_bounds_lock(
            building_with_door, WallPosition.FRONT, _resized(footprint, width=6),
        )
        assert not check.can_modify
        assert len(check.restrictions) == 1


class TestWallProtection:

    def test_single_door(self, building_with_door):
        status = WallAnalyzer().analyze_wall(building_with_door, WallPosition.FRONT)
        assert len(status.protected_segments) == 1

        lock = status.protected_segments[0]
        assert (lock.start_position, lock.end_position) == pytest.approx((13.5, 16.5))
        assert lock.locked_by == ["front-door"]
        assert lock.lock_type == LockType.POSITIONAL
        assert lock.can_modify

        assert status.total_locked_length == pytest.approx(3)
        assert status.available_length == pytest.approx(23)
        assert status.minimum_wall_width == pytest.approx(7)
        assert status.minimum_wall_height == pytest.approx(7)
        assert any("narrower than 7ft" in r for r in status.modification_restrictions)

    def test_empty_wall(self, building_with_door):
        status = WallAnalyzer().analyze_wall(building_with_door, WallPosition.BACK)
        assert status.protected_segments == []
        assert status.available_length == pytest.approx(26)
        assert status.modification_restrictions == []

    def test_tall_opening_locks_dimension(self, footprint):
        building = Building(
            footprint=footprint,
            features=[make_feature(kind="rollupDoor", width=8, height=11.5, feature_id="r")],
        )
        lock = WallAnalyzer().analyze_wall(building, WallPosition.FRONT).protected_segments[0]
        assert lock.lock_type == LockType.DIMENSIONAL

    def test_overlapping_spans_merge_into_full_lock(self, footprint):
        building = Building(
            footprint=footprint,
            features=[
                make_feature(kind="rollupDoor", width=8, height=11.5, feature_id="r"),
                make_feature(kind="window", width=3, height=2, x_offset=5, y_offset=4, feature_id="w"),
            ],
        )
        locks = WallAnalyzer().analyze_wall(building, WallPosition.FRONT).protected_segments
        assert len(locks) == 1
        assert locks[0].locked_by == ["r", "w"]
        assert locks[0].lock_type == LockType.FULL
        assert not locks[0].can_modify

    def test_separate_features_get_separate_locks(self, footprint):
        building = Building(
            footprint=footprint,
            features=[
                make_feature(feature_id="a", x_offset=-8),
                make_feature(feature_id="b", x_offset=8),
            ],
        )
        locks = WallAnalyzer().analyze_wall(building, WallPosition.FRONT).protected_segments
        assert [l.segment_id for l in locks] == ["front-lock-0", "front-lock-1"]

    def test_coordinator_status(self, coordinator, building_with_door):
        status = coordinator.get_wall_protection_status(building_with_door, WallPosition.FRONT)
        assert status.wall_position == WallPosition.FRONT


class TestResizeKeepsFeaturesApart:

    @pytest.fixture
    def mixed_alignment(self, footprint):
        # Center-aligned door and a left-aligned window, well apart at 30ft
        return Building(
            footprint=footprint,
            features=[
                make_feature(feature_id="d"),
                make_feature(kind="window", width=4, height=3, alignment="left",
                             x_offset=2, y_offset=3, feature_id="w"),
            ],
        )

    def test_narrowing_into_neighbour_rejected(self, coordinator, mixed_alignment, footprint):
        result = coordinator.check_dimension_change(mixed_alignment, _resized(footprint, width=10))
        assert not result.accepted
        assert any(
            "door (d)" in r and "window (w)" in r and "overlap" in r
            for r in result.restrictions
        )

    def test_wall_check_names_both_features(self, coordinator, mixed_alignment, footprint):
        check = coordinator.check_wall_bounds_lock(
            mixed_alignment, WallPosition.FRONT, _resized(footprint, width=10),
        )
        assert check.restrictions == [
            "Cannot resize front wall to 10ft: door (d) would overlap window (w)",
        ]

    def test_width_that_keeps_them_apart_accepted(self, coordinator, mixed_alignment, footprint):
        # Door spans 7.5 to 10.5, window 2 to 6
        result = coordinator.check_dimension_change(mixed_alignment, _resized(footprint, width=18))
        assert result.accepted


class TestDimensionWarnings:

    @pytest.fixture
    def stacked_windows(self, footprint):
        return Building(
            footprint=footprint,
            features=[
                make_feature(kind="window", height=4, feature_id="low"),
                make_feature(kind="window", height=4, y_offset=4.5, feature_id="high"),
            ],
        )

    def test_lower_wall_raises_density_warning(self, coordinator, stacked_windows, footprint):
        result = coordinator.check_dimension_change(stacked_windows, _resized(footprint, height=9.5))
        assert result.accepted
        assert any("High feature density" in w for w in result.warnings)
        density = [i for i in result.issues if i.kind == IssueKind.DENSITY]
        assert density and all(i.severity == Severity.WARNING for i in density)

    def test_roomy_wall_has_no_density_warning(self, coordinator, stacked_windows, footprint):
        result = coordinator.check_dimension_change(stacked_windows, _resized(footprint, height=14))
        assert result.accepted
        assert result.warnings == []
