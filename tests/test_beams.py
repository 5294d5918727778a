# File: tests/test_beams.py

"""Tests for beam segmentation around wall openings."""

import pytest

from shedcore.core.beams import (
    features_crossing_column,
    generate_beam_positions,
    generate_beam_segments,
    generate_horizontal_beam_segments,
    generate_wall_beams,
)
from shedcore.core.kernel import interval_complement
from shedcore.core.surfaces import feature_span
from shedcore.models import BeamConfig

from conftest import make_feature


@pytest.fixture
def config():
    return BeamConfig()


def _column(segments, x):
    return [s for s in segments if s.x == pytest.approx(x)]


class TestBeamPositions:

    def test_default_wall(self, config):
        assert generate_beam_positions(30, config) == pytest.approx([2, 8.5, 15, 21.5, 28])

    def test_spacing_never_exceeds_max(self, config):
        positions = generate_beam_positions(40, config)
        gaps = [b - a for a, b in zip(positions, positions[1:])]
        assert max(gaps) <= config.max_spacing

    def test_narrow_wall_keeps_min_beams(self, config):
        # Spacing drops below min_spacing rather than losing beams
        assert generate_beam_positions(6, config) == pytest.approx([2, 3, 4])

    def test_wall_narrower_than_margins_uses_full_width(self, config):
        assert generate_beam_positions(3, config) == pytest.approx([0, 1.5, 3])


class TestConfigValidation:

    def test_min_spacing_above_max_rejected(self):
        with pytest.raises(ValueError):
            BeamConfig(min_spacing=10, max_spacing=8)

    def test_height_ratio_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            BeamConfig(height_ratios=[0.5, 1.2])


class TestVerticalSegments:

    def test_empty_wall_has_full_height_beams(self, config):
        segments = generate_beam_segments(30, 12, [], config)
        assert len(segments) == 5
        assert all(s.bottom_y == 0 and s.top_y == 12 for s in segments)

    def test_door_cuts_the_beam_above_it(self, config):
        door = make_feature()  # 13.5 to 16.5, floor to 7
        segments = generate_beam_segments(30, 12, [door], config)
        center = _column(segments, 15)
        assert len(center) == 1
        assert (center[0].bottom_y, center[0].top_y) == pytest.approx((7, 12))
        assert len(segments) == 5

    def test_window_splits_beam_in_two(self, config):
        window = make_feature(kind="window", height=3, y_offset=3)
        center = _column(generate_beam_segments(30, 12, [window], config), 15)
        assert [v for s in center for v in (s.bottom_y, s.top_y)] == pytest.approx([0, 3, 6, 12])

    def test_full_height_opening_removes_beam(self, config):
        opening = make_feature(kind="rollupDoor", width=4, height=12)
        assert _column(generate_beam_segments(30, 12, [opening], config), 15) == []

    def test_no_segment_overlaps_a_feature(self, config):
        features = [
            make_feature(),
            make_feature(kind="window", width=4, height=3, alignment="left", x_offset=6, y_offset=4),
            make_feature(kind="window", width=2, height=2, alignment="right", x_offset=7, y_offset=8),
        ]
        for segment in generate_beam_segments(30, 12, features, config):
            for feature in features_crossing_column(features, 30, segment.x, config.beam_width):
                assert segment.top_y <= feature.bottom + 1e-9 or segment.bottom_y >= feature.top - 1e-9

    def test_segments_fill_every_gap_between_features(self, config):
        features = [
            make_feature(),  # 13.5 to 16.5, floor to 7
            make_feature(kind="window", width=6, height=2, y_offset=8),
            make_feature(kind="window", width=8, height=4, alignment="left", x_offset=4, y_offset=3),
            # Two overlapping extents in the column at 21.5
            make_feature(kind="window", width=4, height=4, alignment="right", x_offset=6, y_offset=2),
            make_feature(kind="window", width=2, height=3, alignment="right", x_offset=7, y_offset=5),
        ]
        segments = generate_beam_segments(30, 12, features, config)

        blocked_columns = 0
        for x in generate_beam_positions(30, config):
            crossing = features_crossing_column(features, 30, x, config.beam_width)
            blocked_columns += bool(crossing)
            expected = interval_complement(0, 12, [(f.bottom, f.top) for f in crossing])
            actual = sorted((s.bottom_y, s.top_y) for s in _column(segments, x))
            assert [v for pair in actual for v in pair] == pytest.approx(
                [v for pair in expected for v in pair]
            )
        assert blocked_columns == 3

        merged = [(s.bottom_y, s.top_y) for s in _column(segments, 21.5)]
        assert [v for pair in sorted(merged) for v in pair] == pytest.approx([0, 2, 8, 12])


class TestHorizontalSegments:

    def test_rows_at_height_ratios(self):
        segments = generate_horizontal_beam_segments(30, 12, [], [0.25, 0.5, 0.75], 0.3)
        assert [round((s.bottom_y + s.top_y) / 2, 6) for s in segments] == [3, 6, 9]
        assert all(s.width == pytest.approx(30) for s in segments)

    def test_door_interrupts_lower_rows(self):
        door = make_feature()
        segments = generate_horizontal_beam_segments(30, 12, [door], [0.25, 0.5, 0.75], 0.3)
        assert len(segments) == 5

        lower = [s for s in segments if s.bottom_y < 4]
        assert [v for s in lower for v in (s.x, s.width)] == pytest.approx([6.75, 13.5, 23.25, 13.5])

        left, right = feature_span(door, 30)
        for s in segments:
            if s.bottom_y < door.top:
                assert s.right <= left + 1e-9 or s.left >= right - 1e-9


class TestWallBeams:

    def test_layout_stats(self, config):
        layout = generate_wall_beams(30, 12, [make_feature()], config)
        assert layout.stats.vertical_segments == 5
        assert layout.stats.horizontal_segments == 5
        assert layout.stats.total_vertical_run == pytest.approx(4 * 12 + 5)
