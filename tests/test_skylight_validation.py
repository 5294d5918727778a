# File: tests/test_skylight_validation.py

"""Tests for skylight bounds, overlap and position suggestions."""

import pytest

from shedcore.core.skylight_validation import (
    check_skylight_overlap,
    get_max_allowed_skylight_dimensions,
    get_skylight_bounds,
    is_valid_skylight_position,
    suggest_valid_skylight_position,
    validate_all_skylights,
    validate_skylight,
)
from shedcore.models import Footprint, IssueKind

from conftest import make_skylight


@pytest.fixture
def narrow():
    """A 20 ft wide building: 10 ft panels."""
    return Footprint(width=20, length=40, height=12)


class TestSkylightBounds:

    def test_default_footprint(self, footprint):
        bounds = get_skylight_bounds(footprint)
        assert bounds.panel_width == 15
        assert (bounds.min_x_offset, bounds.max_x_offset) == (-6.5, 6.5)
        assert (bounds.min_y_offset, bounds.max_y_offset) == (-19, 19)
        assert bounds.max_width == 13
        assert bounds.max_length == 38

    def test_narrow_footprint(self, narrow):
        assert get_skylight_bounds(narrow).max_width == 8


class TestValidateSkylight:

    def test_ten_foot_skylight_fits_wide_building(self, footprint):
        result = validate_skylight(make_skylight(width=10, length=10), footprint)
        assert result.valid
        assert result.warnings == []

    def test_ten_foot_skylight_too_wide_for_narrow_building(self, narrow):
        result = validate_skylight(make_skylight(width=10, length=10), narrow)
        assert not result.valid
        assert any("exceeds maximum allowed width" in e for e in result.errors)

        edges = {i.edge: i.magnitude for i in result.issues_of(IssueKind.BOUNDS)}
        assert edges["left"] == pytest.approx(1)
        assert edges["right"] == pytest.approx(1)
        assert edges["width"] == pytest.approx(2)

    def test_front_overhang(self, footprint):
        result = validate_skylight(make_skylight(y_offset=-18), footprint)
        issue = result.issues_of(IssueKind.BOUNDS)[0]
        assert issue.edge == "front"
        assert issue.magnitude == pytest.approx(1)
        assert "beyond front roof edge" in issue.message

    def test_close_to_edge_warns(self, footprint):
        result = validate_skylight(make_skylight(width=10, x_offset=1.2), footprint)
        assert result.valid
        warning = result.issues_of(IssueKind.PROXIMITY)[0]
        assert warning.edge == "right"
        assert warning.magnitude == pytest.approx(0.3)

    def test_is_valid_skylight_position(self, footprint, narrow):
        skylight = make_skylight(width=10, length=10)
        assert is_valid_skylight_position(skylight, footprint)
        assert not is_valid_skylight_position(skylight, narrow)


class TestSkylightOverlap:

    def test_overlapping_on_same_panel(self, footprint):
        overlap = check_skylight_overlap(make_skylight(), make_skylight(x_offset=2, y_offset=2), footprint)
        assert overlap.overlaps
        assert overlap.overlap_area == pytest.approx(4)

    def test_touching_is_not_overlap(self, footprint):
        overlap = check_skylight_overlap(make_skylight(), make_skylight(y_offset=4), footprint)
        assert not overlap.overlaps
        assert overlap.overlap_area == 0

    def test_different_panels_never_overlap_on_plan(self, footprint):
        overlap = check_skylight_overlap(make_skylight(), make_skylight(panel="right"), footprint)
        assert not overlap.overlaps

    def test_panel_local_comparison_without_footprint(self):
        assert check_skylight_overlap(make_skylight(), make_skylight(panel="right")).overlaps


class TestValidateAllSkylights:

    def test_reports_overlapping_pair(self, footprint):
        skylights = [make_skylight(), make_skylight(y_offset=8), make_skylight(y_offset=1)]
        result = validate_all_skylights(skylights, footprint)
        assert not result.valid
        assert "Skylights 1 and 3 overlap" in result.errors
        assert len(result.per_skylight_results) == 3

    def test_errors_are_labelled_by_index(self, footprint):
        skylights = [make_skylight(), make_skylight(y_offset=-18)]
        result = validate_all_skylights(skylights, footprint)
        assert result.errors[0].startswith("Skylight 2 extends")


class TestSuggestValidSkylightPosition:

    def test_oversized_skylight_shrinks_to_ninety_percent(self, narrow):
        suggestion = suggest_valid_skylight_position(make_skylight(width=10, length=10), narrow)
        assert suggestion.suggested_width == pytest.approx(7.2)
        assert suggestion.suggested_length == 10
        assert suggestion.suggested_x_offset == 0

    def test_moved_back_inside(self, footprint):
        suggestion = suggest_valid_skylight_position(make_skylight(x_offset=6), footprint)
        assert suggestion.suggested_x_offset == pytest.approx(4.5)
        assert "Moved left to stay within roof bounds" in suggestion.adjustments

    def test_suggestion_validates(self, narrow):
        skylight = make_skylight(width=12, length=50, x_offset=3, y_offset=10)
        s = suggest_valid_skylight_position(skylight, narrow)
        fixed = make_skylight(
            width=s.suggested_width, length=s.suggested_length,
            x_offset=s.suggested_x_offset, y_offset=s.suggested_y_offset,
        )
        assert validate_skylight(fixed, narrow).valid


class TestMaxAllowedDimensions:

    def test_centered(self, footprint):
        dims = get_max_allowed_skylight_dimensions(0, 0, footprint)
        assert dims.max_width == 13
        assert dims.max_length == 38

    def test_off_center(self, footprint):
        dims = get_max_allowed_skylight_dimensions(5, 15, footprint)
        assert dims.max_width == pytest.approx(3)
        assert dims.max_length == pytest.approx(8)

    def test_outside_bounds_is_zero(self, footprint):
        assert get_max_allowed_skylight_dimensions(8, 0, footprint).max_width == 0
