"""Skylight validation against the roof panels.

Offsets are panel-local: x from the panel centerline, y along the
ridge from mid-length. Both panels are the same size, so one set of
bounds serves either panel.
"""

from __future__ import annotations

from shedcore.core.kernel import EPSILON
from shedcore.core.policy import DEFAULT_POLICY, CorrectionPolicy
from shedcore.core.surfaces import panel_width, skylight_panel_rect, skylight_plan_rect
from shedcore.models import (
    AllSkylightsResult, Footprint, IssueKind, MaxSkylightDimensions, Skylight,
    SkylightBounds, SkylightOverlap, SkylightSuggestion, SkylightValidationResult,
    ValidationParams,
)
from shedcore.utils.logging_config import get_logger

logger = get_logger(__name__)


def _ft(value: float) -> str:
    return f"{value:.2f}ft"


def skylight_label(index: int) -> str:
    return f"skylight {index + 1}"


def get_skylight_bounds(
    footprint: Footprint, params: ValidationParams | None = None,
) -> SkylightBounds:
    """Valid offset ranges and maximum size, keeping `skylight_edge_margin` from every panel edge."""
    if params is None:
        params = ValidationParams()

    margin = params.skylight_edge_margin
    pw = panel_width(footprint)
    half_x = pw / 2 - margin
    half_y = footprint.length / 2 - margin

    return SkylightBounds(
        panel_width=pw,
        min_x_offset=-half_x,
        max_x_offset=half_x,
        min_y_offset=-half_y,
        max_y_offset=half_y,
        max_width=pw - 2 * margin,
        max_length=footprint.length - 2 * margin,
    )


def validate_skylight(
    skylight: Skylight,
    footprint: Footprint,
    params: ValidationParams | None = None,
    label: str = "Skylight",
) -> SkylightValidationResult:
    """
    Check one skylight against its panel.

    Reports each edge that crosses the margin line with its overhang,
    any dimension above the panel maximum, and edges that clear the
    margin line by less than `skylight_warning_margin`.
    """
    if params is None:
        params = ValidationParams()

    bounds = get_skylight_bounds(footprint, params)
    result = SkylightValidationResult(bounds=bounds)
    rect = skylight_panel_rect(skylight)

    edges = (
        ("left", bounds.min_x_offset - rect.left),
        ("right", rect.right - bounds.max_x_offset),
        ("front", bounds.min_y_offset - rect.bottom),
        ("back", rect.top - bounds.max_y_offset),
    )

    for edge, overhang in edges:
        if overhang > EPSILON:
            result.add_error(
                IssueKind.BOUNDS,
                f"{label} extends {_ft(overhang)} beyond {edge} roof edge",
                subject=label, edge=edge, magnitude=overhang,
            )

    if skylight.width > bounds.max_width:
        result.add_error(
            IssueKind.BOUNDS,
            f"{label} width ({skylight.width:g}ft) exceeds maximum allowed width "
            f"({bounds.max_width:g}ft)",
            subject=label, edge="width", magnitude=skylight.width - bounds.max_width,
        )

    if skylight.length > bounds.max_length:
        result.add_error(
            IssueKind.BOUNDS,
            f"{label} length ({skylight.length:g}ft) exceeds maximum allowed length "
            f"({bounds.max_length:g}ft)",
            subject=label, edge="length", magnitude=skylight.length - bounds.max_length,
        )

    for edge, overhang in edges:
        clearance = -overhang
        if -EPSILON <= clearance < params.skylight_warning_margin:
            result.add_warning(
                IssueKind.PROXIMITY,
                f"{label} is very close to {edge} roof edge ({_ft(clearance)} clearance)",
                subject=label, edge=edge, magnitude=clearance,
            )

    logger.debug("%s %sx%s at (%s, %s) on %s panel: %d errors, %d warnings",
                 label, skylight.width, skylight.length, skylight.x_offset,
                 skylight.y_offset, skylight.panel.value,
                 len(result.errors), len(result.warnings))
    return result


def check_skylight_overlap(
    first: Skylight, second: Skylight, footprint: Footprint | None = None,
) -> SkylightOverlap:
    """
    Positive-area intersection of two skylights.

    With a footprint the comparison is made on the roof plan, so
    skylights on different panels never collide. Without one the raw
    panel-local rectangles are compared.
    """
    if footprint is not None:
        a = skylight_plan_rect(first, footprint)
        b = skylight_plan_rect(second, footprint)
    else:
        a = skylight_panel_rect(first)
        b = skylight_panel_rect(second)

    area = a.overlap_area(b)
    return SkylightOverlap(overlaps=area > 0, overlap_area=area)


def validate_all_skylights(
    skylights: list[Skylight],
    footprint: Footprint,
    params: ValidationParams | None = None,
) -> AllSkylightsResult:
    """Every skylight against its panel, then every pair for overlap."""
    result = AllSkylightsResult()

    for i, skylight in enumerate(skylights):
        single = validate_skylight(skylight, footprint, params, label=skylight_label(i).capitalize())
        result.per_skylight_results.append(single)
        result.merge(single)

    for i in range(len(skylights)):
        for j in range(i + 1, len(skylights)):
            overlap = check_skylight_overlap(skylights[i], skylights[j], footprint)
            if overlap.overlaps:
                result.add_error(
                    IssueKind.OVERLAP,
                    f"Skylights {i + 1} and {j + 1} overlap",
                    subject=skylight_label(j), magnitude=overlap.overlap_area,
                )

    logger.debug("Validated %d skylights: %d errors, %d warnings",
                 len(skylights), len(result.errors), len(result.warnings))
    return result


def suggest_valid_skylight_position(
    skylight: Skylight,
    footprint: Footprint,
    params: ValidationParams | None = None,
    policy: CorrectionPolicy = DEFAULT_POLICY,
) -> SkylightSuggestion:
    """
    Size and offsets that fit the panel.

    Oversized dimensions are shrunk per the policy first, then the
    skylight is slid back inside the margin lines on each axis.
    """
    bounds = get_skylight_bounds(footprint, params)
    adjustments: list[str] = []

    width = skylight.width
    length = skylight.length
    x_offset = skylight.x_offset
    y_offset = skylight.y_offset

    if width > bounds.max_width:
        width = policy.skylight_size(width, bounds.max_width)
        adjustments.append(f"Reduced width from {skylight.width:g}ft to {_ft(width)} to fit roof")

    if length > bounds.max_length:
        length = policy.skylight_size(length, bounds.max_length)
        adjustments.append(f"Reduced length from {skylight.length:g}ft to {_ft(length)} to fit roof")

    half_w = width / 2
    half_l = length / 2

    if x_offset - half_w < bounds.min_x_offset:
        x_offset = bounds.min_x_offset + half_w
        adjustments.append("Moved right to stay within roof bounds")
    elif x_offset + half_w > bounds.max_x_offset:
        x_offset = bounds.max_x_offset - half_w
        adjustments.append("Moved left to stay within roof bounds")

    if y_offset - half_l < bounds.min_y_offset:
        y_offset = bounds.min_y_offset + half_l
        adjustments.append("Moved back to stay within roof bounds")
    elif y_offset + half_l > bounds.max_y_offset:
        y_offset = bounds.max_y_offset - half_l
        adjustments.append("Moved forward to stay within roof bounds")

    return SkylightSuggestion(
        suggested_x_offset=x_offset,
        suggested_y_offset=y_offset,
        suggested_width=width,
        suggested_length=length,
        adjustments=adjustments,
    )


def get_max_allowed_skylight_dimensions(
    x_offset: float,
    y_offset: float,
    footprint: Footprint,
    params: ValidationParams | None = None,
) -> MaxSkylightDimensions:
    """Largest skylight centered at (x_offset, y_offset) that stays inside the margin lines."""
    bounds = get_skylight_bounds(footprint, params)

    max_width = 2 * min(x_offset - bounds.min_x_offset, bounds.max_x_offset - x_offset)
    max_length = 2 * min(y_offset - bounds.min_y_offset, bounds.max_y_offset - y_offset)

    return MaxSkylightDimensions(
        max_width=max(0.0, min(max_width, bounds.max_width)),
        max_length=max(0.0, min(max_length, bounds.max_length)),
    )


def is_valid_skylight_position(
    skylight: Skylight, footprint: Footprint, params: ValidationParams | None = None,
) -> bool:
    return validate_skylight(skylight, footprint, params).valid
