"""Wall feature validation against wall height, neighbours and wall ends.

All checks are pure: they read features and wall dimensions and return a
ValidationResult listing every problem found, never only the first.
"""

from __future__ import annotations

from shedcore.core.kernel import EPSILON
from shedcore.core.policy import DEFAULT_POLICY, CorrectionPolicy
from shedcore.core.surfaces import feature_rect, feature_span, relative_feature_left, wall_width
from shedcore.models import (
    Alignment, Feature, FeatureHeightResult, Footprint, IssueKind, PositionSuggestion, Rect,
    ValidationParams, ValidationResult, WallPosition,
)
from shedcore.utils.logging_config import get_logger

logger = get_logger(__name__)


def _ft(value: float) -> str:
    return f"{round(value, 4):g}ft"


def validate_feature_against_height(feature: Feature, wall_height: float) -> FeatureHeightResult:
    """Feature must fit the wall height and sit between the floor and the wall top."""
    result = FeatureHeightResult()
    kind = feature.type.value

    if feature.height > wall_height:
        result.add_error(
            IssueKind.HEIGHT,
            f"{kind} height ({_ft(feature.height)}) exceeds wall height ({_ft(wall_height)})",
            subject=feature.id, edge="top", magnitude=feature.height - wall_height,
        )
        result.individual_valid = False

    top = feature.top
    if top > wall_height:
        result.add_error(
            IssueKind.HEIGHT,
            f"{kind} extends beyond wall top (position: {_ft(feature.bottom)} + "
            f"height: {_ft(feature.height)} = {_ft(top)} > {_ft(wall_height)})",
            subject=feature.id, edge="top", magnitude=top - wall_height,
        )
        result.position_valid = False

    if feature.bottom < 0:
        result.add_error(
            IssueKind.BOUNDS,
            f"{kind} position ({_ft(feature.bottom)}) is below ground level",
            subject=feature.id, edge="bottom", magnitude=-feature.bottom,
        )
        result.position_valid = False

    return result


def stack_key(feature: Feature) -> str:
    """Features sharing this key are stacked on the same vertical line."""
    return f"{feature.position.alignment.value}-{feature.position.x_offset:g}"


def validate_stacked_features(
    features: list[Feature],
    wall_height: float,
    wall_position: WallPosition,
    params: ValidationParams | None = None,
) -> ValidationResult:
    """
    Check features stacked at the same horizontal position on one wall.

    Within a stack, each feature must start at or above the top of the
    ones below it and the stack must end below the wall top. A stack
    filling most of the wall height is flagged as a density warning.
    """
    if params is None:
        params = ValidationParams()

    result = ValidationResult()
    groups: dict[str, list[Feature]] = {}
    for feature in features:
        if feature.wall_position != wall_position:
            continue
        groups.setdefault(stack_key(feature), []).append(feature)

    for key, group in groups.items():
        if len(group) < 2:
            continue

        stack = sorted(group, key=lambda f: f.bottom)
        current_top = 0.0
        stacked_height = 0.0

        for i, feature in enumerate(stack):
            if i > 0 and feature.bottom < current_top:
                below = stack[i - 1]
                result.add_error(
                    IssueKind.OVERLAP,
                    f"{feature.type.value} overlaps with the {below.type.value} below it "
                    f"at {key} on the {wall_position.value} wall",
                    subject=feature.id, magnitude=current_top - feature.bottom,
                )
            stacked_height += feature.height
            current_top = max(current_top, feature.top)

        if current_top > wall_height:
            result.add_error(
                IssueKind.HEIGHT,
                f"Combined height of stacked features at {key} ({_ft(current_top)}) "
                f"exceeds wall height ({_ft(wall_height)})",
                subject=wall_position.value, magnitude=current_top - wall_height,
            )

        if stacked_height / wall_height > params.stack_density_threshold:
            result.add_warning(
                IssueKind.DENSITY,
                f"High feature density at {key} on the {wall_position.value} wall "
                f"may affect structural integrity",
                subject=wall_position.value,
            )

    return result


def validate_new_feature(
    candidate: Feature,
    existing_features: list[Feature],
    wall_height: float,
    wall_width: float | None = None,
) -> ValidationResult:
    """
    Height check plus a rectangle overlap check against every feature
    already on the candidate's wall.

    With `wall_width` the spans are compared in the wall-local frame.
    Without it, offsets are compared as stored, which is only exact for
    features sharing an alignment.
    """
    result = ValidationResult()
    result.merge(validate_feature_against_height(candidate, wall_height))

    def rect(f: Feature) -> Rect:
        if wall_width is not None:
            return feature_rect(f, wall_width)
        left = relative_feature_left(f)
        return Rect(left=left, right=left + f.width, bottom=f.bottom, top=f.top)

    new_rect = rect(candidate)
    for existing in existing_features:
        if existing.wall_position != candidate.wall_position:
            continue
        if candidate.id and existing.id == candidate.id:
            continue

        # Shared edges have zero area and are allowed
        area = new_rect.overlap_area(rect(existing))
        if area <= 0:
            continue

        result.add_error(
            IssueKind.OVERLAP,
            f"{candidate.type.value} overlaps with existing {existing.type.value}"
            + (f" ({existing.id})" if existing.id else ""),
            subject=existing.id, magnitude=area,
        )

    return result


def validate_feature_bounds(
    feature: Feature,
    width_of_wall: float,
    params: ValidationParams | None = None,
) -> ValidationResult:
    """
    Horizontal extent must stay clear of the corner zones at both wall ends.

    One error per violated edge, carrying the overhang, and a proximity
    warning when an edge sits just inside its bound.
    """
    if params is None:
        params = ValidationParams()

    result = ValidationResult()
    kind = feature.type.value
    wall = feature.wall_position.value
    left, right = feature_span(feature, width_of_wall)
    min_x = params.corner_clearance
    max_x = width_of_wall - params.corner_clearance

    if feature.width > max_x - min_x + EPSILON:
        result.add_error(
            IssueKind.BOUNDS,
            f"{kind} width ({_ft(feature.width)}) exceeds usable {wall} wall width "
            f"({_ft(max(0.0, max_x - min_x))})",
            subject=feature.id, magnitude=feature.width - max(0.0, max_x - min_x),
        )

    if left < min_x - EPSILON:
        result.add_error(
            IssueKind.BOUNDS,
            f"{kind} extends {_ft(min_x - left)} beyond the left clearance of the {wall} wall",
            subject=feature.id, edge="left", magnitude=min_x - left,
        )
    elif left - min_x < params.feature_warning_margin:
        result.add_warning(
            IssueKind.PROXIMITY,
            f"{kind} is very close to the left end of the {wall} wall "
            f"({_ft(left - min_x)} clearance)",
            subject=feature.id, edge="left", magnitude=left - min_x,
        )

    if right > max_x + EPSILON:
        result.add_error(
            IssueKind.BOUNDS,
            f"{kind} extends {_ft(right - max_x)} beyond the right clearance of the {wall} wall",
            subject=feature.id, edge="right", magnitude=right - max_x,
        )
    elif max_x - right < params.feature_warning_margin:
        result.add_warning(
            IssueKind.PROXIMITY,
            f"{kind} is very close to the right end of the {wall} wall "
            f"({_ft(max_x - right)} clearance)",
            subject=feature.id, edge="right", magnitude=max_x - right,
        )

    return result


def required_wall_width(feature: Feature, params: ValidationParams | None = None) -> float:
    """Narrowest wall on which `feature` still passes `validate_feature_bounds`."""
    if params is None:
        params = ValidationParams()

    clearance = params.corner_clearance
    pos = feature.position
    if pos.alignment == Alignment.CENTER:
        return feature.width + 2 * clearance + 2 * abs(pos.x_offset)
    # Left/right: the far edge must clear the opposite corner zone
    return max(pos.x_offset + feature.width + clearance, feature.width + 2 * clearance)


def is_valid_feature_position(
    feature: Feature, footprint: Footprint, params: ValidationParams | None = None,
) -> bool:
    width_of_wall = wall_width(footprint, feature.wall_position)
    return (
        validate_feature_bounds(feature, width_of_wall, params).valid
        and validate_feature_against_height(feature, footprint.height).valid
    )


def validate_wall_heights(
    footprint: Footprint,
    features: list[Feature],
    params: ValidationParams | None = None,
) -> ValidationResult:
    """Every feature's height, every wall's stacks, and the overall opening ratio."""
    if params is None:
        params = ValidationParams()

    result = ValidationResult()
    wall_height = footprint.height

    for feature in features:
        result.merge(validate_feature_against_height(feature, wall_height))

    for position in WallPosition:
        result.merge(validate_stacked_features(features, wall_height, position, params))

    opening_area = sum(f.width * f.height for f in features)
    wall_area = 2 * (footprint.width + footprint.length) * wall_height
    ratio = opening_area / wall_area
    if ratio > params.opening_ratio_threshold:
        result.add_warning(
            IssueKind.DENSITY,
            f"High opening ratio ({ratio * 100:.1f}%) may require additional structural support",
            magnitude=ratio,
        )

    logger.debug("Wall height validation: %d errors, %d warnings over %d features",
                 len(result.errors), len(result.warnings), len(features))
    return result


def get_max_allowed_height(y_offset: float, wall_height: float) -> float:
    return wall_height - y_offset


def suggest_valid_position(
    feature: Feature,
    wall_height: float,
    policy: CorrectionPolicy = DEFAULT_POLICY,
) -> PositionSuggestion:
    """
    Corrected (y_offset, height) for a feature that does not fit its wall.

    Order: shrink an over-tall feature per the policy, then drop it so
    its top meets the wall top, then lift it back to the floor if that
    pushed it below ground.
    """
    adjustments: list[str] = []
    height = feature.height
    y_offset = feature.bottom

    if height > wall_height:
        height = policy.feature_height(height, wall_height)
        adjustments.append(f"Reduced height from {_ft(feature.height)} to {_ft(height)}")

    if y_offset + height > wall_height:
        y_offset = wall_height - height
        adjustments.append(f"Lowered to {_ft(y_offset)} so the top meets the wall top")

    if y_offset < 0:
        y_offset = 0.0
        adjustments.append("Raised to ground level")

    return PositionSuggestion(
        y_offset=max(0.0, y_offset),
        height=min(height, wall_height),
        adjustments=adjustments,
    )
