"""Surface coordinate model — maps stored offsets onto each host surface.

Three frames are used:

- wall-local: x from the wall's left edge (seen from outside) to its
  right edge, y from the floor line up to the eave height;
- panel-local: origin on the panel's centerline at mid-length;
- roof plan: ridge on x = 0, eaves on x = ±width/2, y along the ridge
  from -length/2 (front) to +length/2 (back).
"""

from __future__ import annotations

from shedcore.models import (
    Alignment, Feature, Footprint, Rect, RoofPanel, Skylight, SkylightRect, WallPosition,
)


def wall_width(footprint: Footprint, wall_position: WallPosition) -> float:
    """Front/back walls span the building width, left/right walls its length."""
    if wall_position in (WallPosition.FRONT, WallPosition.BACK):
        return footprint.width
    return footprint.length


def walls_for_dimension(dimension: str) -> list[WallPosition]:
    """Walls whose geometry depends on a footprint field."""
    if dimension == "width":
        return [WallPosition.FRONT, WallPosition.BACK]
    if dimension == "length":
        return [WallPosition.LEFT, WallPosition.RIGHT]
    if dimension == "height":
        return list(WallPosition)
    return []


def feature_left(feature: Feature, width_of_wall: float) -> float:
    pos = feature.position
    if pos.alignment == Alignment.LEFT:
        return pos.x_offset
    if pos.alignment == Alignment.RIGHT:
        return width_of_wall - pos.x_offset - feature.width
    return width_of_wall / 2 + pos.x_offset - feature.width / 2


def feature_span(feature: Feature, width_of_wall: float) -> tuple[float, float]:
    """Horizontal extent (left, right) in the wall-local frame."""
    left = feature_left(feature, width_of_wall)
    return left, left + feature.width


def feature_rect(feature: Feature, width_of_wall: float) -> Rect:
    left, right = feature_span(feature, width_of_wall)
    return Rect(left=left, right=right, bottom=feature.bottom, top=feature.top)


def relative_feature_left(feature: Feature) -> float:
    """
    Left edge measured without knowing the wall width.

    Only comparable between features sharing the same alignment; callers
    that know the wall width should use `feature_left`.
    """
    pos = feature.position
    if pos.alignment == Alignment.LEFT:
        return pos.x_offset
    if pos.alignment == Alignment.RIGHT:
        return -pos.x_offset - feature.width
    return pos.x_offset - feature.width / 2


def panel_width(footprint: Footprint) -> float:
    return footprint.width / 2


def panel_center_x(panel: RoofPanel, footprint: Footprint) -> float:
    """Plan x of a panel's centerline."""
    quarter = footprint.width / 4
    return -quarter if panel == RoofPanel.LEFT else quarter


def skylight_panel_rect(skylight: Skylight) -> Rect:
    """Skylight footprint in its own panel-local frame."""
    return Rect.centered(skylight.x_offset, skylight.y_offset, skylight.width, skylight.length)


def skylight_plan_rect(skylight: Skylight, footprint: Footprint, index: int = 0) -> SkylightRect:
    """Skylight footprint on the roof plan."""
    cx = panel_center_x(skylight.panel, footprint) + skylight.x_offset
    cy = skylight.y_offset
    return SkylightRect(
        left=cx - skylight.width / 2,
        right=cx + skylight.width / 2,
        bottom=cy - skylight.length / 2,
        top=cy + skylight.length / 2,
        panel=skylight.panel,
        index=index,
    )
