"""Roof line generation and trimming around skylights.

Produces the ridge, eaves, rakes and the decorative ridge/valley lines
of a gabled roof on the roof plan, then cuts a gap in every line
wherever a skylight occupies that stretch.

Skylights are assumed not to overlap each other (the overlap rule
enforces this for committed buildings). Under that precondition the
sequential trim is independent of skylight order.
"""

from __future__ import annotations
from collections import Counter

from shedcore.core.kernel import (
    EPSILON, point_strictly_inside, segment_crosses_rectangle,
    segment_parameter, segment_rectangle_intersection_points,
)
from shedcore.core.surfaces import skylight_plan_rect
from shedcore.models import (
    Footprint, LinePanel, RoofLine, RoofLineParams, RoofLineSegment,
    RoofLineStatistics, RoofLineType, RoofLineValidation, IssueKind,
    Skylight, SkylightRect,
)
from shedcore.utils.logging_config import get_logger

logger = get_logger(__name__)


def _fmt(value: float) -> str:
    return f"{round(value, 6):g}"


def _stepped_positions(start: float, spacing: float, stop: float) -> list[float]:
    """Positions start + k*spacing (k >= 1) strictly below stop."""
    positions: list[float] = []
    step = 1
    pos = start + spacing
    while pos < stop - EPSILON:
        positions.append(pos)
        step += 1
        pos = start + step * spacing  # no accumulated drift
    return positions


def generate_base_roof_lines(
    footprint: Footprint, params: RoofLineParams | None = None,
) -> list[RoofLine]:
    """Canonical line set for a footprint. Same input, same output."""
    if params is None:
        params = RoofLineParams()

    hw = footprint.width / 2
    hl = footprint.length / 2

    lines = [
        RoofLine(id="ridge-main", start_x=0, start_y=-hl, end_x=0, end_y=hl,
                 type=RoofLineType.RIDGE, panel=LinePanel.BOTH),
        RoofLine(id="eave-left", start_x=-hw, start_y=-hl, end_x=-hw, end_y=hl,
                 type=RoofLineType.EAVE, panel=LinePanel.LEFT),
        RoofLine(id="eave-right", start_x=hw, start_y=-hl, end_x=hw, end_y=hl,
                 type=RoofLineType.EAVE, panel=LinePanel.RIGHT),
        RoofLine(id="rake-front-left", start_x=-hw, start_y=-hl, end_x=0, end_y=-hl,
                 type=RoofLineType.RAKE, panel=LinePanel.LEFT),
        RoofLine(id="rake-front-right", start_x=0, start_y=-hl, end_x=hw, end_y=-hl,
                 type=RoofLineType.RAKE, panel=LinePanel.RIGHT),
        RoofLine(id="rake-back-left", start_x=-hw, start_y=hl, end_x=0, end_y=hl,
                 type=RoofLineType.RAKE, panel=LinePanel.LEFT),
        RoofLine(id="rake-back-right", start_x=0, start_y=hl, end_x=hw, end_y=hl,
                 type=RoofLineType.RAKE, panel=LinePanel.RIGHT),
    ]

    # Ridge details across both panels, stepped along the length
    detail_x = hw * params.ridge_detail_extent
    for y in _stepped_positions(-hl, params.ridge_detail_spacing, hl):
        lines.append(RoofLine(
            id=f"ridge-detail-{_fmt(y)}",
            start_x=-detail_x, start_y=y, end_x=detail_x, end_y=y,
            type=RoofLineType.RIDGE, panel=LinePanel.BOTH,
        ))

    # Panel valleys, stepped across each half of the width
    valley_y = hl * params.valley_extent
    for x in _stepped_positions(-hw, params.panel_valley_spacing, 0.0):
        lines.append(RoofLine(
            id=f"panel-left-{_fmt(x)}",
            start_x=x, start_y=-valley_y, end_x=x, end_y=valley_y,
            type=RoofLineType.VALLEY, panel=LinePanel.LEFT,
        ))

    for x in _stepped_positions(0.0, params.panel_valley_spacing, hw):
        lines.append(RoofLine(
            id=f"panel-right-{_fmt(x)}",
            start_x=x, start_y=-valley_y, end_x=x, end_y=valley_y,
            type=RoofLineType.VALLEY, panel=LinePanel.RIGHT,
        ))

    logger.debug("Generated %d base roof lines for %sx%s roof",
                 len(lines), footprint.width, footprint.length)
    return lines


def as_segment(line: RoofLine) -> RoofLineSegment:
    """Wrap an untouched line as a segment of itself."""
    if isinstance(line, RoofLineSegment):
        return line
    return RoofLineSegment(**line.model_dump(), original_line_id=line.id)


def trim_line_around_rectangle(line: RoofLine, rect: SkylightRect) -> list[RoofLineSegment]:
    """
    Cut the part of `line` that lies inside `rect`.

    Returns the line unchanged when it does not cross the rectangle's
    interior, nothing when it lies wholly inside, and otherwise the
    pieces outside the rectangle in start→end order.
    """
    segment = as_segment(line)
    start, end = segment.start, segment.end

    if not segment_crosses_rectangle(start, end, rect):
        return [segment]

    hits = segment_rectangle_intersection_points(start, end, rect)
    ts = sorted(min(1.0, max(0.0, segment_parameter(start, end, p))) for p in hits)
    breaks = [0.0, *ts, 1.0]
    length = segment.length

    # Keep the pieces whose midpoint is outside; merge pieces that only
    # touched the rectangle at a single point.
    kept: list[tuple[float, float]] = []
    for ta, tb in zip(breaks, breaks[1:]):
        if (tb - ta) * length <= EPSILON:
            continue
        mid = start.lerp(end, (ta + tb) / 2)
        if point_strictly_inside(mid, rect):
            continue
        if kept and abs(kept[-1][1] - ta) * length <= EPSILON:
            kept[-1] = (kept[-1][0], tb)
        else:
            kept.append((ta, tb))

    pieces: list[RoofLineSegment] = []
    for i, (ta, tb) in enumerate(kept):
        a = start.lerp(end, ta)
        b = start.lerp(end, tb)
        pieces.append(segment.model_copy(update={
            "id": f"{segment.id}-seg-{i}",
            "start_x": a.x, "start_y": a.y,
            "end_x": b.x, "end_y": b.y,
        }))

    logger.debug("Trimmed %s into %d pieces (%d edge hits)", segment.id, len(pieces), len(hits))
    return pieces


def trim_roof_lines(lines: list[RoofLine], rects: list[SkylightRect]) -> list[RoofLineSegment]:
    """
    Trim every line against every skylight on its panel.

    Each skylight is applied to the output of the previous one, so a
    line split by one skylight is re-examined piece by piece.
    """
    segments: list[RoofLineSegment] = []
    for line in lines:
        current = [as_segment(line)]
        for rect in rects:
            if not line.spans_panel(rect.panel):
                continue
            current = [piece for seg in current for piece in trim_line_around_rectangle(seg, rect)]
        segments.extend(current)
    return segments


def skylight_rects(skylights: list[Skylight], footprint: Footprint) -> list[SkylightRect]:
    return [skylight_plan_rect(s, footprint, i) for i, s in enumerate(skylights)]


def generate_roof_line_segments(
    footprint: Footprint,
    skylights: list[Skylight],
    params: RoofLineParams | None = None,
) -> list[RoofLineSegment]:
    """Visible roof line segments for a footprint and its skylights."""
    base = generate_base_roof_lines(footprint, params)
    segments = trim_roof_lines(base, skylight_rects(skylights, footprint))
    logger.debug("Roof lines: %d base lines -> %d segments around %d skylights",
                 len(base), len(segments), len(skylights))
    return segments


def validate_roof_line_segments(
    segments: list[RoofLineSegment],
    skylights: list[Skylight],
    footprint: Footprint,
) -> RoofLineValidation:
    """
    Read-only check of trimmed output.

    A segment still crossing a skylight means the trimmer is broken, so
    each one is reported as an error rather than filtered out.
    """
    result = RoofLineValidation()
    rects = skylight_rects(skylights, footprint)

    for segment in segments:
        for rect in rects:
            if segment_crosses_rectangle(segment.start, segment.end, rect):
                result.add_error(
                    IssueKind.TRIM_DEFECT,
                    f"Roof line segment {segment.id} intersects skylight {rect.index + 1} "
                    f"on {rect.panel.value} panel",
                    subject=segment.id,
                )

    if not segments:
        result.add_warning(
            IssueKind.TRIM_DEFECT,
            "No roof line segments generated - all lines may have been trimmed away",
        )

    total_length = sum(s.length for s in segments)
    result.statistics = RoofLineStatistics(
        total_segments=len(segments),
        segments_by_type=dict(Counter(s.type.value for s in segments)),
        average_segment_length=total_length / len(segments) if segments else 0.0,
        skylights_covered=len(skylights),
    )

    if not result.valid:
        logger.warning("Roof line validation found %d trim defects", len(result.errors))
    return result
