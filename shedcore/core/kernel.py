"""Rectangle/line geometry kernel.

Pure functions over finite reals. Parallel and collinear segment pairs
are treated as non-intersecting; a collinear overlap with a rectangle
edge therefore yields no intersection point for that edge.
"""

from __future__ import annotations

from shedcore.models import Point2D, Rect

EPSILON = 1e-6            # Coordinate tolerance for duplicate/boundary hits
PARALLEL_TOLERANCE = 1e-10


def point_in_rectangle(p: Point2D, rect: Rect) -> bool:
    """Inclusive bounds test."""
    return rect.left <= p.x <= rect.right and rect.bottom <= p.y <= rect.top


def point_strictly_inside(p: Point2D, rect: Rect, tolerance: float = EPSILON) -> bool:
    return (
        rect.left + tolerance < p.x < rect.right - tolerance
        and rect.bottom + tolerance < p.y < rect.top - tolerance
    )


def _within_box(p: Point2D, a: Point2D, b: Point2D) -> bool:
    return (
        min(a.x, b.x) - EPSILON <= p.x <= max(a.x, b.x) + EPSILON
        and min(a.y, b.y) - EPSILON <= p.y <= max(a.y, b.y) + EPSILON
    )


def segment_intersection(
    a1: Point2D, a2: Point2D, b1: Point2D, b2: Point2D,
) -> Point2D | None:
    """Intersection point of segments a1-a2 and b1-b2, or None."""
    denom = (a1.x - a2.x) * (b1.y - b2.y) - (a1.y - a2.y) * (b1.x - b2.x)
    if abs(denom) < PARALLEL_TOLERANCE:
        return None

    t = ((a1.x - b1.x) * (b1.y - b2.y) - (a1.y - b1.y) * (b1.x - b2.x)) / denom
    point = Point2D(x=a1.x + t * (a2.x - a1.x), y=a1.y + t * (a2.y - a1.y))

    if _within_box(point, a1, a2) and _within_box(point, b1, b2):
        return point
    return None


def segments_intersect(a1: Point2D, a2: Point2D, b1: Point2D, b2: Point2D) -> bool:
    return segment_intersection(a1, a2, b1, b2) is not None


def segment_rectangle_intersection_points(
    start: Point2D, end: Point2D, rect: Rect,
) -> list[Point2D]:
    """Every point where the segment crosses an edge of the rectangle."""
    points: list[Point2D] = []
    for e1, e2 in rect.edges():
        hit = segment_intersection(start, end, e1, e2)
        if hit is None:
            continue
        # A corner hit is reported by both adjacent edges
        if any(hit.is_close(p, EPSILON) for p in points):
            continue
        points.append(hit)
    return points


def segment_parameter(start: Point2D, end: Point2D, p: Point2D) -> float:
    """Position of `p` along start→end, 0 at start and 1 at end."""
    dx = end.x - start.x
    dy = end.y - start.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return 0.0
    return ((p.x - start.x) * dx + (p.y - start.y) * dy) / length_sq


def clip_segment_to_rectangle(
    start: Point2D, end: Point2D, rect: Rect,
) -> tuple[float, float] | None:
    """
    Liang–Barsky clip. Returns the parameter interval (t0, t1) of the
    segment lying inside the closed rectangle, or None.
    """
    dx = end.x - start.x
    dy = end.y - start.y
    t0, t1 = 0.0, 1.0

    for p, q in (
        (-dx, start.x - rect.left),
        (dx, rect.right - start.x),
        (-dy, start.y - rect.bottom),
        (dy, rect.top - start.y),
    ):
        if abs(p) < PARALLEL_TOLERANCE:
            if q < 0:
                return None
            continue
        r = q / p
        if p < 0:
            t0 = max(t0, r)
        else:
            t1 = min(t1, r)
        if t0 > t1:
            return None

    return t0, t1


def segment_crosses_rectangle(
    start: Point2D, end: Point2D, rect: Rect, tolerance: float = EPSILON,
) -> bool:
    """
    True when a positive length of the segment lies inside the
    rectangle's interior. Touching an edge or a corner, or running along
    an edge, is not a crossing.
    """
    inner = Rect(
        left=rect.left + tolerance,
        right=rect.right - tolerance,
        bottom=rect.bottom + tolerance,
        top=rect.top - tolerance,
    )
    if inner.width <= 0 or inner.height <= 0:
        return False

    length = start.distance_to(end)
    if length < tolerance:
        return point_strictly_inside(start, rect, tolerance)

    clipped = clip_segment_to_rectangle(start, end, inner)
    if clipped is None:
        return False
    t0, t1 = clipped
    return (t1 - t0) * length > tolerance


def interval_complement(
    lo: float, hi: float, blockers: list[tuple[float, float]], min_length: float = EPSILON,
) -> list[tuple[float, float]]:
    """
    Sub-intervals of [lo, hi] not covered by any blocker.

    Blockers are clipped to the range and merged first. Gaps shorter
    than `min_length` are dropped.
    """
    clipped = sorted(
        (max(lo, b_lo), min(hi, b_hi))
        for b_lo, b_hi in blockers
        if b_hi > lo and b_lo < hi
    )

    gaps: list[tuple[float, float]] = []
    cursor = lo
    for b_lo, b_hi in clipped:
        if b_lo - cursor > min_length:
            gaps.append((cursor, b_lo))
        cursor = max(cursor, b_hi)
    if hi - cursor > min_length:
        gaps.append((cursor, hi))
    return gaps
