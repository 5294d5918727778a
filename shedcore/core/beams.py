"""Beam segmentation — structural wall beams that split around openings.

Works in the wall-local frame: x from the wall's left edge to
`wall_width`, y from the floor line to `wall_height`. Every emitted
segment lies in the complement of the feature footprints along its
beam line, so no segment ever overlaps an opening.
"""

from __future__ import annotations
import math

from shedcore.core.kernel import EPSILON, interval_complement
from shedcore.core.surfaces import feature_span
from shedcore.models import BeamConfig, BeamLayout, BeamSegment, Feature
from shedcore.utils.logging_config import get_logger

logger = get_logger(__name__)


def generate_beam_positions(wall_width: float, config: BeamConfig) -> list[float]:
    """
    Centerline x-positions for the vertical beams.

    At least `min_beams` positions are spread evenly over
    [margin, wall_width - margin] with spacing no larger than
    `max_spacing`. On a wall too narrow for `min_spacing`, the beam
    count wins and spacing shrinks below it. A wall narrower than twice
    the margin spreads its beams over the full width.
    """
    start = config.margin
    end = wall_width - config.margin
    if end - start <= EPSILON:
        start, end = 0.0, wall_width

    run = end - start
    if run <= EPSILON:
        return [wall_width / 2]

    intervals = max(config.min_beams - 1, math.ceil(run / config.max_spacing - EPSILON), 1)
    spacing = run / intervals

    if spacing < config.min_spacing - EPSILON:
        logger.debug(
            "Wall %.2f too narrow for %.2f spacing; keeping %d beams at %.2f",
            wall_width, config.min_spacing, intervals + 1, spacing,
        )

    return [start + i * spacing for i in range(intervals + 1)]


def features_crossing_column(
    features: list[Feature], wall_width: float, x: float, beam_width: float,
) -> list[Feature]:
    """Features whose horizontal extent overlaps x ± beam_width/2."""
    half = beam_width / 2
    crossing: list[Feature] = []
    for feature in features:
        left, right = feature_span(feature, wall_width)
        if left < x + half - EPSILON and right > x - half + EPSILON:
            crossing.append(feature)
    return crossing


def split_column(
    x: float, wall_height: float, blockers: list[Feature], beam_width: float,
) -> list[BeamSegment]:
    """Vertical complement of the blockers' extents along one beam line."""
    extents = [(f.bottom, f.top) for f in sorted(blockers, key=lambda f: f.bottom)]
    return [
        BeamSegment(x=x, bottom_y=lo, top_y=hi, width=beam_width)
        for lo, hi in interval_complement(0.0, wall_height, extents)
    ]


def generate_beam_segments(
    wall_width: float,
    wall_height: float,
    features: list[Feature],
    config: BeamConfig,
) -> list[BeamSegment]:
    """Vertical beam segments for one wall, split around every feature."""
    segments: list[BeamSegment] = []
    for x in generate_beam_positions(wall_width, config):
        blockers = features_crossing_column(features, wall_width, x, config.beam_width)
        segments.extend(split_column(x, wall_height, blockers, config.beam_width))

    logger.debug("Vertical beams: %d segments on %.2fx%.2f wall with %d features",
                 len(segments), wall_width, wall_height, len(features))
    return segments


def generate_horizontal_beam_segments(
    wall_width: float,
    wall_height: float,
    features: list[Feature],
    height_ratios: list[float],
    beam_height: float,
) -> list[BeamSegment]:
    """
    Horizontal beam rows at fixed fractions of the wall height.

    A row is interrupted by every feature whose vertical extent reaches
    into the row's band and whose span lies across the row.
    """
    half = beam_height / 2
    segments: list[BeamSegment] = []

    for ratio in height_ratios:
        y = wall_height * ratio
        bottom, top = y - half, y + half

        blockers = [
            feature_span(f, wall_width)
            for f in features
            if f.bottom < top - EPSILON and f.top > bottom + EPSILON
        ]
        for lo, hi in interval_complement(0.0, wall_width, blockers):
            segments.append(BeamSegment(
                x=(lo + hi) / 2, bottom_y=bottom, top_y=top, width=hi - lo,
            ))

    logger.debug("Horizontal beams: %d segments across %d rows",
                 len(segments), len(height_ratios))
    return segments


def generate_wall_beams(
    wall_width: float,
    wall_height: float,
    features: list[Feature],
    config: BeamConfig,
) -> BeamLayout:
    """Both beam directions for one wall."""
    return BeamLayout(
        vertical=generate_beam_segments(wall_width, wall_height, features, config),
        horizontal=generate_horizontal_beam_segments(
            wall_width, wall_height, features, config.height_ratios, config.beam_height,
        ),
    )
