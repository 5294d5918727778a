"""Structural framing output models."""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict


class BeamSegment(BaseModel):
    """
    One run of a structural beam in the wall-local frame.

    Vertical members: `x` is the centerline, `width` the member width.
    Horizontal members: `x` is the run's midpoint, `width` the run length.
    """
    model_config = ConfigDict(frozen=True)

    x: float
    bottom_y: float
    top_y: float
    width: float

    @property
    def height(self) -> float:
        return self.top_y - self.bottom_y

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2


class BeamLayout(BaseModel):
    """All beam segments for one wall."""
    vertical: list[BeamSegment]
    horizontal: list[BeamSegment]
    stats: BeamStats = None  # type: ignore[assignment]

    def model_post_init(self, __context: object) -> None:
        if self.stats is None:
            self.stats = BeamStats.from_segments(self.vertical, self.horizontal)


class BeamStats(BaseModel):
    """Summary statistics for a beam layout."""
    vertical_segments: int = 0
    horizontal_segments: int = 0
    beam_lines: int = 0
    total_vertical_run: float = 0.0
    total_horizontal_run: float = 0.0

    @classmethod
    def from_segments(
        cls, vertical: list[BeamSegment], horizontal: list[BeamSegment],
    ) -> BeamStats:
        return cls(
            vertical_segments=len(vertical),
            horizontal_segments=len(horizontal),
            beam_lines=len({round(s.x, 6) for s in vertical}),
            total_vertical_run=sum(s.height for s in vertical),
            total_horizontal_run=sum(s.width for s in horizontal),
        )
