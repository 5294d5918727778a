"""Geometric primitives used throughout the engine."""

from __future__ import annotations
import math
from pydantic import BaseModel, ConfigDict


class Point2D(BaseModel):
    """Point in one of the 2D surface frames (wall, panel or roof plan)."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def distance_to(self, other: Point2D) -> float:
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)

    def lerp(self, other: Point2D, t: float) -> Point2D:
        return Point2D(
            x=self.x + (other.x - self.x) * t,
            y=self.y + (other.y - self.y) * t,
        )

    def is_close(self, other: Point2D, tolerance: float = 1e-6) -> bool:
        return abs(self.x - other.x) < tolerance and abs(self.y - other.y) < tolerance


class Rect(BaseModel):
    """Axis-aligned rectangle. `bottom` <= `top`, `left` <= `right`."""
    model_config = ConfigDict(frozen=True)

    left: float
    right: float
    bottom: float
    top: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom

    @property
    def center(self) -> Point2D:
        return Point2D(x=(self.left + self.right) / 2, y=(self.bottom + self.top) / 2)

    def corners(self) -> list[Point2D]:
        """Counter-clockwise from bottom-left."""
        return [
            Point2D(x=self.left, y=self.bottom),
            Point2D(x=self.right, y=self.bottom),
            Point2D(x=self.right, y=self.top),
            Point2D(x=self.left, y=self.top),
        ]

    def edges(self) -> list[tuple[Point2D, Point2D]]:
        """Bottom, right, top, left."""
        c = self.corners()
        return [(c[i], c[(i + 1) % 4]) for i in range(4)]

    def overlap_area(self, other: Rect) -> float:
        dx = min(self.right, other.right) - max(self.left, other.left)
        dy = min(self.top, other.top) - max(self.bottom, other.bottom)
        if dx <= 0 or dy <= 0:
            return 0.0
        return dx * dy

    @classmethod
    def centered(cls, cx: float, cy: float, width: float, height: float) -> Rect:
        return cls(
            left=cx - width / 2,
            right=cx + width / 2,
            bottom=cy - height / 2,
            top=cy + height / 2,
        )
