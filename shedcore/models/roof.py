"""Roof line models — canonical lines and the trimmed segments derived from them."""

from __future__ import annotations
import math
from enum import Enum
from pydantic import BaseModel, ConfigDict

from .building import RoofPanel
from .geometry import Point2D, Rect


class RoofLineType(str, Enum):
    RIDGE = "ridge"
    EAVE = "eave"
    RAKE = "rake"
    VALLEY = "valley"
    HIP = "hip"


class LinePanel(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    BOTH = "both"


class RoofLine(BaseModel):
    """A straight line on the roof plan (ridge on x=0, eaves on x=±width/2)."""
    model_config = ConfigDict(frozen=True)

    id: str
    start_x: float
    start_y: float
    end_x: float
    end_y: float
    type: RoofLineType
    panel: LinePanel

    @property
    def start(self) -> Point2D:
        return Point2D(x=self.start_x, y=self.start_y)

    @property
    def end(self) -> Point2D:
        return Point2D(x=self.end_x, y=self.end_y)

    @property
    def length(self) -> float:
        return math.hypot(self.end_x - self.start_x, self.end_y - self.start_y)

    def spans_panel(self, panel: RoofPanel) -> bool:
        return self.panel == LinePanel.BOTH or self.panel.value == panel.value


class RoofLineSegment(RoofLine):
    """A visible piece of a roof line, traceable to the line it was cut from."""
    original_line_id: str


class SkylightRect(Rect):
    """A skylight's footprint on the roof plan."""
    panel: RoofPanel
    index: int = 0
