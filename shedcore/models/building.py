"""Building models: the footprint, its wall features and skylights, and the owned aggregate."""

from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class WallPosition(str, Enum):
    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"


class RoofPanel(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class FeatureType(str, Enum):
    DOOR = "door"
    WINDOW = "window"
    ROLLUP_DOOR = "rollupDoor"
    WALK_DOOR = "walkDoor"


class Footprint(BaseModel):
    """Overall building parameters (feet)."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    width: float = Field(default=30.0, gt=0)     # Span of the front/back walls
    length: float = Field(default=40.0, gt=0)    # Span of the left/right walls
    height: float = Field(default=12.0, gt=0)    # Eave height of every wall
    roof_pitch: float = Field(default=4.0, ge=0)  # Rise per 12 units of run

    @property
    def ridge_rise(self) -> float:
        return (self.width / 2) * (self.roof_pitch / 12)


class FeaturePosition(BaseModel):
    """Where a feature sits on its wall."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    wall_position: WallPosition
    alignment: Alignment = Alignment.CENTER
    x_offset: float = 0.0  # From the aligned edge, or from the wall center
    y_offset: float = 0.0  # Height of the feature's bottom above the floor line


class Feature(BaseModel):
    """A rectangular wall opening (door, window, ...)."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = ""
    type: FeatureType
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    position: FeaturePosition
    color: str | None = None

    @property
    def wall_position(self) -> WallPosition:
        return self.position.wall_position

    @property
    def bottom(self) -> float:
        return self.position.y_offset

    @property
    def top(self) -> float:
        return self.position.y_offset + self.height

    @property
    def label(self) -> str:
        return f"{self.type.value} ({self.id})" if self.id else self.type.value


class Skylight(BaseModel):
    """A rectangular opening on one roof panel."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    width: float = Field(gt=0)    # Across the panel (eave to ridge direction)
    length: float = Field(gt=0)   # Along the ridge
    x_offset: float = 0.0         # From the panel's own centerline
    y_offset: float = 0.0         # Along the ridge, from mid-length
    panel: RoofPanel = RoofPanel.LEFT


class Building(BaseModel):
    """
    The owned aggregate: footprint plus every feature and skylight.

    Frozen. Every change produces a new aggregate, so a rejected change
    can never leave a partially applied model behind.
    """
    model_config = ConfigDict(frozen=True)

    footprint: Footprint = Field(default_factory=Footprint)
    features: list[Feature] = []
    skylights: list[Skylight] = []

    def get_feature(self, feature_id: str) -> Feature | None:
        for f in self.features:
            if f.id == feature_id:
                return f
        return None

    def features_on_wall(self, wall_position: WallPosition) -> list[Feature]:
        return [f for f in self.features if f.wall_position == wall_position]

    def wall_width(self, wall_position: WallPosition) -> float:
        if wall_position in (WallPosition.FRONT, WallPosition.BACK):
            return self.footprint.width
        return self.footprint.length

    def with_footprint(self, footprint: Footprint) -> Building:
        return self.model_copy(update={"footprint": footprint})

    def with_feature(self, feature: Feature) -> Building:
        return self.model_copy(update={"features": [*self.features, feature]})

    def replace_feature(self, feature: Feature) -> Building:
        features = [feature if f.id == feature.id else f for f in self.features]
        return self.model_copy(update={"features": features})

    def without_feature(self, feature_id: str) -> Building:
        features = [f for f in self.features if f.id != feature_id]
        return self.model_copy(update={"features": features})

    def with_skylight(self, skylight: Skylight) -> Building:
        return self.model_copy(update={"skylights": [*self.skylights, skylight]})

    def replace_skylight(self, index: int, skylight: Skylight) -> Building:
        skylights = [skylight if i == index else s for i, s in enumerate(self.skylights)]
        return self.model_copy(update={"skylights": skylights})

    def without_skylight(self, index: int) -> Building:
        skylights = [s for i, s in enumerate(self.skylights) if i != index]
        return self.model_copy(update={"skylights": skylights})
