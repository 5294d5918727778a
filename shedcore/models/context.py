"""Change context: everything a validation pass needs to judge one proposed mutation."""

from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, Field

from .building import Building, Feature, Skylight
from .parameters import RuleConfig, ValidationParams


class ChangeKind(str, Enum):
    ADD_FEATURE = "add_feature"
    UPDATE_FEATURE = "update_feature"
    ADD_SKYLIGHT = "add_skylight"
    UPDATE_SKYLIGHT = "update_skylight"
    UPDATE_DIMENSIONS = "update_dimensions"


class ChangeContext(BaseModel):
    """
    Holds the current and proposed aggregate for a single validation pass.

    The service builds the proposed aggregate, rules inspect it, and the
    validator merges their verdicts. Nothing here is committed.
    """
    kind: ChangeKind
    current: Building
    proposed: Building
    params: ValidationParams = Field(default_factory=ValidationParams)
    config: RuleConfig = Field(default_factory=RuleConfig)

    # Subject of the change
    subject_id: str | None = None       # Feature id
    subject_index: int | None = None    # Skylight index
    changed_fields: list[str] = []      # Footprint fields for dimension changes

    @property
    def is_feature_change(self) -> bool:
        return self.kind in (ChangeKind.ADD_FEATURE, ChangeKind.UPDATE_FEATURE)

    @property
    def is_skylight_change(self) -> bool:
        return self.kind in (ChangeKind.ADD_SKYLIGHT, ChangeKind.UPDATE_SKYLIGHT)

    def subject_feature(self) -> Feature | None:
        if self.subject_id is None:
            return None
        return self.proposed.get_feature(self.subject_id)

    def subject_skylight(self) -> Skylight | None:
        if self.subject_index is None or not 0 <= self.subject_index < len(self.proposed.skylights):
            return None
        return self.proposed.skylights[self.subject_index]

    def sibling_features(self) -> list[Feature]:
        """Other features on the subject feature's wall."""
        feature = self.subject_feature()
        if feature is None:
            return []
        return [
            f for f in self.proposed.features_on_wall(feature.wall_position)
            if f.id != feature.id
        ]
