"""Engine parameters and rule configuration."""

from __future__ import annotations
from pydantic import BaseModel, Field, model_validator


class BeamConfig(BaseModel):
    """Spacing rules for wall beams (feet)."""
    max_spacing: float = Field(default=8.0, gt=0)    # Center-to-center ceiling
    min_spacing: float = Field(default=4.0, ge=0)    # Yields to min_beams on narrow walls
    margin: float = Field(default=2.0, ge=0)         # Inset of the outer beams from wall edges
    beam_width: float = Field(default=0.3, gt=0)
    min_beams: int = Field(default=3, ge=1)
    height_ratios: list[float] = [0.25, 0.5, 0.75]  # Horizontal rows, fraction of wall height
    beam_height: float = Field(default=0.3, gt=0)    # Depth of horizontal members

    @model_validator(mode="after")
    def _check_spacing(self) -> BeamConfig:
        if self.min_spacing > self.max_spacing:
            raise ValueError("min_spacing must not exceed max_spacing")
        for ratio in self.height_ratios:
            if not 0.0 <= ratio <= 1.0:
                raise ValueError(f"height ratio {ratio} outside [0, 1]")
        return self


class RoofLineParams(BaseModel):
    """Density of the decorative roof lines."""
    ridge_detail_spacing: float = Field(default=4.0, gt=0)  # Along the length
    panel_valley_spacing: float = Field(default=3.0, gt=0)  # Across the width
    ridge_detail_extent: float = 0.8  # Fraction of the half-width covered
    valley_extent: float = 0.9        # Fraction of the half-length covered


class ValidationParams(BaseModel):
    """Margins and thresholds used by the validators (feet unless noted)."""
    skylight_edge_margin: float = 1.0     # Keep-out band along every panel edge
    skylight_warning_margin: float = 0.5  # Proximity warning band inside the bound
    corner_clearance: float = 2.0         # Keep-out zone at each wall end for edge posts
    feature_warning_margin: float = 0.5
    stack_density_threshold: float = 0.8  # Ratio of stacked height to wall height
    opening_ratio_threshold: float = 0.4  # Ratio of opening area to total wall area
    head_clearance: float = 1.0           # Features closer than this to the top lock the height


class RuleConfig(BaseModel):
    """Controls which validation rules are applied."""
    enabled_rules: list[str] = []   # Empty = use all registered rules
    disabled_rules: list[str] = []  # Explicitly disable specific rules
