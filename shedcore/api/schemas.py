"""API request/response schemas."""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field

from shedcore.models import (
    BeamConfig, Feature, Footprint, RoofLineSegment, RoofLineValidation, Skylight,
)


class RoofLinesRequest(BaseModel):
    """Request body for the /roof-lines endpoint."""
    footprint: Footprint = Footprint()
    skylights: list[Skylight] = []


class RoofLinesResponse(BaseModel):
    """Trimmed segments plus the read-only validation pass over them."""
    segments: list[RoofLineSegment]
    validation: RoofLineValidation


class BeamsRequest(BaseModel):
    """Request body for the /beams endpoint."""
    wall_width: float = Field(gt=0)
    wall_height: float = Field(gt=0)
    features: list[Feature] = []
    config: BeamConfig = BeamConfig()


class DimensionsUpdate(BaseModel):
    """
    Partial footprint update.

    Values are left unconstrained here so that out-of-range input comes
    back as a rejected change rather than a request error. Unknown keys
    are passed through for the same reason.
    """
    model_config = ConfigDict(extra="allow")

    width: float | None = None
    length: float | None = None
    height: float | None = None
    roof_pitch: float | None = None


class RuleInfo(BaseModel):
    id: str
    name: str
