"""FastAPI route definitions."""

from __future__ import annotations
from typing import Any

from fastapi import APIRouter, Body, Depends

from shedcore.api.schemas import (
    BeamsRequest, DimensionsUpdate, RoofLinesRequest, RoofLinesResponse, RuleInfo,
)
from shedcore.core.beams import generate_wall_beams
from shedcore.core.roof_lines import generate_roof_line_segments, validate_roof_line_segments
from shedcore.models import (
    BeamLayout, Building, DimensionChangeResult, MutationResult, WallBoundsProtection,
    WallPosition,
)
from shedcore.services.building_service import BuildingService

router = APIRouter()

# Shared service instance
_service = BuildingService()


def get_service() -> BuildingService:
    return _service


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/rules", response_model=list[RuleInfo])
async def list_rules(service: BuildingService = Depends(get_service)) -> list[RuleInfo]:
    """List all registered validation rules."""
    return [RuleInfo(**r) for r in service.list_rules()]


@router.get("/building", response_model=Building)
async def get_building(service: BuildingService = Depends(get_service)) -> Building:
    return service.building


@router.post("/roof-lines", response_model=RoofLinesResponse)
async def roof_lines(request: RoofLinesRequest) -> RoofLinesResponse:
    """Trim the roof lines of an arbitrary footprint around its skylights."""
    segments = generate_roof_line_segments(request.footprint, request.skylights)
    validation = validate_roof_line_segments(segments, request.skylights, request.footprint)
    return RoofLinesResponse(segments=segments, validation=validation)


@router.post("/beams", response_model=BeamLayout)
async def beams(request: BeamsRequest) -> BeamLayout:
    """Segment the beams of an arbitrary wall around its features."""
    return generate_wall_beams(
        request.wall_width, request.wall_height, request.features, request.config,
    )


@router.get("/walls/{wall}/beams", response_model=BeamLayout)
async def wall_beams(wall: WallPosition, service: BuildingService = Depends(get_service)) -> BeamLayout:
    return service.wall_beams(wall)


@router.get("/walls/{wall}/protection", response_model=WallBoundsProtection)
async def wall_protection(
    wall: WallPosition, service: BuildingService = Depends(get_service),
) -> WallBoundsProtection:
    return service.get_wall_protection_status(wall)


@router.post("/features", response_model=MutationResult)
async def add_feature(
    payload: dict[str, Any] = Body(...), service: BuildingService = Depends(get_service),
) -> MutationResult:
    return service.try_add_feature(payload)


@router.patch("/features/{feature_id}", response_model=MutationResult)
async def update_feature(
    feature_id: str,
    changes: dict[str, Any] = Body(...),
    service: BuildingService = Depends(get_service),
) -> MutationResult:
    return service.try_update_feature(feature_id, changes)


@router.delete("/features/{feature_id}", response_model=MutationResult)
async def delete_feature(feature_id: str, service: BuildingService = Depends(get_service)) -> MutationResult:
    return service.remove_feature(feature_id)


@router.post("/skylights", response_model=MutationResult)
async def add_skylight(
    payload: dict[str, Any] = Body(...), service: BuildingService = Depends(get_service),
) -> MutationResult:
    return service.try_add_skylight(payload)


@router.patch("/skylights/{index}", response_model=MutationResult)
async def update_skylight(
    index: int,
    changes: dict[str, Any] = Body(...),
    service: BuildingService = Depends(get_service),
) -> MutationResult:
    return service.try_update_skylight(index, changes)


@router.delete("/skylights/{index}", response_model=MutationResult)
async def delete_skylight(index: int, service: BuildingService = Depends(get_service)) -> MutationResult:
    return service.remove_skylight(index)


@router.patch("/dimensions", response_model=DimensionChangeResult)
async def update_dimensions(
    request: DimensionsUpdate, service: BuildingService = Depends(get_service),
) -> DimensionChangeResult:
    return service.try_update_dimensions(request.model_dump(exclude_none=True))
