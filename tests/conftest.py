# File: tests/conftest.py

"""Shared fixtures: a default footprint and feature/skylight builders."""

import pytest

from shedcore.models import (
    Alignment, Building, Feature, FeaturePosition, FeatureType, Footprint,
    RoofPanel, Skylight, WallPosition,
)
from shedcore.services.building_service import BuildingService


def make_feature(
    wall: str = "front",
    width: float = 3.0,
    height: float = 7.0,
    x_offset: float = 0.0,
    y_offset: float = 0.0,
    alignment: str = "center",
    feature_id: str = "",
    kind: str = "door",
) -> Feature:
    """Build a feature from plain values."""
    return Feature(
        id=feature_id,
        type=FeatureType(kind),
        width=width,
        height=height,
        position=FeaturePosition(
            wall_position=WallPosition(wall),
            alignment=Alignment(alignment),
            x_offset=x_offset,
            y_offset=y_offset,
        ),
    )


def make_skylight(
    width: float = 4.0,
    length: float = 4.0,
    x_offset: float = 0.0,
    y_offset: float = 0.0,
    panel: str = "left",
) -> Skylight:
    return Skylight(
        width=width, length=length, x_offset=x_offset, y_offset=y_offset,
        panel=RoofPanel(panel),
    )


def door_payload(**position) -> dict:
    """Feature payload as a client would send it."""
    pos = {"wall_position": "front", "alignment": "center", "x_offset": 0, "y_offset": 0}
    pos.update(position)
    return {"type": "door", "width": 3, "height": 7, "position": pos}


@pytest.fixture
def footprint():
    """The default 30 x 40 x 12 building, pitch 4."""
    return Footprint(width=30, length=40, height=12, roof_pitch=4)


@pytest.fixture
def front_door():
    return make_feature(feature_id="front-door")


@pytest.fixture
def building_with_door(footprint, front_door):
    return Building(footprint=footprint, features=[front_door])


@pytest.fixture
def service():
    """A fresh service around the default building."""
    return BuildingService()
