"""Shared test fixtures for camera coverage tests."""
import pytest
from shared.types import WallSegment
from cameras.config import Camera, CoverageConfig

PPM = 17.5


@pytest.fixture(scope="session")
def ppm():
    return PPM


@pytest.fixture(scope="session")
def room():
    """Closed 20 x 10 room (pixels), camera-friendly center at (10, 5)."""
    return [
        WallSegment((0, 0), (20, 0)),
        WallSegment((20, 0), (20, 10)),
        WallSegment((20, 10), (0, 10)),
        WallSegment((0, 10), (0, 0)),
    ]


@pytest.fixture(scope="session")
def east_wall():
    """Single vertical wall 50 px east of the origin."""
    return [WallSegment((50, -100), (50, 100))]


@pytest.fixture
def config(ppm):
    """Fresh 90 degree wedge, 100 px radius, no dead zone, facing east-south."""
    return CoverageConfig.defaults(ppm, start_angle=0, end_angle=90, radius=100)


@pytest.fixture
def camera(config):
    return Camera((0.0, 0.0), config, "Test")
