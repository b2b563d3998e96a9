import sys
from pathlib import Path

import pytest


# Ensure project root is importable for tests
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


from services.splits_service import SplitsService
from utils.elevation import ElevationPoint


@pytest.fixture
def splits_service() -> SplitsService:
    return SplitsService()


@pytest.fixture
def flat_profile() -> list[ElevationPoint]:
    return [ElevationPoint(distance=float(d), elevation=120.0) for d in range(0, 14)] + [
        ElevationPoint(distance=13.1, elevation=120.0)
    ]


@pytest.fixture
def uphill_profile() -> list[ElevationPoint]:
    return [ElevationPoint(distance=0.0, elevation=0.0), ElevationPoint(distance=13.1, elevation=500.0)]


@pytest.fixture
def half_marathon_profile() -> list[ElevationPoint]:
    """Brooklyn to Manhattan half marathon: long descent, bridge climb, flat finish."""
    points = [
        (0, 85),
        (1, 80),
        (2, 75),
        (3, 65),
        (4, 55),
        (5, 45),
        (6, 35),
        (7, 125),
        (7.5, 135),
        (8, 130),
        (8.5, 45),
        (9, 35),
        (10, 30),
        (11, 25),
        (12, 20),
        (13, 15),
        (13.1, 15),
    ]
    return [ElevationPoint(distance=float(d), elevation=float(e)) for d, e in points]
