"""Pytest session setup and shared toy models.

Puts ``src/`` on sys.path so the suite runs from a plain checkout, and
provides small closed-form studies used across test modules.

Author: © 2026 Afshin Arjhangmehr
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
DEMO_DIR = REPO_ROOT / "decks" / "demo"


def pytest_sessionstart(session):
    sys.dont_write_bytecode = True
    rs = str(REPO_ROOT / "src")
    if rs not in sys.path:
        sys.path.insert(0, rs)


@pytest.fixture
def demo_dir() -> Path:
    return DEMO_DIR


@pytest.fixture
def linear_house():
    """Damage fraction linear in depth over [-20, 20] ft, so EAD is linear in elevation."""
    from elevate.models.inputs import HouseAsset
    from elevate.physics.depth_damage import DepthDamageFunction

    ddf = DepthDamageFunction(depths_ft=(-20.0, 20.0), fractions=(0.0, 1.0), label="linear")
    return HouseAsset(area_ft2=100.0, height_above_gauge_ft=5.0, value_usd=40_000.0, ddf=ddf)


@pytest.fixture
def kinked_cost_model():
    """Cost slope 1000 USD/ft up to 7 ft, 100000 USD/ft above (area 100 ft²)."""
    from elevate.economics.cost import ElevationCostModel

    return ElevationCostModel(thresholds_ft=(0.0, 7.0, 14.0), rates_usd_per_ft2=(0.0, 70.0, 7070.0),
                              fixed_cost_usd=100.0)


@pytest.fixture
def flat_slr():
    from elevate.physics.slr import ParametricSLR

    return ParametricSLR(a=1.0, b=0.0, c=0.0, tstar=2000.0, cstar=0.0)


@pytest.fixture
def two_sow_ensemble(flat_slr):
    from elevate.physics.surge import SurgeDistribution
    from elevate.sow.spec import Ensemble, StateOfWorld

    return Ensemble.of([
        StateOfWorld(slr=flat_slr, surge=SurgeDistribution(5.0, 0.5, 0.1), discount_rate=0.02),
        StateOfWorld(slr=flat_slr, surge=SurgeDistribution(5.5, 0.4, 0.05), discount_rate=0.04),
    ], label="toy")


@pytest.fixture
def structure_house():
    """One-story structure curve (percent damage by depth, -4..16 ft)."""
    from elevate.models.inputs import HouseAsset
    from elevate.physics.depth_damage import DepthDamageFunction

    depths = list(range(-4, 17))
    pct = [0, 0, 0, 0, 7.5, 14.5, 20.5, 25.5, 29.5, 33, 36, 38.5, 40.5, 42.5, 44, 45.5, 46.5, 47.5, 48.5, 49, 49.5]
    ddf = DepthDamageFunction.from_percent(depths, pct, label="one story")
    return HouseAsset(area_ft2=500.0, height_above_gauge_ft=4.0, value_usd=250_000.0, ddf=ddf)


@pytest.fixture
def rising_slr():
    from elevate.physics.slr import ParametricSLR

    return ParametricSLR(a=0.05, b=0.0098, c=0.000021, tstar=2040.0, cstar=0.012)
