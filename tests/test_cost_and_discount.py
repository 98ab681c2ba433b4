from __future__ import annotations

import numpy as np
import pytest

from elevate.economics.cost import ElevationCostModel
from elevate.economics.discount import discount_factors, validate_convention
from elevate.errors import ConfigurationError


def test_default_cost_schedule() -> None:
    m = ElevationCostModel()
    assert m.fixed_cost_usd == pytest.approx(20745.0)
    assert m.cost(0.0, 500.0) == 0.0
    assert m.cost(5.0, 500.0) == pytest.approx(20745.0 + 500.0 * 82.5)
    assert m.cost(14.0, 500.0) == pytest.approx(20745.0 + 500.0 * 113.75)
    # halfway between 8.5 and 12 ft
    assert m.rate(10.25) == pytest.approx(0.5 * (86.25 + 103.75))


def test_cost_is_monotone_in_elevation() -> None:
    m = ElevationCostModel()
    costs = [m.cost(h, 500.0) for h in np.linspace(0.0, 14.0, 57)]
    assert all(b >= a for a, b in zip(costs, costs[1:]))


def test_cost_domain_errors() -> None:
    m = ElevationCostModel()
    with pytest.raises(ValueError):
        m.cost(-0.1, 500.0)
    with pytest.raises(ValueError):
        m.cost(14.01, 500.0)
    with pytest.raises(ConfigurationError):
        ElevationCostModel(thresholds_ft=(1.0, 2.0), rates_usd_per_ft2=(1.0, 2.0))


def test_discount_factors_conventions() -> None:
    years = [2024, 2025, 2026]
    comp = discount_factors(0.05, years, "compound")
    frac = discount_factors(0.05, years, "fractional")
    assert comp[0] == 1.0 and frac[0] == 1.0
    assert comp[2] == pytest.approx(1.0 / 1.05 ** 2)
    assert frac[2] == pytest.approx(0.95 ** 2)
    assert discount_factors(0.05, [], "compound").size == 0


def test_unknown_convention_is_rejected() -> None:
    assert validate_convention(" Compound ") == "compound"
    with pytest.raises(ConfigurationError):
        validate_convention("continuous")
