from __future__ import annotations

import math

import numpy as np
import pytest

from elevate.errors import ConfigurationError, ReferenceDataError
from elevate.physics.depth_damage import DepthDamageFunction
from elevate.physics.slr import ParametricSLR, TabulatedSLR
from elevate.physics.surge import SurgeDistribution


def test_depth_damage_interpolates_and_extrapolates_flat() -> None:
    ddf = DepthDamageFunction.from_percent([-1.0, 0.0, 2.0], [0.0, 10.0, 30.0])
    assert ddf(-5.0) == 0.0
    assert ddf(1.0) == pytest.approx(0.2)
    assert ddf(10.0) == pytest.approx(0.3)
    out = ddf(np.array([[-1.0, 0.5], [2.0, 3.0]]))
    assert out.shape == (2, 2)
    assert out[1, 1] == pytest.approx(0.3)


@pytest.mark.parametrize(
    "depths,fractions",
    [
        ((0.0,), (0.1,)),
        ((0.0, 1.0), (0.1,)),
        ((1.0, 0.0), (0.1, 0.2)),
        ((0.0, 1.0), (0.1, 1.2)),
        ((0.0, float("nan")), (0.1, 0.2)),
    ],
)
def test_depth_damage_rejects_bad_tables(depths, fractions) -> None:
    with pytest.raises(ConfigurationError):
        DepthDamageFunction(depths_ft=depths, fractions=fractions)


def test_parametric_slr_formula() -> None:
    s = ParametricSLR(a=0.1, b=0.01, c=0.0001, tstar=2050.0, cstar=0.02)
    # before the breakpoint only the quadratic applies
    assert s(2040) == pytest.approx(0.1 + 0.01 * 40 + 0.0001 * 1600)
    # after it the linear acceleration term adds in
    assert s(2060) == pytest.approx(0.1 + 0.01 * 60 + 0.0001 * 3600 + 0.02 * 10)
    arr = s(np.array([2040.0, 2060.0]))
    assert isinstance(arr, np.ndarray) and arr.shape == (2,)


def test_parametric_slr_domain_error() -> None:
    s = ParametricSLR(a=0.0, b=0.01, c=0.0, tstar=2050.0, cstar=0.0, valid_years=(2000.0, 2100.0))
    assert math.isfinite(s(2100))
    with pytest.raises(ReferenceDataError):
        s(np.array([2090.0, 2101.0]))


def test_tabulated_slr_interpolates_and_refuses_extrapolation() -> None:
    s = TabulatedSLR(years=(2020.0, 2030.0), levels_ft=(0.0, 1.0))
    assert s(2025) == pytest.approx(0.5)
    with pytest.raises(ReferenceDataError):
        s(2031)
    with pytest.raises(ConfigurationError):
        TabulatedSLR(years=(2030.0, 2020.0), levels_ft=(0.0, 1.0))


@pytest.mark.parametrize("shape", [-0.2, 0.0, 0.1, 0.3])
def test_gev_cdf_at_location_is_exp_minus_one(shape: float) -> None:
    d = SurgeDistribution(loc=5.0, scale=1.5, shape=shape)
    assert float(d.cdf(5.0)) == pytest.approx(math.exp(-1.0), rel=1e-9)


def test_gev_heavy_tail_sign_convention() -> None:
    light = SurgeDistribution(5.0, 1.0, -0.1)
    heavy = SurgeDistribution(5.0, 1.0, 0.1)
    assert float(heavy.ppf(0.999)) > float(light.ppf(0.999))
    x = float(heavy.ppf(0.9))
    assert float(heavy.cdf(x)) == pytest.approx(0.9)


def test_degenerate_surge_has_no_density() -> None:
    d = SurgeDistribution(5.0, 0.0, 0.1)
    assert d.is_degenerate
    assert np.all(d.pdf(np.linspace(0.0, 10.0, 5)) == 0.0)
    rng = np.random.default_rng(0)
    assert np.all(d.sample(4, rng) == 5.0)
