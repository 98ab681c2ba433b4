from __future__ import annotations

import numpy as np
import pytest

from elevate.errors import ConfigurationError
from elevate.physics.slr import ParametricSLR
from elevate.sow.sampler import ScenarioSampler
from elevate.sow.spec import Ensemble, SamplerSpec, StateOfWorld


def _trajectories():
    return [ParametricSLR(a=0.01 * i, b=0.01, c=0.0, tstar=2050.0, cstar=0.0) for i in range(3)]


def test_same_seed_same_ensemble() -> None:
    trajs = _trajectories()
    e1 = ScenarioSampler.from_seed(trajs, 1234).sample(50)
    e2 = ScenarioSampler.from_seed(trajs, 1234).sample(50)
    assert e1.sows == e2.sows
    assert e1.digest() == e2.digest()

    e3 = ScenarioSampler.from_seed(trajs, 1235).sample(50)
    assert e3.digest() != e1.digest()


def test_samplers_do_not_share_random_state() -> None:
    trajs = _trajectories()
    a = ScenarioSampler.from_seed(trajs, 7)
    b = ScenarioSampler.from_seed(trajs, 7)
    np.random.seed(0)
    first = a.draw()
    np.random.random(100)  # global stream must not matter
    assert b.draw() == first


def test_explicit_generator_is_used() -> None:
    trajs = _trajectories()
    s1 = ScenarioSampler(trajs, rng=np.random.default_rng(99))
    s2 = ScenarioSampler(trajs, seed=99)
    assert s1.sample(10).sows == s2.sample(10).sows


def test_discount_rate_floor_applies() -> None:
    spec = SamplerSpec(discount_mean=-1.0, discount_sd=0.01, discount_rate_floor=0.002)
    ens = ScenarioSampler.from_seed(_trajectories(), 3, spec).sample(25)
    assert all(s.discount_rate == 0.002 for s in ens)


def test_small_positive_discount_draw_is_kept() -> None:
    spec = SamplerSpec(discount_mean=0.0005, discount_sd=0.0, discount_rate_floor=0.001)
    sampler = ScenarioSampler.from_seed(_trajectories(), 5, spec)
    assert sampler.draw().discount_rate == 0.0005
    assert sampler.draw_discount_rate() == 0.0005


def test_zero_discount_draw_is_floored() -> None:
    spec = SamplerSpec(discount_mean=0.0, discount_sd=0.0, discount_rate_floor=0.001)
    assert ScenarioSampler.from_seed(_trajectories(), 5, spec).draw().discount_rate == 0.001


def test_draws_cover_trajectories_and_positive_scale() -> None:
    trajs = _trajectories()
    ens = ScenarioSampler.from_seed(trajs, 11).sample(300)
    used = {id(s.slr) for s in ens}
    assert used == {id(t) for t in trajs}
    assert all(s.surge.scale > 0.0 for s in ens)
    locs = np.array([s.surge.loc for s in ens])
    assert abs(float(locs.mean()) - 5.0) < 0.3


def test_sampler_configuration_errors() -> None:
    with pytest.raises(ConfigurationError):
        ScenarioSampler([], seed=1)
    with pytest.raises(ConfigurationError):
        ScenarioSampler.from_seed(_trajectories(), 1).sample(0)
    with pytest.raises(ConfigurationError):
        SamplerSpec.from_dict({"surge_loc_mena": 5.0})
    with pytest.raises(ConfigurationError):
        Ensemble.of([])


def test_sow_requires_positive_discount_rate(flat_slr) -> None:
    from elevate.physics.surge import SurgeDistribution

    with pytest.raises(ConfigurationError):
        StateOfWorld(slr=flat_slr, surge=SurgeDistribution(5.0, 1.0, 0.1), discount_rate=0.0)
