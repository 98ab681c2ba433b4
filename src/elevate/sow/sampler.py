from __future__ import annotations

"""Scenario sampler.

Draws independent states of the world from the models in ``SamplerSpec``.
The random stream is an explicitly owned ``numpy.random.Generator``; nothing
here touches global random state, so two samplers never interfere.

Draw order per SOW is fixed (trajectory, surge loc, scale, shape, discount
rate). Changing it changes every seeded ensemble.
"""

import logging
from typing import Any, Callable, Iterator, List, Optional, Sequence

import numpy as np

from ..errors import ConfigurationError
from ..physics.surge import SurgeDistribution
from .spec import Ensemble, SamplerSpec, StateOfWorld

logger = logging.getLogger(__name__)


class ScenarioSampler:
    def __init__(
        self,
        trajectories: Sequence[Callable[..., Any]],
        spec: Optional[SamplerSpec] = None,
        rng: Optional[np.random.Generator] = None,
        *,
        seed: Optional[int] = None,
    ):
        self.trajectories = tuple(trajectories)
        if not self.trajectories:
            raise ConfigurationError("scenario sampler needs at least one SLR trajectory")
        self.spec = spec or SamplerSpec()
        if rng is not None and seed is not None:
            raise ConfigurationError("pass either rng or seed, not both")
        self.seed = seed
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    @classmethod
    def from_seed(
        cls,
        trajectories: Sequence[Callable[..., Any]],
        seed: int,
        spec: Optional[SamplerSpec] = None,
    ) -> "ScenarioSampler":
        return cls(trajectories, spec, seed=int(seed))

    def draw_surge(self) -> SurgeDistribution:
        sp = self.spec
        loc = self.rng.normal(sp.surge_loc_mean, sp.surge_loc_sd)
        scale = self.rng.exponential(sp.surge_scale_mean)
        shape = self.rng.normal(sp.surge_shape_mean, sp.surge_shape_sd)
        return SurgeDistribution(loc=float(loc), scale=float(scale), shape=float(shape))

    def draw_discount_rate(self) -> float:
        sp = self.spec
        r = float(self.rng.normal(sp.discount_mean, sp.discount_sd))
        return r if r > 0.0 else float(sp.discount_rate_floor)

    def draw(self) -> StateOfWorld:
        i = int(self.rng.integers(len(self.trajectories)))
        surge = self.draw_surge()
        rate = self.draw_discount_rate()
        return StateOfWorld(slr=self.trajectories[i], surge=surge, discount_rate=rate)

    def iter_draws(self, n: int) -> Iterator[StateOfWorld]:
        for _ in range(int(n)):
            yield self.draw()

    def sample(self, n: int, *, label: str = "") -> Ensemble:
        if int(n) < 1:
            raise ConfigurationError(f"ensemble size must be >= 1, got {n}")
        sows: List[StateOfWorld] = list(self.iter_draws(int(n)))
        ens = Ensemble.of(sows, seed=self.seed, label=label)
        logger.debug("sampled %d SOWs (seed=%s, digest=%s)", len(ens), self.seed, ens.digest()[:12])
        return ens
