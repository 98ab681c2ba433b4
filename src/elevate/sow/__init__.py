"""States of the world: data model and sampler."""

from .spec import Ensemble, SamplerSpec, StateOfWorld
from .sampler import ScenarioSampler

__all__ = ["Ensemble", "SamplerSpec", "StateOfWorld", "ScenarioSampler"]
