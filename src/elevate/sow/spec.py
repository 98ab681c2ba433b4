from __future__ import annotations

"""States of the world and ensembles.

A state of the world (SOW) is one plausible future: a sea-level trajectory,
a parameterized annual surge-peak distribution and a discount rate. SOWs are
frozen and shared read-only by every evaluation of a run.

An ``Ensemble`` is drawn once per run and never resampled during a search,
so the objective surface seen by the optimizer is fixed and repeatable.

Author: © 2026 Afshin Arjhangmehr
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional, Sequence, Tuple

from ..errors import ConfigurationError
from ..fingerprint import stable_sha256
from ..physics.surge import SurgeDistribution


def _trajectory_dict(slr: Any) -> Any:
    to_dict = getattr(slr, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return repr(slr)


@dataclass(frozen=True)
class StateOfWorld:
    slr: Callable[..., Any]
    surge: SurgeDistribution
    discount_rate: float

    def __post_init__(self) -> None:
        if not (float(self.discount_rate) > 0.0):
            raise ConfigurationError(f"discount rate must be > 0, got {self.discount_rate!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slr": _trajectory_dict(self.slr),
            "surge": self.surge.to_dict(),
            "discount_rate": float(self.discount_rate),
        }


@dataclass(frozen=True)
class SamplerSpec:
    """Stochastic models for SOW draws.

    surge location ~ Normal(surge_loc_mean, surge_loc_sd)
    surge scale    ~ Exponential(mean = surge_scale_mean)
    surge shape    ~ Normal(surge_shape_mean, surge_shape_sd)
    discount rate  ~ Normal(discount_mean, discount_sd); non-positive draws
                     are replaced by discount_rate_floor
    """
    surge_loc_mean: float = 5.0
    surge_loc_sd: float = 1.0
    surge_scale_mean: float = 1.5
    surge_shape_mean: float = 0.1
    surge_shape_sd: float = 0.05
    discount_mean: float = 0.05
    discount_sd: float = 0.03
    discount_rate_floor: float = 0.001

    def __post_init__(self) -> None:
        if self.surge_loc_sd < 0.0 or self.surge_shape_sd < 0.0 or self.discount_sd < 0.0:
            raise ConfigurationError("sampler standard deviations must be non-negative")
        if not (self.surge_scale_mean > 0.0):
            raise ConfigurationError("surge scale mean must be > 0")
        if not (self.discount_rate_floor > 0.0):
            raise ConfigurationError("discount rate floor must be > 0")

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.__dict__)

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> "SamplerSpec":
        d = dict(d or {})
        known = set(SamplerSpec.__dataclass_fields__)
        unknown = sorted(set(d) - known)
        if unknown:
            raise ConfigurationError(f"unknown sampler settings: {unknown}")
        return SamplerSpec(**{k: float(v) for k, v in d.items()})


@dataclass(frozen=True)
class Ensemble:
    sows: Tuple[StateOfWorld, ...]
    seed: Optional[int] = None
    label: str = ""

    def __post_init__(self) -> None:
        if len(self.sows) == 0:
            raise ConfigurationError("ensemble must contain at least one state of the world")

    @staticmethod
    def of(sows: Sequence[StateOfWorld], *, seed: Optional[int] = None, label: str = "") -> "Ensemble":
        return Ensemble(sows=tuple(sows), seed=seed, label=str(label))

    def __len__(self) -> int:
        return len(self.sows)

    def __iter__(self) -> Iterator[StateOfWorld]:
        return iter(self.sows)

    def __getitem__(self, i: int) -> StateOfWorld:
        return self.sows[i]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": "sow_ensemble.v1",
            "label": self.label,
            "seed": self.seed,
            "n_sows": len(self.sows),
            "sows": [s.to_dict() for s in self.sows],
        }

    def digest(self) -> str:
        """SHA-256 over the SOW contents (label excluded)."""
        return stable_sha256([s.to_dict() for s in self.sows])
