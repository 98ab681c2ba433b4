from __future__ import annotations

"""Scenario evaluators.

An evaluator turns one (decision, state of the world) pair into a net present
cost in USD:

    cost = construction(Δh) + Σ_years discount(year) · EAD(year)

where EAD is the expected annual flood damage for that year under the SOW's
surge distribution. Two interchangeable implementations share this contract:

- ``QuadratureEvaluator``: EAD by fixed-node trapezoidal integration of
  damage × surge pdf. Deterministic and cheap; used by the optimizer.
- ``MonteCarloEvaluator``: EAD by averaging damage over random surge draws.
  Kept as the reference the quadrature result is checked against.

Evaluators are pure with respect to the SOW and decision: nothing shared is
mutated. The quadrature node cache is an acceleration feature only; it must
not change numerical results.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np
from scipy.integrate import trapezoid

from ..economics.cost import ElevationCostModel
from ..economics.discount import discount_factors, validate_convention
from ..errors import ConfigurationError
from ..models.inputs import Decision, ModelParams
from ..physics.damage_model import DEFAULT_DAMAGE_MODEL, DamageModel
from ..physics.surge import SurgeDistribution
from ..sow.spec import StateOfWorld
from .quadrature import surge_nodes

EVALUATOR_METHODS = ("quadrature", "monte_carlo")


@dataclass(frozen=True)
class EvaluatorSpec:
    method: str = "quadrature"
    # Quadrature: number of surge nodes and the quantile span they cover
    n_nodes: int = 130
    q_lo: float = 0.0005
    q_hi: float = 0.9995
    # Monte Carlo: surge draws per year, and the seed of its own generator
    n_samples: int = 10_000
    seed: Optional[int] = None
    discounting: str = "compound"

    def __post_init__(self) -> None:
        if self.method not in EVALUATOR_METHODS:
            raise ConfigurationError(f"unknown evaluator method {self.method!r}; expected {EVALUATOR_METHODS}")
        if int(self.n_nodes) < 2:
            raise ConfigurationError(f"quadrature needs at least 2 nodes, got {self.n_nodes}")
        if not (0.0 < float(self.q_lo) < float(self.q_hi) < 1.0):
            raise ConfigurationError(f"quadrature quantiles must satisfy 0 < q_lo < q_hi < 1, got ({self.q_lo}, {self.q_hi})")
        if int(self.n_samples) < 1:
            raise ConfigurationError(f"Monte Carlo sample count must be >= 1, got {self.n_samples}")
        validate_convention(self.discounting)

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> "EvaluatorSpec":
        d = dict(d or {})
        unknown = sorted(set(d) - set(EvaluatorSpec.__dataclass_fields__))
        if unknown:
            raise ConfigurationError(f"unknown evaluator settings: {unknown}")
        return EvaluatorSpec(**d)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.__dict__)


class ScenarioEvaluator:
    """Base class: construction cost, discounting and the total.

    Subclasses provide ``annual_expected_damages``.
    """

    method = "abstract"

    def __init__(
        self,
        spec: Optional[EvaluatorSpec] = None,
        *,
        cost_model: Optional[ElevationCostModel] = None,
        damage_model: Optional[DamageModel] = None,
    ):
        self.spec = spec or EvaluatorSpec(method=self.method)
        self.cost_model = cost_model or ElevationCostModel()
        self.damage_model = damage_model or DEFAULT_DAMAGE_MODEL
        self.discounting = validate_convention(self.spec.discounting)

    def construction_cost(self, decision: Decision, params: ModelParams) -> float:
        return self.cost_model.cost(decision.elevation_ft, params.house.area_ft2)

    def annual_expected_damages(self, decision: Decision, sow: StateOfWorld, params: ModelParams) -> np.ndarray:
        raise NotImplementedError

    def _depths(self, surges: np.ndarray, decision: Decision, sow: StateOfWorld, params: ModelParams) -> np.ndarray:
        """Flood depth at the house, shape (n_years, n_surges)."""
        slr = np.asarray(self.damage_model.sea_level(sow.slr, params.years_array), dtype=float).reshape(-1, 1)
        floor = float(params.house.height_above_gauge_ft) + float(decision.elevation_ft)
        return surges + slr - floor

    def discounted_damages(self, decision: Decision, sow: StateOfWorld, params: ModelParams) -> np.ndarray:
        ead = self.annual_expected_damages(decision, sow, params)
        return ead * discount_factors(sow.discount_rate, params.years_array, self.discounting)

    def evaluate(self, decision: Decision, sow: StateOfWorld, params: ModelParams) -> float:
        construction = self.construction_cost(decision, params)
        damages = self.discounted_damages(decision, sow, params)
        return float(construction + float(np.sum(damages)))

    def breakdown(self, decision: Decision, sow: StateOfWorld, params: ModelParams) -> Dict[str, Any]:
        ead = self.annual_expected_damages(decision, sow, params)
        df = discount_factors(sow.discount_rate, params.years_array, self.discounting)
        construction = self.construction_cost(decision, params)
        npv_damage = float(np.sum(ead * df))
        return {
            "method": self.method,
            "elevation_ft": float(decision.elevation_ft),
            "construction_usd": float(construction),
            "npv_damage_usd": npv_damage,
            "total_usd": float(construction + npv_damage),
            "years": list(params.years),
            "ead_usd": ead.tolist(),
            "discount_factors": df.tolist(),
        }


class QuadratureEvaluator(ScenarioEvaluator):
    method = "quadrature"

    def __init__(
        self,
        spec: Optional[EvaluatorSpec] = None,
        *,
        cost_model: Optional[ElevationCostModel] = None,
        damage_model: Optional[DamageModel] = None,
        cache_enabled: bool = True,
        cache_max: int = 4096,
    ):
        super().__init__(spec, cost_model=cost_model, damage_model=damage_model)
        self._cache_enabled = bool(cache_enabled)
        self._cache_max = int(cache_max)
        # surge distribution -> (nodes, pdf weights); LRU order
        self._cache: "OrderedDict[SurgeDistribution, Optional[Tuple[np.ndarray, np.ndarray]]]" = OrderedDict()
        self._cache_hits = 0
        self._cache_misses = 0
        self._cache_evictions = 0

    def cache_stats(self) -> Dict[str, Any]:
        return {
            "enabled": self._cache_enabled,
            "max": self._cache_max,
            "size": len(self._cache),
            "hits": self._cache_hits,
            "misses": self._cache_misses,
            "evictions": self._cache_evictions,
        }

    def _nodes(self, surge: SurgeDistribution) -> Optional[Tuple[np.ndarray, np.ndarray]]:
        if self._cache_enabled and surge in self._cache:
            self._cache_hits += 1
            self._cache.move_to_end(surge)
            return self._cache[surge]
        self._cache_misses += 1
        tab = surge_nodes(surge, self.spec.n_nodes, self.spec.q_lo, self.spec.q_hi)
        if self._cache_enabled:
            self._cache[surge] = tab
            while len(self._cache) > self._cache_max:
                self._cache.popitem(last=False)
                self._cache_evictions += 1
        return tab

    def annual_expected_damages(self, decision: Decision, sow: StateOfWorld, params: ModelParams) -> np.ndarray:
        n_years = len(params.years)
        tab = self._nodes(sow.surge)
        if tab is None or n_years == 0:
            return np.zeros(n_years, dtype=float)
        nodes, weights = tab
        depths = self._depths(nodes[None, :], decision, sow, params)
        frac = np.asarray(self.damage_model.damage_fraction(depths, params.house), dtype=float)
        ead_frac = trapezoid(frac * weights[None, :], nodes, axis=1)
        return ead_frac * float(params.house.value_usd)


class MonteCarloEvaluator(ScenarioEvaluator):
    """Sampling-based reference evaluator.

    Draws ``n_samples`` surges per year from its own generator, so repeated
    calls give different (converging) estimates unless reseeded.
    """

    method = "monte_carlo"

    def __init__(
        self,
        spec: Optional[EvaluatorSpec] = None,
        *,
        cost_model: Optional[ElevationCostModel] = None,
        damage_model: Optional[DamageModel] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        super().__init__(spec, cost_model=cost_model, damage_model=damage_model)
        self.rng = rng if rng is not None else np.random.default_rng(self.spec.seed)

    def annual_expected_damages(self, decision: Decision, sow: StateOfWorld, params: ModelParams) -> np.ndarray:
        n_years = len(params.years)
        if n_years == 0:
            return np.zeros(0, dtype=float)
        n = int(self.spec.n_samples)
        surges = sow.surge.sample(n_years * n, self.rng).reshape(n_years, n)
        depths = self._depths(surges, decision, sow, params)
        frac = np.asarray(self.damage_model.damage_fraction(depths, params.house), dtype=float)
        return np.mean(frac, axis=1) * float(params.house.value_usd)


def make_evaluator(
    spec: Optional[EvaluatorSpec] = None,
    *,
    cost_model: Optional[ElevationCostModel] = None,
    damage_model: Optional[DamageModel] = None,
) -> ScenarioEvaluator:
    spec = spec or EvaluatorSpec()
    if spec.method == "monte_carlo":
        return MonteCarloEvaluator(spec, cost_model=cost_model, damage_model=damage_model)
    return QuadratureEvaluator(spec, cost_model=cost_model, damage_model=damage_model)
