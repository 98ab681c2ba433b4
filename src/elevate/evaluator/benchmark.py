from __future__ import annotations

"""Quadrature vs Monte Carlo comparison for one (decision, SOW) pair.

Used to check that the quadrature EAD converges to the sampling estimate and
to report the cost of each. Not part of the optimization path.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional
import time

import numpy as np

from ..economics.cost import ElevationCostModel
from ..models.inputs import Decision, ModelParams
from ..sow.spec import StateOfWorld
from .core import EvaluatorSpec, MonteCarloEvaluator, QuadratureEvaluator


@dataclass(frozen=True)
class EvaluatorComparison:
    quadrature_total_usd: float
    monte_carlo_total_usd: float
    quadrature_npv_damage_usd: float
    monte_carlo_npv_damage_usd: float
    rel_error_npv_damage: float
    quadrature_elapsed_s: float
    monte_carlo_elapsed_s: float
    n_nodes: int
    n_samples: int

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.__dict__)


def compare_evaluators(
    decision: Decision,
    sow: StateOfWorld,
    params: ModelParams,
    *,
    spec: Optional[EvaluatorSpec] = None,
    n_samples: Optional[int] = None,
    seed: Optional[int] = 0,
    cost_model: Optional[ElevationCostModel] = None,
) -> EvaluatorComparison:
    base = spec or EvaluatorSpec()
    q_spec = replace(base, method="quadrature")
    mc_spec = replace(
        base,
        method="monte_carlo",
        n_samples=int(n_samples if n_samples is not None else base.n_samples),
        seed=seed,
    )
    quad = QuadratureEvaluator(q_spec, cost_model=cost_model, cache_enabled=False)
    mc = MonteCarloEvaluator(mc_spec, cost_model=cost_model)

    t0 = time.perf_counter()
    q_dam = float(np.sum(quad.discounted_damages(decision, sow, params)))
    t1 = time.perf_counter()
    mc_dam = float(np.sum(mc.discounted_damages(decision, sow, params)))
    t2 = time.perf_counter()

    construction = quad.construction_cost(decision, params)
    if mc_dam != 0.0:
        rel = abs(q_dam - mc_dam) / abs(mc_dam)
    else:
        rel = 0.0 if q_dam == 0.0 else float("inf")

    return EvaluatorComparison(
        quadrature_total_usd=construction + q_dam,
        monte_carlo_total_usd=construction + mc_dam,
        quadrature_npv_damage_usd=q_dam,
        monte_carlo_npv_damage_usd=mc_dam,
        rel_error_npv_damage=float(rel),
        quadrature_elapsed_s=t1 - t0,
        monte_carlo_elapsed_s=t2 - t1,
        n_nodes=int(q_spec.n_nodes),
        n_samples=int(mc_spec.n_samples),
    )
