from __future__ import annotations

"""Ensemble objective.

Reduces the per-SOW costs of one decision to a single scalar.

Sign convention
---------------
- ``sense="min"``: returns expected cost (USD). Use with minimizers.
- ``sense="max"``: returns the negated expected cost. Use with maximizers.

``reduction="mean"`` gives the expected cost, ``"sum"`` the ensemble total;
both rank decisions identically.

Scalar and vector forms
-----------------------
Optimizers call objectives with either a float or a length-1 array. Both
adapters build the same fixed-shape array and go through one canonical
function, so ``scalar(x)`` and ``vector([x])`` are bit-identical.

Author: © 2026 Afshin Arjhangmehr
"""

from typing import List, Optional, Sequence, Union
import math

import numpy as np

from ..errors import ConfigurationError
from ..models.inputs import Decision, ModelParams
from ..evaluator.core import ScenarioEvaluator, make_evaluator
from ..sow.spec import Ensemble

OBJECTIVE_SENSES = ("min", "max")
REDUCTIONS = ("mean", "sum")


class ObjectiveAggregator:
    def __init__(
        self,
        ensemble: Ensemble,
        params: ModelParams,
        evaluator: Optional[ScenarioEvaluator] = None,
        *,
        sense: str = "min",
        reduction: str = "mean",
    ):
        if ensemble is None or len(ensemble) == 0:
            raise ConfigurationError("objective needs a non-empty ensemble")
        if sense not in OBJECTIVE_SENSES:
            raise ConfigurationError(f"objective sense must be one of {OBJECTIVE_SENSES}, got {sense!r}")
        if reduction not in REDUCTIONS:
            raise ConfigurationError(f"objective reduction must be one of {REDUCTIONS}, got {reduction!r}")
        self.ensemble = ensemble
        self.params = params
        self.evaluator = evaluator or make_evaluator()
        self.sense = sense
        self.reduction = reduction
        self.n_calls = 0

    def per_sow(self, decision: Decision) -> List[float]:
        ev = self.evaluator
        return [ev.evaluate(decision, sow, self.params) for sow in self.ensemble]

    def _reduce(self, costs: Sequence[float]) -> float:
        # fsum is exactly rounded, so the result does not depend on SOW order
        total = math.fsum(costs)
        if self.reduction == "mean":
            total = total / float(len(costs))
        return -total if self.sense == "max" else total

    def _evaluate(self, x: np.ndarray) -> float:
        self.n_calls += 1
        return self._reduce(self.per_sow(Decision.from_vector(x)))

    def scalar(self, x: float) -> float:
        return self._evaluate(np.array([float(x)], dtype=float))

    def vector(self, x: Union[Sequence[float], np.ndarray]) -> float:
        return self._evaluate(np.asarray(x, dtype=float).reshape(-1))

    def aggregate(self, decision: Decision) -> float:
        return self._evaluate(decision.to_vector())

    def expected_cost(self, decision: Decision) -> float:
        """Expected cost in USD regardless of ``sense``."""
        v = self.aggregate(decision)
        return -v if self.sense == "max" else v

    def __call__(self, x: Union[float, Sequence[float], np.ndarray]) -> float:
        if np.ndim(x) == 0:
            return self.scalar(float(x))
        return self.vector(x)
