"""Evaluator layer.

The single seam between the search and the cost/damage models:

  - the optimizer calls an objective
  - the objective calls a ScenarioEvaluator once per state of the world
  - the evaluator calls the damage model, cost model and discounting
"""

from .core import (
    EVALUATOR_METHODS,
    EvaluatorSpec,
    MonteCarloEvaluator,
    QuadratureEvaluator,
    ScenarioEvaluator,
    make_evaluator,
)
from .benchmark import EvaluatorComparison, compare_evaluators

__all__ = [
    "EVALUATOR_METHODS",
    "EvaluatorSpec",
    "MonteCarloEvaluator",
    "QuadratureEvaluator",
    "ScenarioEvaluator",
    "make_evaluator",
    "EvaluatorComparison",
    "compare_evaluators",
]
