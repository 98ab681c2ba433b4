"""Robust house-elevation decisions under deep uncertainty.

Scenario-based expected-cost evaluation (sea-level rise, storm surge,
discount rate) embedded in a bounded derivative-free global search.
"""

from .errors import ConfigurationError, ReferenceDataError
from .models.inputs import Decision, HouseAsset, ModelParams
from .physics.depth_damage import DepthDamageFunction
from .physics.slr import ParametricSLR, TabulatedSLR
from .physics.surge import SurgeDistribution
from .economics.cost import ElevationCostModel
from .sow.spec import Ensemble, SamplerSpec, StateOfWorld
from .sow.sampler import ScenarioSampler
from .evaluator.core import EvaluatorSpec, MonteCarloEvaluator, QuadratureEvaluator, ScenarioEvaluator, make_evaluator
from .extopt.objective import ObjectiveAggregator
from .solvers.bounds import Bounds
from .solvers.optimize import OptimizeResult, OptimizerConfig, optimize
from .solvers.sweep import SweepResult, evaluate_grid, grid_sweep

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ReferenceDataError",
    "Decision",
    "HouseAsset",
    "ModelParams",
    "DepthDamageFunction",
    "ParametricSLR",
    "TabulatedSLR",
    "SurgeDistribution",
    "ElevationCostModel",
    "Ensemble",
    "SamplerSpec",
    "StateOfWorld",
    "ScenarioSampler",
    "EvaluatorSpec",
    "MonteCarloEvaluator",
    "QuadratureEvaluator",
    "ScenarioEvaluator",
    "make_evaluator",
    "ObjectiveAggregator",
    "Bounds",
    "OptimizeResult",
    "OptimizerConfig",
    "optimize",
    "SweepResult",
    "evaluate_grid",
    "grid_sweep",
]
