from .bounds import Bounds
from .optimize import ALGORITHMS, OptimizeResult, OptimizerConfig, optimize
from .sweep import SweepResult, evaluate_grid, grid_sweep

__all__ = [
    "Bounds",
    "ALGORITHMS",
    "OptimizeResult",
    "OptimizerConfig",
    "optimize",
    "SweepResult",
    "evaluate_grid",
    "grid_sweep",
]
