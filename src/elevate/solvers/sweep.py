from __future__ import annotations

"""Grid validation sweep.

A uniform scan of the objective over the box, independent of any optimizer.
Used as a sanity check on the optimizer's recommendation and as the data
behind objective-vs-elevation plots drawn elsewhere.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence
import csv

import numpy as np

from ..errors import ConfigurationError
from .bounds import Bounds


@dataclass(frozen=True)
class SweepResult:
    decisions: np.ndarray  # (n, dim)
    values: np.ndarray     # (n,)

    @property
    def argmin(self) -> int:
        return int(np.argmin(self.values))

    @property
    def best_decision(self) -> np.ndarray:
        return self.decisions[self.argmin]

    @property
    def best_value(self) -> float:
        return float(self.values[self.argmin])

    def to_rows(self, names: Optional[Sequence[str]] = None) -> List[Dict[str, float]]:
        dim = self.decisions.shape[1]
        cols = list(names) if names else [f"x{j}" for j in range(dim)]
        rows: List[Dict[str, float]] = []
        for x, v in zip(self.decisions, self.values):
            row = {c: float(xj) for c, xj in zip(cols, x)}
            row["objective"] = float(v)
            rows.append(row)
        return rows

    def write_csv(self, path: Path, names: Optional[Sequence[str]] = None) -> Path:
        rows = self.to_rows(names)
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", newline="", encoding="utf-8") as f:
            w = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            w.writeheader()
            w.writerows(rows)
        return p


def evaluate_grid(objective: Callable[[np.ndarray], float], grid: Sequence[Sequence[float]]) -> SweepResult:
    """Objective value at each caller-supplied grid point."""
    X = np.atleast_2d(np.asarray(grid, dtype=float))
    if X.size == 0:
        raise ConfigurationError("grid must contain at least one point")
    if X.shape[0] == 1 and np.ndim(grid) == 1:
        X = X.T  # plain 1-D list of scalar decisions
    vals = np.array([float(objective(X[i])) for i in range(X.shape[0])])
    return SweepResult(decisions=X, values=vals)


def grid_sweep(
    objective: Callable[[np.ndarray], float],
    bounds: Bounds,
    *,
    step: Optional[float] = None,
    n: Optional[int] = None,
) -> SweepResult:
    """Uniform scan including both ends of every dimension.

    ``step`` sets the spacing (rounded so the ends are hit exactly); otherwise
    ``n`` points per dimension (default 101).
    """
    if step is not None and n is not None:
        raise ConfigurationError("give either step or n, not both")
    axes = []
    for lo, hi in zip(bounds.lower, bounds.upper):
        if step is not None:
            if not (float(step) > 0.0):
                raise ConfigurationError(f"sweep step must be > 0, got {step}")
            k = int(round((hi - lo) / float(step))) + 1
        else:
            k = int(n if n is not None else 101)
        if k < 2:
            raise ConfigurationError("sweep needs at least 2 points per dimension")
        axes.append(np.linspace(lo, hi, k))
    d = bounds.dim
    mesh = np.stack(np.meshgrid(*axes, indexing="ij"), axis=-1).reshape(-1, d)
    return evaluate_grid(objective, mesh)
