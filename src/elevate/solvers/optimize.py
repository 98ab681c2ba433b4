"""Bounded derivative-free global search with a wall-clock budget.

Algorithms
----------
- ``de``:  differential evolution, DE/rand/1/bin, trials clipped to the box.
- ``lhs``: budgeted Latin-hypercube search (fixed number of samples).

Both minimize. Key properties:
- The random stream is a ``numpy.random.Generator`` owned by the run, built
  from ``config.seed`` unless one is passed in. Global random state is never
  touched.
- The time budget is checked before every candidate evaluation. On expiry the
  best candidate so far is returned with ``stop_reason="time_limit"``.
- The returned value is the minimum over every candidate evaluated.
- With a fixed seed, runs that do not end on the time budget are repeatable.

Author: © 2026 Afshin Arjhangmehr
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging
import math
import time

import numpy as np

from ..errors import ConfigurationError
from ..fingerprint import stable_sha256
from .bounds import Bounds

logger = logging.getLogger(__name__)

ALGORITHMS = ("de", "lhs")

Objective = Callable[[np.ndarray], float]


@dataclass(frozen=True)
class OptimizerConfig:
    algorithm: str = "de"
    time_limit_s: float = 10.0
    seed: Optional[int] = None
    # de
    pop_size: int = 20
    max_generations: int = 200
    F: float = 0.7
    CR: float = 0.9
    f_tol_rel: float = 1e-8
    f_tol_abs: float = 0.0
    # lhs
    budget: int = 128

    def __post_init__(self) -> None:
        if self.algorithm not in ALGORITHMS:
            raise ConfigurationError(f"unknown optimizer algorithm {self.algorithm!r}; expected {ALGORITHMS}")
        if not (float(self.time_limit_s) > 0.0):
            raise ConfigurationError(f"time limit must be > 0 s, got {self.time_limit_s}")
        if int(self.pop_size) < 4:
            raise ConfigurationError(f"DE population must be >= 4, got {self.pop_size}")
        if int(self.max_generations) < 0 or int(self.budget) < 1:
            raise ConfigurationError("max_generations must be >= 0 and budget >= 1")
        if not (0.0 < float(self.F) <= 2.0) or not (0.0 <= float(self.CR) <= 1.0):
            raise ConfigurationError(f"DE needs 0 < F <= 2 and 0 <= CR <= 1, got F={self.F}, CR={self.CR}")
        if float(self.f_tol_rel) < 0.0 or float(self.f_tol_abs) < 0.0:
            raise ConfigurationError("convergence tolerances must be non-negative")

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> "OptimizerConfig":
        d = dict(d or {})
        unknown = sorted(set(d) - set(OptimizerConfig.__dataclass_fields__))
        if unknown:
            raise ConfigurationError(f"unknown optimizer settings: {unknown}")
        return OptimizerConfig(**d)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.__dict__)


@dataclass(frozen=True)
class OptimizeResult:
    best_decision: Tuple[float, ...]
    best_value: float
    n_evals: int
    n_generations: int
    elapsed_s: float
    stop_reason: str
    algorithm: str
    seed: Optional[int]
    history: Tuple[Dict[str, float], ...] = field(default_factory=tuple)

    @property
    def x(self) -> np.ndarray:
        return np.asarray(self.best_decision, dtype=float)

    def digest(self) -> str:
        # elapsed time excluded: it differs between otherwise identical runs
        return stable_sha256({
            "best_decision": list(self.best_decision),
            "best_value": self.best_value,
            "n_evals": self.n_evals,
            "n_generations": self.n_generations,
            "algorithm": self.algorithm,
            "seed": self.seed,
        })

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": "optimize_result.v1",
            "best_decision": list(self.best_decision),
            "best_value": self.best_value,
            "n_evals": self.n_evals,
            "n_generations": self.n_generations,
            "elapsed_s": self.elapsed_s,
            "stop_reason": self.stop_reason,
            "algorithm": self.algorithm,
            "seed": self.seed,
            "history": [dict(h) for h in self.history],
            "digest": self.digest(),
        }


class _BudgetExpired(Exception):
    pass


class _Tracker:
    """Counts evaluations, enforces the deadline, remembers the best point."""

    def __init__(self, objective: Objective, deadline: float):
        self.objective = objective
        self.deadline = deadline
        self.n_evals = 0
        self.best_x: Optional[np.ndarray] = None
        self.best_f = math.inf

    def __call__(self, x: np.ndarray) -> float:
        # the first candidate is always evaluated so a result exists
        if self.n_evals > 0 and time.perf_counter() >= self.deadline:
            raise _BudgetExpired()
        f = float(self.objective(np.array(x, dtype=float)))
        if not math.isfinite(f):
            f = math.inf
        self.n_evals += 1
        if self.best_x is None or f < self.best_f:
            self.best_f = f
            self.best_x = np.array(x, dtype=float)
        return f


def _lhs(n: int, d: int, rng: np.random.Generator) -> np.ndarray:
    # Latin hypercube sampling in [0,1]: one point per stratum per dimension
    u = rng.random((n, d))
    H = np.empty((n, d))
    for j in range(d):
        order = rng.permutation(n)
        H[:, j] = (order + u[:, j]) / float(n)
    return H


def _run_de(track: _Tracker, bounds: Bounds, cfg: OptimizerConfig, rng: np.random.Generator,
            history: List[Dict[str, float]]) -> Tuple[int, str]:
    d = bounds.dim
    n = int(cfg.pop_size)
    lo, hi = bounds.lo, bounds.hi

    pop = lo + rng.random((n, d)) * (hi - lo)
    vals = np.empty(n)
    for i in range(n):
        vals[i] = track(pop[i])

    gen = 0
    while gen < int(cfg.max_generations):
        for i in range(n):
            others = np.delete(np.arange(n), i)
            a, b, c = rng.choice(others, size=3, replace=False)
            mutant = pop[a] + float(cfg.F) * (pop[b] - pop[c])
            cross = rng.random(d) < float(cfg.CR)
            cross[int(rng.integers(d))] = True
            trial = bounds.clip(np.where(cross, mutant, pop[i]))
            f_trial = track(trial)
            if f_trial <= vals[i]:
                pop[i] = trial
                vals[i] = f_trial
        gen += 1

        best = float(np.min(vals))
        spread = float(np.max(vals) - best)
        history.append({"generation": float(gen), "best": best, "spread": spread})
        logger.debug("de gen=%d best=%.6g spread=%.3g", gen, best, spread)
        if math.isfinite(best) and spread <= float(cfg.f_tol_abs) + float(cfg.f_tol_rel) * abs(best):
            return gen, "converged"
    return gen, "max_generations"


def _run_lhs(track: _Tracker, bounds: Bounds, cfg: OptimizerConfig, rng: np.random.Generator,
             history: List[Dict[str, float]]) -> Tuple[int, str]:
    U = _lhs(int(cfg.budget), bounds.dim, rng)
    X = bounds.lo + U * (bounds.hi - bounds.lo)
    for i in range(X.shape[0]):
        track(X[i])
    history.append({"generation": 1.0, "best": float(track.best_f), "spread": float("nan")})
    return 1, "budget"


def optimize(
    objective: Objective,
    bounds: Bounds,
    config: Optional[OptimizerConfig] = None,
    *,
    rng: Optional[np.random.Generator] = None,
) -> OptimizeResult:
    """Minimize ``objective`` over the box ``bounds``.

    Args:
        objective: callable taking a 1-D float array of length ``bounds.dim``.
        bounds: box constraint.
        config: algorithm, time budget and seed.
        rng: explicit generator; overrides ``config.seed`` when given.

    Returns:
        OptimizeResult with the best candidate evaluated.
    """
    cfg = config or OptimizerConfig()
    gen_rng = rng if rng is not None else np.random.default_rng(cfg.seed)

    t0 = time.perf_counter()
    track = _Tracker(objective, deadline=t0 + float(cfg.time_limit_s))
    history: List[Dict[str, float]] = []
    n_gen = 0
    logger.info("optimize start: algorithm=%s dim=%d time_limit=%.3gs seed=%s",
                cfg.algorithm, bounds.dim, cfg.time_limit_s, cfg.seed)

    runner = _run_de if cfg.algorithm == "de" else _run_lhs
    try:
        n_gen, reason = runner(track, bounds, cfg, gen_rng, history)
    except _BudgetExpired:
        n_gen, reason = len(history), "time_limit"

    elapsed = time.perf_counter() - t0
    assert track.best_x is not None
    result = OptimizeResult(
        best_decision=tuple(float(v) for v in track.best_x),
        best_value=float(track.best_f),
        n_evals=track.n_evals,
        n_generations=int(n_gen),
        elapsed_s=float(elapsed),
        stop_reason=reason,
        algorithm=cfg.algorithm,
        seed=cfg.seed,
        history=tuple(history),
    )
    logger.info("optimize done: x=%s f=%.6g evals=%d gens=%d stop=%s elapsed=%.2fs",
                list(result.best_decision), result.best_value, result.n_evals,
                result.n_generations, result.stop_reason, elapsed)
    return result
