from __future__ import annotations

"""Sea-level-rise trajectories.

The evaluator treats a trajectory as an opaque callable ``year -> sea level
(ft)`` that accepts scalars or numpy arrays. Two concrete families ship here:

- ``ParametricSLR``: the quadratic-plus-breakpoint form fitted by Oddo et al.
  (2017),  a + b(t-2000) + c(t-2000)^2 + c*·max(t - t*, 0).
- ``TabulatedSLR``: a trajectory given pointwise, linearly interpolated.

Both raise ``ReferenceDataError`` when asked for a year outside the domain
they were fitted or tabulated on. Evaluators must let that propagate.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from ..errors import ConfigurationError, ReferenceDataError

YearLike = Union[int, float, Sequence[float], np.ndarray]

REFERENCE_YEAR = 2000.0


def _as_result(year: YearLike, values: np.ndarray) -> Union[float, np.ndarray]:
    if np.ndim(year) == 0:
        return float(values)
    return values


@dataclass(frozen=True)
class ParametricSLR:
    a: float
    b: float
    c: float
    tstar: float
    cstar: float
    valid_years: Optional[Tuple[float, float]] = None

    def _check_domain(self, t: np.ndarray) -> None:
        if self.valid_years is None:
            return
        lo, hi = float(self.valid_years[0]), float(self.valid_years[1])
        if t.size and (float(np.min(t)) < lo or float(np.max(t)) > hi):
            raise ReferenceDataError(
                f"SLR trajectory queried at years [{float(np.min(t)):g}, {float(np.max(t)):g}] "
                f"outside its valid span [{lo:g}, {hi:g}]"
            )

    def __call__(self, year: YearLike) -> Union[float, np.ndarray]:
        t = np.asarray(year, dtype=float)
        self._check_domain(t)
        dt = t - REFERENCE_YEAR
        level = self.a + self.b * dt + self.c * dt ** 2 + self.cstar * np.maximum(t - self.tstar, 0.0)
        return _as_result(year, level)

    def to_dict(self) -> dict:
        return {
            "kind": "parametric",
            "a": self.a,
            "b": self.b,
            "c": self.c,
            "tstar": self.tstar,
            "cstar": self.cstar,
            "valid_years": list(self.valid_years) if self.valid_years is not None else None,
        }


@dataclass(frozen=True)
class TabulatedSLR:
    years: Tuple[float, ...]
    levels_ft: Tuple[float, ...]

    def __post_init__(self) -> None:
        y = np.asarray(self.years, dtype=float)
        v = np.asarray(self.levels_ft, dtype=float)
        if y.ndim != 1 or y.size < 2 or v.shape != y.shape:
            raise ConfigurationError("tabulated SLR needs matching years/levels with at least two points")
        if np.any(np.diff(y) <= 0.0):
            raise ConfigurationError("tabulated SLR years must be strictly increasing")

    def __call__(self, year: YearLike) -> Union[float, np.ndarray]:
        t = np.asarray(year, dtype=float)
        if t.size and (float(np.min(t)) < self.years[0] or float(np.max(t)) > self.years[-1]):
            raise ReferenceDataError(
                f"tabulated SLR covers [{self.years[0]:g}, {self.years[-1]:g}]; "
                f"queried [{float(np.min(t)):g}, {float(np.max(t)):g}]"
            )
        return _as_result(year, np.interp(t, self.years, self.levels_ft))

    def to_dict(self) -> dict:
        return {"kind": "tabulated", "years": list(self.years), "levels_ft": list(self.levels_ft)}
