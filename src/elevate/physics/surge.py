from __future__ import annotations

"""Annual storm-surge peak distribution (GEV).

``shape`` follows the hydrology sign convention: shape > 0 gives a heavy
upper tail (Frechet-type). SciPy's ``genextreme`` uses c = -shape.

A distribution with non-positive or non-finite scale is degenerate; its pdf
is identically zero so integrals over it vanish instead of failing.
"""

from dataclasses import dataclass
from typing import Union

import numpy as np
from scipy.stats import genextreme

ArrayLike = Union[float, np.ndarray]


@dataclass(frozen=True)
class SurgeDistribution:
    loc: float
    scale: float
    shape: float

    @property
    def is_degenerate(self) -> bool:
        s = float(self.scale)
        return not (np.isfinite(s) and s > 0.0 and np.isfinite(self.loc) and np.isfinite(self.shape))

    @property
    def _c(self) -> float:
        return -float(self.shape)

    def pdf(self, x: ArrayLike) -> ArrayLike:
        if self.is_degenerate:
            return np.zeros_like(np.asarray(x, dtype=float))
        return genextreme.pdf(x, self._c, loc=self.loc, scale=self.scale)

    def cdf(self, x: ArrayLike) -> ArrayLike:
        if self.is_degenerate:
            return np.where(np.asarray(x, dtype=float) >= self.loc, 1.0, 0.0)
        return genextreme.cdf(x, self._c, loc=self.loc, scale=self.scale)

    def ppf(self, q: ArrayLike) -> ArrayLike:
        if self.is_degenerate:
            return np.full_like(np.asarray(q, dtype=float), float(self.loc))
        return genextreme.ppf(q, self._c, loc=self.loc, scale=self.scale)

    def sample(self, n: int, rng: np.random.Generator) -> np.ndarray:
        if self.is_degenerate:
            return np.full(int(n), float(self.loc))
        return genextreme.rvs(self._c, loc=self.loc, scale=self.scale, size=int(n), random_state=rng)

    def to_dict(self) -> dict:
        return {"loc": float(self.loc), "scale": float(self.scale), "shape": float(self.shape)}
