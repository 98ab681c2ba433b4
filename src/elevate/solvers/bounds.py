from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from ..errors import ConfigurationError


@dataclass(frozen=True)
class Bounds:
    """Box constraint, one (lower, upper) pair per decision dimension."""

    lower: Tuple[float, ...]
    upper: Tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.lower) == 0 or len(self.lower) != len(self.upper):
            raise ConfigurationError(
                f"bounds need matching non-empty lower/upper, got {len(self.lower)} and {len(self.upper)}"
            )
        for j, (lo, hi) in enumerate(zip(self.lower, self.upper)):
            if not (np.isfinite(lo) and np.isfinite(hi)):
                raise ConfigurationError(f"bounds[{j}] must be finite, got ({lo}, {hi})")
            if float(lo) >= float(hi):
                raise ConfigurationError(f"bounds[{j}]: lower {lo} must be < upper {hi}")

    @staticmethod
    def scalar(lower: float, upper: float) -> "Bounds":
        return Bounds(lower=(float(lower),), upper=(float(upper),))

    @staticmethod
    def of(lower: Sequence[float], upper: Sequence[float]) -> "Bounds":
        return Bounds(lower=tuple(float(x) for x in lower), upper=tuple(float(x) for x in upper))

    @property
    def dim(self) -> int:
        return len(self.lower)

    @property
    def lo(self) -> np.ndarray:
        return np.asarray(self.lower, dtype=float)

    @property
    def hi(self) -> np.ndarray:
        return np.asarray(self.upper, dtype=float)

    def clip(self, x: np.ndarray) -> np.ndarray:
        return np.clip(np.asarray(x, dtype=float), self.lo, self.hi)

    def contains(self, x: Sequence[float]) -> bool:
        v = np.asarray(x, dtype=float).reshape(-1)
        return bool(v.size == self.dim and np.all(v >= self.lo) and np.all(v <= self.hi))

    def to_dict(self) -> dict:
        return {"lower": list(self.lower), "upper": list(self.upper)}
