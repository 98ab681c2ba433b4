from __future__ import annotations

"""Depth-damage functions.

A depth-damage function maps flood depth at the house (ft, relative to the
lowest finished floor) to the fractional structure loss. Tables come from
reference data (HAZUS-style rows); this module only holds and interpolates
them.

Interpolation is piecewise linear with flat extrapolation beyond the first
and last tabulated depths.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np

from ..errors import ConfigurationError

ArrayLike = Union[float, Sequence[float], np.ndarray]


@dataclass(frozen=True)
class DepthDamageFunction:
    depths_ft: Tuple[float, ...]
    fractions: Tuple[float, ...]
    label: str = ""

    def __post_init__(self) -> None:
        d = np.asarray(self.depths_ft, dtype=float)
        f = np.asarray(self.fractions, dtype=float)
        if d.ndim != 1 or d.size < 2:
            raise ConfigurationError("depth-damage table needs at least two depth points")
        if f.shape != d.shape:
            raise ConfigurationError(
                f"depth-damage table shape mismatch: {d.size} depths vs {f.size} fractions"
            )
        if not np.all(np.isfinite(d)) or not np.all(np.isfinite(f)):
            raise ConfigurationError("depth-damage table contains non-finite values")
        if np.any(np.diff(d) <= 0.0):
            raise ConfigurationError("depth-damage depths must be strictly increasing")
        if np.any(f < 0.0) or np.any(f > 1.0):
            raise ConfigurationError("depth-damage fractions must lie in [0, 1]")

    @staticmethod
    def from_percent(depths_ft: Sequence[float], percents: Sequence[float], label: str = "") -> "DepthDamageFunction":
        return DepthDamageFunction(
            depths_ft=tuple(float(x) for x in depths_ft),
            fractions=tuple(float(p) / 100.0 for p in percents),
            label=str(label),
        )

    def __call__(self, depth_ft: ArrayLike) -> Union[float, np.ndarray]:
        # np.interp clamps to the end values outside the table (flat extrapolation)
        y = np.interp(depth_ft, self.depths_ft, self.fractions)
        if np.ndim(depth_ft) == 0:
            return float(y)
        return y

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "depths_ft": list(self.depths_ft),
            "fractions": list(self.fractions),
        }
