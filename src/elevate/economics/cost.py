from __future__ import annotations

"""Elevation construction cost.

Cost of raising a single-family house by ``Δh`` feet:

    cost(Δh) = 0                                  if Δh == 0
             = fixed_cost_usd + area · rate(Δh)   if 0 < Δh <= max table height

``rate`` is a $/ft² schedule linearly interpolated between elevation
thresholds. The fixed component bundles the one-off items of an elevation
job (permits, survey, utility disconnects, foundation work, moving).

The defaults reproduce the cost schedule used in the reference study; every
entry is overridable through the run deck.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..errors import ConfigurationError

# Fixed items of an elevation job (USD)
DEFAULT_FIXED_ITEMS_USD: Tuple[float, ...] = (10000.0, 300.0, 470.0, 4300.0, 2175.0, 3500.0)


@dataclass(frozen=True)
class ElevationCostModel:
    thresholds_ft: Tuple[float, ...] = (0.0, 5.0, 8.5, 12.0, 14.0)
    rates_usd_per_ft2: Tuple[float, ...] = (80.36, 82.5, 86.25, 103.75, 113.75)
    fixed_cost_usd: float = float(sum(DEFAULT_FIXED_ITEMS_USD))

    def __post_init__(self) -> None:
        t = np.asarray(self.thresholds_ft, dtype=float)
        r = np.asarray(self.rates_usd_per_ft2, dtype=float)
        if t.ndim != 1 or t.size < 2 or r.shape != t.shape:
            raise ConfigurationError("elevation cost table needs matching thresholds/rates (>= 2 points)")
        if t[0] != 0.0 or np.any(np.diff(t) <= 0.0):
            raise ConfigurationError("elevation cost thresholds must start at 0 and increase strictly")
        if np.any(r < 0.0) or float(self.fixed_cost_usd) < 0.0:
            raise ConfigurationError("elevation cost rates and fixed cost must be non-negative")

    @property
    def max_elevation_ft(self) -> float:
        return float(self.thresholds_ft[-1])

    def rate(self, delta_h_ft: float) -> float:
        return float(np.interp(float(delta_h_ft), self.thresholds_ft, self.rates_usd_per_ft2))

    def cost(self, delta_h_ft: float, area_ft2: float) -> float:
        dh = float(delta_h_ft)
        if dh < 0.0:
            raise ValueError(f"cannot lower a house: Δh={dh:g} ft")
        if dh > self.max_elevation_ft:
            raise ValueError(f"cannot elevate more than {self.max_elevation_ft:g} ft: Δh={dh:g} ft")
        if dh == 0.0:
            return 0.0
        return float(self.fixed_cost_usd) + float(area_ft2) * self.rate(dh)

    def to_dict(self) -> dict:
        return {
            "thresholds_ft": list(self.thresholds_ft),
            "rates_usd_per_ft2": list(self.rates_usd_per_ft2),
            "fixed_cost_usd": float(self.fixed_cost_usd),
        }
