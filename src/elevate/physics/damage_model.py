from __future__ import annotations

"""DamageModel seam.

The evaluators reach the physical sub-models only through this class:

- ``damage_fraction(depth, house)``: fractional loss in [0, 1]
- ``sea_level(trajectory, year)``: sea level (ft) at the given year(s)

Both are pure. Subclass to swap in a different damage or SLR treatment
without touching the evaluators.
"""

from typing import Callable, Union

import numpy as np

from ..models.inputs import HouseAsset

ArrayLike = Union[float, np.ndarray]


class DamageModel:
    def damage_fraction(self, depth_ft: ArrayLike, house: HouseAsset) -> ArrayLike:
        return house.ddf(depth_ft)

    def sea_level(self, trajectory: Callable[[ArrayLike], ArrayLike], year: ArrayLike) -> ArrayLike:
        return trajectory(year)


DEFAULT_DAMAGE_MODEL = DamageModel()
