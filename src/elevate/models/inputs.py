from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence, Tuple

import numpy as np

from ..errors import ConfigurationError
from ..physics.depth_damage import DepthDamageFunction


@dataclass(frozen=True)
class Decision:
    # Height the house is raised above its current base elevation (ft).
    # Box bounds are enforced by the optimizer, not here.
    elevation_ft: float

    @staticmethod
    def from_vector(x: Sequence[float]) -> "Decision":
        v = np.asarray(x, dtype=float).reshape(-1)
        if v.size != 1:
            raise ValueError(f"decision vector must have exactly one element, got {v.size}")
        return Decision(elevation_ft=float(v[0]))

    def to_vector(self) -> np.ndarray:
        return np.array([self.elevation_ft], dtype=float)


@dataclass(frozen=True)
class HouseAsset:
    area_ft2: float
    # Height of the gauge datum below the house's base elevation (ft)
    height_above_gauge_ft: float
    value_usd: float
    ddf: DepthDamageFunction
    description: str = ""

    def __post_init__(self) -> None:
        if not (float(self.area_ft2) > 0.0):
            raise ConfigurationError(f"house area must be > 0, got {self.area_ft2!r}")
        if not (float(self.value_usd) > 0.0):
            raise ConfigurationError(f"house value must be > 0, got {self.value_usd!r}")
        if not np.isfinite(float(self.height_above_gauge_ft)):
            raise ConfigurationError("house height above gauge must be finite")

    def to_dict(self) -> dict:
        return {
            "area_ft2": float(self.area_ft2),
            "height_above_gauge_ft": float(self.height_above_gauge_ft),
            "value_usd": float(self.value_usd),
            "description": self.description,
            "ddf": self.ddf.to_dict(),
        }


@dataclass(frozen=True)
class ModelParams:
    house: HouseAsset
    years: Tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # any order is fine; each year must appear once
        if len(set(self.years)) != len(self.years):
            dup = sorted({y for y in self.years if list(self.years).count(y) > 1})
            raise ConfigurationError(f"horizon lists years more than once: {dup}")

    @staticmethod
    def from_range(house: HouseAsset, start_year: int, end_year: int) -> "ModelParams":
        """Contiguous horizon, both ends inclusive."""
        if int(end_year) < int(start_year):
            raise ConfigurationError(f"horizon end {end_year} precedes start {start_year}")
        return ModelParams(house=house, years=tuple(range(int(start_year), int(end_year) + 1)))

    @staticmethod
    def from_years(house: HouseAsset, years: Iterable[int]) -> "ModelParams":
        return ModelParams(house=house, years=tuple(int(y) for y in years))

    @property
    def years_array(self) -> np.ndarray:
        return np.asarray(self.years, dtype=float)
