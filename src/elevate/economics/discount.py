from __future__ import annotations

"""Discount factors over a study horizon.

Two conventions are supported:

- ``compound``:    1 / (1 + r)^t   (default; the rate compounds yearly)
- ``fractional``:  (1 - r)^t       (a fixed fraction of value lost per year,
                                    as in the earlier analysis notebooks)

The two agree to first order in r and drift apart over long horizons, so
results are only comparable under the same convention. ``t`` counts years
from the first year of the horizon, so the first year is never discounted.
"""

from typing import Sequence, Union

import numpy as np

from ..errors import ConfigurationError

DISCOUNTING_CONVENTIONS = ("compound", "fractional")


def validate_convention(convention: str) -> str:
    c = str(convention).strip().lower()
    if c not in DISCOUNTING_CONVENTIONS:
        raise ConfigurationError(
            f"unknown discounting convention {convention!r}; expected one of {DISCOUNTING_CONVENTIONS}"
        )
    return c


def years_elapsed(years: Union[Sequence[float], np.ndarray]) -> np.ndarray:
    y = np.asarray(years, dtype=float)
    if y.size == 0:
        return y
    return y - float(np.min(y))


def discount_factors(
    discount_rate: float,
    years: Union[Sequence[float], np.ndarray],
    convention: str = "compound",
) -> np.ndarray:
    t = years_elapsed(years)
    r = float(discount_rate)
    if convention == "fractional":
        return (1.0 - r) ** t
    return 1.0 / (1.0 + r) ** t
