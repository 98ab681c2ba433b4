from __future__ import annotations

"""Surge node tables for fixed-node quadrature.

Integration itself is ``scipy.integrate.trapezoid`` over these nodes.
"""

from typing import Optional, Tuple

import numpy as np

from ..physics.surge import SurgeDistribution


def surge_nodes(
    surge: SurgeDistribution,
    n_nodes: int,
    q_lo: float,
    q_hi: float,
) -> Optional[Tuple[np.ndarray, np.ndarray]]:
    """Equally spaced surge nodes over [ppf(q_lo), ppf(q_hi)] and the pdf there.

    Returns None when the distribution has no usable support (degenerate
    scale, non-finite or zero-width quantile range).
    """
    if surge.is_degenerate:
        return None
    lo = float(surge.ppf(q_lo))
    hi = float(surge.ppf(q_hi))
    if not (np.isfinite(lo) and np.isfinite(hi)) or hi <= lo:
        return None
    nodes = np.linspace(lo, hi, int(n_nodes))
    weights = np.asarray(surge.pdf(nodes), dtype=float)
    return nodes, weights
