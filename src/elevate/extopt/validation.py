from __future__ import annotations

"""Validation re-evaluation on a larger ensemble.

Search runs use a small exploratory ensemble; the recommendation (and any
comparison decisions) are then re-scored on a much larger, independently
seeded ensemble.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence
import logging
import time

from ..evaluator.core import ScenarioEvaluator
from ..models.inputs import Decision, ModelParams
from ..sow.spec import Ensemble
from .objective import ObjectiveAggregator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationRecord:
    elevation_ft: float
    expected_cost_usd: float


@dataclass(frozen=True)
class ValidationReport:
    n_sows: int
    ensemble_digest: str
    records: List[ValidationRecord]
    elapsed_s: float

    @property
    def best(self) -> ValidationRecord:
        return min(self.records, key=lambda r: r.expected_cost_usd)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": "validation_report.v1",
            "n_sows": self.n_sows,
            "ensemble_digest": self.ensemble_digest,
            "records": [dict(r.__dict__) for r in self.records],
            "best_elevation_ft": self.best.elevation_ft,
            "elapsed_s": self.elapsed_s,
        }


def validate_decisions(
    decisions: Sequence[Decision],
    ensemble: Ensemble,
    params: ModelParams,
    evaluator: Optional[ScenarioEvaluator] = None,
) -> ValidationReport:
    if not decisions:
        raise ValueError("validate_decisions needs at least one decision")
    t0 = time.perf_counter()
    obj = ObjectiveAggregator(ensemble, params, evaluator, sense="min", reduction="mean")
    records = [ValidationRecord(float(d.elevation_ft), obj.aggregate(d)) for d in decisions]
    elapsed = time.perf_counter() - t0
    logger.info("validated %d decisions on %d SOWs in %.2fs", len(records), len(ensemble), elapsed)
    return ValidationReport(
        n_sows=len(ensemble),
        ensemble_digest=ensemble.digest(),
        records=records,
        elapsed_s=elapsed,
    )
