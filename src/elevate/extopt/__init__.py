"""Ensemble objective and validation for external or built-in optimizers.

Key invariants:
- Same decision + same ensemble -> same value (deterministic)
- Scalar and length-1 vector calls agree bit for bit
- The ensemble is never resampled by the objective
"""

from .objective import ObjectiveAggregator, OBJECTIVE_SENSES, REDUCTIONS
from .validation import ValidationRecord, ValidationReport, validate_decisions

__all__ = [
    "ObjectiveAggregator",
    "OBJECTIVE_SENSES",
    "REDUCTIONS",
    "ValidationRecord",
    "ValidationReport",
    "validate_decisions",
]
