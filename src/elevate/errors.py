"""Error classes for the elevation study.

Two failure families are kept apart on purpose:

- ``ConfigurationError``: the run was set up wrong (bounds, ensemble size,
  asset values, quadrature settings, run deck). Raised before any search.
- ``ReferenceDataError``: external reference data cannot answer a question
  (missing depth-damage row, SLR lookup outside its domain). Evaluators never
  replace these with a default value.

Numerical degeneracies (zero-width surge support, empty horizon) are not
errors; they resolve to zero expected damage where they occur.
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Invalid run configuration detected at setup time."""


class ReferenceDataError(LookupError):
    """Reference data is missing or was queried outside its domain."""
