from .cost import ElevationCostModel
from .discount import discount_factors, DISCOUNTING_CONVENTIONS

__all__ = ["ElevationCostModel", "discount_factors", "DISCOUNTING_CONVENTIONS"]
