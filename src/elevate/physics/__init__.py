"""Physical sub-models: depth-damage, sea-level rise, storm surge."""

from .depth_damage import DepthDamageFunction
from .slr import ParametricSLR, TabulatedSLR
from .surge import SurgeDistribution

__all__ = ["DepthDamageFunction", "ParametricSLR", "TabulatedSLR", "SurgeDistribution"]
