"""Reference data intake (depth-damage tables, SLR fits)."""

from .intake import (
    load_depth_damage,
    load_slr_trajectories,
    parse_depth_damage_csv,
    parse_slr_csv,
)

__all__ = ["load_depth_damage", "load_slr_trajectories", "parse_depth_damage_csv", "parse_slr_csv"]
