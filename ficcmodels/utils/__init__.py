"""Numerical utilities: grid location, root finding, small math helpers."""

from .intervals import accumulate, build_local_grid, iter_buckets, locate_interval
from .mathutils import (
    decay_factor,
    exp_integral,
    integral_decay_factor,
    integral_decay_factor_squared,
    spread,
)
from .rootfinding import RootResult, bracket_root, find_root, ridder

__all__ = [
    "locate_interval",
    "build_local_grid",
    "iter_buckets",
    "accumulate",
    "exp_integral",
    "decay_factor",
    "integral_decay_factor",
    "integral_decay_factor_squared",
    "spread",
    "RootResult",
    "bracket_root",
    "ridder",
    "find_root",
]
