"""Utility functions for the Bio Commander engine."""

from biocommander.utils.grid_math import (
    GridCoord,
    in_bounds,
    manhattan_distance,
    orthogonal_neighbors,
)

__all__ = [
    "GridCoord",
    "in_bounds",
    "manhattan_distance",
    "orthogonal_neighbors",
]
