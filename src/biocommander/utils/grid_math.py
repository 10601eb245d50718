"""
Square-grid coordinate mathematics for Bio Commander.

Two grids share these helpers:

1. The 16x16 cell grid inside every zone, addressed by (row, col).
2. The zone-level map, where a zone at (x, y) is addressed as
   ``GridCoord(row=y, col=x)``.

Movement and attack ranges use Manhattan distance (orthogonal steps only),
and zone-map adjacency uses the four orthogonal directions in the same slot
order as a zone's connection list: north, east, south, west.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GridCoord:
    """
    A position on a square grid.

    Attributes:
        row: Row index (grows southwards)
        col: Column index (grows eastwards)

    Example:
        >>> origin = GridCoord(row=0, col=0)
        >>> manhattan_distance(origin, GridCoord(row=2, col=1))
        3
    """

    row: int
    col: int


# Offsets (drow, dcol) indexed by connection slot: north, east, south, west
SLOT_OFFSETS: tuple[tuple[int, int], ...] = ((-1, 0), (0, 1), (1, 0), (0, -1))


def manhattan_distance(a: GridCoord, b: GridCoord) -> int:
    """
    Number of orthogonal steps between two coordinates.

    Example:
        >>> manhattan_distance(GridCoord(4, 4), GridCoord(6, 3))
        3
    """
    return abs(a.row - b.row) + abs(a.col - b.col)


def step(coord: GridCoord, slot: int) -> GridCoord:
    """Return the coordinate one step away through connection ``slot``."""
    drow, dcol = SLOT_OFFSETS[slot]
    return GridCoord(row=coord.row + drow, col=coord.col + dcol)


def slot_between(a: GridCoord, b: GridCoord) -> int | None:
    """
    Connection slot leading from ``a`` to an orthogonal neighbour ``b``.

    Returns None when the two coordinates are not orthogonal neighbours.

    Example:
        >>> slot_between(GridCoord(0, 0), GridCoord(0, 1))
        1
    """
    for slot in range(len(SLOT_OFFSETS)):
        if step(a, slot) == b:
            return slot
    return None


def in_bounds(coord: GridCoord, size: int) -> bool:
    """True when ``coord`` lies on a ``size`` x ``size`` grid."""
    return 0 <= coord.row < size and 0 <= coord.col < size


def orthogonal_neighbors(coord: GridCoord, size: int | None = None) -> list[GridCoord]:
    """
    Neighbours of ``coord`` in north, east, south, west order.

    When ``size`` is given, neighbours falling off the grid are dropped.

    Example:
        >>> orthogonal_neighbors(GridCoord(0, 0), size=16)
        [GridCoord(row=0, col=1), GridCoord(row=1, col=0)]
    """
    neighbors = [step(coord, slot) for slot in range(len(SLOT_OFFSETS))]
    if size is None:
        return neighbors
    return [neighbor for neighbor in neighbors if in_bounds(neighbor, size)]

