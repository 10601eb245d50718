"""
Test suite for square-grid coordinate math.

Covers the helpers shared by the 16x16 zone grids and the zone-level map:
- Manhattan distance
- Stepping through connection slots
- Orthogonal neighbours with and without bounds
- Range queries used for movement and attack reach
"""

import pytest

from biocommander.utils.grid_math import (
    SLOT_OFFSETS,
    GridCoord,
    in_bounds,
    manhattan_distance,
    orthogonal_neighbors,
    slot_between,
    step,
)


class TestGridCoord:
    """Test the GridCoord dataclass."""

    def test_equality_and_hash(self) -> None:
        assert GridCoord(1, 2) == GridCoord(row=1, col=2)
        assert GridCoord(1, 2) != GridCoord(2, 1)
        assert len({GridCoord(1, 2), GridCoord(1, 2)}) == 1


class TestManhattanDistance:
    def test_same_cell(self) -> None:
        assert manhattan_distance(GridCoord(3, 3), GridCoord(3, 3)) == 0

    def test_straight_line(self) -> None:
        assert manhattan_distance(GridCoord(0, 0), GridCoord(0, 5)) == 5

    def test_diagonal_counts_both_axes(self) -> None:
        assert manhattan_distance(GridCoord(4, 4), GridCoord(6, 3)) == 3

    def test_symmetric(self) -> None:
        a, b = GridCoord(1, 9), GridCoord(7, 2)
        assert manhattan_distance(a, b) == manhattan_distance(b, a)


class TestSlots:
    def test_offsets_follow_north_east_south_west(self) -> None:
        assert SLOT_OFFSETS == ((-1, 0), (0, 1), (1, 0), (0, -1))

    def test_step(self) -> None:
        origin = GridCoord(5, 5)
        assert step(origin, 0) == GridCoord(4, 5)
        assert step(origin, 1) == GridCoord(5, 6)
        assert step(origin, 2) == GridCoord(6, 5)
        assert step(origin, 3) == GridCoord(5, 4)

    def test_slot_between_neighbours(self) -> None:
        assert slot_between(GridCoord(0, 0), GridCoord(0, 1)) == 1
        assert slot_between(GridCoord(0, 1), GridCoord(0, 0)) == 3

    def test_slot_between_non_neighbours(self) -> None:
        assert slot_between(GridCoord(0, 0), GridCoord(1, 1)) is None
        assert slot_between(GridCoord(0, 0), GridCoord(0, 0)) is None


class TestNeighbors:
    def test_unbounded(self) -> None:
        neighbors = orthogonal_neighbors(GridCoord(0, 0))
        assert neighbors == [GridCoord(-1, 0), GridCoord(0, 1), GridCoord(1, 0), GridCoord(0, -1)]

    def test_corner_is_clipped(self) -> None:
        assert orthogonal_neighbors(GridCoord(0, 0), size=16) == [GridCoord(0, 1), GridCoord(1, 0)]

    def test_far_corner_is_clipped(self) -> None:
        assert orthogonal_neighbors(GridCoord(15, 15), size=16) == [GridCoord(14, 15), GridCoord(15, 14)]


class TestInBounds:
    @pytest.mark.parametrize(
        ("coord", "expected"),
        [
            (GridCoord(0, 0), True),
            (GridCoord(15, 15), True),
            (GridCoord(16, 0), False),
            (GridCoord(0, -1), False),
        ],
    )
    def test_in_bounds(self, coord: GridCoord, expected: bool) -> None:
        assert in_bounds(coord, 16) is expected

