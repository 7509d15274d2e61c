"""Tests for hex coordinates and the diamond grid."""

from __future__ import annotations

import pytest

from hop_engine.models.hex import (
    DIRECTIONS,
    Hex,
    cells_between,
    cells_in_direction,
    diamond_grid,
    diamond_limits,
    diamond_spawn,
    diamond_stairs_default,
    direction_between,
    facing_towards,
    hex_distance,
    hex_line,
    in_diamond,
    is_straight_line,
    neighbors,
)


class TestHex:
    """Tests for the Hex value type."""

    def test_cube_coordinate(self) -> None:
        """Test the derived third coordinate."""
        assert Hex(q=2, r=3).s == -5

    def test_arithmetic(self) -> None:
        """Test addition, subtraction and scaling."""
        a = Hex(q=1, r=2)
        b = Hex(q=3, r=-1)

        assert a + b == Hex(q=4, r=1)
        assert b - a == Hex(q=2, r=-3)
        assert a.scale(3) == Hex(q=3, r=6)

    def test_hashable_and_frozen(self) -> None:
        """Test hexes work as set members and cannot be mutated."""
        cells = {Hex(q=1, r=1), Hex(q=1, r=1)}

        assert len(cells) == 1
        with pytest.raises(ValueError):
            Hex(q=1, r=1).q = 2  # type: ignore[misc]

    def test_sort_key_is_row_major(self) -> None:
        """Test that cells sort by row, then column."""
        cells = [Hex(q=2, r=1), Hex(q=0, r=2), Hex(q=1, r=1)]

        assert sorted(cells, key=Hex.sort_key) == [Hex(q=1, r=1), Hex(q=2, r=1), Hex(q=0, r=2)]


class TestDistanceAndLines:
    """Tests for distance, neighbours and straight lines."""

    def test_distance(self) -> None:
        """Test hex distance along and off axes."""
        origin = Hex(q=0, r=0)

        assert hex_distance(origin, origin) == 0
        assert hex_distance(origin, Hex(q=3, r=0)) == 3
        assert hex_distance(origin, Hex(q=2, r=-3)) == 3
        assert hex_distance(origin, Hex(q=1, r=1)) == 2

    def test_neighbors_in_direction_order(self) -> None:
        """Test neighbours follow DIRECTIONS order and are all adjacent."""
        cell = Hex(q=3, r=4)
        result = neighbors(cell)

        assert result == [cell + d for d in DIRECTIONS]
        assert all(hex_distance(cell, n) == 1 for n in result)

    @pytest.mark.parametrize(
        ("target", "expected"),
        [
            (Hex(q=3, r=0), True),
            (Hex(q=0, r=-2), True),
            (Hex(q=2, r=-2), True),
            (Hex(q=1, r=1), False),
            (Hex(q=0, r=0), False),
        ],
    )
    def test_is_straight_line(self, target: Hex, expected: bool) -> None:
        """Test straight-line detection from the origin."""
        assert is_straight_line(Hex(q=0, r=0), target) is expected

    def test_direction_between(self) -> None:
        """Test direction lookup for aligned and unaligned cells."""
        origin = Hex(q=3, r=8)

        assert direction_between(origin, Hex(q=3, r=6)) == 2
        assert direction_between(origin, Hex(q=5, r=8)) == 0
        assert direction_between(origin, Hex(q=4, r=6)) is None

    def test_facing_towards_matches_direction_on_lines(self) -> None:
        """Test facing agrees with the exact direction for aligned cells."""
        origin = Hex(q=3, r=4)
        for index, step in enumerate(DIRECTIONS):
            assert facing_towards(origin, origin + step.scale(2)) == index

    def test_line_and_cells_between(self) -> None:
        """Test line drawing includes both ends and between excludes them."""
        a = Hex(q=3, r=8)
        b = Hex(q=3, r=5)

        assert hex_line(a, b) == [Hex(q=3, r=8), Hex(q=3, r=7), Hex(q=3, r=6), Hex(q=3, r=5)]
        assert cells_between(a, b) == [Hex(q=3, r=7), Hex(q=3, r=6)]
        assert cells_between(a, Hex(q=3, r=7)) == []

    def test_cells_in_direction(self) -> None:
        """Test walking a fixed number of steps along a direction."""
        assert cells_in_direction(Hex(q=0, r=0), 0, 2) == [Hex(q=1, r=0), Hex(q=2, r=0)]


class TestDiamondGrid:
    """Tests for the clipped diamond arena."""

    def test_limits(self) -> None:
        """Test the sum-of-coordinates bounds of the default arena."""
        assert diamond_limits(7, 9) == (3, 11)

    def test_cell_count(self) -> None:
        """Test the default arena has 51 cells, all inside the diamond."""
        cells = diamond_grid(7, 9)

        assert len(cells) == 51
        assert len(set(cells)) == 51
        assert all(in_diamond(c, 7, 9) for c in cells)

    def test_corners_are_clipped(self) -> None:
        """Test cells outside the sum bounds are excluded."""
        assert not in_diamond(Hex(q=0, r=0), 7, 9)
        assert not in_diamond(Hex(q=6, r=8), 7, 9)
        assert in_diamond(Hex(q=3, r=0), 7, 9)

    def test_spawn_and_default_stairs(self) -> None:
        """Test the fixed spawn and fallback stairs cells."""
        spawn = diamond_spawn(7, 9)
        stairs = diamond_stairs_default(7, 9)

        assert spawn == Hex(q=3, r=8)
        assert stairs == Hex(q=3, r=0)
        assert hex_distance(spawn, stairs) == 8
