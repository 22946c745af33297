#!/usr/bin/env python3
"""
Tests for GridCalculator utility
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest
from arso_lidar.models.tile_identifier import Coordinate
from arso_lidar.utils.grid_calculator import GridCalculator


class TestGridCalculator:
    """Test cases for GridCalculator class"""

    def test_single_cell(self):
        coords = list(GridCalculator.iter_coordinates(Coordinate(510, 74), Coordinate(510, 74)))
        assert coords == [Coordinate(510, 74)]

    def test_row_major_order(self):
        coords = list(GridCalculator.iter_coordinates(Coordinate(1, 1), Coordinate(2, 2)))
        assert coords == [Coordinate(1, 1), Coordinate(1, 2), Coordinate(2, 1), Coordinate(2, 2)]

    @pytest.mark.parametrize("a, b, c, d", [(0, 0, 0, 0), (3, 7, 10, 12), (100, 101, 200, 200)])
    def test_count(self, a, b, c, d):
        first, second = Coordinate(a, c), Coordinate(b, d)
        coords = list(GridCalculator.iter_coordinates(first, second))

        assert len(coords) == (b - a + 1) * (d - c + 1)
        assert GridCalculator.calculate_tile_count(first, second) == len(coords)
        assert coords == sorted(coords)

    def test_swapped_corners_are_empty(self):
        first, second = Coordinate(5, 1), Coordinate(4, 3)

        assert list(GridCalculator.iter_coordinates(first, second)) == []
        assert GridCalculator.calculate_tile_count(first, second) == 0
        assert GridCalculator.is_empty_range(first, second)
        assert GridCalculator.is_empty_range(Coordinate(1, 5), Coordinate(3, 4))
        assert not GridCalculator.is_empty_range(Coordinate(1, 1), Coordinate(1, 1))


if __name__ == "__main__":
    pytest.main([__file__])
