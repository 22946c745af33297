from typing import Iterator

from arso_lidar.models.tile_identifier import Coordinate


class GridCalculator:
    """Utility class for grid coordinate enumeration"""

    @staticmethod
    def iter_coordinates(first: Coordinate, second: Coordinate) -> Iterator[Coordinate]:
        """Inclusive rectangle between two corners, x outer and y inner.

        Corners are not swapped: first.x > second.x or first.y > second.y
        yields nothing.
        """
        for x in range(first.x, second.x + 1):
            for y in range(first.y, second.y + 1):
                yield Coordinate(x=x, y=y)

    @staticmethod
    def calculate_tile_count(first: Coordinate, second: Coordinate) -> int:
        """Calculate total number of tiles between the corners"""
        width = second.x - first.x + 1
        height = second.y - first.y + 1
        if width <= 0 or height <= 0:
            return 0
        return width * height

    @staticmethod
    def is_empty_range(first: Coordinate, second: Coordinate) -> bool:
        return first.x > second.x or first.y > second.y
