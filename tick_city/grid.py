"""Grid - fixed-size 2D tile storage with bounds-checked access."""
from __future__ import annotations

from typing import Iterator

from tick_city.types import OutOfBoundsError, Tile, TileType


class Grid:
    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(
                f"grid dimensions must be positive, got {width}x{height}"
            )
        self._width = width
        self._height = height
        self._tiles: list[Tile] = [Tile() for _ in range(width * height)]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def __len__(self) -> int:
        return len(self._tiles)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._tiles == other._tiles
        )

    def __repr__(self) -> str:
        built = sum(1 for t in self._tiles if not t.is_empty)
        return f"Grid({self._width}x{self._height}, built={built})"

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self._width, self._height)

    def _index(self, x: int, y: int) -> int:
        self.check_bounds(x, y)
        return y * self._width + x

    def get(self, x: int, y: int) -> Tile:
        """Return a detached copy of the tile at (x, y)."""
        tile = self._tiles[self._index(x, y)]
        return Tile(tile.category, tile.level)

    def get_mut(self, x: int, y: int) -> Tile:
        """Return the stored tile at (x, y); changes write through."""
        return self._tiles[self._index(x, y)]

    def set(self, x: int, y: int, category: TileType, level: int = 1) -> None:
        self._tiles[self._index(x, y)] = Tile(category, level)

    def reset(self, x: int, y: int) -> None:
        self._tiles[self._index(x, y)] = Tile()

    def cells(self) -> Iterator[tuple[int, int, Tile]]:
        """Yield ``(x, y, tile)`` for every cell in row-major order."""
        width = self._width
        for i, tile in enumerate(self._tiles):
            y, x = divmod(i, width)
            yield x, y, tile

    def square(self, cx: int, cy: int, r: int) -> list[tuple[int, int]]:
        """Coordinates within Chebyshev distance *r* of (cx, cy), clamped to the grid."""
        result: list[tuple[int, int]] = []
        for x in range(max(0, cx - r), min(self._width, cx + r + 1)):
            for y in range(max(0, cy - r), min(self._height, cy + r + 1)):
                result.append((x, y))
        return result

    def count(self, category: TileType) -> int:
        return sum(1 for t in self._tiles if t.category is category)

    def copy(self) -> Grid:
        clone = Grid(self._width, self._height)
        clone._tiles = [Tile(t.category, t.level) for t in self._tiles]
        return clone
