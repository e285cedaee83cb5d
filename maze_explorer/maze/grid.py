"""Wall grid model.

Two boolean matrices describe every wall segment of a ``width x height`` grid
(``True`` = wall present):

    vertical[x][z]    0 <= x <= width,  0 <= z < height   wall on the left of cell (x, z)
    horizontal[x][z]  0 <= x < width,   0 <= z <= height  wall below cell (x, z)

Perimeter segments (x == 0 / x == width, z == 0 / z == height) never open a
passage: clearing one is a no-op for accessibility and adjacency.
"""
from __future__ import annotations

from typing import Iterator, List, Tuple

from .errors import InvalidDimensionsError

Coord2D = Tuple[int, int]

VERTICAL = "vertical"
HORIZONTAL = "horizontal"

# Neighbor order used everywhere adjacency is built: Up, Down, Right, Left
DIRECTIONS: List[Tuple[str, int, int]] = [
    ("up", 0, 1),
    ("down", 0, -1),
    ("right", 1, 0),
    ("left", -1, 0),
]


class WallGrid:
    __slots__ = ("width", "height", "vertical", "horizontal")

    def __init__(self, width: int, height: int):
        for value in (width, height):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidDimensionsError(width, height)
        self.width = width
        self.height = height
        self.vertical: List[List[bool]] = [[True] * height for _ in range(width + 1)]
        self.horizontal: List[List[bool]] = [[True] * (height + 1) for _ in range(width)]

    def in_bounds(self, x: int, z: int) -> bool:
        return 0 <= x < self.width and 0 <= z < self.height

    def cells(self) -> Iterator[Coord2D]:
        """Row-major scan order (x outer, z inner)."""
        for x in range(self.width):
            for z in range(self.height):
                yield x, z

    def clear_vertical(self, x: int, z: int) -> None:
        self.vertical[x][z] = False

    def clear_horizontal(self, x: int, z: int) -> None:
        self.horizontal[x][z] = False

    def is_cell_accessible(self, x: int, z: int) -> bool:
        if not self.in_bounds(x, z):
            return False
        if x > 0 and not self.vertical[x][z]:
            return True
        if x < self.width - 1 and not self.vertical[x + 1][z]:
            return True
        if z > 0 and not self.horizontal[x][z]:
            return True
        if z < self.height - 1 and not self.horizontal[x][z + 1]:
            return True
        return False

    def _segment(self, a: Coord2D, b: Coord2D) -> Tuple[str, int, int]:
        (ax, az), (bx, bz) = a, b
        if not (self.in_bounds(ax, az) and self.in_bounds(bx, bz)):
            raise ValueError(f"cells out of range: {a} {b}")
        if az == bz and abs(ax - bx) == 1:
            return VERTICAL, max(ax, bx), az
        if ax == bx and abs(az - bz) == 1:
            return HORIZONTAL, ax, max(az, bz)
        raise ValueError(f"cells are not grid-adjacent: {a} {b}")

    def wall_between(self, a: Coord2D, b: Coord2D) -> bool:
        kind, x, z = self._segment(a, b)
        return self.vertical[x][z] if kind == VERTICAL else self.horizontal[x][z]

    def is_open_between(self, a: Coord2D, b: Coord2D) -> bool:
        return not self.wall_between(a, b)

    def clear_between(self, a: Coord2D, b: Coord2D) -> None:
        kind, x, z = self._segment(a, b)
        if kind == VERTICAL:
            self.clear_vertical(x, z)
        else:
            self.clear_horizontal(x, z)

    def adjacent_cells(self, x: int, z: int) -> Iterator[Tuple[str, Coord2D]]:
        """In-range grid neighbors of (x, z) in Up, Down, Right, Left order."""
        for name, dx, dz in DIRECTIONS:
            nx, nz = x + dx, z + dz
            if self.in_bounds(nx, nz):
                yield name, (nx, nz)

    def open_directions(self, x: int, z: int) -> List[str]:
        return [name for name, cell in self.adjacent_cells(x, z) if self.is_open_between((x, z), cell)]

    def iter_walls(self) -> Iterator[Tuple[str, int, int, bool]]:
        """Yield (orientation, x, z, present) for every wall segment."""
        for x in range(self.width + 1):
            for z in range(self.height):
                yield VERTICAL, x, z, self.vertical[x][z]
        for x in range(self.width):
            for z in range(self.height + 1):
                yield HORIZONTAL, x, z, self.horizontal[x][z]

    def present_walls(self) -> List[Tuple[str, int, int]]:
        return [(o, x, z) for o, x, z, present in self.iter_walls() if present]

    def cleared_walls(self) -> List[Tuple[str, int, int]]:
        return [(o, x, z) for o, x, z, present in self.iter_walls() if not present]

    def snapshot(self) -> Tuple[Tuple[Tuple[bool, ...], ...], Tuple[Tuple[bool, ...], ...]]:
        """Immutable copy of both matrices (handy for equality checks)."""
        return (
            tuple(tuple(col) for col in self.vertical),
            tuple(tuple(col) for col in self.horizontal),
        )

    def __repr__(self):
        return f"<WallGrid {self.width}x{self.height}>"


__all__ = ["WallGrid", "Coord2D", "DIRECTIONS", "VERTICAL", "HORIZONTAL"]
