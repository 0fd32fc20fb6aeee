"""Cartesian decomposition of a grid into a two-dimensional array of blocks."""

from __future__ import annotations

from itertools import accumulate
from typing import Iterator

from .grid import Grid


def split_dimension(total: int, count: int) -> list[int]:
    """Split ``total`` into ``count`` sizes, the first ones one larger if needed."""
    if count <= 0:
        raise ValueError(f"block count must be positive, got {count}")
    quotient, remainder = divmod(total, count)
    return [quotient + (1 if index < remainder else 0) for index in range(count)]


def offsets_of(dimensions: list[int]) -> list[int]:
    """Return the starting offset of each dimension laid end to end."""
    return list(accumulate(dimensions[:-1], initial=0)) if dimensions else []


class Cart2D:
    """A ``grid_x`` x ``grid_y`` array of grids covering ``width`` x ``height`` cells."""

    def __init__(self, grid_x: int, grid_y: int, width: int, height: int) -> None:
        self.grid_x_count = grid_x
        self.grid_y_count = grid_y
        self.total_width = width
        self.total_height = height
        self.x_dims = split_dimension(width, grid_x)
        self.y_dims = split_dimension(height, grid_y)
        self.x_offsets = offsets_of(self.x_dims)
        self.y_offsets = offsets_of(self.y_dims)
        self.grids = [[Grid(w, h, 0) for w in self.x_dims] for h in self.y_dims]

    def __repr__(self) -> str:
        return (
            f"Cart2D(grid_x={self.grid_x_count}, grid_y={self.grid_y_count}, "
            f"width={self.total_width}, height={self.total_height})"
        )

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.grid_x_count and 0 <= y < self.grid_y_count):
            raise IndexError(f"block ({x}, {y}) is outside the cart")

    def __getitem__(self, key: tuple[int, int]) -> Grid:
        x, y = key
        self._check(x, y)
        return self.grids[y][x]

    def __setitem__(self, key: tuple[int, int], grid: Grid) -> None:
        x, y = key
        self._check(x, y)
        self.grids[y][x] = grid

    def _blocks(self) -> Iterator[tuple[int, int, int, int, int, int]]:
        """Yield (x, y, x_offset, y_offset, width, height) for every block."""
        for y, (y_off, h) in enumerate(zip(self.y_offsets, self.y_dims)):
            for x, (x_off, w) in enumerate(zip(self.x_offsets, self.x_dims)):
                yield x, y, x_off, y_off, w, h

    @classmethod
    def from_grid(cls, grid: Grid, grid_x: int, grid_y: int) -> "Cart2D":
        """Cut ``grid`` into ``grid_x`` x ``grid_y`` blocks."""
        cart = cls(grid_x, grid_y, grid.width, grid.height)
        for x, y, x_off, y_off, w, h in cart._blocks():
            grid.copy_block(x_off, y_off, w, h, cart[x, y], 0, 0)
        return cart

    def to_grid(self) -> Grid:
        """Assemble the blocks into one grid without padding."""
        grid = Grid(self.total_width, self.total_height, 0)
        for x, y, x_off, y_off, w, h in self._blocks():
            self[x, y].copy_block(0, 0, w, h, grid, x_off, y_off)
        return grid

    def pad(self, padding: int) -> None:
        """Replace every block by a copy with the given padding."""
        for x, y, *_ in self._blocks():
            self[x, y] = self[x, y].clone_with_padding(padding)