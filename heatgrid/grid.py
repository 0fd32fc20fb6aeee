"""Two-dimensional grids of floats with an optional padding border."""

from __future__ import annotations

import sys
from array import array
from itertools import chain
from typing import Optional, TextIO


class GridError(ValueError):
    """Raised when an operation on grids cannot be carried out."""


class Grid:
    """A ``width`` x ``height`` grid of floats surrounded by ``padding`` cells.

    ``grid[i, j]`` addresses cells relative to the inner area, so coordinates
    from ``-padding`` to ``width + padding - 1`` reach into the padding.
    ``padded`` and ``set_padded`` address cells from the padded corner.
    The cells are stored row by row in ``data``, padding included.
    """

    def __init__(self, width: int, height: int, padding: int = 0) -> None:
        for name, value in (("width", width), ("height", height), ("padding", padding)):
            if value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")
        self.width = int(width)
        self.height = int(height)
        self.padding = int(padding)
        self.data = array("d", [0.0]) * (self.width_padded * self.height_padded)

    @property
    def width_padded(self) -> int:
        return self.width + 2 * self.padding

    @property
    def height_padded(self) -> int:
        return self.height + 2 * self.padding

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height}, padding={self.padding})"

    def _offset(self, i: int, j: int) -> int:
        p = self.padding
        if not (-p <= i < self.width + p and -p <= j < self.height + p):
            raise IndexError(f"cell ({i}, {j}) is outside the grid")
        return (i + p) + (j + p) * self.width_padded

    def _padded_offset(self, i: int, j: int) -> int:
        if not (0 <= i < self.width_padded and 0 <= j < self.height_padded):
            raise IndexError(f"padded cell ({i}, {j}) is outside the grid")
        return i + j * self.width_padded

    def _row(self, j: int) -> int:
        """Offset in ``data`` of the first inner cell of inner row ``j``."""
        return (j + self.padding) * self.width_padded + self.padding

    def __getitem__(self, key: tuple[int, int]) -> float:
        i, j = key
        return self.data[self._offset(i, j)]

    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        i, j = key
        self.data[self._offset(i, j)] = value

    def padded(self, i: int, j: int) -> float:
        """Return the cell at padded coordinates (i, j)."""
        return self.data[self._padded_offset(i, j)]

    def set_padded(self, i: int, j: int, value: float) -> None:
        """Set the cell at padded coordinates (i, j)."""
        self.data[self._padded_offset(i, j)] = value

    def _check_same_dimensions(self, other: "Grid") -> None:
        if self.width != other.width or self.height != other.height:
            raise GridError("grid dimensions are different")

    def clone(self) -> "Grid":
        """Return a copy of this grid's inner cells with the same padding."""
        return self.clone_with_padding(self.padding)

    def clone_with_padding(self, padding: int) -> "Grid":
        """Return a copy of the inner cells in a grid with another padding."""
        new_grid = Grid(self.width, self.height, padding)
        self.copy_data_to(new_grid)
        return new_grid

    def copy_data_to(self, dst: "Grid") -> None:
        """Copy the inner cells into ``dst``, which must have the same size."""
        self._check_same_dimensions(dst)
        w = self.width
        for j in range(self.height):
            src_start, dst_start = self._row(j), dst._row(j)
            dst.data[dst_start:dst_start + w] = self.data[src_start:src_start + w]

    def copy_block(self, x1: int, y1: int, width: int, height: int,
                   dst: "Grid", x2: int, y2: int) -> None:
        """Copy a ``width`` x ``height`` block at (x1, y1) into ``dst`` at (x2, y2)."""
        if min(x1, y1, x2, y2, width, height) < 0:
            raise GridError("block coordinates and sizes must not be negative")
        if x1 + width > self.width or y1 + height > self.height:
            raise GridError(
                f"invalid source bounds ({x1 + width} > {self.width}) || "
                f"({y1 + height} > {self.height})"
            )
        if x2 + width > dst.width or y2 + height > dst.height:
            raise GridError(
                f"invalid destination bounds ({x2 + width} > {dst.width}) || "
                f"({y2 + height} > {dst.height})"
            )
        for j in range(height):
            src_start = self._row(y1 + j) + x1
            dst_start = dst._row(y2 + j) + x2
            dst.data[dst_start:dst_start + width] = self.data[src_start:src_start + width]

    def copy_inner_border_to(self, dst: "Grid") -> None:
        """Copy the outermost inner rows and columns into ``dst``."""
        if self.width != dst.width:
            raise GridError(f"width mismatch between the grids (src={self.width}, dst={dst.width})")
        if self.height != dst.height:
            raise GridError(f"height mismatch between the grids (src={self.height}, dst={dst.height})")
        w, h = self.width, self.height
        for j in (0, h - 1):
            src_start, dst_start = self._row(j), dst._row(j)
            dst.data[dst_start:dst_start + w] = self.data[src_start:src_start + w]
        for j in range(h):
            dst[0, j] = self[0, j]
            dst[w - 1, j] = self[w - 1, j]

    def fill(self, value: float) -> None:
        """Set every cell, padding included, to ``value``."""
        self.data[:] = array("d", [value]) * len(self.data)

    def raise_to(self, other: "Grid") -> None:
        """Raise every inner cell below the matching cell of ``other`` to that value."""
        self._check_same_dimensions(other)
        w = self.width
        for j in range(self.height):
            start, other_start = self._row(j), other._row(j)
            self.data[start:start + w] = array(
                "d", map(max, self.data[start:start + w], other.data[other_start:other_start + w])
            )

    def set_padding_from_inner_bound(self) -> None:
        """Fill the first ring of padding with the nearest inner cells."""
        if self.padding == 0:
            raise GridError("grid does not contain any padding")
        w, h = self.width, self.height
        xe, ye = w - 1, h - 1
        for src_j, dst_j in ((0, -1), (ye, ye + 1)):
            src_start, dst_start = self._row(src_j), self._row(dst_j)
            self.data[dst_start:dst_start + w] = self.data[src_start:src_start + w]
        for j in range(h):
            self[-1, j] = self[0, j]
            self[xe + 1, j] = self[xe, j]
        self[-1, -1] = self[0, 0]
        self[xe + 1, -1] = self[xe, 0]
        self[xe + 1, ye + 1] = self[xe, ye]
        self[-1, ye + 1] = self[0, ye]

    def multiply(self, factor: float) -> None:
        """Multiply every cell, padding included, by ``factor``."""
        self.data[:] = array("d", (value * factor for value in self.data))

    def max(self) -> float:
        """Return the largest cell value, padding included, never below 0.0."""
        return max(chain((0.0,), self.data))

    def dump(self, file: Optional[TextIO] = None, prefix: Optional[str] = None) -> None:
        """Write every padded row as fixed-width numbers to ``file``."""
        out = sys.stdout if file is None else file
        wp = self.width_padded
        for j in range(self.height_padded):
            row = self.data[j * wp:(j + 1) * wp]
            head = f"{prefix} " if prefix is not None else ""
            out.write(head + "".join("%#6.2f " % value for value in row) + "\n")