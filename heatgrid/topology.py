"""A periodic two-dimensional process topology and the grid transfers between its ranks.

Every rank of the topology owns one block of a ``Cart2D``. Rank 0 hands the
blocks out, neighbouring ranks swap their outermost rows and columns into
each other's padding, and rank 0 collects the results at the end. All ranks
live in the same process here, so a transfer is a copy between grids that
are kept in a list indexed by rank.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .cart import Cart2D
from .grid import Grid, GridError


@dataclass(frozen=True)
class RankInfo:
    """Where one rank sits in the topology and who its neighbours are."""

    rank: int
    rank_count: int
    coordinates: tuple[int, int]
    north: int
    south: int
    east: int
    west: int


class CartTopology:
    """A ``dim_x`` x ``dim_y`` grid of ranks, periodic in both dimensions.

    Ranks are numbered in row-major order of their coordinates (x, y), the
    last coordinate varying fastest. Dimension 0 runs west to east, dimension
    1 runs north to south.
    """

    def __init__(self, dim_x: int, dim_y: int) -> None:
        if dim_x <= 0 or dim_y <= 0:
            raise ValueError(f"topology dimensions must be positive, got {dim_x}x{dim_y}")
        self.dim_x = int(dim_x)
        self.dim_y = int(dim_y)

    def __repr__(self) -> str:
        return f"CartTopology(dim_x={self.dim_x}, dim_y={self.dim_y})"

    @property
    def dims(self) -> tuple[int, int]:
        return (self.dim_x, self.dim_y)

    @property
    def rank_count(self) -> int:
        return self.dim_x * self.dim_y

    def _check_rank(self, rank: int) -> None:
        if not 0 <= rank < self.rank_count:
            raise IndexError(f"rank {rank} is outside a topology of {self.rank_count} ranks")

    def coords(self, rank: int) -> tuple[int, int]:
        """Return the (x, y) coordinates of ``rank``."""
        self._check_rank(rank)
        x, y = divmod(rank, self.dim_y)
        return (x, y)

    def rank_of(self, x: int, y: int) -> int:
        """Return the rank at (x, y); coordinates wrap around both dimensions."""
        return (x % self.dim_x) * self.dim_y + (y % self.dim_y)

    def shift(self, rank: int, dimension: int, displacement: int) -> tuple[int, int]:
        """Return the (source, destination) ranks of a shift along ``dimension``."""
        if dimension not in (0, 1):
            raise ValueError(f"dimension must be 0 or 1, got {dimension}")
        coordinates = list(self.coords(rank))
        before, after = list(coordinates), list(coordinates)
        before[dimension] -= displacement
        after[dimension] += displacement
        return self.rank_of(*before), self.rank_of(*after)

    def rank_info(self, rank: int) -> RankInfo:
        """Return the coordinates and the four neighbours of ``rank``."""
        north, south = self.shift(rank, 1, 1)
        west, east = self.shift(rank, 0, 1)
        return RankInfo(
            rank=rank,
            rank_count=self.rank_count,
            coordinates=self.coords(rank),
            north=north,
            south=south,
            east=east,
            west=west,
        )


def _check_grid_count(topology: CartTopology, grids: Sequence[Grid]) -> None:
    if len(grids) != topology.rank_count:
        raise ValueError(
            f"expected one grid for each of the {topology.rank_count} ranks, got {len(grids)}"
        )


def _check_cart(topology: CartTopology, cart: Cart2D) -> None:
    if (cart.grid_x_count, cart.grid_y_count) != topology.dims:
        raise ValueError(
            f"cart of {cart.grid_x_count}x{cart.grid_y_count} blocks does not match "
            f"a topology of {topology.dim_x}x{topology.dim_y} ranks"
        )


def _transfer_copy(grid: Grid) -> Grid:
    """Copy a grid whole: its dimensions, its padding and every cell."""
    copy = Grid(grid.width, grid.height, grid.padding)
    copy.data[:] = grid.data
    return copy


def scatter_grids(topology: CartTopology, cart: Cart2D) -> list[Grid]:
    """Hand every rank a copy of the block of ``cart`` at its coordinates.

    The result is indexed by rank.
    """
    _check_cart(topology, cart)
    return [_transfer_copy(cart[topology.coords(rank)]) for rank in range(topology.rank_count)]


def exchange_borders(topology: CartTopology, grids: Sequence[Grid]) -> None:
    """Fill the padding of every rank's grid with its neighbours' borders.

    Each grid must have a padding of 1. The top padding row receives the
    bottom inner row of the north neighbour, the bottom padding row the top
    inner row of the south neighbour, the left padding column the rightmost
    inner column of the west neighbour and the right padding column the
    leftmost inner column of the east neighbour. Corners are left untouched.
    """
    _check_grid_count(topology, grids)
    for rank, grid in enumerate(grids):
        if grid.padding != 1:
            raise GridError(f"grid of rank {rank} has padding {grid.padding}, expected 1")

    for rank, grid in enumerate(grids):
        info = topology.rank_info(rank)
        north, south = grids[info.north], grids[info.south]
        west, east = grids[info.west], grids[info.east]
        if north.width != grid.width or south.width != grid.width:
            raise GridError(f"width mismatch between rank {rank} and its north or south peer")
        if west.height != grid.height or east.height != grid.height:
            raise GridError(f"height mismatch between rank {rank} and its west or east peer")

        w, h = grid.width, grid.height
        for i in range(w):
            grid[i, -1] = north[i, north.height - 1]
            grid[i, h] = south[i, 0]
        for j in range(h):
            grid[-1, j] = west[west.width - 1, j]
            grid[w, j] = east[0, j]


def gather_results(topology: CartTopology, cart: Cart2D, grids: Sequence[Grid]) -> None:
    """Copy the inner cells of every rank's grid into its block of ``cart``."""
    _check_cart(topology, cart)
    _check_grid_count(topology, grids)
    for rank, grid in enumerate(grids):
        grid.copy_data_to(cart[topology.coords(rank)])