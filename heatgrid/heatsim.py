"""Heat diffusion over an image split into blocks on a periodic grid of ranks."""

from __future__ import annotations

import os
from array import array
from typing import Union

from .cart import Cart2D
from .grid import Grid, GridError
from .image import Image, ImageError
from .topology import CartTopology, exchange_borders, gather_results, scatter_grids

PathLike = Union[str, "os.PathLike[str]"]

_HEAT_SCALE = 1000


class SimulationError(RuntimeError):
    """Raised when a simulation step cannot be carried out."""


def diffuse(current: Grid, nxt: Grid) -> None:
    """Write one diffusion step of the inner cells of ``current`` into ``nxt``.

    Each cell moves a quarter of the way towards the mean of its four
    neighbours, so ``current`` needs a padding of at least one cell.
    """
    if current.width_padded != nxt.width_padded or current.height_padded != nxt.height_padded:
        raise SimulationError("mismatch in dimensions")
    if current.padding < 1:
        raise SimulationError("diffusion needs a grid with a padding of at least 1")

    w = current.width
    src, dst = current.data, nxt.data
    wp, p = current.width_padded, current.padding
    nwp, np_ = nxt.width_padded, nxt.padding
    for j in range(current.height):
        row = (j + p) * wp + p
        centers = src[row:row + w]
        tops = src[row + wp:row + wp + w]
        rights = src[row + 1:row + 1 + w]
        bottoms = src[row - wp:row - wp + w]
        lefts = src[row - 1:row - 1 + w]
        out = (j + np_) * nwp + np_
        dst[out:out + w] = array(
            "d",
            (
                center + 0.25 * (top + right + bottom + left - 4 * center)
                for center, top, right, bottom, left in zip(centers, tops, rights, bottoms, lefts)
            ),
        )


def load_image(path: PathLike, dim_x: int, dim_y: int) -> Cart2D:
    """Read the red channel of a PNG as heat and cut it into ``dim_x`` x ``dim_y`` blocks."""
    try:
        image = Image.from_png(path)
    except ImageError as exc:
        raise SimulationError(f"failed to load image '{path}'") from exc
    try:
        grid = image.to_grid(0)
        grid.multiply(_HEAT_SCALE)
        return Cart2D.from_grid(grid, dim_x, dim_y)
    except (ImageError, GridError, ValueError) as exc:
        raise SimulationError(f"failed to create cartesian grid: {exc}") from exc


def save_image(path: PathLike, cart: Cart2D) -> None:
    """Assemble the blocks of ``cart`` and write them as a coloured PNG."""
    try:
        grid = cart.to_grid()
        image = Image.from_grid(grid)
        image.save_png(path)
    except (ImageError, GridError) as exc:
        raise SimulationError(f"failed to save image '{path}': {exc}") from exc


def run(input_path: PathLike, output_path: PathLike, dim_x: int, dim_y: int,
        iterations: int) -> None:
    """Simulate ``iterations`` diffusion steps on the image at ``input_path``.

    The image is split over a periodic ``dim_x`` x ``dim_y`` topology; every
    rank diffuses its own block after swapping borders with its neighbours,
    and never lets a cell drop below its starting heat.
    """
    try:
        topology = CartTopology(dim_x, dim_y)
    except ValueError as exc:
        raise SimulationError(f"simulation initialization failed: {exc}") from exc

    infos = [topology.rank_info(rank) for rank in range(topology.rank_count)]
    pid = os.getpid()
    for info in infos:
        x, y = info.coordinates
        print(f"[{info.rank}] Heat simulation initialised, pid={pid}")
        print(
            f"[{info.rank}] (x,y)=({x},{y}), (S,W,N,E)="
            f"({info.south},{info.west},{info.north},{info.east})"
        )

    cart = load_image(input_path, dim_x, dim_y)

    print("[0] sending grids to other ranks")
    blocks = scatter_grids(topology, cart)
    print("[0] sent grids to other ranks")

    current = [block.clone_with_padding(1) for block in blocks]
    for info, grid in zip(infos, current):
        print(
            f"[{info.rank}] grid config: padding={grid.padding} "
            f"width={grid.width} height={grid.height}"
        )

    nxt = [grid.clone() for grid in current]
    heat = [grid.clone() for grid in current]

    for info in infos:
        print(f"[{info.rank}] starting simulation")

    try:
        for iteration in range(1, iterations + 1):
            exchange_borders(topology, current)
            for info, cur, new, floor in zip(infos, current, nxt, heat):
                cur.raise_to(floor)
                diffuse(cur, new)
                print(f"[{info.rank}] iteration {iteration} of {iterations} done")
            current, nxt = nxt, current

        print("[0] receiving results from other ranks")
        gather_results(topology, cart, current)
        print("[0] received results from other ranks")
    except GridError as exc:
        raise SimulationError(f"simulation failed: {exc}") from exc

    save_image(output_path, cart)