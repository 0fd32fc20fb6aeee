"""RGBA images: PNG input and output, and conversion to and from grids."""

from __future__ import annotations

import os
from array import array
from itertools import chain
from typing import Union

from PIL import Image as PILImage

from .color import Pixel, color_value
from .grid import Grid

PathLike = Union[str, "os.PathLike[str]"]

_CHANNEL_DIVISION = 255 * 255


class ImageError(ValueError):
    """Raised when an image cannot be read, written or converted."""


def _check_pixel(pixel: Pixel) -> Pixel:
    values = tuple(pixel)
    if len(values) != 4 or not all(isinstance(v, int) and 0 <= v <= 255 for v in values):
        raise ValueError(f"a pixel is four integers from 0 to 255, got {pixel!r}")
    return values  # type: ignore[return-value]


class Image:
    """A ``width`` x ``height`` image of RGBA pixels stored row by row."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"image dimensions must not be negative, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.pixels: list[Pixel] = [(0, 0, 0, 0)] * (self.width * self.height)

    def __repr__(self) -> str:
        return f"Image(width={self.width}, height={self.height})"

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the image")
        return x + y * self.width

    def __getitem__(self, key: tuple[int, int]) -> Pixel:
        x, y = key
        return self.pixels[self._index(x, y)]

    def __setitem__(self, key: tuple[int, int], pixel: Pixel) -> None:
        x, y = key
        self.pixels[self._index(x, y)] = _check_pixel(pixel)

    @classmethod
    def from_png(cls, path: PathLike) -> "Image":
        """Read a PNG file of any colour type into 8-bit RGBA pixels."""
        try:
            with PILImage.open(path) as source:
                rgba = source.convert("RGBA")
        except (OSError, ValueError) as exc:
            raise ImageError(f"failed to load image '{path}': {exc}") from exc
        image = cls(rgba.width, rgba.height)
        raw = rgba.tobytes()
        image.pixels = list(zip(*[iter(raw)] * 4))
        return image

    def save_png(self, path: PathLike) -> None:
        """Write the image as an 8-bit RGBA PNG file."""
        raw = bytes(chain.from_iterable(self.pixels))
        try:
            PILImage.frombytes("RGBA", (self.width, self.height), raw).save(path, format="PNG")
        except (OSError, ValueError) as exc:
            raise ImageError(f"failed to save image '{path}': {exc}") from exc

    @classmethod
    def from_grid(cls, grid: Grid) -> "Image":
        """Colour the inner cells of ``grid`` on a scale up to its maximum."""
        image = cls(grid.width, grid.height)
        maximum = grid.max()
        image.pixels = [
            color_value(grid[i, j], maximum)
            for j in range(grid.height)
            for i in range(grid.width)
        ]
        return image

    def to_grid(self, channel: int = 0) -> Grid:
        """Return a grid of one colour channel weighted by alpha, in whole units."""
        if not 0 <= channel < 3:
            raise ImageError(f"invalid channel specified: {channel}")
        grid = Grid(self.width, self.height, 0)
        grid.data[:] = array(
            "d",
            (float(pixel[channel] * pixel[3] // _CHANNEL_DIVISION) for pixel in self.pixels),
        )
        return grid