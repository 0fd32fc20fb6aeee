"""Mapping of scalar values to RGBA pixels along a blue-to-magenta scale."""

from __future__ import annotations

import math

Pixel = tuple[int, int, int, int]

PIXEL_WHITE: Pixel = (255, 255, 255, 255)
PIXEL_BLACK: Pixel = (0, 0, 0, 255)


def _clamped(maximum: float) -> float:
    return 4.0 if maximum < 4.0 else maximum


def color_interval(maximum: float) -> int:
    """Width of one colour band, in whole units."""
    return int(_clamped(maximum) / 4.0)


def color_interval_inverted(maximum: float) -> float:
    """Inverse of the exact band width."""
    return 4.0 / _clamped(maximum)


def color_value(value: float, maximum: float) -> Pixel:
    """Return the RGBA pixel for ``value`` on a scale reaching ``maximum``."""
    if math.isnan(value):
        return PIXEL_BLACK
    if math.isinf(value):
        return PIXEL_WHITE

    interval = color_interval(maximum)
    inverted = color_interval_inverted(maximum)

    x = int(((int(value) % interval) * 255) * inverted) & 0xFF
    band = int(value * inverted)

    match band:
        case 0:
            return (0, x, 255, 255)
        case 1:
            return (0, 255, 255 - x, 255)
        case 2:
            return (x, 255, 0, 255)
        case 3:
            return (255, 255 - x, 0, 255)
        case 4:
            return (255, 0, x, 255)
        case _:
            return PIXEL_WHITE