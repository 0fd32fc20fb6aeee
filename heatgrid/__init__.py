"""Heat diffusion over images split into a periodic cartesian arrangement of blocks."""

__version__ = "0.1.0"