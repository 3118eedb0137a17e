"""Block layout of an image and per-block grey level histograms."""

from __future__ import annotations

from typing import NamedTuple

import numpy as np


class Area(NamedTuple):
    """Half-open pixel rectangle [left, right) x [bottom, top)."""

    left: int
    bottom: int
    right: int
    top: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.top - self.bottom

    @property
    def slices(self) -> tuple:
        """Index for an array laid out as [x, y]."""
        return slice(self.left, self.right), slice(self.bottom, self.top)


class BlockMap:
    """Division of a width x height image into nearly equal blocks."""

    def __init__(self, width: int, height: int, max_block_size: int) -> None:
        if width < 1 or height < 1:
            raise ValueError("image dimensions must be positive")
        if max_block_size < 1:
            raise ValueError("block size must be positive")
        self.pixel_count = (width, height)
        self.max_block_size = max_block_size
        columns = -(-width // max_block_size)
        rows = -(-height // max_block_size)
        self.block_count = (columns, rows)
        self.corner_count = (columns + 1, rows + 1)
        self.corners_x = tuple(i * width // columns for i in range(columns + 1))
        self.corners_y = tuple(i * height // rows for i in range(rows + 1))
        self.block_centers_x = tuple(
            (a + b) // 2 for a, b in zip(self.corners_x, self.corners_x[1:])
        )
        self.block_centers_y = tuple(
            (a + b) // 2 for a, b in zip(self.corners_y, self.corners_y[1:])
        )

    def block_area(self, x: int, y: int) -> Area:
        """Pixel rectangle covered by block (x, y)."""
        columns, rows = self.block_count
        if not (0 <= x < columns and 0 <= y < rows):
            raise IndexError(f"block ({x}, {y}) is outside the block map")
        return Area(self.corners_x[x], self.corners_y[y], self.corners_x[x + 1], self.corners_y[y + 1])


def analyze(blocks: BlockMap, image) -> np.ndarray:
    """Histogram of grey levels for each block, shaped (columns, rows, 256)."""
    pixels = np.asarray(image)
    if pixels.shape != blocks.pixel_count:
        raise ValueError("image size does not match the block map")
    if pixels.size and (pixels.min() < 0 or pixels.max() > 255):
        raise ValueError("pixel values must lie in 0..255")
    pixels = pixels.astype(np.int64)

    columns, rows = blocks.block_count
    histogram = np.zeros((columns, rows, 256), dtype=np.int64)
    for x in range(columns):
        for y in range(rows):
            values = pixels[blocks.block_area(x, y).slices].ravel()
            histogram[x, y] = np.bincount(values, minlength=256)
    return histogram


def smooth_around_corners(histogram) -> np.ndarray:
    """Sum the histograms of the up to four blocks meeting at each corner."""
    source = np.asarray(histogram)
    if source.ndim != 3:
        raise ValueError("histogram must be three-dimensional")
    size_x, size_y, size_z = source.shape
    result = np.zeros((size_x + 1, size_y + 1, size_z), dtype=np.int64)
    result[:-1, :-1] += source
    result[:-1, 1:] += source
    result[1:, :-1] += source
    result[1:, 1:] += source
    return result