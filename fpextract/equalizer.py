"""Local histogram equalization of a grey level image."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from fpextract.local_histogram import BlockMap

_RANGE_MIN = np.float32(-1.0)
_RANGE_MAX = np.float32(1.0)
_RANGE_SIZE = np.float32(2.0)
_TO_FLOAT = (np.arange(256) / 255.0).astype(np.float32)


@dataclass
class Equalizer:
    """Maps grey levels into [-1, 1] using corner-smoothed local histograms."""

    max_scaling: float = 3.99
    min_scaling: float = 0.25

    def _limits(self):
        width_max = np.float32(2.0 / 256.0 * float(np.float32(self.max_scaling)))
        width_min = np.float32(2.0 / 256.0 * float(np.float32(self.min_scaling)))
        levels = np.arange(256, dtype=np.float32)
        below = (255 - levels).astype(np.float32)
        limited_min = np.maximum(levels * width_min + _RANGE_MIN, _RANGE_MAX - below * width_max)
        limited_max = np.minimum(levels * width_max + _RANGE_MIN, _RANGE_MAX - below * width_min)
        return limited_min.astype(np.float32), limited_max.astype(np.float32)

    def _equalization(self, blocks: BlockMap, histogram, block_mask) -> np.ndarray:
        limited_min, limited_max = self._limits()
        corners_x, corners_y = blocks.corner_count
        counts = np.asarray(histogram, dtype=np.int64)
        if counts.shape != (corners_x, corners_y, 256):
            raise ValueError("histogram must be shaped (corner columns, corner rows, 256)")

        padded = np.zeros((corners_x + 1, corners_y + 1), dtype=bool)
        padded[1:-1, 1:-1] = block_mask
        near_mask = padded[1:, 1:] | padded[:-1, 1:] | padded[1:, :-1] | padded[:-1, :-1]

        table = np.zeros((corners_x, corners_y, 256), dtype=np.float32)
        for x, y in np.argwhere(near_mask):
            column = counts[x, y]
            area = int(column.sum())
            if area == 0:
                raise ValueError(f"corner ({x}, {y}) has an empty histogram")
            weight = np.float32(_RANGE_SIZE / np.float32(area))
            widths = (column.astype(np.float32) * weight).astype(np.float32)
            tops = np.cumsum(np.concatenate(([_RANGE_MIN], widths)), dtype=np.float32)[:-1]
            equalized = (tops + _TO_FLOAT * widths).astype(np.float32)
            table[x, y] = np.minimum(np.maximum(equalized, limited_min), limited_max)
        return table

    def equalize(self, blocks: BlockMap, image, histogram, block_mask) -> np.ndarray:
        """Return the equalized image as float32, zero outside masked blocks."""
        pixels = np.asarray(image)
        if pixels.shape != blocks.pixel_count:
            raise ValueError("image size does not match the block map")
        mask = np.asarray(block_mask, dtype=bool)
        if mask.shape != blocks.block_count:
            raise ValueError("block mask does not match the block map")
        pixels = pixels.astype(np.int64)

        table = self._equalization(blocks, histogram, mask)
        output = np.zeros(blocks.pixel_count, dtype=np.float32)
        for bx, by in np.argwhere(mask):
            area = blocks.block_area(int(bx), int(by))
            values = pixels[area.slices]
            fx = ((np.arange(area.left, area.right) - area.left) / np.float32(area.width)).astype(np.float32)
            fy = ((np.arange(area.bottom, area.top) - area.bottom) / np.float32(area.height)).astype(np.float32)
            fx, fy = fx[:, np.newaxis], fy[np.newaxis, :]
            bottom_left = table[bx, by][values]
            bottom_right = table[bx + 1, by][values]
            top_left = table[bx, by + 1][values]
            top_right = table[bx + 1, by + 1][values]
            left = bottom_left + fy * (top_left - bottom_left)
            right = bottom_right + fy * (top_right - bottom_right)
            output[area.slices] = (left + fx * (right - left)).astype(np.float32)
        return output