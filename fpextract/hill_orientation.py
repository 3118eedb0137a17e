"""Ridge orientation per block estimated from local pixel hills."""

from __future__ import annotations

import math

import numpy as np

from fpextract.local_histogram import BlockMap

_NEIGHBORS = (
    (-1, 1), (-1, 2), (-1, 3),
    (-2, 1), (-2, 2), (-2, 3),
    (-3, 1), (-3, 2), (-3, 3),
    (0, 1), (0, 2), (0, 3),
    (1, 0), (1, 1), (1, 2), (1, 3),
    (2, 0), (2, 1), (2, 2), (2, 3),
    (3, 0), (3, 1), (3, 2), (3, 3),
    (-5, 0), (-5, 5), (0, 5), (5, 5),
)


def _atan(x: float, y: float) -> float:
    angle = math.atan2(y, x)
    return angle + 2 * math.pi if angle < 0 else angle


def _orientation_vector(dx: int, dy: int):
    angle = _atan(dx, dy)
    doubled = 2 * angle if angle < math.pi else 2 * (angle - math.pi)
    return np.float32(math.cos(doubled)), np.float32(math.sin(doubled))


def block_mask_to_pixel_mask(blocks: BlockMap, block_mask) -> np.ndarray:
    """Expand a (columns, rows) block mask to a per-pixel boolean mask."""
    mask = np.asarray(block_mask, dtype=bool)
    if mask.shape != blocks.block_count:
        raise ValueError("block mask does not match the block map")
    pixels = np.zeros(blocks.pixel_count, dtype=bool)
    columns, rows = blocks.block_count
    for x in range(columns):
        for y in range(rows):
            pixels[blocks.block_area(x, y).slices] = mask[x, y]
    return pixels


def _accumulate(image: np.ndarray, pixel_mask: np.ndarray) -> np.ndarray:
    width, height = image.shape
    directions = np.zeros((width, height, 2), dtype=np.float32)
    for dx, dy in _NEIGHBORS:
        vx, vy = _orientation_vector(dx, dy)
        x0, x1 = abs(dx), width - abs(dx)
        y0, y1 = abs(dy), height - abs(dy)
        if x1 <= x0 or y1 <= y0:
            continue
        centre = image[x0:x1, y0:y1]
        forward = image[x0 + dx : x1 + dx, y0 + dy : y1 + dy]
        backward = image[x0 - dx : x1 - dx, y0 - dy : y1 - dy]
        strength = (centre - np.maximum(forward, backward)).astype(np.float32)
        use = (strength > 0) & pixel_mask[x0:x1, y0:y1]
        target = directions[x0:x1, y0:y1]
        target[..., 0] += np.where(use, strength * vx, np.float32(0))
        target[..., 1] += np.where(use, strength * vy, np.float32(0))
    return directions


def _sum_blocks(directions: np.ndarray, block_mask: np.ndarray, blocks: BlockMap) -> np.ndarray:
    width, height = blocks.pixel_count
    flat = directions.reshape(width * height, 2)
    size = blocks.max_block_size
    result = np.zeros(blocks.block_count + (2,), dtype=np.float32)
    for bx, by in np.argwhere(block_mask):
        left = blocks.corners_x[bx]
        bottom = blocks.corners_y[by]
        xs = np.arange(left, left + size)[:, np.newaxis]
        ys = np.arange(bottom, bottom + size)[np.newaxis, :]
        # Rows are read as one contiguous run, so a block reaching past the top
        # edge continues into the next column.
        index = (xs * height + ys).ravel()
        index = index[index < width * height]
        if index.size:
            result[bx, by] = np.cumsum(flat[index], axis=0, dtype=np.float32)[-1]
    return result


def detect_orientation(image, block_mask, blocks: BlockMap) -> np.ndarray:
    """Quantized orientation 0..255 of each masked block, as uint16."""
    pixels = np.asarray(image, dtype=np.float32)
    if pixels.shape != blocks.pixel_count:
        raise ValueError("image size does not match the block map")
    mask = np.asarray(block_mask, dtype=bool)
    pixel_mask = block_mask_to_pixel_mask(blocks, mask)
    sums = _sum_blocks(_accumulate(pixels, pixel_mask), mask, blocks)

    output = np.zeros(blocks.block_count, dtype=np.uint16)
    for bx, by in np.argwhere(mask):
        angle = _atan(float(sums[bx, by, 0]), float(sums[bx, by, 1]))
        value = int(angle / (2 * math.pi) * 256)
        output[bx, by] = min(max(value, 0), 255)
    return output