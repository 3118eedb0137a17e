"""Smoothing of an image along lines that follow the block orientation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from fpextract.lines_by_orientation import construct_lines
from fpextract.local_histogram import BlockMap


@dataclass(frozen=True)
class SmootherConfig:
    """Shape of the smoothing lines."""

    radius: int = 7
    angular_resolution: int = 32
    step_factor: float = 1.5


def smooth(config: SmootherConfig, image, orientation, mask, blocks: BlockMap, angle_offset: int) -> np.ndarray:
    """Average every pixel of each masked block along its orientation line.

    ``orientation`` holds one byte-sized angle per block; ``angle_offset`` is
    added to it modulo 256 before the line is chosen. Pixels of blocks outside
    the mask are zero in the result.
    """
    source = np.asarray(image, dtype=np.float32)
    if source.shape != blocks.pixel_count:
        raise ValueError("image size does not match the block map")
    angles = np.asarray(orientation)
    if angles.shape != blocks.block_count:
        raise ValueError("orientation does not match the block map")
    block_mask = np.asarray(mask, dtype=bool)
    if block_mask.shape != blocks.block_count:
        raise ValueError("block mask does not match the block map")
    if not 0 <= angle_offset <= 255:
        raise ValueError("angle offset must lie in 0..255")

    lines = construct_lines(config.angular_resolution, config.radius, config.step_factor)
    width, height = blocks.pixel_count
    columns, rows = blocks.block_count
    output = np.zeros((width, height), dtype=np.float32)

    for by in range(rows):
        for bx in range(columns):
            if not block_mask[bx, by]:
                continue
            angle = (int(angles[bx, by]) + angle_offset) & 0xFF
            line = lines[angle * config.angular_resolution // 256]
            area = blocks.block_area(bx, by)
            for dx, dy in line:
                left = max(area.left + dx, 0)
                right = min(area.right + dx, width)
                bottom = max(area.bottom + dy, 0)
                top = min(area.top + dy, height)
                if right <= left or top <= bottom:
                    continue
                output[left - dx : right - dx, bottom - dy : top - dy] += source[left:right, bottom:top]
            output[area.slices] *= np.float32(1.0) / np.float32(len(line))
    return output