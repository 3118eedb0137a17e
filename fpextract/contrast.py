"""Block contrast measures and the low-contrast detectors built on them."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from fpextract.local_histogram import BlockMap


def detect_low_absolute_contrast(limit: int, contrast) -> np.ndarray:
    """Mark blocks whose contrast is below ``limit``."""
    return np.asarray(contrast) < limit


@dataclass
class ClippedContrast:
    """Grey level range of a block after clipping a fraction from each end."""

    clip_fraction: float = 0.08

    def compute(self, histogram) -> np.ndarray:
        """Contrast per block from a (columns, rows, 256) histogram."""
        counts = np.asarray(histogram, dtype=np.int64)
        if counts.ndim != 3 or counts.shape[2] != 256:
            raise ValueError("histogram must be shaped (columns, rows, 256)")

        area = counts.sum(axis=2)
        clip = (area.astype(np.float32) * np.float32(self.clip_fraction)).astype(np.int64)
        clip = clip[..., np.newaxis]

        rising = np.cumsum(counts, axis=2) > clip
        lower = np.where(rising.any(axis=2), rising.argmax(axis=2), 255)
        falling = np.cumsum(counts[..., ::-1], axis=2) > clip
        upper = np.where(falling.any(axis=2), 255 - falling.argmax(axis=2), 0)
        # Stored as an unsigned byte, so a negative range wraps around.
        return ((upper - lower) % 256).astype(np.uint8)


@dataclass
class RelativeContrast:
    """Flags blocks far below the average contrast of the best blocks."""

    sample_size: int = 168568
    sample_fraction: float = 0.49
    relative_limit: float = 0.34

    def detect_low_contrast(self, contrast, blocks: BlockMap) -> np.ndarray:
        values = np.asarray(contrast)
        ordered = np.sort(values, axis=None)[::-1]

        pixels_wide, pixels_high = blocks.pixel_count
        columns, rows = blocks.block_count
        pixels_per_block = (pixels_wide * pixels_high) // (columns * rows)
        sample_count = min(values.size, self.sample_size // pixels_per_block)
        considered = max(
            int(np.float32(sample_count) * np.float32(self.sample_fraction)), 1
        )

        average = int(ordered[:considered].astype(np.int64).sum()) // considered
        limit = int(np.float32(average) * np.float32(self.relative_limit))
        return values < limit