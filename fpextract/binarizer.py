"""Binarization of a smoothed image against a baseline image."""

from __future__ import annotations

import numpy as np

from fpextract.hill_orientation import block_mask_to_pixel_mask
from fpextract.local_histogram import BlockMap


def binarize(image, baseline, mask, blocks: BlockMap) -> np.ndarray:
    """Set the pixels of masked blocks where ``image`` exceeds ``baseline``."""
    values = np.asarray(image, dtype=np.float32)
    reference = np.asarray(baseline, dtype=np.float32)
    if values.shape != blocks.pixel_count or reference.shape != blocks.pixel_count:
        raise ValueError("image size does not match the block map")
    pixel_mask = block_mask_to_pixel_mask(blocks, mask)
    return ((values - reference) > 0) & pixel_mask