"""Segmentation of an image into foreground and background blocks."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from fpextract.contrast import (
    ClippedContrast,
    RelativeContrast,
    detect_low_absolute_contrast,
)
from fpextract.local_histogram import BlockMap
from fpextract.voting_filter import VotingFilter


@dataclass
class SegmentationMask:
    """Decides which blocks hold usable fingerprint area."""

    contrast: ClippedContrast = field(default_factory=ClippedContrast)
    absolute_contrast_limit: int = 17
    relative_contrast: RelativeContrast = field(default_factory=RelativeContrast)
    low_contrast_majority: VotingFilter = field(
        default_factory=lambda: VotingFilter(radius=9, majority=0.86, border_distance=7)
    )
    block_error_filter: VotingFilter = field(
        default_factory=lambda: VotingFilter(radius=1, majority=0.7, border_distance=4)
    )
    inner_mask_filter: VotingFilter = field(
        default_factory=lambda: VotingFilter(radius=7, majority=0.51, border_distance=4)
    )

    def compute_mask(self, blocks: BlockMap, histogram) -> np.ndarray:
        """Return a boolean (columns, rows) mask, True for foreground blocks."""
        block_contrast = self.contrast.compute(histogram)
        if block_contrast.shape != blocks.block_count:
            raise ValueError("histogram does not match the block map")

        low = detect_low_absolute_contrast(self.absolute_contrast_limit, block_contrast)
        low |= self.relative_contrast.detect_low_contrast(block_contrast, blocks)
        low |= self.low_contrast_majority.apply(low)
        low |= self.block_error_filter.apply(low)

        mask = ~low
        for _ in range(2):
            mask |= self.block_error_filter.apply(mask)
        mask |= self.inner_mask_filter.apply(mask)
        return mask