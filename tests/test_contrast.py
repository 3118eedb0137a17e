import numpy as np
import pytest

from fpextract.contrast import (
    ClippedContrast,
    RelativeContrast,
    detect_low_absolute_contrast,
)
from fpextract.local_histogram import BlockMap


def test_absolute_contrast_marks_values_below_limit():
    contrast = np.array([[10, 20], [30, 40]], dtype=np.uint8)
    result = detect_low_absolute_contrast(25, contrast)
    assert result.tolist() == [[True, True], [False, False]]


def test_absolute_contrast_limit_is_exclusive():
    contrast = np.array([[17, 16]], dtype=np.uint8)
    assert detect_low_absolute_contrast(17, contrast).tolist() == [[False, True]]


def test_clipped_contrast_of_single_level_is_zero():
    histogram = np.zeros((2, 3, 256), dtype=np.int64)
    histogram[..., 120] = 256
    result = ClippedContrast().compute(histogram)
    assert result.shape == (2, 3)
    assert (result == 0).all()


def test_clipped_contrast_of_extremes_is_full_range():
    histogram = np.zeros((1, 1, 256), dtype=np.int64)
    histogram[0, 0, 0] = 100
    histogram[0, 0, 255] = 100
    assert ClippedContrast().compute(histogram)[0, 0] == 255


def test_clipped_contrast_ignores_sparse_outliers():
    histogram = np.zeros((1, 1, 256), dtype=np.int64)
    histogram[0, 0, 100] = 240
    histogram[0, 0, 0] = 1
    histogram[0, 0, 255] = 1
    narrow = np.zeros_like(histogram)
    narrow[0, 0, 100] = 242
    clipper = ClippedContrast()
    assert clipper.compute(histogram)[0, 0] == clipper.compute(narrow)[0, 0]


def test_clipped_contrast_rejects_wrong_bins():
    with pytest.raises(ValueError):
        ClippedContrast().compute(np.zeros((2, 2, 10)))


def test_relative_contrast_flags_only_weak_block():
    blocks = BlockMap(32, 32, 16)
    contrast = np.array([[100, 100], [100, 10]], dtype=np.uint8)
    result = RelativeContrast().detect_low_contrast(contrast, blocks)
    assert result.tolist() == [[False, False], [False, True]]


def test_relative_contrast_uniform_flags_nothing():
    blocks = BlockMap(64, 48, 16)
    contrast = np.full(blocks.block_count, 80, dtype=np.uint8)
    result = RelativeContrast().detect_low_contrast(contrast, blocks)
    assert result.shape == blocks.block_count
    assert not result.any()