import numpy as np
import pytest

from fpextract.equalizer import Equalizer
from fpextract.hill_orientation import block_mask_to_pixel_mask, detect_orientation
from fpextract.local_histogram import BlockMap, analyze, smooth_around_corners
from fpextract.segmentation import SegmentationMask

ROW = [127, 255, 255, 0, 0, 0, 255, 255, 255]


def test_compute_orientations():
    image = np.array([ROW] * 7, dtype=np.uint8)
    blocks = BlockMap(7, 9, 4)
    histogram = analyze(blocks, image)
    mask = SegmentationMask().compute_mask(blocks, histogram)
    equalized = Equalizer().equalize(blocks, image, smooth_around_corners(histogram), mask)
    orientations = detect_orientation(equalized, mask, blocks)
    assert orientations[0, 0] == 128
    assert orientations[0, 1] == 0
    assert orientations[0, 2] == 0
    assert orientations[1, 0] == 128
    assert orientations[1, 1] == 0
    assert orientations[1, 2] == 0


def test_pixel_mask_follows_blocks():
    blocks = BlockMap(7, 9, 4)
    mask = np.zeros(blocks.block_count, dtype=bool)
    mask[1, 2] = True
    pixels = block_mask_to_pixel_mask(blocks, mask)
    area = blocks.block_area(1, 2)
    assert pixels[area.slices].all()
    assert pixels.sum() == area.width * area.height


def test_unmasked_blocks_are_zero():
    blocks = BlockMap(8, 8, 4)
    image = np.random.default_rng(1).random((8, 8)).astype(np.float32)
    result = detect_orientation(image, np.zeros((2, 2), bool), blocks)
    assert result.tolist() == [[0, 0], [0, 0]]


def test_rejects_wrong_mask_shape():
    with pytest.raises(ValueError):
        block_mask_to_pixel_mask(BlockMap(8, 8, 4), np.zeros((3, 2), bool))