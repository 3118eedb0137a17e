import numpy as np
import pytest

from fpextract.inner_mask import InnerMask


def test_empty_mask_stays_empty():
    assert not InnerMask().compute(np.zeros((20, 20), dtype=bool)).any()


def test_zero_distance_leaves_mask_unchanged():
    rng = np.random.default_rng(3)
    mask = rng.random((15, 12)) > 0.5
    np.testing.assert_array_equal(InnerMask(min_border_distance=0).compute(mask), mask)


def test_full_mask_loses_columns_at_high_x():
    mask = np.ones((30, 20), dtype=bool)
    result = InnerMask(min_border_distance=14).compute(mask)
    assert result[:16].all()
    assert not result[16:].any()


def test_is_monotone():
    rng = np.random.default_rng(8)
    larger = rng.random((40, 40)) > 0.2
    smaller = larger & (rng.random((40, 40)) > 0.3)
    shrink = InnerMask(min_border_distance=5)
    assert not (shrink.compute(smaller) & ~shrink.compute(larger)).any()


def test_input_is_not_modified():
    mask = np.ones((20, 20), dtype=bool)
    InnerMask().compute(mask)
    assert mask.all()


def test_rejects_negative_distance():
    with pytest.raises(ValueError):
        InnerMask(min_border_distance=-1).compute(np.ones((5, 5), dtype=bool))


def test_rejects_non_2d_mask():
    with pytest.raises(ValueError):
        InnerMask().compute(np.ones(5, dtype=bool))