import numpy as np
import pytest

from fpextract.voting_filter import VotingFilter


def test_empty_image_stays_empty():
    result = VotingFilter().apply(np.zeros((6, 5), dtype=bool))
    assert result.shape == (6, 5)
    assert not result.any()


def test_full_image_stays_full():
    result = VotingFilter().apply(np.ones((6, 5), dtype=bool))
    assert result.all()


def test_isolated_pixel_is_voted_away():
    image = np.zeros((3, 3), dtype=bool)
    image[1, 1] = True
    assert not VotingFilter().apply(image).any()


def test_missing_corner_is_filled():
    image = np.ones((3, 3), dtype=bool)
    image[0, 0] = False
    assert VotingFilter().apply(image).all()


def test_border_distance_keeps_border_clear():
    f = VotingFilter(radius=2, majority=0.61, border_distance=3)
    result = f.apply(np.ones((10, 12), dtype=bool))
    assert not result[:3, :].any()
    assert not result[-3:, :].any()
    assert not result[:, :3].any()
    assert not result[:, -3:].any()
    assert result[3:7, 3:9].all()


def test_border_larger_than_image_gives_empty_result():
    f = VotingFilter(border_distance=5)
    assert not f.apply(np.ones((6, 6), dtype=bool)).any()


def test_majority_threshold_is_inclusive():
    image = np.zeros((1, 2), dtype=bool)
    image[0, 0] = True
    f = VotingFilter(radius=1, majority=0.5)
    assert f.apply(image).all()


def test_result_is_symmetric_under_transpose():
    rng = np.random.default_rng(7)
    image = rng.random((15, 11)) > 0.4
    f = VotingFilter(radius=2, majority=0.61, border_distance=1)
    assert np.array_equal(f.apply(image).T, f.apply(image.T))


def test_negative_radius_raises():
    with pytest.raises(ValueError):
        VotingFilter(radius=-1).apply(np.zeros((3, 3), dtype=bool))