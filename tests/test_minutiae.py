import numpy as np
import pytest

from fpextract.minutiae import find_minutiae
from fpextract.model import MinutiaType


def make_map(rows):
    """Rows are given top-down; the result is indexed [x, y] with y upwards."""
    return np.array(rows, dtype=bool)[::-1].T


def minutia_at(minutiae, x, y):
    return next(m for m in minutiae if m.position.x == x and m.position.y == y)


def test_can_detect_a_ridge_ending():
    image = make_map([
        [0, 0, 0, 0],
        [1, 0, 0, 0],
        [0, 1, 1, 0],
        [0, 0, 0, 0],
    ])
    result = find_minutiae(image)

    assert len(result) == 2
    first, second = result
    assert first.minutia_type == MinutiaType.RIDGE_END
    assert (first.position.x, first.position.y) == (0, 2)
    assert second.minutia_type == MinutiaType.RIDGE_END
    assert (second.position.x, second.position.y) == (2, 1)


def test_can_detect_a_bifurcation():
    image = make_map([
        [1, 1, 0, 0],
        [0, 0, 1, 1],
        [1, 1, 0, 0],
        [0, 0, 0, 0],
    ])
    result = find_minutiae(image)

    bifurcations = [m for m in result if m.minutia_type == MinutiaType.BIFURCATION]
    assert len(bifurcations) == 1
    assert (bifurcations[0].position.x, bifurcations[0].position.y) == (2, 2)


def test_can_count_minutiae_ridges():
    image = make_map([
        [0, 0, 0, 0, 0],
        [0, 1, 0, 0, 0],
        [0, 0, 1, 0, 0],
        [0, 0, 0, 1, 0],
        [0, 0, 0, 0, 0],
    ])
    minutiae = find_minutiae(image)

    assert len(minutiae) == 2
    assert len(minutiae[0].ridges) == 1
    assert len(minutiae[1].ridges) == 1


def test_can_count_bifurcation_ridges():
    image = make_map([
        [0, 0, 0, 0, 0],
        [1, 1, 0, 0, 0],
        [0, 0, 1, 0, 0],
        [1, 1, 0, 1, 0],
        [0, 0, 0, 1, 0],
        [0, 0, 0, 0, 0],
    ])
    minutiae = find_minutiae(image)

    assert len(minutiae) == 4
    m02 = minutia_at(minutiae, 0, 2)
    m04 = minutia_at(minutiae, 0, 4)
    m23 = minutia_at(minutiae, 2, 3)
    m31 = minutia_at(minutiae, 3, 1)

    assert m02.minutia_type == MinutiaType.RIDGE_END
    assert len(m02.ridges) == 1
    ridge = m02.ridges[0]
    assert ridge.start is m02
    assert ridge.end is m23

    assert m04.minutia_type == MinutiaType.RIDGE_END
    assert len(m04.ridges) == 1

    assert m23.minutia_type == MinutiaType.BIFURCATION
    assert len(m23.ridges) == 3

    assert m31.minutia_type == MinutiaType.RIDGE_END
    assert len(m31.ridges) == 1


def test_traced_ridge_runs_from_start_to_end():
    image = make_map([
        [0, 0, 0, 0, 0],
        [0, 1, 0, 0, 0],
        [0, 0, 1, 0, 0],
        [0, 0, 0, 1, 0],
        [0, 0, 0, 0, 0],
    ])
    minutiae = find_minutiae(image)
    ridge = minutia_at(minutiae, 1, 3).ridges[0]
    assert [tuple(p) for p in ridge.points] == [(1, 3), (2, 2), (3, 1)]


def test_empty_image_has_no_minutiae():
    assert find_minutiae(np.zeros((5, 5), dtype=bool)) == []


def test_ridge_through_crowded_pixel_raises():
    image = make_map([
        [0, 0, 0, 1],
        [1, 1, 1, 1],
        [0, 0, 0, 1],
        [0, 0, 0, 0],
    ])
    with pytest.raises(ValueError):
        find_minutiae(image)


def test_non_2d_image_raises():
    with pytest.raises(ValueError):
        find_minutiae(np.zeros(4, dtype=bool))