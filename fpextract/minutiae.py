"""Detection of minutiae and ridge tracing on a thinned binary image."""

from __future__ import annotations

import numpy as np

from fpextract.model import Minutia, MinutiaType, Point, Ridge

_OFFSETS = [(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)]


def _neighbour_counts(image: np.ndarray) -> np.ndarray:
    width, height = image.shape
    padded = np.pad(image.astype(np.int32), 1)
    return sum(
        padded[1 + dx : 1 + dx + width, 1 + dy : 1 + dy + height] for dx, dy in _OFFSETS
    )


def _active_neighbours(image: np.ndarray, point: Point) -> list:
    width, height = image.shape
    result = []
    for dx, dy in _OFFSETS:
        x, y = point.x + dx, point.y + dy
        if 0 <= x < width and 0 <= y < height and image[x, y]:
            result.append(Point(x, y))
    return result


def _trace_ridge(first: Point, origin: Point, image: np.ndarray, types: np.ndarray) -> list:
    points = [origin]
    previous, point = origin, first
    while types[point] == MinutiaType.NONE:
        points.append(point)
        neighbours = _active_neighbours(image, point)
        if len(neighbours) != 2:
            raise ValueError(
                f"ridge pixel {tuple(point)} has {len(neighbours)} neighbours, expected 2"
            )
        following = neighbours[1] if neighbours[0] == previous else neighbours[0]
        previous, point = point, following
    points.append(point)
    return points


def find_minutiae(image) -> list:
    """Find ridge endings and bifurcations in a thinned image indexed [x, y].

    Every minutia carries the ridges traced from each of its set neighbours.
    Raises ValueError if the image is not two-dimensional or a ridge runs
    through a pixel that does not have exactly two neighbours.
    """
    pixels = np.asarray(image, dtype=bool)
    if pixels.ndim != 2:
        raise ValueError("image must be two-dimensional")

    counts = _neighbour_counts(pixels)
    types = np.zeros(pixels.shape, dtype=np.uint8)
    minutiae = []
    for neighbours, kind in ((1, MinutiaType.RIDGE_END), (3, MinutiaType.BIFURCATION)):
        for x, y in np.argwhere(pixels & (counts == neighbours)):
            position = Point(int(x), int(y))
            minutiae.append(Minutia(kind, position))
            types[position] = kind

    by_position = {}
    for minutia in minutiae:
        by_position.setdefault(minutia.position, minutia)

    for minutia in minutiae:
        minutia.ridges = []
        for neighbour in _active_neighbours(pixels, minutia.position):
            points = _trace_ridge(neighbour, minutia.position, pixels, types)
            minutia.ridges.append(
                Ridge(points, start=minutia, end=by_position.get(points[-1]))
            )
    return minutiae