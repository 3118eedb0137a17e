"""Short straight lines of pixel offsets, one per quantized orientation."""

from __future__ import annotations

import math

import numpy as np

from fpextract.model import Point


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def construct_lines(angular_resolution: int, radius: int, step_factor: float) -> list:
    """Return one sorted list of Points per orientation bucket.

    Each line holds the origin and symmetric pairs of offsets at radii that
    shrink geometrically by ``step_factor`` down to 0.5.
    """
    if angular_resolution < 1:
        raise ValueError("angular resolution must be positive")
    step = np.float32(step_factor)
    if step <= 1:
        raise ValueError("step factor must be greater than 1")

    lines = []
    for index in range(angular_resolution):
        angle = np.float32((2 * index + 1) * math.pi / (2 * angular_resolution))
        dx = np.float32(math.cos(angle))
        dy = np.float32(math.sin(angle))
        points = [Point(0, 0)]
        r = np.float32(radius)
        while r >= 0.5:
            p = Point(_round_half_away(float(r * dx)), _round_half_away(float(r * dy)))
            if p not in points:
                points.append(p)
                points.append(Point(-p.x, -p.y))
            r = np.float32(r / step)
        lines.append(sorted(points))
    return lines