"""Majority voting over square neighbourhoods of a binary image."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass
class VotingFilter:
    """Sets a pixel when the share of set pixels around it reaches ``majority``.

    Pixels closer than ``border_distance`` to the edge are never set.
    """

    radius: int = 1
    majority: float = 0.51
    border_distance: int = 0

    def apply(self, image) -> np.ndarray:
        """Return the voted image, indexed [x, y] like the input."""
        if self.radius < 0:
            raise ValueError("radius must not be negative")
        if self.border_distance < 0:
            raise ValueError("border distance must not be negative")
        pixels = np.asarray(image, dtype=bool)
        if pixels.ndim != 2:
            raise ValueError("image must be two-dimensional")

        width, height = pixels.shape
        result = np.zeros((width, height), dtype=bool)
        border = self.border_distance
        if width - 2 * border <= 0 or height - 2 * border <= 0:
            return result

        table = np.zeros((width + 1, height + 1), dtype=np.int64)
        table[1:, 1:] = pixels.cumsum(axis=0).cumsum(axis=1)

        xs = np.arange(border, width - border)
        ys = np.arange(border, height - border)
        x0 = np.maximum(xs - self.radius, 0)
        x1 = np.minimum(xs + self.radius + 1, width)
        y0 = np.maximum(ys - self.radius, 0)
        y1 = np.minimum(ys + self.radius + 1, height)

        ones = (
            table[np.ix_(x1, y1)]
            - table[np.ix_(x0, y1)]
            - table[np.ix_(x1, y0)]
            + table[np.ix_(x0, y0)]
        )
        area = np.outer(x1 - x0, y1 - y0)
        share = ones * (1.0 / area)
        threshold = float(np.float32(self.majority))
        result[border : width - border, border : height - border] = share >= threshold
        return result