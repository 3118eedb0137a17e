"""Shrinking of a mask away from its border."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


def _shrink_by(inner: np.ndarray, amount: int) -> np.ndarray:
    width, height = inner.shape
    result = np.zeros_like(inner)
    if amount < width:
        result[: width - amount, :] = inner[amount:, :]
        result[amount:, :] &= inner[: width - amount, :]
    if amount < height:
        result[:, : height - amount] &= inner[:, amount:]
        result[:, amount:] &= inner[:, : height - amount]
    return result


@dataclass
class InnerMask:
    """Removes ``min_border_distance`` pixels from the edges of a mask."""

    min_border_distance: int = 14

    def compute(self, mask) -> np.ndarray:
        """Return the shrunk mask, built in steps of growing size."""
        inner = np.asarray(mask, dtype=bool).copy()
        if inner.ndim != 2:
            raise ValueError("mask must be two-dimensional")
        if self.min_border_distance < 0:
            raise ValueError("border distance must not be negative")

        total = 1
        if self.min_border_distance >= 1:
            inner = _shrink_by(inner, 1)
        step = 1
        while total + step <= self.min_border_distance:
            inner = _shrink_by(inner, step)
            total += step
            step *= 2
        if total < self.min_border_distance:
            inner = _shrink_by(inner, self.min_border_distance - total)
        return inner