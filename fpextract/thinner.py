"""Thinning of a binary image down to one pixel wide ridges."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


def _popcount(value: int) -> int:
    return bin(value).count("1")


def _is_removable(mask: int) -> bool:
    tl, tc, tr, cl, cr, bl, bc, br = (bool(mask >> bit & 1) for bit in range(8))
    diagonal = (
        (not tc and not cl and tl)
        or (not cl and not bc and bl)
        or (not bc and not cr and br)
        or (not cr and not tc and tr)
    )
    horizontal = not tc and not bc and (tr or cr or br) and (tl or cl or bl)
    vertical = not cl and not cr and (tl or tc or tr) and (bl or bc or br)
    end = _popcount(mask) == 1
    return not (diagonal or horizontal or vertical or end)


_REMOVABLE = tuple(_is_removable(mask) for mask in range(256))
_ENDING = tuple(_popcount(mask) == 1 for mask in range(256))


def _neighbourhood(grid: list, x: int, y: int) -> int:
    """Eight neighbours of an interior pixel packed into one byte."""
    left, middle, right = grid[x - 1], grid[x], grid[x + 1]
    return (
        left[y - 1]
        | middle[y - 1] << 1
        | right[y - 1] << 2
        | left[y] << 3
        | right[y] << 4
        | left[y + 1] << 5
        | middle[y + 1] << 6
        | right[y + 1] << 7
    )


def _bit(grid: list, x: int, y: int) -> int:
    if 0 <= x < len(grid) and 0 <= y < len(grid[0]):
        return grid[x][y]
    return 0


def _safe_neighbourhood(grid: list, x: int, y: int) -> int:
    offsets = ((-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1))
    return sum(_bit(grid, x + dx, y + dy) << bit for bit, (dx, dy) in enumerate(offsets))


def _is_false_ending(grid: list, x: int, y: int) -> bool:
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            if _bit(grid, x + dx, y + dy):
                return _popcount(_safe_neighbourhood(grid, x + dx, y + dy)) > 2
    return False


@dataclass
class Thinner:
    """Iterative border peeling that keeps ridge skeletons."""

    max_iterations: int = 26

    def thin(self, image) -> np.ndarray:
        """Return the skeleton of a binary image indexed [x, y].

        The outermost rows and columns of the image are ignored.
        """
        pixels = np.asarray(image, dtype=bool)
        if pixels.ndim != 2:
            raise ValueError("image must be two-dimensional")
        if self.max_iterations < 0:
            raise ValueError("max iterations must not be negative")

        width, height = pixels.shape
        skeleton = np.zeros((width, height), dtype=bool)
        if width < 3 or height < 3:
            return skeleton

        start = np.zeros((width, height), dtype=np.uint8)
        start[1:-1, 1:-1] = pixels[1:-1, 1:-1]
        grid = start.tolist()

        removed_anything = True
        iteration = 0
        while iteration < self.max_iterations and removed_anything:
            iteration += 1
            removed_anything = False
            for direction in range(4):
                current = np.array(grid, dtype=bool)
                border = current.copy()
                if direction == 0:
                    border[:-1, :] &= ~current[1:, :]
                elif direction == 1:
                    border[1:, :] &= ~current[:-1, :]
                elif direction == 2:
                    border[:, :-1] &= ~current[:, 1:]
                border &= ~skeleton

                for first_row in (2, 1):
                    for y in range(first_row, height - 1, 2):
                        for x in (np.flatnonzero(border[1 : width - 1, y]) + 1).tolist():
                            neighbours = _neighbourhood(grid, x, y)
                            if _REMOVABLE[neighbours] or (
                                _ENDING[neighbours] and _is_false_ending(grid, x, y)
                            ):
                                removed_anything = True
                                grid[x][y] = 0
                            else:
                                skeleton[x, y] = True
        return skeleton