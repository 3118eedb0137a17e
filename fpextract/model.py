"""Skeleton model: minutiae, the ridges between them, and simple filters."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, NamedTuple, Optional


class Point(NamedTuple):
    """Integer pixel position."""

    x: int
    y: int


class MinutiaType(IntEnum):
    """Kind of a skeleton point."""

    NONE = 0
    RIDGE_END = 1
    BIFURCATION = 2


@dataclass(eq=False)
class Minutia:
    """A ridge ending or bifurcation with the ridges that start at it."""

    minutia_type: MinutiaType
    position: Point
    ridges: list = field(default_factory=list)

    def attach_start(self, ridge: "Ridge") -> None:
        """Make ``ridge`` start at this minutia."""
        if not any(r is ridge for r in self.ridges):
            self.ridges.append(ridge)
            ridge.start = self

    def detach_start(self, ridge: "Ridge") -> None:
        """Remove ``ridge`` from the ridges starting at this minutia."""
        for index, candidate in enumerate(self.ridges):
            if candidate is ridge:
                del self.ridges[index]
                if ridge.start is self:
                    ridge.start = None
                return


class Ridge:
    """A traced ridge between two minutiae, paired with its reversed twin.

    Assigning ``start`` or ``end`` keeps the minutiae's ridge lists and the
    reversed twin consistent; the constructor only records the given ends.
    """

    __slots__ = ("points", "_start", "_end", "reversed")

    def __init__(
        self,
        points: Optional[Iterable[Point]] = None,
        start: Optional[Minutia] = None,
        end: Optional[Minutia] = None,
    ) -> None:
        self.points = list(points) if points is not None else []
        self._start = start
        self._end = end
        twin = Ridge.__new__(Ridge)
        twin.points = self.points[::-1]
        twin._start = end
        twin._end = start
        twin.reversed = self
        self.reversed = twin

    @property
    def start(self) -> Optional[Minutia]:
        return self._start

    @start.setter
    def start(self, value: Optional[Minutia]) -> None:
        if self._start is value:
            return
        if self._start is not None:
            previous = self._start
            self._start = None
            previous.detach_start(self)
        self._start = value
        if value is not None:
            value.attach_start(self)
        self.reversed._end = value

    @property
    def end(self) -> Optional[Minutia]:
        return self._end

    @end.setter
    def end(self, value: Optional[Minutia]) -> None:
        if self._end is not value:
            self._end = value
            self.reversed.start = value

    def detach(self) -> None:
        """Disconnect the ridge from both of its minutiae."""
        self.start = None
        self.end = None

    def __repr__(self) -> str:
        return f"Ridge(points={self.points!r})"


@dataclass
class SkeletonBuilder:
    """Collection of all minutiae of a skeleton."""

    minutiae: list = field(default_factory=list)

    def add_minutia(self, minutia: Minutia) -> None:
        self.minutiae.append(minutia)

    def remove_minutia(self, minutia: Minutia) -> None:
        """Remove ``minutia``; raises ValueError if it is not present."""
        for index, candidate in enumerate(self.minutiae):
            if candidate is minutia:
                del self.minutiae[index]
                return
        raise ValueError("minutia is not part of this skeleton")


def remove_dots(minutiae: Iterable[Minutia]) -> list:
    """Return the minutiae that have at least one ridge."""
    return [minutia for minutia in minutiae if minutia.ridges]