"""Measured points and stickout-length sections of a mandrel.

Design coordinates: ``x`` is a diameter, ``z`` the axial position with
z=0 at the free end and increasing toward the spindle.

Machining coordinates (see :attr:`Section.machining_points`) follow the
lathe setup: X=0 on the axis of rotation and Z=0 at the stock face when
it is pulled out to the stickout length, so the cutter works from Z=0
toward negative Z.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .toolpath.base import MovePoint


@dataclass(frozen=True)
class Point:
    """A measured (diameter, position) pair."""

    x: float
    z: float

    def move_point(self) -> MovePoint:
        return MovePoint(x=self.x, z=self.z)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.z)


@dataclass(frozen=True)
class Section:
    """One stickout-length span of the part, with z starting at 0.

    Parameters
    ----------
    points:
        Points in ascending z, first point at z=0.
    stickout:
        Length of stock pulled out of the collet for this section.
    """

    points: tuple[Point, ...]
    stickout: float = 1.0
    machining_points: tuple[Point, ...] = field(init=False, repr=False)

    def __post_init__(self):
        points = tuple(self.points)
        if not points:
            raise ValueError("Section needs at least one point")
        object.__setattr__(self, "points", points)
        length = max(p.z for p in points)
        # Negate z about the section length so the free end comes first,
        # then shift by the stickout into the lathe frame
        flipped = sorted(
            (Point(p.x, length - p.z) for p in points),
            key=lambda p: p.z,
            reverse=True,
        )
        object.__setattr__(
            self,
            "machining_points",
            tuple(Point(p.x, p.z - self.stickout) for p in flipped),
        )

    @property
    def length(self) -> float:
        return max(p.z for p in self.points)

    @property
    def max_diameter(self) -> float:
        return max(p.x for p in self.points)

    def length_offset_point(self, index: int) -> Point:
        """Point *index* shifted so the section spans z in [-length, 0]."""
        p = self.points[index]
        return Point(p.x, p.z - self.length)

    @classmethod
    def from_machining_points(
        cls,
        machining_points: Sequence[Point],
        stickout: float = 1.0,
    ) -> "Section":
        """Rebuild a section from its machining-order points."""
        length = max(p.z + stickout for p in machining_points)
        points = sorted(
            (Point(p.x, length - (p.z + stickout)) for p in machining_points),
            key=lambda p: p.z,
        )
        return cls(tuple(points), stickout=stickout)
