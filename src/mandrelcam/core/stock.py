"""Round bar stock definition."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Stock:
    """Round bar stock turned on the lathe.

    All dimensions are in inches.  Profiles are taken in the (z, radius)
    half-plane: z along the spindle axis, radius from the axis of
    rotation.
    """

    diameter: float

    def __post_init__(self):
        if not self.diameter > 0:
            raise ValueError("stock diameter must be positive")

    @property
    def radius(self) -> float:
        return self.diameter / 2.0

    def as_shapely_polygon(self, length: float):
        """Return a Shapely box of the stock half-profile over *length*."""
        from shapely.geometry import box

        return box(0.0, 0.0, length, self.radius)
