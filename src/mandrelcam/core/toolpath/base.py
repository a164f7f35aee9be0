"""Core toolpath data structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MotionMode(Enum):
    """Modal motion state of the controller."""
    NONE = "none"        # unknown, e.g. after a canned cycle
    RAPID = "rapid"      # G00, no cutting
    LINEAR = "linear"    # G01, cutting feed

    @property
    def word(self) -> str:
        return {MotionMode.RAPID: "G00", MotionMode.LINEAR: "G01"}.get(self, "")


@dataclass(frozen=True)
class MovePoint:
    """Target of one motion command.

    Each axis is optional: ``None`` means "hold the current position",
    which is not the same as moving to ``0.0``.
    """
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None

    def __post_init__(self):
        if self.x is None and self.y is None and self.z is None:
            raise ValueError("MovePoint needs at least one axis")

    @property
    def axes_present(self) -> dict[str, bool]:
        return {
            "x": self.x is not None,
            "y": self.y is not None,
            "z": self.z is not None,
        }

    def as_tuple(self) -> tuple[Optional[float], Optional[float], Optional[float]]:
        return (self.x, self.y, self.z)
