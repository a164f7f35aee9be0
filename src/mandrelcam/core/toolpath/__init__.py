"""Toolpath generation package."""

from .base import MotionMode, MovePoint

__all__ = ["MotionMode", "MovePoint"]
