"""Stateful G-code line formatting for the Omniturn lathe dialect.

Words are concatenated without separators (``G01X0.335Z-0.25F0.002``).
The writer remembers the last motion mode, feed and axis positions so it
can drop words the controller already holds modally.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.toolpath.base import MotionMode, MovePoint


def fmt(value: float, decimals: int = 4) -> str:
    """Format a float for G-code, stripping trailing zeros."""
    text = f"{value:.{decimals}f}".rstrip("0").rstrip(".")
    # rounding can leave a signed zero behind
    return "0" if text in ("-0", "") else text


def comment(text: str) -> str:
    """Wrap *text* in a parenthetical comment."""
    # Controller comments cannot nest, strip existing parens
    cleaned = text.replace("(", "").replace(")", "")
    return f"({cleaned})"


@dataclass
class WriterState:
    """Modal state of the controller as last emitted."""

    mode: MotionMode = MotionMode.NONE
    feed: Optional[float] = None
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None

    def position(self) -> tuple[Optional[float], Optional[float], Optional[float]]:
        return (self.x, self.y, self.z)


class GCodeWriter:
    """Emits motion, cycle and auxiliary lines while tracking modal state.

    One writer belongs to one program generation run; create a new one
    per program so state never leaks between runs.
    """

    def __init__(self, decimals: int = 4):
        self.decimals = decimals
        self.state = WriterState()

    # ------------------------------------------------------------------
    # Motion
    # ------------------------------------------------------------------

    def rapid(self, point: MovePoint, text: Optional[str] = None) -> str:
        """G00 rapid traverse.  Returns ``""`` when already at *point*."""
        if self._at(point):
            return ""
        code = self._motion(MotionMode.RAPID, point)
        if text is not None:
            code += comment(text)
        self.state.feed = None
        return code + "\n"

    def linear(
        self,
        point: MovePoint,
        feed: Optional[float] = None,
        text: Optional[str] = None,
    ) -> str:
        """G01 linear interpolation.  Returns ``""`` when already at *point*."""
        if self._at(point):
            return ""
        code = self._motion(MotionMode.LINEAR, point)
        if feed is not None and feed != self.state.feed:
            code += f"F{self.fmt(feed)}"
        if text is not None:
            code += comment(text)
        self.state.feed = feed
        return code + "\n"

    def cycle(
        self,
        word: str,
        params: Iterable[tuple[str, float]],
        text: Optional[str] = None,
    ) -> str:
        """A canned cycle line such as ``G74X..Z..I..U..F..``.

        Cycles are never elided.  The motion mode afterwards is unknown,
        so the next motion line restates its G word.
        """
        code = word + "".join(f"{letter}{self.fmt(value)}" for letter, value in params)
        if text is not None:
            code += comment(text)
        self.state.mode = MotionMode.NONE
        return code + "\n"

    # ------------------------------------------------------------------
    # Auxiliary words
    # ------------------------------------------------------------------

    def feed_per_minute(self, feed: float) -> str:
        """G94: feed in units per minute, usable with the spindle stopped."""
        self.state.feed = None
        return f"G94F{self.fmt(feed)}\n"

    def feed_per_rev(self, feed: float) -> str:
        """G95: feed synchronized to spindle revolutions."""
        self.state.feed = None
        return f"G95F{self.fmt(feed)}\n"

    def spindle_on(self, rpm: int) -> str:
        return f"M03S{self.fmt(rpm)}\n"

    def spindle_off(self) -> str:
        return "M05\n"

    def optional_stop(self, text: Optional[str] = None) -> str:
        return "M01" + (comment(text) if text is not None else "") + "\n"

    def tool_select(self, number: int) -> str:
        return f"T{number}\n"

    def program_end(self) -> str:
        return "M30\n"

    def comment_line(self, text: str) -> str:
        return comment(text) + "\n"

    def contour_block(self, points: Iterable[tuple[float, float]]) -> str:
        """Contour definition consumed by G75, closed with ``RF``."""
        lines = [f"X{self.fmt(x)}Z{self.fmt(z)}\n" for x, z in points]
        return "".join(lines) + "RF\n"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def fmt(self, value: float) -> str:
        return fmt(value, self.decimals)

    def _at(self, point: MovePoint) -> bool:
        s = self.state
        return all(
            value == current
            for value, current in zip(point.as_tuple(), s.position())
            if value is not None
        )

    def _motion(self, mode: MotionMode, point: MovePoint) -> str:
        s = self.state
        parts = [] if s.mode is mode else [mode.word]
        for letter, value, current in zip("XYZ", point.as_tuple(), s.position()):
            if value is not None and value != current:
                parts.append(f"{letter}{self.fmt(value)}")
        # Present axes are recorded even when unchanged
        if point.x is not None:
            s.x = point.x
        if point.y is not None:
            s.y = point.y
        if point.z is not None:
            s.z = point.z
        s.mode = mode
        return "".join(parts)
