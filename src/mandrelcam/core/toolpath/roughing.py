"""Contour roughing for one section.

Two strategies, chosen by machine capability
---------------------------------------------
Native
    Feed to the start point and hand the contour to the controller's G75
    contour cycle.
Simulated
    1. Offset the contour outward by ``2 * finish_allowance`` (diametral).
    2. If the cutter sits outside the offset contour's largest diameter,
       clear the plain cylinder down to it with one G74 box cycle.
    3. Split the remaining material into passes no deeper than
       ``rough_depth`` per side, each pass a scaled copy of the contour.
       The last pass is the offset contour itself.
    4. Trace each pass, back off radially and rapid back to the entry z.
    5. Feed back to the entry position.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ...gcode.gcode_writer import GCodeWriter
from ..geometry import Point
from .base import MovePoint
from .finishing import trace_contour

logger = logging.getLogger(__name__)


@dataclass
class ContourCycleParams:
    """Parameters for the contour roughing cycle."""

    rough_depth: float         # max depth per pass, per side (I word)
    finish_allowance: float    # radial stock left for finishing (U word)
    feed: float                # IPR
    x_clearance: float         # radial back-off between passes
    native_cycle: bool = False  # controller G75 is usable


def offset_contour(points: Sequence[Point], finish_allowance: float) -> list[Point]:
    """*points* grown by the finish allowance on both sides."""
    return [Point(p.x + 2 * finish_allowance, p.z) for p in points]


def generate_pass_contours(
    points: Sequence[Point],
    start_x: float,
    rough_depth: float,
) -> list[list[Point]]:
    """Scaled roughing passes stepping from *start_x* down to *points*.

    Every point moves toward its final diameter in equal steps, so no
    pass removes more than ``2 * rough_depth`` of diameter.  The last
    pass is *points* unchanged.
    """
    if rough_depth <= 0:
        raise ValueError("rough_depth must be positive")

    xs = np.array([p.x for p in points], dtype=float)
    n_passes = max(1, int(math.ceil((start_x - xs.min()) / (2 * rough_depth))))
    deltas = (start_x - xs) / n_passes

    passes: list[list[Point]] = []
    for i in range(1, n_passes):
        xs_i = start_x - i * deltas
        passes.append([Point(float(x), p.z) for x, p in zip(xs_i, points)])
    passes.append(list(points))
    return passes


def contour_cycle(
    writer: GCodeWriter,
    start: Point,
    points: Sequence[Point],
    params: ContourCycleParams,
    text: Optional[str] = None,
) -> str:
    """Rough the contour *points* (machining order) starting from *start*.

    The cutter ends at *start* (native cycle) or at the entry position it
    held after reaching *start* (simulated cycle).
    """
    if params.native_cycle:
        logger.debug("Contour cycle: native G75")
        # Label on its own line; the G75 line carries only cycle words
        code = "" if text is None else writer.comment_line(text)
        code += writer.linear(start.move_point(), params.feed, "Beginning G75 contour cycle")
        code += writer.cycle(
            "G75",
            [
                ("I", params.rough_depth),
                ("U", params.finish_allowance),
                ("F", params.feed),
            ],
        )
        code += writer.contour_block(p.as_tuple() for p in points)
        return code

    logger.debug("Contour cycle: simulated with G74 and linear passes")
    label = "Simulated G75 contour cycle" + ("" if text is None else f" - {text}")
    code = writer.linear(start.move_point(), params.feed, label)
    code += simulate_contour_cycle(writer, points, params)
    return code


def simulate_contour_cycle(
    writer: GCodeWriter,
    points: Sequence[Point],
    params: ContourCycleParams,
) -> str:
    """Emulate G75 from the writer's current position."""
    finish = offset_contour(points, params.finish_allowance)
    max_diameter = max(p.x for p in finish)
    clear_z = min(p.z for p in finish)
    entry_x, entry_y, entry_z = writer.state.position()

    code = ""
    # Unknown x means no known excess material
    if entry_x is not None and max_diameter < entry_x:
        code += writer.cycle(
            "G74",
            [
                ("X", max_diameter),
                ("Z", clear_z),
                ("I", params.rough_depth),
                ("U", 0.0),
                ("F", params.feed),
            ],
        )

    passes = generate_pass_contours(finish, max_diameter, params.rough_depth)
    logger.debug("Simulated contour cycle: %d roughing passes", len(passes))
    for contour in passes:
        code += trace_contour(
            writer, contour, params.feed, params.x_clearance, return_z=entry_z)

    if not (entry_x is None and entry_y is None and entry_z is None):
        code += writer.linear(MovePoint(entry_x, entry_y, entry_z), params.feed)
    return code
