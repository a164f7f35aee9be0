"""Straight-line contour traversal.

Used for the finishing pass over the exact section contour and for each
roughing pass of the simulated contour cycle.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ...gcode.gcode_writer import GCodeWriter
from ..geometry import Point
from .base import MovePoint


def trace_contour(
    writer: GCodeWriter,
    points: Sequence[Point],
    feed: float,
    x_clearance: float,
    return_z: Optional[float] = None,
) -> str:
    """Feed along *points*, then back off clear of the contour.

    The cutter's position at call time must be safe to feed from into the
    first point.  Afterwards it sits at ``max(x) + x_clearance`` and at
    *return_z* (defaults to the z held before the call).

    Parameters
    ----------
    writer:
        Writer for the current program.
    points:
        Contour in machining order.
    feed:
        Cutting feed (IPR).
    x_clearance:
        Radial clearance added to the largest diameter for the retract.
    return_z:
        Z to rapid back to after the retract.
    """
    if return_z is None:
        return_z = writer.state.z

    code = ""
    for point in points:
        code += writer.linear(point.move_point(), feed)

    code += writer.linear(MovePoint(x=max(p.x for p in points) + x_clearance))
    if return_z is not None:
        code += writer.rapid(MovePoint(z=return_z))
    return code
