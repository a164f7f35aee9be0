"""Full machining cycle for one section.

Sequence
--------
1. Check the section fits inside the stock.
2. With the spindle stopped (G94, IPM feed), move to the pull reference
   point just outside the free end of the section.
3. Pause (M01) so the operator can pull the stock out to that point.
4. Move to the safe approach point outside the stock.
5. Start the spindle and switch to feed per revolution (G95).
6. Rough the contour, leaving the finish allowance.
7. Finish pass over the exact contour.
8. Retract clear of the stock face and stop the spindle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..config.machine_profiles import LatheProfile
from ..gcode.gcode_writer import GCodeWriter
from ..gcode.validate import validate_section
from .geometry import Point, Section
from .stock import Stock
from .toolpath.base import MovePoint
from .toolpath.finishing import trace_contour
from .toolpath.roughing import ContourCycleParams, contour_cycle

logger = logging.getLogger(__name__)


@dataclass
class SectionCycleResult:
    """G-code for one section, or the reason it could not be generated."""

    cycle_id: int
    code: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def generate_section_cycle(
    writer: GCodeWriter,
    start_diameter: float,
    section: Section,
    cycle_id: int,
    profile: LatheProfile,
) -> SectionCycleResult:
    """Generate the machining cycle for *section* from *start_diameter* stock."""
    validation = validate_section(section, Stock(start_diameter))
    if validation.has_errors:
        message = validation.errors[0].message
        logger.warning("Section cycle %d rejected: %s", cycle_id, message)
        return SectionCycleResult(cycle_id, error=message)

    points = section.machining_points
    xc = profile.x_clearance
    safe_x = start_diameter + xc
    approach = Point(safe_x, section.length - section.stickout + profile.z_clearance)

    # Pull reference at the free end, moved with the spindle stopped
    code = writer.feed_per_minute(profile.positioning_feed)
    code += writer.linear(MovePoint(x=points[0].x + xc, z=points[0].z))
    code += writer.optional_stop("Move stock to appropriate position")

    code += writer.linear(approach.move_point())
    code += writer.spindle_on(profile.rpm)
    code += writer.feed_per_rev(profile.feed)

    params = ContourCycleParams(
        rough_depth=profile.rough_depth,
        finish_allowance=profile.finish_allowance,
        feed=profile.feed,
        x_clearance=xc,
        native_cycle=profile.native_contour_cycle,
    )
    code += contour_cycle(writer, approach, points, params, text=f"Contour {cycle_id}")

    code += trace_contour(writer, points, profile.feed, xc)

    code += writer.rapid(MovePoint(x=safe_x, z=profile.z_clearance))
    code += writer.spindle_off()

    return SectionCycleResult(cycle_id, code=code)
