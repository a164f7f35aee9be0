"""Program assembly: measured taper + stock + lathe profile → G-code.

:func:`generate_program` is the top-level entry point for the CLI and
for hosts that pass raw spreadsheet ranges.  It returns either a full
program or a single sentence explaining why no program was produced;
programs always start with a parenthesized comment, messages never do.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..config.machine_profiles import LatheModel, LatheProfile, get_profile
from ..gcode.gcode_writer import GCodeWriter
from .geometry import Point, Section
from .inputs import build_points, clean_numeric, note_lines, to_number
from .section_cycle import generate_section_cycle
from .segmenter import segment_points

logger = logging.getLogger(__name__)

UNEQUAL_POINTS_MESSAGE = "Diameters and locations contain unequal numbers of valid data points."
BAD_STOCK_MESSAGE = "Stock diameter must be a positive number."
TOO_FEW_POINTS_MESSAGE = "At least two valid diameter points are required."


@dataclass
class ProgramResult:
    """Generated program text, or the message explaining its absence."""

    text: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        return self.text if self.error is None else self.error


@dataclass
class MandrelJob:
    """A complete turning job: stock + measured taper + lathe profile."""

    stock_diameter: float
    points: list[Point]
    profile: LatheProfile = field(default_factory=lambda: get_profile(LatheModel.OMNITURN))
    notes: list[str] = field(default_factory=list)

    def sections(self) -> list[Section]:
        return segment_points(self.points, self.profile.stickout)

    def generate(self, now: Optional[datetime] = None) -> ProgramResult:
        """Build the program.  Nothing is returned for a partial program.

        Parameters
        ----------
        now:
            Timestamp for the header; defaults to the current time.
        """
        if not self.stock_diameter > 0:
            return ProgramResult(error=BAD_STOCK_MESSAGE)
        if len(self.points) < 2:
            return ProgramResult(error=TOO_FEW_POINTS_MESSAGE)

        try:
            sections = self.sections()
        except ValueError as exc:
            logger.warning("Segmentation failed: %s", exc)
            return ProgramResult(error=f"Cannot divide points into sections: {exc}.")

        # Fresh writer per program so modal state never carries over
        writer = GCodeWriter(self.profile.decimals)
        text = self._header(writer, now or datetime.now())

        for i, section in enumerate(sections):
            result = generate_section_cycle(
                writer, self.stock_diameter, section, (i + 1) * 100, self.profile)
            if not result.ok:
                return ProgramResult(error=result.error)
            text += writer.comment_line(f"Section {i + 1}")
            text += result.code

        text += writer.program_end()
        logger.info("Generated program with %d section(s)", len(sections))
        return ProgramResult(text=text)

    def _header(self, writer: GCodeWriter, now: datetime) -> str:
        p = self.profile
        lines = [writer.comment_line(note) for note in self.notes]
        lines += [
            writer.comment_line(p.shop_name),
            writer.comment_line(f"{writer.fmt(p.stickout)} inch part stickout"),
            writer.comment_line(f"{writer.fmt(self.stock_diameter)} inch diameter stock"),
            writer.comment_line(f"T{p.tool_number} {p.tool_name}"),
            writer.comment_line(f"Executed {now.month}.{now.day}.{now.year}"),
            f"G72G90G97G95F{writer.fmt(p.feed)}\n",
            writer.tool_select(p.tool_number),
        ]
        return "".join(lines)


def build_program(
    stock_diameter: Any,
    diameters: Any,
    positions: Any = None,
    profile: Optional[LatheProfile] = None,
    spacing: float = 0.25,
    now: Optional[datetime] = None,
) -> ProgramResult:
    """Clean raw input cells and generate the program.

    Parameters
    ----------
    stock_diameter:
        Diameter of the bar stock.
    diameters:
        Diameter cells, possibly nested and containing blanks or text.
    positions:
        Optional position cells matching *diameters*.  When omitted the
        diameters are *spacing* apart from z=0.
    profile:
        Lathe profile; defaults to the Omniturn profile.
    """
    stock = to_number(stock_diameter)
    if stock is None or stock <= 0:
        return ProgramResult(error=BAD_STOCK_MESSAGE)

    diameter_values, removed_diameters = clean_numeric(diameters)
    position_values: Optional[list[float]] = None
    removed_positions: Optional[int] = None
    if positions is not None:
        position_values, removed_positions = clean_numeric(positions)
        if len(position_values) != len(diameter_values):
            return ProgramResult(error=UNEQUAL_POINTS_MESSAGE)

    if len(diameter_values) < 2:
        return ProgramResult(error=TOO_FEW_POINTS_MESSAGE)

    job = MandrelJob(
        stock_diameter=stock,
        points=build_points(diameter_values, position_values, spacing),
        profile=profile or get_profile(LatheModel.OMNITURN),
        notes=note_lines(removed_diameters, removed_positions),
    )
    return job.generate(now)


def generate_program(
    stock_diameter: Any,
    diameters: Any,
    positions: Any = None,
    profile: Optional[LatheProfile] = None,
    spacing: float = 0.25,
    now: Optional[datetime] = None,
) -> str:
    """Program text, or a one-line message when the input cannot be cut."""
    return str(build_program(stock_diameter, diameters, positions, profile, spacing, now))
