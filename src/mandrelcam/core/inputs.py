"""Cleaning of spreadsheet-style measurement input.

Measurements usually arrive as spreadsheet ranges: nested rows, blank
cells, header text, numbers stored as strings.  This module turns them
into a sorted list of :class:`Point` objects.
"""

from __future__ import annotations

import csv
import logging
import math
import numbers
from pathlib import Path
from typing import Any, Optional, Sequence

from .geometry import Point

logger = logging.getLogger(__name__)


def flatten_cells(cells: Any) -> list[Any]:
    """Flatten nested lists/tuples of cells into one list."""
    if isinstance(cells, (list, tuple)):
        flat: list[Any] = []
        for cell in cells:
            flat.extend(flatten_cells(cell))
        return flat
    return [cells]


def to_number(cell: Any) -> Optional[float]:
    """*cell* as a finite float, or ``None`` when it is not numeric."""
    if isinstance(cell, bool):
        return None
    if isinstance(cell, numbers.Real):
        value = float(cell)
    elif isinstance(cell, str):
        try:
            value = float(cell.strip())
        except ValueError:
            return None
    else:
        return None
    return value if math.isfinite(value) else None


def clean_numeric(cells: Any) -> tuple[list[float], int]:
    """Numeric values in *cells* and the number of cells dropped."""
    flat = flatten_cells(cells)
    values = [v for v in (to_number(c) for c in flat) if v is not None]
    removed = len(flat) - len(values)
    if removed:
        logger.warning("Ignored %d non-numeric or empty cell(s)", removed)
    return values, removed


def build_points(
    diameters: Sequence[float],
    positions: Optional[Sequence[float]] = None,
    spacing: float = 0.25,
) -> list[Point]:
    """Pair diameters with positions, sorted so the taper grows with z.

    Parameters
    ----------
    diameters:
        Measured diameters.
    positions:
        Axial position of each diameter.  When omitted the diameters are
        taken to be *spacing* apart starting at 0.
    spacing:
        Default measurement spacing.

    Returns
    -------
    Points in ascending z.  If the input was given butt end first
    (first diameter larger than the last), positions are mirrored so
    z=0 is the small end.
    """
    if positions is None:
        positions = [i * spacing for i in range(len(diameters))]
    if len(positions) != len(diameters):
        raise ValueError("diameters and positions differ in length")

    points = sorted(
        (Point(float(x), float(z)) for x, z in zip(diameters, positions)),
        key=lambda p: p.z,
    )
    if points and points[0].x > points[-1].x:
        length = points[-1].z
        points = sorted((Point(p.x, length - p.z) for p in points), key=lambda p: p.z)
        logger.debug("Input given butt end first, mirrored about z=%s", length)
    return points


def note_lines(removed_diameters: int, removed_positions: Optional[int] = None) -> list[str]:
    """Header notes describing ignored cells."""
    def plural(n: int) -> str:
        return "s" if n > 1 else ""

    if removed_diameters <= 0 and not removed_positions:
        return []
    if removed_diameters == removed_positions:
        n = removed_diameters
        return [f"NOTE - {n} non-numeric or empty data pair{plural(n)} ignored."]

    notes = []
    if removed_diameters > 0:
        n = removed_diameters
        notes.append(f"NOTE - {n} non-numeric or empty diameter{plural(n)} ignored.")
    if removed_positions:
        n = removed_positions
        notes.append(f"NOTE - {n} non-numeric or empty point location{plural(n)} ignored.")
    return notes


def read_measurements_csv(path: Path) -> tuple[list[str], Optional[list[str]]]:
    """Raw diameter and position cells from a one- or two-column CSV.

    Cells are returned uncleaned; positions are ``None`` when the file
    has no second column.
    """
    with open(path, newline="") as fh:
        rows = [row for row in csv.reader(fh) if row]

    diameters = [row[0] for row in rows]
    if not any(len(row) > 1 and row[1].strip() for row in rows):
        return diameters, None
    positions = [row[1] if len(row) > 1 else "" for row in rows]
    return diameters, positions

