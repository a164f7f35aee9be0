"""Split a measured taper into stickout-length sections.

Section boundaries sit at whole multiples of the section length.  A
measured point lying exactly on a boundary (exact float equality, no
tolerance) closes one section and opens the next.  Any other boundary is
synthesized by linear interpolation between its two neighbouring points,
so a point that is only *nearly* on a boundary still gets an
interpolated neighbour.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

import numpy as np

from .geometry import Point, Section

logger = logging.getLogger(__name__)


def interpolate_boundary(before: Point, after: Point, z: float) -> Point:
    """Point on the segment *before*→*after* at axial position *z*."""
    fraction = (z - before.z) / (after.z - before.z)
    # z is exact by construction, only x is interpolated
    return Point(before.x + fraction * (after.x - before.x), z)


def section_count(total_length: float, section_length: float) -> int:
    """Sections needed to cover *total_length*.

    The quotient is corrected against the products actually used as
    boundaries, so an exact multiple never yields an empty last section.
    """
    n = max(1, int(math.ceil(total_length / section_length)))
    while n > 1 and (n - 1) * section_length >= total_length:
        n -= 1
    while n * section_length < total_length:
        n += 1
    return n


def segment_points(
    points: Sequence[Point],
    section_length: float,
) -> list[Section]:
    """Divide *points* into sections of *section_length*.

    Parameters
    ----------
    points:
        Measured points sorted ascending by z.
    section_length:
        Stickout; every section but the last spans exactly this length.

    Returns
    -------
    Sections in design order, each re-based to start at z=0.  The last
    section ends at the final measured point.
    """
    if section_length <= 0:
        raise ValueError("section_length must be positive")
    if len(points) < 2:
        raise ValueError("at least two points are required")

    zs = np.array([p.z for p in points], dtype=float)
    total_length = float(zs.max())
    if total_length <= 0:
        raise ValueError("points must span a positive length")

    n_sections = section_count(total_length, section_length)
    sections: list[Section] = []

    # Boundary carried from the previous section when it fell off-grid
    carried: Optional[Point] = None
    start_idx = 0

    for k in range(1, n_sections):
        boundary = k * section_length
        offset = (k - 1) * section_length

        exact = np.flatnonzero(zs == boundary)
        if exact.size:
            end_idx = int(exact[0]) + 1    # include the boundary point
            end_point = None
            next_start = int(exact[0])
        else:
            after = int(np.searchsorted(zs, boundary, side="right"))
            if after == 0:
                raise ValueError(
                    f"no measured point before the boundary at z={boundary}")
            end_idx = after
            end_point = interpolate_boundary(points[after - 1], points[after], boundary)
            next_start = after

        members = _collect(points, carried, start_idx, end_idx, end_point)
        sections.append(_rebased(members, offset, section_length))

        carried = end_point
        start_idx = next_start

    # Last section is anchored to the final measured point
    offset = (n_sections - 1) * section_length
    members = _collect(points, carried, start_idx, len(points), None)
    sections.append(_rebased(members, offset, section_length))

    logger.debug(
        "Segmented %d points into %d sections (lengths %s)",
        len(points), len(sections),
        ", ".join(f"{s.length:.4f}" for s in sections),
    )
    return sections


def _collect(
    points: Sequence[Point],
    start_point: Optional[Point],
    start_idx: int,
    end_idx: int,
    end_point: Optional[Point],
) -> list[Point]:
    members: list[Point] = []
    if start_point is not None:
        members.append(start_point)
    members.extend(points[start_idx:end_idx])
    if end_point is not None:
        members.append(end_point)
    return members


def _rebased(members: list[Point], offset: float, stickout: float) -> Section:
    return Section(
        tuple(Point(p.x, p.z - offset) for p in members),
        stickout=stickout,
    )
