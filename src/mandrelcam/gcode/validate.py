"""Section validation before any cutting code is emitted.

A section can only be turned if its whole profile lies inside the stock:
the lathe removes material, it cannot add it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from shapely.geometry import Polygon
from shapely.validation import make_valid

from ..core.geometry import Point, Section
from ..core.stock import Stock

EXCEEDS_STOCK_MESSAGE = (
    "Provided taper includes diameter(s) exceeding provided start diameter, "
    "taper will not be accurate!"
)


@dataclass
class ValidationIssue:
    """A single validation problem found in a section."""

    severity: str  # "error"
    message: str
    point: Optional[Point] = None


@dataclass
class ValidationResult:
    """Result of validating one or more sections."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(i.severity == "error" for i in self.issues)

    @property
    def is_ok(self) -> bool:
        return len(self.issues) == 0

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == "error"]


def section_profile(section: Section):
    """Half-profile of *section* in the (z, radius) plane."""
    coords = [(section.points[0].z, 0.0)]
    coords += [(p.z, p.x / 2.0) for p in section.points]
    coords.append((section.length, 0.0))
    profile = Polygon(coords)
    if not profile.is_valid:
        profile = make_valid(profile)
    return profile


def validate_section(section: Section, stock: Stock) -> ValidationResult:
    """Check that *section* can be turned from *stock*.

    Checks performed:
    - Every diameter is positive
    - The section profile is covered by the stock profile
    """
    result = ValidationResult()

    for p in section.points:
        if p.x <= 0:
            result.issues.append(ValidationIssue(
                "error",
                f"Diameter {p.x:.4f} at z={p.z:.4f} is not positive",
                p,
            ))
    if result.has_errors:
        return result

    envelope = stock.as_shapely_polygon(section.length)
    if not envelope.covers(section_profile(section)):
        widest = max(section.points, key=lambda p: p.x)
        result.issues.append(ValidationIssue("error", EXCEEDS_STOCK_MESSAGE, widest))

    return result
