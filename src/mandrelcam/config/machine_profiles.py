"""Omniturn lathe profiles.

All lengths are in inches, feeds in inches per revolution.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


@dataclass(frozen=True)
class LatheProfile:
    """Cutting constants and capabilities of one lathe setup."""

    model: str
    max_depth: float = 0.040        # diametral depth per roughing pass
    x_clearance: float = 0.010
    z_clearance: float = 0.100
    feed: float = 0.002             # IPR
    rpm: int = 1500
    stickout: float = 1.000         # section length pulled from the collet
    decimals: int = 4
    native_contour_cycle: bool = False
    tool_number: int = 1
    tool_name: str = "OD Cutter"
    shop_name: str = "OMalley Brass"

    @property
    def rough_depth(self) -> float:
        """Per-side depth of cut (G74/G75 ``I`` word)."""
        return self.max_depth / 2

    @property
    def finish_allowance(self) -> float:
        """Radial stock left for the finishing pass (``U`` word)."""
        return self.max_depth / 4

    @property
    def positioning_feed(self) -> float:
        """IPM feed matching the cutting feed, for moves with the spindle off."""
        return self.rpm * self.feed

    def with_overrides(self, **changes) -> "LatheProfile":
        """Copy with the non-``None`` entries of *changes* applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def __str__(self) -> str:
        cycle = "native G75" if self.native_contour_cycle else "simulated G75"
        return (
            f"{self.model}  {self.stickout}\" stickout  "
            f"{self.rpm} RPM  {self.feed} IPR  {cycle}"
        )


class LatheModel(Enum):
    OMNITURN = "omniturn"
    OMNITURN_G75 = "omniturn-g75"


_PROFILES: dict[LatheModel, LatheProfile] = {
    LatheModel.OMNITURN: LatheProfile(model="Omniturn"),
    LatheModel.OMNITURN_G75: LatheProfile(
        model="Omniturn (G75 contour cycle)",
        native_contour_cycle=True,
    ),
}


def get_profile(model: LatheModel) -> LatheProfile:
    return _PROFILES[model]


def list_profiles() -> list[LatheProfile]:
    return list(_PROFILES.values())
