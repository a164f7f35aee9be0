"""Tests for Point and Section."""

import pytest

from mandrelcam.core.geometry import Point, Section
from mandrelcam.core.toolpath.base import MovePoint


@pytest.fixture
def section() -> Section:
    return Section(
        (Point(0.30, 0.0), Point(0.31, 0.5), Point(0.32, 1.0)),
        stickout=1.0,
    )


class TestPoint:
    def test_move_point(self):
        assert Point(0.3, -0.5).move_point() == MovePoint(x=0.3, z=-0.5)

    def test_immutable(self):
        p = Point(0.3, 0.0)
        with pytest.raises(AttributeError):
            p.x = 0.4


class TestSection:
    def test_derived_properties(self, section):
        assert section.length == 1.0
        assert section.max_diameter == 0.32

    def test_machining_points_free_end_first(self, section):
        assert section.machining_points == (
            Point(0.30, 0.0),
            Point(0.31, -0.5),
            Point(0.32, -1.0),
        )

    def test_short_section_machining_frame(self):
        s = Section((Point(0.35, 0.0), Point(0.36, 0.5)), stickout=1.0)
        # Free end sits at length - stickout, the cutter works toward -stickout
        assert s.machining_points == (Point(0.35, -0.5), Point(0.36, -1.0))

    def test_length_offset_point(self, section):
        assert section.length_offset_point(0) == Point(0.30, -1.0)
        assert section.length_offset_point(2) == Point(0.32, 0.0)

    def test_round_trip_keeps_diameters(self):
        original = Section(
            (Point(0.335, 0.0), Point(0.340, 0.25), Point(0.345, 0.5),
             Point(0.348, 0.75), Point(0.350, 1.0)),
            stickout=1.0,
        )
        rebuilt = Section.from_machining_points(original.machining_points, stickout=1.0)
        assert [p.x for p in rebuilt.points] == [p.x for p in original.points]
        assert [p.z for p in rebuilt.points] == pytest.approx([p.z for p in original.points])
        assert rebuilt.length == pytest.approx(original.length)

    def test_empty_section_rejected(self):
        with pytest.raises(ValueError):
            Section(())
