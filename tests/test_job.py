"""End-to-end tests for program assembly."""

from datetime import datetime

import pytest

from mandrelcam.config.machine_profiles import LatheModel, get_profile
from mandrelcam.core.geometry import Point
from mandrelcam.core.job import (
    BAD_STOCK_MESSAGE,
    TOO_FEW_POINTS_MESSAGE,
    UNEQUAL_POINTS_MESSAGE,
    MandrelJob,
    build_program,
    generate_program,
)
from mandrelcam.gcode.validate import EXCEEDS_STOCK_MESSAGE

NOW = datetime(2024, 3, 5, 14, 30)

DIAMETERS = [0.335, 0.340, 0.345, 0.348, 0.350, 0.353, 0.355, 0.360, 0.366]
POSITIONS = [0.00, 0.25, 0.50, 0.75, 1.00, 1.25, 1.50, 1.75, 2.00]


# ---------------------------------------------------------------------------
# Full scenario
# ---------------------------------------------------------------------------


class TestMandrelProgram:
    def test_scenario_structure(self):
        text = generate_program(0.5, DIAMETERS, POSITIONS, now=NOW)
        lines = text.splitlines()

        assert text.startswith("(")
        assert lines[:7] == [
            "(OMalley Brass)",
            "(1 inch part stickout)",
            "(0.5 inch diameter stock)",
            "(T1 OD Cutter)",
            "(Executed 3.5.2024)",
            "G72G90G97G95F0.002",
            "T1",
        ]
        assert lines.count("(Section 1)") == 1
        assert lines.count("(Section 2)") == 1
        assert sum(1 for l in lines if l.startswith("(Section ")) == 2
        assert lines[-1] == "M30"
        assert text.endswith("\n")

    def test_one_cycle_per_section(self):
        text = generate_program(0.5, DIAMETERS, POSITIONS, now=NOW)
        assert text.count("M03S1500\n") == 2
        assert text.count("M05\n") == 2
        assert text.count("M01(Move stock to appropriate position)\n") == 2

    def test_default_positions_match_explicit(self):
        explicit = generate_program(0.5, DIAMETERS, POSITIONS, now=NOW)
        implicit = generate_program(0.5, DIAMETERS, now=NOW)
        assert implicit == explicit

    def test_reversed_input_same_program(self):
        forward = generate_program(0.5, DIAMETERS, now=NOW)
        backward = generate_program(0.5, list(reversed(DIAMETERS)), now=NOW)
        assert backward == forward

    def test_unsorted_positions_sorted(self):
        order = [3, 0, 8, 5, 1, 7, 2, 6, 4]
        text = generate_program(
            0.5,
            [DIAMETERS[i] for i in order],
            [POSITIONS[i] for i in order],
            now=NOW,
        )
        assert text == generate_program(0.5, DIAMETERS, POSITIONS, now=NOW)

    def test_repeat_runs_identical(self):
        first = generate_program(0.5, DIAMETERS, POSITIONS, now=NOW)
        second = generate_program(0.5, DIAMETERS, POSITIONS, now=NOW)
        assert first == second

    def test_spreadsheet_ranges(self):
        diameters = [["Diameter"]] + [[d] for d in DIAMETERS] + [[""]]
        positions = [["Position"]] + [[str(z)] for z in POSITIONS] + [[""]]
        text = generate_program(0.5, diameters, positions, now=NOW)
        assert text.splitlines()[0] == "(NOTE - 2 non-numeric or empty data pairs ignored.)"
        assert text.splitlines()[1] == "(OMalley Brass)"

    def test_native_profile(self):
        profile = get_profile(LatheModel.OMNITURN_G75)
        text = generate_program(0.5, DIAMETERS, POSITIONS, profile=profile, now=NOW)
        assert text.count("G75I0.02U0.01F0.002") == 2
        assert text.count("RF\n") == 2
        assert "G74" not in text

    def test_simulated_profile(self):
        text = generate_program(0.5, DIAMETERS, POSITIONS, now=NOW)
        assert text.count("G74") == 2
        assert "RF\n" not in text


# ---------------------------------------------------------------------------
# Error contract
# ---------------------------------------------------------------------------


class TestErrors:
    def test_unequal_lengths(self):
        assert generate_program(0.5, DIAMETERS, POSITIONS[:-1]) == UNEQUAL_POINTS_MESSAGE

    def test_stock_too_small(self):
        text = generate_program(0.3, DIAMETERS, POSITIONS, now=NOW)
        assert text == EXCEEDS_STOCK_MESSAGE
        assert not text.startswith("(")

    def test_no_partial_program(self):
        # First section fits, the second does not
        result = build_program(0.36, DIAMETERS, POSITIONS, now=NOW)
        assert not result.ok
        assert result.text == ""
        assert str(result) == EXCEEDS_STOCK_MESSAGE

    @pytest.mark.parametrize("stock", [0, -0.5, "abc", None])
    def test_bad_stock(self, stock):
        assert generate_program(stock, DIAMETERS, POSITIONS) == BAD_STOCK_MESSAGE

    def test_too_few_points(self):
        assert generate_program(0.5, [0.335, "x"]) == TOO_FEW_POINTS_MESSAGE

    def test_points_outside_first_section(self):
        text = generate_program(0.5, [0.3, 0.31, 0.32], [1.5, 2.0, 2.5])
        assert text.startswith("Cannot divide points into sections")


# ---------------------------------------------------------------------------
# MandrelJob
# ---------------------------------------------------------------------------


class TestMandrelJob:
    def test_sections(self):
        job = MandrelJob(0.5, [Point(d, z) for d, z in zip(DIAMETERS, POSITIONS)])
        assert [s.length for s in job.sections()] == [1.0, 1.0]

    def test_generate_result(self):
        job = MandrelJob(0.5, [Point(d, z) for d, z in zip(DIAMETERS, POSITIONS)])
        result = job.generate(NOW)
        assert result.ok
        assert str(result) == result.text

    def test_stickout_override(self):
        profile = get_profile(LatheModel.OMNITURN).with_overrides(stickout=0.5)
        job = MandrelJob(
            0.5, [Point(d, z) for d, z in zip(DIAMETERS, POSITIONS)], profile=profile)
        text = job.generate(NOW).text
        assert "(0.5 inch part stickout)" in text
        assert "(Section 4)" in text
        assert "(Section 5)" not in text

    def test_exact_multiple_stickout_adds_no_empty_section(self):
        profile = get_profile(LatheModel.OMNITURN).with_overrides(stickout=0.35)
        diameters = [0.30 + 0.001 * i for i in range(22)]
        text = generate_program(0.5, diameters, profile=profile, now=NOW)
        assert text.count("(Section ") == 15
        assert "(Section 16)" not in text
