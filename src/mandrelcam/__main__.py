"""CLI entry point: ``python -m mandrelcam points.csv -o mandrel.ngc``"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config.machine_profiles import LatheModel, get_profile
from .config.settings import AppSettings
from .core.inputs import read_measurements_csv
from .core.job import build_program


def _build_parser(settings: AppSettings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mandrelcam",
        description="Generate Omniturn lathe G-code for a measured tapered mandrel.",
    )
    p.add_argument("input", type=Path,
                   help="CSV of diameters, with optional positions in column 2")
    p.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Output G-code file (default: <input>.ngc)",
    )
    p.add_argument(
        "--stock-diameter", type=float, default=settings.default_stock_diameter,
        help=f"Bar stock diameter (default: {settings.default_stock_diameter})",
    )
    p.add_argument(
        "--machine", choices=[m.value for m in LatheModel],
        default=settings.default_machine,
        help=f"Lathe profile (default: {settings.default_machine})",
    )
    p.add_argument("--spacing", type=float, default=settings.point_spacing,
                   help="Point spacing when no positions are given "
                        f"(default: {settings.point_spacing})")

    # Profile overrides
    p.add_argument("--stickout", type=float, default=None,
                   help="Section length pulled from the collet")
    p.add_argument("--rpm", type=int, default=None, help="Spindle RPM")
    p.add_argument("--feed", type=float, default=None,
                   help="Cutting feed in inches per revolution")
    p.add_argument("--native-contour-cycle", action="store_true", default=None,
                   help="Use the controller's G75 instead of simulating it")

    p.add_argument("--save-defaults", action="store_true",
                   help="Remember machine, stock diameter and spacing")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Debug logging")
    return p


def main(argv: list[str] | None = None) -> int:
    settings = AppSettings.load()
    args = _build_parser(settings).parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    output: Path = args.output or args.input.with_suffix(".ngc")

    profile = get_profile(LatheModel(args.machine)).with_overrides(
        stickout=args.stickout,
        rpm=args.rpm,
        feed=args.feed,
        native_contour_cycle=args.native_contour_cycle,
    )
    print(f"Profile: {profile}")

    print(f"Loading {args.input} ...")
    diameters, positions = read_measurements_csv(args.input)

    result = build_program(
        args.stock_diameter, diameters, positions,
        profile=profile, spacing=args.spacing,
    )
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    output.write_text(result.text)
    print(f"Wrote {output}")

    if args.save_defaults:
        settings.default_machine = args.machine
        settings.default_stock_diameter = args.stock_diameter
        settings.point_spacing = args.spacing
        settings.save()

    return 0


if __name__ == "__main__":
    sys.exit(main())
