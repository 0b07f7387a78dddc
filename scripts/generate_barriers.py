"""Generate barriers along a curve CSV and export placements plus plots."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from splinetrack.analysis import export_placements_json, plot_barrier_layout
from splinetrack.curve import SplineContainer, load_curve_csv
from splinetrack.placement import (
    BarrierPlacementEngine,
    GroundSnapConfig,
    PlacementReport,
    RotationMode,
    build_placement_config,
)
from splinetrack.scene import EntityTemplate, FlatGround, InMemoryScene
from splinetrack.utils import configure_logging

SIDE_CHOICES = ("both", "left", "right")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Args:
        argv: Argument list; ``sys.argv`` is used when ``None``.

    Returns:
        Parsed command-line namespace.
    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--curve", type=Path, required=True, help="CSV file with x,y,z columns.")
    parser.add_argument("--output-dir", type=Path, required=True)
    parser.add_argument("--closed", action="store_true", help="Treat the curve as a closed loop.")
    parser.add_argument("--interpolation", choices=("catmull_rom", "linear"), default="catmull_rom")
    parser.add_argument("--spacing", type=float, default=1.0)
    parser.add_argument("--offset", type=float, default=5.0)
    parser.add_argument("--sides", choices=SIDE_CHOICES, default="both")
    parser.add_argument(
        "--rotation-mode",
        choices=tuple(mode.value for mode in RotationMode),
        default=RotationMode.PARALLEL.value,
    )
    parser.add_argument("--ground-height", type=float, default=0.0, help="Height of the flat ground plane.")
    parser.add_argument("--no-ground-snap", action="store_true", help="Keep unsnapped candidate positions.")
    parser.add_argument("--plot", action="store_true", help="Also write a layout plot (PNG and PDF).")
    return parser.parse_args(argv)


def _generate(args: argparse.Namespace) -> PlacementReport | None:
    """Run one placement batch from parsed arguments.

    Args:
        args: Parsed command-line namespace.

    Returns:
        Placement report, or ``None`` when generation was refused.
    """
    curve = load_curve_csv(args.curve, closed=args.closed, interpolation=args.interpolation)
    config = build_placement_config(
        offset_distance=args.offset,
        spacing=args.spacing,
        place_left=args.sides in ("both", "left"),
        place_right=args.sides in ("both", "right"),
        rotation_mode=args.rotation_mode,
        ground=GroundSnapConfig(enabled=not args.no_ground_snap),
    )
    engine = BarrierPlacementEngine(
        scene=InMemoryScene(),
        template=EntityTemplate(name="Barrier"),
        curves=SplineContainer([curve], name=args.curve.stem),
        ground=FlatGround(height=args.ground_height),
        config=config,
    )
    report = engine.generate_barriers()
    if report is not None and args.plot:
        plot_barrier_layout(curve, report, args.output_dir / "barrier_layout", preview=engine.preview())
    return report


def main(argv: list[str] | None = None) -> None:
    """Generate barriers and write ``placements.json`` to the output directory.

    Args:
        argv: Argument list; ``sys.argv`` is used when ``None``.
    """
    args = _parse_args(argv)
    configure_logging(logging.INFO)
    logger = logging.getLogger("generate_barriers")

    report = _generate(args)
    if report is None:
        raise SystemExit(1)

    out_path = args.output_dir / "placements.json"
    export_placements_json(report, out_path)
    logger.info(
        "Wrote %d barriers (%d failed) to %s",
        report.success_count,
        report.failure_count,
        out_path,
    )


if __name__ == "__main__":
    main()
