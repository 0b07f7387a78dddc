"""Place barriers and drive waypoint routes on synthetic track layouts."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path

import matplotlib.pyplot as plt

from splinetrack.analysis import (
    compute_run_summary,
    export_placements_json,
    export_run_summary_json,
    export_standard_plots,
    summarize_placements,
)
from splinetrack.curve import (
    SplineContainer,
    build_circular_curve,
    build_figure_eight_curve,
    build_straight_curve,
)
from splinetrack.curve.models import Curve
from splinetrack.navigation import (
    KinematicDriveController,
    NavigationRunResult,
    WaypointNavigator,
    build_navigator_config,
    simulate_navigation,
    waypoints_from_curve,
)
from splinetrack.placement import BarrierPlacementEngine, build_placement_config
from splinetrack.scene import EntityTemplate, FlatGround, InMemoryScene
from splinetrack.utils import configure_logging

STRAIGHT_LENGTH = 200.0
CIRCLE_RADIUS = 50.0
FIGURE_EIGHT_RADIUS = 80.0
BARRIER_SPACING = 4.0
WAYPOINT_COUNT = 120
SIMULATION_STEP = 0.05


def _drive_route(curve: Curve, scene: InMemoryScene, loop: bool) -> tuple[NavigationRunResult, list]:
    """Drive a kinematic agent along waypoints sampled from a curve.

    Args:
        curve: Curve the waypoints are sampled from.
        scene: Scene receiving the waypoint render entities.
        loop: Whether the navigator wraps after the last waypoint.

    Returns:
        Run traces and the waypoints that were followed.
    """
    waypoints = waypoints_from_curve(curve, sample_count=WAYPOINT_COUNT, scene=scene)
    controller = KinematicDriveController(position=waypoints[0].position)
    navigator = WaypointNavigator(
        controller=controller,
        config=build_navigator_config(reach_distance=2.0, loop=loop),
        scene=scene,
    )
    navigator.initialize(waypoints)
    result = simulate_navigation(navigator, controller, step=SIMULATION_STEP)
    return result, waypoints


def _export_speed_cap_comparison(results: dict[str, NavigationRunResult], path: Path) -> None:
    """Export one speed-cap plot for all scenarios.

    Args:
        results: Scenario-name keyed run traces.
        path: Output path for the figure.
    """
    fig, axis = plt.subplots(figsize=(10.5, 4.8), constrained_layout=True)

    for name, result in results.items():
        time = [(index + 1) * result.step for index in range(result.steps)]
        axis.plot(time, result.speed_caps, lw=1.5, label=name)

    axis.set_xlabel("Time [s]")
    axis.set_ylabel("Speed cap [km/h]")
    axis.set_title("Synthetic track speed-cap comparison")
    axis.grid(alpha=0.35)
    axis.legend()

    fig.savefig(path, dpi=160)
    plt.close(fig)


def main() -> None:
    """Run synthetic scenarios and export placements, plots and summaries."""
    configure_logging(logging.INFO)
    logger = logging.getLogger("track_tooling_scenarios")

    project_root = Path(__file__).resolve().parents[1]
    output_dir = project_root / "examples" / "output" / "track_tooling"
    output_dir.mkdir(parents=True, exist_ok=True)

    placement_config = build_placement_config(spacing=BARRIER_SPACING, offset_distance=6.0)

    scenarios = {
        "straight": (build_straight_curve(length=STRAIGHT_LENGTH), False),
        "circle_r50": (build_circular_curve(radius=CIRCLE_RADIUS), True),
        "figure_eight": (build_figure_eight_curve(lobe_radius=FIGURE_EIGHT_RADIUS), True),
    }

    results: dict[str, NavigationRunResult] = {}
    summary: dict[str, dict[str, object]] = {}

    for name, (curve, loop) in scenarios.items():
        scene = InMemoryScene()
        engine = BarrierPlacementEngine(
            scene=scene,
            template=EntityTemplate(name="Barrier"),
            curves=SplineContainer([curve], name=name),
            ground=FlatGround(),
            config=placement_config,
        )
        report = engine.generate_barriers()
        if report is None:
            logger.error("Barrier generation refused for %s", name)
            continue

        result, waypoints = _drive_route(curve, scene, loop)
        run_summary = compute_run_summary(result)
        scenario_dir = output_dir / name

        export_standard_plots(scenario_dir, curve=curve, report=report, waypoints=waypoints, result=result)
        export_placements_json(report, scenario_dir / "placements.json")
        export_run_summary_json(run_summary, scenario_dir / "run_summary.json")

        results[name] = result
        summary[name] = {
            "placement": asdict(summarize_placements(report)),
            "run": asdict(run_summary),
        }
        logger.info(
            "%s: %d barriers, route driven in %.2f s",
            name,
            report.success_count,
            run_summary.elapsed_time,
        )

    _export_speed_cap_comparison(results=results, path=output_dir / "speed_cap_comparison.png")
    (output_dir / "scenario_summary.json").write_text(
        json.dumps(summary, indent=2),
        encoding="utf-8",
    )

    logger.info("Synthetic scenario artifacts written to %s", output_dir)


if __name__ == "__main__":
    main()
