"""Plot generation for placement and navigation analysis."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from splinetrack.curve.models import Curve
from splinetrack.curve.sampler import sample_positions
from splinetrack.navigation.runner import NavigationRunResult
from splinetrack.navigation.waypoints import Waypoint
from splinetrack.placement.config import Side
from splinetrack.placement.engine import PlacementReport
from splinetrack.placement.preview import PreviewMarker

matplotlib.use("Agg")

CURVE_PLOT_SAMPLES = 400
SIDE_COLORS = {Side.LEFT: "tab:blue", Side.RIGHT: "tab:orange"}


def _save_dual_format(fig: Figure, out_base: Path) -> None:
    """Write a figure to PNG and PDF with a shared base path.

    Args:
        fig: Figure object to persist.
        out_base: Output path without suffix.
    """
    out_base.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_base.with_suffix(".png"), dpi=180, bbox_inches="tight")
    fig.savefig(out_base.with_suffix(".pdf"), bbox_inches="tight")


def _plot_curve_plan(ax: plt.Axes, curve: Curve) -> None:
    """Draw a curve in the ground plane.

    Args:
        ax: Target axes.
        curve: Curve to draw.
    """
    points = sample_positions(curve, CURVE_PLOT_SAMPLES)
    ax.plot(points[:, 0], points[:, 2], color="0.3", lw=1.5, label="Spline")
    ax.set_xlabel("x [m]")
    ax.set_ylabel("z [m]")
    ax.set_aspect("equal", adjustable="datalim")
    ax.grid(True, alpha=0.3)


def plot_barrier_layout(
    curve: Curve,
    report: PlacementReport,
    out_base: Path,
    preview: Sequence[PreviewMarker] | None = None,
) -> None:
    """Plot placed barriers around their curve in plan view.

    Args:
        curve: Curve the barriers were generated along.
        report: Placement batch to draw.
        out_base: Output path without suffix.
        preview: Optional preview markers drawn as hollow circles.
    """
    fig, ax = plt.subplots(figsize=(7, 7))
    _plot_curve_plan(ax, curve)
    for side, color in SIDE_COLORS.items():
        points = np.array([p.position for p in report.placements if p.side is side]).reshape(-1, 3)
        if points.size:
            ax.scatter(points[:, 0], points[:, 2], s=10, color=color, label=f"{side.value} barriers")
    if preview:
        markers = np.array([marker.position for marker in preview])
        ax.scatter(markers[:, 0], markers[:, 2], s=40, facecolors="none", edgecolors="k", label="Preview")
    ax.set_title(f"Barrier Layout ({report.success_count} placed, {report.failure_count} failed)")
    ax.legend()
    _save_dual_format(fig, out_base)
    plt.close(fig)


def plot_waypoint_route(
    waypoints: Sequence[Waypoint],
    result: NavigationRunResult,
    out_base: Path,
) -> None:
    """Plot waypoints together with the driven agent path.

    Args:
        waypoints: Waypoints the agent followed; null poses are skipped.
        result: Navigation run traces.
        out_base: Output path without suffix.
    """
    fig, ax = plt.subplots(figsize=(7, 7))
    known = np.array([wp.position for wp in waypoints if wp.position is not None]).reshape(-1, 3)
    if known.size:
        ax.scatter(known[:, 0], known[:, 2], s=12, color="tab:green", label="Waypoints")
    ax.plot(result.positions[:, 0], result.positions[:, 2], lw=1.5, color="tab:red", label="Agent path")
    ax.set_xlabel("x [m]")
    ax.set_ylabel("z [m]")
    ax.set_aspect("equal", adjustable="datalim")
    ax.set_title("Waypoint Route")
    ax.grid(True, alpha=0.3)
    ax.legend()
    _save_dual_format(fig, out_base)
    plt.close(fig)


def plot_speed_cap_trace(result: NavigationRunResult, out_base: Path) -> None:
    """Plot the speed cap over simulated time.

    Args:
        result: Navigation run traces.
        out_base: Output path without suffix.
    """
    time = np.arange(1, result.steps + 1) * result.step
    fig, ax = plt.subplots(figsize=(9, 4))
    ax.plot(time, result.speed_caps, lw=2.0)
    ax.set_xlabel("t [s]")
    ax.set_ylabel("Speed cap [km/h]")
    ax.set_title("Speed Cap Trace")
    ax.grid(True, alpha=0.3)
    _save_dual_format(fig, out_base)
    plt.close(fig)


def export_standard_plots(
    output_dir: str | Path,
    curve: Curve | None = None,
    report: PlacementReport | None = None,
    waypoints: Sequence[Waypoint] | None = None,
    result: NavigationRunResult | None = None,
) -> list[Path]:
    """Export every plot the given inputs allow in PNG and PDF format.

    Args:
        output_dir: Destination directory for all generated plots.
        curve: Curve used for the barrier layout plot.
        report: Placement batch; requires ``curve``.
        waypoints: Waypoints used for the route plot; requires ``result``.
        result: Navigation run traces.

    Returns:
        Base paths (without suffix) of the written plots.
    """
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    if curve is not None and report is not None:
        plot_barrier_layout(curve, report, out_dir / "barrier_layout")
        written.append(out_dir / "barrier_layout")
    if result is not None:
        if waypoints is not None:
            plot_waypoint_route(waypoints, result, out_dir / "waypoint_route")
            written.append(out_dir / "waypoint_route")
        plot_speed_cap_trace(result, out_dir / "speed_cap_trace")
        written.append(out_dir / "speed_cap_trace")
    return written
