"""Aggregate metrics for navigation runs and placement batches."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from splinetrack.navigation.runner import NavigationRunResult
from splinetrack.placement.config import Side
from splinetrack.placement.engine import PlacementReport


@dataclass(frozen=True)
class RunSummary:
    """Summary metrics for a navigation run.

    Args:
        steps: Number of simulated ticks.
        elapsed_time: Simulated duration [s].
        distance_travelled: Path length driven by the agent [m].
        completed: Whether the navigator reported completion.
        final_target_index: Target index after the last tick.
        min_speed_cap: Lowest speed cap seen [km/h].
        max_speed_cap: Highest speed cap seen [km/h].
    """

    steps: int
    elapsed_time: float
    distance_travelled: float
    completed: bool
    final_target_index: int
    min_speed_cap: float
    max_speed_cap: float


@dataclass(frozen=True)
class PlacementSummary:
    """Summary metrics for a barrier batch.

    Args:
        sample_count: Number of curve parameters sampled.
        success_count: Barriers placed.
        failure_count: Candidates skipped on ground misses.
        left_count: Barriers on the left side.
        right_count: Barriers on the right side.
        success_rate: Fraction of attempted candidates that were placed.
    """

    sample_count: int
    success_count: int
    failure_count: int
    left_count: int
    right_count: int
    success_rate: float


def compute_run_summary(result: NavigationRunResult) -> RunSummary:
    """Compute aggregate metrics from a navigation run.

    Args:
        result: Traces returned by :func:`splinetrack.navigation.simulate_navigation`.

    Returns:
        Run summary.
    """
    return RunSummary(
        steps=result.steps,
        elapsed_time=float(result.elapsed_time),
        distance_travelled=result.distance_travelled,
        completed=bool(result.completed),
        final_target_index=int(result.target_indices[-1]),
        min_speed_cap=float(np.min(result.speed_caps)),
        max_speed_cap=float(np.max(result.speed_caps)),
    )


def summarize_placements(report: PlacementReport) -> PlacementSummary:
    """Compute aggregate metrics from a placement batch.

    Args:
        report: Report returned by ``generate_barriers``.

    Returns:
        Placement summary; the success rate is ``0`` when nothing was
        attempted.
    """
    left = sum(1 for placement in report.placements if placement.side is Side.LEFT)
    attempted = report.attempted
    return PlacementSummary(
        sample_count=report.sample_count,
        success_count=report.success_count,
        failure_count=report.failure_count,
        left_count=left,
        right_count=len(report.placements) - left,
        success_rate=report.success_count / attempted if attempted else 0.0,
    )
