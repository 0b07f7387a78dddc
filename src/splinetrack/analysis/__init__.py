"""Placement and navigation analysis tools."""

from splinetrack.analysis.export import export_placements_json, export_run_summary_json
from splinetrack.analysis.plots import (
    export_standard_plots,
    plot_barrier_layout,
    plot_speed_cap_trace,
    plot_waypoint_route,
)
from splinetrack.analysis.summary import (
    PlacementSummary,
    RunSummary,
    compute_run_summary,
    summarize_placements,
)

__all__ = [
    "PlacementSummary",
    "RunSummary",
    "compute_run_summary",
    "export_placements_json",
    "export_run_summary_json",
    "export_standard_plots",
    "plot_barrier_layout",
    "plot_speed_cap_trace",
    "plot_waypoint_route",
    "summarize_placements",
]
