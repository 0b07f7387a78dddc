"""Spline-driven track tooling: barrier placement and waypoint navigation."""

from splinetrack.navigation.navigator import WaypointNavigator
from splinetrack.navigation.runner import NavigationRunResult, simulate_navigation
from splinetrack.placement.engine import BarrierPlacementEngine, PlacementReport

__all__ = [
    "BarrierPlacementEngine",
    "NavigationRunResult",
    "PlacementReport",
    "WaypointNavigator",
    "simulate_navigation",
]
