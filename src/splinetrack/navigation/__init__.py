"""Waypoint navigation: sequence state, highlighting, speed policy and runs."""

from splinetrack.navigation.config import NavigatorConfig, build_navigator_config
from splinetrack.navigation.controller import DriveController, KinematicDriveController, SteeringInput
from splinetrack.navigation.gate import CompletionGate
from splinetrack.navigation.highlight import WaypointHighlighter
from splinetrack.navigation.navigator import WaypointNavigator
from splinetrack.navigation.respawn import (
    CheckpointTrigger,
    RespawnPhase,
    RespawnSystem,
    freeze_ticks_for,
)
from splinetrack.navigation.runner import NavigationRunResult, simulate_navigation
from splinetrack.navigation.speed import ApproachSpeedPolicy, SpeedPolicy
from splinetrack.navigation.state import (
    NavigatorState,
    RunCompleted,
    TargetChanged,
    TargetUnavailable,
    WaypointReleased,
    WaypointSequence,
)
from splinetrack.navigation.waypoints import (
    Pose,
    Waypoint,
    WaypointState,
    load_waypoints_csv,
    waypoints_from_curve,
    waypoints_from_positions,
)

__all__ = [
    "ApproachSpeedPolicy",
    "CheckpointTrigger",
    "CompletionGate",
    "DriveController",
    "KinematicDriveController",
    "NavigationRunResult",
    "NavigatorConfig",
    "NavigatorState",
    "Pose",
    "RespawnPhase",
    "RespawnSystem",
    "RunCompleted",
    "SpeedPolicy",
    "SteeringInput",
    "TargetChanged",
    "TargetUnavailable",
    "Waypoint",
    "WaypointHighlighter",
    "WaypointNavigator",
    "WaypointReleased",
    "WaypointSequence",
    "WaypointState",
    "build_navigator_config",
    "freeze_ticks_for",
    "load_waypoints_csv",
    "simulate_navigation",
    "waypoints_from_curve",
    "waypoints_from_positions",
]
