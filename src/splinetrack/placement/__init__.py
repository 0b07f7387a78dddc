"""Barrier placement along spline curves."""

from splinetrack.placement.config import (
    BarrierPlacementConfig,
    GroundSnapConfig,
    RotationMode,
    Side,
    build_placement_config,
)
from splinetrack.placement.engine import BarrierPlacementEngine, Placement, PlacementReport
from splinetrack.placement.layout import (
    lateral_candidate,
    placement_interval_count,
    placement_parameters,
    placement_rotation,
    snap_to_ground,
)
from splinetrack.placement.preview import PreviewMarker, preview_barrier_positions

__all__ = [
    "BarrierPlacementConfig",
    "BarrierPlacementEngine",
    "GroundSnapConfig",
    "Placement",
    "PlacementReport",
    "PreviewMarker",
    "RotationMode",
    "Side",
    "build_placement_config",
    "lateral_candidate",
    "placement_interval_count",
    "placement_parameters",
    "placement_rotation",
    "preview_barrier_positions",
    "snap_to_ground",
]
