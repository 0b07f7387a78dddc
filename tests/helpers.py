"""Shared test helpers."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from splinetrack.curve import SplineContainer, build_straight_curve
from splinetrack.navigation import Pose, SteeringInput, Waypoint, waypoints_from_positions
from splinetrack.placement import BarrierPlacementConfig, BarrierPlacementEngine
from splinetrack.scene import EntityTemplate, FlatGround, InMemoryScene

BARRIER_TEMPLATE = EntityTemplate(name="Barrier")


class RecordingController:
    """Drive controller stand-in that records every call it receives."""

    def __init__(self, position: Sequence[float] = (0.0, 0.0, 0.0)) -> None:
        """Create a controller at a fixed position.

        Args:
            position: Position reported by :meth:`current_position`.
        """
        self.position = np.array(position, dtype=np.float64)
        self.targets: list[Pose] = []
        self.speed_caps: list[float] = []

    def set_target(self, pose: Pose) -> None:
        """Record a published target.

        Args:
            pose: Target pose.
        """
        self.targets.append(pose)

    def set_speed_cap(self, speed: float) -> None:
        """Record a published speed cap.

        Args:
            speed: Speed cap.
        """
        self.speed_caps.append(speed)

    def current_position(self) -> np.ndarray:
        """Report the fixed position.

        Returns:
            Copy of the stored position.
        """
        return self.position.copy()

    @property
    def steering_input(self) -> SteeringInput:
        """Report neutral steering.

        Returns:
            Neutral steering flags.
        """
        return SteeringInput()


def line_waypoints(count: int, spacing: float = 10.0) -> list[Waypoint]:
    """Build waypoints spaced evenly along the ``x`` axis.

    Args:
        count: Number of waypoints.
        spacing: Distance between consecutive waypoints [m].

    Returns:
        Waypoints at ``(i * spacing, 0, 0)``.
    """
    return waypoints_from_positions([(index * spacing, 0.0, 0.0) for index in range(count)])


def straight_placement_engine(
    length: float = 100.0,
    config: BarrierPlacementConfig | None = None,
    ground: FlatGround | None = None,
) -> tuple[BarrierPlacementEngine, InMemoryScene]:
    """Create a placement engine over a straight curve on flat ground.

    Args:
        length: Curve length [m].
        config: Placement settings; engine defaults when ``None``.
        ground: Ground surface; an unbounded plane at ``y = 0`` when ``None``.

    Returns:
        Engine and the scene it spawns into.
    """
    scene = InMemoryScene()
    engine = BarrierPlacementEngine(
        scene=scene,
        template=BARRIER_TEMPLATE,
        curves=SplineContainer([build_straight_curve(length=length)], name="Straight"),
        ground=ground or FlatGround(),
        config=config,
    )
    return engine, scene
