"""Drive controller interface and a kinematic stand-in controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np

from splinetrack.geometry import UP, FloatArray, VectorLike, as_vector, normalize, rotate_vector
from splinetrack.navigation.waypoints import Pose
from splinetrack.utils.constants import KMH_TO_MPS, NOMINAL_MAX_SPEED, SMALL_EPS

DEFAULT_STEERING_DEADBAND = 0.05
FORWARD = (0.0, 0.0, 1.0)


@dataclass(frozen=True)
class SteeringInput:
    """Steering flags reported for cosmetic consumers such as cameras.

    Args:
        left: Whether the controller is steering left.
        right: Whether the controller is steering right.
    """

    left: bool = False
    right: bool = False


class DriveController(Protocol):
    """Vehicle controller that follows a target pose under a speed cap."""

    def set_target(self, pose: Pose) -> None:
        """Set the pose to drive toward.

        Args:
            pose: Target pose.
        """
        ...

    def set_speed_cap(self, speed: float) -> None:
        """Set the maximum speed.

        Args:
            speed: Speed cap in controller units.
        """
        ...

    def current_position(self) -> FloatArray:
        """Current vehicle position.

        Returns:
            World position [m].
        """
        ...

    @property
    def steering_input(self) -> SteeringInput:
        """Steering flags from the last update.

        Returns:
            Steering state.
        """
        ...


class KinematicDriveController:
    """Non-physical controller that moves straight toward its target.

    Speed caps are interpreted in km/h and converted with ``speed_scale``.

    Args:
        position: Initial position [m].
        heading: Initial facing direction.
        speed_cap: Initial speed cap [km/h].
        speed_scale: Factor converting the speed cap into m/s.
        steering_deadband: Lateral component of the direction to target
            below which no steering flag is raised.
    """

    def __init__(
        self,
        position: VectorLike = (0.0, 0.0, 0.0),
        heading: VectorLike = FORWARD,
        speed_cap: float = NOMINAL_MAX_SPEED,
        speed_scale: float = KMH_TO_MPS,
        steering_deadband: float = DEFAULT_STEERING_DEADBAND,
    ) -> None:
        """Create a controller at rest.

        Args:
            position: Initial position [m].
            heading: Initial facing direction.
            speed_cap: Initial speed cap [km/h].
            speed_scale: Factor converting the speed cap into m/s.
            steering_deadband: Lateral dead band for steering flags.
        """
        self.position = as_vector(position)
        self.heading = normalize(as_vector(heading))
        self.speed_cap = float(speed_cap)
        self.speed_scale = float(speed_scale)
        self.steering_deadband = float(steering_deadband)
        self.target: Pose | None = None
        self.enabled = True
        self._steering = SteeringInput()

    def set_target(self, pose: Pose) -> None:
        """Set the pose to drive toward.

        Args:
            pose: Target pose.
        """
        self.target = pose

    def set_speed_cap(self, speed: float) -> None:
        """Set the maximum speed.

        Args:
            speed: Speed cap [km/h].
        """
        self.speed_cap = float(speed)

    def current_position(self) -> FloatArray:
        """Current vehicle position.

        Returns:
            Copy of the world position [m].
        """
        return self.position.copy()

    @property
    def steering_input(self) -> SteeringInput:
        """Steering flags from the last step.

        Returns:
            Steering state.
        """
        return self._steering

    def set_enabled(self, enabled: bool) -> None:
        """Enable or freeze the controller.

        Args:
            enabled: ``False`` stops all motion until re-enabled.
        """
        self.enabled = enabled
        if not enabled:
            self._steering = SteeringInput()

    def teleport(self, pose: Pose) -> None:
        """Move instantly to a pose.

        Args:
            pose: Destination pose; its orientation sets the heading.
        """
        self.position = np.array(pose.position, dtype=np.float64)
        self.heading = normalize(rotate_vector(pose.orientation, FORWARD))

    def step(self, dt: float) -> float:
        """Advance toward the target for one time step.

        Args:
            dt: Time step [s].

        Returns:
            Distance travelled [m].
        """
        if not self.enabled or self.target is None:
            self._steering = SteeringInput()
            return 0.0

        to_target = np.asarray(self.target.position, dtype=np.float64) - self.position
        gap = float(np.linalg.norm(to_target))
        if gap < SMALL_EPS:
            self._steering = SteeringInput()
            return 0.0

        direction = to_target / gap
        lateral = float(np.dot(direction, normalize(np.cross(self.heading, UP))))
        self._steering = SteeringInput(
            left=lateral < -self.steering_deadband,
            right=lateral > self.steering_deadband,
        )

        travel = min(self.speed_cap * self.speed_scale * dt, gap)
        self.position = self.position + direction * travel
        self.heading = direction
        return travel
