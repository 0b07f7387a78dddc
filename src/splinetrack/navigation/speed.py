"""Speed-cap policies evaluated every navigator tick."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from splinetrack.geometry import clamp01, lerp
from splinetrack.utils.constants import APPROACH_MIN_SPEED, NOMINAL_MAX_SPEED
from splinetrack.utils.exceptions import ConfigurationError

DEFAULT_SLOW_RADIUS_FACTOR = 2.0
DEFAULT_BLEND_GAIN = 1.5


class SpeedPolicy(Protocol):
    """Maps distance-to-target onto a speed cap."""

    def speed_cap(self, distance: float, reach_distance: float) -> float:
        """Compute the speed cap for the current tick.

        Args:
            distance: Distance from the agent to its target [m].
            reach_distance: Arrival threshold [m].

        Returns:
            Speed cap in controller units.
        """
        ...


@dataclass(frozen=True)
class ApproachSpeedPolicy:
    """Decelerate inside a radius around the target waypoint.

    Inside ``slow_radius_factor * reach_distance`` the cap blends from
    ``approach_speed`` at the waypoint up to ``nominal_speed``; outside it is
    ``nominal_speed``.

    Args:
        nominal_speed: Cap away from waypoints.
        approach_speed: Cap at zero distance.
        slow_radius_factor: Slow-down radius as a multiple of reach distance.
        blend_gain: Gain on ``distance / reach_distance`` before clamping.
    """

    nominal_speed: float = NOMINAL_MAX_SPEED
    approach_speed: float = APPROACH_MIN_SPEED
    slow_radius_factor: float = DEFAULT_SLOW_RADIUS_FACTOR
    blend_gain: float = DEFAULT_BLEND_GAIN

    def validate(self) -> None:
        """Validate policy parameters.

        Raises:
            splinetrack.utils.exceptions.ConfigurationError: If speeds are not
                positive and ordered, or the radius and gain are not positive.
        """
        if self.approach_speed <= 0.0:
            msg = "approach_speed must be positive"
            raise ConfigurationError(msg)
        if self.nominal_speed < self.approach_speed:
            msg = "nominal_speed must be at least approach_speed"
            raise ConfigurationError(msg)
        if self.slow_radius_factor <= 0.0:
            msg = "slow_radius_factor must be positive"
            raise ConfigurationError(msg)
        if self.blend_gain <= 0.0:
            msg = "blend_gain must be positive"
            raise ConfigurationError(msg)

    def speed_cap(self, distance: float, reach_distance: float) -> float:
        """Compute the approach speed cap.

        Args:
            distance: Distance from the agent to its target [m].
            reach_distance: Arrival threshold [m].

        Returns:
            Speed cap in controller units.
        """
        if distance < reach_distance * self.slow_radius_factor:
            fraction = clamp01(self.blend_gain * distance / reach_distance)
            return lerp(self.approach_speed, self.nominal_speed, fraction)
        return self.nominal_speed
