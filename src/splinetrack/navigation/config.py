"""Navigator configuration dataclasses."""

from __future__ import annotations

from dataclasses import dataclass

from splinetrack.utils.exceptions import ConfigurationError

DEFAULT_REACH_DISTANCE = 5.0
DEFAULT_LOOP = True
DEFAULT_SLOW_NEAR_WAYPOINT = True
DEFAULT_HIGHLIGHT_WAYPOINTS = True
DEFAULT_NORMAL_MATERIAL = "waypoint_normal"
DEFAULT_ACTIVE_MATERIAL = "waypoint_active"


@dataclass(frozen=True)
class NavigatorConfig:
    """Waypoint navigator settings.

    Args:
        reach_distance: Distance below which a waypoint counts as reached [m].
        loop: Whether to wrap to the first waypoint after the last one.
        slow_near_waypoint: Whether to lower the speed cap near waypoints.
        highlight_waypoints: Whether to swap waypoint materials as the target
            changes.
        normal_material: Material for waypoints that are not the target.
        active_material: Material for the current target waypoint.
    """

    reach_distance: float = DEFAULT_REACH_DISTANCE
    loop: bool = DEFAULT_LOOP
    slow_near_waypoint: bool = DEFAULT_SLOW_NEAR_WAYPOINT
    highlight_waypoints: bool = DEFAULT_HIGHLIGHT_WAYPOINTS
    normal_material: str | None = DEFAULT_NORMAL_MATERIAL
    active_material: str | None = DEFAULT_ACTIVE_MATERIAL

    def validate(self) -> None:
        """Validate navigator settings.

        Raises:
            splinetrack.utils.exceptions.ConfigurationError: If the reach
                distance is not strictly positive.
        """
        if not self.reach_distance > 0.0:
            msg = "reach_distance must be positive"
            raise ConfigurationError(msg)


def build_navigator_config(
    reach_distance: float = DEFAULT_REACH_DISTANCE,
    loop: bool = DEFAULT_LOOP,
    slow_near_waypoint: bool = DEFAULT_SLOW_NEAR_WAYPOINT,
    highlight_waypoints: bool = DEFAULT_HIGHLIGHT_WAYPOINTS,
    normal_material: str | None = DEFAULT_NORMAL_MATERIAL,
    active_material: str | None = DEFAULT_ACTIVE_MATERIAL,
) -> NavigatorConfig:
    """Build a validated navigator config.

    Args:
        reach_distance: Distance below which a waypoint counts as reached [m].
        loop: Whether to wrap to the first waypoint after the last one.
        slow_near_waypoint: Whether to lower the speed cap near waypoints.
        highlight_waypoints: Whether to swap waypoint materials.
        normal_material: Material for waypoints that are not the target.
        active_material: Material for the current target waypoint.

    Returns:
        Fully validated navigator configuration.

    Raises:
        splinetrack.utils.exceptions.ConfigurationError: If any value violates
            its bound.
    """
    config = NavigatorConfig(
        reach_distance=reach_distance,
        loop=loop,
        slow_near_waypoint=slow_near_waypoint,
        highlight_waypoints=highlight_waypoints,
        normal_material=normal_material,
        active_material=active_material,
    )
    config.validate()
    return config
