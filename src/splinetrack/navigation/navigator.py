"""Waypoint-following agent that drives an external controller."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from splinetrack.geometry import VectorLike, as_vector, distance
from splinetrack.navigation.config import NavigatorConfig
from splinetrack.navigation.controller import DriveController
from splinetrack.navigation.highlight import WaypointHighlighter
from splinetrack.navigation.speed import ApproachSpeedPolicy, SpeedPolicy
from splinetrack.navigation.state import (
    NavigatorState,
    RunCompleted,
    TargetChanged,
    TargetUnavailable,
    WaypointReleased,
    WaypointSequence,
)
from splinetrack.navigation.waypoints import Pose, Waypoint
from splinetrack.scene.models import SceneGraph

logger = logging.getLogger(__name__)


class WaypointNavigator:
    """Advance an agent through waypoints and publish targets and speed caps.

    State transitions live in :class:`WaypointSequence`, material swaps in
    :class:`WaypointHighlighter` and the deceleration rule in a
    :class:`SpeedPolicy`. The navigator wires them together through sequence
    events and forwards targets to the drive controller.

    Args:
        controller: Controller receiving targets and speed caps.
        config: Navigator settings.
        scene: Scene used for waypoint highlighting; ``None`` disables it.
        speed_policy: Speed-cap rule; defaults to :class:`ApproachSpeedPolicy`.
    """

    def __init__(
        self,
        controller: DriveController,
        config: NavigatorConfig | None = None,
        scene: SceneGraph | None = None,
        speed_policy: SpeedPolicy | None = None,
    ) -> None:
        """Create a disabled navigator with no waypoints.

        Args:
            controller: Controller receiving targets and speed caps.
            config: Navigator settings.
            scene: Scene used for waypoint highlighting.
            speed_policy: Speed-cap rule.
        """
        self.config = config or NavigatorConfig()
        self.config.validate()
        self.controller = controller
        self.speed_policy = speed_policy or ApproachSpeedPolicy()
        self.sequence = WaypointSequence(loop=self.config.loop)
        self.highlighter = WaypointHighlighter(
            scene=scene,
            normal_material=self.config.normal_material,
            active_material=self.config.active_material,
            enabled=self.config.highlight_waypoints,
        )
        self.enabled = False
        self.speed_cap: float | None = None
        self.publish_failures = 0
        self._target: Pose | None = None

        self.sequence.subscribe(WaypointReleased, self.highlighter.on_waypoint_released)
        self.sequence.subscribe(TargetChanged, self.highlighter.on_target_changed)
        self.sequence.subscribe(TargetChanged, self._on_target_changed)
        self.sequence.subscribe(TargetUnavailable, self._on_target_unavailable)
        self.sequence.subscribe(RunCompleted, self._on_run_completed)

    @property
    def state(self) -> NavigatorState:
        """Current sequence progress.

        Returns:
            Immutable state snapshot.
        """
        return self.sequence.state

    @property
    def target(self) -> Pose | None:
        """Last pose published to the controller.

        Returns:
            Published target, or ``None`` before the first publish.
        """
        return self._target

    def initialize(self, waypoints: Sequence[Waypoint]) -> bool:
        """Bind waypoints and publish the first target.

        Args:
            waypoints: Waypoints in traversal order.

        Returns:
            ``False`` when ``waypoints`` is empty; the agent is then disabled.
        """
        if not waypoints:
            logger.error("No waypoints assigned!")
            self.sequence.replace([])
            self.highlighter.bind([])
            self._target = None
            self.enabled = False
            return False

        self.sequence.replace(waypoints)
        self.highlighter.bind(waypoints)
        self._target = None
        self.enabled = True
        self.sequence.start()
        return True

    def tick(self, agent_position: VectorLike | None = None, reach_distance: float | None = None) -> None:
        """Run one navigation step.

        Args:
            agent_position: Agent position [m]; read from the controller when
                ``None``.
            reach_distance: Arrival threshold override [m].
        """
        if not self.enabled or self.sequence.complete or not self.sequence.waypoints:
            return
        if self._target is None:
            return

        reach = self.config.reach_distance if reach_distance is None else float(reach_distance)
        position = (
            self.controller.current_position() if agent_position is None else as_vector(agent_position)
        )

        if distance(position, self._target.position) <= reach:
            self.sequence.advance()

        if self.config.slow_near_waypoint:
            gap = distance(position, self._target.position)
            self.speed_cap = self.speed_policy.speed_cap(gap, reach)
            self.controller.set_speed_cap(self.speed_cap)

    def reset(self) -> None:
        """Restart from the first waypoint and clear completion."""
        if not self.enabled:
            logger.warning("Cannot reset a disabled navigator")
            return
        if not self.sequence.reset():
            logger.warning("Cannot reset navigator without waypoints")

    def set_waypoints(self, waypoints: Sequence[Waypoint]) -> None:
        """Replace the waypoint list and restart from its first entry.

        Args:
            waypoints: New waypoints in traversal order.
        """
        self.sequence.replace(waypoints)
        self.highlighter.bind(waypoints)
        if not waypoints:
            logger.error("No waypoints assigned!")
            self._target = None
            self.enabled = False
            return
        self.enabled = True
        self.reset()

    def is_complete(self) -> bool:
        """Whether the run has finished.

        Returns:
            Completion flag; also set after the first wrap of a looping run.
        """
        return self.sequence.complete

    def current_waypoint_index(self) -> int:
        """Index of the current target.

        Returns:
            Current target index.
        """
        return self.sequence.current_index

    def _on_target_changed(self, event: TargetChanged) -> None:
        """Publish a new target to the controller.

        Args:
            event: Target change event.
        """
        pose = event.waypoint.pose
        if pose is None:
            return
        self._target = pose
        self.controller.set_target(pose)

    def _on_target_unavailable(self, event: TargetUnavailable) -> None:
        """Count a skipped publish.

        Args:
            event: Missing-target event.
        """
        self.publish_failures += 1
        logger.debug("Skipped target publish for waypoint %d", event.index)

    def _on_run_completed(self, event: RunCompleted) -> None:
        """Log run completion.

        Args:
            event: Completion event.
        """
        if event.looped:
            logger.info("Lap complete, wrapped to waypoint %d", event.index)
