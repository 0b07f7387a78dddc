"""Fixed-step navigation runs for previews, analysis and tests."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from splinetrack.navigation.controller import KinematicDriveController
from splinetrack.navigation.navigator import WaypointNavigator
from splinetrack.utils.exceptions import ConfigurationError

DEFAULT_STEP = 0.02
DEFAULT_MAX_STEPS = 50_000


@dataclass(frozen=True)
class NavigationRunResult:
    """Per-tick traces of a simulated navigation run.

    Args:
        positions: Agent positions before the first tick and after each tick
            [m], shape ``(steps + 1, 3)``.
        speed_caps: Controller speed cap after each tick.
        target_indices: Navigator target index after each tick.
        step: Simulation step [s].
        completed: Whether the navigator reported completion.
    """

    positions: np.ndarray
    speed_caps: np.ndarray
    target_indices: np.ndarray
    step: float
    completed: bool

    @property
    def steps(self) -> int:
        """Number of simulated ticks.

        Returns:
            Tick count.
        """
        return int(self.speed_caps.size)

    @property
    def elapsed_time(self) -> float:
        """Simulated duration.

        Returns:
            Elapsed time [s].
        """
        return self.steps * self.step

    @property
    def distance_travelled(self) -> float:
        """Path length driven by the agent.

        Returns:
            Travelled distance [m].
        """
        return float(np.sum(np.linalg.norm(np.diff(self.positions, axis=0), axis=1)))


def simulate_navigation(
    navigator: WaypointNavigator,
    controller: KinematicDriveController,
    step: float = DEFAULT_STEP,
    max_steps: int = DEFAULT_MAX_STEPS,
    stop_on_complete: bool = True,
) -> NavigationRunResult:
    """Tick a navigator and a kinematic controller at a fixed step.

    Each tick runs the navigator first, then moves the controller.

    Args:
        navigator: Initialized navigator driving ``controller``.
        controller: Controller that moves the agent.
        step: Simulation step [s].
        max_steps: Upper bound on simulated ticks.
        stop_on_complete: Stop as soon as the navigator reports completion.

    Returns:
        Traces of the run.

    Raises:
        splinetrack.utils.exceptions.ConfigurationError: If ``step`` or
            ``max_steps`` is not positive.
    """
    if step <= 0.0:
        msg = "step must be positive"
        raise ConfigurationError(msg)
    if max_steps < 1:
        msg = "max_steps must be at least 1"
        raise ConfigurationError(msg)

    positions = [controller.current_position()]
    speed_caps: list[float] = []
    target_indices: list[int] = []

    for _ in range(max_steps):
        navigator.tick()
        controller.step(step)
        positions.append(controller.current_position())
        speed_caps.append(controller.speed_cap)
        target_indices.append(navigator.current_waypoint_index())
        if stop_on_complete and navigator.is_complete():
            break

    return NavigationRunResult(
        positions=np.asarray(positions, dtype=np.float64),
        speed_caps=np.asarray(speed_caps, dtype=np.float64),
        target_indices=np.asarray(target_indices, dtype=np.int64),
        step=float(step),
        completed=navigator.is_complete(),
    )
