"""Checkpoint tracking and tick-driven respawn freeze."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

import numpy as np

from splinetrack.geometry import FloatArray, VectorLike, as_vector
from splinetrack.navigation.waypoints import Pose
from splinetrack.utils.constants import SMALL_EPS
from splinetrack.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_FREEZE_TIME = 2.0


class RespawnPhase(Enum):
    """Respawn state machine phases."""

    READY = "ready"
    FROZEN = "frozen"


class RespawnBody(Protocol):
    """Vehicle that can be teleported and frozen."""

    def teleport(self, pose: Pose) -> None:
        """Move instantly to a pose.

        Args:
            pose: Destination pose.
        """
        ...

    def set_enabled(self, enabled: bool) -> None:
        """Enable or freeze the vehicle.

        Args:
            enabled: ``False`` freezes the vehicle.
        """
        ...


def freeze_ticks_for(step: float, freeze_time: float = DEFAULT_FREEZE_TIME) -> int:
    """Convert a freeze duration into a whole number of ticks.

    Args:
        step: Simulation step [s].
        freeze_time: Freeze duration [s].

    Returns:
        Number of ticks, rounded up.

    Raises:
        splinetrack.utils.exceptions.ConfigurationError: If ``freeze_time`` is
            negative or ``step`` is not positive.
    """
    if freeze_time < 0.0:
        msg = "freeze_time must be non-negative"
        raise ConfigurationError(msg)
    if step <= 0.0:
        msg = "step must be positive"
        raise ConfigurationError(msg)
    return int(math.ceil(freeze_time / step - SMALL_EPS))


class RespawnSystem:
    """Return a vehicle to its last checkpoint and hold it for a few ticks.

    Phases run ``READY -> FROZEN(ticks_remaining) -> READY``. Respawn requests
    while frozen are rejected.

    Args:
        body: Vehicle to move and freeze.
        spawn_pose: Initial checkpoint.
        freeze_ticks: Ticks the vehicle stays frozen after a respawn.
        allow_manual: Whether manual (player) requests are honoured.
    """

    def __init__(
        self,
        body: RespawnBody,
        spawn_pose: Pose,
        freeze_ticks: int,
        allow_manual: bool = True,
    ) -> None:
        """Create a ready respawn system.

        Args:
            body: Vehicle to move and freeze.
            spawn_pose: Initial checkpoint.
            freeze_ticks: Ticks the vehicle stays frozen after a respawn.
            allow_manual: Whether manual requests are honoured.

        Raises:
            splinetrack.utils.exceptions.ConfigurationError: If
                ``freeze_ticks`` is negative.
        """
        if freeze_ticks < 0:
            msg = "freeze_ticks must be non-negative"
            raise ConfigurationError(msg)
        self.body = body
        self.checkpoint = spawn_pose
        self.freeze_ticks = int(freeze_ticks)
        self.allow_manual = allow_manual
        self.phase = RespawnPhase.READY
        self.ticks_remaining = 0

    def is_frozen(self) -> bool:
        """Whether the vehicle is currently held.

        Returns:
            ``True`` in the ``FROZEN`` phase.
        """
        return self.phase is RespawnPhase.FROZEN

    def set_checkpoint(self, pose: Pose) -> None:
        """Store a new respawn pose.

        Args:
            pose: Checkpoint pose.
        """
        self.checkpoint = pose
        logger.info("Checkpoint saved at %s", np.round(pose.position, 3).tolist())

    def request_respawn(self, manual: bool = False) -> bool:
        """Teleport to the last checkpoint and freeze.

        Args:
            manual: Whether the request comes from player input.

        Returns:
            ``True`` if the respawn started.
        """
        if manual and not self.allow_manual:
            logger.debug("Manual respawn ignored")
            return False
        if self.is_frozen():
            logger.warning("Already respawning!")
            return False

        self.body.teleport(self.checkpoint)
        self.body.set_enabled(False)
        self.phase = RespawnPhase.FROZEN
        self.ticks_remaining = self.freeze_ticks
        logger.info("Respawned at checkpoint, frozen for %d ticks", self.freeze_ticks)
        return True

    def tick(self) -> None:
        """Count down the freeze and release the vehicle when it ends."""
        if not self.is_frozen():
            return
        self.ticks_remaining -= 1
        if self.ticks_remaining > 0:
            return
        self.ticks_remaining = 0
        self.body.set_enabled(True)
        self.phase = RespawnPhase.READY
        logger.info("Vehicle unfrozen")


@dataclass
class CheckpointTrigger:
    """Axis-aligned trigger volume that records a checkpoint on entry.

    Args:
        index: Checkpoint order index.
        pose: Pose stored as the respawn point.
        half_extents: Half size of the trigger box along each axis [m].
    """

    index: int
    pose: Pose
    half_extents: FloatArray = field(default_factory=lambda: np.full(3, 5.0))
    _inside: bool = field(default=False, init=False, repr=False)

    def contains(self, position: VectorLike) -> bool:
        """Test whether a point lies inside the trigger box.

        Args:
            position: Point to test [m].

        Returns:
            ``True`` when inside or on the boundary.
        """
        offset = np.abs(as_vector(position) - np.asarray(self.pose.position, dtype=np.float64))
        return bool(np.all(offset <= np.asarray(self.half_extents, dtype=np.float64)))

    def update(self, position: VectorLike, respawn: RespawnSystem) -> bool:
        """Record the checkpoint when a vehicle enters the volume.

        Args:
            position: Vehicle position [m].
            respawn: Respawn system that stores the checkpoint.

        Returns:
            ``True`` on the tick the vehicle enters.
        """
        inside = self.contains(position)
        entered = inside and not self._inside
        self._inside = inside
        if entered:
            respawn.set_checkpoint(self.pose)
            logger.info("Checkpoint %d reached!", self.index)
        return entered
