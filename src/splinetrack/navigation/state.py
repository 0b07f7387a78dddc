"""Waypoint sequence state machine and its transition events."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from splinetrack.navigation.waypoints import Waypoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigatorState:
    """Snapshot of sequence progress.

    Args:
        current_index: Index of the current target; equals the waypoint count
            after a non-looping run finishes.
        complete: Whether the run has finished.
        loop: Whether the sequence wraps after the last waypoint.
    """

    current_index: int
    complete: bool
    loop: bool


@dataclass(frozen=True)
class TargetChanged:
    """A waypoint became the current target.

    Args:
        index: Waypoint index.
        waypoint: New target waypoint.
    """

    index: int
    waypoint: Waypoint


@dataclass(frozen=True)
class TargetUnavailable:
    """The next target has no pose and could not be published.

    Args:
        index: Waypoint index.
    """

    index: int


@dataclass(frozen=True)
class WaypointReleased:
    """A waypoint stopped being the current target.

    Args:
        index: Waypoint index.
    """

    index: int


@dataclass(frozen=True)
class RunCompleted:
    """The sequence passed its last waypoint.

    Args:
        index: Index left in place after completion.
        looped: Whether the sequence wrapped to the first waypoint.
    """

    index: int
    looped: bool


class WaypointSequence:
    """Ordered waypoint traversal with ``ACTIVE(i)`` and ``COMPLETE`` states.

    The sequence only tracks indices and emits events. Highlighting and drive
    targets are handled by listeners registered through :meth:`subscribe`.

    Args:
        loop: Whether to wrap to the first waypoint after the last one. A
            wrap also marks the run complete.
    """

    def __init__(self, loop: bool = True) -> None:
        """Create an empty sequence.

        Args:
            loop: Whether to wrap after the last waypoint.
        """
        self.loop = loop
        self._waypoints: list[Waypoint] = []
        self._index = 0
        self._complete = False
        self._listeners: dict[type, list[Callable[[Any], None]]] = defaultdict(list)

    def subscribe(self, event_type: type, callback: Callable[[Any], None]) -> None:
        """Register a callback for one event type.

        Args:
            event_type: Event class such as :class:`TargetChanged`.
            callback: Callable invoked with the event instance.
        """
        self._listeners[event_type].append(callback)

    def _emit(self, event: object) -> None:
        """Dispatch an event to its listeners in registration order.

        Args:
            event: Event instance.
        """
        for callback in list(self._listeners[type(event)]):
            callback(event)

    @property
    def waypoints(self) -> list[Waypoint]:
        """Waypoints in traversal order.

        Returns:
            Copy of the waypoint list.
        """
        return list(self._waypoints)

    @property
    def current_index(self) -> int:
        """Current target index.

        Returns:
            Target index.
        """
        return self._index

    @property
    def complete(self) -> bool:
        """Whether the run has finished.

        Returns:
            Completion flag.
        """
        return self._complete

    @property
    def state(self) -> NavigatorState:
        """Immutable progress snapshot.

        Returns:
            Current state.
        """
        return NavigatorState(current_index=self._index, complete=self._complete, loop=self.loop)

    @property
    def current_waypoint(self) -> Waypoint | None:
        """Current target waypoint.

        Returns:
            Waypoint at the current index, or ``None`` when the index is out of
            range.
        """
        if 0 <= self._index < len(self._waypoints):
            return self._waypoints[self._index]
        return None

    def replace(self, waypoints: Sequence[Waypoint]) -> None:
        """Swap the waypoint list without publishing anything.

        Args:
            waypoints: New waypoints in traversal order.
        """
        self._waypoints = list(waypoints)
        self._index = 0
        self._complete = False

    def start(self) -> bool:
        """Enter ``ACTIVE(0)`` and publish the first target.

        Returns:
            ``False`` when there are no waypoints.
        """
        if not self._waypoints:
            return False
        self._index = 0
        self._complete = False
        self._publish_current()
        return True

    def advance(self) -> None:
        """Move past the current waypoint.

        Past the end, a looping sequence wraps to index ``0``, republishes it
        and reports completion; a non-looping sequence reports completion,
        keeps the out-of-range index and publishes nothing further.
        """
        if self._complete or not self._waypoints:
            return

        self._emit(WaypointReleased(index=self._index))
        self._index += 1

        if self._index >= len(self._waypoints):
            self._complete = True
            if not self.loop:
                logger.info("All waypoints reached!")
                self._emit(RunCompleted(index=self._index, looped=False))
                return
            self._index = 0
            self._publish_current()
            self._emit(RunCompleted(index=self._index, looped=True))
            return

        self._publish_current()

    def reset(self) -> bool:
        """Return to ``ACTIVE(0)`` from any state.

        Returns:
            ``False`` when there are no waypoints.
        """
        if not self._waypoints:
            return False
        if 0 <= self._index < len(self._waypoints):
            self._emit(WaypointReleased(index=self._index))
        return self.start()

    def _publish_current(self) -> None:
        """Emit the current waypoint as target, or report it as missing."""
        waypoint = self._waypoints[self._index]
        if waypoint.position is None:
            logger.error("Waypoint %d is null!", self._index)
            self._emit(TargetUnavailable(index=self._index))
            return
        logger.debug("Moving to waypoint %d", self._index)
        self._emit(TargetChanged(index=self._index, waypoint=waypoint))
