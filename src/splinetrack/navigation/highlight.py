"""Material highlighting of the current target waypoint."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from splinetrack.navigation.state import TargetChanged, WaypointReleased
from splinetrack.navigation.waypoints import Waypoint, WaypointState
from splinetrack.scene.models import Entity, SceneGraph

logger = logging.getLogger(__name__)


class WaypointHighlighter:
    """Keeps waypoint highlight flags and renderer materials in sync.

    Highlight flags are always tracked. Materials are only assigned when the
    highlighter is enabled and a scene is available.

    Args:
        scene: Scene that applies materials; ``None`` disables assignment.
        normal_material: Material for non-target waypoints.
        active_material: Material for the current target.
        enabled: Whether to assign materials at all.
    """

    def __init__(
        self,
        scene: SceneGraph | None,
        normal_material: str | None,
        active_material: str | None,
        enabled: bool = True,
    ) -> None:
        """Create a highlighter with no bound waypoints.

        Args:
            scene: Scene that applies materials.
            normal_material: Material for non-target waypoints.
            active_material: Material for the current target.
            enabled: Whether to assign materials at all.
        """
        self.scene = scene
        self.normal_material = normal_material
        self.active_material = active_material
        self.enabled = enabled and scene is not None
        self._waypoints: list[Waypoint] = []
        self._renderers: list[Entity | None] = []

    def bind(self, waypoints: Sequence[Waypoint]) -> None:
        """Cache renderers for a waypoint list and reset every highlight.

        Args:
            waypoints: Waypoints now driven by the navigator.
        """
        self._waypoints = list(waypoints)
        for waypoint in self._waypoints:
            waypoint.state = WaypointState.NORMAL

        self._renderers = []
        for waypoint in self._waypoints:
            entity = waypoint.entity
            if entity is not None and not entity.renderable:
                logger.warning("Waypoint %d (%s) has no renderer!", waypoint.index, entity.name)
                entity = None
            self._renderers.append(entity)

        if not self.enabled:
            return
        if self.normal_material is None:
            logger.warning("Normal waypoint material not assigned!")
            return
        for index in range(len(self._renderers)):
            self._assign(index, self.normal_material)

    def on_target_changed(self, event: TargetChanged) -> None:
        """Highlight the new target.

        Args:
            event: Target change event.
        """
        self._apply(event.index, WaypointState.ACTIVE)

    def on_waypoint_released(self, event: WaypointReleased) -> None:
        """Return a released waypoint to the normal look.

        Args:
            event: Release event.
        """
        self._apply(event.index, WaypointState.NORMAL)

    def _apply(self, index: int, state: WaypointState) -> None:
        """Set one waypoint's highlight flag and material.

        Args:
            index: Waypoint index.
            state: New highlight state.
        """
        if not 0 <= index < len(self._waypoints):
            return
        self._waypoints[index].state = state
        if not self.enabled:
            return
        material = self.active_material if state is WaypointState.ACTIVE else self.normal_material
        if material is not None:
            self._assign(index, material)

    def _assign(self, index: int, material: str) -> None:
        """Assign a material to a cached renderer if it is still alive.

        Args:
            index: Waypoint index.
            material: Material handle.
        """
        entity = self._renderers[index] if index < len(self._renderers) else None
        if entity is None or not entity.alive or self.scene is None:
            return
        self.scene.set_material(entity, material)
