"""Barrier generation along the primary curve of a spline container."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from splinetrack.curve.models import Curve, SplineContainer
from splinetrack.curve.sampler import CurveSample, curve_length, sample_curve
from splinetrack.geometry import IDENTITY_ROTATION, FloatArray
from splinetrack.placement.config import BarrierPlacementConfig, Side
from splinetrack.placement.layout import (
    lateral_candidate,
    placement_interval_count,
    placement_parameters,
    placement_rotation,
    snap_to_ground,
)
from splinetrack.placement.preview import PreviewMarker, preview_barrier_positions
from splinetrack.scene.models import Entity, EntityTemplate, GroundQuery, SceneGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    """One barrier spawned by the engine.

    Args:
        entity: Spawned scene entity.
        side: Side of the curve the barrier sits on.
        sequence_index: Running index across both sides in spawn order.
        t: Curve parameter the barrier was derived from.
    """

    entity: Entity
    side: Side
    sequence_index: int
    t: float

    @property
    def position(self) -> FloatArray:
        """World position of the barrier.

        Returns:
            Entity position [m].
        """
        return self.entity.position

    @property
    def rotation(self) -> FloatArray:
        """World rotation of the barrier.

        Returns:
            Entity rotation quaternion ``(x, y, z, w)``.
        """
        return self.entity.rotation


@dataclass(frozen=True)
class PlacementReport:
    """Outcome of one generation batch.

    Args:
        placements: Barriers spawned in spawn order.
        sample_count: Number of curve parameters sampled.
        success_count: Number of barriers placed.
        failure_count: Number of candidates skipped because the ground was
            missed.
    """

    placements: tuple[Placement, ...]
    sample_count: int
    success_count: int
    failure_count: int

    @property
    def attempted(self) -> int:
        """Total candidates considered.

        Returns:
            Sum of successes and failures.
        """
        return self.success_count + self.failure_count


class BarrierPlacementEngine:
    """Spawn barriers on either side of a curve and track them for cleanup.

    Args:
        scene: Scene that owns spawned entities.
        template: Barrier prototype; generation is refused when ``None``.
        curves: Container whose first curve is followed.
        ground: Collision collaborator used for ground snapping.
        owner: Node the barrier container is created under.
        config: Placement settings.
    """

    def __init__(
        self,
        scene: SceneGraph,
        template: EntityTemplate | None = None,
        curves: SplineContainer | None = None,
        ground: GroundQuery | None = None,
        owner: Entity | None = None,
        config: BarrierPlacementConfig | None = None,
    ) -> None:
        """Create an engine with no spawned barriers.

        Args:
            scene: Scene that owns spawned entities.
            template: Barrier prototype.
            curves: Container whose first curve is followed.
            ground: Collision collaborator used for ground snapping.
            owner: Node the barrier container is created under.
            config: Placement settings.
        """
        self.config = config or BarrierPlacementConfig()
        self.config.validate()
        self.scene = scene
        self.template = template
        self.curves = curves
        self.ground = ground
        self.owner = owner
        self.container: Entity | None = None
        self.last_report: PlacementReport | None = None
        self._placements: list[Placement] = []
        self._busy = False

    @property
    def placements(self) -> list[Placement]:
        """Barriers spawned by the latest batch.

        Returns:
            Copy of the tracked placements.
        """
        return list(self._placements)

    @property
    def spawned(self) -> list[Entity]:
        """Entities spawned by the latest batch.

        Returns:
            Live barrier entities in spawn order.
        """
        return [placement.entity for placement in self._placements]

    def _resolve_curve(self) -> tuple[Curve, float] | None:
        """Check generation preconditions.

        Returns:
            Primary curve and its length, or ``None`` when a precondition
            fails. Failures are logged and leave all state untouched.
        """
        if self.curves is None:
            logger.error("Spline container not assigned!")
            return None
        if self.template is None:
            logger.error("Barrier template not assigned!")
            return None
        if self.config.ground.enabled and self.ground is None:
            logger.error("Ground snapping enabled but no ground query assigned!")
            return None
        curve = self.curves.primary
        if curve is None:
            logger.error("No spline found in container '%s'!", self.curves.name)
            return None
        length = curve_length(curve)
        if not length > 0.0:
            logger.error("Spline '%s' has no length!", self.curves.name)
            return None
        return curve, length

    def generate_barriers(self) -> PlacementReport | None:
        """Replace all previously spawned barriers with a fresh batch.

        Returns:
            Batch report, or ``None`` when a precondition failed or a batch is
            already running.
        """
        if self._busy:
            logger.warning("Barrier generation already in progress")
            return None
        resolved = self._resolve_curve()
        if resolved is None:
            return None
        curve, length = resolved

        self._busy = True
        try:
            self._clear()
            container = self._ensure_container()
            parameters = placement_parameters(length, self.config.spacing)
            logger.info(
                "Generating %d barriers along spline (length: %.2f units)",
                placement_interval_count(length, self.config.spacing),
                length,
            )

            success_count = 0
            failure_count = 0
            for t in parameters:
                sample = sample_curve(curve, float(t))
                for side in self.config.enabled_sides:
                    if self._place(sample, side, container) is None:
                        failure_count += 1
                    else:
                        success_count += 1

            report = PlacementReport(
                placements=tuple(self._placements),
                sample_count=len(parameters),
                success_count=success_count,
                failure_count=failure_count,
            )
            logger.info(
                "Barrier generation complete! Success: %d, Failed: %d",
                success_count,
                failure_count,
            )
            self.last_report = report
            return report
        finally:
            self._busy = False

    def clear_barriers(self) -> int:
        """Destroy every barrier spawned by this engine.

        Returns:
            Number of entities destroyed, or ``0`` while a batch is running.
        """
        if self._busy:
            logger.warning("Cannot clear barriers while generation is in progress")
            return 0
        return self._clear()

    def preview(self) -> list[PreviewMarker]:
        """Compute preview markers without touching the scene.

        Returns:
            Preview markers for every enabled side.
        """
        return preview_barrier_positions(self.curves, self.config, self.ground)

    def _clear(self) -> int:
        """Destroy tracked barriers and any leftovers in the container.

        Returns:
            Number of entities destroyed.
        """
        destroyed = 0
        for placement in self._placements:
            if placement.entity.alive:
                self.scene.destroy(placement.entity)
                destroyed += 1
        self._placements.clear()

        if self.container is not None and self.container.alive:
            for child in reversed(self.scene.children(self.container)):
                self.scene.destroy(child)
                destroyed += 1
        logger.info("All barriers cleared!")
        return destroyed

    def _ensure_container(self) -> Entity:
        """Return the barrier container, creating it if needed.

        Returns:
            Live container entity.
        """
        if self.container is None or not self.container.alive:
            self.container = self.scene.create_container(self.config.container_name, parent=self.owner)
        return self.container

    def _place(self, sample: CurveSample, side: Side, container: Entity) -> Placement | None:
        """Spawn one barrier beside a curve sample.

        Args:
            sample: Curve sample with lateral frame.
            side: Side to place on.
            container: Parent node for the new entity.

        Returns:
            New placement, or ``None`` when ground snapping missed.
        """
        position = lateral_candidate(sample, side, self.config.offset_distance)
        if self.config.ground.enabled:
            snapped = snap_to_ground(position, self.ground, self.config.ground)
            if snapped is None:
                logger.warning(
                    "Failed to find ground at position (%.2f, %.2f, %.2f). Barrier not placed.",
                    position[0],
                    position[1],
                    position[2],
                )
                return None
            position = snapped

        if self.config.auto_rotate:
            rotation = placement_rotation(sample, self.config.rotation_mode, self.config.rotation_offset)
        else:
            rotation = IDENTITY_ROTATION.copy()

        sequence_index = len(self._placements)
        entity = self.scene.instantiate(self.template, position, rotation, parent=container)
        entity.name = f"Barrier_{side.value}_{sequence_index}"
        entity.tags.update({"side": side.value, "index": str(sequence_index), "t": f"{sample.t:.6f}"})
        placement = Placement(entity=entity, side=side, sequence_index=sequence_index, t=sample.t)
        self._placements.append(placement)
        return placement
