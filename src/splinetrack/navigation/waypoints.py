"""Waypoint data model and waypoint list builders."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import numpy as np

from splinetrack.curve.io import read_point_csv
from splinetrack.curve.models import Curve
from splinetrack.curve.sampler import curve_length, sample_curve, uniform_parameters
from splinetrack.geometry import IDENTITY_ROTATION, FloatArray, VectorLike, as_vector, look_rotation
from splinetrack.scene.models import Entity, EntityTemplate, SceneGraph
from splinetrack.utils.exceptions import CurveDataError

logger = logging.getLogger(__name__)

DEFAULT_CURVE_WAYPOINT_COUNT = 2_000
DEFAULT_WAYPOINT_CONTAINER = "Waypoints"
WAYPOINT_TEMPLATE = EntityTemplate(name="Waypoint", renderable=True)


class WaypointState(Enum):
    """Visual highlight state of a waypoint."""

    NORMAL = "normal"
    ACTIVE = "active"


@dataclass(frozen=True)
class Pose:
    """World pose published as a drive target.

    Args:
        position: World position [m].
        orientation: Rotation quaternion ``(x, y, z, w)``.
    """

    position: FloatArray
    orientation: FloatArray = field(default_factory=lambda: IDENTITY_ROTATION.copy())


@dataclass(eq=False)
class Waypoint:
    """One ordered navigation target.

    Args:
        index: Traversal order, starting at ``0``.
        position: World position [m]; ``None`` marks a missing pose.
        orientation: Optional rotation quaternion ``(x, y, z, w)``.
        state: Current highlight state.
        entity: Optional render representation in the scene.
    """

    index: int
    position: FloatArray | None
    orientation: FloatArray | None = None
    state: WaypointState = WaypointState.NORMAL
    entity: Entity | None = None

    @property
    def pose(self) -> Pose | None:
        """Pose of the waypoint.

        Returns:
            Pose with identity orientation when none is set, or ``None`` for a
            missing position.
        """
        if self.position is None:
            return None
        if self.orientation is None:
            return Pose(position=self.position.copy())
        return Pose(position=self.position.copy(), orientation=self.orientation.copy())


def waypoints_from_positions(positions: Sequence[VectorLike | None]) -> list[Waypoint]:
    """Wrap externally supplied positions as an ordered waypoint list.

    Args:
        positions: Waypoint positions in traversal order; ``None`` entries keep
            their slot as a waypoint without a pose.

    Returns:
        Waypoints indexed in input order.
    """
    return [
        Waypoint(index=index, position=None if position is None else as_vector(position))
        for index, position in enumerate(positions)
    ]


def waypoints_from_curve(
    curve: Curve,
    sample_count: int = DEFAULT_CURVE_WAYPOINT_COUNT,
    scene: SceneGraph | None = None,
    container: Entity | None = None,
    template: EntityTemplate = WAYPOINT_TEMPLATE,
    visible: bool = False,
) -> list[Waypoint]:
    """Sample a curve uniformly in parameter into waypoints.

    Sample ``i`` is taken at ``t = i / (sample_count - 1)`` and faces along the
    curve tangent.

    Args:
        curve: Curve to sample.
        sample_count: Number of waypoints.
        scene: Optional scene; when given, each waypoint gets a render entity.
        container: Parent for the render entities; created when ``None``.
        template: Template used for the render entities.
        visible: Whether the generated render entities are shown.

    Returns:
        Waypoints in curve order.

    Raises:
        splinetrack.utils.exceptions.CurveDataError: If the curve has no
            length or ``sample_count`` is below one.
    """
    length = curve_length(curve)
    if not np.isfinite(length) or length <= 0.0:
        msg = f"Cannot generate waypoints on a degenerate curve (length {length})"
        raise CurveDataError(msg)

    params = uniform_parameters(sample_count)
    if scene is not None and container is None:
        container = scene.create_container(DEFAULT_WAYPOINT_CONTAINER)

    waypoints: list[Waypoint] = []
    for index, t in enumerate(params):
        sample = sample_curve(curve, float(t))
        orientation = look_rotation(sample.tangent)
        entity = None
        if scene is not None:
            entity = scene.instantiate(template, sample.position, orientation, container)
            entity.name = f"wp_{index}"
            entity.active = visible
        waypoints.append(
            Waypoint(index=index, position=sample.position, orientation=orientation, entity=entity)
        )

    container_name = container.name if container is not None else "<none>"
    logger.info("Loaded %d waypoints from curve into container '%s'", sample_count, container_name)
    return waypoints


def load_waypoints_csv(path: str | Path) -> list[Waypoint]:
    """Load waypoint positions from CSV.

    Args:
        path: Path to a CSV containing ``x``, ``y`` and ``z`` columns.

    Returns:
        Waypoints in file order.
    """
    points = read_point_csv(path)
    waypoints = waypoints_from_positions(list(points))
    logger.info("Loaded %d waypoints from %s", len(waypoints), path)
    return waypoints
