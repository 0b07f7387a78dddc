"""Per-sample placement geometry shared by generation and preview."""

from __future__ import annotations

import math

import numpy as np

from splinetrack.curve.sampler import CurveSample, uniform_parameters
from splinetrack.geometry import (
    IDENTITY_ROTATION,
    UP,
    FloatArray,
    euler_to_quaternion,
    look_rotation,
    quaternion_multiply,
)
from splinetrack.placement.config import GroundSnapConfig, RotationMode, Side
from splinetrack.scene.models import GroundQuery


def placement_interval_count(length: float, spacing: float) -> int:
    """Number of spacing intervals along a curve.

    Args:
        length: Curve length [m].
        spacing: Target sample spacing [m].

    Returns:
        ``ceil(length / spacing)``.
    """
    return int(math.ceil(length / spacing))


def placement_parameters(length: float, spacing: float) -> FloatArray:
    """Curve parameters sampled for placement.

    Samples are uniform in curve parameter, not arc length, so real-world
    spacing varies on curves with uneven parameterization.

    Args:
        length: Curve length [m].
        spacing: Target sample spacing [m].

    Returns:
        Parameters ``t_i = i / count`` for ``i = 0..count``.
    """
    return uniform_parameters(placement_interval_count(length, spacing) + 1)


def lateral_candidate(sample: CurveSample, side: Side, offset_distance: float) -> FloatArray:
    """Offset a curve sample sideways.

    Args:
        sample: Curve sample with lateral frame.
        side: Side to offset toward.
        offset_distance: Lateral distance [m].

    Returns:
        Candidate position before ground snapping [m].
    """
    direction = sample.left if side is Side.LEFT else sample.right
    return sample.position + direction * offset_distance


def snap_to_ground(
    candidate: FloatArray,
    ground: GroundQuery,
    config: GroundSnapConfig,
) -> FloatArray | None:
    """Rest a candidate on the ground below it.

    Args:
        candidate: Candidate position [m].
        ground: Ground query collaborator.
        config: Ray settings.

    Returns:
        Hit point raised by ``ground_offset``, or ``None`` when the ray misses.
    """
    origin = candidate + UP * config.raycast_height
    hit = ground.cast_down(origin, config.raycast_distance, config.layer_mask)
    if hit is None:
        return None
    return np.asarray(hit, dtype=np.float64) + UP * config.ground_offset


def placement_rotation(
    sample: CurveSample,
    mode: RotationMode,
    rotation_offset: tuple[float, float, float],
) -> FloatArray:
    """Orientation of a barrier at a curve sample.

    Args:
        sample: Curve sample with lateral frame.
        mode: Orientation rule.
        rotation_offset: Extra Euler rotation ``(x, y, z)`` [deg], applied
            after the base rotation in local space.

    Returns:
        Rotation quaternion ``(x, y, z, w)``.
    """
    if mode is RotationMode.PARALLEL:
        base = look_rotation(sample.tangent, UP)
    elif mode is RotationMode.PERPENDICULAR:
        base = look_rotation(sample.right, UP)
    else:
        base = IDENTITY_ROTATION
    return quaternion_multiply(base, euler_to_quaternion(rotation_offset))
