"""Shared vector and rotation helpers.

World space is right-handed with ``y`` pointing up. Rotations are unit
quaternions stored as ``(x, y, z, w)`` arrays.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Union

import numpy as np
import numpy.typing as npt

from splinetrack.utils.constants import SMALL_EPS

FloatArray = npt.NDArray[np.float64]
VectorLike = Union[Sequence[float], FloatArray]

UP = np.array([0.0, 1.0, 0.0], dtype=np.float64)
UP.setflags(write=False)
IDENTITY_ROTATION = np.array([0.0, 0.0, 0.0, 1.0], dtype=np.float64)
IDENTITY_ROTATION.setflags(write=False)
PARALLEL_UP_THRESHOLD = 0.9


def as_vector(values: VectorLike) -> FloatArray:
    """Convert a sequence into a float 3D vector.

    Args:
        values: Three coordinates.

    Returns:
        New ``float64`` array with shape ``(3,)``.

    Raises:
        ValueError: If ``values`` does not describe exactly three coordinates.
    """
    vector = np.array(values, dtype=np.float64)
    if vector.shape != (3,):
        msg = f"Expected a 3D vector, got shape {vector.shape}"
        raise ValueError(msg)
    return vector


def normalize(vector: VectorLike) -> FloatArray:
    """Scale a vector to unit length.

    Args:
        vector: Input vector.

    Returns:
        Unit vector, or the zero vector when the input is degenerate.
    """
    array = np.asarray(vector, dtype=np.float64)
    norm = float(np.linalg.norm(array))
    if norm < SMALL_EPS:
        return np.zeros_like(array)
    return array / norm


def lateral_directions(tangent: VectorLike, up: VectorLike = UP) -> tuple[FloatArray, FloatArray]:
    """Compute right and left lateral directions for a curve tangent.

    Args:
        tangent: Curve tangent at the sample.
        up: World up axis.

    Returns:
        Tuple ``(right, left)`` where ``right = normalize(cross(tangent, up))``.
    """
    right = normalize(np.cross(normalize(tangent), np.asarray(up, dtype=np.float64)))
    return right, -right


def distance(a: VectorLike, b: VectorLike) -> float:
    """Euclidean distance between two points.

    Args:
        a: First point.
        b: Second point.

    Returns:
        Distance between ``a`` and ``b``.
    """
    return float(np.linalg.norm(np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)))


def clamp01(value: float) -> float:
    """Clamp a scalar into ``[0, 1]``.

    Args:
        value: Input scalar.

    Returns:
        Clamped scalar.
    """
    return float(min(max(value, 0.0), 1.0))


def lerp(start: float, end: float, fraction: float) -> float:
    """Linearly interpolate between two scalars with a clamped fraction.

    Args:
        start: Value at ``fraction = 0``.
        end: Value at ``fraction = 1``.
        fraction: Interpolation fraction, clamped to ``[0, 1]``.

    Returns:
        Interpolated value.
    """
    return start + (end - start) * clamp01(fraction)


def quaternion_multiply(a: FloatArray, b: FloatArray) -> FloatArray:
    """Compose two rotations so that ``b`` is applied first, then ``a``.

    Args:
        a: Outer rotation quaternion ``(x, y, z, w)``.
        b: Inner rotation quaternion ``(x, y, z, w)``.

    Returns:
        Hamilton product ``a * b``.
    """
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return np.array(
        [
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
            aw * bw - ax * bx - ay * by - az * bz,
        ],
        dtype=np.float64,
    )


def axis_angle_quaternion(axis: VectorLike, angle_deg: float) -> FloatArray:
    """Build a rotation about an axis.

    Args:
        axis: Rotation axis, normalized internally.
        angle_deg: Rotation angle [deg].

    Returns:
        Unit quaternion ``(x, y, z, w)``.
    """
    half = 0.5 * np.deg2rad(angle_deg)
    xyz = normalize(axis) * np.sin(half)
    return np.array([xyz[0], xyz[1], xyz[2], np.cos(half)], dtype=np.float64)


def euler_to_quaternion(euler_deg: VectorLike) -> FloatArray:
    """Convert Euler angles to a quaternion.

    Rotation is applied about ``z`` first, then ``x``, then ``y``, which is the
    convention game editors use for inspector rotation offsets.

    Args:
        euler_deg: Rotation angles about ``x``, ``y`` and ``z`` [deg].

    Returns:
        Unit quaternion ``(x, y, z, w)``.
    """
    angles = as_vector(euler_deg)
    qx = axis_angle_quaternion((1.0, 0.0, 0.0), angles[0])
    qy = axis_angle_quaternion((0.0, 1.0, 0.0), angles[1])
    qz = axis_angle_quaternion((0.0, 0.0, 1.0), angles[2])
    return quaternion_multiply(quaternion_multiply(qy, qx), qz)


def _matrix_to_quaternion(matrix: FloatArray) -> FloatArray:
    """Convert a proper rotation matrix to a quaternion.

    Args:
        matrix: ``3x3`` rotation matrix.

    Returns:
        Unit quaternion ``(x, y, z, w)``.
    """
    m = matrix
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    if trace > 0.0:
        s = 2.0 * np.sqrt(trace + 1.0)
        quat = [
            (m[2, 1] - m[1, 2]) / s,
            (m[0, 2] - m[2, 0]) / s,
            (m[1, 0] - m[0, 1]) / s,
            0.25 * s,
        ]
    elif m[0, 0] > m[1, 1] and m[0, 0] > m[2, 2]:
        s = 2.0 * np.sqrt(1.0 + m[0, 0] - m[1, 1] - m[2, 2])
        quat = [
            0.25 * s,
            (m[0, 1] + m[1, 0]) / s,
            (m[0, 2] + m[2, 0]) / s,
            (m[2, 1] - m[1, 2]) / s,
        ]
    elif m[1, 1] > m[2, 2]:
        s = 2.0 * np.sqrt(1.0 + m[1, 1] - m[0, 0] - m[2, 2])
        quat = [
            (m[0, 1] + m[1, 0]) / s,
            0.25 * s,
            (m[1, 2] + m[2, 1]) / s,
            (m[0, 2] - m[2, 0]) / s,
        ]
    else:
        s = 2.0 * np.sqrt(1.0 + m[2, 2] - m[0, 0] - m[1, 1])
        quat = [
            (m[0, 2] + m[2, 0]) / s,
            (m[1, 2] + m[2, 1]) / s,
            0.25 * s,
            (m[1, 0] - m[0, 1]) / s,
        ]
    return normalize(np.asarray(quat, dtype=np.float64))


def look_rotation(forward: VectorLike, up: VectorLike = UP) -> FloatArray:
    """Build the rotation whose local ``+z`` axis points along ``forward``.

    Args:
        forward: Desired facing direction.
        up: Reference up axis used to fix roll.

    Returns:
        Unit quaternion ``(x, y, z, w)``; identity for a degenerate direction.
    """
    z_axis = normalize(forward)
    if not np.any(z_axis):
        return IDENTITY_ROTATION.copy()

    x_axis = normalize(np.cross(np.asarray(up, dtype=np.float64), z_axis))
    if not np.any(x_axis):
        # forward is parallel to up
        fallback = (0.0, 0.0, 1.0) if abs(z_axis[2]) < PARALLEL_UP_THRESHOLD else (1.0, 0.0, 0.0)
        x_axis = normalize(np.cross(np.asarray(fallback), z_axis))
    y_axis = np.cross(z_axis, x_axis)
    return _matrix_to_quaternion(np.column_stack([x_axis, y_axis, z_axis]))


def rotate_vector(rotation: FloatArray, vector: VectorLike) -> FloatArray:
    """Rotate a vector by a quaternion.

    Args:
        rotation: Unit quaternion ``(x, y, z, w)``.
        vector: Vector to rotate.

    Returns:
        Rotated vector.
    """
    v = np.asarray(vector, dtype=np.float64)
    u = np.asarray(rotation[:3], dtype=np.float64)
    w = float(rotation[3])
    t = 2.0 * np.cross(u, v)
    return v + w * t + np.cross(u, t)
