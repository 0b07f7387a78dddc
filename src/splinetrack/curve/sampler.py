"""Stateless curve sampling helpers shared by navigation and placement."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from splinetrack.curve.models import Curve
from splinetrack.geometry import UP, FloatArray, VectorLike, lateral_directions, normalize
from splinetrack.utils.exceptions import CurveDataError


@dataclass(frozen=True)
class CurveSample:
    """Position, tangent and lateral frame at one curve parameter.

    Args:
        t: Normalized curve parameter.
        position: World-space position [m].
        tangent: Unit tangent direction.
        right: Unit right-lateral direction ``normalize(cross(tangent, up))``.
        left: Unit left-lateral direction, the negated right direction.
    """

    t: float
    position: FloatArray
    tangent: FloatArray
    right: FloatArray
    left: FloatArray


def evaluate(curve: Curve, t: float) -> tuple[FloatArray, FloatArray]:
    """Evaluate a curve position and unit tangent.

    Args:
        curve: Curve to evaluate.
        t: Normalized curve parameter in ``[0, 1]``.

    Returns:
        Tuple ``(position, unit_tangent)``.

    Raises:
        splinetrack.utils.exceptions.CurveDataError: If ``t`` is outside
            ``[0, 1]``.
    """
    if not 0.0 <= t <= 1.0:
        msg = f"Curve parameter must lie in [0, 1], got {t}"
        raise CurveDataError(msg)
    position, tangent = curve.evaluate(float(t))
    return np.asarray(position, dtype=np.float64), normalize(tangent)


def curve_length(curve: Curve) -> float:
    """Total curve length.

    Args:
        curve: Curve to measure.

    Returns:
        Curve length [m], possibly approximate.
    """
    return float(curve.length())


def sample_curve(curve: Curve, t: float, up: VectorLike = UP) -> CurveSample:
    """Evaluate one curve sample including its lateral frame.

    Args:
        curve: Curve to evaluate.
        t: Normalized curve parameter in ``[0, 1]``.
        up: World up axis used for the lateral directions.

    Returns:
        Complete curve sample.
    """
    position, tangent = evaluate(curve, t)
    right, left = lateral_directions(tangent, up)
    return CurveSample(t=float(t), position=position, tangent=tangent, right=right, left=left)


def uniform_parameters(count: int) -> FloatArray:
    """Build ``count`` parameters spaced uniformly over ``[0, 1]``.

    Args:
        count: Number of parameters, at least one.

    Returns:
        Parameters ``t_i = i / (count - 1)``; ``[0.0]`` for a single sample.

    Raises:
        splinetrack.utils.exceptions.CurveDataError: If ``count`` is below one.
    """
    if count < 1:
        msg = "Sample count must be at least 1"
        raise CurveDataError(msg)
    if count == 1:
        return np.zeros(1, dtype=np.float64)
    return np.arange(count, dtype=np.float64) / float(count - 1)


def sample_positions(curve: Curve, count: int) -> FloatArray:
    """Sample curve positions uniformly in parameter.

    Args:
        curve: Curve to sample.
        count: Number of samples.

    Returns:
        Position array with shape ``(count, 3)`` [m].
    """
    return np.array([evaluate(curve, float(t))[0] for t in uniform_parameters(count)])
