"""Parametric curve models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from splinetrack.geometry import FloatArray
from splinetrack.utils.exceptions import CurveDataError

MIN_CONTROL_POINT_COUNT = 2
LENGTH_SAMPLES_PER_SEGMENT = 32


class Curve(Protocol):
    """Parametric path queryable at a normalized position ``t`` in ``[0, 1]``."""

    def evaluate(self, t: float) -> tuple[FloatArray, FloatArray]:
        """Evaluate world position and (unnormalized) tangent.

        Args:
            t: Normalized curve parameter in ``[0, 1]``.

        Returns:
            Tuple ``(position, tangent)``.
        """
        ...

    def length(self) -> float:
        """Total arc length of the curve.

        Returns:
            Curve length [m].
        """
        ...


def _validate_control_points(points: np.ndarray) -> np.ndarray:
    """Validate and normalize a control-point array.

    Args:
        points: Candidate control points.

    Returns:
        ``float64`` control-point array with shape ``(n, 3)``.

    Raises:
        splinetrack.utils.exceptions.CurveDataError: If the array is not
            ``(n, 3)``, has too few points, or contains non-finite values.
    """
    array = np.asarray(points, dtype=np.float64)
    if array.ndim != 2 or array.shape[1] != 3:
        msg = f"Control points must have shape (n, 3), got {array.shape}"
        raise CurveDataError(msg)
    if array.shape[0] < MIN_CONTROL_POINT_COUNT:
        msg = f"Curve must contain at least {MIN_CONTROL_POINT_COUNT} control points"
        raise CurveDataError(msg)
    if np.any(~np.isfinite(array)):
        msg = "Control points contain non-finite values"
        raise CurveDataError(msg)
    return array


def _segment_position(t: float, segment_count: int) -> tuple[int, float]:
    """Map a normalized parameter to a segment index and local parameter.

    Args:
        t: Normalized curve parameter in ``[0, 1]``.
        segment_count: Number of curve segments.

    Returns:
        Tuple ``(segment_index, local_t)`` with ``local_t`` in ``[0, 1]``.
    """
    scaled = float(t) * segment_count
    index = min(int(np.floor(scaled)), segment_count - 1)
    return index, scaled - index


@dataclass(frozen=True)
class PolylineCurve:
    """Piecewise-linear curve through control points.

    Each segment spans an equal share of the parameter range regardless of its
    length, so the parameterization is only arc-length uniform when all
    segments have the same length.

    Args:
        points: Control points with shape ``(n, 3)`` [m].
        closed: Whether the last point connects back to the first.
    """

    points: np.ndarray
    closed: bool = False

    def __post_init__(self) -> None:
        """Validate control points after construction."""
        object.__setattr__(self, "points", _validate_control_points(self.points))

    @property
    def _vertices(self) -> np.ndarray:
        """Vertex array including the closing point for closed curves.

        Returns:
            Vertex array with shape ``(m, 3)``.
        """
        if self.closed:
            return np.vstack([self.points, self.points[:1]])
        return self.points

    def evaluate(self, t: float) -> tuple[FloatArray, FloatArray]:
        """Evaluate position and segment direction.

        Args:
            t: Normalized curve parameter in ``[0, 1]``.

        Returns:
            Tuple ``(position, tangent)``.
        """
        vertices = self._vertices
        index, local = _segment_position(t, vertices.shape[0] - 1)
        start = vertices[index]
        delta = vertices[index + 1] - start
        return start + local * delta, delta.copy()

    def length(self) -> float:
        """Exact polyline length.

        Returns:
            Sum of segment lengths [m].
        """
        return float(np.sum(np.linalg.norm(np.diff(self._vertices, axis=0), axis=1)))


@dataclass(frozen=True)
class CatmullRomCurve:
    """Uniform Catmull-Rom spline passing through every control point.

    Open curves extrapolate one phantom point at each end so the spline starts
    and ends on the first and last control points.

    Args:
        points: Control points with shape ``(n, 3)`` [m].
        closed: Whether the spline wraps from the last point to the first.
        length_samples_per_segment: Chord samples per segment used to
            approximate arc length.
    """

    points: np.ndarray
    closed: bool = False
    length_samples_per_segment: int = LENGTH_SAMPLES_PER_SEGMENT
    _padded: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate control points and precompute the padded point array.

        Raises:
            splinetrack.utils.exceptions.CurveDataError: If the control points
                or length sampling density are invalid.
        """
        points = _validate_control_points(self.points)
        if self.length_samples_per_segment < 1:
            msg = "length_samples_per_segment must be at least 1"
            raise CurveDataError(msg)
        if self.closed:
            padded = np.vstack([points[-1:], points, points[:2]])
        else:
            head = 2.0 * points[0] - points[1]
            tail = 2.0 * points[-1] - points[-2]
            padded = np.vstack([head, points, tail])
        object.__setattr__(self, "points", points)
        object.__setattr__(self, "_padded", padded)

    @property
    def segment_count(self) -> int:
        """Number of spline segments.

        Returns:
            Segment count.
        """
        count = self.points.shape[0]
        return count if self.closed else count - 1

    def evaluate(self, t: float) -> tuple[FloatArray, FloatArray]:
        """Evaluate position and analytic tangent.

        Args:
            t: Normalized curve parameter in ``[0, 1]``.

        Returns:
            Tuple ``(position, tangent)``; the tangent is ``d position / d t``.
        """
        segments = self.segment_count
        index, u = _segment_position(t, segments)
        p0, p1, p2, p3 = self._padded[index : index + 4]

        a = 2.0 * p1
        b = p2 - p0
        c = 2.0 * p0 - 5.0 * p1 + 4.0 * p2 - p3
        d = -p0 + 3.0 * p1 - 3.0 * p2 + p3

        position = 0.5 * (a + b * u + c * u * u + d * u * u * u)
        derivative = 0.5 * (b + 2.0 * c * u + 3.0 * d * u * u)
        return position, derivative * segments

    def length(self) -> float:
        """Approximate arc length by piecewise-linear integration.

        Returns:
            Approximate curve length [m].
        """
        sample_count = self.segment_count * self.length_samples_per_segment + 1
        params = np.linspace(0.0, 1.0, sample_count)
        positions = np.array([self.evaluate(float(t))[0] for t in params])
        return float(np.sum(np.linalg.norm(np.diff(positions, axis=0), axis=1)))


@dataclass
class SplineContainer:
    """Named collection of curves; the first entry is the primary path.

    Args:
        splines: Curves held by the container.
        name: Display name used in log messages.
    """

    splines: list[Curve] = field(default_factory=list)
    name: str = "Spline"

    @property
    def primary(self) -> Curve | None:
        """First curve in the container.

        Returns:
            Primary curve, or ``None`` if the container is empty.
        """
        return self.splines[0] if self.splines else None
