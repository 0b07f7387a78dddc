"""Synthetic curve layout builders for tooling scenarios and tests."""

from __future__ import annotations

import numpy as np

from splinetrack.curve.models import CatmullRomCurve, PolylineCurve
from splinetrack.utils.exceptions import CurveDataError

DEFAULT_STRAIGHT_LENGTH = 100.0
DEFAULT_CIRCLE_RADIUS = 50.0
DEFAULT_CIRCLE_CONTROL_COUNT = 16
DEFAULT_FIGURE_EIGHT_RADIUS = 80.0
DEFAULT_FIGURE_EIGHT_CONTROL_COUNT = 24
MIN_LOOP_CONTROL_COUNT = 4


def _validate_positive(name: str, value: float) -> None:
    """Validate that a scalar parameter is strictly positive.

    Args:
        name: Parameter name used in error messages.
        value: Parameter value to validate.

    Raises:
        splinetrack.utils.exceptions.CurveDataError: If ``value`` is not
            strictly positive.
    """
    if value <= 0.0:
        msg = f"{name} must be positive"
        raise CurveDataError(msg)


def _validate_control_count(control_count: int) -> None:
    """Validate the control point count of a closed layout.

    Args:
        control_count: Number of control points around the loop.

    Raises:
        splinetrack.utils.exceptions.CurveDataError: If ``control_count`` is
            below the minimum required count.
    """
    if control_count < MIN_LOOP_CONTROL_COUNT:
        msg = f"control_count must be at least {MIN_LOOP_CONTROL_COUNT}"
        raise CurveDataError(msg)


def build_straight_curve(
    length: float = DEFAULT_STRAIGHT_LENGTH,
    height: float = 0.0,
    direction: tuple[float, float, float] = (1.0, 0.0, 0.0),
) -> PolylineCurve:
    """Build a straight two-point curve starting at the origin.

    Args:
        length: Curve length [m].
        height: Constant ``y`` coordinate [m].
        direction: Horizontal travel direction, normalized internally.

    Returns:
        Straight polyline with exact length.

    Raises:
        splinetrack.utils.exceptions.CurveDataError: If ``length`` is not
            positive or ``direction`` is degenerate.
    """
    _validate_positive("length", length)
    heading = np.asarray(direction, dtype=np.float64)
    norm = float(np.linalg.norm(heading))
    if norm == 0.0:
        msg = "direction must be non-zero"
        raise CurveDataError(msg)

    start = np.array([0.0, float(height), 0.0])
    end = start + heading / norm * float(length)
    return PolylineCurve(points=np.vstack([start, end]))


def build_circular_curve(
    radius: float = DEFAULT_CIRCLE_RADIUS,
    control_count: int = DEFAULT_CIRCLE_CONTROL_COUNT,
    clockwise: bool = False,
    height: float = 0.0,
) -> CatmullRomCurve:
    """Build a closed circular spline in the ground plane.

    Args:
        radius: Circle radius [m].
        control_count: Number of control points around the circle.
        clockwise: Whether to traverse the circle clockwise seen from above.
        height: Constant ``y`` coordinate [m].

    Returns:
        Closed Catmull-Rom curve approximating the circle.

    Raises:
        splinetrack.utils.exceptions.CurveDataError: If geometric input values
            are outside valid bounds.
    """
    _validate_positive("radius", radius)
    _validate_control_count(control_count)

    angle = np.linspace(0.0, 2.0 * np.pi, int(control_count), endpoint=False)
    if clockwise:
        angle = -angle

    points = np.column_stack(
        [
            float(radius) * np.cos(angle),
            np.full_like(angle, float(height)),
            float(radius) * np.sin(angle),
        ]
    )
    return CatmullRomCurve(points=points, closed=True)


def build_figure_eight_curve(
    lobe_radius: float = DEFAULT_FIGURE_EIGHT_RADIUS,
    control_count: int = DEFAULT_FIGURE_EIGHT_CONTROL_COUNT,
    height: float = 0.0,
) -> CatmullRomCurve:
    """Build a closed figure-eight spline using a Gerono lemniscate.

    Args:
        lobe_radius: Characteristic lobe radius scaling the layout [m].
        control_count: Number of control points along the loop.
        height: Constant ``y`` coordinate [m].

    Returns:
        Closed Catmull-Rom curve through the lemniscate samples.

    Raises:
        splinetrack.utils.exceptions.CurveDataError: If geometric input values
            are outside valid bounds.
    """
    _validate_positive("lobe_radius", lobe_radius)
    _validate_control_count(control_count)

    angle = np.linspace(0.0, 2.0 * np.pi, int(control_count), endpoint=False)
    points = np.column_stack(
        [
            float(lobe_radius) * np.sin(angle),
            np.full_like(angle, float(height)),
            0.5 * float(lobe_radius) * np.sin(2.0 * angle),
        ]
    )
    return CatmullRomCurve(points=points, closed=True)
