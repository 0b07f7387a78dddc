"""Unit tests for curve models and stateless curve sampling."""

from __future__ import annotations

import unittest

import numpy as np

from splinetrack.curve import (
    CatmullRomCurve,
    PolylineCurve,
    SplineContainer,
    curve_length,
    evaluate,
    sample_curve,
    sample_positions,
    uniform_parameters,
)
from splinetrack.curve.layouts import build_circular_curve
from splinetrack.utils.exceptions import CurveDataError


class PolylineCurveTests(unittest.TestCase):
    """Validate piecewise-linear curves."""

    def test_length_is_exact_and_includes_closing_segment(self) -> None:
        """Sum segment lengths, adding the wrap segment for closed curves."""
        square = np.array([[0.0, 0.0, 0.0], [10.0, 0.0, 0.0], [10.0, 0.0, 10.0], [0.0, 0.0, 10.0]])
        self.assertAlmostEqual(PolylineCurve(points=square).length(), 30.0)
        self.assertAlmostEqual(PolylineCurve(points=square, closed=True).length(), 40.0)

    def test_parameter_is_uniform_per_segment_not_per_meter(self) -> None:
        """Give each segment an equal share of the parameter range."""
        points = np.array([[0.0, 0.0, 0.0], [10.0, 0.0, 0.0], [10.0, 0.0, 30.0]])
        position, tangent = PolylineCurve(points=points).evaluate(0.5)
        np.testing.assert_allclose(position, [10.0, 0.0, 0.0], atol=1e-12)
        np.testing.assert_allclose(evaluate(PolylineCurve(points=points), 0.25)[1], [1.0, 0.0, 0.0])
        self.assertGreater(float(np.linalg.norm(tangent)), 0.0)

    def test_invalid_control_points_are_rejected(self) -> None:
        """Reject wrong shapes, single points and non-finite values."""
        with self.assertRaises(CurveDataError):
            PolylineCurve(points=np.zeros((3, 2)))
        with self.assertRaises(CurveDataError):
            PolylineCurve(points=np.zeros((1, 3)))
        with self.assertRaises(CurveDataError):
            PolylineCurve(points=np.array([[0.0, 0.0, 0.0], [np.nan, 0.0, 0.0]]))


class CatmullRomCurveTests(unittest.TestCase):
    """Validate Catmull-Rom interpolation."""

    def test_open_curve_passes_through_control_points(self) -> None:
        """Hit every control point at its knot parameter."""
        points = np.array([[0.0, 0.0, 0.0], [10.0, 2.0, 0.0], [20.0, 0.0, 5.0], [30.0, 1.0, 0.0]])
        curve = CatmullRomCurve(points=points)
        segments = curve.segment_count
        self.assertEqual(segments, 3)
        for index, point in enumerate(points):
            position, _ = curve.evaluate(index / segments)
            np.testing.assert_allclose(position, point, atol=1e-9)

    def test_closed_curve_wraps_to_first_point(self) -> None:
        """End a closed curve on its first control point."""
        curve = build_circular_curve(radius=50.0, control_count=16)
        start, _ = curve.evaluate(0.0)
        end, _ = curve.evaluate(1.0)
        np.testing.assert_allclose(start, end, atol=1e-9)
        self.assertEqual(curve.segment_count, 16)

    def test_circle_length_approximates_circumference(self) -> None:
        """Approximate arc length within a small fraction of the circle."""
        curve = build_circular_curve(radius=50.0, control_count=16)
        circumference = 2.0 * np.pi * 50.0
        self.assertAlmostEqual(curve_length(curve), circumference, delta=0.02 * circumference)

    def test_tangent_follows_travel_direction(self) -> None:
        """Point the unit tangent along the direction of travel."""
        counter = build_circular_curve(radius=50.0)
        clockwise = build_circular_curve(radius=50.0, clockwise=True)
        np.testing.assert_allclose(evaluate(counter, 0.0)[1], [0.0, 0.0, 1.0], atol=1e-9)
        np.testing.assert_allclose(evaluate(clockwise, 0.0)[1], [0.0, 0.0, -1.0], atol=1e-9)

    def test_length_sampling_density_must_be_positive(self) -> None:
        """Reject a zero chord sampling density."""
        with self.assertRaises(CurveDataError):
            CatmullRomCurve(points=np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]]), length_samples_per_segment=0)


class SamplerTests(unittest.TestCase):
    """Validate stateless sampling helpers."""

    def setUp(self) -> None:
        """Create a straight curve along +x."""
        self.curve = PolylineCurve(points=np.array([[0.0, 0.0, 0.0], [100.0, 0.0, 0.0]]))

    def test_evaluate_rejects_parameters_outside_unit_interval(self) -> None:
        """Raise for parameters below zero or above one."""
        with self.assertRaises(CurveDataError):
            evaluate(self.curve, -0.01)
        with self.assertRaises(CurveDataError):
            evaluate(self.curve, 1.01)

    def test_sample_curve_builds_lateral_frame(self) -> None:
        """Derive unit right and left directions from the tangent."""
        sample = sample_curve(self.curve, 0.25)
        self.assertEqual(sample.t, 0.25)
        np.testing.assert_allclose(sample.position, [25.0, 0.0, 0.0])
        np.testing.assert_allclose(sample.tangent, [1.0, 0.0, 0.0])
        np.testing.assert_allclose(sample.right, [0.0, 0.0, 1.0], atol=1e-12)
        np.testing.assert_allclose(sample.left, -sample.right)

    def test_uniform_parameters_cover_unit_interval(self) -> None:
        """Space parameters evenly from zero to one inclusive."""
        np.testing.assert_allclose(uniform_parameters(5), [0.0, 0.25, 0.5, 0.75, 1.0])
        np.testing.assert_allclose(uniform_parameters(1), [0.0])
        with self.assertRaises(CurveDataError):
            uniform_parameters(0)

    def test_sample_positions_returns_point_array(self) -> None:
        """Return one row per requested sample."""
        positions = sample_positions(self.curve, 11)
        self.assertEqual(positions.shape, (11, 3))
        np.testing.assert_allclose(positions[:, 0], np.linspace(0.0, 100.0, 11), atol=1e-9)

    def test_spline_container_exposes_primary_curve(self) -> None:
        """Return the first curve, or ``None`` for an empty container."""
        self.assertIs(SplineContainer([self.curve]).primary, self.curve)
        self.assertIsNone(SplineContainer().primary)


if __name__ == "__main__":
    unittest.main()
