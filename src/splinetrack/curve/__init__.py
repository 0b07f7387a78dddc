"""Parametric curves, sampling, synthetic layouts and CSV loading."""

from splinetrack.curve.io import load_curve_csv, read_point_csv
from splinetrack.curve.layouts import (
    build_circular_curve,
    build_figure_eight_curve,
    build_straight_curve,
)
from splinetrack.curve.models import CatmullRomCurve, Curve, PolylineCurve, SplineContainer
from splinetrack.curve.sampler import (
    CurveSample,
    curve_length,
    evaluate,
    sample_curve,
    sample_positions,
    uniform_parameters,
)

__all__ = [
    "CatmullRomCurve",
    "Curve",
    "CurveSample",
    "PolylineCurve",
    "SplineContainer",
    "build_circular_curve",
    "build_figure_eight_curve",
    "build_straight_curve",
    "curve_length",
    "evaluate",
    "load_curve_csv",
    "read_point_csv",
    "sample_curve",
    "sample_positions",
    "uniform_parameters",
]
