"""Curve and point loading from CSV files."""

from __future__ import annotations

import csv
from pathlib import Path

import numpy as np

from splinetrack.curve.models import MIN_CONTROL_POINT_COUNT, CatmullRomCurve, Curve, PolylineCurve
from splinetrack.geometry import FloatArray
from splinetrack.utils.exceptions import CurveDataError

REQUIRED_COLUMNS = ("x", "y", "z")
VALID_INTERPOLATIONS = ("catmull_rom", "linear")


def _read_rows(file_path: Path) -> list[list[float]]:
    """Parse ``x``, ``y``, ``z`` rows from an existing CSV file.

    Args:
        file_path: CSV file path.

    Returns:
        Parsed rows in file order.

    Raises:
        splinetrack.utils.exceptions.CurveDataError: If the header is missing
            or incomplete, or a value is not numeric.
    """
    rows: list[list[float]] = []
    with file_path.open("r", newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            msg = f"CSV has no header: {file_path}"
            raise CurveDataError(msg)

        missing = [col for col in REQUIRED_COLUMNS if col not in reader.fieldnames]
        if missing:
            msg = f"Point CSV missing required columns: {missing}"
            raise CurveDataError(msg)

        for line_number, row in enumerate(reader, start=2):
            try:
                rows.append([float(row[col]) for col in REQUIRED_COLUMNS])
            except (TypeError, ValueError) as exc:
                msg = f"Invalid numeric value on line {line_number} of {file_path}"
                raise CurveDataError(msg) from exc
    return rows


def read_point_csv(path: str | Path, min_rows: int = 1) -> FloatArray:
    """Read ``x``, ``y``, ``z`` point rows from a CSV file.

    Args:
        path: Path to a CSV file with an ``x,y,z`` header.
        min_rows: Minimum number of data rows required.

    Returns:
        Point array with shape ``(n, 3)`` [m].

    Raises:
        splinetrack.utils.exceptions.CurveDataError: If the file does not
            exist, has an invalid schema, non-numeric values, or too few rows.
    """
    file_path = Path(path)
    if not file_path.exists():
        msg = f"Point file not found: {file_path}"
        raise CurveDataError(msg)

    try:
        rows = _read_rows(file_path)
    except UnicodeDecodeError as exc:
        msg = f"Point CSV is not valid UTF-8: {file_path}"
        raise CurveDataError(msg) from exc

    if len(rows) < min_rows:
        msg = f"Point CSV must contain at least {min_rows} data rows"
        raise CurveDataError(msg)
    return np.asarray(rows, dtype=np.float64).reshape(-1, 3)


def load_curve_csv(
    path: str | Path,
    closed: bool = False,
    interpolation: str = "catmull_rom",
) -> Curve:
    """Load curve control points from CSV.

    Args:
        path: Path to a CSV containing ``x``, ``y`` and ``z`` columns.
        closed: Whether the curve wraps back to its first point.
        interpolation: ``catmull_rom`` or ``linear``.

    Returns:
        Parsed and validated curve.

    Raises:
        splinetrack.utils.exceptions.CurveDataError: If the file is invalid or
            ``interpolation`` is unknown.
    """
    if interpolation not in VALID_INTERPOLATIONS:
        msg = f"interpolation must be one of {VALID_INTERPOLATIONS}, got: {interpolation!r}"
        raise CurveDataError(msg)

    points = read_point_csv(path, min_rows=MIN_CONTROL_POINT_COUNT)
    if interpolation == "linear":
        return PolylineCurve(points=points, closed=closed)
    return CatmullRomCurve(points=points, closed=closed)
