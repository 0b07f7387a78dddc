"""Unit tests for curve and point CSV loading."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

import numpy as np

from splinetrack.curve import CatmullRomCurve, PolylineCurve, load_curve_csv, read_point_csv
from splinetrack.utils.exceptions import CurveDataError


class CurveCsvTests(unittest.TestCase):
    """Validate CSV schema checks and curve construction."""

    def setUp(self) -> None:
        """Create a temporary directory for CSV fixtures."""
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        """Remove the temporary directory."""
        self._tmp.cleanup()

    def _write(self, name: str, text: str) -> Path:
        """Write a CSV fixture.

        Args:
            name: File name inside the temporary directory.
            text: File content.

        Returns:
            Path to the written file.
        """
        path = self.root / name
        path.write_text(text, encoding="utf-8")
        return path

    def test_reads_points_in_file_order(self) -> None:
        """Parse x, y and z columns while ignoring extra columns."""
        path = self._write("points.csv", "x,y,z,label\n0,0,0,a\n10,1,0,b\n20,0,5,c\n")
        points = read_point_csv(path)
        np.testing.assert_allclose(points, [[0.0, 0.0, 0.0], [10.0, 1.0, 0.0], [20.0, 0.0, 5.0]])

    def test_load_curve_selects_interpolation(self) -> None:
        """Build a Catmull-Rom curve by default and a polyline on request."""
        path = self._write("curve.csv", "x,y,z\n0,0,0\n10,0,0\n20,0,0\n")
        self.assertIsInstance(load_curve_csv(path), CatmullRomCurve)
        linear = load_curve_csv(path, interpolation="linear", closed=True)
        self.assertIsInstance(linear, PolylineCurve)
        self.assertAlmostEqual(linear.length(), 40.0)

    def test_invalid_files_raise_curve_data_error(self) -> None:
        """Reject missing files, missing columns, bad numbers and short files."""
        with self.assertRaises(CurveDataError):
            read_point_csv(self.root / "missing.csv")
        with self.assertRaises(CurveDataError):
            read_point_csv(self._write("cols.csv", "x,y\n0,0\n"))
        with self.assertRaises(CurveDataError):
            read_point_csv(self._write("nan.csv", "x,y,z\n0,zero,0\n"))
        with self.assertRaises(CurveDataError):
            read_point_csv(self._write("empty.csv", ""))
        with self.assertRaises(CurveDataError):
            load_curve_csv(self._write("short.csv", "x,y,z\n0,0,0\n"))
        with self.assertRaises(CurveDataError):
            load_curve_csv(self._write("ok.csv", "x,y,z\n0,0,0\n1,0,0\n"), interpolation="bezier")

    def test_undecodable_file_raises_curve_data_error(self) -> None:
        """Report non-UTF-8 content as invalid curve data."""
        path = self.root / "binary.csv"
        path.write_bytes(b"x,y,z\n0,0,0\n\xff\xfe,1,1\n")

        with self.assertRaises(CurveDataError) as ctx:
            read_point_csv(path)

        self.assertIsInstance(ctx.exception.__cause__, UnicodeDecodeError)


if __name__ == "__main__":
    unittest.main()
