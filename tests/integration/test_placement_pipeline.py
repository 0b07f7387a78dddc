"""Integration tests for curve-file-to-barrier placement."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

import numpy as np

from splinetrack.analysis import export_placements_json, summarize_placements
from splinetrack.curve import SplineContainer, curve_length, load_curve_csv
from splinetrack.placement import (
    BarrierPlacementConfig,
    BarrierPlacementEngine,
    Side,
    placement_interval_count,
)
from splinetrack.scene import FlatGround, GroundCollection, HeightfieldGround, InMemoryScene
from tests.helpers import BARRIER_TEMPLATE

RADIUS = 50.0
SPACING = 5.0
OFFSET = 5.0


def _write_circle_csv(path: Path, count: int = 16) -> None:
    """Write circle control points to CSV.

    Args:
        path: Output CSV path.
        count: Number of control points.
    """
    angle = np.linspace(0.0, 2.0 * np.pi, count, endpoint=False)
    rows = ["x,y,z"] + [f"{RADIUS * np.cos(a):.12f},0,{RADIUS * np.sin(a):.12f}" for a in angle]
    path.write_text("\n".join(rows) + "\n", encoding="utf-8")


class PlacementPipelineTests(unittest.TestCase):
    """End-to-end placement around a closed curve on sloped terrain."""

    def setUp(self) -> None:
        """Load a closed circle from CSV and build a sloped terrain."""
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        _write_circle_csv(self.root / "circle.csv")
        self.curve = load_curve_csv(self.root / "circle.csv", closed=True)

        xs = np.array([-100.0, 0.0, 100.0])
        zs = np.array([-100.0, 0.0, 100.0])
        self.terrain = HeightfieldGround(x_coords=xs, z_coords=zs, heights=np.tile(0.1 * xs, (3, 1)))

    def tearDown(self) -> None:
        """Remove temporary files."""
        self._tmp.cleanup()

    def _engine(self, ground: object) -> BarrierPlacementEngine:
        """Create an engine over the loaded circle.

        Args:
            ground: Ground query used for snapping.

        Returns:
            Placement engine spawning into a fresh scene.
        """
        return BarrierPlacementEngine(
            scene=InMemoryScene(),
            template=BARRIER_TEMPLATE,
            curves=SplineContainer([self.curve], name="circle"),
            ground=ground,
            config=BarrierPlacementConfig(spacing=SPACING, offset_distance=OFFSET),
        )

    def test_barriers_ring_the_loop_on_terrain(self) -> None:
        """Place left barriers outside and right barriers inside the loop."""
        engine = self._engine(self.terrain)
        report = engine.generate_barriers()

        expected_samples = placement_interval_count(curve_length(self.curve), SPACING) + 1
        self.assertEqual(report.sample_count, expected_samples)
        self.assertEqual(report.success_count, 2 * expected_samples)

        positions = np.array([p.position for p in report.placements])
        np.testing.assert_allclose(positions[:, 1], 0.1 * positions[:, 0], atol=1e-9)

        radial = np.hypot(positions[:, 0], positions[:, 2])
        sides = np.array([p.side is Side.LEFT for p in report.placements])
        np.testing.assert_allclose(radial[sides], RADIUS + OFFSET, atol=0.1)
        np.testing.assert_allclose(radial[~sides], RADIUS - OFFSET, atol=0.1)

    def test_partial_ground_reports_failures_and_exports(self) -> None:
        """Count barriers over a hole as failures and export the rest."""
        ground = GroundCollection(
            [
                FlatGround(height=0.0, extent=(-100.0, 100.0, 0.0, 100.0)),
                FlatGround(height=1.0, layer=1, extent=(-100.0, 0.0, -100.0, 0.0)),
            ]
        )
        engine = self._engine(ground)
        report = engine.generate_barriers()
        summary = summarize_placements(report)

        self.assertGreater(report.failure_count, 0)
        self.assertGreater(report.success_count, 0)
        self.assertEqual(report.attempted, 2 * report.sample_count)
        self.assertEqual(summary.success_count + summary.failure_count, report.attempted)
        for placement in report.placements:
            x, y, z = placement.position
            self.assertTrue(z >= 0.0 or x <= 0.0)
            self.assertEqual(y, 1.0 if (x <= 0.0 and z <= 0.0) else 0.0)

        export_placements_json(report, self.root / "placements.json")
        payload = json.loads((self.root / "placements.json").read_text(encoding="utf-8"))
        self.assertEqual(len(payload["barriers"]), report.success_count)

    def test_regeneration_is_idempotent(self) -> None:
        """Produce the same layout on every regeneration."""
        engine = self._engine(self.terrain)
        first = np.array([p.position for p in engine.generate_barriers().placements])
        second = np.array([p.position for p in engine.generate_barriers().placements])

        np.testing.assert_allclose(first, second)
        self.assertEqual(len(engine.scene.children(engine.container)), len(second))


if __name__ == "__main__":
    unittest.main()
