"""Unit tests for the barrier placement engine."""

from __future__ import annotations

import unittest

import numpy as np

from splinetrack.curve import SplineContainer, build_straight_curve
from splinetrack.geometry import IDENTITY_ROTATION, rotate_vector
from splinetrack.placement import (
    BarrierPlacementConfig,
    BarrierPlacementEngine,
    GroundSnapConfig,
    RotationMode,
    Side,
)
from splinetrack.scene import FlatGround, InMemoryScene
from tests.helpers import BARRIER_TEMPLATE, straight_placement_engine

FORWARD = (0.0, 0.0, 1.0)


class _ReentrantGround:
    """Ground that calls back into the engine from inside a ray cast."""

    def __init__(self) -> None:
        """Create the ground before the engine it calls back into."""
        self.engine: BarrierPlacementEngine | None = None
        self.nested_results: list[object] = []
        self._plane = FlatGround()

    def cast_down(self, origin: tuple[float, float, float], max_distance: float, layer_mask: int) -> np.ndarray | None:
        """Trigger nested generate and clear calls, then hit the plane.

        Args:
            origin: Ray start point [m].
            max_distance: Maximum ray length [m].
            layer_mask: Bit mask of layers the ray may hit.

        Returns:
            Plane hit point.
        """
        if self.engine is not None and not self.nested_results:
            self.nested_results.append(self.engine.generate_barriers())
            self.nested_results.append(self.engine.clear_barriers())
        return self._plane.cast_down(origin, max_distance, layer_mask)


class BarrierGenerationTests(unittest.TestCase):
    """Validate sampling, naming, orientation and bookkeeping of barriers."""

    def test_reference_scenario_places_twenty_two_barriers(self) -> None:
        """Place 11 barriers per side for length 100, spacing 10 and offset 5."""
        engine, _ = straight_placement_engine(config=BarrierPlacementConfig(spacing=10.0, offset_distance=5.0))

        report = engine.generate_barriers()

        self.assertIsNotNone(report)
        self.assertEqual(report.sample_count, 11)
        self.assertEqual(report.success_count, 22)
        self.assertEqual(report.failure_count, 0)
        self.assertEqual(len(engine.spawned), 22)

        left = [p for p in report.placements if p.side is Side.LEFT]
        right = [p for p in report.placements if p.side is Side.RIGHT]
        np.testing.assert_allclose([p.position[2] for p in left], -5.0)
        np.testing.assert_allclose([p.position[2] for p in right], 5.0)
        np.testing.assert_allclose([p.position[0] for p in left], np.arange(0.0, 101.0, 10.0), atol=1e-9)
        np.testing.assert_allclose([p.position[1] for p in report.placements], 0.0)

    def test_sample_count_rounds_up(self) -> None:
        """Use ceil(length / spacing) + 1 samples per side."""
        engine, _ = straight_placement_engine(config=BarrierPlacementConfig(spacing=30.0))

        report = engine.generate_barriers()

        self.assertEqual(report.sample_count, 5)
        self.assertEqual(report.success_count, 10)

    def test_names_and_tags_follow_spawn_order(self) -> None:
        """Alternate left and right per sample with a running index."""
        engine, _ = straight_placement_engine(config=BarrierPlacementConfig(spacing=50.0))

        report = engine.generate_barriers()

        names = [p.entity.name for p in report.placements]
        self.assertEqual(
            names,
            [
                "Barrier_Left_0",
                "Barrier_Right_1",
                "Barrier_Left_2",
                "Barrier_Right_3",
                "Barrier_Left_4",
                "Barrier_Right_5",
            ],
        )
        self.assertEqual(report.placements[3].entity.tags["side"], "Right")
        self.assertEqual(report.placements[3].entity.tags["index"], "3")
        self.assertEqual([p.sequence_index for p in report.placements], list(range(6)))

    def test_single_side_placement(self) -> None:
        """Only place on enabled sides."""
        engine, _ = straight_placement_engine(config=BarrierPlacementConfig(spacing=10.0, place_left=False))

        report = engine.generate_barriers()

        self.assertEqual(report.success_count, 11)
        self.assertTrue(all(p.side is Side.RIGHT for p in report.placements))

    def test_rotation_modes(self) -> None:
        """Face along the tangent, the right direction, or keep identity."""
        expectations = {
            RotationMode.PARALLEL: [1.0, 0.0, 0.0],
            RotationMode.PERPENDICULAR: [0.0, 0.0, 1.0],
            RotationMode.CUSTOM: [0.0, 0.0, 1.0],
        }
        for mode, forward in expectations.items():
            with self.subTest(mode=mode):
                engine, _ = straight_placement_engine(
                    config=BarrierPlacementConfig(spacing=50.0, rotation_mode=mode),
                )
                report = engine.generate_barriers()
                for placement in report.placements:
                    np.testing.assert_allclose(rotate_vector(placement.rotation, FORWARD), forward, atol=1e-9)

    def test_rotation_offset_is_applied_after_base_rotation(self) -> None:
        """Yaw the parallel orientation by the configured offset."""
        engine, _ = straight_placement_engine(
            config=BarrierPlacementConfig(spacing=50.0, rotation_offset=(0.0, 90.0, 0.0)),
        )

        report = engine.generate_barriers()

        np.testing.assert_allclose(
            rotate_vector(report.placements[0].rotation, FORWARD),
            [0.0, 0.0, -1.0],
            atol=1e-9,
        )

    def test_auto_rotate_off_keeps_identity(self) -> None:
        """Ignore rotation mode and offset without auto rotation."""
        engine, _ = straight_placement_engine(
            config=BarrierPlacementConfig(spacing=50.0, auto_rotate=False, rotation_offset=(0.0, 45.0, 0.0)),
        )

        report = engine.generate_barriers()

        for placement in report.placements:
            np.testing.assert_allclose(placement.rotation, IDENTITY_ROTATION)

    def test_ground_snap_uses_hit_height_and_offset(self) -> None:
        """Rest barriers on the ground raised by the ground offset."""
        engine, _ = straight_placement_engine(
            config=BarrierPlacementConfig(spacing=50.0, ground=GroundSnapConfig(ground_offset=0.5)),
            ground=FlatGround(height=-3.0),
        )

        report = engine.generate_barriers()

        np.testing.assert_allclose([p.position[1] for p in report.placements], -2.5)

    def test_disabled_snapping_keeps_curve_height_without_ground(self) -> None:
        """Place at candidate height and accept a missing ground query."""
        scene = InMemoryScene()
        engine = BarrierPlacementEngine(
            scene=scene,
            template=BARRIER_TEMPLATE,
            curves=SplineContainer([build_straight_curve(length=100.0, height=4.0)]),
            config=BarrierPlacementConfig(spacing=50.0, ground=GroundSnapConfig(enabled=False)),
        )

        report = engine.generate_barriers()

        self.assertEqual(report.success_count, 6)
        np.testing.assert_allclose([p.position[1] for p in report.placements], 4.0)

    def test_ground_misses_are_counted_without_aborting(self) -> None:
        """Skip candidates without ground and keep going."""
        engine, _ = straight_placement_engine(
            config=BarrierPlacementConfig(spacing=10.0),
            ground=FlatGround(extent=(-1.0, 50.0, -10.0, 10.0)),
        )

        with self.assertLogs("splinetrack.placement.engine", level="WARNING") as logs:
            report = engine.generate_barriers()

        self.assertEqual(report.success_count, 12)
        self.assertEqual(report.failure_count, 10)
        self.assertEqual(report.attempted, 22)
        self.assertEqual(len(engine.spawned), 12)
        self.assertTrue(any("Barrier not placed" in line for line in logs.output))

    def test_layer_mask_filters_ground(self) -> None:
        """Treat masked-out ground as a miss."""
        engine, _ = straight_placement_engine(
            config=BarrierPlacementConfig(spacing=50.0, ground=GroundSnapConfig(layer_mask=0b10)),
        )

        report = engine.generate_barriers()

        self.assertEqual(report.success_count, 0)
        self.assertEqual(report.failure_count, 6)


class BarrierLifecycleTests(unittest.TestCase):
    """Validate regeneration, cleanup and preconditions."""

    def test_regenerate_replaces_previous_batch(self) -> None:
        """Leave exactly one batch of live barriers after repeated calls."""
        engine, scene = straight_placement_engine(config=BarrierPlacementConfig(spacing=10.0))

        first = engine.generate_barriers()
        second = engine.generate_barriers()

        self.assertEqual(second.success_count, first.success_count)
        self.assertTrue(all(not p.entity.alive for p in first.placements))
        self.assertTrue(all(p.entity.alive for p in second.placements))
        self.assertEqual(len(scene.children(engine.container)), 22)
        self.assertEqual(len([node for node in scene.walk() if node.name == "Barriers"]), 1)

    def test_container_is_anchored_to_owner(self) -> None:
        """Create the barrier container under the owning node."""
        scene = InMemoryScene()
        owner = scene.create_container("Track")
        engine = BarrierPlacementEngine(
            scene=scene,
            template=BARRIER_TEMPLATE,
            curves=SplineContainer([build_straight_curve()]),
            ground=FlatGround(),
            owner=owner,
            config=BarrierPlacementConfig(spacing=50.0),
        )

        engine.generate_barriers()

        self.assertIs(engine.container.parent, owner)
        self.assertEqual(engine.container.name, "Barriers")

    def test_destroyed_container_is_recreated(self) -> None:
        """Create a fresh container when the old one was destroyed."""
        engine, scene = straight_placement_engine(config=BarrierPlacementConfig(spacing=50.0))
        engine.generate_barriers()
        old = engine.container
        scene.destroy(old)

        report = engine.generate_barriers()

        self.assertIsNot(engine.container, old)
        self.assertTrue(engine.container.alive)
        self.assertEqual(report.success_count, 6)

    def test_clear_destroys_tracked_and_stray_children(self) -> None:
        """Destroy every barrier and any leftovers in the container."""
        engine, scene = straight_placement_engine(config=BarrierPlacementConfig(spacing=10.0))
        engine.generate_barriers()
        scene.instantiate(BARRIER_TEMPLATE, (0.0, 0.0, 0.0), IDENTITY_ROTATION, parent=engine.container)

        with self.assertLogs("splinetrack.placement.engine", level="INFO") as logs:
            destroyed = engine.clear_barriers()

        self.assertEqual(destroyed, 23)
        self.assertEqual(engine.spawned, [])
        self.assertEqual(scene.children(engine.container), [])
        self.assertTrue(any("All barriers cleared!" in line for line in logs.output))
        self.assertEqual(engine.clear_barriers(), 0)

    def test_missing_inputs_abort_without_state_change(self) -> None:
        """Log an error and leave the scene untouched on failed preconditions."""
        scene = InMemoryScene()
        cases = {
            "no curves": dict(template=BARRIER_TEMPLATE, curves=None, ground=FlatGround()),
            "no template": dict(template=None, curves=SplineContainer([build_straight_curve()]), ground=FlatGround()),
            "empty container": dict(template=BARRIER_TEMPLATE, curves=SplineContainer(), ground=FlatGround()),
            "no ground": dict(template=BARRIER_TEMPLATE, curves=SplineContainer([build_straight_curve()]), ground=None),
        }
        for label, kwargs in cases.items():
            with self.subTest(case=label):
                engine = BarrierPlacementEngine(scene=scene, **kwargs)
                with self.assertLogs("splinetrack.placement.engine", level="ERROR"):
                    self.assertIsNone(engine.generate_barriers())
                self.assertIsNone(engine.container)
                self.assertEqual(list(scene.walk()), [])

    def test_failed_precondition_keeps_previous_batch(self) -> None:
        """Keep spawned barriers when a later call is refused."""
        engine, _ = straight_placement_engine(config=BarrierPlacementConfig(spacing=50.0))
        report = engine.generate_barriers()

        engine.template = None
        with self.assertLogs("splinetrack.placement.engine", level="ERROR"):
            self.assertIsNone(engine.generate_barriers())

        self.assertEqual(len(engine.spawned), report.success_count)
        self.assertTrue(all(entity.alive for entity in engine.spawned))

    def test_nested_calls_during_generation_are_rejected(self) -> None:
        """Reject generate and clear requests issued mid-batch."""
        ground = _ReentrantGround()
        scene = InMemoryScene()
        engine = BarrierPlacementEngine(
            scene=scene,
            template=BARRIER_TEMPLATE,
            curves=SplineContainer([build_straight_curve()]),
            ground=ground,
            config=BarrierPlacementConfig(spacing=50.0),
        )
        ground.engine = engine

        with self.assertLogs("splinetrack.placement.engine", level="WARNING"):
            report = engine.generate_barriers()

        self.assertEqual(ground.nested_results, [None, 0])
        self.assertEqual(report.success_count, 6)
        self.assertEqual(len(engine.spawned), 6)


if __name__ == "__main__":
    unittest.main()
