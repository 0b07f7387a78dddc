"""Side-effect-free preview of barrier positions."""

from __future__ import annotations

from dataclasses import dataclass

from splinetrack.curve.models import SplineContainer
from splinetrack.curve.sampler import curve_length, sample_curve
from splinetrack.geometry import FloatArray
from splinetrack.placement.config import BarrierPlacementConfig, Side
from splinetrack.placement.layout import lateral_candidate, placement_parameters, snap_to_ground
from splinetrack.scene.models import GroundQuery


@dataclass(frozen=True)
class PreviewMarker:
    """One previewed barrier position.

    Args:
        side: Side of the curve.
        position: Marker position [m].
        snapped: Whether the position was moved onto the ground.
        t: Curve parameter of the marker.
    """

    side: Side
    position: FloatArray
    snapped: bool
    t: float


def preview_barrier_positions(
    curves: SplineContainer | None,
    config: BarrierPlacementConfig,
    ground: GroundQuery | None = None,
) -> list[PreviewMarker]:
    """Compute a thinned set of barrier positions for display.

    Every ``config.preview_stride``-th placement sample is kept. A missed
    ground ray keeps the unsnapped candidate instead of dropping the marker.

    Args:
        curves: Container whose first curve is followed.
        config: Placement settings.
        ground: Collision collaborator; snapping is skipped when ``None``.

    Returns:
        Preview markers, empty when there is nothing to preview.
    """
    if curves is None or curves.primary is None:
        return []
    curve = curves.primary
    length = curve_length(curve)
    if not length > 0.0:
        return []

    markers: list[PreviewMarker] = []
    for t in placement_parameters(length, config.spacing)[:: config.preview_stride]:
        sample = sample_curve(curve, float(t))
        for side in config.enabled_sides:
            position = lateral_candidate(sample, side, config.offset_distance)
            snapped = False
            if config.ground.enabled and ground is not None:
                hit = snap_to_ground(position, ground, config.ground)
                if hit is not None:
                    position = hit
                    snapped = True
            markers.append(PreviewMarker(side=side, position=position, snapped=snapped, t=float(t)))
    return markers
