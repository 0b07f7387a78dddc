"""Barrier placement configuration dataclasses."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from splinetrack.utils.constants import ALL_LAYERS
from splinetrack.utils.exceptions import ConfigurationError

DEFAULT_OFFSET_DISTANCE = 5.0
DEFAULT_SPACING = 1.0
DEFAULT_RAYCAST_HEIGHT = 100.0
DEFAULT_RAYCAST_DISTANCE = 200.0
DEFAULT_GROUND_OFFSET = 0.0
DEFAULT_PREVIEW_STRIDE = 5
DEFAULT_CONTAINER_NAME = "Barriers"


class RotationMode(Enum):
    """How placed barriers are oriented relative to the curve."""

    PARALLEL = "parallel"
    PERPENDICULAR = "perpendicular"
    CUSTOM = "custom"


class Side(Enum):
    """Side of the curve a barrier is placed on."""

    LEFT = "Left"
    RIGHT = "Right"


@dataclass(frozen=True)
class GroundSnapConfig:
    """Downward ray settings used to rest barriers on the ground.

    Args:
        enabled: Whether to snap candidates to the ground.
        raycast_height: Height above the candidate the ray starts from [m].
        raycast_distance: Maximum ray length [m].
        layer_mask: Bit mask of ground layers; ``-1`` selects every layer.
        ground_offset: Vertical offset added to the hit point [m].
    """

    enabled: bool = True
    raycast_height: float = DEFAULT_RAYCAST_HEIGHT
    raycast_distance: float = DEFAULT_RAYCAST_DISTANCE
    layer_mask: int = ALL_LAYERS
    ground_offset: float = DEFAULT_GROUND_OFFSET

    def validate(self) -> None:
        """Validate ray settings.

        Raises:
            splinetrack.utils.exceptions.ConfigurationError: If ray lengths are
                not positive or the ground offset is not finite.
        """
        if not self.raycast_height > 0.0:
            msg = "raycast_height must be positive"
            raise ConfigurationError(msg)
        if not self.raycast_distance > 0.0:
            msg = "raycast_distance must be positive"
            raise ConfigurationError(msg)
        if not math.isfinite(self.ground_offset):
            msg = "ground_offset must be finite"
            raise ConfigurationError(msg)


@dataclass(frozen=True)
class BarrierPlacementConfig:
    """Barrier placement settings.

    Args:
        offset_distance: Lateral distance from the curve [m].
        spacing: Target distance between consecutive samples [m].
        place_left: Whether to place barriers on the left side.
        place_right: Whether to place barriers on the right side.
        auto_rotate: Whether to orient barriers from the curve.
        rotation_mode: Orientation rule used when ``auto_rotate`` is set.
        rotation_offset: Extra Euler rotation ``(x, y, z)`` [deg].
        ground: Ground snapping settings.
        container_name: Name of the container created for barriers.
        preview_stride: Sample stride used by preview rendering.
    """

    offset_distance: float = DEFAULT_OFFSET_DISTANCE
    spacing: float = DEFAULT_SPACING
    place_left: bool = True
    place_right: bool = True
    auto_rotate: bool = True
    rotation_mode: RotationMode = RotationMode.PARALLEL
    rotation_offset: tuple[float, float, float] = (0.0, 0.0, 0.0)
    ground: GroundSnapConfig = field(default_factory=GroundSnapConfig)
    container_name: str = DEFAULT_CONTAINER_NAME
    preview_stride: int = DEFAULT_PREVIEW_STRIDE

    @property
    def enabled_sides(self) -> tuple[Side, ...]:
        """Sides that receive barriers, left first.

        Returns:
            Enabled sides in placement order.
        """
        sides: list[Side] = []
        if self.place_left:
            sides.append(Side.LEFT)
        if self.place_right:
            sides.append(Side.RIGHT)
        return tuple(sides)

    def validate(self) -> None:
        """Validate placement settings.

        Raises:
            splinetrack.utils.exceptions.ConfigurationError: If any value
                violates its bound.
        """
        if not (math.isfinite(self.spacing) and self.spacing > 0.0):
            msg = "spacing must be positive"
            raise ConfigurationError(msg)
        if not (math.isfinite(self.offset_distance) and self.offset_distance >= 0.0):
            msg = "offset_distance must be non-negative"
            raise ConfigurationError(msg)
        if not isinstance(self.rotation_mode, RotationMode):
            msg = f"rotation_mode must be a RotationMode, got: {self.rotation_mode!r}"
            raise ConfigurationError(msg)
        if len(self.rotation_offset) != 3:
            msg = "rotation_offset must contain three Euler angles"
            raise ConfigurationError(msg)
        if not self.container_name:
            msg = "container_name must be a non-empty string"
            raise ConfigurationError(msg)
        if self.preview_stride < 1:
            msg = "preview_stride must be at least 1"
            raise ConfigurationError(msg)
        self.ground.validate()


def build_placement_config(
    offset_distance: float = DEFAULT_OFFSET_DISTANCE,
    spacing: float = DEFAULT_SPACING,
    place_left: bool = True,
    place_right: bool = True,
    rotation_mode: RotationMode | str = RotationMode.PARALLEL,
    rotation_offset: tuple[float, float, float] = (0.0, 0.0, 0.0),
    ground: GroundSnapConfig | None = None,
    auto_rotate: bool = True,
    container_name: str = DEFAULT_CONTAINER_NAME,
    preview_stride: int = DEFAULT_PREVIEW_STRIDE,
) -> BarrierPlacementConfig:
    """Build a validated placement config.

    Args:
        offset_distance: Lateral distance from the curve [m].
        spacing: Target distance between consecutive samples [m].
        place_left: Whether to place barriers on the left side.
        place_right: Whether to place barriers on the right side.
        rotation_mode: Orientation rule or its string value.
        rotation_offset: Extra Euler rotation ``(x, y, z)`` [deg].
        ground: Optional ground settings. Defaults to :class:`GroundSnapConfig`.
        auto_rotate: Whether to orient barriers from the curve.
        container_name: Name of the container created for barriers.
        preview_stride: Sample stride used by preview rendering.

    Returns:
        Fully validated placement configuration.

    Raises:
        splinetrack.utils.exceptions.ConfigurationError: If any value violates
            its bound or ``rotation_mode`` is unknown.
    """
    if isinstance(rotation_mode, str):
        try:
            rotation_mode = RotationMode(rotation_mode)
        except ValueError as exc:
            valid = tuple(mode.value for mode in RotationMode)
            msg = f"rotation_mode must be one of {valid}, got: {rotation_mode!r}"
            raise ConfigurationError(msg) from exc

    config = BarrierPlacementConfig(
        offset_distance=offset_distance,
        spacing=spacing,
        place_left=place_left,
        place_right=place_right,
        auto_rotate=auto_rotate,
        rotation_mode=rotation_mode,
        rotation_offset=tuple(float(angle) for angle in rotation_offset),
        ground=ground or GroundSnapConfig(),
        container_name=container_name,
        preview_stride=preview_stride,
    )
    config.validate()
    return config
