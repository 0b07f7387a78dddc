"""Ground surfaces answering downward ray queries."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from splinetrack.geometry import FloatArray, VectorLike, as_vector
from splinetrack.scene.models import GroundQuery
from splinetrack.utils.constants import ALL_LAYERS, DEFAULT_LAYER
from splinetrack.utils.exceptions import ConfigurationError

MIN_GRID_SIZE = 2


def layer_bit(layer: int) -> int:
    """Bit mask selecting a single layer.

    Args:
        layer: Layer index, ``0`` to ``31``.

    Returns:
        Mask with only the bit for ``layer`` set.
    """
    return 1 << layer


def layer_mask(*layers: int) -> int:
    """Combine layers into one mask.

    Args:
        *layers: Layer indices.

    Returns:
        Bit mask selecting all given layers.
    """
    mask = 0
    for layer in layers:
        mask |= layer_bit(layer)
    return mask


class HeightSurface(ABC):
    """Base class for ground expressed as height over the ``x``-``z`` plane."""

    layer: int = DEFAULT_LAYER

    @abstractmethod
    def surface_height(self, x: float, z: float) -> float | None:
        """Surface height below a horizontal location.

        Args:
            x: World ``x`` coordinate [m].
            z: World ``z`` coordinate [m].

        Returns:
            Surface ``y`` coordinate, or ``None`` outside the surface.
        """

    def cast_down(
        self,
        origin: VectorLike,
        max_distance: float,
        layer_mask: int = ALL_LAYERS,
    ) -> FloatArray | None:
        """Cast a ray straight down onto the surface.

        Args:
            origin: Ray start point [m].
            max_distance: Maximum ray length [m].
            layer_mask: Bit mask of layers the ray may hit.

        Returns:
            Hit point, or ``None`` when the surface is filtered out, absent,
            above the origin, or farther than ``max_distance``.
        """
        if not layer_mask & layer_bit(self.layer):
            return None
        start = as_vector(origin)
        height = self.surface_height(float(start[0]), float(start[2]))
        if height is None:
            return None
        drop = start[1] - height
        if drop < 0.0 or drop > max_distance:
            return None
        return np.array([start[0], height, start[2]], dtype=np.float64)


@dataclass(frozen=True)
class FlatGround(HeightSurface):
    """Horizontal plane, optionally bounded to a rectangle.

    Args:
        height: Plane ``y`` coordinate [m].
        layer: Collision layer of the plane.
        extent: Optional bounds ``(min_x, max_x, min_z, max_z)`` [m].
    """

    height: float = 0.0
    layer: int = DEFAULT_LAYER
    extent: tuple[float, float, float, float] | None = None

    def surface_height(self, x: float, z: float) -> float | None:
        """Plane height inside the optional extent.

        Args:
            x: World ``x`` coordinate [m].
            z: World ``z`` coordinate [m].

        Returns:
            Plane height, or ``None`` outside the extent.
        """
        if self.extent is not None:
            min_x, max_x, min_z, max_z = self.extent
            if not (min_x <= x <= max_x and min_z <= z <= max_z):
                return None
        return float(self.height)


@dataclass(frozen=True)
class HeightfieldGround(HeightSurface):
    """Regular-grid terrain with bilinear height interpolation.

    Args:
        x_coords: Strictly increasing grid ``x`` coordinates [m].
        z_coords: Strictly increasing grid ``z`` coordinates [m].
        heights: Height samples with shape ``(len(z_coords), len(x_coords))`` [m].
        layer: Collision layer of the terrain.
    """

    x_coords: np.ndarray
    z_coords: np.ndarray
    heights: np.ndarray
    layer: int = DEFAULT_LAYER

    def __post_init__(self) -> None:
        """Validate grid axes and height array.

        Raises:
            splinetrack.utils.exceptions.ConfigurationError: If the grid axes
                are too short, not increasing, or mismatch ``heights``.
        """
        xs = np.asarray(self.x_coords, dtype=np.float64)
        zs = np.asarray(self.z_coords, dtype=np.float64)
        heights = np.asarray(self.heights, dtype=np.float64)
        for name, axis in (("x_coords", xs), ("z_coords", zs)):
            if axis.ndim != 1 or axis.size < MIN_GRID_SIZE:
                msg = f"{name} must be one-dimensional with at least {MIN_GRID_SIZE} values"
                raise ConfigurationError(msg)
            if not np.all(np.diff(axis) > 0.0):
                msg = f"{name} must be strictly increasing"
                raise ConfigurationError(msg)
        if heights.shape != (zs.size, xs.size):
            msg = f"heights must have shape {(zs.size, xs.size)}, got {heights.shape}"
            raise ConfigurationError(msg)
        object.__setattr__(self, "x_coords", xs)
        object.__setattr__(self, "z_coords", zs)
        object.__setattr__(self, "heights", heights)

    def surface_height(self, x: float, z: float) -> float | None:
        """Bilinearly interpolated terrain height.

        Args:
            x: World ``x`` coordinate [m].
            z: World ``z`` coordinate [m].

        Returns:
            Terrain height, or ``None`` outside the grid.
        """
        xs, zs = self.x_coords, self.z_coords
        if not (xs[0] <= x <= xs[-1] and zs[0] <= z <= zs[-1]):
            return None

        i = int(np.clip(np.searchsorted(xs, x, side="right") - 1, 0, xs.size - 2))
        j = int(np.clip(np.searchsorted(zs, z, side="right") - 1, 0, zs.size - 2))
        fx = (x - xs[i]) / (xs[i + 1] - xs[i])
        fz = (z - zs[j]) / (zs[j + 1] - zs[j])

        h = self.heights
        near = h[j, i] * (1.0 - fx) + h[j, i + 1] * fx
        far = h[j + 1, i] * (1.0 - fx) + h[j + 1, i + 1] * fx
        return float(near * (1.0 - fz) + far * fz)


@dataclass
class GroundCollection:
    """Set of ground surfaces queried together.

    Args:
        surfaces: Surfaces to query.
    """

    surfaces: Sequence[GroundQuery] = field(default_factory=list)

    def cast_down(
        self,
        origin: VectorLike,
        max_distance: float,
        layer_mask: int = ALL_LAYERS,
    ) -> FloatArray | None:
        """Return the nearest hit among all surfaces.

        Args:
            origin: Ray start point [m].
            max_distance: Maximum ray length [m].
            layer_mask: Bit mask of layers the ray may hit.

        Returns:
            Highest hit point below the origin, or ``None``.
        """
        hits = [surface.cast_down(origin, max_distance, layer_mask) for surface in self.surfaces]
        hits = [hit for hit in hits if hit is not None]
        if not hits:
            return None
        return max(hits, key=lambda point: float(point[1]))
