"""Numerical and gameplay constants used across the library."""

SMALL_EPS: float = 1e-9
ALL_LAYERS: int = -1
DEFAULT_LAYER: int = 0
NOMINAL_MAX_SPEED: float = 80.0
APPROACH_MIN_SPEED: float = 30.0
KMH_TO_MPS: float = 1.0 / 3.6
