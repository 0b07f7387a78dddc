"""Utility helpers."""

from splinetrack.utils.constants import ALL_LAYERS, SMALL_EPS
from splinetrack.utils.logging import configure_logging

__all__ = ["ALL_LAYERS", "SMALL_EPS", "configure_logging"]
