"""Custom exceptions for spline track tooling."""


class SplineTrackError(Exception):
    """Base exception for track tooling errors."""


class ConfigurationError(SplineTrackError):
    """Raised when navigator or placement configuration is invalid."""


class CurveDataError(SplineTrackError):
    """Raised when curve or waypoint data cannot be parsed or validated."""
