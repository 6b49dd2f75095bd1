class TrackerError(Exception):
    """Base class for every error raised by mosse_tracker."""


class DimensionMismatchError(TrackerError, ValueError):
    """A buffer does not have the width x height layout it was configured for."""

    def __init__(self, what, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what}: expected {expected}, got {actual}")


class DegenerateGeometryError(TrackerError, ValueError):
    """A window axis is not a positive length."""


class PatchBoundsError(TrackerError, IndexError):
    """The requested patch runs past the right or bottom edge of the raster."""
