"""Exceptions raised by the simulation core."""


class RasterizationError(RuntimeError):
    """Raised when a rasterization cannot start at all.

    Per-tile fetch failures never raise; they degrade the affected cells
    to the fallback terrain instead.
    """
