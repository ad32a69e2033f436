"""Exceptions raised by the bounds package."""


class BoundsError(Exception):
    """Base exception for boundary generation failures."""


class InsufficientPointsError(BoundsError, ValueError):
    """Raised when fewer than two distinct points are available."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"Need at least 2 distinct points to generate a boundary, got {count}"
        )


class GridAllocationError(BoundsError, MemoryError):
    """Raised when the block grid cannot be allocated."""

    def __init__(self, rows: int, cols: int, increment: float):
        self.rows = rows
        self.cols = cols
        self.increment = increment
        super().__init__(
            f"Failed to allocate a {rows}x{cols} grid, "
            f"try increasing the increment ({increment})"
        )


class TracingError(BoundsError, RuntimeError):
    """Raised when a ring being traced has no continuing open edge."""


class BoundaryCancelled(BoundsError):
    """Raised when a cancellation check asks a running operation to stop."""
