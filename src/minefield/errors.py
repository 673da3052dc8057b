"""
Exception types for the Minesweeper engine.

Configuration problems are reported as ``ValueError`` subclasses so callers
can treat them like any other bad argument. Placement failures are internal
invariant violations and are kept separate.
"""


class MinefieldError(Exception):
    """Base class for all engine errors."""


class BoardConfigError(MinefieldError, ValueError):
    """Raised when a board cannot be built from the given parameters."""


class MinePlacementError(MinefieldError, RuntimeError):
    """Raised when mine placement runs past its probe budget."""
