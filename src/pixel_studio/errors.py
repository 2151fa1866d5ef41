"""Exception taxonomy for the editing core.

Every error here is local and recoverable: callers catch them and surface
a message or treat the action as a no-op.  Operations that would produce
no visible change (painting a cell its current color, drawing on a hidden
layer, picking an empty cell) are *not* errors and never raise.
"""

from __future__ import annotations


class EditorError(Exception):
    """Base class for all editing-core errors."""


class OutOfBounds(EditorError, IndexError):
    """A coordinate fell outside ``[0, size)``."""

    def __init__(self, x: int, y: int, size: int) -> None:
        self.x = x
        self.y = y
        self.size = size
        super().__init__(
            f"Coordinate ({x}, {y}) is out of bounds (grid size={size})"
        )


class LayerNotFound(EditorError, LookupError):
    """An operation referenced a layer id that is not in the document."""

    def __init__(self, layer_id: str) -> None:
        self.layer_id = layer_id
        super().__init__(f"Layer not found: {layer_id!r}")


class LastLayerError(EditorError):
    """Attempted to delete the only remaining layer."""


class InvalidArgument(EditorError, ValueError):
    """An argument was outside its accepted domain (opacity, size, color)."""
