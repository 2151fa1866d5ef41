"""Document model package -- re-exports the value types."""

from pixel_studio.models.color import DEFAULT_COLOR, PALETTE, Cell, Color
from pixel_studio.models.grid import Grid
from pixel_studio.models.layer import Layer
from pixel_studio.models.document import Document

__all__ = [
    "Cell",
    "Color",
    "DEFAULT_COLOR",
    "PALETTE",
    "Grid",
    "Layer",
    "Document",
]
