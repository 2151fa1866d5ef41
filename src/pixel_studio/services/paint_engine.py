"""Stateless paint operations on a Document.

Every function takes the document explicitly and either mutates one
target layer (``paint``, ``erase``, ``flood_fill``) or queries the stack
(``pick_color``).  Changes that would not alter anything (same color,
hidden layer, empty pick) are silent no-ops so callers never commit a
null history entry.
"""

from __future__ import annotations

import structlog

from pixel_studio.errors import OutOfBounds
from pixel_studio.models.color import Cell
from pixel_studio.models.document import Document
from pixel_studio.models.layer import Layer


log = structlog.get_logger()


def _target_layer(doc: Document, layer_id: str, x: int, y: int) -> Layer | None:
    """Resolve the layer and check bounds; ``None`` means "hidden, skip"."""
    layer = doc.get_layer(layer_id)
    if not layer.grid.in_bounds(x, y):
        raise OutOfBounds(x, y, doc.size)
    if not layer.visible:
        return None
    return layer


def paint(doc: Document, layer_id: str, x: int, y: int, color: Cell) -> bool:
    """Set one cell.  Returns ``True`` if the cell actually changed."""
    layer = _target_layer(doc, layer_id, x, y)
    if layer is None:
        return False
    if layer.grid.get(x, y) == color:
        return False
    layer.grid.set(x, y, color)
    return True


def erase(doc: Document, layer_id: str, x: int, y: int) -> bool:
    """Clear one cell back to empty."""
    return paint(doc, layer_id, x, y, None)


def flood_fill(doc: Document, layer_id: str, x: int, y: int, replacement: Cell) -> int:
    """Recolor the 4-connected region of cells matching the seed cell.

    Uses an explicit stack and a visited set, so working memory is bounded
    by the grid area regardless of region shape.  Out-of-bounds seeds and
    ``target == replacement`` are no-ops.  Returns the number of cells
    recolored.
    """
    layer = doc.get_layer(layer_id)
    grid = layer.grid
    if not grid.in_bounds(x, y) or not layer.visible:
        return 0

    target = grid.get(x, y)
    if target == replacement:
        return 0

    size = grid.size
    stack = [(x, y)]
    visited = {(x, y)}
    filled = 0

    while stack:
        cx, cy = stack.pop()
        if grid.get(cx, cy) != target:
            continue
        grid.set(cx, cy, replacement)
        filled += 1

        for nx, ny in ((cx + 1, cy), (cx - 1, cy), (cx, cy + 1), (cx, cy - 1)):
            if 0 <= nx < size and 0 <= ny < size and (nx, ny) not in visited:
                visited.add((nx, ny))
                stack.append((nx, ny))

    log.debug("flood_fill", layer_id=layer_id, x=x, y=y, cells=filled)
    return filled


def pick_color(doc: Document, x: int, y: int) -> Cell:
    """Return the topmost visible non-empty color at ``(x, y)``.

    Returns ``None`` when no visible layer has color there.
    """
    if not 0 <= x < doc.size or not 0 <= y < doc.size:
        raise OutOfBounds(x, y, doc.size)
    for layer in reversed(doc.layers):
        if not layer.visible:
            continue
        color = layer.grid.get(x, y)
        if color is not None:
            return color
    return None
