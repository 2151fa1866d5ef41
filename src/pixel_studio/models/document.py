"""Document -- the ordered layer stack plus the shared grid size.

Layer order is z-order: index 0 is the bottom, the last index is the top.
A document always holds at least one layer and every layer grid has the
document's size.
"""

from __future__ import annotations

from collections.abc import Iterator

from pixel_studio.errors import InvalidArgument, LastLayerError, LayerNotFound
from pixel_studio.models.grid import Grid
from pixel_studio.models.layer import Layer


class Document:
    """Full editable state: grid size and ordered layers."""

    def __init__(self, size: int, layers: list[Layer]) -> None:
        if not layers:
            raise InvalidArgument("A document needs at least one layer")
        ids = [layer.id for layer in layers]
        if len(set(ids)) != len(ids):
            raise InvalidArgument("Layer ids must be unique within a document")
        for layer in layers:
            if layer.size != size:
                raise InvalidArgument(
                    f"Layer {layer.id!r} has size {layer.size}, document size is {size}"
                )
        self.size = size
        self.layers: list[Layer] = layers

    @classmethod
    def create(cls, size: int = 16) -> Document:
        """Build a new document holding a single empty layer."""
        return cls(size, [Layer(name="Layer 1", grid=Grid(size))])

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def index_of(self, layer_id: str) -> int:
        for index, layer in enumerate(self.layers):
            if layer.id == layer_id:
                return index
        raise LayerNotFound(layer_id)

    def get_layer(self, layer_id: str) -> Layer:
        return self.layers[self.index_of(layer_id)]

    def has_layer(self, layer_id: str) -> bool:
        return any(layer.id == layer_id for layer in self.layers)

    def top_layer(self) -> Layer:
        return self.layers[-1]

    # ------------------------------------------------------------------
    # Layer lifecycle
    # ------------------------------------------------------------------

    def add_layer(self, name: str | None = None) -> str:
        """Append an empty layer on top and return its id."""
        layer = Layer(
            name=name or f"Layer {len(self.layers) + 1}",
            grid=Grid(self.size),
        )
        self.layers.append(layer)
        return layer.id

    def delete_layer(self, layer_id: str) -> Layer:
        """Remove and return a layer.

        Raises ``LastLayerError`` (leaving the document untouched) when it
        is the only layer.  Choosing a new active layer is up to the caller.
        """
        index = self.index_of(layer_id)
        if len(self.layers) <= 1:
            raise LastLayerError("Cannot delete the only layer in the document")
        return self.layers.pop(index)

    def toggle_visibility(self, layer_id: str) -> bool:
        return self.get_layer(layer_id).toggle_visible()

    def set_opacity(self, layer_id: str, value: int) -> None:
        self.get_layer(layer_id).set_opacity(value)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def resize(self, new_size: int) -> None:
        """Resize every layer grid, top-left aligned.  No-op if unchanged."""
        if isinstance(new_size, bool) or not isinstance(new_size, int) or new_size < 1:
            raise InvalidArgument(
                f"Grid size must be a positive integer, got {new_size!r}"
            )
        if new_size == self.size:
            return
        for layer in self.layers:
            layer.grid = layer.grid.resize(new_size)
        self.size = new_size

    # ------------------------------------------------------------------
    # Copies / dunder
    # ------------------------------------------------------------------

    def copy(self) -> Document:
        """Deep, independent copy with the same layer ids."""
        return Document(self.size, [layer.copy() for layer in self.layers])

    def __iter__(self) -> Iterator[Layer]:
        return iter(self.layers)

    def __len__(self) -> int:
        return len(self.layers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self.size == other.size and self.layers == other.layers

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Document(size={self.size}, layers={len(self.layers)})"
