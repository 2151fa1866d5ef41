"""Layer -- a grid plus display metadata.

Opacity is an integer percentage.  Out-of-range or non-integer values
raise ``InvalidArgument``; nothing is clamped.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from pixel_studio.errors import InvalidArgument
from pixel_studio.models.grid import Grid


def generate_layer_id() -> str:
    return uuid.uuid4().hex[:12]


def _check_opacity(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"Opacity must be an integer, got {value!r}")
    if not 0 <= value <= 100:
        raise InvalidArgument(f"Opacity {value} out of range 0-100")
    return value


@dataclass(eq=True)
class Layer:
    """A named, independently visible, opacity-controlled grid."""

    name: str
    grid: Grid
    visible: bool = True
    opacity: int = 100
    id: str = field(default_factory=generate_layer_id)

    def __post_init__(self) -> None:
        _check_opacity(self.opacity)

    @property
    def size(self) -> int:
        return self.grid.size

    def toggle_visible(self) -> bool:
        self.visible = not self.visible
        return self.visible

    def set_opacity(self, value: int) -> None:
        self.opacity = _check_opacity(value)

    def copy(self) -> Layer:
        """Deep copy; the id is preserved."""
        return Layer(
            name=self.name,
            grid=self.grid.copy(),
            visible=self.visible,
            opacity=self.opacity,
            id=self.id,
        )

    def __repr__(self) -> str:
        return (
            f"Layer({self.name!r}, id={self.id!r}, visible={self.visible}, "
            f"opacity={self.opacity})"
        )
