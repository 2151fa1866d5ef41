"""RGBA color value and the default swatch palette.

A grid cell holds ``Optional[Color]``: ``None`` is the empty, fully
transparent cell.  Colors compare by value and are hashable, so they can
be used directly as flood-fill targets and in sets.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from pixel_studio.errors import InvalidArgument


_HEX_RE = re.compile(r"^#?(?P<rgb>[0-9a-fA-F]{6})(?P<alpha>[0-9a-fA-F]{2})?$")

RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class Color:
    """An RGBA color with 8-bit channels.  Alpha defaults to opaque."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgument(
                    f"Color channel {name} must be an int, got {value!r}"
                )
            if not 0 <= value <= 255:
                raise InvalidArgument(
                    f"Color channel {name}={value} out of range 0-255"
                )

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#rrggbb`` or ``#rrggbbaa`` (leading ``#`` optional)."""
        match = _HEX_RE.match(value.strip()) if isinstance(value, str) else None
        if match is None:
            raise InvalidArgument(f"Invalid hex color: {value!r}")
        rgb = match.group("rgb")
        alpha = match.group("alpha")
        return cls(
            int(rgb[0:2], 16),
            int(rgb[2:4], 16),
            int(rgb[4:6], 16),
            int(alpha, 16) if alpha else 255,
        )

    def to_hex(self) -> str:
        base = f"#{self.r:02x}{self.g:02x}{self.b:02x}"
        if self.a != 255:
            return f"{base}{self.a:02x}"
        return base

    def as_rgba(self) -> RGBA:
        return (self.r, self.g, self.b, self.a)


# Cell type alias: None means "empty".
Cell = Optional[Color]

TRANSPARENT: RGBA = (0, 0, 0, 0)

PALETTE: tuple[Color, ...] = tuple(
    Color.from_hex(h)
    for h in (
        "#000000", "#1a1c2c", "#5d275d", "#b13e53",
        "#ef7d57", "#ffcd75", "#a7f070", "#38b764",
        "#257179", "#29366f", "#3b5dc9", "#41a6f6",
        "#73eff7", "#f4f4f4", "#94b0c2", "#566c86",
        "#333c57", "#ffffff", "#ff0044", "#00ff99",
        "#ffff00", "#00ccff", "#9900ff", "#ff6600",
    )
)

DEFAULT_COLOR = Color.from_hex("#ff6b00")
