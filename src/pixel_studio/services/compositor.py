"""Compositor -- flattens visible layers into a single RGBA image.

Layers are blended bottom-to-top with the straight-alpha "over" operator.
The source alpha of a cell is its color alpha scaled by the layer's
opacity.  Hidden layers are skipped entirely.
"""

from __future__ import annotations

from dataclasses import dataclass

from pixel_studio.models.color import RGBA, TRANSPARENT
from pixel_studio.models.document import Document


@dataclass(frozen=True)
class CompositeImage:
    """Immutable ``size x size`` RGBA result, indexed ``pixels[y][x]``."""

    size: int
    pixels: tuple[tuple[RGBA, ...], ...]

    def pixel(self, x: int, y: int) -> RGBA:
        return self.pixels[y][x]

    def rows(self) -> tuple[tuple[RGBA, ...], ...]:
        return self.pixels


def _over(dst: list[float], src: RGBA, opacity: float) -> None:
    """Blend *src* over the float accumulator *dst* (r, g, b, a) in place."""
    sa = (src[3] / 255.0) * opacity
    if sa <= 0.0:
        return
    da = dst[3]
    out_a = sa + da * (1.0 - sa)
    for i in range(3):
        dst[i] = (src[i] * sa + dst[i] * da * (1.0 - sa)) / out_a
    dst[3] = out_a


def _to_rgba(acc: list[float]) -> RGBA:
    if acc[3] <= 0.0:
        return TRANSPARENT
    return (
        int(round(acc[0])),
        int(round(acc[1])),
        int(round(acc[2])),
        int(round(acc[3] * 255.0)),
    )


def composite(doc: Document) -> CompositeImage:
    """Flatten *doc* into a ``CompositeImage``.  Pure: no mutation."""
    visible = [
        (layer.grid.rows(), layer.opacity / 100.0)
        for layer in doc.layers
        if layer.visible
    ]

    rows: list[tuple[RGBA, ...]] = []
    for y in range(doc.size):
        row: list[RGBA] = []
        for x in range(doc.size):
            acc = [0.0, 0.0, 0.0, 0.0]
            for cells, opacity in visible:
                color = cells[y][x]
                if color is not None:
                    _over(acc, color.as_rgba(), opacity)
            row.append(_to_rgba(acc))
        rows.append(tuple(row))

    return CompositeImage(size=doc.size, pixels=tuple(rows))
