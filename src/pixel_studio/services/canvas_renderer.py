"""Canvas renderer -- turns a composited image into a Pillow image.

Sits outside the editing core: it takes a finished ``CompositeImage`` and
produces a pixel-scaled ``PIL.Image`` for display, PNG bytes for export,
or a small thumbnail.  Scaling always uses nearest-neighbour resampling
so cells stay crisp.
"""

from __future__ import annotations

import io

from PIL import Image

from pixel_studio.errors import InvalidArgument
from pixel_studio.models.color import Color
from pixel_studio.services.compositor import CompositeImage


class CanvasRenderer:
    """Rasterizes composited cells at an integer scale."""

    def __init__(self, scale: int = 1, background: Color | None = None) -> None:
        if isinstance(scale, bool) or not isinstance(scale, int) or scale < 1:
            raise InvalidArgument(f"Render scale must be a positive integer, got {scale!r}")
        self.scale = scale
        self.background = background

    def render(self, image: CompositeImage) -> Image.Image:
        """Return an RGBA image of ``size * scale`` pixels per side."""
        canvas = Image.new("RGBA", (image.size, image.size))
        canvas.putdata([px for row in image.rows() for px in row])

        if self.background is not None:
            base = Image.new("RGBA", canvas.size, self.background.as_rgba())
            base.alpha_composite(canvas)
            canvas = base

        if self.scale > 1:
            side = image.size * self.scale
            canvas = canvas.resize((side, side), Image.Resampling.NEAREST)
        return canvas

    def to_png_bytes(self, image: CompositeImage) -> bytes:
        """Export as PNG bytes."""
        buf = io.BytesIO()
        self.render(image).save(buf, format="PNG")
        return buf.getvalue()

    def create_thumbnail(
        self, image: CompositeImage, max_size: tuple[int, int] = (64, 64)
    ) -> bytes:
        """Create a thumbnail PNG."""
        thumb = self.render(image)
        thumb.thumbnail(max_size, Image.Resampling.NEAREST)
        buf = io.BytesIO()
        thumb.save(buf, format="PNG")
        return buf.getvalue()
