"""Executor functions for each editor tool.

Every executor has the signature:
    (doc: Document, args: <ToolArgs>, ctx: ToolContext) -> ToolOutput

Arguments have already been validated and bounds-checked by the session;
executors only translate them into paint-engine calls and describe the
result.
"""

from __future__ import annotations

from dataclasses import dataclass

from pixel_studio.models.color import Color
from pixel_studio.models.document import Document
from pixel_studio.services import paint_engine
from pixel_studio.services.tools.definitions import (
    EraseArgs,
    FillArgs,
    PaintArgs,
    PickArgs,
)


@dataclass(frozen=True)
class ToolContext:
    """Session state an executor may fall back on."""

    active_layer_id: str
    selected_color: Color


@dataclass
class ToolOutput:
    message: str
    changed: bool = False
    picked: Color | None = None


def _describe(color: Color | None) -> str:
    return color.to_hex() if color is not None else "empty"


def execute_paint(doc: Document, args: PaintArgs, ctx: ToolContext) -> ToolOutput:
    """Paint a single cell on the target layer."""
    layer_id = args.layer_id or ctx.active_layer_id
    color = args.resolved_color() or ctx.selected_color
    changed = paint_engine.paint(doc, layer_id, args.x, args.y, color)
    if not changed:
        return ToolOutput(f"No change at ({args.x}, {args.y})")
    return ToolOutput(
        f"Pixel set at ({args.x}, {args.y}) to {_describe(color)}",
        changed=True,
    )


def execute_erase(doc: Document, args: EraseArgs, ctx: ToolContext) -> ToolOutput:
    """Clear a single cell on the target layer."""
    layer_id = args.layer_id or ctx.active_layer_id
    changed = paint_engine.erase(doc, layer_id, args.x, args.y)
    if not changed:
        return ToolOutput(f"No change at ({args.x}, {args.y})")
    return ToolOutput(f"Pixel erased at ({args.x}, {args.y})", changed=True)


def execute_fill(doc: Document, args: FillArgs, ctx: ToolContext) -> ToolOutput:
    """Flood-fill from a seed cell with the given (or selected) color."""
    layer_id = args.layer_id or ctx.active_layer_id
    color = args.resolved_color() or ctx.selected_color
    filled = paint_engine.flood_fill(doc, layer_id, args.x, args.y, color)
    return ToolOutput(
        f"Flood fill from ({args.x}, {args.y}) with {_describe(color)} "
        f"recolored {filled} cells",
        changed=filled > 0,
    )


def execute_pick(doc: Document, args: PickArgs, ctx: ToolContext) -> ToolOutput:
    """Read the topmost visible color at a cell."""
    picked = paint_engine.pick_color(doc, args.x, args.y)
    if picked is None:
        return ToolOutput(f"No color at ({args.x}, {args.y})")
    return ToolOutput(
        f"Picked {_describe(picked)} at ({args.x}, {args.y})",
        picked=picked,
    )
