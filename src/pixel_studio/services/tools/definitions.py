"""Tool definitions for the editor's single-cell tools.

Defines the ``ToolName`` enum and per-tool Pydantic argument models with
strict validation (``extra="forbid"``) so that malformed calls from an
input layer are rejected before anything touches the document.  Colors
travel as hex strings and are converted to ``Color`` values on access.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, Field, StringConstraints

from pixel_studio.models.color import Color


HEX_COLOR_PATTERN = r"^#?[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$"

HexColor = Annotated[str, StringConstraints(pattern=HEX_COLOR_PATTERN)]


class ToolName(str, Enum):
    """Canonical names for every tool the core accepts."""

    PAINT = "paint"
    ERASE = "erase"
    FILL = "fill"
    PICK = "pick"


# ---------------------------------------------------------------------------
# Per-tool argument models
# ---------------------------------------------------------------------------

class PaintArgs(BaseModel, extra="forbid"):
    """Arguments for the paint tool."""

    layer_id: Optional[str] = Field(
        default=None, description="Target layer; defaults to the active layer"
    )
    x: int = Field(ge=0, description="X coordinate")
    y: int = Field(ge=0, description="Y coordinate")
    color: Optional[HexColor] = Field(
        default=None, description="Hex color; defaults to the selected color"
    )

    def resolved_color(self) -> Color | None:
        return Color.from_hex(self.color) if self.color is not None else None


class EraseArgs(BaseModel, extra="forbid"):
    """Arguments for the erase tool."""

    layer_id: Optional[str] = None
    x: int = Field(ge=0)
    y: int = Field(ge=0)


class FillArgs(BaseModel, extra="forbid"):
    """Arguments for the fill tool."""

    layer_id: Optional[str] = None
    x: int = Field(ge=0)
    y: int = Field(ge=0)
    color: Optional[HexColor] = None

    def resolved_color(self) -> Color | None:
        return Color.from_hex(self.color) if self.color is not None else None


class PickArgs(BaseModel, extra="forbid"):
    """Arguments for the pick tool.  Picking reads every visible layer."""

    x: int = Field(ge=0)
    y: int = Field(ge=0)
