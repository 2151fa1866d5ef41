"""Editor session -- validates tool calls and owns the commit policy.

The session holds the authoritative ``Document`` reference and threads it
through the paint engine, compositor and history stack.  Tool calls go
through a strict validation chain before anything is mutated:

1. **Tool name** -- must be a valid ``ToolName`` enum member.
2. **Args** -- Pydantic strict validation (``extra="forbid"``).
3. **Layer** -- the target layer must exist in the current document.
4. **Bounds** -- x/y must fall inside the grid.
5. **Execute** -- static dispatch table only (no ``getattr`` / ``eval``).

Commits happen at gesture and structural-edit boundaries, never per cell:
a paint/erase drag commits once on pointer-up, fill commits on the click,
layer and resize edits commit immediately, and opacity changes commit
only when the caller says the slider was released.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import BaseModel, ValidationError

from pixel_studio.config import GRID_SIZE_OPTIONS, MAX_HISTORY, settings
from pixel_studio.errors import EditorError, InvalidArgument, LayerNotFound
from pixel_studio.models.color import DEFAULT_COLOR, Color
from pixel_studio.models.document import Document
from pixel_studio.services.canvas_renderer import CanvasRenderer
from pixel_studio.services.compositor import CompositeImage, composite
from pixel_studio.services.history import HistoryStack
from pixel_studio.services.tools.definitions import (
    EraseArgs,
    FillArgs,
    PaintArgs,
    PickArgs,
    ToolName,
)
from pixel_studio.services.tools.executors import (
    ToolContext,
    ToolOutput,
    execute_erase,
    execute_fill,
    execute_paint,
    execute_pick,
)


log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Result data classes
# ---------------------------------------------------------------------------

@dataclass
class ToolCallResult:
    """Outcome of a single tool-call attempt."""

    tool_name: str
    success: bool
    message: str
    changed: bool = False
    picked: Color | None = None


@dataclass(frozen=True)
class CanvasInfo:
    """Summary figures for a properties panel."""

    size: int
    layers: int
    total_pixels: int

    @property
    def dimensions(self) -> str:
        return f"{self.size} x {self.size}"


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

class EditorSession:
    """One editing session over a single document.

    The class keeps a static ``DISPATCH`` table that maps each
    ``ToolName`` to a ``(ArgsModel, executor_fn)`` pair.
    """

    DISPATCH: dict[ToolName, tuple[type[BaseModel], Callable[..., ToolOutput]]] = {
        ToolName.PAINT: (PaintArgs, execute_paint),
        ToolName.ERASE: (EraseArgs, execute_erase),
        ToolName.FILL: (FillArgs, execute_fill),
        ToolName.PICK: (PickArgs, execute_pick),
    }

    def __init__(
        self,
        grid_size: int | None = None,
        history_capacity: int = MAX_HISTORY,
    ) -> None:
        self.document = Document.create(grid_size or settings.DEFAULT_GRID_SIZE)
        self.history = HistoryStack(history_capacity)
        self.history.init(self.document)

        self.active_layer_id: str = self.document.top_layer().id
        self.selected_color: Color = DEFAULT_COLOR
        self.tool: ToolName = ToolName.PAINT

        self.drawing: bool = False
        self._gesture_changed: bool = False
        self._opacity_dirty: bool = False

    # ------------------------------------------------------------------
    # Tool calls
    # ------------------------------------------------------------------

    def execute(self, tool_name_str: str, raw_args: dict[str, Any]) -> ToolCallResult:
        """Validate and execute a single tool call without committing.

        Returns a ``ToolCallResult`` regardless of success or failure so
        input handlers never need to handle exceptions from this layer.
        """
        try:
            tool_name = ToolName(tool_name_str)
        except ValueError:
            return self._reject(tool_name_str, f"Unknown tool: {tool_name_str!r}")

        args_model_cls, executor_fn = self.DISPATCH[tool_name]

        try:
            args = args_model_cls.model_validate(raw_args)
        except ValidationError as exc:
            return self._reject(tool_name_str, f"Argument validation failed: {exc}")

        bounds_error = self._check_target(args)
        if bounds_error is not None:
            return self._reject(tool_name_str, bounds_error)

        ctx = ToolContext(
            active_layer_id=self.active_layer_id,
            selected_color=self.selected_color,
        )
        try:
            output = executor_fn(self.document, args, ctx)
        except EditorError as exc:
            return self._reject(tool_name_str, str(exc))

        if output.picked is not None:
            self.selected_color = output.picked

        log.debug(
            "tool_call",
            tool=tool_name.value,
            changed=output.changed,
            message=output.message,
        )
        return ToolCallResult(
            tool_name=tool_name_str,
            success=True,
            message=output.message,
            changed=output.changed,
            picked=output.picked,
        )

    def _reject(self, tool_name_str: str, message: str) -> ToolCallResult:
        log.info("tool_call_rejected", tool=tool_name_str, reason=message)
        return ToolCallResult(tool_name=tool_name_str, success=False, message=message)

    def _check_target(self, args: BaseModel) -> str | None:
        """Return an error message if the layer is missing or x/y is outside the grid."""
        layer_id = getattr(args, "layer_id", None)
        if layer_id is not None and not self.document.has_layer(layer_id):
            return str(LayerNotFound(layer_id))

        size = self.document.size
        for attr_name in ("x", "y"):
            value = getattr(args, attr_name)
            if value >= size:
                return (
                    f"Coordinate {attr_name}={value} is out of bounds "
                    f"(grid size={size})"
                )
        return None

    # ------------------------------------------------------------------
    # Pointer gestures
    # ------------------------------------------------------------------

    def pointer_down(self, x: int, y: int) -> ToolCallResult:
        """Start a gesture with the current tool at ``(x, y)``."""
        if self.drawing and self._gesture_changed:
            # The previous gesture never saw a pointer-up.
            self.commit(self.tool.value)
        self.drawing = True
        self._gesture_changed = False

        result = self._apply_current_tool(x, y)
        if self.tool is ToolName.FILL:
            # A fill is a whole gesture on its own.
            self.drawing = False
            if result.changed:
                self.commit("fill")
        elif self.tool is ToolName.PICK:
            self.drawing = False
            if result.picked is not None:
                self.tool = ToolName.PAINT
        return result

    def pointer_move(self, x: int, y: int) -> ToolCallResult | None:
        """Continue a paint/erase drag; ignored outside a gesture."""
        if not self.drawing or self.tool not in (ToolName.PAINT, ToolName.ERASE):
            return None
        return self._apply_current_tool(x, y)

    def pointer_up(self) -> bool:
        """End the gesture; commits once if anything changed."""
        if not self.drawing:
            return False
        self.drawing = False
        if not self._gesture_changed:
            return False
        self._gesture_changed = False
        self.commit(self.tool.value)
        return True

    def _apply_current_tool(self, x: int, y: int) -> ToolCallResult:
        raw_args: dict[str, Any] = {"x": x, "y": y}
        result = self.execute(self.tool.value, raw_args)
        if result.changed:
            self._gesture_changed = True
        return result

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_layer(self, layer_id: str) -> None:
        try:
            self.document.get_layer(layer_id)
        except EditorError as exc:
            log.warning("layer_select_failed", layer_id=layer_id, error=str(exc))
            raise
        self.active_layer_id = layer_id

    def select_tool(self, tool_name: str | ToolName) -> None:
        try:
            self.tool = ToolName(tool_name)
        except ValueError:
            raise InvalidArgument(f"Unknown tool: {tool_name!r}") from None

    def select_color(self, color: Color | str) -> None:
        self.selected_color = Color.from_hex(color) if isinstance(color, str) else color

    # ------------------------------------------------------------------
    # Structural edits
    # ------------------------------------------------------------------

    def add_layer(self, name: str | None = None) -> str:
        layer_id = self.document.add_layer(name)
        self.active_layer_id = layer_id
        log.info("layer_added", layer_id=layer_id, layers=len(self.document))
        self.commit("add_layer")
        return layer_id

    def delete_layer(self, layer_id: str) -> None:
        try:
            self.document.delete_layer(layer_id)
        except EditorError as exc:
            log.warning("layer_delete_failed", layer_id=layer_id, error=str(exc))
            raise
        if self.active_layer_id == layer_id:
            self.active_layer_id = self.document.top_layer().id
        log.info("layer_deleted", layer_id=layer_id, layers=len(self.document))
        self.commit("delete_layer")

    def toggle_layer_visibility(self, layer_id: str) -> bool:
        try:
            visible = self.document.toggle_visibility(layer_id)
        except EditorError as exc:
            log.warning("layer_toggle_failed", layer_id=layer_id, error=str(exc))
            raise
        self.commit("toggle_visibility")
        return visible

    def set_layer_opacity(self, layer_id: str, opacity: int) -> None:
        """Change opacity live; call ``commit_layer_opacity`` on release."""
        try:
            self.document.set_opacity(layer_id, opacity)
        except EditorError as exc:
            log.warning(
                "layer_opacity_failed", layer_id=layer_id, opacity=opacity, error=str(exc)
            )
            raise
        self._opacity_dirty = True

    def commit_layer_opacity(self) -> bool:
        if not self._opacity_dirty:
            return False
        self.commit("opacity")
        return True

    def change_grid_size(self, size: int) -> bool:
        if size not in GRID_SIZE_OPTIONS:
            raise InvalidArgument(
                f"Grid size must be one of {GRID_SIZE_OPTIONS}, got {size!r}"
            )
        if size == self.document.size:
            return False
        old_size = self.document.size
        self.document.resize(size)
        log.info("grid_resized", old_size=old_size, new_size=size)
        self.commit("resize")
        return True

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def commit(self, label: str = "edit") -> None:
        # Any pending opacity change is captured by this snapshot.
        self._opacity_dirty = False
        self.history.commit(self.document, label)

    def undo(self) -> bool:
        return self._restore(self.history.undo(), "undo")

    def redo(self) -> bool:
        return self._restore(self.history.redo(), "redo")

    def _restore(self, restored: Document | None, action: str) -> bool:
        if restored is None:
            return False
        self.document = restored
        self.drawing = False
        self._gesture_changed = False
        self._opacity_dirty = False
        if not self.document.has_layer(self.active_layer_id):
            self.active_layer_id = self.document.top_layer().id
        log.info(action, cursor=self.history.cursor, entries=len(self.history))
        return True

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def composite(self) -> CompositeImage:
        return composite(self.document)

    def canvas_info(self) -> CanvasInfo:
        size = self.document.size
        return CanvasInfo(
            size=size,
            layers=len(self.document),
            total_pixels=size * size,
        )

    def export_png(self, scale: int | None = None) -> bytes:
        """Composite and encode as a pixel-scaled PNG on the export background."""
        renderer = CanvasRenderer(
            scale=scale or settings.EXPORT_SCALE,
            background=Color.from_hex(settings.EXPORT_BACKGROUND),
        )
        return renderer.to_png_bytes(self.composite())
