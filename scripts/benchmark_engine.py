#!/usr/bin/env python3
"""Timing script for the editing core at the largest grid size.

Times:
    - flood fill of a full 64x64 layer
    - compositing a multi-layer document
    - committing to a full history stack

Outputs a JSON array of ``{operation, grid_size, latency_ms}`` objects.

Exit codes:
    0 -- every operation finished under its budget
    1 -- one or more operations were slower than the budget
"""

from __future__ import annotations

import json
import os
import sys
import time
from collections.abc import Callable
from typing import Any

from pixel_studio.config import MAX_HISTORY
from pixel_studio.logging_setup import configure_logging
from pixel_studio.models import Color, Document
from pixel_studio.services import paint_engine
from pixel_studio.services.compositor import composite
from pixel_studio.services.history import HistoryStack

# ---------------------------------------------------------------------------
# Configuration -- all overridable via environment variables
# ---------------------------------------------------------------------------

GRID_SIZE = int(os.environ.get("BENCH_GRID_SIZE", "64"))
LAYERS = int(os.environ.get("BENCH_LAYERS", "4"))

# Budget in milliseconds for each individual operation.
BUDGET_MS = float(os.environ.get("BENCH_BUDGET_MS", "250"))


def _timed(operation: str, fn: Callable[[], object]) -> dict[str, Any]:
    start = time.monotonic()
    fn()
    latency = round((time.monotonic() - start) * 1000, 2)
    return {
        "operation": operation,
        "grid_size": GRID_SIZE,
        "latency_ms": latency,
        "ok": latency <= BUDGET_MS,
    }


def _build_document() -> Document:
    doc = Document.create(GRID_SIZE)
    for _ in range(LAYERS - 1):
        doc.add_layer()
    return doc


def main() -> int:
    configure_logging(level="WARNING")
    doc = _build_document()
    bottom = doc.layers[0].id
    red = Color(255, 0, 0)

    results = [
        _timed("flood_fill", lambda: paint_engine.flood_fill(doc, bottom, 0, 0, red)),
    ]

    for layer in doc.layers[1:]:
        layer.set_opacity(50)
        paint_engine.flood_fill(doc, layer.id, 0, 0, Color(0, 0, 255, 200))
    results.append(_timed("composite", lambda: composite(doc)))

    history = HistoryStack(MAX_HISTORY)
    history.init(doc)

    def fill_history() -> None:
        for _ in range(MAX_HISTORY * 2):
            history.commit(doc, "bench")

    results.append(_timed("history_commit_x40", fill_history))

    print(json.dumps(results, indent=2))
    return 0 if all(r["ok"] for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
