"""Tests for the bounded undo/redo history."""

from __future__ import annotations

import pytest

from pixel_studio.config import MAX_HISTORY
from pixel_studio.errors import InvalidArgument
from pixel_studio.models import Color, Document
from pixel_studio.services import paint_engine
from pixel_studio.services.history import HistoryStack


RED = Color(255, 0, 0)
BLUE = Color(0, 0, 255)


def _stack(doc: Document, capacity: int = MAX_HISTORY) -> HistoryStack:
    history = HistoryStack(capacity)
    history.init(doc)
    return history


def _marker(doc: Document, n: int) -> None:
    """Paint a distinct color at (0, 0) so every commit is distinguishable."""
    paint_engine.paint(doc, doc.layers[0].id, 0, 0, Color(n, 0, 0))


class TestInit:
    def test_single_entry_at_cursor_zero(self, doc):
        history = _stack(doc)
        assert len(history) == 1
        assert history.cursor == 0
        assert history.can_undo() is False
        assert history.can_redo() is False

    def test_uninitialised_stack(self, doc):
        history = HistoryStack()
        assert history.undo() is None
        assert history.redo() is None
        assert history.current() is None
        history.commit(doc)
        assert len(history) == 1
        assert history.cursor == 0

    @pytest.mark.parametrize("capacity", [0, -1, True])
    def test_invalid_capacity(self, capacity):
        with pytest.raises(InvalidArgument):
            HistoryStack(capacity)


class TestUndoRedo:
    def test_paint_undo_redo_scenario(self, doc):
        layer_id = doc.layers[0].id
        history = _stack(doc)

        paint_engine.paint(doc, layer_id, 0, 0, RED)
        history.commit(doc, "paint")
        paint_engine.paint(doc, layer_id, 0, 0, BLUE)
        history.commit(doc, "paint")

        doc = history.undo()
        assert doc.layers[0].grid.get(0, 0) == RED
        doc = history.undo()
        assert doc.layers[0].grid.get(0, 0) is None

        history.redo()
        doc = history.redo()
        assert doc.layers[0].grid.get(0, 0) == BLUE

    def test_undo_at_oldest_is_noop(self, doc):
        history = _stack(doc)
        assert history.undo() is None
        assert history.cursor == 0

    def test_redo_at_newest_is_noop(self, doc):
        history = _stack(doc)
        _marker(doc, 1)
        history.commit(doc)
        assert history.redo() is None
        assert history.cursor == 1

    def test_undo_then_redo_round_trip(self, doc):
        history = _stack(doc)
        for n in range(1, 6):
            _marker(doc, n)
            history.commit(doc)
        before = doc.copy()

        history.undo()
        restored = history.redo()

        assert restored == before

    def test_commit_discards_redo_branch(self, doc):
        history = _stack(doc)
        for n in range(1, 4):
            _marker(doc, n)
            history.commit(doc)
        history.undo()
        doc = history.undo()

        _marker(doc, 99)
        history.commit(doc)

        assert len(history) == 3
        assert history.cursor == 2
        assert history.redo() is None
        assert history.current().layers[0].grid.get(0, 0) == Color(99, 0, 0)

    def test_restores_grid_size_and_layers(self, doc):
        history = _stack(doc)
        doc.add_layer()
        doc.resize(16)
        history.commit(doc)

        restored = history.undo()

        assert restored.size == 8
        assert len(restored) == 1


class TestCapacity:
    def test_oldest_entries_evicted(self, doc):
        capacity = 20
        history = _stack(doc, capacity)
        k = 5
        for n in range(1, capacity + k + 1):
            _marker(doc, n)
            history.commit(doc)

        assert len(history) == capacity
        assert history.cursor == capacity - 1
        assert history.get_stats()["full"] is True

        oldest = None
        steps = 0
        while True:
            restored = history.undo()
            if restored is None:
                break
            oldest = restored
            steps += 1

        assert steps == capacity - 1
        # The oldest survivor is commit number k + 1; the initial state is gone.
        assert oldest.layers[0].grid.get(0, 0) == Color(k + 1, 0, 0)

    def test_cursor_tracks_just_committed_entry(self, doc):
        history = _stack(doc, capacity=3)
        for n in range(1, 10):
            _marker(doc, n)
            history.commit(doc)
            assert history.current().layers[0].grid.get(0, 0) == Color(n, 0, 0)
        assert len(history) == 3


class TestIndependence:
    def test_mutating_live_document_does_not_touch_history(self, doc):
        history = _stack(doc)
        _marker(doc, 1)
        history.commit(doc)

        _marker(doc, 2)
        doc.add_layer()

        current = history.current()
        assert current.layers[0].grid.get(0, 0) == Color(1, 0, 0)
        assert len(current) == 1

    def test_mutating_restored_copy_does_not_touch_history(self, doc):
        history = _stack(doc)
        _marker(doc, 1)
        history.commit(doc)

        restored = history.undo()
        _marker(restored, 50)
        again = history.redo()
        back = history.undo()

        assert again.layers[0].grid.get(0, 0) == Color(1, 0, 0)
        assert back.layers[0].grid.get(0, 0) is None

    def test_layer_ids_stable_across_snapshots(self, doc):
        history = _stack(doc)
        ids = [layer.id for layer in doc]
        doc.resize(32)
        history.commit(doc)
        assert [layer.id for layer in history.undo()] == ids
        assert [layer.id for layer in history.redo()] == ids


class TestStats:
    def test_labels_and_stats(self, doc):
        history = _stack(doc, capacity=5)
        history.commit(doc, "paint")
        history.commit(doc, "fill")
        assert history.labels() == ["init", "paint", "fill"]
        assert history.get_stats() == {
            "entries": 3,
            "cursor": 2,
            "capacity": 5,
            "full": False,
        }
