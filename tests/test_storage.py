"""
Tests for galadeck.utils.storage, signals and scheduler.
"""

import json

import pytest

from galadeck.errors import StorageError
from galadeck.utils.scheduler import TimerQueue
from galadeck.utils.signals import Signal
from galadeck.utils.storage import LocalStorage


# ---------------------------------------------------------------------------
# LocalStorage
# ---------------------------------------------------------------------------

class TestLocalStorage:

    def test_missing_key_is_none(self, storage):
        assert storage.get("slides") is None

    def test_set_then_get(self, storage):
        storage.set("audio-source", "music/track.mp3")
        assert storage.get("audio-source") == "music/track.mp3"
        assert storage.path_for("audio-source").name == "audio-source.json"

    def test_corrupt_file_raises_storage_error(self, storage):
        storage.path_for("slides").write_text("{not json", encoding="utf-8")
        with pytest.raises(StorageError):
            storage.get("slides")

    def test_unserializable_value_leaves_previous_record(self, storage):
        storage.set("slides", [1, 2])
        with pytest.raises(StorageError):
            storage.set("slides", [object()])
        assert storage.get("slides") == [1, 2]

    def test_written_file_is_json(self, storage):
        storage.set("slides", [{"id": 1}])
        with open(storage.path_for("slides"), encoding="utf-8") as f:
            assert json.load(f) == [{"id": 1}]

    def test_remove_and_clear(self, storage):
        storage.set("a", 1)
        storage.set("b", 2)
        storage.remove("a")
        storage.remove("a")
        assert storage.get("a") is None
        storage.clear()
        assert storage.get("b") is None

    def test_clear_on_missing_directory(self, tmp_path):
        LocalStorage(tmp_path / "nowhere").clear()


# ---------------------------------------------------------------------------
# Signal
# ---------------------------------------------------------------------------

class TestSignal:

    def test_emit_reaches_all_handlers(self):
        signal = Signal()
        calls = []
        signal.connect(lambda x: calls.append(("a", x)))
        signal.connect(lambda x: calls.append(("b", x)))
        signal.emit(3)
        assert calls == [("a", 3), ("b", 3)]

    def test_cancel_is_idempotent(self):
        signal = Signal()
        calls = []
        sub = signal.connect(calls.append)
        sub.cancel()
        sub.cancel()
        signal.emit(1)
        assert calls == []
        assert not sub.active
        assert len(signal) == 0

    def test_connect_once_fires_once(self):
        signal = Signal()
        calls = []
        sub = signal.connect_once(calls.append)
        signal.emit(1)
        signal.emit(2)
        assert calls == [1]
        assert not sub.active

    def test_handler_cancelling_a_later_handler(self):
        signal = Signal()
        calls = []
        later = None

        def first():
            calls.append("first")
            later.cancel()

        signal.connect(first)
        later = signal.connect(lambda: calls.append("later"))
        signal.emit()
        assert calls == ["first"]


# ---------------------------------------------------------------------------
# TimerQueue
# ---------------------------------------------------------------------------

class TestTimerQueue:

    def test_runs_only_due_callbacks_in_order(self, clock):
        timers = TimerQueue(clock)
        calls = []
        timers.call_later(0.5, lambda: calls.append("late"))
        timers.call_later(0.1, lambda: calls.append("early"))

        clock.advance(0.2)
        assert timers.run_due() == 1
        clock.advance(0.5)
        assert timers.run_due() == 1
        assert calls == ["early", "late"]

    def test_cancelled_callback_never_runs(self, clock):
        timers = TimerQueue(clock)
        calls = []
        handle = timers.call_later(0.1, lambda: calls.append(1))
        handle.cancel()
        handle.cancel()
        clock.advance(1)
        assert timers.run_due() == 0
        assert calls == []
        assert not handle.pending

    def test_pending_count_and_clear(self, clock):
        timers = TimerQueue(clock)
        timers.call_later(1, lambda: None)
        timers.call_later(2, lambda: None)
        assert timers.pending_count() == 2
        timers.clear()
        assert timers.pending_count() == 0
