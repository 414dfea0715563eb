"""
Shared fixtures for the GalaDeck test suite.
"""

import os
import tempfile

# Keep Config's data directory out of the project tree
os.environ.setdefault("GALADECK_DATA_DIR", tempfile.mkdtemp(prefix="galadeck-test-"))
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from galadeck.core.quiz_topology import QuizTopology
from galadeck.core.slide_store import SlideStore
from galadeck.errors import PlaybackRejectedError
from galadeck.utils.signals import Signal
from galadeck.utils.storage import LocalStorage


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeAudioElement:
    """Records commands instead of playing sound."""

    def __init__(self, loaded: bool = True):
        self.source = None
        self.loop = False
        self.metadata_ready = Signal("metadata_ready")
        self.paused = True
        self.sources = []
        self.cues = []
        self.play_calls = 0
        self.pause_calls = 0
        self.reject = 0
        self._loaded = loaded

    @property
    def metadata_loaded(self) -> bool:
        return self._loaded

    def set_source(self, source):
        self.source = source
        self.sources.append(source)

    def cue(self, seconds):
        self.cues.append(seconds)

    def play(self):
        self.play_calls += 1
        if self.reject > 0:
            self.reject -= 1
            raise PlaybackRejectedError("autoplay blocked")
        self.paused = False

    def pause(self):
        self.pause_calls += 1
        self.paused = True

    def finish_loading(self):
        self._loaded = True
        self.metadata_ready.emit()


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path)


@pytest.fixture
def topology():
    return QuizTopology(board=17, first_question=18, last_question=42, post_quiz=43, credits=44)


@pytest.fixture
def store(storage):
    return SlideStore(storage)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def element():
    return FakeAudioElement()


@pytest.fixture
def unloaded_element():
    return FakeAudioElement(loaded=False)
