"""
Tests for galadeck.core.playback_sync and galadeck.core.audio_registry

Covers:
  - credits cue/play and pause elsewhere
  - retry-on-gesture after a refused play, with its stale-retry guard
  - deferral until audio metadata is ready
  - audio source persistence and teardown
"""

from unittest import mock

import pytest

from galadeck.core.audio_registry import AUDIO_SOURCE_KEY, AudioTrackRegistry
from galadeck.core.navigation import NavigationController
from galadeck.core.playback_sync import PlaybackSynchronizer
from galadeck.errors import StorageError
from galadeck.utils.signals import Signal
from galadeck.utils.storage import LocalStorage


@pytest.fixture
def nav(store, topology):
    return NavigationController(store, topology)


@pytest.fixture
def registry(storage):
    return AudioTrackRegistry(storage, default_source="bgm.mp3")


@pytest.fixture
def gestures():
    return Signal("gesture")


@pytest.fixture
def make_sync(nav, registry, gestures):
    def _make(element, **kwargs):
        return PlaybackSynchronizer(nav, registry, element, gestures, cue_seconds=30.0, **kwargs)
    return _make


# ---------------------------------------------------------------------------
# AudioTrackRegistry
# ---------------------------------------------------------------------------

class TestAudioTrackRegistry:

    def test_default_source(self, registry):
        assert registry.source == "bgm.mp3"
        assert not registry.is_user_supplied

    def test_set_source_persists(self, storage, registry):
        registry.set_source("/music/party.ogg")
        assert storage.get(AUDIO_SOURCE_KEY) == "/music/party.ogg"
        assert AudioTrackRegistry(storage, default_source="bgm.mp3").source == "/music/party.ogg"
        assert registry.is_user_supplied

    def test_source_changed_fires_on_change_only(self, registry):
        changes = []
        registry.source_changed.connect(changes.append)
        registry.set_source("a.mp3")
        registry.set_source("a.mp3")
        assert changes == ["a.mp3"]

    def test_empty_source_ignored(self, registry):
        registry.set_source("")
        assert registry.source == "bgm.mp3"

    def test_corrupt_record_uses_default(self, storage):
        storage.path_for(AUDIO_SOURCE_KEY).write_text("{", encoding="utf-8")
        assert AudioTrackRegistry(storage, default_source="bgm.mp3").source == "bgm.mp3"

    def test_non_string_record_uses_default(self, storage):
        storage.set(AUDIO_SOURCE_KEY, 12)
        assert AudioTrackRegistry(storage, default_source="bgm.mp3").source == "bgm.mp3"

    def test_save_failure_is_silent(self):
        storage = mock.Mock(spec=LocalStorage)
        storage.get.return_value = None
        storage.set.side_effect = StorageError("read-only")
        registry = AudioTrackRegistry(storage, default_source="bgm.mp3")
        registry.set_source("new.mp3")
        assert registry.source == "new.mp3"


# ---------------------------------------------------------------------------
# Credits playback
# ---------------------------------------------------------------------------

class TestCreditsPlayback:

    def test_element_configured_from_registry(self, make_sync, element):
        make_sync(element)
        assert element.loop is True
        assert element.source == "bgm.mp3"
        assert element.paused

    def test_credits_cue_then_play(self, make_sync, element, nav):
        make_sync(element)
        nav.jump_to(44)
        assert element.cues == [30.0]
        assert element.play_calls == 1
        assert not element.paused

    def test_leaving_credits_pauses(self, make_sync, element, nav):
        make_sync(element)
        nav.jump_to(44)
        nav.retreat()
        assert element.paused

    def test_other_slides_pause(self, make_sync, element, nav):
        make_sync(element)
        pauses = element.pause_calls
        nav.advance()
        nav.jump_to(17)
        assert element.pause_calls == pauses + 2
        assert element.play_calls == 0

    def test_stop_pauses_at_credits(self, make_sync, element, nav):
        sync = make_sync(element)
        nav.jump_to(44)
        sync.stop()
        assert element.paused

    def test_source_change_does_not_play(self, make_sync, element, registry):
        make_sync(element)
        registry.set_source("uploaded.mp3")
        assert element.source == "uploaded.mp3"
        assert element.play_calls == 0

    def test_credits_scroll_target_from_measure(self, make_sync, element, nav):
        sync = make_sync(element, measure=lambda: 1500.0, scroll_anchor=540.0)
        assert sync.credits_scroll_target is None
        nav.jump_to(44)
        assert sync.credits_scroll_target == -960.0


# ---------------------------------------------------------------------------
# Autoplay rejection
# ---------------------------------------------------------------------------

class TestGestureRetry:

    def test_rejected_play_retried_on_next_gesture(self, make_sync, element, nav, gestures):
        element.reject = 1
        sync = make_sync(element)
        nav.jump_to(44)
        assert element.paused
        assert sync.retry_armed

        gestures.emit()

        assert element.play_calls == 2
        assert element.cues == [30.0, 30.0]
        assert not element.paused
        assert not sync.retry_armed

    def test_retry_is_one_shot(self, make_sync, element, nav, gestures):
        element.reject = 2
        sync = make_sync(element)
        nav.jump_to(44)
        gestures.emit()
        gestures.emit()
        assert element.play_calls == 2
        assert not sync.retry_armed
        assert len(gestures) == 0

    def test_no_retry_after_navigating_away(self, make_sync, element, nav, gestures):
        element.reject = 1
        sync = make_sync(element)
        nav.jump_to(44)
        nav.retreat()
        gestures.emit()
        assert element.play_calls == 1
        assert not sync.retry_armed

    def test_guard_skips_retry_when_already_playing(self, make_sync, element, nav, gestures):
        element.reject = 1
        sync = make_sync(element)
        nav.jump_to(44)
        element.paused = False
        gestures.emit()
        assert element.play_calls == 1
        assert not sync.retry_armed

    def test_stop_cancels_pending_retry(self, make_sync, element, nav, gestures):
        element.reject = 1
        sync = make_sync(element)
        nav.jump_to(44)
        sync.stop()
        gestures.emit()
        assert element.play_calls == 1


# ---------------------------------------------------------------------------
# Metadata deferral
# ---------------------------------------------------------------------------

class TestMetadataDeferral:

    def test_play_deferred_until_metadata(self, make_sync, unloaded_element, nav):
        sync = make_sync(unloaded_element)
        nav.jump_to(44)
        assert unloaded_element.play_calls == 0
        assert sync.waiting_for_metadata

        unloaded_element.finish_loading()
        assert unloaded_element.play_calls == 1
        assert unloaded_element.cues == [30.0]

        unloaded_element.metadata_ready.emit()
        assert unloaded_element.play_calls == 1

    def test_deferred_play_dropped_after_leaving(self, make_sync, unloaded_element, nav):
        sync = make_sync(unloaded_element)
        nav.jump_to(44)
        nav.retreat()
        assert not sync.waiting_for_metadata
        unloaded_element.finish_loading()
        assert unloaded_element.play_calls == 0


# ---------------------------------------------------------------------------
# Teardown
# ---------------------------------------------------------------------------

class TestClose:

    def test_close_detaches_everything(self, make_sync, element, nav, registry, gestures):
        element.reject = 1
        sync = make_sync(element)
        nav.jump_to(44)
        sync.close()
        sync.close()

        gestures.emit()
        nav.retreat()
        nav.advance()
        registry.set_source("late.mp3")

        assert element.play_calls == 1
        assert element.source == "bgm.mp3"
        assert len(nav.position_changed) == 0
