"""
Playback Synchronization - Starts the background music when the show reaches
the credits and silences it everywhere else.
"""

import logging
from typing import Callable, Optional

from .audio_element import AudioElement
from .audio_registry import AudioTrackRegistry
from .navigation import NavigationController
from ..errors import PlaybackRejectedError
from ..utils.config import Config
from ..utils.signals import Signal, Subscription

logger = logging.getLogger(__name__)


class PlaybackSynchronizer:
    """Keep the audio element in step with the current slide."""

    def __init__(
        self,
        navigation: NavigationController,
        registry: AudioTrackRegistry,
        element: AudioElement,
        gestures: Signal,
        cue_seconds: Optional[float] = None,
        measure: Optional[Callable[[], float]] = None,
        scroll_anchor: Optional[float] = None
    ):
        """
        Initialize playback synchronizer.

        Args:
            navigation: Source of position changes
            registry: Owner of the background music reference
            element: Audio player to command
            gestures: Fires on every pointer or key event; used to retry refused playback
            cue_seconds: Where the credits music starts
            measure: Renderer hook returning the centre of the credits' final title
            scroll_anchor: Canvas position the final title should come to rest on
        """
        self.navigation = navigation
        self.registry = registry
        self.element = element
        self.gestures = gestures
        self.cue_seconds = Config.CREDITS_CUE_SECONDS if cue_seconds is None else cue_seconds
        self.measure = measure
        self.scroll_anchor = Config.CANVAS_HEIGHT / 2 if scroll_anchor is None else scroll_anchor

        self.credits_scroll_target: Optional[float] = None

        self._retry_sub: Optional[Subscription] = None
        self._metadata_sub: Optional[Subscription] = None

        self.element.loop = True
        if self.element.source != registry.source:
            self.element.set_source(registry.source)

        self._subscriptions = [
            navigation.position_changed.connect(self._on_position_changed),
            registry.source_changed.connect(self._on_source_changed),
        ]
        self.sync()

    @property
    def retry_armed(self) -> bool:
        return self._retry_sub is not None and self._retry_sub.active

    @property
    def waiting_for_metadata(self) -> bool:
        return self._metadata_sub is not None and self._metadata_sub.active

    def sync(self) -> None:
        """Apply the audio state for the current position."""
        if self.navigation.at_credits:
            self._enter_credits()
        else:
            self._cancel_pending()
            self.element.pause()

    def stop(self) -> None:
        """Explicit stop-audio intent."""
        self._cancel_pending()
        self.element.pause()

    def close(self) -> None:
        """Detach from every signal. Safe to call more than once."""
        self._cancel_pending()
        for subscription in self._subscriptions:
            subscription.cancel()
        self._subscriptions = []

    def _on_position_changed(self, old_index: int, new_index: int) -> None:
        self.sync()

    def _on_source_changed(self, source: str) -> None:
        # A new source never starts playback on its own
        self.element.set_source(source)

    def _enter_credits(self) -> None:
        if self.measure is not None:
            self.credits_scroll_target = self.scroll_anchor - self.measure()

        if self.element.metadata_loaded:
            self._start()
        elif not self.waiting_for_metadata:
            logger.debug("Audio metadata not ready, deferring credits music")
            self._metadata_sub = self.element.metadata_ready.connect_once(self._on_metadata_ready)

    def _on_metadata_ready(self) -> None:
        self._metadata_sub = None
        if self.navigation.at_credits:
            self._start()

    def _start(self) -> None:
        self.element.cue(self.cue_seconds)
        try:
            self.element.play()
        except PlaybackRejectedError as e:
            logger.info("Playback refused (%s); retrying on next user gesture", e)
            self._arm_retry()

    def _arm_retry(self) -> None:
        if self._retry_sub is not None:
            self._retry_sub.cancel()
        self._retry_sub = self.gestures.connect_once(self._retry)

    def _retry(self, *args) -> None:
        self._retry_sub = None
        if not (self.element.paused and self.navigation.at_credits):
            return
        self.element.cue(self.cue_seconds)
        try:
            self.element.play()
        except PlaybackRejectedError as e:
            logger.info("Playback refused again: %s", e)

    def _cancel_pending(self) -> None:
        if self._retry_sub is not None:
            self._retry_sub.cancel()
            self._retry_sub = None
        if self._metadata_sub is not None:
            self._metadata_sub.cancel()
            self._metadata_sub = None
