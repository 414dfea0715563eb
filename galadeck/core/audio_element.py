"""
Audio element - The playback device the synchronizer drives.
``PygameAudioElement`` plays the background track through pygame's mixer.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Protocol

# Silence pygame's import banner
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame

from ..errors import PlaybackRejectedError
from ..utils.signals import Signal

logger = logging.getLogger(__name__)


class AudioElement(Protocol):
    """What the synchronizer needs from an audio player."""
    source: Optional[str]
    loop: bool
    metadata_ready: Signal

    @property
    def metadata_loaded(self) -> bool: ...

    @property
    def paused(self) -> bool: ...

    def set_source(self, source: str) -> None: ...

    def cue(self, seconds: float) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...


class PygameAudioElement:
    """Background track played with ``pygame.mixer.music``."""

    def __init__(self, source: Optional[str] = None, loop: bool = True, base_dir: Optional[Path] = None):
        """
        Initialize audio element.

        Args:
            source: File path of the track; relative paths resolve against base_dir
            loop: Whether the track repeats forever
            base_dir: Directory for relative sources (the working directory if None)
        """
        self.source: Optional[str] = None
        self.loop = loop
        self.base_dir = base_dir
        self.metadata_ready = Signal("metadata_ready")

        self._loaded = False
        self._paused = True
        self._cue = 0.0

        if source:
            self.set_source(source)

    @property
    def metadata_loaded(self) -> bool:
        return self._loaded

    @property
    def paused(self) -> bool:
        return self._paused

    def resolve(self, source: str) -> Path:
        path = Path(source)
        if not path.is_absolute() and self.base_dir is not None:
            path = self.base_dir / path
        return path

    def set_source(self, source: str) -> None:
        """Load a new track without starting it."""
        if self._mixer_ready():
            pygame.mixer.music.stop()
        self.source = source
        self._loaded = False
        self._paused = True

        try:
            self._ensure_mixer()
            pygame.mixer.music.load(str(self.resolve(source)))
        except pygame.error as e:
            logger.warning("Could not load audio '%s': %s", source, e)
            return

        self._loaded = True
        self.metadata_ready.emit()

    def cue(self, seconds: float) -> None:
        self._cue = max(0.0, seconds)

    def play(self) -> None:
        """Start from the cue point. Raises PlaybackRejectedError if refused."""
        if not self._loaded:
            raise PlaybackRejectedError(f"Audio '{self.source}' is not loaded")
        try:
            pygame.mixer.music.play(loops=-1 if self.loop else 0, start=self._cue)
        except pygame.error as e:
            raise PlaybackRejectedError(str(e)) from e
        self._paused = False

    def pause(self) -> None:
        if self._mixer_ready():
            pygame.mixer.music.pause()
        self._paused = True

    @staticmethod
    def _mixer_ready() -> bool:
        return bool(pygame.mixer.get_init())

    def _ensure_mixer(self) -> None:
        if not self._mixer_ready():
            pygame.mixer.init()
