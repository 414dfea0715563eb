"""
Audio Track Registry - Owns the single background music source reference.
"""

import logging
from typing import Optional

from ..errors import StorageError
from ..utils.config import Config
from ..utils.signals import Signal
from ..utils.storage import LocalStorage

logger = logging.getLogger(__name__)

AUDIO_SOURCE_KEY = "audio-source"


class AudioTrackRegistry:
    """Keeps the background music reference and persists it."""

    def __init__(self, storage: LocalStorage, default_source: Optional[str] = None):
        self.storage = storage
        self.default_source = default_source or Config.DEFAULT_AUDIO_SOURCE
        self.source_changed = Signal("source_changed")
        self._source = self.load()

    @property
    def source(self) -> str:
        return self._source

    @property
    def is_user_supplied(self) -> bool:
        """Whether the operator replaced the built-in music."""
        return self._source != self.default_source

    def load(self) -> str:
        """Return the saved source, or the built-in default."""
        try:
            saved = self.storage.get(AUDIO_SOURCE_KEY)
        except StorageError as e:
            logger.warning("Saved audio source unreadable, using default: %s", e)
            return self.default_source

        if isinstance(saved, str) and saved:
            return saved
        return self.default_source

    def set_source(self, ref: str) -> None:
        """Switch to ``ref`` and persist it. Persistence failures are dropped."""
        if not ref:
            return
        changed = ref != self._source
        self._source = ref
        try:
            self.storage.set(AUDIO_SOURCE_KEY, ref)
        except StorageError as e:
            logger.warning("Could not save audio source: %s", e)
        if changed:
            self.source_changed.emit(ref)
