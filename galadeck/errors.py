"""
Exception types raised inside the presentation engine.

None of these escape to the renderer during a show: storage errors are
absorbed by the stores, playback rejections arm a retry, and fullscreen
refusals become a notice.
"""


class GalaDeckError(Exception):
    """Base class for all GalaDeck errors."""


class StorageError(GalaDeckError):
    """A persisted record could not be read or written."""


class PlaybackRejectedError(GalaDeckError):
    """The host refused to start audio playback."""


class FullscreenRejectedError(GalaDeckError):
    """The host refused to enter or leave fullscreen."""


class TopologyError(GalaDeckError, ValueError):
    """Quiz zone boundaries are inconsistent with the deck."""
