# Core module initialization
from .slide_store import SlideStore, SlideRecord, SlideKind, SlideDeck
from .audio_registry import AudioTrackRegistry
from .quiz_topology import QuizTopology, BoardCell
from .navigation import NavigationController, NavigationMode
from .audio_element import AudioElement, PygameAudioElement
from .playback_sync import PlaybackSynchronizer
from .viewport import ViewportScaler, compute_scale
from .presenter import Presenter, InteractionType, InteractionEvent
from .input_dispatcher import InputDispatcher

__all__ = [
    "SlideStore",
    "SlideRecord",
    "SlideKind",
    "SlideDeck",
    "AudioTrackRegistry",
    "QuizTopology",
    "BoardCell",
    "NavigationController",
    "NavigationMode",
    "AudioElement",
    "PygameAudioElement",
    "PlaybackSynchronizer",
    "ViewportScaler",
    "compute_scale",
    "Presenter",
    "InteractionType",
    "InteractionEvent",
    "InputDispatcher",
]
