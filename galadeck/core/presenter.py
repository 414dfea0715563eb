"""
Presenter - Routes user interactions to the navigation, playback and storage
components, and answers the renderer's questions about what to draw.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from .audio_element import AudioElement
from .audio_registry import AudioTrackRegistry
from .navigation import NavigationController, NavigationMode
from .playback_sync import PlaybackSynchronizer
from .quiz_topology import BoardCell, QuizTopology
from .slide_store import SlideDeck, SlideRecord, SlideStore
from .viewport import ViewportScaler
from ..errors import FullscreenRejectedError
from ..utils.config import Config
from ..utils.signals import Signal
from ..utils.storage import LocalStorage

logger = logging.getLogger(__name__)

FULLSCREEN_NOTICE = "Fullscreen was refused; use the window controls to go full screen."

# Question slides reveal the prompt, then the hint image, then the answer
MAX_REVEAL_STEP = 2


class InteractionType(Enum):
    """Types of user interactions."""
    NEXT_SLIDE = "next"
    PREVIOUS_SLIDE = "previous"
    GO_TO_SLIDE = "goto"
    GO_TO_BOARD = "board"
    STOP_AUDIO = "stop_audio"
    TOGGLE_FULLSCREEN = "fullscreen"
    REVEAL = "reveal"
    EDIT_SLIDE = "edit"
    SET_AUDIO_SOURCE = "audio_source"


@dataclass
class InteractionEvent:
    """Represents a user interaction event."""
    interaction_type: InteractionType
    data: Optional[dict] = None


class FullscreenHost(Protocol):
    """Window that can switch fullscreen on and off."""

    def toggle_fullscreen(self) -> bool:
        """Return the new fullscreen state; raise FullscreenRejectedError if refused."""
        ...


class Presenter:
    """Central handler for all user interactions."""

    def __init__(
        self,
        store: SlideStore,
        registry: AudioTrackRegistry,
        navigation: NavigationController,
        synchronizer: PlaybackSynchronizer,
        scaler: ViewportScaler,
        fullscreen_host: Optional[FullscreenHost] = None
    ):
        """
        Initialize presenter.

        Args:
            store: Slide deck owner
            registry: Background music owner
            navigation: Current slide state machine
            synchronizer: Credits music driver
            scaler: Canvas fit calculator
            fullscreen_host: Window able to toggle fullscreen, if any
        """
        self.store = store
        self.registry = registry
        self.navigation = navigation
        self.synchronizer = synchronizer
        self.scaler = scaler
        self.fullscreen_host = fullscreen_host
        self.gestures = synchronizer.gestures

        self.notice: Optional[str] = None
        self.is_fullscreen = False
        self.reveal_step = 0

        # Callback for UI updates
        self.on_state_change: Optional[Callable[[], None]] = None

        self._position_sub = navigation.position_changed.connect(self._on_position_changed)

    @classmethod
    def create(
        cls,
        storage: LocalStorage,
        element: AudioElement,
        viewport: Tuple[float, float],
        topology: Optional[QuizTopology] = None,
        gestures: Optional[Signal] = None,
        measure: Optional[Callable[[], float]] = None,
        fullscreen_host: Optional[FullscreenHost] = None
    ) -> 'Presenter':
        """
        Wire up a complete presenter from its collaborators.

        Args:
            storage: Local persistence for slides and audio source
            element: Audio player for the background music
            viewport: Initial (width, height) of the drawing area
            topology: Quiz zones (from Config if None)
            gestures: Signal fired on every user gesture (a new one if None)
            measure: Renderer hook for the credits roll
            fullscreen_host: Window able to toggle fullscreen
        """
        topology = topology or Config.quiz_topology()
        gestures = gestures if gestures is not None else Signal("gesture")

        store = SlideStore(storage, topology=topology)
        registry = AudioTrackRegistry(storage)
        navigation = NavigationController(store, topology)
        synchronizer = PlaybackSynchronizer(
            navigation, registry, element, gestures, measure=measure
        )
        scaler = ViewportScaler(*viewport)

        return cls(store, registry, navigation, synchronizer, scaler, fullscreen_host)

    # ------------------------------------------------------------------
    # Renderer queries
    # ------------------------------------------------------------------

    @property
    def current_index(self) -> int:
        return self.navigation.current_index

    @property
    def mode(self) -> NavigationMode:
        return self.navigation.mode

    @property
    def topology(self) -> QuizTopology:
        return self.navigation.topology

    def get_current_slide(self) -> SlideRecord:
        return self.navigation.current_slide

    def get_deck(self) -> SlideDeck:
        return self.store.deck

    def get_scale(self) -> float:
        return self.scaler.scale

    def progress_indices(self) -> List[int]:
        """Indices shown in the progress indicator; questions are reached from the board."""
        return [i for i in range(len(self.store)) if not self.topology.is_question(i)]

    def board_cells(self) -> List[Tuple[BoardCell, bool]]:
        """Every board cell with its visited flag."""
        deck = self.store.deck
        return [(cell, deck[cell.index].visited) for cell in self.topology.cells()]

    # ------------------------------------------------------------------
    # Renderer requests
    # ------------------------------------------------------------------

    def request_advance(self) -> None:
        self.handle_interaction(InteractionEvent(InteractionType.NEXT_SLIDE))

    def request_retreat(self) -> None:
        self.handle_interaction(InteractionEvent(InteractionType.PREVIOUS_SLIDE))

    def request_jump(self, index: int) -> None:
        self.handle_interaction(InteractionEvent(InteractionType.GO_TO_SLIDE, {"index": index}))

    def request_edit_slide(self, slide_id: int, patch: Dict) -> None:
        self.handle_interaction(
            InteractionEvent(InteractionType.EDIT_SLIDE, {"id": slide_id, "patch": patch})
        )

    def request_set_audio_source(self, ref: str) -> None:
        self.handle_interaction(InteractionEvent(InteractionType.SET_AUDIO_SOURCE, {"source": ref}))

    def request_stop_audio(self) -> None:
        self.handle_interaction(InteractionEvent(InteractionType.STOP_AUDIO))

    def request_toggle_fullscreen(self) -> None:
        self.handle_interaction(InteractionEvent(InteractionType.TOGGLE_FULLSCREEN))

    def request_reveal(self) -> None:
        self.handle_interaction(InteractionEvent(InteractionType.REVEAL))

    def resize(self, width: float, height: float) -> float:
        """Viewport changed size; returns the new scale."""
        return self.scaler.resize(width, height)

    def handle_interaction(self, event: InteractionEvent):
        """
        Handle a user interaction event.

        Args:
            event: The interaction event to handle
        """
        data = event.data or {}

        if event.interaction_type == InteractionType.NEXT_SLIDE:
            self.navigation.advance()

        elif event.interaction_type == InteractionType.PREVIOUS_SLIDE:
            self.navigation.retreat()

        elif event.interaction_type == InteractionType.GO_TO_SLIDE:
            self.navigation.select(data.get("index"))

        elif event.interaction_type == InteractionType.GO_TO_BOARD:
            self.navigation.jump_to_board()

        elif event.interaction_type == InteractionType.STOP_AUDIO:
            self.synchronizer.stop()

        elif event.interaction_type == InteractionType.TOGGLE_FULLSCREEN:
            self._handle_toggle_fullscreen()

        elif event.interaction_type == InteractionType.REVEAL:
            self._handle_reveal()

        elif event.interaction_type == InteractionType.EDIT_SLIDE:
            self.store.update_slide(data.get("id"), data.get("patch") or {})

        elif event.interaction_type == InteractionType.SET_AUDIO_SOURCE:
            self.registry.set_source(data.get("source"))

        # Notify UI of state change
        if self.on_state_change:
            self.on_state_change()

    def close(self) -> None:
        """Tear down subscriptions. Idempotent."""
        self._position_sub.cancel()
        self.synchronizer.close()

    def _handle_toggle_fullscreen(self):
        if self.fullscreen_host is None:
            self.notice = FULLSCREEN_NOTICE
            return
        try:
            self.is_fullscreen = self.fullscreen_host.toggle_fullscreen()
        except FullscreenRejectedError as e:
            logger.info("Fullscreen refused: %s", e)
            self.notice = FULLSCREEN_NOTICE
            return
        self.notice = None

    def _handle_reveal(self):
        if self.mode == NavigationMode.QUIZ_QUESTION and self.reveal_step < MAX_REVEAL_STEP:
            self.reveal_step += 1

    def _on_position_changed(self, old_index: int, new_index: int) -> None:
        self.reveal_step = 0
