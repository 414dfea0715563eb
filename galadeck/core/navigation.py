"""
Navigation Controller - The current-slide state machine.

Outside the quiz round the show is linear. Inside it the board is a hub:
every question returns to the board, and "next" on the board leaves the quiz
for the post-quiz slide. Questions are only entered by direct selection.
"""

import logging
from enum import Enum

from .quiz_topology import QuizTopology
from .slide_store import SlideRecord, SlideStore
from ..utils.signals import Signal

logger = logging.getLogger(__name__)


class NavigationMode(Enum):
    """Behavioural partition of deck indices."""
    LINEAR = "linear"
    QUIZ_BOARD = "quiz_board"
    QUIZ_QUESTION = "quiz_question"
    POST_QUIZ = "post_quiz"
    CREDITS = "credits"


class NavigationController:
    """Owns ``current_index`` and the quiz jump rules."""

    def __init__(self, store: SlideStore, topology: QuizTopology, start_index: int = 0):
        """
        Initialize navigation.

        Args:
            store: Slide store providing bounds and visited flags
            topology: Quiz zone boundaries for this deck
            start_index: Initial position, clamped into the deck
        """
        topology.validate(len(store))
        self.store = store
        self.topology = topology
        self._index = min(max(start_index, 0), len(store) - 1)

        # Called with (old_index, new_index) after every real move
        self.position_changed = Signal("position_changed")

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def last_index(self) -> int:
        return len(self.store) - 1

    @property
    def mode(self) -> NavigationMode:
        return self.mode_of(self._index)

    def mode_of(self, index: int) -> NavigationMode:
        if index == self.topology.board:
            return NavigationMode.QUIZ_BOARD
        if self.topology.is_question(index):
            return NavigationMode.QUIZ_QUESTION
        if index == self.topology.post_quiz:
            return NavigationMode.POST_QUIZ
        if index == self.topology.credits:
            return NavigationMode.CREDITS
        return NavigationMode.LINEAR

    @property
    def current_slide(self) -> SlideRecord:
        return self.store.deck[self._index]

    @property
    def at_credits(self) -> bool:
        return self._index == self.topology.credits

    @property
    def can_advance(self) -> bool:
        return self.mode in (NavigationMode.QUIZ_BOARD, NavigationMode.QUIZ_QUESTION) \
            or self._index < self.last_index

    @property
    def can_retreat(self) -> bool:
        return self.mode == NavigationMode.POST_QUIZ or self._index > 0

    def jump_to(self, index: int) -> bool:
        """
        Move to ``index``. Entering a question marks it visited first.

        Returns:
            False (with no state change) if ``index`` is outside the deck
        """
        if not isinstance(index, int) or not 0 <= index < len(self.store):
            logger.debug("Jump to %r rejected", index)
            return False
        if self.topology.is_question(index):
            self.store.mark_visited(index)
        self._move(index)
        return True

    def select(self, index: int) -> bool:
        """Direct selection from a progress indicator or board cell."""
        return self.jump_to(index)

    def jump_to_board(self) -> bool:
        return self.jump_to(self.topology.board)

    def advance(self) -> None:
        """Go to the next slide, honouring the quiz hub rules."""
        mode = self.mode
        if mode == NavigationMode.QUIZ_BOARD:
            self.jump_to(self.topology.post_quiz)
        elif mode == NavigationMode.QUIZ_QUESTION:
            self.jump_to(self.topology.board)
        elif self._index < self.last_index:
            self._move(self._index + 1)

    def retreat(self) -> None:
        """Go to the previous slide; the post-quiz slide goes back to the board."""
        if self.mode == NavigationMode.POST_QUIZ:
            self.jump_to(self.topology.board)
        elif self._index > 0:
            self._move(self._index - 1)

    def _move(self, index: int) -> None:
        old = self._index
        if index == old:
            return
        self._index = index
        logger.debug("Slide %d -> %d (%s)", old, index, self.mode.value)
        self.position_changed.emit(old, index)
