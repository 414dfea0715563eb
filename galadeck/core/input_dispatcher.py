"""
Input Dispatcher - Turns raw keys and clicks into presenter interactions.
"""

import logging
from typing import Callable, Dict, Optional

from .presenter import InteractionEvent, InteractionType
from ..utils.config import Config
from ..utils.scheduler import TimerHandle, TimerQueue
from ..utils.signals import Signal

logger = logging.getLogger(__name__)

# Key names as reported by pygame.key.name()
KEY_BINDINGS: Dict[str, InteractionType] = {
    "right": InteractionType.NEXT_SLIDE,
    "space": InteractionType.NEXT_SLIDE,
    "page down": InteractionType.NEXT_SLIDE,
    "left": InteractionType.PREVIOUS_SLIDE,
    "page up": InteractionType.PREVIOUS_SLIDE,
    "f": InteractionType.TOGGLE_FULLSCREEN,
    "b": InteractionType.GO_TO_BOARD,
}


class InputDispatcher:
    """Keyboard mapping and single/double click disambiguation."""

    def __init__(
        self,
        handler: Callable[[InteractionEvent], None],
        timers: TimerQueue,
        double_click_ms: Optional[int] = None,
        gesture: Optional[Signal] = None
    ):
        """
        Initialize input dispatcher.

        Args:
            handler: Receives every interaction (usually Presenter.handle_interaction)
            timers: Scheduler for the click timer, polled by the host loop
            double_click_ms: Window in which a second click counts as a double click
            gesture: Signal fired on every pointer or key event (a new one if None)
        """
        self.handler = handler
        self.timers = timers
        self.double_click_delay = (double_click_ms or Config.DOUBLE_CLICK_MS) / 1000.0

        # True while a text field has focus; keys and canvas clicks are ignored
        self.editing = False

        # Fires on every pointer or key event, before any interaction is dispatched
        self.gesture = gesture if gesture is not None else Signal("gesture")

        self._click_timer: Optional[TimerHandle] = None

    @property
    def click_pending(self) -> bool:
        return self._click_timer is not None and self._click_timer.pending

    def key_pressed(self, key_name: str) -> bool:
        """
        Handle a key press.

        Returns:
            True if the key was mapped to an interaction
        """
        # Gesture first, so a refused autoplay retries before the key moves the show
        self.gesture.emit()
        if self.editing:
            return False
        interaction = KEY_BINDINGS.get(key_name.lower())
        if interaction is None:
            return False
        self._dispatch(interaction)
        return True

    def click(self, interactive: bool = False) -> None:
        """
        Handle a click on the slide canvas.

        Args:
            interactive: The click landed on a control, button, input or upload zone
                and is handled elsewhere
        """
        self.gesture.emit()
        if interactive or self.editing:
            return

        if self.click_pending:
            self.cancel()
            self._dispatch(InteractionType.STOP_AUDIO)
        else:
            self._click_timer = self.timers.call_later(self.double_click_delay, self._on_single_click)

    def cancel(self) -> None:
        """Drop any pending single-click. Idempotent."""
        if self._click_timer is not None:
            self._click_timer.cancel()
            self._click_timer = None

    def close(self) -> None:
        self.cancel()

    def _on_single_click(self) -> None:
        self._click_timer = None
        self._dispatch(InteractionType.NEXT_SLIDE)

    def _dispatch(self, interaction: InteractionType) -> None:
        logger.debug("Input -> %s", interaction.value)
        self.handler(InteractionEvent(interaction))
