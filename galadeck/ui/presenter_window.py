"""
GalaDeck - Presenter Window
Full-screen show runner built on pygame's single-threaded event loop.
"""

import logging
from typing import List, Optional, Tuple

import pygame

from ..core.audio_element import PygameAudioElement
from ..core.input_dispatcher import InputDispatcher
from ..core.presenter import Presenter
from ..errors import FullscreenRejectedError
from ..utils.config import Config
from ..utils.logging_setup import configure_logging
from ..utils.scheduler import TimerQueue
from ..utils.signals import Signal
from ..utils.storage import LocalStorage
from .slide_renderer import Region, SlideRenderer

logger = logging.getLogger(__name__)

INITIAL_WINDOW_SIZE = (1280, 720)


class PresenterWindow:
    """Owns the pygame display and feeds its events to the core."""

    def __init__(self, storage: Optional[LocalStorage] = None, size: Tuple[int, int] = INITIAL_WINDOW_SIZE):
        pygame.init()
        pygame.display.set_caption(Config.WINDOW_TITLE)
        self.screen = pygame.display.set_mode(size, pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.timers = TimerQueue()
        self.running = False

        gestures = Signal("gesture")
        self.renderer = SlideRenderer()
        self.presenter = Presenter.create(
            storage or LocalStorage(Config.DATA_DIR),
            PygameAudioElement(base_dir=Config.PROJECT_ROOT),
            viewport=self.screen.get_size(),
            gestures=gestures,
            measure=self.renderer.measure_credits,
            fullscreen_host=self,
        )
        self.renderer.presenter = self.presenter
        self.dispatcher = InputDispatcher(
            self.presenter.handle_interaction, self.timers, gesture=gestures
        )
        self._regions: List[Region] = []

    def toggle_fullscreen(self) -> bool:
        """Switch fullscreen; raises FullscreenRejectedError when the display refuses."""
        try:
            ok = pygame.display.toggle_fullscreen()
        except pygame.error as e:
            raise FullscreenRejectedError(str(e)) from e
        if not ok:
            raise FullscreenRejectedError("display does not support fullscreen toggling")
        return not self.presenter.is_fullscreen

    def to_canvas(self, pos: Tuple[int, int]) -> Tuple[float, float]:
        """Window pixel position to canvas coordinates."""
        scale = self.presenter.get_scale()
        ox, oy = self.presenter.scaler.offset()
        return ((pos[0] - ox) / scale, (pos[1] - oy) / scale)

    def hit(self, pos: Tuple[int, int]) -> Optional[Region]:
        x, y = self.to_canvas(pos)
        for region in reversed(self._regions):
            if region.rect.collidepoint(x, y):
                return region
        return None

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.running = False

        elif event.type == pygame.VIDEORESIZE:
            self.presenter.resize(event.w, event.h)

        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE and not self.presenter.is_fullscreen:
                self.running = False
            else:
                self.dispatcher.key_pressed(pygame.key.name(event.key))

        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            region = self.hit(event.pos)
            self.dispatcher.click(interactive=region is not None)
            if region is not None:
                region.action()

    def draw(self, dt: float) -> None:
        regions = self.renderer.draw(dt)
        regions += self.renderer.draw_controls(self.presenter.is_fullscreen)
        self._regions = regions

        self.screen.fill((10, 10, 10))
        scaled = pygame.transform.smoothscale(
            self.renderer.canvas, self.presenter.scaler.scaled_size()
        )
        self.screen.blit(scaled, self.presenter.scaler.offset())
        pygame.display.flip()

    def run(self) -> None:
        """Main loop: events, due timers, draw."""
        self.running = True
        logger.info("Presenting %d slides", len(self.presenter.get_deck()))
        try:
            while self.running:
                dt = self.clock.tick(Config.WINDOW_FPS) / 1000.0
                for event in pygame.event.get():
                    self.handle_event(event)
                self.timers.run_due()
                self.draw(dt)
        finally:
            self.close()

    def close(self) -> None:
        self.dispatcher.close()
        self.timers.clear()
        self.presenter.close()
        pygame.quit()


def main():
    """Console entry point: ``galadeck-present``."""
    configure_logging()
    Config.validate()
    PresenterWindow().run()


if __name__ == "__main__":
    main()
