"""
Slide Renderer - Draws the current slide onto a fixed-size pygame canvas.

Everything is laid out in canvas units (Config.CANVAS_WIDTH x CANVAS_HEIGHT);
the window scales the finished canvas to fit. Clickable areas are reported
back as ``Region``s so the window can hit-test them.
"""

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import pygame

from ..core.navigation import NavigationMode
from ..core.presenter import Presenter
from ..core.slide_store import SlideKind, SlideRecord
from ..utils.config import Config
from ..utils.helpers import data_url_to_bytes, is_data_url

logger = logging.getLogger(__name__)

# Palette
BACKGROUND = (127, 29, 29)
BORDER = (202, 138, 4)
GOLD = (250, 204, 21)
CREAM = (254, 243, 199)
WHITE = (255, 255, 255)
MUTED = (115, 115, 115)
SPENT = (38, 38, 38)
PANEL = (0, 0, 0)

CREDITS_FINAL_TITLE = "New Year Gala"
CREDITS_SCROLL_SPEED = 60.0  # canvas px per second
HELP_TEXT = "Click: next  |  Double-click: stop music  |  F: fullscreen  |  B: quiz board"
CREDITS_HEADINGS = ("Acknowledgements", "Cast and Crew", "Special Thanks")


@dataclass
class Region:
    """A clickable rectangle in canvas coordinates."""
    rect: pygame.Rect
    action: Callable[[], None]


class SlideRenderer:
    """Per-slide-type drawing on top of the presenter's state."""

    def __init__(self, presenter: Optional[Presenter] = None, width: Optional[int] = None, height: Optional[int] = None):
        self.presenter = presenter
        self.width = width or Config.CANVAS_WIDTH
        self.height = height or Config.CANVAS_HEIGHT
        self.canvas = pygame.Surface((self.width, self.height))
        self._fonts: Dict[int, pygame.font.Font] = {}
        self._images: Dict[str, Optional[pygame.Surface]] = {}
        self.credits_elapsed = 0.0

    def font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    # ------------------------------------------------------------------
    # Layout helpers
    # ------------------------------------------------------------------

    def wrap(self, text: str, size: int, max_width: int) -> List[str]:
        font = self.font(size)
        lines, current = [], ""
        for word in text.split():
            candidate = f"{current} {word}".strip()
            if current and font.size(candidate)[0] > max_width:
                lines.append(current)
                current = word
            else:
                current = candidate
        if current:
            lines.append(current)
        return lines or [""]

    def text(self, text: str, size: int, color, center: Optional[Tuple[int, int]] = None,
             topleft: Optional[Tuple[int, int]] = None, max_width: Optional[int] = None) -> int:
        """Blit (wrapped) text and return the y just below it."""
        font = self.font(size)
        lines = self.wrap(text, size, max_width or self.width - 200)
        line_height = font.get_linesize()
        x, y = center if center else topleft
        if center:
            y -= line_height * len(lines) // 2
        for line in lines:
            surface = font.render(line, True, color)
            rect = surface.get_rect()
            if center:
                rect.midtop = (x, y)
            else:
                rect.topleft = (x, y)
            self.canvas.blit(surface, rect)
            y += line_height
        return y

    def load_image(self, ref: str) -> Optional[pygame.Surface]:
        if ref not in self._images:
            try:
                raw = data_url_to_bytes(ref) if is_data_url(ref) else Path(ref).read_bytes()
                self._images[ref] = pygame.image.load(BytesIO(raw))
            except (OSError, ValueError, pygame.error) as e:
                logger.warning("Could not load slide image: %s", e)
                self._images[ref] = None
        return self._images[ref]

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw(self, dt: float = 0.0) -> List[Region]:
        """Render the current slide; returns its clickable regions."""
        presenter = self.presenter
        slide = presenter.get_current_slide()
        regions: List[Region] = []

        self.canvas.fill(BACKGROUND)
        pygame.draw.rect(self.canvas, BORDER, self.canvas.get_rect().inflate(-48, -48), 6)

        if presenter.mode == NavigationMode.CREDITS:
            self.credits_elapsed += dt
        else:
            self.credits_elapsed = 0.0

        if slide.kind == SlideKind.BOARD:
            regions += self.draw_board(slide)
        elif presenter.mode == NavigationMode.QUIZ_QUESTION:
            regions += self.draw_question(slide, presenter.reveal_step)
        elif slide.kind == SlideKind.CREDITS:
            self.draw_credits(slide)
        elif slide.kind == SlideKind.TITLE:
            self.draw_title(slide)
        elif slide.kind == SlideKind.TOP_LEFT:
            self.draw_top_left(slide)
        elif slide.kind == SlideKind.LIST:
            self.draw_list(slide)
        else:
            self.draw_content(slide)

        return regions

    def draw_title(self, slide: SlideRecord):
        y = self.text(slide.title, 200, GOLD, center=(self.width // 2, self.height // 2 - 160))
        for line in slide.content:
            y = self.text(line, 72, CREAM, center=(self.width // 2, y + 60))
        if slide.subtitle:
            self.text(slide.subtitle, 48, BORDER, center=(self.width // 2, y + 80))

    def draw_content(self, slide: SlideRecord):
        y = self.text(slide.title, 140, GOLD, center=(self.width // 2, 260))
        if slide.subtitle:
            y = self.text(slide.subtitle, 56, CREAM, center=(self.width // 2, y + 40))
        y = max(y + 80, self.height // 2 - 40)
        for line in slide.content:
            y = self.text(line, 80, WHITE, center=(self.width // 2, y + 40))
        if slide.image:
            self.draw_image(slide.image, pygame.Rect(self.width // 2 - 400, y + 40, 800, 300))

    def draw_top_left(self, slide: SlideRecord):
        y = self.text(slide.title, 120, GOLD, topleft=(140, 120))
        for line in slide.content:
            y = self.text(line, 72, WHITE, topleft=(140, y + 40))

    def draw_list(self, slide: SlideRecord):
        y = self.text(slide.title, 120, GOLD, center=(self.width // 2, 220))
        for line in slide.content:
            y = self.text(f"•  {line}", 72, WHITE, topleft=(420, y + 36))

    def draw_image(self, ref: str, box: pygame.Rect):
        image = self.load_image(ref)
        if image is None:
            return
        w, h = image.get_size()
        ratio = min(box.width / w, box.height / h)
        scaled = pygame.transform.smoothscale(image, (max(1, int(w * ratio)), max(1, int(h * ratio))))
        self.canvas.blit(scaled, scaled.get_rect(center=box.center))

    def draw_board(self, slide: SlideRecord) -> List[Region]:
        presenter = self.presenter
        topology = presenter.topology
        regions: List[Region] = []

        self.text(slide.title, 130, GOLD, center=(self.width // 2, 150))

        columns = topology.categories
        margin, gap = 160, 24
        col_width = (self.width - 2 * margin - gap * (columns - 1)) // columns
        cell_height = 120
        top = 280

        for cell, visited in presenter.board_cells():
            x = margin + cell.category * (col_width + gap)
            if cell.value == topology.value_step:
                header = pygame.Rect(x, top, col_width, 100)
                pygame.draw.rect(self.canvas, GOLD, header, border_radius=12)
                name = slide.content[cell.category] if cell.category < len(slide.content) \
                    else f"Category {cell.category + 1}"
                self.text(name, 48, BACKGROUND, center=header.center, max_width=col_width - 20)

            row = cell.value // topology.value_step - 1
            rect = pygame.Rect(x, top + 100 + gap + row * (cell_height + gap), col_width, cell_height)
            pygame.draw.rect(self.canvas, SPENT if visited else (69, 10, 10), rect, border_radius=16)
            pygame.draw.rect(self.canvas, MUTED if visited else BORDER, rect, 4, border_radius=16)
            self.text(f"{cell.value}$", 80, MUTED if visited else GOLD, center=rect.center)
            regions.append(Region(rect, lambda index=cell.index: presenter.request_jump(index)))

        return regions

    def draw_question(self, slide: SlideRecord, step: int) -> List[Region]:
        regions: List[Region] = []
        y = self.text(slide.title, 120, GOLD, center=(self.width // 2, 180))
        prompt = slide.content[0] if slide.content else ""
        y = self.text(prompt, 80, WHITE, center=(self.width // 2, y + 100))

        if step >= 1:
            box = pygame.Rect(self.width // 2 - 420, y + 30, 840, 420)
            if slide.image:
                self.draw_image(slide.image, box)
            else:
                pygame.draw.rect(self.canvas, MUTED, box, 4, border_radius=12)
                self.text("No hint image", 48, MUTED, center=box.center)
            y = box.bottom

        if step >= 2:
            answer = slide.content[1] if len(slide.content) > 1 else ""
            self.text("ANSWER", 44, BORDER, center=(self.width // 2, y + 50))
            self.text(answer, 100, CREAM, center=(self.width // 2, y + 130))
        else:
            label = "Show hint" if step == 0 else "Show answer"
            button = pygame.Rect(self.width - 520, self.height - 200, 380, 100)
            pygame.draw.rect(self.canvas, GOLD, button, border_radius=50)
            self.text(label, 56, BACKGROUND, center=button.center)
            regions.append(Region(button, self.presenter.request_reveal))

        return regions

    def credits_lines(self, slide: SlideRecord) -> List[Tuple[str, int, Tuple[int, int, int], int]]:
        """(text, size, colour, height) for each row of the credits column."""
        rows = [(slide.title, 110, GOLD, 180)]
        if slide.subtitle:
            rows.append((slide.subtitle, 56, CREAM, 120))
        for line in slide.content:
            if not line.strip():
                rows.append(("", 40, WHITE, 60))
            elif line in CREDITS_HEADINGS or line.lower().endswith(" list"):
                rows.append((line, 72, GOLD, 140))
            else:
                rows.append((line, 56, WHITE, 90))
        rows.append(("", 40, WHITE, 700))
        rows.append((CREDITS_FINAL_TITLE, 140, GOLD, 200))
        return rows

    def measure_credits(self, slide: Optional[SlideRecord] = None) -> float:
        """Centre of the final title inside the credits column."""
        slide = slide or self.presenter.get_current_slide()
        rows = self.credits_lines(slide)
        return sum(height for *_, height in rows[:-1]) + rows[-1][3] / 2

    def draw_credits(self, slide: SlideRecord):
        target = self.presenter.synchronizer.credits_scroll_target
        if target is None:
            target = self.height / 2 - self.measure_credits(slide)
        offset = max(target, self.height - self.credits_elapsed * CREDITS_SCROLL_SPEED)
        y = offset
        for text, size, color, height in self.credits_lines(slide):
            if text and -height < y < self.height + height:
                self.text(text, size, color, center=(self.width // 2, int(y + height / 2)))
            y += height

    def draw_controls(self, fullscreen: bool) -> List[Region]:
        """Navigation bar, progress dots, notice and help line."""
        presenter = self.presenter
        navigation = presenter.navigation
        regions: List[Region] = []

        if presenter.notice:
            self.text(presenter.notice, 40, CREAM, center=(self.width // 2, 70))
        if fullscreen:
            return regions

        bar = pygame.Rect(0, 0, 1100, 90)
        bar.midbottom = (self.width // 2, self.height - 40)
        pygame.draw.rect(self.canvas, PANEL, bar, border_radius=45)

        prev_rect = pygame.Rect(bar.left + 20, bar.top + 15, 60, 60)
        next_rect = pygame.Rect(bar.right - 220, bar.top + 15, 60, 60)
        self.text("<", 72, WHITE if navigation.can_retreat else MUTED, center=prev_rect.center)
        self.text(">", 72, WHITE if navigation.can_advance else MUTED, center=next_rect.center)
        regions.append(Region(prev_rect, presenter.request_retreat))
        regions.append(Region(next_rect, presenter.request_advance))

        indices = presenter.progress_indices()
        span = next_rect.left - prev_rect.right - 40
        step = span / max(1, len(indices))
        deck = presenter.get_deck()
        for n, index in enumerate(indices):
            dot = pygame.Rect(0, 0, max(6, int(step) - 4), 12)
            dot.midleft = (int(prev_rect.right + 20 + n * step), bar.centery)
            if index == presenter.current_index:
                color = GOLD
            elif deck[index].visited:
                color = MUTED
            else:
                color = CREAM
            pygame.draw.rect(self.canvas, color, dot, border_radius=6)
            regions.append(Region(dot.inflate(0, 40), lambda i=index: presenter.request_jump(i)))

        counter = f"{presenter.current_index + 1} / {len(deck)}"
        self.text(counter, 40, CREAM, center=(bar.right - 90, bar.centery))
        self.text(HELP_TEXT, 32, CREAM, topleft=(60, 44))
        return regions
