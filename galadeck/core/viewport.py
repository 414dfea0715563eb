"""
Viewport scaling - Fit the fixed-size slide canvas inside the window.
"""

from typing import Optional, Tuple

from ..utils.config import Config

# Smallest scale ever reported, so a tiny window never yields zero or negative sizes
MIN_SCALE = 0.01


def compute_scale(
    viewport_width: float,
    viewport_height: float,
    canvas_width: float,
    canvas_height: float,
    margin: float
) -> float:
    """Uniform scale that fits the canvas inside the viewport minus a margin on every side."""
    scale = min(
        (viewport_width - 2 * margin) / canvas_width,
        (viewport_height - 2 * margin) / canvas_height,
    )
    return max(MIN_SCALE, scale)


class ViewportScaler:
    """Tracks the current scale for a fixed canvas."""

    def __init__(
        self,
        viewport_width: float,
        viewport_height: float,
        canvas_width: Optional[int] = None,
        canvas_height: Optional[int] = None,
        margin: Optional[int] = None
    ):
        self.canvas_width = canvas_width or Config.CANVAS_WIDTH
        self.canvas_height = canvas_height or Config.CANVAS_HEIGHT
        self.margin = Config.VIEWPORT_MARGIN if margin is None else margin
        self.viewport = (viewport_width, viewport_height)
        self.scale = 1.0
        self.resize(viewport_width, viewport_height)

    def resize(self, viewport_width: float, viewport_height: float) -> float:
        """Recompute the scale for a new viewport size."""
        self.viewport = (viewport_width, viewport_height)
        self.scale = compute_scale(
            viewport_width, viewport_height,
            self.canvas_width, self.canvas_height,
            self.margin,
        )
        return self.scale

    def scaled_size(self) -> Tuple[int, int]:
        return (round(self.canvas_width * self.scale), round(self.canvas_height * self.scale))

    def offset(self) -> Tuple[int, int]:
        """Top-left corner that centres the scaled canvas in the viewport."""
        width, height = self.scaled_size()
        return (
            round((self.viewport[0] - width) / 2),
            round((self.viewport[1] - height) / 2),
        )
