"""
Configuration management for GalaDeck.
Loads environment variables and provides centralized config access.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

class Config:
    """Application configuration."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent
    DATA_DIR = Path(os.getenv("GALADECK_DATA_DIR", str(PROJECT_ROOT / "data")))
    AUDIO_DIR = DATA_DIR / "audio"

    # Background music
    DEFAULT_AUDIO_SOURCE = os.getenv("DEFAULT_AUDIO_SOURCE", "bgm.mp3")
    CREDITS_CUE_SECONDS = float(os.getenv("CREDITS_CUE_SECONDS", "30"))

    # Canvas and viewport
    CANVAS_WIDTH = int(os.getenv("CANVAS_WIDTH", "1920"))
    CANVAS_HEIGHT = int(os.getenv("CANVAS_HEIGHT", "1080"))
    VIEWPORT_MARGIN = int(os.getenv("VIEWPORT_MARGIN", "20"))

    # Input
    DOUBLE_CLICK_MS = int(os.getenv("DOUBLE_CLICK_MS", "250"))

    # Quiz round layout (board before questions)
    QUIZ_BOARD_INDEX = int(os.getenv("QUIZ_BOARD_INDEX", "17"))
    QUIZ_FIRST_QUESTION = int(os.getenv("QUIZ_FIRST_QUESTION", "18"))
    QUIZ_LAST_QUESTION = int(os.getenv("QUIZ_LAST_QUESTION", "42"))
    QUIZ_POST_INDEX = int(os.getenv("QUIZ_POST_INDEX", "43"))
    CREDITS_INDEX = int(os.getenv("CREDITS_INDEX", "44"))
    QUIZ_CATEGORIES = int(os.getenv("QUIZ_CATEGORIES", "5"))

    # Application Settings
    WINDOW_FPS = int(os.getenv("WINDOW_FPS", "60"))
    WINDOW_TITLE = os.getenv("WINDOW_TITLE", "GalaDeck")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def ensure_directories(cls):
        """Ensure all required directories exist."""
        for directory in [cls.DATA_DIR, cls.AUDIO_DIR]:
            directory.mkdir(parents=True, exist_ok=True)

    @classmethod
    def validate(cls):
        """Validate that the configured values are usable."""
        errors = []

        if cls.CANVAS_WIDTH <= 0 or cls.CANVAS_HEIGHT <= 0:
            errors.append("CANVAS_WIDTH and CANVAS_HEIGHT must be positive")

        if cls.VIEWPORT_MARGIN < 0:
            errors.append("VIEWPORT_MARGIN must not be negative")

        if cls.DOUBLE_CLICK_MS <= 0:
            errors.append("DOUBLE_CLICK_MS must be positive")

        if cls.CREDITS_CUE_SECONDS < 0:
            errors.append("CREDITS_CUE_SECONDS must not be negative")

        if not (cls.QUIZ_BOARD_INDEX < cls.QUIZ_FIRST_QUESTION <= cls.QUIZ_LAST_QUESTION
                < cls.QUIZ_POST_INDEX < cls.CREDITS_INDEX):
            errors.append("Quiz indices must be ordered board < questions < post-quiz < credits")

        if errors:
            raise ValueError("Configuration errors:\n" + "\n".join(f"  - {e}" for e in errors))

        return True

    @classmethod
    def quiz_topology(cls):
        """Build the quiz topology described by the configuration."""
        from ..core.quiz_topology import QuizTopology

        return QuizTopology(
            board=cls.QUIZ_BOARD_INDEX,
            first_question=cls.QUIZ_FIRST_QUESTION,
            last_question=cls.QUIZ_LAST_QUESTION,
            post_quiz=cls.QUIZ_POST_INDEX,
            credits=cls.CREDITS_INDEX,
            categories=cls.QUIZ_CATEGORIES,
        )


# Initialize directories on import
Config.ensure_directories()
