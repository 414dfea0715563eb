"""
Logging setup for the GalaDeck entry points.
Library modules only create loggers; handlers are installed here.
"""

import logging
from typing import Optional

from .config import Config

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Install a console handler at ``level`` (Config.LOG_LEVEL by default)."""
    level_name = (level or Config.LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
