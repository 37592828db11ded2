import logging
import os
from typing import Optional, TextIO

LOG_LEVEL_ENV = "FANTASY_STORY_LOG_LEVEL"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def level_for_verbosity(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int = 0, stream: Optional[TextIO] = None) -> int:
    """Configure the root logger for a story run and return the chosen level.

    ``FANTASY_STORY_LOG_LEVEL`` (e.g. ``debug``) wins over ``verbosity``.
    Logs go to stderr by default so the transcript on stdout stays clean.
    """
    level = level_for_verbosity(verbosity)
    level_name = os.getenv(LOG_LEVEL_ENV)
    if level_name:
        level = getattr(logging, level_name.upper(), level)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=stream, force=True)
    return level
