"""
Configuration for the Ligue 1 stats site
Re-exports domain constants and builds module loggers
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from .constants import (
    CHART_HEIGHT,
    CHART_WIDTH,
    GOAL_LINES,
    MATCHDAY_SIZE,
    MIN_STAKE,
    POINTS_PER_DRAW,
    POINTS_PER_WIN,
    RESULT_CODES,
    RESULT_DRAW,
    RESULT_LOSS,
    RESULT_WIN,
    SEASON_INDEX_FILE,
    SEASONS_SUBDIR,
    STAKE_PRESETS,
    UNKNOWN_TEAM_NAME,
)
from .settings import (
    DATA_ROOT,
    DEFAULT_STAKE,
    DEV_SERVER_HOST,
    DEV_SERVER_PORT,
    SEASON_CACHE_ENABLED,
    SEASON_LOAD_WORKERS,
)


def setup_logger(name: str) -> logging.Logger:
    """Create or retrieve a configured logger for the application."""

    logger = logging.getLogger(name)

    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    logger.setLevel(log_level)

    if logging.getLogger().handlers:
        logger.propagate = True
        return logger

    if not logger.handlers:
        log_file = os.path.join(os.path.dirname(os.path.dirname(__file__)), "ligue1_stats.log")
        handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3)
        formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s')
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        logger.addHandler(handler)
        logger.propagate = False

    return logger
