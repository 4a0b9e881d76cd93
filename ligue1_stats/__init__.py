"""Ligue 1 standings, matchdays, team profiles and favourite-betting simulation."""
import logging
import os

_root = logging.getLogger()
if not _root.handlers:
    _level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
    logging.basicConfig(
        level=_level if isinstance(_level, int) else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )

# Request lines from the dev server drown the season loader messages.
logging.getLogger("werkzeug").setLevel(logging.WARNING)
