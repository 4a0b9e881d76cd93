"""De-duplicated warnings for data problems that repeat on every request.

Season files are re-aggregated on each page view, so a bad team reference
would otherwise be logged once per request for the life of the process.
"""
from __future__ import annotations

import logging
import threading
from typing import Hashable, Optional, Set

_seen: Set[Hashable] = set()
_seen_lock = threading.Lock()


def warn_once(key: Hashable, msg: str, *args: object, logger: Optional[logging.Logger] = None) -> bool:
    """Log ``msg`` at WARNING the first time ``key`` is seen; return whether it was logged."""
    with _seen_lock:
        first = key not in _seen
        _seen.add(key)
    if first:
        (logger or logging.getLogger(__name__)).warning(msg, *args)
    return first


def reset_warn_once_cache() -> None:
    with _seen_lock:
        _seen.clear()
