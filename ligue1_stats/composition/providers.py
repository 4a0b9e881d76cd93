from __future__ import annotations

from typing import Optional

from flask import current_app

from ..adapters.json_seasons import JsonSeasonSource
from ..services.league_service import LeagueService
from ..settings import DATA_ROOT

_service_singleton: Optional[LeagueService] = None


def season_source(data_root: Optional[str] = None) -> JsonSeasonSource:
    """
    Return the season source for ``data_root`` (settings.DATA_ROOT by default).
    Season files are the only backing store.
    """
    return JsonSeasonSource(data_root or DATA_ROOT)


def league_service() -> LeagueService:
    global _service_singleton
    if _service_singleton is None:
        _service_singleton = LeagueService(season_source())
    return _service_singleton


def reset_league_service() -> None:
    """Drop the process-wide service (and its season cache)."""
    global _service_singleton
    _service_singleton = None


def current_service() -> LeagueService:
    """Service configured on the Flask app (tests) or the process-wide default."""
    service = current_app.config.get("LEAGUE_SERVICE")
    if service is not None:
        return service
    return league_service()
