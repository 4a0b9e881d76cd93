from __future__ import annotations

import json
import logging
import math
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..config import SEASON_CACHE_ENABLED, SEASON_INDEX_FILE, SEASON_LOAD_WORKERS, SEASONS_SUBDIR
from ..domain.models import Match, MatchdayRef, Season, Team
from ..errors import SeasonDataError, SeasonNotFoundError

log = logging.getLogger(__name__)


class _SeasonCache:
    """Process-lifetime season store; files are immutable while the process runs."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._store: Dict[str, Season] = {}

    def get(self, key: str) -> Optional[Season]:
        with self._lock:
            return self._store.get(key)

    def set(self, key: str, value: Season) -> None:
        with self._lock:
            self._store[key] = value

    def clear(self) -> None:
        with self._lock:
            self._store.clear()


def _coerce_score(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _coerce_odds(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        candidate = value.strip().replace(",", ".")
        if not candidate:
            return None
        try:
            value = float(candidate)
        except ValueError:
            return None
    if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
        return None
    return float(value)


def _as_id(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    return text or None


def _resolve_favourite(raw: Dict[str, Any]) -> Tuple[Optional[str], Optional[float]]:
    """Explicit favourite fields win; otherwise the shorter of the home/away prices."""
    explicit_id = _as_id(raw.get("favouriteTeamId"))
    explicit_odds = _coerce_odds(raw.get("favouriteOdds"))
    if explicit_id and explicit_odds:
        return explicit_id, explicit_odds

    odds = raw.get("odds")
    if not isinstance(odds, dict):
        return explicit_id, explicit_odds
    home = _coerce_odds(odds.get("home"))
    away = _coerce_odds(odds.get("away"))
    if home is None or away is None or home == away:
        return None, None
    if home < away:
        return _as_id(raw.get("homeTeamId")), home
    return _as_id(raw.get("awayTeamId")), away


def _parse_team(raw: Any) -> Optional[Team]:
    if not isinstance(raw, dict):
        return None
    team_id = _as_id(raw.get("id"))
    if team_id is None:
        return None
    return Team(team_id=team_id, name=str(raw.get("name") or "").strip())


def _parse_match(raw: Any) -> Optional[Match]:
    if not isinstance(raw, dict):
        return None
    match_id = _as_id(raw.get("id"))
    if match_id is None:
        return None
    favourite_id, favourite_odds = _resolve_favourite(raw)
    return Match(
        match_id=match_id,
        home_team_id=_as_id(raw.get("homeTeamId")) or "",
        away_team_id=_as_id(raw.get("awayTeamId")) or "",
        played_at=str(raw.get("playedAt") or ""),
        home_score=_coerce_score(raw.get("homeScore")),
        away_score=_coerce_score(raw.get("awayScore")),
        favourite_team_id=favourite_id,
        favourite_odds=favourite_odds,
    )


def _parse_matchdays(raw: Any) -> Optional[Tuple[MatchdayRef, ...]]:
    if not isinstance(raw, list):
        return None
    refs: List[MatchdayRef] = []
    for day in raw:
        if not isinstance(day, dict):
            continue
        number = day.get("number")
        if isinstance(number, bool) or not isinstance(number, int):
            number = None
        ids = day.get("matchIds")
        match_ids = tuple(
            match_id for match_id in (_as_id(item) for item in (ids or [])) if match_id
        ) if isinstance(ids, list) else ()
        refs.append(MatchdayRef(number=number, match_ids=match_ids))
    return tuple(refs)


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def parse_season(payload: Dict[str, Any], season_id: Optional[str] = None) -> Season:
    """Build a Season from one decoded season file, dropping rows it cannot use."""

    raw_teams = _as_list(payload.get("teams"))
    raw_matches = _as_list(payload.get("matches"))

    teams = [team for team in (_parse_team(row) for row in raw_teams) if team]
    matches = [match for match in (_parse_match(row) for row in raw_matches) if match]

    dropped = (len(raw_teams) - len(teams), len(raw_matches) - len(matches))
    if any(dropped):
        log.debug(
            "season_parse: dropped rows without id",
            extra={"season_id": season_id, "teams": dropped[0], "matches": dropped[1]},
        )

    # The requested id (the file stem) is canonical; lookups go back through it.
    file_id = _as_id(payload.get("id"))
    resolved_id = season_id or file_id or ""
    if season_id and file_id and file_id != season_id:
        log.warning("season_id_mismatch: file %s declares id %s", season_id, file_id)
    return Season(
        season_id=resolved_id,
        name=str(payload.get("name") or resolved_id),
        teams=tuple(teams),
        matches=tuple(matches),
        matchdays=_parse_matchdays(payload.get("matchdays")),
    )


class JsonSeasonSource:
    """Reads the season index and season files from a data directory."""

    def __init__(
        self,
        data_root: str,
        *,
        max_workers: int = SEASON_LOAD_WORKERS,
        cache_enabled: bool = SEASON_CACHE_ENABLED,
    ) -> None:
        self.data_root = data_root
        self.seasons_dir = os.path.join(data_root, *SEASONS_SUBDIR)
        self.max_workers = max(1, int(max_workers))
        self.cache_enabled = cache_enabled
        self._cache = _SeasonCache()

    def _read_json(self, path: str) -> Any:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)

    def season_order(self) -> List[str]:
        index_path = os.path.join(self.data_root, SEASON_INDEX_FILE)
        try:
            payload = self._read_json(index_path)
        except FileNotFoundError:
            log.warning("season_index_missing: %s", index_path)
            return []
        except (OSError, ValueError) as exc:
            raise SeasonDataError(SEASON_INDEX_FILE, details=str(exc)) from exc

        order = payload.get("seasonOrder") if isinstance(payload, dict) else None
        if not isinstance(order, list):
            return []
        return [season_id for season_id in (_as_id(item) for item in order) if season_id]

    def load_season(self, season_id: str) -> Season:
        if self.cache_enabled:
            cached = self._cache.get(season_id)
            if cached is not None:
                return cached

        path = os.path.join(self.seasons_dir, f"{season_id}.json")
        # Ids are file stems; anything that escapes the directory is unknown.
        if os.path.dirname(os.path.normpath(path)) != os.path.normpath(self.seasons_dir):
            raise SeasonNotFoundError(season_id)
        try:
            payload = self._read_json(path)
        except FileNotFoundError as exc:
            raise SeasonNotFoundError(season_id, details=path) from exc
        except (OSError, ValueError) as exc:
            raise SeasonDataError(season_id, details=str(exc)) from exc
        if not isinstance(payload, dict):
            raise SeasonDataError(season_id, details="season file is not an object")

        season = parse_season(payload, season_id)
        log.debug("season_loaded: %s (%d matches)", season.season_id, len(season.matches))
        if self.cache_enabled:
            self._cache.set(season_id, season)
        return season

    def load_seasons(self, season_ids: Sequence[str]) -> List[Season]:
        ids = list(season_ids)
        if not ids:
            return []
        if len(ids) == 1 or self.max_workers == 1:
            return [self.load_season(season_id) for season_id in ids]
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(ids))) as pool:
            futures = [pool.submit(self.load_season, season_id) for season_id in ids]
            return [future.result() for future in futures]

    def clear_cache(self) -> None:
        self._cache.clear()
