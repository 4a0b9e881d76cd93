import json

import pytest

from ligue1_stats.adapters.json_seasons import JsonSeasonSource
from ligue1_stats.constants import SEASON_INDEX_FILE, SEASONS_SUBDIR
from ligue1_stats.logging_utils import reset_warn_once_cache


@pytest.fixture(autouse=True)
def _reset_warnings():
    reset_warn_once_cache()
    yield
    reset_warn_once_cache()


@pytest.fixture
def write_league(tmp_path):
    """Write db.json plus one file per season payload; returns the data root."""

    def _write(seasons, order=None):
        seasons_dir = tmp_path.joinpath(*SEASONS_SUBDIR)
        seasons_dir.mkdir(parents=True, exist_ok=True)
        for payload in seasons:
            (seasons_dir / f"{payload['id']}.json").write_text(json.dumps(payload), encoding="utf-8")
        season_order = order if order is not None else [payload["id"] for payload in seasons]
        (tmp_path / SEASON_INDEX_FILE).write_text(
            json.dumps({"seasonOrder": season_order}), encoding="utf-8"
        )
        return str(tmp_path)

    return _write


@pytest.fixture
def league_payloads():
    """Two seasons, most recent first; Paris-SG changes id between them."""
    latest = {
        "id": "2024-2025",
        "name": "Ligue 1 2024/2025",
        "teams": [
            {"id": "psg", "name": "Paris-SG"},
            {"id": "om", "name": "Marseille"},
            {"id": "losc", "name": "Lille"},
        ],
        "matches": [
            {"id": "n1", "homeTeamId": "psg", "awayTeamId": "om", "playedAt": "2024-08-16T18:45:00Z",
             "homeScore": 2, "awayScore": 1, "odds": {"home": 1.5, "draw": 4.0, "away": 6.0}},
            {"id": "n2", "homeTeamId": "losc", "awayTeamId": "psg", "playedAt": "2024-08-23T18:45:00Z",
             "homeScore": 1, "awayScore": 1, "odds": {"home": 3.5, "draw": 3.6, "away": 2.0}},
            {"id": "n3", "homeTeamId": "om", "awayTeamId": "losc", "playedAt": "2024-08-30T18:45:00Z",
             "homeScore": None, "awayScore": None},
        ],
    }
    previous = {
        "id": "2023-2024",
        "name": "Ligue 1 2023/2024",
        "teams": [
            {"id": "t1", "name": "Paris-SG"},
            {"id": "t2", "name": "Marseille"},
            {"id": "t3", "name": "Brest"},
        ],
        "matches": [
            {"id": "o1", "homeTeamId": "t1", "awayTeamId": "t3", "playedAt": "2023-08-12T19:00:00Z",
             "homeScore": 3, "awayScore": 0, "favouriteTeamId": "t1", "favouriteOdds": 1.25},
            {"id": "o2", "homeTeamId": "t2", "awayTeamId": "t1", "playedAt": "2023-08-19T19:00:00Z",
             "homeScore": 1, "awayScore": 0, "odds": {"home": 3.0, "draw": 3.4, "away": 2.5}},
        ],
    }
    return [latest, previous]


@pytest.fixture
def league_source(write_league, league_payloads):
    return JsonSeasonSource(write_league(league_payloads), max_workers=2)


@pytest.fixture
def client(league_source):
    from ligue1_stats.app import app
    from ligue1_stats.services.league_service import LeagueService

    app.testing = True
    app.config["LEAGUE_SERVICE"] = LeagueService(league_source)
    with app.test_client() as client:
        yield client
    app.config.pop("LEAGUE_SERVICE", None)
