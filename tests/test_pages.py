import pytest

from ligue1_stats.app import app
from ligue1_stats.adapters.json_seasons import JsonSeasonSource
from ligue1_stats.services.league_service import LeagueService


def _text(response):
    return response.get_data(as_text=True)


def test_standings_page_shows_latest_season(client):
    response = client.get("/")
    assert response.status_code == 200
    body = _text(response)
    assert "Ligue 1 2024/2025" in body
    assert body.index("Paris-SG") < body.index("Lille") < body.index("Marseille")
    assert "Journee 1" in body


def test_standings_page_season_selection(client):
    body = _text(client.get("/?season=2023-2024"))
    assert "Brest" in body
    assert "Lille" not in body


def test_unknown_season_falls_back_to_latest(client):
    response = client.get("/?season=1990-1991&matchday=abc")
    assert response.status_code == 200
    assert "Journee 1" in _text(response)


def test_matchdays_page(client):
    body = _text(client.get("/matchdays?season=2024-2025&matchday=1"))
    assert "Matchdays Ligue 1" in body
    assert "ven. 16 août · 18:45" in body
    assert "2 - 1" in body


def test_teams_page_lists_each_team_once(client):
    body = _text(client.get("/teams"))
    assert body.count(">Paris-SG</a>") == 1
    assert "Brest" in body


def test_team_page(client):
    body = _text(client.get("/teams/psg"))
    assert "Ligue 1 2024/2025" in body
    assert "Plus longue serie de victoires : 1" in body
    assert "2 rencontres" in body


def test_team_page_previous_season(client):
    body = _text(client.get("/teams/psg?season=2023-2024"))
    assert "<strong>Ligue 1 2023/2024</strong>" in body
    assert "Brest" in body


def test_unknown_team_page_is_404(client):
    response = client.get("/teams/nope")
    assert response.status_code == 404
    assert "Page introuvable" in _text(response)


def test_simulation_page(client):
    response = client.get("/simulation?team=psg&stake=10")
    assert response.status_code == 200
    body = _text(response)
    assert "-12,50\u00a0€" in body
    assert "40,00\u00a0€" in body
    assert "<polyline" in body
    assert 'value="10"' in body


def test_simulation_page_defaults(client):
    body = _text(client.get("/simulation"))
    # First team alphabetically, default stake.
    assert '<option value="t3" selected>Brest</option>' in body
    assert "10,00\u00a0€" in body


def test_empty_league_pages(write_league):
    app.testing = True
    app.config["LEAGUE_SERVICE"] = LeagueService(JsonSeasonSource(write_league([])))
    try:
        with app.test_client() as client:
            assert "Aucune saison disponible." in _text(client.get("/"))
            assert "Aucune equipe disponible." in _text(client.get("/teams"))
            assert "Aucun match avec cote favori" in _text(client.get("/simulation"))
    finally:
        app.config.pop("LEAGUE_SERVICE", None)


@pytest.mark.parametrize("path", ["/", "/matchdays", "/teams", "/simulation"])
def test_missing_season_file_is_503(write_league, league_payloads, path):
    root = write_league(league_payloads[:1], order=["2024-2025", "1990-1991"])
    app.testing = True
    app.config["LEAGUE_SERVICE"] = LeagueService(JsonSeasonSource(root))
    try:
        with app.test_client() as client:
            response = client.get(path)
        assert response.status_code == 503
        assert "Donnees indisponibles" in _text(response)
    finally:
        app.config.pop("LEAGUE_SERVICE", None)


def test_simulation_page_presets_and_baseline(client):
    body = _text(client.get("/simulation?team=psg&stake=10"))
    for preset in (5, 10, 20, 50):
        assert f"team=psg&amp;stake={preset}" in body
    # Profit runs from -12.5 to 2.5, so break-even sits 40px from the top.
    assert 'y1="40"' in body
