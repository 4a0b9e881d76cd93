import math

import pytest

from ligue1_stats.domain.models import ChartPoint, Match, Season, SimulationResult, Team
from ligue1_stats.simulation import (
    build_simulation_seasons,
    chart_polyline,
    chart_zero_y,
    is_eligible,
    normalize_stake,
    simulate,
)


@pytest.fixture
def simulation_seasons(league_source):
    return build_simulation_seasons(league_source.load_seasons(league_source.season_order()))


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("10", 10.0),
        ("2,5", 2.5),
        ("7 EUR", 7.0),
        ("  15.75", 15.75),
        ("12,5,3", 12.5),
        ("1e3", 1000.0),
        ("0.5", 1.0),
        ("-4", 1.0),
        ("abc", 1.0),
        ("", 1.0),
        (None, 1.0),
        (float("nan"), 1.0),
        (float("inf"), 1.0),
        (25, 25.0),
        ("\u0665\u0660", 1.0),
        ("\uff11\uff10", 1.0),
    ],
)
def test_normalize_stake(raw, expected):
    assert normalize_stake(raw) == pytest.approx(expected)


def test_favourites_resolved_from_odds_and_explicit_fields(simulation_seasons):
    by_id = {m.match_id: m for season in simulation_seasons for m in season.matches}

    assert (by_id["n1"].favourite_team_id, by_id["n1"].favourite_odds) == ("psg", 1.5)
    assert (by_id["n2"].favourite_team_name, by_id["n2"].favourite_odds) == ("Paris-SG", 2.0)
    assert (by_id["o1"].favourite_team_id, by_id["o1"].favourite_odds) == ("t1", 1.25)
    assert by_id["o2"].winner_team_id == "t2"
    assert by_id["n2"].winner_team_id is None
    assert by_id["n3"].result_known is False
    assert not is_eligible(by_id["n3"])


def test_replay_across_seasons_in_kickoff_order(simulation_seasons):
    result = simulate(simulation_seasons, "Paris-SG", 10.0, team_id="psg")

    assert [m.match_id for m in result.matches] == ["o1", "o2", "n1", "n2"]
    assert [m.net_profit for m in result.matches] == pytest.approx([2.5, -10.0, 5.0, -10.0])
    assert [m.cumulative for m in result.matches] == pytest.approx([2.5, -7.5, -2.5, -12.5])
    assert [m.opponent_name for m in result.matches] == ["Brest", "Marseille", "Marseille", "Lille"]
    assert result.matches[0].score == "3 - 0"
    assert result.matches[3].favourite_won is False

    assert result.total_profit == pytest.approx(-12.5)
    assert result.invested == pytest.approx(40.0)
    assert result.roi == pytest.approx(-31.25)
    assert result.team_id == "psg"


def test_total_equals_last_cumulative(simulation_seasons):
    result = simulate(simulation_seasons, "paris-sg", 3.0)
    assert result.total_profit == pytest.approx(result.matches[-1].cumulative)


def test_season_breakdown_in_first_seen_order(simulation_seasons):
    result = simulate(simulation_seasons, "Paris-SG", 10.0)
    breakdown = [(row.season_id, row.matches, row.profit) for row in result.season_breakdown]
    assert breakdown == [
        ("2023-2024", 2, pytest.approx(-7.5)),
        ("2024-2025", 2, pytest.approx(-5.0)),
    ]
    assert sum(row.profit for row in result.season_breakdown) == pytest.approx(result.total_profit)


def test_chart_bounds_include_zero(simulation_seasons):
    result = simulate(simulation_seasons, "Paris-SG", 10.0)
    assert [point.index for point in result.chart_points] == [0, 1, 2, 3]
    assert result.min_y == pytest.approx(-12.5)
    assert result.max_y == pytest.approx(2.5)


def test_unplayed_matches_are_skipped(simulation_seasons):
    result = simulate(simulation_seasons, "Marseille", 10.0)
    assert [m.match_id for m in result.matches] == ["o2", "n1"]
    # Betting on the favourite even when it is the opponent.
    assert [m.net_profit for m in result.matches] == pytest.approx([-10.0, 5.0])


def test_unknown_or_missing_team_gives_empty_result(simulation_seasons):
    for name in (None, "", "Nowhere FC"):
        result = simulate(simulation_seasons, name, 10.0)
        assert result.matches == []
        assert result.total_profit == 0
        assert result.roi == 0
        assert (result.min_y, result.max_y) == (0, 0)


def test_matches_without_usable_favourite_are_ignored():
    season = Season(
        "s",
        "S",
        (Team("a", "Angers"), Team("b", "Brest")),
        (
            Match("m1", "a", "b", "2024-08-10T18:00:00Z", 1, 0),
            Match("m2", "a", "b", "2024-08-11T18:00:00Z", 1, 0, "a", None),
            Match("m3", "b", "a", "not a date", 0, 2, "a", 3.0),
            Match("m4", "b", "a", "2024-08-12T18:00:00Z", 2, 2, "b", 2.0),
        ),
    )
    result = simulate(build_simulation_seasons([season]), "Angers", 10.0)

    assert [m.match_id for m in result.matches] == ["m4", "m3"]
    assert [m.net_profit for m in result.matches] == pytest.approx([-10.0, 20.0])
    assert math.isclose(result.roi, 50.0)


def test_chart_polyline():
    empty = SimulationResult(team_id=None, team_name=None, stake=10)
    assert chart_polyline(empty) == ""

    single = SimulationResult(
        team_id="a", team_name="A", stake=10,
        chart_points=[ChartPoint(index=0, value=5.0, played_at="")], min_y=0.0, max_y=5.0,
    )
    assert chart_polyline(single, width=760, height=240) == "380,0"

    pair = SimulationResult(
        team_id="a", team_name="A", stake=10,
        chart_points=[
            ChartPoint(index=0, value=2.5, played_at=""),
            ChartPoint(index=1, value=-7.5, played_at=""),
        ],
        min_y=-7.5, max_y=2.5,
    )
    assert chart_polyline(pair, width=100, height=10) == "0,0 100,10"
    assert chart_zero_y(pair, height=10) == pytest.approx(2.5)
    assert chart_zero_y(single, height=240) == pytest.approx(240)
