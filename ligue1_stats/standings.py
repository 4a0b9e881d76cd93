"""League table aggregation."""

from __future__ import annotations

from typing import Dict, List

from .config import POINTS_PER_DRAW, POINTS_PER_WIN, UNKNOWN_TEAM_NAME, setup_logger
from .domain.models import Season, TeamStanding

logger = setup_logger(__name__)


def _ensure_row(rows: Dict[str, TeamStanding], team_id: str, names: Dict[str, str]) -> TeamStanding:
    row = rows.get(team_id)
    if row is None:
        row = TeamStanding(team_id=team_id, team_name=names.get(team_id, UNKNOWN_TEAM_NAME))
        rows[team_id] = row
    return row


def standings_sort_key(row: TeamStanding):
    """Points, goal difference and goals scored descending, then name ascending."""
    return (-row.points, -row.goal_difference, -row.goals_for, row.team_name)


def calculate_standings(season: Season) -> List[TeamStanding]:
    """Aggregate played matches into a sorted table.

    Matches missing either score are not played yet and are skipped. A team
    only gets a row once it has a played match.
    """
    rows: Dict[str, TeamStanding] = {}
    names = season.names_by_id()
    skipped = 0

    for match in season.matches:
        if not match.is_played:
            skipped += 1
            continue

        home = _ensure_row(rows, match.home_team_id, names)
        away = _ensure_row(rows, match.away_team_id, names)

        home.played += 1
        away.played += 1
        home.goals_for += match.home_score
        home.goals_against += match.away_score
        away.goals_for += match.away_score
        away.goals_against += match.home_score

        if match.home_score > match.away_score:
            home.wins += 1
            away.losses += 1
            home.points += POINTS_PER_WIN
        elif match.home_score < match.away_score:
            away.wins += 1
            home.losses += 1
            away.points += POINTS_PER_WIN
        else:
            home.draws += 1
            away.draws += 1
            home.points += POINTS_PER_DRAW
            away.points += POINTS_PER_DRAW

    if skipped:
        logger.debug("standings: %s skipped %d unplayed matches", season.season_id, skipped)

    return sorted(rows.values(), key=standings_sort_key)
