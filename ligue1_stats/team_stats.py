"""Per-team season statistics: record, streaks and goal distributions."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from .config import (
    GOAL_LINES,
    POINTS_PER_DRAW,
    POINTS_PER_WIN,
    RESULT_CODES,
    RESULT_DRAW,
    RESULT_LOSS,
    RESULT_WIN,
    UNKNOWN_TEAM_NAME,
)
from .domain.models import GoalExtremes, GoalLine, Season, TeamMatch, TeamSeasonData


def classify_result(goals_for: float, goals_against: float) -> str:
    if goals_for > goals_against:
        return RESULT_WIN
    if goals_for < goals_against:
        return RESULT_LOSS
    return RESULT_DRAW


def longest_streaks(results: Iterable[str]) -> Dict[str, int]:
    """Longest run of consecutive identical results, per result code.

    Any other result ends the run, so [V, V, N, V, V, V] gives V=3, N=1.
    """
    best = {code: 0 for code in RESULT_CODES}
    current_code: Optional[str] = None
    run = 0
    for result in results:
        run = run + 1 if result == current_code else 1
        current_code = result
        if run > best.get(result, 0):
            best[result] = run
    return best


def goal_lines(totals: Sequence[float], lines: Sequence[float] = GOAL_LINES) -> List[GoalLine]:
    lines_out = []
    for line in lines:
        over = sum(1 for total in totals if total > line)
        lines_out.append(GoalLine(line=line, over=over, under=len(totals) - over))
    return lines_out


def goal_extremes(goals: Sequence[float]) -> GoalExtremes:
    if not goals:
        return GoalExtremes(max=0, min=0, average=0)
    return GoalExtremes(max=max(goals), min=min(goals), average=sum(goals) / len(goals))


def compute_team_season_data(season: Season, team_id: str) -> Optional[TeamSeasonData]:
    """Statistics for one team in one season, or None if the team is not in it.

    Only matches with both scores count; they are taken in kickoff order.
    """
    if not season.has_team(team_id):
        return None

    names = season.names_by_id()
    played = sorted(
        (
            match
            for match in season.matches
            if match.is_played and team_id in (match.home_team_id, match.away_team_id)
        ),
        key=lambda match: match.kickoff_sort_key,
    )

    matches: List[TeamMatch] = []
    for match in played:
        is_home = match.home_team_id == team_id
        goals_for = match.home_score if is_home else match.away_score
        goals_against = match.away_score if is_home else match.home_score
        opponent_id = match.away_team_id if is_home else match.home_team_id
        matches.append(
            TeamMatch(
                match_id=match.match_id,
                season_id=season.season_id,
                season_name=season.name,
                played_at=match.played_at,
                is_home=is_home,
                opponent_id=opponent_id,
                opponent_name=names.get(opponent_id, UNKNOWN_TEAM_NAME),
                goals_for=goals_for,
                goals_against=goals_against,
                result=classify_result(goals_for, goals_against),
            )
        )

    results = [match.result for match in matches]
    wins = results.count(RESULT_WIN)
    draws = results.count(RESULT_DRAW)
    losses = results.count(RESULT_LOSS)
    goals_for_total = sum(match.goals_for for match in matches)
    goals_against_total = sum(match.goals_against for match in matches)
    divisor = len(matches) or 1
    streaks = longest_streaks(results)

    return TeamSeasonData(
        team_id=team_id,
        team_name=names.get(team_id, UNKNOWN_TEAM_NAME),
        season_id=season.season_id,
        season_name=season.name,
        matches=matches,
        wins=wins,
        draws=draws,
        losses=losses,
        points=wins * POINTS_PER_WIN + draws * POINTS_PER_DRAW,
        goals_for=goals_for_total,
        goals_against=goals_against_total,
        average_goals_for=goals_for_total / divisor,
        average_goals_against=goals_against_total / divisor,
        goal_lines=goal_lines([match.goals_for + match.goals_against for match in matches]),
        longest_win_streak=streaks[RESULT_WIN],
        longest_draw_streak=streaks[RESULT_DRAW],
        longest_loss_streak=streaks[RESULT_LOSS],
        home_goals=goal_extremes([match.goals_for for match in matches if match.is_home]),
        away_goals=goal_extremes([match.goals_for for match in matches if not match.is_home]),
    )
