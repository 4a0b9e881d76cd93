"""Round (journee) grouping for the fixtures calendar."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from .config import MATCHDAY_SIZE, UNKNOWN_TEAM_NAME, setup_logger
from .domain.models import Match, Matchday, MatchdayMatch, MatchdayRef, Season
from .logging_utils import warn_once

logger = setup_logger(__name__)


def _resolved_grouping(season: Season, match_by_id: Dict[str, Match]) -> Optional[List[MatchdayRef]]:
    """Return the season's own grouping when it covers every match exactly once."""
    if not season.matchdays:
        return None

    resolved = [
        MatchdayRef(
            number=day.number,
            match_ids=tuple(match_id for match_id in day.match_ids if match_id in match_by_id),
        )
        for day in season.matchdays
    ]
    if any(not day.match_ids for day in resolved):
        return None

    covered = [match_id for day in resolved for match_id in day.match_ids]
    if len(covered) != len(set(covered)) or set(covered) != set(match_by_id):
        return None
    return resolved


def _synthetic_grouping(matches: Sequence[Match]) -> List[MatchdayRef]:
    ordered = sorted(matches, key=lambda match: match.kickoff_sort_key)
    return [
        MatchdayRef(
            number=index // MATCHDAY_SIZE + 1,
            match_ids=tuple(match.match_id for match in ordered[index:index + MATCHDAY_SIZE]),
        )
        for index in range(0, len(ordered), MATCHDAY_SIZE)
    ]


def _display_name(season: Season, names: Dict[str, str], team_id: str) -> str:
    name = names.get(team_id)
    if name is None:
        warn_once(
            ("unknown_team", season.season_id, team_id),
            "matchdays: %s references unknown team id %r",
            season.season_id,
            team_id,
            logger=logger,
        )
        return UNKNOWN_TEAM_NAME
    return name


def build_matchdays(season: Season) -> List[Matchday]:
    """Partition a season's matches into numbered rounds.

    The grouping shipped in the season file is used verbatim when it is
    complete; otherwise matches are ordered by kickoff and cut into rounds of
    ``MATCHDAY_SIZE``.
    """
    match_by_id = {match.match_id: match for match in season.matches}
    names = season.names_by_id()

    grouping = _resolved_grouping(season, match_by_id)
    if grouping is None:
        if season.matchdays:
            logger.debug("matchdays: %s grouping incomplete, using kickoff order", season.season_id)
        grouping = _synthetic_grouping(season.matches)

    matchdays: List[Matchday] = []
    for index, day in enumerate(grouping):
        matches = [
            MatchdayMatch(
                match_id=match.match_id,
                home_team_id=match.home_team_id,
                away_team_id=match.away_team_id,
                home_team_name=_display_name(season, names, match.home_team_id),
                away_team_name=_display_name(season, names, match.away_team_id),
                played_at=match.played_at,
                home_score=match.home_score,
                away_score=match.away_score,
            )
            for match in (match_by_id.get(match_id) for match_id in day.match_ids)
            if match is not None
        ]
        number = day.number if day.number is not None else index + 1
        matchdays.append(Matchday(number=number, matches=matches))
    return matchdays


def default_matchday_number(matchdays: Sequence[Matchday]) -> int:
    """Round shown before any selection: the last one, else 1."""
    if matchdays:
        return matchdays[-1].number
    return 1


def select_matchday(matchdays: Sequence[Matchday], number: Optional[int]) -> Optional[Matchday]:
    """Requested round, falling back to the last round; None when there are none."""
    if not matchdays:
        return None
    if number is not None:
        for day in matchdays:
            if day.number == number:
                return day
    return matchdays[-1]


def neighbour_numbers(matchdays: Sequence[Matchday], current: Matchday) -> Tuple[Optional[int], Optional[int]]:
    """Previous and next round numbers around ``current`` for pager links."""
    numbers = [day.number for day in matchdays]
    try:
        position = numbers.index(current.number)
    except ValueError:
        return None, None
    previous = numbers[position - 1] if position > 0 else None
    following = numbers[position + 1] if position + 1 < len(numbers) else None
    return previous, following
