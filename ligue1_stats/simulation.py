"""Flat-stake "always back the favourite" replay over historical matches."""

from __future__ import annotations

import math
import re
from typing import Any, Dict, List, Optional, Sequence

from .config import CHART_HEIGHT, CHART_WIDTH, MIN_STAKE, UNKNOWN_TEAM_NAME, setup_logger
from .domain.models import (
    ChartPoint,
    Season,
    SeasonBreakdown,
    SimulatedMatch,
    SimulationMatch,
    SimulationResult,
    SimulationSeason,
)
from .formatting import format_score
from .team_resolver import identity_key

logger = setup_logger(__name__)

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")


def _parse_leading_float(text: str) -> Optional[float]:
    match = _LEADING_NUMBER.match(text)
    if not match:
        return None
    return float(match.group(1))


def normalize_stake(raw: Any) -> float:
    """Parse a free-form stake ("10", "2,5", "7 EUR") and clamp it to MIN_STAKE."""
    value: Optional[float]
    if isinstance(raw, bool):
        value = None
    elif isinstance(raw, (int, float)):
        value = float(raw)
    else:
        value = _parse_leading_float(str(raw or "").replace(",", ".", 1))
    if value is None or not math.isfinite(value):
        value = 0.0
    return max(MIN_STAKE, value)


def build_simulation_seasons(seasons: Sequence[Season]) -> List[SimulationSeason]:
    """Resolve names, favourites and winners for every match of every season."""
    out: List[SimulationSeason] = []
    for season in seasons:
        names = season.names_by_id()
        matches = tuple(
            SimulationMatch(
                match_id=match.match_id,
                season_id=season.season_id,
                played_at=match.played_at,
                home_team_id=match.home_team_id,
                away_team_id=match.away_team_id,
                home_team_name=names.get(match.home_team_id, UNKNOWN_TEAM_NAME),
                away_team_name=names.get(match.away_team_id, UNKNOWN_TEAM_NAME),
                home_score=match.home_score,
                away_score=match.away_score,
                favourite_team_id=match.favourite_team_id,
                favourite_team_name=(
                    names.get(match.favourite_team_id, UNKNOWN_TEAM_NAME)
                    if match.favourite_team_id
                    else None
                ),
                favourite_odds=match.favourite_odds,
                winner_team_id=match.winner_team_id,
                result_known=match.is_played,
            )
            for match in season.matches
        )
        out.append(SimulationSeason(season_id=season.season_id, name=season.name, matches=matches))
    return out


def is_eligible(match: SimulationMatch) -> bool:
    """A match can be bet on only with a favourite, a positive price and a final score."""
    return bool(
        match.favourite_team_id
        and match.favourite_odds is not None
        and match.favourite_odds > 0
        and match.result_known
    )


def simulate(
    seasons: Sequence[SimulationSeason],
    team_name: Optional[str],
    stake: float,
    *,
    team_id: Optional[str] = None,
) -> SimulationResult:
    """Replay every eligible match of ``team_name`` in kickoff order."""
    result = SimulationResult(team_id=team_id, team_name=team_name, stake=stake)
    target = identity_key(team_name)
    if not target:
        return result

    candidates = []
    for season in seasons:
        for match in season.matches:
            if target not in (identity_key(match.home_team_name), identity_key(match.away_team_name)):
                continue
            if is_eligible(match):
                candidates.append((match, season.name))
    candidates.sort(key=lambda item: item[0].kickoff_sort_key)

    cumulative = 0.0
    breakdown: Dict[str, SeasonBreakdown] = {}
    for match, season_name in candidates:
        favourite_won = match.winner_team_id is not None and match.winner_team_id == match.favourite_team_id
        net_profit = stake * (match.favourite_odds - 1) if favourite_won else -stake
        cumulative += net_profit
        opponent = (
            match.away_team_name
            if identity_key(match.home_team_name) == target
            else match.home_team_name
        )
        result.matches.append(
            SimulatedMatch(
                match_id=match.match_id,
                season_id=match.season_id,
                season_name=season_name,
                played_at=match.played_at,
                opponent_name=opponent,
                favourite_team_name=match.favourite_team_name,
                favourite_odds=match.favourite_odds,
                score=f"{format_score(match.home_score)} - {format_score(match.away_score)}",
                favourite_won=favourite_won,
                net_profit=net_profit,
                cumulative=cumulative,
            )
        )
        entry = breakdown.get(match.season_id)
        if entry is None:
            entry = breakdown[match.season_id] = SeasonBreakdown(season_id=match.season_id, name=season_name)
        entry.profit += net_profit
        entry.matches += 1

    result.total_profit = sum(item.net_profit for item in result.matches)
    result.invested = stake * len(result.matches)
    result.roi = (result.total_profit / result.invested) * 100 if result.invested > 0 else 0.0
    result.season_breakdown = list(breakdown.values())
    result.chart_points = [
        ChartPoint(index=index, value=item.cumulative, played_at=item.played_at)
        for index, item in enumerate(result.matches)
    ]
    values = [point.value for point in result.chart_points]
    result.min_y = min([0.0, *values])
    result.max_y = max([0.0, *values])

    logger.debug(
        "simulation: %s stake=%.2f matches=%d profit=%.2f",
        team_name,
        stake,
        len(result.matches),
        result.total_profit,
    )
    return result


def chart_polyline(result: SimulationResult, width: float = CHART_WIDTH, height: float = CHART_HEIGHT) -> str:
    """SVG polyline ``points`` attribute for the cumulative profit series."""
    points = result.chart_points
    if not points:
        return ""
    span = (result.max_y - result.min_y) or 1
    coords = []
    for index, point in enumerate(points):
        x = width / 2 if len(points) == 1 else (index / (len(points) - 1)) * width
        y = height - ((point.value - result.min_y) / span) * height
        coords.append(f"{x:g},{y:g}")
    return " ".join(coords)


def chart_zero_y(result: SimulationResult, height: float = CHART_HEIGHT) -> float:
    """Vertical position of the break-even baseline on the same scale as ``chart_polyline``."""
    span = (result.max_y - result.min_y) or 1
    return height - ((0 - result.min_y) / span) * height
