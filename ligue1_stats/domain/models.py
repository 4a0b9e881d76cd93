"""Source records loaded from season files and the records derived from them."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from ..constants import UNKNOWN_TEAM_NAME

_LATEST = datetime.max.replace(tzinfo=timezone.utc)


def parse_kickoff(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 kickoff; naive values are taken as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class _Serializable:
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)  # type: ignore[call-overload]


# ---- source records ----


@dataclass(frozen=True)
class Team:
    team_id: str
    name: str


@dataclass(frozen=True)
class Match:
    match_id: str
    home_team_id: str
    away_team_id: str
    played_at: str
    home_score: Optional[float] = None
    away_score: Optional[float] = None
    favourite_team_id: Optional[str] = None
    favourite_odds: Optional[float] = None

    @property
    def kickoff(self) -> Optional[datetime]:
        return parse_kickoff(self.played_at)

    @property
    def kickoff_sort_key(self) -> datetime:
        # Unparseable kickoffs go to the end.
        return self.kickoff or _LATEST

    @property
    def is_played(self) -> bool:
        return self.home_score is not None and self.away_score is not None

    @property
    def winner_team_id(self) -> Optional[str]:
        """Winning side's id, ``None`` for a draw or an unplayed match."""
        if not self.is_played:
            return None
        if self.home_score > self.away_score:
            return self.home_team_id
        if self.home_score < self.away_score:
            return self.away_team_id
        return None


@dataclass(frozen=True)
class MatchdayRef:
    number: Optional[int]
    match_ids: Tuple[str, ...]


@dataclass(frozen=True)
class Season:
    season_id: str
    name: str
    teams: Tuple[Team, ...] = ()
    matches: Tuple[Match, ...] = ()
    matchdays: Optional[Tuple[MatchdayRef, ...]] = None

    def team_name(self, team_id: str) -> str:
        for team in self.teams:
            if team.team_id == team_id:
                return team.name
        return UNKNOWN_TEAM_NAME

    def has_team(self, team_id: str) -> bool:
        return any(team.team_id == team_id for team in self.teams)

    def names_by_id(self) -> Dict[str, str]:
        return {team.team_id: team.name for team in self.teams}


# ---- standings & matchdays ----


@dataclass
class TeamStanding(_Serializable):
    team_id: str
    team_name: str
    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: float = 0
    goals_against: float = 0
    points: int = 0

    @property
    def goal_difference(self) -> float:
        return self.goals_for - self.goals_against

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["goal_difference"] = self.goal_difference
        return payload


@dataclass
class MatchdayMatch(_Serializable):
    match_id: str
    home_team_id: str
    away_team_id: str
    home_team_name: str
    away_team_name: str
    played_at: str
    home_score: Optional[float]
    away_score: Optional[float]


@dataclass
class Matchday(_Serializable):
    number: int
    matches: List[MatchdayMatch] = field(default_factory=list)


@dataclass
class SeasonStandings(_Serializable):
    season_id: str
    name: str
    standings: List[TeamStanding] = field(default_factory=list)
    matchdays: List[Matchday] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "season_id": self.season_id,
            "name": self.name,
            "standings": [row.to_dict() for row in self.standings],
            "matchdays": [day.to_dict() for day in self.matchdays],
        }


# ---- team identity ----


@dataclass
class TeamInfo(_Serializable):
    team_id: str
    name: str


@dataclass
class ProfileSeason(_Serializable):
    season_id: str
    name: str
    team_id: str


@dataclass
class TeamProfile(_Serializable):
    team_id: str
    team_name: str
    seasons: List[ProfileSeason] = field(default_factory=list)
    latest_season_id: Optional[str] = None


# ---- team season statistics ----


@dataclass
class TeamMatch(_Serializable):
    match_id: str
    season_id: str
    season_name: str
    played_at: str
    is_home: bool
    opponent_id: str
    opponent_name: str
    goals_for: float
    goals_against: float
    result: str


@dataclass
class GoalLine(_Serializable):
    line: float
    over: int
    under: int


@dataclass
class GoalExtremes(_Serializable):
    max: float = 0
    min: float = 0
    average: float = 0


@dataclass
class TeamSeasonData(_Serializable):
    team_id: str
    team_name: str
    season_id: str
    season_name: str
    matches: List[TeamMatch] = field(default_factory=list)
    wins: int = 0
    draws: int = 0
    losses: int = 0
    points: int = 0
    goals_for: float = 0
    goals_against: float = 0
    average_goals_for: float = 0
    average_goals_against: float = 0
    goal_lines: List[GoalLine] = field(default_factory=list)
    longest_win_streak: int = 0
    longest_draw_streak: int = 0
    longest_loss_streak: int = 0
    home_goals: GoalExtremes = field(default_factory=GoalExtremes)
    away_goals: GoalExtremes = field(default_factory=GoalExtremes)


# ---- simulation ----


@dataclass(frozen=True)
class SimulationMatch(_Serializable):
    match_id: str
    season_id: str
    played_at: str
    home_team_id: str
    away_team_id: str
    home_team_name: str
    away_team_name: str
    home_score: Optional[float]
    away_score: Optional[float]
    favourite_team_id: Optional[str]
    favourite_team_name: Optional[str]
    favourite_odds: Optional[float]
    winner_team_id: Optional[str]
    result_known: bool

    @property
    def kickoff_sort_key(self) -> datetime:
        return parse_kickoff(self.played_at) or _LATEST


@dataclass(frozen=True)
class SimulationSeason:
    season_id: str
    name: str
    matches: Tuple[SimulationMatch, ...] = ()


@dataclass
class SimulatedMatch(_Serializable):
    match_id: str
    season_id: str
    season_name: str
    played_at: str
    opponent_name: str
    favourite_team_name: Optional[str]
    favourite_odds: float
    score: str
    favourite_won: bool
    net_profit: float
    cumulative: float


@dataclass
class SeasonBreakdown(_Serializable):
    season_id: str
    name: str
    profit: float = 0.0
    matches: int = 0


@dataclass
class ChartPoint(_Serializable):
    index: int
    value: float
    played_at: str


@dataclass
class SimulationResult(_Serializable):
    team_id: Optional[str]
    team_name: Optional[str]
    stake: float
    matches: List[SimulatedMatch] = field(default_factory=list)
    total_profit: float = 0.0
    invested: float = 0.0
    roi: float = 0.0
    season_breakdown: List[SeasonBreakdown] = field(default_factory=list)
    chart_points: List[ChartPoint] = field(default_factory=list)
    min_y: float = 0.0
    max_y: float = 0.0
