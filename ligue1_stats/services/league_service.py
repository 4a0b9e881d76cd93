from __future__ import annotations

from typing import Any, List, Optional

from ..config import setup_logger
from ..domain.models import (
    Season,
    SeasonStandings,
    SimulationResult,
    SimulationSeason,
    TeamInfo,
    TeamProfile,
    TeamSeasonData,
)
from ..errors import SeasonNotFoundError
from ..matchdays import build_matchdays
from ..ports.seasons import SeasonSource
from ..simulation import build_simulation_seasons, normalize_stake, simulate
from ..standings import calculate_standings
from ..team_resolver import list_teams, resolve_team_profile, team_id_in_season
from ..team_stats import compute_team_season_data

logger = setup_logger(__name__)


class LeagueService:
    """
    Read-only queries over the season source.
    Every call works on the loaded snapshot; nothing here mutates it.
    Unknown season or team ids come back as None instead of raising.
    """

    def __init__(self, source: SeasonSource):
        self.source = source

    def _seasons(self) -> List[Season]:
        return self.source.load_seasons(self.source.season_order())

    def _season(self, season_id: str) -> Optional[Season]:
        try:
            return self.source.load_season(season_id)
        except SeasonNotFoundError as exc:
            logger.info("season_lookup: %s", exc.message)
            return None

    @staticmethod
    def _season_standings(season: Season) -> SeasonStandings:
        return SeasonStandings(
            season_id=season.season_id,
            name=season.name,
            standings=calculate_standings(season),
            matchdays=build_matchdays(season),
        )

    def list_season_standings(self) -> List[SeasonStandings]:
        return [self._season_standings(season) for season in self._seasons()]

    def get_season_standings(self, season_id: str) -> Optional[SeasonStandings]:
        if season_id not in self.source.season_order():
            return None
        season = self._season(season_id)
        return self._season_standings(season) if season is not None else None

    def list_teams(self) -> List[TeamInfo]:
        return list_teams(self._seasons())

    def get_team_profile(self, team_id: str) -> Optional[TeamProfile]:
        return resolve_team_profile(self._seasons(), team_id)

    def get_team_season_data(self, team_id: str, season_id: Optional[str] = None) -> Optional[TeamSeasonData]:
        """Stats for the team behind ``team_id`` in ``season_id``, else its latest season."""
        profile = self.get_team_profile(team_id)
        if profile is None or profile.latest_season_id is None:
            return None

        if season_id is None or team_id_in_season(profile, season_id) is None:
            season_id = profile.latest_season_id
        local_id = team_id_in_season(profile, season_id)
        season = self._season(season_id)
        if season is None or local_id is None:
            return None
        return compute_team_season_data(season, local_id)

    def list_simulation_seasons(self) -> List[SimulationSeason]:
        return build_simulation_seasons(self._seasons())

    def run_simulation(self, team_id: Optional[str], stake_raw: Any) -> SimulationResult:
        """Favourite-betting replay for ``team_id`` (first team alphabetically if unknown)."""
        stake = normalize_stake(stake_raw)
        teams = self.list_teams()
        target = next((team for team in teams if team.team_id == team_id), None)
        if target is None and team_id:
            profile = self.get_team_profile(team_id)
            if profile is not None:
                target = TeamInfo(team_id=team_id, name=profile.team_name)
        if target is None and teams:
            target = teams[0]
        if target is None:
            return SimulationResult(team_id=None, team_name=None, stake=stake)
        return simulate(
            self.list_simulation_seasons(),
            target.name,
            stake,
            team_id=target.team_id,
        )
