"""Cross-season team identity.

Team ids are local to a season file; the display name is what stays stable
from one season to the next, so identity is resolved by name.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .config import setup_logger
from .domain.models import ProfileSeason, Season, TeamInfo, TeamProfile

logger = setup_logger(__name__)


def identity_key(name: Optional[str]) -> str:
    """Case-insensitive comparison key for a team display name."""
    return (name or "").strip().casefold()


def reference_name(seasons: Sequence[Season], team_id: str) -> Optional[str]:
    """Display name for ``team_id`` in the first season (canonical order) that has it."""
    for season in seasons:
        for team in season.teams:
            if team.team_id == team_id:
                return team.name
    return None


def resolve_team_profile(seasons: Sequence[Season], team_id: str) -> Optional[TeamProfile]:
    """Collect every season's local id for the team behind ``team_id``.

    ``seasons`` must be most-recent first; the first matching season is the
    profile's latest.
    """
    name = reference_name(seasons, team_id)
    if name is None:
        logger.info("team_profile: unknown team id %r", team_id)
        return None

    key = identity_key(name)
    profile_seasons: List[ProfileSeason] = []
    for season in seasons:
        local = next((team for team in season.teams if identity_key(team.name) == key), None)
        if local is not None:
            profile_seasons.append(
                ProfileSeason(season_id=season.season_id, name=season.name, team_id=local.team_id)
            )

    return TeamProfile(
        team_id=team_id,
        team_name=name,
        seasons=profile_seasons,
        latest_season_id=profile_seasons[0].season_id if profile_seasons else None,
    )


def team_id_in_season(profile: TeamProfile, season_id: str) -> Optional[str]:
    for season in profile.seasons:
        if season.season_id == season_id:
            return season.team_id
    return None


def list_teams(seasons: Sequence[Season]) -> List[TeamInfo]:
    """Every known team once, alphabetically; the most recent season's id wins."""
    seen: Dict[str, TeamInfo] = {}
    for season in seasons:
        for team in season.teams:
            key = identity_key(team.name)
            if key and key not in seen:
                seen[key] = TeamInfo(team_id=team.team_id, name=team.name)
    return sorted(seen.values(), key=lambda info: (identity_key(info.name), info.name))
