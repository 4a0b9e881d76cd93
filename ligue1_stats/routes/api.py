from __future__ import annotations

from flask import Blueprint, request

from ..app_utils import make_error, make_ok
from ..composition.providers import current_service
from ..validators import validate_stake, validate_team_id

bp = Blueprint("api", __name__, url_prefix="/api")


@bp.get("/seasons")
def seasons():
    """Standings and matchdays for every season, most recent first."""
    return make_ok(current_service().list_season_standings())


@bp.get("/seasons/<season_id>")
def season(season_id: str):
    standings = current_service().get_season_standings(season_id)
    if standings is None:
        return make_error("season_not_found", message=f"Unknown season: {season_id}", status_code=404)
    return make_ok(standings)


@bp.get("/teams")
def teams():
    return make_ok(current_service().list_teams())


@bp.get("/teams/<team_id>")
def team_profile(team_id: str):
    profile = current_service().get_team_profile(team_id)
    if profile is None:
        return make_error("team_not_found", message=f"Unknown team: {team_id}", status_code=404)
    return make_ok(profile)


@bp.get("/teams/<team_id>/stats")
def team_stats(team_id: str):
    data = current_service().get_team_season_data(team_id, request.args.get("season"))
    if data is None:
        return make_error("team_not_found", message=f"Unknown team: {team_id}", status_code=404)
    return make_ok(data)


@bp.get("/simulation")
def simulation():
    team_id, _tw = validate_team_id(request.args.get("team"))
    stake_text, warnings = validate_stake(request.args.get("stake"))
    result = current_service().run_simulation(team_id, stake_text)
    return make_ok(result, message=", ".join(warnings) or "success")
