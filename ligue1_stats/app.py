from flask import Flask, abort, render_template, request
import os
from datetime import datetime, timezone
from typing import Optional

from .config import CHART_HEIGHT, CHART_WIDTH, DEV_SERVER_HOST, DEV_SERVER_PORT, STAKE_PRESETS, setup_logger
from .app_utils import make_error, make_ok
from .composition.providers import current_service
from .errors import DataSourceError
from .formatting import (
    format_currency,
    format_date,
    format_kickoff,
    format_number,
    format_score,
    format_signed_currency,
)
from .matchdays import neighbour_numbers, select_matchday
from .routes.api import bp as api_bp
from .simulation import chart_polyline, chart_zero_y
from .validators import validate_matchday, validate_season_id, validate_stake, validate_team_id

PKG_DIR = os.path.dirname(__file__)
TEMPLATE_DIR = os.path.join(PKG_DIR, "templates")

app = Flask(__name__, template_folder=TEMPLATE_DIR)
app.config['TEMPLATES_AUTO_RELOAD'] = True

logger = setup_logger(__name__)

app.register_blueprint(api_bp)

app.add_template_filter(format_currency, "currency")
app.add_template_filter(format_signed_currency, "signed_currency")
app.add_template_filter(format_kickoff, "kickoff")
app.add_template_filter(format_date, "match_date")
app.add_template_filter(format_number, "number")
app.add_template_filter(format_score, "score")


def _wants_json() -> bool:
    return request.path.startswith("/api/")


@app.errorhandler(404)
def not_found(_exc):
    if _wants_json():
        return make_error("not_found", message="Resource not found", status_code=404)
    return render_template("not_found.html"), 404


@app.errorhandler(DataSourceError)
def data_source_error(exc: DataSourceError):
    logger.error("data_source_error: %s", exc.message, extra={"error": exc.to_dict()})
    if _wants_json():
        return make_error(exc, message="Season data unavailable", status_code=503)
    return render_template("error.html", error=exc), 503


def _season_page_context(season_param: Optional[str], matchday_param: Optional[str]) -> dict:
    seasons = current_service().list_season_standings()
    season_id, _sw = validate_season_id(season_param, [season.season_id for season in seasons])
    active = next((season for season in seasons if season.season_id == season_id), None)
    matchday_number, _mw = validate_matchday(matchday_param)

    matchday = select_matchday(active.matchdays, matchday_number) if active else None
    previous_number, next_number = (
        neighbour_numbers(active.matchdays, matchday) if active and matchday else (None, None)
    )
    return {
        "seasons": seasons,
        "active_season": active,
        "matchday": matchday,
        "previous_matchday": previous_number,
        "next_matchday": next_number,
    }


@app.route("/")
def index():
    """League table for the selected season, with the selected round below it."""
    context = _season_page_context(request.args.get("season"), request.args.get("matchday"))
    return render_template("standings.html", **context)


@app.route("/matchdays")
def matchdays():
    """Fixtures calendar, one round at a time."""
    context = _season_page_context(request.args.get("season"), request.args.get("matchday"))
    return render_template("matchdays.html", **context)


@app.route("/teams")
def teams():
    return render_template("teams.html", teams=current_service().list_teams())


@app.route("/teams/<team_id>")
def team_page(team_id: str):
    """Team profile with season selector and that season's statistics."""
    service = current_service()
    profile = service.get_team_profile(team_id)
    if profile is None:
        abort(404)

    requested = request.args.get("season")
    known = [season.season_id for season in profile.seasons]
    selected_season_id = requested if requested in known else profile.latest_season_id

    season_data = service.get_team_season_data(team_id, selected_season_id)
    if season_data is None:
        abort(404)
    return render_template(
        "team.html",
        profile=profile,
        season_data=season_data,
        selected_season_id=selected_season_id,
    )


@app.route("/simulation")
def simulation():
    """Cumulative profit of backing the favourite in every match of one club."""
    service = current_service()
    team_id, _tw = validate_team_id(request.args.get("team"))
    stake_text, _sw = validate_stake(request.args.get("stake"))
    result = service.run_simulation(team_id, stake_text)
    return render_template(
        "simulation.html",
        teams=service.list_teams(),
        result=result,
        stake_text=stake_text,
        chart_points=chart_polyline(result),
        chart_zero_y=chart_zero_y(result),
        stake_presets=STAKE_PRESETS,
        chart_width=CHART_WIDTH,
        chart_height=CHART_HEIGHT,
    )


@app.route("/health", methods=["GET"])
def health():
    return make_ok(
        {"ok": True, "ts": datetime.now(timezone.utc).isoformat()},
        "OK",
        status_code=200,
    )


if __name__ == "__main__":
    app.run(debug=True, host=DEV_SERVER_HOST, port=DEV_SERVER_PORT)
