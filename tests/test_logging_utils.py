import logging

from ligue1_stats.domain.models import Match, Season, Team
from ligue1_stats.logging_utils import warn_once
from ligue1_stats.matchdays import build_matchdays


def test_warn_once_per_key(caplog):
    logger = logging.getLogger("ligue1_stats.tests")
    with caplog.at_level(logging.WARNING, logger="ligue1_stats.tests"):
        assert warn_once("k", "first %s", 1, logger=logger) is True
        assert warn_once("k", "second %s", 2, logger=logger) is False
        assert warn_once("other", "third", logger=logger) is True
    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["first 1", "third"]


def test_unknown_team_warning_is_not_repeated(caplog):
    season = Season(
        "s",
        "S",
        (Team("a", "Angers"),),
        (
            Match("m1", "a", "ghost", "2024-08-10T18:00:00Z", 1, 0),
            Match("m2", "ghost", "a", "2024-08-17T18:00:00Z", 0, 0),
        ),
    )
    with caplog.at_level(logging.WARNING, logger="ligue1_stats.matchdays"):
        build_matchdays(season)
        build_matchdays(season)
    assert sum("ghost" in record.getMessage() for record in caplog.records) == 1
