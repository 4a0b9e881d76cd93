from typing import List, Optional, Sequence, Tuple

from .config import DEFAULT_STAKE, setup_logger

logger = setup_logger(__name__)


class ValidationWarning(str):
    """Lightweight tag for soft validation warnings."""
    pass


def validate_season_id(
    raw: Optional[str], known: Sequence[str]
) -> Tuple[Optional[str], List[ValidationWarning]]:
    """Return (season_id_or_first_known, warnings). Soft-fails on unknown/missing."""
    default = known[0] if known else None
    if not raw:
        return default, []
    season_id = str(raw).strip()
    if season_id in known:
        return season_id, []
    logger.warning("season_unknown: %s", season_id)
    return default, [ValidationWarning(f"season_unknown:{season_id}")]


def validate_matchday(raw: Optional[str], min_v: int = 1) -> Tuple[Optional[int], List[ValidationWarning]]:
    """Coerce to int; None (meaning "latest round") when missing or invalid."""
    if raw is None or str(raw).strip() == "":
        return None, []
    try:
        v = int(str(raw).strip())
    except ValueError:
        logger.warning("matchday_invalid: %s", raw)
        return None, [ValidationWarning("matchday_invalid")]
    if v < min_v:
        logger.warning("matchday_floor: %s", v)
        return None, [ValidationWarning("matchday_floor")]
    return v, []


def validate_stake(raw: Optional[str]) -> Tuple[str, List[ValidationWarning]]:
    """Keep the raw stake text for display; parsing happens in the simulation."""
    if raw is None:
        return DEFAULT_STAKE, []
    text = " ".join(str(raw).strip().split())
    if not text:
        return DEFAULT_STAKE, [ValidationWarning("stake_missing")]
    return text[:32], []


def validate_team_id(raw: Optional[str]) -> Tuple[Optional[str], List[ValidationWarning]]:
    """Trim the team id; return None if empty."""
    if raw is None:
        return None, []
    team_id = str(raw).strip()
    return (team_id or None), []
