"""French display formatting used by the templates."""

from __future__ import annotations

from typing import Optional

from .domain.models import parse_kickoff

_WEEKDAYS = ("lun.", "mar.", "mer.", "jeu.", "ven.", "sam.", "dim.")
_MONTHS = (
    "janv.", "févr.", "mars", "avr.", "mai", "juin",
    "juil.", "août", "sept.", "oct.", "nov.", "déc.",
)
_NBSP = "\u202f"


def _group_thousands(integer_part: str) -> str:
    groups = []
    while len(integer_part) > 3:
        groups.insert(0, integer_part[-3:])
        integer_part = integer_part[:-3]
    groups.insert(0, integer_part)
    return _NBSP.join(groups)


def format_number(value: Optional[float], digits: int = 2) -> str:
    if value is None:
        return "-"
    text = f"{abs(value):.{digits}f}"
    integer_part, _, fraction = text.partition(".")
    body = _group_thousands(integer_part)
    if fraction:
        body = f"{body},{fraction}"
    return f"-{body}" if value < 0 and float(text) != 0 else body


def format_currency(value: Optional[float]) -> str:
    """``1234.5`` -> ``1 234,50 €``."""
    if value is None:
        return "-"
    return f"{format_number(value, 2)}\u00a0€"


def format_signed_currency(value: Optional[float]) -> str:
    if value is None:
        return "-"
    prefix = "+" if value >= 0 else ""
    return f"{prefix}{format_currency(value)}"


def format_kickoff(played_at: Optional[str]) -> str:
    """``2024-08-16T18:45:00Z`` -> ``ven. 16 août · 18:45`` (UTC)."""
    kickoff = parse_kickoff(played_at)
    if kickoff is None:
        return played_at or ""
    return (
        f"{_WEEKDAYS[kickoff.weekday()]} {kickoff.day:02d} {_MONTHS[kickoff.month - 1]}"
        f" · {kickoff.hour:02d}:{kickoff.minute:02d}"
    )


def format_date(played_at: Optional[str]) -> str:
    """``2024-08-16T18:45:00Z`` -> ``16 août 2024``."""
    kickoff = parse_kickoff(played_at)
    if kickoff is None:
        return played_at or ""
    return f"{kickoff.day:02d} {_MONTHS[kickoff.month - 1]} {kickoff.year}"


def format_score(value: Optional[float]) -> str:
    if value is None:
        return "-"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
