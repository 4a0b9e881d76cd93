from typing import Optional


class DataSourceError(Exception):
    """Unified error class for season record loading."""

    def __init__(self, source: str, code: str, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.source = source
        self.code = code
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "code": self.code,
            "message": self.message,
            **({"details": self.details} if self.details else {}),
        }


class SeasonNotFoundError(DataSourceError):
    """Raised when a season id has no record in the source."""

    def __init__(self, season_id: str, details: Optional[str] = None):
        super().__init__("seasons", "season_not_found", f"Unknown season: {season_id}", details)
        self.season_id = season_id


class SeasonDataError(DataSourceError):
    """Raised when a season record exists but cannot be read or decoded."""

    def __init__(self, season_id: str, details: Optional[str] = None):
        super().__init__("seasons", "season_unreadable", f"Unreadable season: {season_id}", details)
        self.season_id = season_id
