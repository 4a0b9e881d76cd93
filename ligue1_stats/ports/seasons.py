from typing import List, Sequence

from ..domain.models import Season


class SeasonSource:
    """Yields Season records for an externally supplied ordering of ids."""

    def season_order(self) -> List[str]: ...

    def load_season(self, season_id: str) -> Season:
        """Return one season; raise SeasonNotFoundError if it has no record."""
        ...

    def load_seasons(self, season_ids: Sequence[str]) -> List[Season]: ...
