"""
Sports provider interface.

The provider pattern lets the backend swap the bundled mock data set for a
real upstream REST API without touching the cache or the HTTP layer.
"""
from typing import Protocol, Optional, Dict, List

from sportshub.models import Match, SportInfo, GlobalEvent


class SportsProvider(Protocol):
    """
    Interface for upstream sports data gateways.

    Implementations:
    - MockSportsProvider: deterministic bundled data (default, no API key)
    - RESTSportsProvider: third-party HTTP API via requests

    Every method raises ProviderError on failure. No retries happen here.
    """

    name: str

    def get_sports_list(self) -> Dict[str, SportInfo]:
        """Get all sports keyed by sport key."""
        ...

    def get_schedule(
        self,
        sport: str,
        team: Optional[str] = None,
        date: Optional[str] = None,
    ) -> List[Match]:
        """
        Get matches for a sport.

        Args:
            sport: Sport key
            team: Optional team name hint for the upstream
            date: Optional YYYY-MM-DD hint for the upstream
        """
        ...

    def get_global_events(
        self,
        year: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[GlobalEvent]:
        """Get global events, optionally filtered by start year and search text."""
        ...
