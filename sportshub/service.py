"""
Sports hub service: the single owner of provider, match cache and preferences.

Request handlers receive it through FastAPI dependency injection
(`Depends(get_sports_hub)`), so tests can swap in fakes and fixed clocks.
"""
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

from sportshub.cache import MatchCache, create_match_cache
from sportshub.errors import ParseError, ValidationError
from sportshub.models import GlobalEvent, Match, Preferences
from sportshub.preferences import PreferencesStore
from sportshub.provider import SportsProvider, get_sports_provider
from sportshub.query import DEFAULT_WINDOW_MINUTES, query_upcoming
from sportshub.stats import aggregate_stats
from sportshub.utils.helpers import parse_utc, utc_now

logger = logging.getLogger("sportshub.service")


def _date_only(value: str) -> str:
    """Reduce a date or ISO datetime to its UTC YYYY-MM-DD day."""
    try:
        return parse_utc(value).date().isoformat()
    except ParseError as e:
        raise ValidationError("date must be an ISO-8601 date (YYYY-MM-DD)") from e


class SportsHubService:
    """Backend operations behind the HTTP surface."""

    def __init__(
        self,
        provider: SportsProvider,
        cache: Optional[MatchCache] = None,
        preferences: Optional[PreferencesStore] = None,
        now_fn: Callable[[], datetime] = utc_now,
    ):
        self.provider = provider
        self.cache = cache or create_match_cache(provider)
        self.preferences = preferences or PreferencesStore()
        self._now = now_fn

    def now(self) -> datetime:
        return self._now()

    # ===== SPORTS / SCHEDULE / EVENTS =====

    def get_sports(self) -> Dict[str, Dict[str, Any]]:
        sports = self.cache.get_sports(self.now())
        return {key: info.to_dict() for key, info in sports.items()}

    def get_schedule(
        self,
        sport: Optional[str],
        team: Optional[str] = None,
        date: Optional[str] = None,
    ) -> List[Match]:
        """
        Get a sport's schedule with exact team and UTC-day filtering.

        Raises:
            ValidationError: If sport is missing or date is unparsable
            ProviderError: If the upstream fetch fails
        """
        if not sport:
            raise ValidationError("sport parameter is required")
        day = _date_only(date) if date else None

        matches = self.provider.get_schedule(sport, team=team, date=day)
        if team:
            matches = [m for m in matches if team in (m.home_team, m.away_team)]
        if day:
            matches = [m for m in matches if (m.start_time_utc or "")[:10] == day]
        return matches

    def get_global_events(
        self,
        year: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[GlobalEvent]:
        if year == "all":
            year = None
        return self.provider.get_global_events(year=year, search=search or None)

    # ===== STATS =====

    def get_stats(self) -> List[Dict[str, Any]]:
        """Per-sport counts from the match cache (partial on per-sport failure)."""
        return aggregate_stats(self.cache.get_all_matches(self.now()))

    # ===== PREFERENCES =====

    def save_preferences(
        self,
        client_id: Optional[str],
        sports: Optional[Sequence[str]] = None,
        teams: Optional[Sequence[str]] = None,
        notifications_enabled: bool = False,
    ) -> Preferences:
        return self.preferences.set(
            client_id,
            sports=sports,
            teams=teams,
            notifications_enabled=notifications_enabled,
            now=self.now(),
        )

    def get_preferences(self, client_id: Optional[str]) -> Preferences:
        return self.preferences.get(client_id)

    # ===== NOTIFICATIONS =====

    def get_upcoming(
        self,
        sports: Sequence[str] = (),
        teams: Sequence[str] = (),
        window_minutes: int = DEFAULT_WINDOW_MINUTES,
    ) -> List[Match]:
        return query_upcoming(
            self.cache,
            self.now(),
            window_minutes=window_minutes,
            sport_filter=sports,
            team_filter=teams,
        )


# Global service instance
_service: Optional[SportsHubService] = None


def get_sports_hub() -> SportsHubService:
    """Get or create the global sports hub service."""
    global _service
    if _service is None:
        _service = SportsHubService(provider=get_sports_provider())
    return _service
