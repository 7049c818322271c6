"""
Upcoming-match query engine.

Selects the matches that kick off inside a look-ahead window, optionally
narrowed to a set of sports and/or teams.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Collection, Iterable, List

from sportshub.cache import MatchCache
from sportshub.errors import ParseError
from sportshub.models import Match
from sportshub.utils.helpers import parse_utc

logger = logging.getLogger("sportshub.query")

DEFAULT_WINDOW_MINUTES = 120

_MAX_UTC = datetime.max.replace(tzinfo=timezone.utc)
_MIN_UTC = datetime.min.replace(tzinfo=timezone.utc)


def window_end(now: datetime, window_minutes: int) -> datetime:
    """Upper bound of the look-ahead window, saturating at the datetime range."""
    try:
        return now + timedelta(minutes=window_minutes)
    except OverflowError:
        return _MAX_UTC if window_minutes > 0 else _MIN_UTC


def is_upcoming(
    match: Match,
    now: datetime,
    window_minutes: int,
    sport_filter: Collection[str] = (),
    team_filter: Collection[str] = (),
) -> bool:
    """
    Check a single match against the window and filters.

    Both window bounds are inclusive: a match starting exactly at `now`, or
    exactly at `now + window`, is upcoming.
    """
    try:
        start = parse_utc(match.start_time_utc)
    except ParseError as e:
        logger.debug(f"Excluding match {match.id}: {e}")
        return False

    if start < now or start > window_end(now, window_minutes):
        return False
    if sport_filter and match.sport not in sport_filter:
        return False
    if team_filter and match.home_team not in team_filter and match.away_team not in team_filter:
        return False
    return True


def filter_upcoming(
    matches: Iterable[Match],
    now: datetime,
    window_minutes: int,
    sport_filter: Collection[str] = (),
    team_filter: Collection[str] = (),
) -> List[Match]:
    """Apply `is_upcoming` to every match, preserving upstream order."""
    sports = set(sport_filter)
    teams = set(team_filter)
    return [
        m for m in matches
        if is_upcoming(m, now, window_minutes, sports, teams)
    ]


def query_upcoming(
    cache: MatchCache,
    now: datetime,
    window_minutes: int = DEFAULT_WINDOW_MINUTES,
    sport_filter: Collection[str] = (),
    team_filter: Collection[str] = (),
) -> List[Match]:
    """
    Get matches starting within `window_minutes` of `now`.

    Without a sport filter every cached sport is scanned; with one, only the
    requested sports' cache entries are read (and refreshed if stale).
    Callers needing soonest-first order must sort the result themselves.

    Raises:
        ProviderError: If the sports list is needed and cannot be fetched
    """
    if sport_filter:
        matches = cache.get_matches_for_sports(sport_filter, now)
    else:
        matches = cache.get_all_matches(now)
    return filter_upcoming(matches, now, window_minutes, sport_filter, team_filter)


def sort_by_start(matches: Iterable[Match]) -> List[Match]:
    """Soonest-first ordering; unparsable start times sort last."""
    def key(match: Match):
        try:
            return (0, parse_utc(match.start_time_utc))
        except ParseError:
            return (1, None)
    return sorted(matches, key=key)
