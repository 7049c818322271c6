"""
Deterministic bundled sports data, used when no upstream API key is configured.

Fixtures are anchored to UTC day boundaries so match ids and kickoff times are
stable across calls; only the status moves as the clock advances.
"""
import logging
from datetime import datetime, timedelta, timezone
from itertools import combinations
from typing import Callable, Dict, List, Optional

from sportshub.models import GlobalEvent, Match, MatchStatus, SportInfo
from sportshub.utils.helpers import isoformat_z, parse_utc, safe_lower, utc_now

logger = logging.getLogger("provider.mock")

# Sport key -> (display name, teams, kickoff hours UTC, match duration)
MOCK_SPORTS = {
    "soccer": (
        "Soccer",
        ["Arsenal", "Chelsea", "Liverpool", "Manchester City", "Barcelona", "Real Madrid"],
        [12, 15, 18, 20],
        timedelta(hours=2),
    ),
    "basketball": (
        "Basketball",
        ["Lakers", "Celtics", "Warriors", "Bulls", "Heat", "Knicks"],
        [0, 2, 23],
        timedelta(hours=2, minutes=30),
    ),
    "cricket": (
        "Cricket",
        ["India", "Australia", "England", "Pakistan", "New Zealand", "South Africa"],
        [4, 9],
        timedelta(hours=8),
    ),
    "hockey": (
        "Ice Hockey",
        ["Maple Leafs", "Canadiens", "Rangers", "Bruins", "Oilers", "Penguins"],
        [0, 1, 23],
        timedelta(hours=2, minutes=30),
    ),
}

MOCK_VENUES = {
    "Arsenal": "Emirates Stadium, London",
    "Chelsea": "Stamford Bridge, London",
    "Liverpool": "Anfield, Liverpool",
    "Manchester City": "Etihad Stadium, Manchester",
    "Barcelona": "Camp Nou, Barcelona",
    "Real Madrid": "Santiago Bernabeu, Madrid",
    "Lakers": "Crypto.com Arena, Los Angeles",
    "Celtics": "TD Garden, Boston",
    "Warriors": "Chase Center, San Francisco",
    "Bulls": "United Center, Chicago",
    "Heat": "Kaseya Center, Miami",
    "Knicks": "Madison Square Garden, New York",
    "India": "Wankhede Stadium, Mumbai",
    "Australia": "Melbourne Cricket Ground, Melbourne",
    "England": "Lord's, London",
    "Pakistan": "Gaddafi Stadium, Lahore",
    "New Zealand": "Eden Park, Auckland",
    "South Africa": "Newlands, Cape Town",
    "Maple Leafs": "Scotiabank Arena, Toronto",
    "Canadiens": "Bell Centre, Montreal",
    "Rangers": "Madison Square Garden, New York",
    "Bruins": "TD Garden, Boston",
    "Oilers": "Rogers Place, Edmonton",
    "Penguins": "PPG Paints Arena, Pittsburgh",
}

MOCK_EVENTS = [
    ("winter-olympics-2026", "Winter Olympics 2026", "Milan-Cortina, Italy",
     "2026-02-06T00:00:00Z", "2026-02-22T23:59:59Z"),
    ("t20-world-cup-2026", "ICC Men's T20 World Cup 2026", "India & Sri Lanka",
     "2026-02-07T00:00:00Z", "2026-03-08T23:59:59Z"),
    ("fifa-world-cup-2026", "FIFA World Cup 2026", "United States, Canada & Mexico",
     "2026-06-11T00:00:00Z", "2026-07-19T23:59:59Z"),
    ("wimbledon-2026", "Wimbledon 2026", "London, United Kingdom",
     "2026-06-29T00:00:00Z", "2026-07-12T23:59:59Z"),
    ("tour-de-france-2026", "Tour de France 2026", "Barcelona to Paris",
     "2026-07-04T00:00:00Z", "2026-07-26T23:59:59Z"),
    ("commonwealth-games-2026", "Commonwealth Games 2026", "Glasgow, Scotland",
     "2026-07-23T00:00:00Z", "2026-08-02T23:59:59Z"),
    ("rugby-world-cup-2027", "Rugby World Cup 2027", "Australia",
     "2027-10-01T00:00:00Z", "2027-11-13T23:59:59Z"),
    ("summer-olympics-2028", "Summer Olympics 2028", "Los Angeles, United States",
     "2028-07-14T00:00:00Z", "2028-07-30T23:59:59Z"),
]

# Days relative to today that carry fixtures
FIXTURE_DAY_OFFSETS = (-1, 0, 1, 2)


def _status_at(start: datetime, end: datetime, now: datetime) -> MatchStatus:
    if now < start:
        return MatchStatus.UPCOMING
    if now <= end:
        return MatchStatus.LIVE
    return MatchStatus.COMPLETED


class MockSportsProvider:
    """Bundled data set with a pluggable clock."""

    name = "mock"

    def __init__(self, now_fn: Callable[[], datetime] = utc_now):
        self._now = now_fn

    def get_sports_list(self) -> Dict[str, SportInfo]:
        return {
            key: SportInfo(key=key, name=name, teams=list(teams))
            for key, (name, teams, _, _) in MOCK_SPORTS.items()
        }

    def get_schedule(
        self,
        sport: str,
        team: Optional[str] = None,
        date: Optional[str] = None,
    ) -> List[Match]:
        if sport not in MOCK_SPORTS:
            logger.info(f"No mock fixtures for sport '{sport}'")
            return []

        matches = self._fixtures_for(sport, self._now())
        if team:
            matches = [m for m in matches if team in (m.home_team, m.away_team)]
        if date:
            matches = [m for m in matches if (m.start_time_utc or "")[:10] == date[:10]]
        return matches

    def get_global_events(
        self,
        year: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[GlobalEvent]:
        now = self._now()
        term = safe_lower(search).strip()
        events = []
        for event_id, name, location, start, end in MOCK_EVENTS:
            if year and year != "all" and start[:4] != str(year):
                continue
            if term and term not in name.lower() and term not in location.lower():
                continue
            events.append(GlobalEvent(
                id=event_id,
                name=name,
                location=location,
                start_date_utc=start,
                end_date_utc=end,
                status=_status_at(parse_utc(start), parse_utc(end), now),
            ))
        return events

    def _fixtures_for(self, sport: str, now: datetime) -> List[Match]:
        """Build the fixture list around `now`, ordered by kickoff."""
        _, teams, hours, duration = MOCK_SPORTS[sport]
        pairings = list(combinations(teams, 2))
        today = now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)

        matches = []
        for offset in FIXTURE_DAY_OFFSETS:
            day = today + timedelta(days=offset)
            for slot, hour in enumerate(hours):
                home, away = pairings[(day.toordinal() * len(hours) + slot) % len(pairings)]
                if day.toordinal() % 2:
                    home, away = away, home
                start = day + timedelta(hours=hour)
                matches.append(Match(
                    id=f"{sport}-{day:%Y%m%d}-{slot}",
                    sport=sport,
                    home_team=home,
                    away_team=away,
                    location=MOCK_VENUES.get(home, ""),
                    start_time_utc=isoformat_z(start),
                    status=_status_at(start, start + duration, now),
                ))
        return matches
