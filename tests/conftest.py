"""
Shared fixtures: a scriptable fake provider, a fixed clock and match builders.
"""
import threading
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from sportshub.cache import MatchCache
from sportshub.errors import ProviderError
from sportshub.main import app
from sportshub.models import GlobalEvent, Match, MatchStatus, SportInfo
from sportshub.service import SportsHubService, get_sports_hub
from sportshub.utils.helpers import isoformat_z

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


class FakeProvider:
    """In-memory provider that records every upstream call."""

    name = "fake"

    def __init__(self, sports=None, schedules=None, events=None):
        self.sports = sports or {}
        self.schedules = schedules or {}
        self.events = events or []
        self.failing_sports = set()
        self.fail_sports_list = False
        self.calls = []
        self._lock = threading.Lock()

    def _record(self, call):
        with self._lock:
            self.calls.append(call)

    def count(self, name):
        return sum(1 for call in self.calls if call[0] == name)

    def get_sports_list(self):
        self._record(("sports",))
        if self.fail_sports_list:
            raise ProviderError("sports list unavailable")
        return dict(self.sports)

    def get_schedule(self, sport, team=None, date=None):
        self._record(("schedule", sport))
        if sport in self.failing_sports:
            raise ProviderError(f"{sport} unavailable", sport=sport)
        return list(self.schedules.get(sport, []))

    def get_global_events(self, year=None, search=None):
        self._record(("events", year, search))
        return list(self.events)


def build_match(match_id, sport="soccer", home="A", away="B", start=None,
                status=MatchStatus.UPCOMING, location="Stadium"):
    """Match starting at `start` (a datetime, raw string, or None)."""
    if isinstance(start, datetime):
        start = isoformat_z(start)
    return Match(
        id=match_id,
        sport=sport,
        home_team=home,
        away_team=away,
        location=location,
        start_time_utc=start,
        status=status,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_match():
    return build_match


@pytest.fixture
def provider():
    """Two sports with a mix of statuses around NOW."""
    return FakeProvider(
        sports={
            "soccer": SportInfo(key="soccer", name="Soccer", teams=["A", "B", "C", "D"]),
            "basketball": SportInfo(key="basketball", name="Basketball", teams=["Lakers", "Celtics"]),
        },
        schedules={
            "soccer": [
                build_match("m1", start=NOW + timedelta(minutes=90)),
                build_match("m2", home="C", away="D", start=NOW + timedelta(minutes=30)),
                build_match("m3", home="A", away="C", start=NOW - timedelta(hours=3),
                            status=MatchStatus.COMPLETED),
            ],
            "basketball": [
                build_match("b1", sport="basketball", home="Lakers", away="Celtics",
                            start=NOW - timedelta(minutes=20), status=MatchStatus.LIVE),
                build_match("b2", sport="basketball", home="Celtics", away="Lakers",
                            start=NOW + timedelta(hours=1)),
            ],
        },
        events=[
            GlobalEvent(
                id="wc", name="FIFA World Cup 2026", location="North America",
                start_date_utc="2026-06-11T00:00:00Z", end_date_utc="2026-07-19T23:59:59Z",
                status=MatchStatus.COMPLETED,
            ),
        ],
    )


@pytest.fixture
def cache(provider):
    return MatchCache(provider, ttl_seconds=300, coalesce_timeout=5.0, max_workers=4)


@pytest.fixture
def hub(provider, cache, now):
    return SportsHubService(provider=provider, cache=cache, now_fn=lambda: now)


@pytest.fixture
def client(hub):
    app.dependency_overrides[get_sports_hub] = lambda: hub
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
