"""
Tests: sports, schedule, events, stats, preferences and notification endpoints
"""
from datetime import timedelta

from sportshub.main import parse_window_minutes


# =============================================================================
# SPORTS / SCHEDULE
# =============================================================================

def test_sports_endpoint_returns_mapping(client):
    """Test that /api/sports returns sports keyed by sport key"""
    data = client.get("/api/sports").json()
    assert list(data) == ["soccer", "basketball"]
    assert data["soccer"] == {"name": "Soccer", "teams": ["A", "B", "C", "D"]}


def test_sports_endpoint_failure_returns_500(client, provider):
    """Test that an upstream failure maps to the 500 error body"""
    provider.fail_sports_list = True
    response = client.get("/api/sports")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch sports data"}


def test_schedule_requires_sport(client):
    """Test that /api/schedule without sport returns 400"""
    response = client.get("/api/schedule")
    assert response.status_code == 400
    assert response.json() == {"error": "sport parameter is required"}


def test_schedule_returns_camel_case_matches(client):
    """Test the match JSON shape"""
    data = client.get("/api/schedule?sport=soccer").json()
    assert [m["id"] for m in data] == ["m1", "m2", "m3"]
    assert set(data[0]) == {
        "id", "sport", "homeTeam", "awayTeam", "location", "startTimeUtc", "status",
    }
    assert data[2]["status"] == "completed"


def test_schedule_team_filter(client):
    """Test that the team filter keeps home and away fixtures"""
    data = client.get("/api/schedule?sport=soccer&team=C").json()
    assert [m["id"] for m in data] == ["m2", "m3"]


def test_schedule_date_filter(client, now):
    """Test that the date filter keeps only that UTC day"""
    today = now.date().isoformat()
    assert len(client.get(f"/api/schedule?sport=soccer&date={today}").json()) == 3
    assert client.get("/api/schedule?sport=soccer&date=2026-10-20").json() == []


def test_schedule_rejects_bad_date(client):
    """Test that an unparsable date returns 400"""
    response = client.get("/api/schedule?sport=soccer&date=tomorrow")
    assert response.status_code == 400
    assert "date" in response.json()["error"]


def test_schedule_failure_returns_500(client, provider):
    """Test that a schedule fetch failure maps to 500"""
    provider.failing_sports.add("soccer")
    response = client.get("/api/schedule?sport=soccer")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch schedule"}


def test_global_events(client):
    """Test that /api/events/global returns event records"""
    data = client.get("/api/events/global?year=all").json()
    assert data[0]["name"] == "FIFA World Cup 2026"
    assert data[0]["startDateUtc"] == "2026-06-11T00:00:00Z"


def test_global_events_year_all_is_unfiltered(client, provider):
    """Test that year=all is passed upstream as no year filter"""
    client.get("/api/events/global?year=all&search=cup")
    assert provider.calls[-1] == ("events", None, "cup")


# =============================================================================
# STATS
# =============================================================================

def test_stats_by_sport(client):
    """Test per-sport counts by status"""
    data = client.get("/api/stats").json()
    assert data["statsBySport"] == [
        {"sport": "soccer", "totalMatches": 3, "upcoming": 2, "live": 0, "completed": 1},
        {"sport": "basketball", "totalMatches": 2, "upcoming": 1, "live": 1, "completed": 0},
    ]


def test_stats_with_failing_sport_is_partial(client, provider):
    """Test that stats still succeed when one sport fails"""
    provider.failing_sports.add("soccer")
    response = client.get("/api/stats")
    assert response.status_code == 200
    assert [s["sport"] for s in response.json()["statsBySport"]] == ["basketball"]


def test_stats_without_sports_list_returns_500(client, provider):
    """Test that losing the sports list fails the stats endpoint"""
    provider.fail_sports_list = True
    response = client.get("/api/stats")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch statistics"}


# =============================================================================
# PREFERENCES
# =============================================================================

def test_save_and_get_preferences(client):
    """Test that saved preferences are returned on read"""
    body = {
        "clientId": "client-abc12345",
        "sports": ["soccer"],
        "teams": ["A"],
        "notificationsEnabled": True,
    }
    saved = client.post("/api/preferences", json=body).json()
    assert saved["clientId"] == "client-abc12345"
    assert saved["updatedAt"] == "2026-10-19T12:00:00Z"

    data = client.get("/api/preferences?clientId=client-abc12345").json()
    assert data["sports"] == ["soccer"]
    assert data["teams"] == ["A"]
    assert data["notificationsEnabled"] is True


def test_save_preferences_overwrites(client):
    """Test that a second save replaces the whole record"""
    client.post("/api/preferences", json={
        "clientId": "c1", "sports": ["soccer"], "teams": ["A"], "notificationsEnabled": True,
    })
    client.post("/api/preferences", json={"clientId": "c1", "sports": ["basketball"]})
    data = client.get("/api/preferences?clientId=c1").json()
    assert data["sports"] == ["basketball"]
    assert data["teams"] == []
    assert data["notificationsEnabled"] is False


def test_save_preferences_requires_client_id(client):
    """Test that a missing clientId returns 400"""
    response = client.post("/api/preferences", json={"sports": ["soccer"]})
    assert response.status_code == 400
    assert response.json() == {"error": "clientId is required"}


def test_numeric_client_id_is_accepted(client):
    """Test that a numeric clientId is stored under its text form"""
    response = client.post("/api/preferences", json={"clientId": 12345, "sports": ["soccer"]})
    assert response.status_code == 200
    assert response.json()["clientId"] == "12345"
    assert client.get("/api/preferences?clientId=12345").json()["sports"] == ["soccer"]


def test_malformed_preferences_body_returns_400(client):
    """Test that wrongly typed fields get the 400 error body"""
    response = client.post("/api/preferences", json={"clientId": "c1", "sports": "soccer"})
    assert response.status_code == 400
    body = response.json()
    assert list(body) == ["error"]
    assert "sports" in body["error"]


def test_unknown_client_gets_default_preferences(client):
    """Test the default record for a client that never saved"""
    data = client.get("/api/preferences?clientId=nobody").json()
    assert data == {
        "clientId": "nobody",
        "sports": [],
        "teams": [],
        "notificationsEnabled": False,
        "updatedAt": None,
    }


# =============================================================================
# NOTIFICATIONS
# =============================================================================

def test_upcoming_default_window(client):
    """Test the default 120 minute window across all sports"""
    data = client.get("/api/notifications/upcoming").json()
    assert [m["id"] for m in data] == ["m1", "m2", "b2"]


def test_upcoming_window_narrows_results(client):
    """Test that windowMinutes=60 drops the match 90 minutes out"""
    data = client.get("/api/notifications/upcoming?windowMinutes=60").json()
    assert [m["id"] for m in data] == ["m2", "b2"]


def test_upcoming_bad_window_falls_back(client):
    """Test that a non-numeric window uses the default"""
    data = client.get("/api/notifications/upcoming?windowMinutes=soon").json()
    assert [m["id"] for m in data] == ["m1", "m2", "b2"]


def test_upcoming_huge_window_returns_all_future_matches(client):
    """Test that a window past the datetime range still answers normally"""
    response = client.get("/api/notifications/upcoming?windowMinutes=5000000000")
    assert response.status_code == 200
    assert [m["id"] for m in response.json()] == ["m1", "m2", "b2"]


def test_upcoming_huge_negative_window_is_empty(client):
    response = client.get("/api/notifications/upcoming?windowMinutes=-5000000000")
    assert response.status_code == 200
    assert response.json() == []


def test_upcoming_sport_and_team_filters(client, provider):
    """Test comma-separated sport and team filters"""
    data = client.get("/api/notifications/upcoming?sports=soccer,&teams=C").json()
    assert [m["id"] for m in data] == ["m2"]
    assert provider.count("sports") == 0


def test_upcoming_failure_returns_500(client, provider):
    """Test that losing the sports list fails the unfiltered query"""
    provider.fail_sports_list = True
    response = client.get("/api/notifications/upcoming")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch upcoming matches"}


def test_upcoming_respects_cache_ttl(client, hub, provider, now):
    """Test that repeated polls within the TTL hit the cache"""
    client.get("/api/notifications/upcoming?sports=soccer")
    hub._now = lambda: now + timedelta(minutes=4)
    client.get("/api/notifications/upcoming?sports=soccer")
    assert provider.count("schedule") == 1
    hub._now = lambda: now + timedelta(minutes=6)
    client.get("/api/notifications/upcoming?sports=soccer")
    assert provider.count("schedule") == 2


def test_parse_window_minutes():
    """Test leading-integer parsing with fallback"""
    assert parse_window_minutes(None) == 120
    assert parse_window_minutes("90") == 90
    assert parse_window_minutes("45min") == 45
    assert parse_window_minutes("0") == 120
    assert parse_window_minutes("abc") == 120
