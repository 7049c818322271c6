"""
Sports Hub - Main FastAPI Application
Schedules, global events, stats and match notifications backed by a cached
upstream sports data provider
"""
import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from config.settings import settings
from sportshub.errors import ProviderError, ValidationError
from sportshub.query import DEFAULT_WINDOW_MINUTES
from sportshub.schemas import PreferencesRequest
from sportshub.service import SportsHubService, get_sports_hub
from sportshub.utils.helpers import parse_csv, parse_leading_int

load_dotenv()

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger("sportshub.main")

# Version tracking
APP_VERSION = "v1.0.0"
APP_NAME = "Sports Hub"

app = FastAPI(
    title=APP_NAME,
    description="Sports schedules, events and upcoming-match notifications",
    version=APP_VERSION,
)


def _error(status_code: int, message: str) -> JSONResponse:
    """JSON error body used by every endpoint."""
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(RequestValidationError)
def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed input gets the same 400 {error} body as missing input."""
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{field or 'body'}: {err.get('msg')}")
    logger.info(f"Rejected {request.method} {request.url.path}: {problems}")
    return _error(400, "Invalid request: " + "; ".join(problems))


def parse_window_minutes(value: Optional[str]) -> int:
    """Leading integer of the query value; non-numeric or 0 falls back to 120."""
    return parse_leading_int(value) or DEFAULT_WINDOW_MINUTES


@app.get("/health")
def health_check(hub: SportsHubService = Depends(get_sports_hub)):
    """Health check endpoint."""
    return {"status": "ok", "provider": hub.provider.name}


@app.get("/version")
def version_info():
    """Version information endpoint."""
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "full": f"{APP_NAME} {APP_VERSION}",
    }


@app.get("/cache/stats")
def cache_stats(hub: SportsHubService = Depends(get_sports_hub)):
    """Get match cache statistics."""
    return hub.cache.get_stats()


# =============================================================================
# SPORTS / SCHEDULE / EVENTS
# =============================================================================

@app.get("/api/sports")
def api_sports(hub: SportsHubService = Depends(get_sports_hub)):
    """Get sports and their teams, keyed by sport key."""
    try:
        return hub.get_sports()
    except ProviderError as e:
        logger.error(f"Error fetching sports: {e}")
        return _error(500, "Failed to fetch sports data")


@app.get("/api/schedule")
def api_schedule(
    sport: Optional[str] = Query(None, description="Sport key (required)"),
    team: Optional[str] = Query(None, description="Exact home or away team name"),
    date: Optional[str] = Query(None, description="UTC day, YYYY-MM-DD"),
    hub: SportsHubService = Depends(get_sports_hub),
):
    """Get a sport's schedule, optionally narrowed to one team and/or day."""
    try:
        matches = hub.get_schedule(sport, team=team, date=date)
        return [m.to_dict() for m in matches]
    except ValidationError as e:
        return _error(400, str(e))
    except ProviderError as e:
        logger.error(f"Error fetching schedule for {sport}: {e}")
        return _error(500, "Failed to fetch schedule")


@app.get("/api/events/global")
def api_global_events(
    year: Optional[str] = Query(None, description="Start year, or 'all'"),
    search: Optional[str] = Query(None, description="Name/location search text"),
    hub: SportsHubService = Depends(get_sports_hub),
):
    """Get global sporting events."""
    try:
        return [e.to_dict() for e in hub.get_global_events(year=year, search=search)]
    except ProviderError as e:
        logger.error(f"Error fetching global events: {e}")
        return _error(500, "Failed to fetch global events")


# =============================================================================
# STATS
# =============================================================================

@app.get("/api/stats")
def api_stats(hub: SportsHubService = Depends(get_sports_hub)):
    """Per-sport match counts derived from the match cache."""
    try:
        return {"statsBySport": hub.get_stats()}
    except ProviderError as e:
        logger.error(f"Error fetching stats: {e}")
        return _error(500, "Failed to fetch statistics")


# =============================================================================
# PREFERENCES
# =============================================================================

@app.post("/api/preferences")
def api_save_preferences(
    request: Optional[PreferencesRequest] = None,
    hub: SportsHubService = Depends(get_sports_hub),
):
    """Store a client's subscription, replacing any previous one."""
    request = request or PreferencesRequest()
    try:
        record = hub.save_preferences(
            request.clientId,
            sports=request.sports,
            teams=request.teams,
            notifications_enabled=bool(request.notificationsEnabled),
        )
    except ValidationError as e:
        return _error(400, str(e))
    return record.to_dict()


@app.get("/api/preferences")
def api_get_preferences(
    clientId: Optional[str] = Query(None, description="Client identifier"),
    hub: SportsHubService = Depends(get_sports_hub),
):
    """Get a client's preferences, or the default record."""
    return hub.get_preferences(clientId).to_dict()


# =============================================================================
# NOTIFICATIONS
# =============================================================================

@app.get("/api/notifications/upcoming")
def api_upcoming_notifications(
    sports: Optional[str] = Query(None, description="Comma-separated sport keys"),
    teams: Optional[str] = Query(None, description="Comma-separated team names"),
    windowMinutes: Optional[str] = Query(None, description="Look-ahead window, default 120"),
    hub: SportsHubService = Depends(get_sports_hub),
):
    """Matches starting within the window that match the sport/team filters."""
    try:
        upcoming = hub.get_upcoming(
            sports=parse_csv(sports),
            teams=parse_csv(teams),
            window_minutes=parse_window_minutes(windowMinutes),
        )
        return [m.to_dict() for m in upcoming]
    except ProviderError as e:
        logger.error(f"Error fetching upcoming notifications: {e}")
        return _error(500, "Failed to fetch upcoming matches")
