"""
Data models for the sports hub.

These dataclasses are the canonical shape of provider data, independent of
which upstream produced it. JSON field names follow the dashboard contract
(camelCase).
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from sportshub.utils.helpers import isoformat_z, safe_lower, safe_str


class MatchStatus(Enum):
    """Lifecycle state of a match."""
    UPCOMING = "upcoming"
    LIVE = "live"
    COMPLETED = "completed"

    @classmethod
    def from_raw(cls, raw: Any) -> "MatchStatus":
        """Map an upstream status label onto the three dashboard states."""
        label = safe_lower(raw).strip()
        if label in ("", "upcoming", "scheduled", "not started", "ns", "tbd", "pre"):
            return cls.UPCOMING
        if label in ("live", "in progress", "in_progress", "inprogress", "1h", "2h", "ht", "et", "bt"):
            return cls.LIVE
        return cls.COMPLETED


def _pick(raw: Dict[str, Any], *keys: str) -> Any:
    """First non-empty value among the given keys."""
    for key in keys:
        value = raw.get(key)
        if value not in (None, ""):
            return value
    return None


@dataclass(frozen=True)
class Match:
    """A single fixture. Identity is `id`."""
    id: str
    sport: str
    home_team: str
    away_team: str
    location: str
    start_time_utc: Optional[str]  # Upstream ISO text, parsed at query time
    status: MatchStatus = MatchStatus.UPCOMING

    @classmethod
    def from_raw(cls, raw: Dict[str, Any], sport: Optional[str] = None) -> "Match":
        """
        Normalize an upstream match record.

        Accepts camelCase and snake_case field names.

        Raises:
            KeyError: If the record carries no id
        """
        match_id = _pick(raw, "id", "matchId", "match_id", "eventId")
        if match_id is None:
            raise KeyError("id")
        return cls(
            id=str(match_id),
            sport=safe_str(_pick(raw, "sport") or sport),
            home_team=safe_str(_pick(raw, "homeTeam", "home_team", "home")),
            away_team=safe_str(_pick(raw, "awayTeam", "away_team", "away")),
            location=safe_str(_pick(raw, "location", "venue")),
            start_time_utc=_pick(raw, "startTimeUtc", "start_time_utc", "startTime", "date"),
            status=MatchStatus.from_raw(raw.get("status")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "id": self.id,
            "sport": self.sport,
            "homeTeam": self.home_team,
            "awayTeam": self.away_team,
            "location": self.location,
            "startTimeUtc": self.start_time_utc,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class SportInfo:
    """A sport and the teams that play it."""
    key: str
    name: str
    teams: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "teams": list(self.teams)}


@dataclass(frozen=True)
class GlobalEvent:
    """A multi-day global sporting event (World Cup, Olympics, ...)."""
    id: str
    name: str
    location: str
    start_date_utc: Optional[str]
    end_date_utc: Optional[str]
    status: MatchStatus = MatchStatus.UPCOMING

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "GlobalEvent":
        """Normalize an upstream event record."""
        name = safe_str(_pick(raw, "name", "title"))
        return cls(
            id=safe_str(_pick(raw, "id", "eventId", "event_id") or name),
            name=name,
            location=safe_str(_pick(raw, "location", "venue", "country")),
            start_date_utc=_pick(raw, "startDateUtc", "start_date_utc", "startDate"),
            end_date_utc=_pick(raw, "endDateUtc", "end_date_utc", "endDate"),
            status=MatchStatus.from_raw(raw.get("status")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "startDateUtc": self.start_date_utc,
            "endDateUtc": self.end_date_utc,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class Preferences:
    """Per-client subscription record. Overwritten wholesale on save."""
    client_id: str
    sports: List[str] = field(default_factory=list)
    teams: List[str] = field(default_factory=list)
    notifications_enabled: bool = False
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "clientId": self.client_id,
            "sports": list(self.sports),
            "teams": list(self.teams),
            "notificationsEnabled": self.notifications_enabled,
            "updatedAt": isoformat_z(self.updated_at) if self.updated_at else None,
        }
