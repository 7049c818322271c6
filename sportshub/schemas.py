"""
Pydantic schemas for API request bodies.
"""
from pydantic import BaseModel, field_validator
from typing import Any, List, Optional


class PreferencesRequest(BaseModel):
    """Body of POST /api/preferences (dashboard field names)."""
    clientId: Optional[str] = None
    sports: Optional[List[str]] = None
    teams: Optional[List[str]] = None
    notificationsEnabled: Optional[bool] = False

    @field_validator("clientId", mode="before")
    @classmethod
    def coerce_client_id(cls, value: Any) -> Any:
        # Any scalar id is accepted and stored as text
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value
