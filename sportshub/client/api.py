"""
HTTP client for the sports hub backend.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

import requests

logger = logging.getLogger("client.api")


class SportsHubAPI:
    """Thin wrapper over the backend's JSON endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = self._session.get(
            f"{self._base_url}{path}",
            params=params,
            timeout=self._timeout,
        )
        response.raise_for_status()
        return response.json()

    def get_sports(self) -> Dict[str, Any]:
        return self._get("/api/sports")

    def get_preferences(self, client_id: str) -> Dict[str, Any]:
        return self._get("/api/preferences", {"clientId": client_id})

    def save_preferences(self, preferences: Dict[str, Any]) -> Dict[str, Any]:
        response = self._session.post(
            f"{self._base_url}/api/preferences",
            json=preferences,
            timeout=self._timeout,
        )
        response.raise_for_status()
        return response.json()

    def get_upcoming(
        self,
        sports: Sequence[str] = (),
        teams: Sequence[str] = (),
        window_minutes: int = 120,
    ) -> List[Dict[str, Any]]:
        """
        Query upcoming matches.

        Raises:
            requests.RequestException: On transport or HTTP errors
            ValueError: If the body is not JSON
        """
        params = {"windowMinutes": str(window_minutes)}
        if sports:
            params["sports"] = ",".join(sports)
        if teams:
            params["teams"] = ",".join(teams)
        data = self._get("/api/notifications/upcoming", params)
        return data if isinstance(data, list) else []
