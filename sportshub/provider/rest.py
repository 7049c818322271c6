"""
REST provider for a third-party sports data API.

Expected upstream endpoints (JSON):
- GET {base}/sports                          -> {key: {name, teams}} or [{key, name, teams}]
- GET {base}/schedule?sport=&team=&date=     -> [match, ...] or {"matches": [...]}
- GET {base}/events?year=&search=            -> [event, ...] or {"events": [...]}
"""
import logging
from typing import Optional, List, Dict, Any

import requests

from sportshub.errors import ProviderError
from sportshub.models import Match, SportInfo, GlobalEvent

logger = logging.getLogger("provider.rest")


def _unwrap_list(payload: Any, key: str) -> List[Dict[str, Any]]:
    """Accept either a bare list or an object wrapping the list under `key`."""
    if isinstance(payload, dict):
        payload = payload.get(key, payload.get("data", []))
    if not isinstance(payload, list):
        return []
    return [item for item in payload if isinstance(item, dict)]


class RESTSportsProvider:
    """Gateway to an upstream HTTP API, with a bounded request timeout."""

    name = "rest"

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        if not base_url:
            raise ValueError("base_url is required for the REST sports provider")
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._session = session or requests.Session()

    def _get_headers(self) -> dict:
        """Get API authentication headers."""
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["x-api-key"] = self._api_key
        return headers

    def _make_request(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET an upstream endpoint and decode its JSON body.

        Raises:
            ProviderError: On transport errors, HTTP errors or invalid JSON
        """
        clean_params = {k: v for k, v in (params or {}).items() if v not in (None, "")}
        url = f"{self._base_url}/{endpoint}"
        try:
            response = self._session.get(
                url,
                headers=self._get_headers(),
                params=clean_params,
                timeout=self._timeout,
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            logger.error(f"Upstream API error on {endpoint}: {e}")
            raise ProviderError(f"Upstream request to {endpoint} failed: {e}") from e
        except ValueError as e:
            logger.error(f"Upstream returned invalid JSON on {endpoint}: {e}")
            raise ProviderError(f"Upstream response from {endpoint} is not JSON") from e

    # ===== SPORTS =====

    def get_sports_list(self) -> Dict[str, SportInfo]:
        payload = self._make_request("sports")

        sports: Dict[str, SportInfo] = {}
        if isinstance(payload, dict) and not isinstance(payload.get("sports"), list):
            items = [dict(value, key=key) for key, value in payload.items() if isinstance(value, dict)]
        else:
            items = _unwrap_list(payload, "sports")

        for item in items:
            key = item.get("key") or item.get("id")
            if not key:
                logger.warning(f"Skipping sport without key: {item}")
                continue
            sports[str(key)] = SportInfo(
                key=str(key),
                name=str(item.get("name") or key),
                teams=[str(t) for t in item.get("teams") or []],
            )
        return sports

    # ===== SCHEDULE =====

    def get_schedule(
        self,
        sport: str,
        team: Optional[str] = None,
        date: Optional[str] = None,
    ) -> List[Match]:
        payload = self._make_request("schedule", {"sport": sport, "team": team, "date": date})

        matches = []
        for raw in _unwrap_list(payload, "matches"):
            try:
                matches.append(Match.from_raw(raw, sport=sport))
            except KeyError:
                logger.warning(f"Skipping {sport} match without id: {raw}")
        return matches

    # ===== GLOBAL EVENTS =====

    def get_global_events(
        self,
        year: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[GlobalEvent]:
        payload = self._make_request("events", {"year": year, "search": search})
        return [GlobalEvent.from_raw(raw) for raw in _unwrap_list(payload, "events")]
