"""
Client session: identity, preference sync and subscription.
"""
import logging
import secrets
import string
from typing import Any, Dict, Optional

import requests

from .api import SportsHubAPI
from .notifiers import BannerNotifier, NativeNotifier
from .poller import NotificationPoller
from .storage import LocalStore, CLIENT_ID_KEY, PREFS_KEY

logger = logging.getLogger("client.session")

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_client_id() -> str:
    """Opaque id of the form client-xxxxxxxx."""
    return "client-" + "".join(secrets.choice(_ID_ALPHABET) for _ in range(8))


class ClientSession:
    """Ties the local store, backend API, notifiers and poller together."""

    def __init__(
        self,
        api: SportsHubAPI,
        store: LocalStore,
        poller: NotificationPoller,
        native: NativeNotifier,
        banner: BannerNotifier,
    ):
        self.api = api
        self.store = store
        self.poller = poller
        self.native = native
        self.banner = banner
        self.client_id = self.initialize_client_id()

    def initialize_client_id(self) -> str:
        """Load the persisted client id, generating one on first run."""
        client_id = self.store.get(CLIENT_ID_KEY)
        if not client_id:
            client_id = generate_client_id()
            self.store.set(CLIENT_ID_KEY, client_id)
            logger.info(f"Generated client id {client_id}")
        return client_id

    def load_preferences(self) -> Dict[str, Any]:
        """
        Fetch this client's preferences and start polling if enabled.

        Falls back to the last-known local snapshot if the backend is
        unreachable.
        """
        try:
            prefs = self.api.get_preferences(self.client_id)
            self.store.set(PREFS_KEY, prefs)
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error loading preferences, using local snapshot: {e}")
            prefs = self.store.get(PREFS_KEY) or {
                "sports": [],
                "teams": [],
                "notificationsEnabled": False,
            }

        if prefs.get("notificationsEnabled"):
            self.native.request_permission()
            self.poller.start(prefs)
        return prefs

    def subscribe(self, sport: Optional[str], team: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """
        Save a subscription for one sport/team and (re)start polling.

        Returns:
            The saved preferences, or None if the backend rejected or failed
        """
        prefs = {
            "clientId": self.client_id,
            "sports": [sport] if sport else [],
            "teams": [team] if team else [],
            "notificationsEnabled": True,
        }
        try:
            self.api.save_preferences(prefs)
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error saving preferences: {e}")
            self.banner.notify(
                "Error",
                "Could not save your subscription. Please try again.",
                is_error=True,
            )
            return None

        self.store.set(PREFS_KEY, prefs)
        self.native.request_permission()
        self.poller.start(prefs)
        self.banner.notify(
            "Subscribed",
            "You will get notified about upcoming matches for your selected team.",
        )
        return prefs
