"""In-memory per-client notification preferences."""
import threading
import logging
from datetime import datetime
from typing import Dict, Iterable, Optional

from sportshub.errors import ValidationError
from sportshub.models import Preferences
from sportshub.utils.helpers import utc_now

logger = logging.getLogger("sportshub.preferences")


class PreferencesStore:
    """
    Preferences keyed by client id.

    Saves overwrite the whole record; records live for the process lifetime.
    """

    def __init__(self):
        self._records: Dict[str, Preferences] = {}
        self._lock = threading.Lock()

    def set(
        self,
        client_id: str,
        sports: Optional[Iterable[str]] = None,
        teams: Optional[Iterable[str]] = None,
        notifications_enabled: bool = False,
        now: Optional[datetime] = None,
    ) -> Preferences:
        """
        Store a client's preferences, replacing any previous record.

        Raises:
            ValidationError: If client_id is missing
        """
        if not client_id:
            raise ValidationError("clientId is required")

        record = Preferences(
            client_id=client_id,
            sports=list(sports or []),
            teams=list(teams or []),
            notifications_enabled=bool(notifications_enabled),
            updated_at=now or utc_now(),
        )
        with self._lock:
            self._records[client_id] = record
        logger.info(
            f"Saved preferences for {client_id}: sports={record.sports} "
            f"teams={record.teams} notifications={record.notifications_enabled}"
        )
        return record

    def get(self, client_id: Optional[str]) -> Preferences:
        """Get a client's preferences, or the default record if none exist."""
        with self._lock:
            record = self._records.get(client_id) if client_id else None
        return record or Preferences(client_id=client_id or "")

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
