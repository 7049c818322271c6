"""
Persisted set of match ids already announced to this client.

Ids are stored with their kickoff time so old entries can be evicted once
their match is long over. Eviction only touches matches that started more
than `retention_days` ago, which can never reappear in an upcoming window,
so an evicted id is never re-notified. Ids without a known kickoff are kept.
"""
import logging
import threading
from datetime import datetime, timedelta
from typing import Dict, Optional

from sportshub.errors import ParseError
from sportshub.utils.helpers import parse_utc

from .storage import LocalStore, NOTIFIED_MATCHES_KEY

logger = logging.getLogger("client.notified")


class NotifiedSet:
    """Grows as matches are announced; shrinks only by retention eviction."""

    def __init__(self, store: LocalStore, retention_days: int = 7):
        self._store = store
        self._retention = timedelta(days=retention_days)
        self._lock = threading.Lock()
        self._entries: Dict[str, Optional[str]] = self._load()

    def _load(self) -> Dict[str, Optional[str]]:
        raw = self._store.get(NOTIFIED_MATCHES_KEY)
        if isinstance(raw, dict):
            return {str(k): v for k, v in raw.items()}
        if isinstance(raw, list):
            # Older state stored a bare list of ids
            return {str(match_id): None for match_id in raw}
        return {}

    def __contains__(self, match_id: str) -> bool:
        with self._lock:
            return match_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def ids(self) -> set:
        with self._lock:
            return set(self._entries)

    def add(self, match_id: str, start_time_utc: Optional[str] = None) -> None:
        """Record an announced match and persist immediately."""
        with self._lock:
            self._entries[match_id] = start_time_utc
            self._store.set(NOTIFIED_MATCHES_KEY, dict(self._entries))

    def prune(self, now: datetime) -> int:
        """
        Evict ids whose match started more than the retention period ago.

        Returns:
            Number of ids evicted
        """
        cutoff = now - self._retention
        with self._lock:
            expired = []
            for match_id, start in self._entries.items():
                if start is None:
                    continue
                try:
                    if parse_utc(start) < cutoff:
                        expired.append(match_id)
                except ParseError:
                    continue
            for match_id in expired:
                del self._entries[match_id]
            if expired:
                self._store.set(NOTIFIED_MATCHES_KEY, dict(self._entries))
                logger.info(f"Evicted {len(expired)} notified ids older than {self._retention.days} days")
        return len(expired)
