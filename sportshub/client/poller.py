"""
Upcoming-match notification poller.

Polls the backend on a fixed interval and turns repeated upcoming-match
responses into exactly-once notifications, deduplicated against the
persisted NotifiedSet.
"""
import logging
import subprocess
import threading
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

import requests
from apscheduler.schedulers.background import BackgroundScheduler

from sportshub.errors import ParseError
from sportshub.utils.helpers import parse_utc, safe_str, utc_now

from .api import SportsHubAPI
from .notified import NotifiedSet
from .notifiers import BannerNotifier, NativeNotifier, select_notifier

logger = logging.getLogger("client.poller")

JOB_ID = "match_notification_poll"


class PollerState(Enum):
    IDLE = "idle"
    POLLING = "polling"


def format_notification(match: Dict[str, Any]) -> tuple:
    """Build (title, message) for an upcoming match."""
    title = f"Upcoming: {match.get('homeTeam')} vs {match.get('awayTeam')}"
    start = safe_str(match.get("startTimeUtc"))
    try:
        start = f"{parse_utc(start):%a %d %b %H:%M} UTC"
    except ParseError:
        pass
    message = f"{safe_str(match.get('sport')).upper()} | Starts at {start} in {match.get('location')}"
    return title, message


class NotificationPoller:
    """
    Idle until started; then polls immediately and every `interval_seconds`.

    Starting again replaces the scheduled job (one job id), so restarting
    with new preferences never leaves an older timer running.
    """

    def __init__(
        self,
        api: SportsHubAPI,
        notified: NotifiedSet,
        native: NativeNotifier,
        banner: BannerNotifier,
        interval_seconds: int = 60,
        window_minutes: int = 120,
        scheduler: Optional[BackgroundScheduler] = None,
        now_fn: Callable[[], datetime] = utc_now,
    ):
        self._api = api
        self._notified = notified
        self._native = native
        self._banner = banner
        self._interval_seconds = interval_seconds
        self._window_minutes = window_minutes
        self._scheduler = scheduler or BackgroundScheduler(daemon=True)
        self._now = now_fn
        self._lock = threading.Lock()
        self.state = PollerState.IDLE

    def start(self, preferences: Dict[str, Any]) -> None:
        """Begin (or restart) polling for the given subscription."""
        sports = list(preferences.get("sports") or [])
        teams = list(preferences.get("teams") or [])

        if not self._scheduler.running:
            self._scheduler.start()
        self._scheduler.add_job(
            self.poll_once,
            "interval",
            seconds=self._interval_seconds,
            id=JOB_ID,
            replace_existing=True,
            # The scheduler fires against the wall clock, not the injected one
            next_run_time=utc_now(),
            args=(sports, teams),
            max_instances=1,
            coalesce=True,
            misfire_grace_time=self._interval_seconds,
        )
        self.state = PollerState.POLLING
        logger.info(
            f"Polling every {self._interval_seconds}s for sports={sports} teams={teams}"
        )

    def stop(self) -> None:
        if self._scheduler.get_job(JOB_ID) is not None:
            self._scheduler.remove_job(JOB_ID)
        self.state = PollerState.IDLE

    def shutdown(self) -> None:
        self.stop()
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)

    def poll_once(self, sports: Sequence[str] = (), teams: Sequence[str] = ()) -> List[str]:
        """
        Run one poll. Failures are logged and skipped; the next tick retries.

        Returns:
            Ids notified during this poll
        """
        try:
            matches = self._api.get_upcoming(sports, teams, window_minutes=self._window_minutes)
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error checking notifications: {e}")
            return []
        return self.handle_matches(matches)

    def handle_matches(self, matches: List[Dict[str, Any]]) -> List[str]:
        """
        Notify every match not yet in the NotifiedSet, persisting each id
        right after its notification.

        Returns:
            Ids notified by this call
        """
        emitted = []
        with self._lock:
            self._notified.prune(self._now())
            for match in matches:
                match_id = match.get("id")
                if match_id is None:
                    continue
                match_id = str(match_id)
                if match_id in self._notified:
                    continue

                self._emit(match)
                self._notified.add(match_id, match.get("startTimeUtc"))
                emitted.append(match_id)

        if emitted:
            logger.info(f"Notified {len(emitted)} upcoming match(es): {emitted}")
        return emitted

    def _emit(self, match: Dict[str, Any]) -> None:
        title, message = format_notification(match)
        notifier = select_notifier(self._native, self._banner)
        try:
            notifier.notify(title, message)
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning(f"Native notification failed, showing banner instead: {e}")
            self._banner.notify(title, message)

    @property
    def next_poll_at(self) -> Optional[datetime]:
        job = self._scheduler.get_job(JOB_ID)
        return job.next_run_time if job else None
