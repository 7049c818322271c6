"""
Single-flight refresh for match cache entries.

A stale "schedule:<sport>" or "sports" entry seen by several request threads
at once is refetched from the provider exactly once; the other threads block
until that refresh lands and get the same matches (or the same ProviderError).
"""
import threading
import time
import logging
from typing import Dict, Optional, Callable, Any
from dataclasses import dataclass, field

logger = logging.getLogger("cache.coalescer")


@dataclass
class InFlightRefresh:
    """One provider fetch in progress for a cache key."""
    done: threading.Event = field(default_factory=threading.Event)
    result: Optional[Any] = None
    error: Optional[Exception] = None
    started: float = field(default_factory=time.monotonic)
    waiters: int = 0

    def age_seconds(self) -> float:
        return time.monotonic() - self.started


class RequestCoalescer:
    """
    Shares one provider fetch among all threads refreshing the same key.

    The first thread to find a key missing runs the fetch; later threads for
    that key wait up to `timeout` seconds on its result. A failed fetch is
    re-raised in every waiting thread and nothing is left registered, so the
    next request starts a fresh attempt.
    """

    def __init__(self, timeout: float = 30.0):
        self._in_flight: Dict[str, InFlightRefresh] = {}
        self._lock = threading.Lock()
        self._timeout = timeout
        self._coalesced_total = 0

    def get_or_fetch(self, cache_key: str, fetch_fn: Callable[[], Any]) -> Any:
        """
        Run `fetch_fn` for `cache_key`, or join the refresh already running.

        Raises:
            TimeoutError: If the running refresh does not finish in time
            Exception: Whatever `fetch_fn` raised, in the fetching thread and
                every waiting thread alike
        """
        with self._lock:
            flight = self._in_flight.get(cache_key)
            leader = flight is None
            if leader:
                flight = InFlightRefresh()
                self._in_flight[cache_key] = flight
            else:
                flight.waiters += 1
                self._coalesced_total += 1

        if leader:
            logger.debug(f"Refreshing {cache_key}")
            try:
                flight.result = fetch_fn()
            except Exception as e:
                flight.error = e
                logger.warning(f"Refresh of {cache_key} failed: {e}")
            finally:
                with self._lock:
                    self._in_flight.pop(cache_key, None)
                flight.done.set()
        else:
            logger.debug(f"Joining refresh of {cache_key} ({flight.waiters} waiting)")
            if not flight.done.wait(timeout=self._timeout):
                logger.error(f"Gave up waiting {self._timeout}s for refresh of {cache_key}")
                raise TimeoutError(f"Refresh of {cache_key} timed out after {self._timeout}s")

        if flight.error is not None:
            raise flight.error
        return flight.result

    @property
    def active_requests(self) -> int:
        """Number of refreshes currently running."""
        with self._lock:
            return len(self._in_flight)

    def get_stats(self) -> Dict[str, Any]:
        """Running refreshes with their age and waiters, plus the join total."""
        with self._lock:
            return {
                "active_requests": len(self._in_flight),
                "active_keys": {
                    key: {
                        "age_seconds": round(flight.age_seconds(), 3),
                        "waiters": flight.waiters,
                    }
                    for key, flight in self._in_flight.items()
                },
                "coalesced_total": self._coalesced_total,
            }
