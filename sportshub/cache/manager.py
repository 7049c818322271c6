"""
Match cache orchestration: TTL-bounded entries with single-flight refresh.

Entries:
- "sports": the sports list
- "schedule:<sport>": one sport's full schedule

Every entry shares the same TTL, so the all-sports path and the
sport-filtered path give identical staleness guarantees.
"""
import threading
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Dict, Optional, Callable, Any, List, Iterable, Tuple

from config.settings import settings
from sportshub.errors import ProviderError
from sportshub.models import Match, SportInfo
from sportshub.provider.base import SportsProvider

from .core import CacheEntry, CacheSource
from .coalescer import RequestCoalescer

logger = logging.getLogger("cache.manager")

SPORTS_KEY = "sports"


def schedule_key(sport: str) -> str:
    """Cache key for one sport's schedule."""
    return f"schedule:{sport}"


class MatchCache:
    """
    Process-wide match cache in front of the provider gateway.

    - Entries are served only while `now - filled_at < ttl_seconds`
    - Stale or missing entries are refetched before being served
    - Concurrent refreshes of the same key share one upstream call
    - Per-sport failures during multi-sport reads are logged and skipped
    """

    def __init__(
        self,
        provider: SportsProvider,
        ttl_seconds: float = 300,
        coalesce_timeout: float = 30.0,
        max_workers: int = 8,
    ):
        """
        Initialize the match cache.

        Args:
            provider: Upstream sports data gateway
            ttl_seconds: Lifetime of every entry
            coalesce_timeout: Timeout for waiting on coalesced refreshes
            max_workers: Thread pool size for parallel per-sport refreshes
        """
        self._provider = provider
        self._ttl_seconds = ttl_seconds
        self._max_workers = max(1, max_workers)
        self._cache: Dict[str, CacheEntry] = {}
        self._cache_lock = threading.RLock()
        self._coalescer = RequestCoalescer(timeout=coalesce_timeout)

        self._stats = {
            "hits": 0,
            "misses": 0,
            "refreshes": 0,
            "failures": 0,
        }

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    # ===== PUBLIC READS =====

    def get_sports(self, now: datetime) -> Dict[str, SportInfo]:
        """
        Get the sports list, refreshing it if stale.

        Raises:
            ProviderError: If the sports list cannot be fetched
        """
        data, _ = self._get(SPORTS_KEY, self._provider.get_sports_list, now)
        return data

    def get_schedule(self, sport: str, now: datetime) -> List[Match]:
        """
        Get one sport's full schedule, refreshing it if stale.

        Raises:
            ProviderError: If the schedule cannot be fetched
        """
        data, _ = self._get(
            schedule_key(sport),
            lambda: self._provider.get_schedule(sport),
            now,
        )
        return data

    def get_all_matches(self, now: datetime) -> List[Match]:
        """
        Get matches for every known sport, in sports-list order.

        Raises:
            ProviderError: Only if the sports list itself cannot be fetched
        """
        sports = self.get_sports(now)
        return self.get_matches_for_sports(sports.keys(), now)

    def get_matches_for_sports(self, sports: Iterable[str], now: datetime) -> List[Match]:
        """
        Get matches for the given sports, in the given order.

        A sport whose schedule cannot be fetched contributes no matches.
        """
        sport_keys = list(dict.fromkeys(sports))
        if not sport_keys:
            return []

        results: Dict[str, List[Match]] = {}
        with ThreadPoolExecutor(
            max_workers=min(self._max_workers, len(sport_keys)),
            thread_name_prefix="cache-refresh",
        ) as executor:
            future_to_sport = {
                executor.submit(self.get_schedule, sport, now): sport
                for sport in sport_keys
            }
            for future, sport in future_to_sport.items():
                try:
                    results[sport] = future.result()
                except ProviderError as e:
                    logger.error(f"Error fetching matches for {sport}: {e}")

        matches: List[Match] = []
        for sport in sport_keys:
            matches.extend(results.get(sport, []))
        return matches

    def filled_at(self, key: str = SPORTS_KEY) -> Optional[datetime]:
        """Instant the given entry was last filled, if present."""
        with self._cache_lock:
            entry = self._cache.get(key)
        return entry.filled_at if entry else None

    # ===== INTERNALS =====

    def _get(
        self,
        cache_key: str,
        fetch_fn: Callable[[], Any],
        now: datetime,
    ) -> Tuple[Any, CacheSource]:
        """Serve a fresh entry or refresh it through the coalescer."""
        with self._cache_lock:
            entry = self._cache.get(cache_key)

        if entry is not None and entry.is_fresh(now):
            logger.debug(f"CACHE HIT: {cache_key} [age={entry.age_seconds(now):.1f}s]")
            self._stats["hits"] += 1
            return entry.data, CacheSource.FRESH

        if entry is None:
            logger.info(f"CACHE MISS: {cache_key}")
        else:
            logger.info(f"CACHE EXPIRED: {cache_key} [age={entry.age_seconds(now):.1f}s]")
        self._stats["misses"] += 1

        def refresh():
            # Another flight may have stored a fresh entry since our check
            with self._cache_lock:
                current = self._cache.get(cache_key)
            if current is not None and current.is_fresh(now):
                return current.data
            data = fetch_fn()
            self._store(cache_key, data, now)
            self._stats["refreshes"] += 1
            return data

        try:
            data = self._coalescer.get_or_fetch(cache_key, refresh)
        except ProviderError:
            self._stats["failures"] += 1
            raise
        except TimeoutError as e:
            self._stats["failures"] += 1
            raise ProviderError(str(e)) from e
        return data, CacheSource.UPSTREAM

    def _store(self, cache_key: str, data: Any, now: datetime) -> None:
        """Store data in cache, stamped with the requesting instant."""
        entry = CacheEntry(data=data, filled_at=now, ttl_seconds=self._ttl_seconds)
        with self._cache_lock:
            self._cache[cache_key] = entry

    # ===== MAINTENANCE =====

    def invalidate(self, cache_key: str) -> bool:
        """
        Invalidate a specific cache entry.

        Returns:
            True if entry was found and removed
        """
        with self._cache_lock:
            if cache_key in self._cache:
                del self._cache[cache_key]
                logger.info(f"Invalidated cache: {cache_key}")
                return True
            return False

    def clear(self) -> int:
        """
        Clear all cache entries.

        Returns:
            Number of entries cleared
        """
        with self._cache_lock:
            count = len(self._cache)
            self._cache.clear()
            logger.info(f"Cleared {count} cache entries")
            return count

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._cache_lock:
            total = self._stats["hits"] + self._stats["misses"]
            hit_rate = (self._stats["hits"] / total * 100) if total > 0 else 0

            return {
                "entries": len(self._cache),
                "keys": sorted(self._cache.keys()),
                "ttl_seconds": self._ttl_seconds,
                "hits": self._stats["hits"],
                "misses": self._stats["misses"],
                "refreshes": self._stats["refreshes"],
                "failures": self._stats["failures"],
                "hit_rate_percent": round(hit_rate, 1),
                "coalescer": self._coalescer.get_stats(),
            }


def create_match_cache(provider: SportsProvider) -> MatchCache:
    """Build a MatchCache configured from settings."""
    return MatchCache(
        provider=provider,
        ttl_seconds=settings.matches_cache_ttl_seconds,
        coalesce_timeout=settings.coalesce_timeout_seconds,
        max_workers=settings.max_parallel_fetches,
    )
