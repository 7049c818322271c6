"""
Core cache data structures.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class CacheSource(Enum):
    """Source of data returned by the cache."""
    FRESH = "fresh"       # Within TTL
    UPSTREAM = "upstream" # Fetched from the provider


@dataclass
class CacheEntry:
    """
    A cached value stamped with the instant it was filled.

    Freshness is evaluated against a caller-supplied `now` so that every
    request judges staleness with the same clock it uses for filtering.
    """
    data: Any
    filled_at: datetime
    ttl_seconds: float

    def age_seconds(self, now: datetime) -> float:
        """Seconds since data was filled."""
        return (now - self.filled_at).total_seconds()

    def is_fresh(self, now: datetime) -> bool:
        """Check if data is strictly within its TTL."""
        return self.age_seconds(now) < self.ttl_seconds
