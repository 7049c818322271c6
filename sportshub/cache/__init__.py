"""
Match caching with a shared TTL and single-flight refresh.
"""
from .core import CacheEntry, CacheSource
from .coalescer import RequestCoalescer
from .manager import MatchCache, create_match_cache, schedule_key, SPORTS_KEY

__all__ = [
    # Core types
    "CacheEntry",
    "CacheSource",
    # Coalescing
    "RequestCoalescer",
    # Manager
    "MatchCache",
    "create_match_cache",
    "schedule_key",
    "SPORTS_KEY",
]
