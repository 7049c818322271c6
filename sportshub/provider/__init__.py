"""
Provider gateway for upstream sports data.

Normalizes sports lists, schedules and global events into the internal
model regardless of which upstream serves them.
"""
import logging
from typing import Optional

from config.settings import settings

from .base import SportsProvider
from .mock import MockSportsProvider
from .rest import RESTSportsProvider

logger = logging.getLogger("provider")

__all__ = [
    "SportsProvider",
    "MockSportsProvider",
    "RESTSportsProvider",
    "get_sports_provider",
]

_provider: Optional[SportsProvider] = None


def get_sports_provider() -> SportsProvider:
    """
    Get or create the configured provider.

    The REST provider is used only when an API key is configured and the
    provider setting is not "mock"; otherwise the bundled data set is served.
    """
    global _provider
    if _provider is None:
        if settings.sports_api_key and settings.sports_api_provider != "mock":
            logger.info(f"Using REST sports provider at {settings.sports_api_base_url}")
            _provider = RESTSportsProvider(
                base_url=settings.sports_api_base_url,
                api_key=settings.sports_api_key,
                timeout=settings.upstream_timeout_seconds,
            )
        else:
            logger.info("Using mock sports data (set SPORTS_API_KEY to use a real API)")
            _provider = MockSportsProvider()
    return _provider
