"""
Error taxonomy shared by the gateway, cache, query engine and HTTP layer.
"""


class ValidationError(ValueError):
    """Missing or invalid required input. Mapped to HTTP 400."""


class ProviderError(RuntimeError):
    """Upstream sports data fetch failed. Mapped to HTTP 500."""

    def __init__(self, message: str, sport: str = None):
        super().__init__(message)
        self.sport = sport


class ParseError(ValueError):
    """A match carries a date/time that cannot be parsed."""
