"""
Utility helper functions for safe data handling.
"""
import re
from datetime import datetime, timezone
from typing import Any, List, Optional

from sportshub.errors import ParseError

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def safe_str(value: Any, default: str = "") -> str:
    """
    Safely convert value to string, handling None.

    Args:
        value: Any value to convert
        default: Default string if value is None

    Returns:
        String representation or default
    """
    if value is None:
        return default
    return str(value)


def safe_lower(value: Any) -> str:
    """Safely lowercase a value, handling None."""
    if value is None:
        return ""
    return str(value).lower()


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def isoformat_z(value: datetime) -> str:
    """Format an aware datetime as ISO-8601 with a trailing Z."""
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_utc(value: Any) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Naive timestamps are read as UTC. A trailing "Z" is accepted.

    Raises:
        ParseError: If value is empty or not a valid timestamp
    """
    text = safe_str(value).strip()
    if not text:
        raise ParseError("empty timestamp")
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as e:
        raise ParseError(f"invalid timestamp {text!r}") from e
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_leading_int(value: Any) -> Optional[int]:
    """
    Read the leading integer of a string ("90min" -> 90).

    Returns None when the value does not start with digits.
    """
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def parse_csv(value: Optional[str]) -> List[str]:
    """Split a comma-separated query value, dropping blank items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
