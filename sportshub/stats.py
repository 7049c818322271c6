"""Per-sport match counts for the stats view."""
from typing import Any, Dict, Iterable, List

from sportshub.models import Match, MatchStatus


def aggregate_stats(matches: Iterable[Match]) -> List[Dict[str, Any]]:
    """
    Count matches per sport and status, in first-seen sport order.

    Anything that is neither upcoming nor live counts as completed.
    """
    by_sport: Dict[str, Dict[str, Any]] = {}
    for match in matches:
        stats = by_sport.setdefault(match.sport, {
            "sport": match.sport,
            "totalMatches": 0,
            "upcoming": 0,
            "live": 0,
            "completed": 0,
        })
        stats["totalMatches"] += 1
        if match.status == MatchStatus.UPCOMING:
            stats["upcoming"] += 1
        elif match.status == MatchStatus.LIVE:
            stats["live"] += 1
        else:
            stats["completed"] += 1
    return list(by_sport.values())
