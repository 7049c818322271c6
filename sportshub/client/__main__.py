"""
Sports hub notification client.

Usage:
    python -m sportshub.client watch
    python -m sportshub.client subscribe --sport soccer --team Arsenal
    python -m sportshub.client sports
    python -m sportshub.client upcoming --sport soccer --window 180
"""
import argparse
import logging
import sys
import time

import requests
from dotenv import load_dotenv

from config.settings import settings
from sportshub.models import Match
from sportshub.query import sort_by_start

from . import create_session
from .poller import format_notification


def _watch_forever(session) -> None:
    print("Watching for upcoming matches (Ctrl+C to stop)...")
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nStopping.")
    finally:
        session.poller.shutdown()


def cmd_watch(session, args) -> int:
    prefs = session.load_preferences()
    if not prefs.get("notificationsEnabled"):
        print("Notifications are not enabled for this client. Run 'subscribe' first.")
        return 1
    print(f"Client: {session.client_id}")
    print(f"Sports: {', '.join(prefs.get('sports') or []) or 'all'}")
    print(f"Teams:  {', '.join(prefs.get('teams') or []) or 'all'}")
    _watch_forever(session)
    return 0


def cmd_subscribe(session, args) -> int:
    prefs = session.subscribe(args.sport, args.team)
    if prefs is None:
        return 1
    if args.no_watch:
        session.poller.shutdown()
        return 0
    _watch_forever(session)
    return 0


def cmd_sports(session, args) -> int:
    sports = session.api.get_sports()
    for key, info in sports.items():
        print(f"{key}: {info.get('name')}")
        for team in info.get("teams", []):
            print(f"   - {team}")
    return 0


def cmd_upcoming(session, args) -> int:
    raw = session.api.get_upcoming(
        [args.sport] if args.sport else [],
        [args.team] if args.team else [],
        window_minutes=args.window,
    )
    matches = {str(m.get("id")): m for m in raw if m.get("id") is not None}
    ordered = sort_by_start(Match.from_raw(m) for m in matches.values())
    if not ordered:
        print(f"No matches in the next {args.window} minutes.")
        return 0
    for match in ordered:
        title, message = format_notification(matches[match.id])
        print(f"{title}\n   {message}")
    return 0


def main() -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Upcoming-match notifications from a sports hub server")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("watch", help="Poll using the saved subscription")

    subscribe = subparsers.add_parser("subscribe", help="Subscribe to a sport/team and start polling")
    subscribe.add_argument("--sport", required=True, help="Sport key (see 'sports')")
    subscribe.add_argument("--team", default=None, help="Team name")
    subscribe.add_argument(
        "--no-watch",
        action="store_true",
        help="Save the subscription and exit without polling",
    )

    subparsers.add_parser("sports", help="List sports and teams")

    upcoming = subparsers.add_parser("upcoming", help="Show upcoming matches once, soonest first")
    upcoming.add_argument("--sport", default=None, help="Sport key")
    upcoming.add_argument("--team", default=None, help="Team name")
    upcoming.add_argument(
        "--window",
        type=int,
        default=settings.notification_window_minutes,
        help=f"Look-ahead minutes (default: {settings.notification_window_minutes})",
    )

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else settings.log_level.upper())

    session = create_session()
    commands = {
        "watch": cmd_watch,
        "subscribe": cmd_subscribe,
        "sports": cmd_sports,
        "upcoming": cmd_upcoming,
    }
    try:
        return commands[args.command](session, args)
    except requests.RequestException as e:
        print(f"Could not reach {settings.server_base_url}: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
