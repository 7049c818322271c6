"""
Notification client for the sports hub backend.

Polls for upcoming matches and announces each one exactly once, using a
native desktop notification when permitted and an in-terminal banner
otherwise.
"""
from config.settings import settings

from .api import SportsHubAPI
from .notified import NotifiedSet
from .notifiers import (
    Notifier,
    NativeNotifier,
    BannerNotifier,
    NotificationPermission,
    select_notifier,
)
from .poller import NotificationPoller, PollerState, format_notification
from .session import ClientSession, generate_client_id
from .storage import LocalStore

__all__ = [
    "SportsHubAPI",
    "NotifiedSet",
    "Notifier",
    "NativeNotifier",
    "BannerNotifier",
    "NotificationPermission",
    "select_notifier",
    "NotificationPoller",
    "PollerState",
    "format_notification",
    "ClientSession",
    "generate_client_id",
    "LocalStore",
    "create_session",
]


def create_session() -> ClientSession:
    """Build a client session wired from settings."""
    api = SportsHubAPI(settings.server_base_url, timeout=settings.upstream_timeout_seconds)
    store = LocalStore(settings.client_state_path)
    native = NativeNotifier(
        enabled=settings.native_notifications,
        command=settings.notify_command,
    )
    banner = BannerNotifier(timeout=settings.banner_timeout_seconds)
    poller = NotificationPoller(
        api=api,
        notified=NotifiedSet(store, retention_days=settings.notified_retention_days),
        native=native,
        banner=banner,
        interval_seconds=settings.poll_interval_seconds,
        window_minutes=settings.notification_window_minutes,
    )
    return ClientSession(api=api, store=store, poller=poller, native=native, banner=banner)
