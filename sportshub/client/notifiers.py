"""
Notification delivery for the match poller.

Two variants implement the Notifier interface:
- NativeNotifier: desktop notification via `notify-send`, when permitted
- BannerNotifier: transient in-terminal banner, always available

`select_notifier` picks one per notification from the native permission state.
"""
import logging
import shutil
import subprocess
import sys
import threading
from enum import Enum
from typing import Callable, Optional, Protocol

logger = logging.getLogger("client.notifiers")


class NotificationPermission(Enum):
    """Whether native notifications may be shown."""
    DEFAULT = "default"
    GRANTED = "granted"
    DENIED = "denied"


class Notifier(Protocol):
    """Interface for a notification channel."""

    def notify(self, title: str, message: str, is_error: bool = False) -> None:
        ...


class NativeNotifier:
    """
    Desktop notifications through a notify-send compatible command.

    Permission is requested once; it is granted only if native notifications
    are enabled and the command is on PATH.
    """

    def __init__(self, enabled: bool = True, command: str = "notify-send", timeout: float = 5.0):
        self._enabled = enabled
        self._command = command
        self._timeout = timeout
        self._permission = NotificationPermission.DEFAULT

    @property
    def permission(self) -> NotificationPermission:
        return self._permission

    def request_permission(self) -> NotificationPermission:
        if self._permission == NotificationPermission.DEFAULT:
            available = self._enabled and shutil.which(self._command) is not None
            self._permission = (
                NotificationPermission.GRANTED if available else NotificationPermission.DENIED
            )
            logger.info(f"Native notification permission: {self._permission.value}")
        return self._permission

    def notify(self, title: str, message: str, is_error: bool = False) -> None:
        urgency = "critical" if is_error else "normal"
        subprocess.run(
            [self._command, "--urgency", urgency, "--app-name", "Sports Hub", title, message],
            check=True,
            timeout=self._timeout,
        )


class BannerNotifier:
    """
    In-terminal banner. Only one banner is shown at a time; each is dismissed
    after `timeout` seconds or by an explicit `dismiss()`.
    """

    def __init__(
        self,
        timeout: float = 8.0,
        write: Optional[Callable[[str], None]] = None,
    ):
        self._timeout = timeout
        self._write = write or self._stdout_write
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._active: Optional[str] = None
        self._generation = 0

    @staticmethod
    def _stdout_write(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    @property
    def active(self) -> Optional[str]:
        """Title of the banner currently shown, if any."""
        with self._lock:
            return self._active

    def notify(self, title: str, message: str, is_error: bool = False) -> None:
        self.dismiss()
        marker = "!" if is_error else "*"
        width = max(len(title), len(message)) + 4
        border = marker * width
        self._write(f"\n{border}\n{marker} {title}\n{marker} {message}\n{border}\n")

        with self._lock:
            self._generation += 1
            timer = threading.Timer(self._timeout, self._expire, args=(self._generation,))
            timer.daemon = True
            self._active = title
            self._timer = timer
        timer.start()

    def dismiss(self) -> None:
        """Close the current banner, if any."""
        with self._lock:
            timer, self._timer = self._timer, None
            self._active = None
        if timer is not None:
            timer.cancel()

    def _expire(self, generation: int) -> None:
        # A newer banner owns the slot; leave it alone
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
            self._active = None


def select_notifier(native: NativeNotifier, banner: BannerNotifier) -> Notifier:
    """Native when permitted, otherwise the in-terminal banner."""
    if native.permission == NotificationPermission.GRANTED:
        return native
    return banner
