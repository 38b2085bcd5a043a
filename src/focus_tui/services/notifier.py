"""Desktop notifications for phase changes."""

from __future__ import annotations

from plyer import notification

from focus_tui.utils.constants import APP_NAME


class DesktopNotifier:
    """Fire-and-forget desktop notification sink backed by plyer.

    Errors from the platform backend propagate; callers decide whether a
    failed notification matters (the countdown engine only logs them).
    """

    def __init__(self, app_name: str = APP_NAME, timeout: int = 10):
        self.app_name = app_name
        self.timeout = timeout

    def notify(self, title: str, message: str) -> None:
        notification.notify(
            title=title,
            message=message,
            app_name=self.app_name,
            timeout=self.timeout,
        )


class NullNotifier:
    """Notification sink that drops everything (``--no-notify``)."""

    def notify(self, title: str, message: str) -> None:
        pass
