import asyncio

import structlog

from tasknest.core.modules.notification.models import Notification, NotificationType
from tasknest.core.observable import Observable
from tasknest.core.service import Service

logger = structlog.get_logger(__name__)


class NotificationService(Service):
    """Toast notifications with optional auto-dismiss.

    Timed notifications are removed by id from a timer on the running
    event loop, so notifications with different lifetimes do not interfere.
    """

    def __init__(self, default_duration_ms: int = 3000) -> None:
        self._default_duration_ms = default_duration_ms
        self.notifications: Observable[list[Notification]] = Observable([])
        self._timers: dict[str, asyncio.TimerHandle] = {}

    async def on_stop(self) -> None:
        self._cancel_timers()

    def show(
        self,
        message: str,
        type: NotificationType = NotificationType.INFO,
        duration: int | None = None,
    ) -> Notification:
        """Add a notification. A positive duration (ms) schedules its removal.

        Removal runs on the current event loop. Called outside a running loop,
        the notification stays until dismissed.
        """
        if duration is None:
            duration = self._default_duration_ms

        loop: asyncio.AbstractEventLoop | None = None
        if duration > 0:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.debug("notification_timer_skipped", reason="no_running_loop")
                duration = 0

        notification = Notification(message=message, type=type, duration=duration)
        self.notifications.publish([*self.notifications.value, notification])

        if loop is not None:
            self._timers[notification.id] = loop.call_later(duration / 1000, self._expire, notification.id)
        return notification

    def success(self, message: str, duration: int | None = None) -> Notification:
        return self.show(message, NotificationType.SUCCESS, duration)

    def error(self, message: str, duration: int | None = None) -> Notification:
        return self.show(message, NotificationType.ERROR, duration)

    def info(self, message: str, duration: int | None = None) -> Notification:
        return self.show(message, NotificationType.INFO, duration)

    def warning(self, message: str, duration: int | None = None) -> Notification:
        return self.show(message, NotificationType.WARNING, duration)

    def remove(self, notification_id: str) -> None:
        """Dismiss a notification. Unknown or already expired ids are ignored."""
        timer = self._timers.pop(notification_id, None)
        if timer is not None:
            timer.cancel()
        current = self.notifications.value
        remaining = [n for n in current if n.id != notification_id]
        if len(remaining) != len(current):
            self.notifications.publish(remaining)

    def clear(self) -> None:
        self._cancel_timers()
        self.notifications.publish([])

    def _expire(self, notification_id: str) -> None:
        self._timers.pop(notification_id, None)
        self.remove(notification_id)
        logger.debug("notification_expired", notification_id=notification_id)

    def _cancel_timers(self) -> None:
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
