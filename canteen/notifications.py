"""Single-slot toast notifications with automatic expiry."""

from __future__ import annotations

import asyncio
from typing import Callable, Protocol

from canteen.config import NOTIFICATION_DURATION_SECONDS
from canteen.models import Notification, NotificationKind


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]
NotificationListener = Callable[[Notification | None], None]


class NotificationScheduler:
    """Shows at most one notification and clears it after a fixed duration.

    A new notification replaces the visible one and restarts the timer, so the
    latest message always wins and nothing is queued.

    Without an explicit timer factory the scheduler binds to the running
    asyncio loop when constructed, and raises RuntimeError if there is none.
    """

    def __init__(
        self,
        duration: float = NOTIFICATION_DURATION_SECONDS,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        self.duration = duration
        if timer_factory is None:
            timer_factory = asyncio.get_running_loop().call_later
        self._timer_factory = timer_factory
        self._timer: TimerHandle | None = None
        self._current: Notification | None = None
        self._listeners: list[NotificationListener] = []

    @property
    def current(self) -> Notification | None:
        return self._current

    def subscribe(self, listener: NotificationListener) -> None:
        self._listeners.append(listener)

    def notify(self, kind: NotificationKind, message: str) -> Notification:
        timer = self._timer_factory(self.duration, self._expire)
        self._cancel_timer()
        notification = Notification(kind=kind, message=message)
        self._timer = timer
        self._current = notification
        self._emit()
        return notification

    def success(self, message: str) -> Notification:
        return self.notify(NotificationKind.SUCCESS, message)

    def error(self, message: str) -> Notification:
        return self.notify(NotificationKind.ERROR, message)

    def close(self) -> None:
        """Cancel the pending timer and drop the visible notification."""
        self._cancel_timer()
        if self._current is not None:
            self._current = None
            self._emit()

    def _expire(self) -> None:
        self._timer = None
        self._current = None
        self._emit()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self._current)
