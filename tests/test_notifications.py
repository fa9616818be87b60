from __future__ import annotations

from typing import Callable

import pytest
from conftest import FakeClock, FakeSink, FakeTimer, make_item

from canteen.models import Notification, NotificationKind
from canteen.notifications import NotificationScheduler
from canteen.session import OrderingSession


def test_notification_expires_after_duration(notifier: NotificationScheduler, clock: FakeClock) -> None:
    notifier.success("Tea added to cart")

    assert notifier.current.message == "Tea added to cart"
    assert clock.last.delay == 2.5

    clock.last.fire()

    assert notifier.current is None


def test_latest_notification_wins(notifier: NotificationScheduler, clock: FakeClock) -> None:
    notifier.success("first")
    first_timer = clock.last
    notifier.error("second")

    assert first_timer.cancelled
    assert notifier.current.kind is NotificationKind.ERROR
    assert notifier.current.message == "second"

    first_timer.fire()
    assert notifier.current.message == "second"

    clock.last.fire()
    assert notifier.current is None


def test_listeners_see_every_change(notifier: NotificationScheduler, clock: FakeClock) -> None:
    seen: list[Notification | None] = []
    notifier.subscribe(seen.append)

    notifier.success("hello")
    clock.last.fire()

    assert [n.message if n else None for n in seen] == ["hello", None]


def test_close_cancels_pending_timer(notifier: NotificationScheduler, clock: FakeClock) -> None:
    notifier.error("boom")

    notifier.close()

    assert clock.last.cancelled
    assert notifier.current is None


def test_default_timer_needs_running_loop_at_construction() -> None:
    with pytest.raises(RuntimeError):
        NotificationScheduler()
    with pytest.raises(RuntimeError):
        OrderingSession(FakeSink())


@pytest.mark.asyncio
async def test_default_timer_uses_running_loop() -> None:
    session = OrderingSession(FakeSink())

    session.add_item(make_item("tea", 10, name="Tea"))

    assert [(line.item_id, line.qty) for line in session.cart.lines] == [("tea", 1)]
    assert session.notifier.current.message == "Tea added to cart"
    session.close()
    assert session.notifier.current is None


def test_failing_timer_keeps_previous_notification() -> None:
    clock = FakeClock()
    calls = {"n": 0}

    def flaky(delay: float, callback: Callable[[], None]) -> FakeTimer:
        calls["n"] += 1
        if calls["n"] > 1:
            raise RuntimeError("timer unavailable")
        return clock(delay, callback)

    notifier = NotificationScheduler(timer_factory=flaky)
    notifier.success("first")

    with pytest.raises(RuntimeError):
        notifier.error("second")

    assert notifier.current.message == "first"
    assert not clock.last.cancelled
