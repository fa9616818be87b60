"""Shared pytest fixtures for ordering tests."""
from __future__ import annotations

import asyncio
from typing import Callable

import pytest

from canteen.errors import OrderSubmissionError
from canteen.models import DeliveryForm, MenuItem, OrderPayload
from canteen.notifications import NotificationScheduler
from canteen.session import OrderingSession


class FakeTimer:
    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if not self.cancelled:
            self.callback()


class FakeClock:
    """Timer factory that records timers instead of scheduling them."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> FakeTimer:
        return self.timers[-1]


class FakeSink:
    """In-memory order sink; optionally fails or blocks until released."""

    def __init__(self, order_id: str = "ord-1", fail: bool = False, block: bool = False) -> None:
        self.order_id = order_id
        self.fail = fail
        self.payloads: list[OrderPayload] = []
        self.release = asyncio.Event() if block else None

    async def create_order(self, payload: OrderPayload) -> str:
        self.payloads.append(payload)
        if self.release is not None:
            await self.release.wait()
        if self.fail:
            raise OrderSubmissionError("backend returned 500")
        return self.order_id


def make_item(item_id: str, price: float, name: str | None = None, available: bool = True) -> MenuItem:
    return MenuItem(
        id=item_id,
        name=name or f"Item {item_id}",
        category="Fast Food",
        price=price,
        is_available=available,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def notifier(clock: FakeClock) -> NotificationScheduler:
    return NotificationScheduler(timer_factory=clock)


@pytest.fixture()
def sink() -> FakeSink:
    return FakeSink()


@pytest.fixture()
def session(sink: FakeSink, notifier: NotificationScheduler) -> OrderingSession:
    return OrderingSession(sink, notifier=notifier)


@pytest.fixture()
def form() -> DeliveryForm:
    return DeliveryForm(
        customer_name="Asha",
        phone="9876543210",
        hostel="Vivekanand",
        room="B-214",
        delivery_instructions="Call on arrival",
    )
