from __future__ import annotations

import asyncio

import pytest
from conftest import FakeSink, make_item

from canteen.models import CouponState, DeliveryForm, NotificationKind, SubmitState
from canteen.session import OrderingSession


def _fill_350(session: OrderingSession) -> None:
    session.add_item(make_item("thali", 200, name="Thali"))
    session.add_item(make_item("biryani", 150, name="Biryani"))


@pytest.mark.asyncio
async def test_empty_cart_submission_is_refused(session: OrderingSession, sink: FakeSink, form: DeliveryForm) -> None:
    assert not session.submitter.can_submit

    result = await session.place_order(form)

    assert result is None
    assert sink.payloads == []
    assert session.submitter.state is SubmitState.IDLE


@pytest.mark.asyncio
async def test_payload_uses_rounded_total(session: OrderingSession, sink: FakeSink, form: DeliveryForm) -> None:
    _fill_350(session)

    result = await session.place_order(form)

    assert result.ok
    payload = sink.payloads[0]
    assert payload.total_amount == 360.00
    assert payload.to_json() == {
        "customer_name": "Asha",
        "phone": "9876543210",
        "hostel": "Vivekanand",
        "room": "B-214",
        "delivery_instructions": "Call on arrival",
        "items": [
            {"item_id": "thali", "name": "Thali", "qty": 1, "price": 200},
            {"item_id": "biryani", "name": "Biryani", "qty": 1, "price": 150},
        ],
        "total_amount": 360.0,
    }


@pytest.mark.asyncio
async def test_discounted_total_is_sent(session: OrderingSession, sink: FakeSink, form: DeliveryForm) -> None:
    _fill_350(session)
    session.apply_coupon("RTU20")

    await session.place_order(form)

    assert sink.payloads[0].total_amount == 290.0


@pytest.mark.asyncio
async def test_success_clears_cart_coupon_and_form(session: OrderingSession, form: DeliveryForm) -> None:
    _fill_350(session)
    session.apply_coupon("rtu20")

    result = await session.place_order(form)

    assert result.order_id == "ord-1"
    assert session.cart.is_empty
    assert session.coupon.state is CouponState.INACTIVE
    assert session.coupon_text == ""
    assert session.form == DeliveryForm.empty()
    assert session.notifier.current.kind is NotificationKind.SUCCESS
    assert session.notifier.current.message == "Order placed! ID: ord-1"
    assert session.submitter.state is SubmitState.IDLE
    assert session.pricing.total == 0


@pytest.mark.asyncio
async def test_failure_leaves_state_untouched(notifier, form: DeliveryForm) -> None:
    session = OrderingSession(FakeSink(fail=True), notifier=notifier)
    _fill_350(session)
    session.apply_coupon("RTU20")
    lines_before = session.cart.lines

    result = await session.place_order(form)

    assert not result.ok
    assert "500" in result.error
    assert session.cart.lines == lines_before
    assert session.coupon.state is CouponState.APPLIED
    assert session.coupon_text == "RTU20"
    assert session.form == form
    assert session.notifier.current.kind is NotificationKind.ERROR
    assert session.notifier.current.message == "Could not place order. Try again."
    assert session.submitter.state is SubmitState.IDLE


@pytest.mark.asyncio
async def test_retry_after_failure_succeeds(notifier, form: DeliveryForm) -> None:
    sink = FakeSink(fail=True)
    session = OrderingSession(sink, notifier=notifier)
    _fill_350(session)

    await session.place_order(form)
    sink.fail = False
    result = await session.place_order(form)

    assert result.ok
    assert len(sink.payloads) == 2
    assert session.cart.is_empty


@pytest.mark.asyncio
async def test_only_one_request_in_flight(notifier, form: DeliveryForm) -> None:
    sink = FakeSink(block=True)
    session = OrderingSession(sink, notifier=notifier)
    _fill_350(session)

    first = asyncio.create_task(session.place_order(form))
    await asyncio.sleep(0)

    assert session.submitter.state is SubmitState.SUBMITTING
    assert not session.submitter.can_submit
    assert await session.place_order(form) is None

    session.cart.add(make_item("tea", 10))
    session.cart.remove("thali")
    assert [line.item_id for line in session.cart.lines] == ["thali", "biryani"]

    sink.release.set()
    result = await first

    assert result.ok
    assert len(sink.payloads) == 1
    assert sink.payloads[0].total_amount == 360.0
    assert session.submitter.state is SubmitState.IDLE


def test_unavailable_items_are_not_added(session: OrderingSession) -> None:
    added = session.add_item(make_item("shake", 90, available=False))

    assert not added
    assert session.cart.is_empty
