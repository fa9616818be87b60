"""Order submission lifecycle."""

from __future__ import annotations

from typing import Callable, Protocol

from canteen import pricing
from canteen.cart import CartStore
from canteen.coupon import CouponValidator
from canteen.errors import OrderSubmissionError
from canteen.models import DeliveryForm, OrderItem, OrderPayload, OrderResult, SubmitState
from canteen.notifications import NotificationScheduler

ORDER_FAILED_MESSAGE = "Could not place order. Try again."


class OrderSink(Protocol):
    async def create_order(self, payload: OrderPayload) -> str: ...


class OrderSubmitter:
    """Turns the current cart into a submitted order, one request at a time."""

    def __init__(
        self,
        cart: CartStore,
        coupon: CouponValidator,
        notifier: NotificationScheduler,
        sink: OrderSink,
        reset_inputs: Callable[[], None] | None = None,
    ) -> None:
        self._cart = cart
        self._coupon = coupon
        self._notifier = notifier
        self._sink = sink
        self._reset_inputs = reset_inputs
        self._state = SubmitState.IDLE

    @property
    def state(self) -> SubmitState:
        return self._state

    @property
    def is_submitting(self) -> bool:
        return self._state is SubmitState.SUBMITTING

    @property
    def can_submit(self) -> bool:
        return self._state is SubmitState.IDLE and not self._cart.is_empty

    def build_payload(self, form: DeliveryForm) -> OrderPayload:
        """Snapshot the form, cart lines and total into an order body."""
        lines = self._cart.lines
        snapshot = pricing.price(lines, self._coupon.is_applied)
        return OrderPayload(
            customer_name=form.customer_name,
            phone=form.phone,
            hostel=form.hostel,
            room=form.room,
            delivery_instructions=form.delivery_instructions or "",
            items=tuple(
                OrderItem(item_id=line.item_id, name=line.name, qty=line.qty, price=line.price)
                for line in lines
            ),
            total_amount=pricing.round_amount(snapshot.total),
        )

    async def submit(self, form: DeliveryForm) -> OrderResult | None:
        """Place an order; returns None when the submission is refused."""
        if not self.can_submit:
            return None

        payload = self.build_payload(form)
        self._state = SubmitState.SUBMITTING
        try:
            with self._cart.frozen():
                order_id = await self._sink.create_order(payload)
        except OrderSubmissionError as exc:
            self._state = SubmitState.FAILED
            self._notifier.error(ORDER_FAILED_MESSAGE)
            self._state = SubmitState.IDLE
            return OrderResult(error=str(exc))
        except BaseException:
            self._state = SubmitState.IDLE
            raise

        self._state = SubmitState.SUCCEEDED
        # Coupon first so clearing the cart does not report an auto-revocation.
        self._coupon.reset()
        self._cart.clear()
        if self._reset_inputs is not None:
            self._reset_inputs()
        self._notifier.success(f"Order placed! ID: {order_id}")
        self._state = SubmitState.IDLE
        return OrderResult(order_id=order_id)
