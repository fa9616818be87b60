"""Wiring of cart, coupon, pricing, submission and notifications for one user session."""

from __future__ import annotations

from canteen import pricing
from canteen.cart import CartStore
from canteen.coupon import CouponValidator
from canteen.models import CouponState, DeliveryForm, MenuItem, OrderResult, PricingSnapshot
from canteen.notifications import NotificationScheduler
from canteen.ordering import OrderSink, OrderSubmitter


class OrderingSession:
    """Owns every piece of ordering state behind a narrow API.

    The coupon text field and the delivery form draft live here because a
    successful order resets them together with the cart and coupon.
    Without an explicit notifier one bound to the running event loop is
    created, so construction fails outside a loop rather than mid-mutation.
    """

    def __init__(self, sink: OrderSink, notifier: NotificationScheduler | None = None) -> None:
        self.notifier = notifier or NotificationScheduler()
        self.cart = CartStore(self.notifier)
        self.coupon = CouponValidator(self.cart, self.notifier)
        self.submitter = OrderSubmitter(
            self.cart,
            self.coupon,
            self.notifier,
            sink,
            reset_inputs=self._reset_inputs,
        )
        self.coupon_text = ""
        self.form = DeliveryForm.empty()

    @property
    def pricing(self) -> PricingSnapshot:
        return pricing.price(self.cart.lines, self.coupon.is_applied)

    @property
    def amount_needed_for_coupon(self) -> float | None:
        """Remaining amount shown while the typed code is valid but the cart is too small."""
        if not self.coupon.matches(self.coupon_text):
            return None
        snapshot = self.pricing
        if snapshot.is_eligible_for_discount:
            return None
        return pricing.amount_needed_for_discount(snapshot.subtotal)

    def add_item(self, item: MenuItem) -> bool:
        """Add an available item; unavailable items are refused."""
        if not item.is_available:
            return False
        self.cart.add(item)
        return True

    def apply_coupon(self, code: str | None = None) -> CouponState:
        if code is not None:
            self.coupon_text = code
        return self.coupon.apply_coupon(self.coupon_text)

    async def place_order(self, form: DeliveryForm) -> OrderResult | None:
        self.form = form
        return await self.submitter.submit(form)

    def close(self) -> None:
        self.notifier.close()

    def _reset_inputs(self) -> None:
        self.coupon_text = ""
        self.form = DeliveryForm.empty()
