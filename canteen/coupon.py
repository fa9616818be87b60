"""Coupon state machine reacting to cart changes."""

from __future__ import annotations

from canteen import pricing
from canteen.cart import CartStore
from canteen.config import COUPON_CODE, CURRENCY_SYMBOL, DISCOUNT_THRESHOLD
from canteen.errors import CouponError, IneligibleDiscountError, InvalidCouponError
from canteen.models import CouponState
from canteen.notifications import NotificationScheduler

COUPON_APPLIED_MESSAGE = "Coupon applied! 20% off"
COUPON_REVOKED_MESSAGE = f"Coupon removed (min {CURRENCY_SYMBOL}{DISCOUNT_THRESHOLD} not met)"


def normalize_code(code: str) -> str:
    return code.strip().upper()


class CouponValidator:
    """Tracks whether the discount is active for the current cart.

    The validator subscribes to the cart and drops an applied coupon as soon
    as a mutation pushes the subtotal under the threshold.
    """

    def __init__(self, cart: CartStore, notifier: NotificationScheduler) -> None:
        self._cart = cart
        self._notifier = notifier
        self._state = CouponState.INACTIVE
        cart.subscribe(self._on_cart_changed)

    @property
    def state(self) -> CouponState:
        return self._state

    @property
    def is_applied(self) -> bool:
        return self._state is CouponState.APPLIED

    def matches(self, code: str) -> bool:
        return normalize_code(code) == COUPON_CODE

    def apply_coupon(self, code: str) -> CouponState:
        try:
            self._validate(code)
        except CouponError as exc:
            self._state = CouponState.INACTIVE
            self._notifier.error(str(exc))
            return self._state

        self._state = CouponState.APPLIED
        self._notifier.success(COUPON_APPLIED_MESSAGE)
        return self._state

    def reset(self) -> None:
        self._state = CouponState.INACTIVE

    def _validate(self, code: str) -> None:
        if not self.matches(code):
            raise InvalidCouponError()
        amount = pricing.subtotal(self._cart.lines)
        if not pricing.is_eligible_for_discount(amount):
            raise IneligibleDiscountError(pricing.amount_needed_for_discount(amount))

    def _on_cart_changed(self, cart: CartStore) -> None:
        if self._state is not CouponState.APPLIED:
            return
        if pricing.is_eligible_for_discount(pricing.subtotal(cart.lines)):
            return
        self._state = CouponState.INACTIVE
        self._notifier.error(COUPON_REVOKED_MESSAGE)
