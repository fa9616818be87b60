"""Error taxonomy for coupon validation and backend calls."""

from __future__ import annotations

import math

from canteen.config import CURRENCY_SYMBOL, DISCOUNT_THRESHOLD


class CanteenError(Exception):
    """Base class for recoverable ordering errors."""


class CouponError(CanteenError):
    """A coupon could not be applied."""


class InvalidCouponError(CouponError):
    def __init__(self) -> None:
        super().__init__("Invalid coupon code")


class IneligibleDiscountError(CouponError):
    """The code is valid but the cart subtotal is below the threshold."""

    def __init__(self, amount_needed: float) -> None:
        self.amount_needed = amount_needed
        super().__init__(
            f"Min order {CURRENCY_SYMBOL}{DISCOUNT_THRESHOLD} required for this coupon "
            f"(add {CURRENCY_SYMBOL}{math.ceil(amount_needed)} more)"
        )


class BackendError(CanteenError):
    """A call to the canteen backend failed."""


class MenuLoadError(BackendError):
    pass


class OrderSubmissionError(BackendError):
    pass
