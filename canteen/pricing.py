"""Pricing rules derived from the cart and coupon state."""

from __future__ import annotations

from typing import Iterable

from canteen.config import DELIVERY_FEE, DISCOUNT_RATE, DISCOUNT_THRESHOLD
from canteen.models import CartLine, PricingSnapshot


def subtotal(lines: Iterable[CartLine]) -> float:
    """Sum of price times quantity across all lines."""
    return sum((line.line_total for line in lines), 0.0)


def is_eligible_for_discount(amount: float) -> bool:
    return amount >= DISCOUNT_THRESHOLD


def amount_needed_for_discount(amount: float) -> float:
    """How much more the cart needs before the coupon can apply."""
    return max(0.0, DISCOUNT_THRESHOLD - amount)


def price(lines: Iterable[CartLine], coupon_applied: bool) -> PricingSnapshot:
    """Compute a fresh pricing snapshot.

    Values are left unrounded; round with `round_amount` only when displaying
    or building an order payload.
    """
    sub = subtotal(lines)
    eligible = is_eligible_for_discount(sub)
    discount = sub * DISCOUNT_RATE if coupon_applied and eligible else 0.0
    delivery_fee = float(DELIVERY_FEE) if sub > 0 else 0.0
    total = max(0.0, sub - discount + delivery_fee)
    return PricingSnapshot(
        subtotal=sub,
        discount=discount,
        delivery_fee=delivery_fee,
        total=total,
        is_eligible_for_discount=eligible,
    )


def round_amount(value: float) -> float:
    return round(value, 2)
