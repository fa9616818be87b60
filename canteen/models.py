"""Domain models for the canteen ordering client."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class CouponState(Enum):
    INACTIVE = "inactive"
    APPLIED = "applied"


class SubmitState(Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class NotificationKind(Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class MenuItem:
    """A menu entry as served by the backend."""

    id: str
    name: str
    category: str
    price: float
    description: str | None = None
    is_available: bool = True
    image_url: str | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> MenuItem:
        """Build a menu item from the backend's JSON representation."""
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            category=str(data.get("category") or ""),
            price=float(data.get("price") or 0),
            description=data.get("description") or None,
            is_available=bool(data.get("is_available", True)),
            image_url=data.get("image_url") or None,
        )


@dataclass
class CartLine:
    """One distinct menu item in the cart with its quantity."""

    item_id: str
    name: str
    price: float
    qty: int = 1

    @property
    def line_total(self) -> float:
        return self.price * self.qty


@dataclass(frozen=True)
class PricingSnapshot:
    """Derived totals for the current cart and coupon state."""

    subtotal: float
    discount: float
    delivery_fee: float
    total: float
    is_eligible_for_discount: bool


@dataclass(frozen=True)
class DeliveryForm:
    """Validated delivery details entered by the customer."""

    customer_name: str
    phone: str
    hostel: str
    room: str
    delivery_instructions: str = ""

    @classmethod
    def empty(cls) -> DeliveryForm:
        return cls(customer_name="", phone="", hostel="", room="")


@dataclass(frozen=True)
class OrderItem:
    item_id: str
    name: str
    qty: int
    price: float


@dataclass(frozen=True)
class OrderPayload:
    """Order body sent to the backend, fixed at submission time."""

    customer_name: str
    phone: str
    hostel: str
    room: str
    delivery_instructions: str
    items: tuple[OrderItem, ...]
    total_amount: float

    def to_json(self) -> dict[str, Any]:
        return {
            "customer_name": self.customer_name,
            "phone": self.phone,
            "hostel": self.hostel,
            "room": self.room,
            "delivery_instructions": self.delivery_instructions,
            "items": [
                {"item_id": item.item_id, "name": item.name, "qty": item.qty, "price": item.price}
                for item in self.items
            ],
            "total_amount": self.total_amount,
        }


@dataclass(frozen=True)
class OrderResult:
    """Outcome of a single submission attempt."""

    order_id: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.order_id is not None


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    message: str
    created_at: datetime = field(default_factory=_utc_now)
