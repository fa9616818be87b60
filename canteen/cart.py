"""Cart line ownership and mutation."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator

from canteen.models import CartLine, MenuItem
from canteen.notifications import NotificationScheduler

CartListener = Callable[["CartStore"], None]


class CartStore:
    """Owns the cart lines and notifies listeners after every mutation.

    Listeners run synchronously before the mutating call returns, so anything
    derived from the cart (coupon eligibility in particular) is settled by the
    time the caller reads it again.
    """

    def __init__(self, notifier: NotificationScheduler) -> None:
        self._notifier = notifier
        self._lines: list[CartLine] = []
        self._listeners: list[CartListener] = []
        self._frozen = False

    @property
    def lines(self) -> list[CartLine]:
        return [CartLine(line.item_id, line.name, line.price, line.qty) for line in self._lines]

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._lines)

    def get(self, item_id: str) -> CartLine | None:
        line = self._find(item_id)
        if line is None:
            return None
        return CartLine(line.item_id, line.name, line.price, line.qty)

    def subscribe(self, listener: CartListener) -> None:
        self._listeners.append(listener)

    def add(self, item: MenuItem) -> None:
        """Add one unit of a menu item. Callers must only add available items."""
        if self._frozen:
            return
        line = self._find(item.id)
        if line is None:
            self._lines.append(CartLine(item_id=item.id, name=item.name, price=item.price, qty=1))
        else:
            line.qty += 1
        self._changed()
        self._notifier.success(f"{item.name} added to cart")

    def increment(self, item_id: str) -> None:
        if self._frozen:
            return
        line = self._find(item_id)
        if line is None:
            return
        line.qty += 1
        self._changed()

    def decrement(self, item_id: str) -> None:
        if self._frozen:
            return
        line = self._find(item_id)
        if line is None:
            return
        if line.qty > 1:
            line.qty -= 1
        else:
            self._lines.remove(line)
        self._changed()

    def remove(self, item_id: str) -> None:
        if self._frozen:
            return
        line = self._find(item_id)
        if line is None:
            return
        self._lines.remove(line)
        self._changed()

    def clear(self) -> None:
        if self._frozen or not self._lines:
            return
        self._lines.clear()
        self._changed()

    @contextmanager
    def frozen(self) -> Iterator[None]:
        """Ignore every mutation while an order request is in flight."""
        previous = self._frozen
        self._frozen = True
        try:
            yield
        finally:
            self._frozen = previous

    def _find(self, item_id: str) -> CartLine | None:
        for line in self._lines:
            if line.item_id == item_id:
                return line
        return None

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self)
