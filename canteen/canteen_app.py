"""Main Textual app class."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.timer import Timer
from textual.widgets import Header, Static

from canteen.api import BackendClient
from canteen.checkout_modal import CheckoutModal
from canteen.config import COUPON_CODE, CURRENCY_SYMBOL, DEBUG_LOG_PATH, DISCOUNT_THRESHOLD
from canteen.data import ALL_CATEGORIES, categories, filter_menu
from canteen.errors import MenuLoadError
from canteen.models import DeliveryForm, MenuItem, Notification
from canteen.notifications import NotificationScheduler, TimerHandle
from canteen.rendering import (
    format_cart_line,
    format_category_chips,
    format_menu_item,
    format_notification,
    format_totals,
)
from canteen.session import OrderingSession


class _TextualTimerHandle:
    """Lets the notification scheduler cancel a Textual timer."""

    def __init__(self, timer: Timer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class CanteenApp(App):
    """A Textual app for browsing the canteen menu and placing delivery orders."""

    TITLE = "RTU Kota Canteen"
    SUB_TITLE = "24x7 delivery to RTU hostels"

    CSS = """
    Screen {
        layout: vertical;
    }

    #promo-bar {
        height: 1;
        background: #4f46e5;
        color: white;
        content-align: center middle;
    }

    #main-layout {
        height: 1fr;
    }

    #menu-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #cart-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #categories {
        height: 1;
        margin-bottom: 1;
    }

    #menu-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #coupon-bar {
        border: heavy $secondary;
        padding: 0 1;
        height: 4;
    }

    #totals {
        height: auto;
        margin-top: 1;
    }

    #status {
        height: 1;
        margin-top: 1;
    }

    #toast {
        height: 1;
        content-align: center middle;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    category = reactive(ALL_CATEGORIES)
    menu_index = reactive(0)
    cart_index = reactive(None)

    BINDINGS = [
        ("up", "move_menu(-1)", "Previous item"),
        ("down", "move_menu(1)", "Next item"),
        ("left", "cycle_category(-1)", "Previous category"),
        ("right", "cycle_category(1)", "Next category"),
        ("enter", "confirm", "Add / Apply"),
        ("backspace", "backspace_coupon", "Delete coupon char"),
        ("escape", "cancel_active_mode", "Leave coupon entry"),
        Binding("ctrl+s", "place_order", "Place Order", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, client: BackendClient | None = None, session: OrderingSession | None = None) -> None:
        super().__init__()
        self.client = client or BackendClient()
        self.session = session or OrderingSession(
            self.client, notifier=NotificationScheduler(timer_factory=self._start_timer)
        )
        self.menu: list[MenuItem] = []
        self.menu_loading = True
        self.system_status = ""
        self._debug_log_path = Path(DEBUG_LOG_PATH)
        self._log_debug("app_init")

    def _start_timer(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return _TextualTimerHandle(self.set_timer(delay, callback))

    def _log_debug(self, message: str) -> None:
        try:
            ts = datetime.now(timezone.utc).isoformat()
            self._debug_log_path.parent.mkdir(parents=True, exist_ok=True)
            with self._debug_log_path.open("a", encoding="utf-8") as fh:
                fh.write(f"{ts} {message}\n")
        except Exception:
            # Logging must never interfere with app flow.
            return

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(
            f"Special Offer • Use code {COUPON_CODE} to get 20% OFF on orders above {CURRENCY_SYMBOL}{DISCOUNT_THRESHOLD}",
            id="promo-bar",
        )
        with Horizontal(id="main-layout"):
            with Vertical(id="menu-pane"):
                yield Static(id="categories")
                yield Static("Loading menu...", id="menu-list")
            with Vertical(id="cart-pane"):
                yield Static("Your Cart", classes="pane-title")
                yield Static(id="cart-list")
                yield Static(id="coupon-bar")
                yield Static(id="totals")
                yield Static(id="status")
        yield Static(id="toast")

    def on_mount(self) -> None:
        self.session.notifier.subscribe(self._on_notification)
        self._refresh_all()
        self.run_worker(self._load_menu(), exclusive=True, group="menu")

    async def on_unmount(self) -> None:
        self.session.close()
        await self.client.close()

    async def _load_menu(self) -> None:
        self.menu_loading = True
        self._refresh_menu()
        try:
            self.menu = await self.client.load_menu()
            self._log_debug(f"menu_loaded items={len(self.menu)}")
        except MenuLoadError as exc:
            self._log_debug(f"menu_load_failed error={exc!r}")
            self.session.notifier.error("Unable to load menu. Please try again.")
        finally:
            self.menu_loading = False
            self.menu_index = 0
            self._refresh_menu()

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, CheckoutModal):
            return
        if not event.is_printable or not event.character:
            return

        if self.input_state == "coupon":
            self.session.coupon_text += event.character
            self._refresh_coupon()
            event.stop()
            return

        key = event.character.lower()
        if key == "c":
            self.input_state = "coupon"
            self._refresh_coupon()
            event.stop()
            return

        if key == "j":
            self._move_cart_selection(1)
            event.stop()
            return

        if key == "k":
            self._move_cart_selection(-1)
            event.stop()
            return

        line_id = self._selected_line_id()
        if line_id is None:
            return
        if key in {"+", "=", "-", "d"} and self._cart_locked():
            event.stop()
            return

        if key in {"+", "="}:
            self.session.cart.increment(line_id)
        elif key == "-":
            self.session.cart.decrement(line_id)
        elif key == "d":
            self.session.cart.remove(line_id)
        else:
            return
        self._log_debug(f"cart_{key} item={line_id} lines={len(self.session.cart)}")
        self._refresh_cart()
        event.stop()

    def action_move_menu(self, delta: int) -> None:
        if isinstance(self.screen, CheckoutModal):
            return
        items = self._visible_menu()
        if not items:
            self.menu_index = 0
            return
        self.menu_index = (self.menu_index + delta) % len(items)
        self._refresh_menu()

    def action_cycle_category(self, delta: int) -> None:
        if isinstance(self.screen, CheckoutModal):
            return
        chips = categories(self.menu)
        current = chips.index(self.category) if self.category in chips else 0
        self.category = chips[(current + delta) % len(chips)]
        self.menu_index = 0
        self._refresh_menu()

    def action_confirm(self) -> None:
        if isinstance(self.screen, CheckoutModal):
            return
        if self.input_state == "coupon":
            state = self.session.apply_coupon()
            self._log_debug(f"coupon_apply code={self.session.coupon_text!r} state={state.value}")
            self.input_state = "normal"
            self._refresh_cart()
            return

        items = self._visible_menu()
        if not items:
            return
        if self._cart_locked():
            return
        item = items[min(self.menu_index, len(items) - 1)]
        if not self.session.add_item(item):
            self.system_status = f"{item.name} is currently unavailable"
            self._refresh_status()
            return
        self._log_debug(f"cart_add item={item.id} lines={len(self.session.cart)}")
        if self.cart_index is None:
            self.cart_index = 0
        self._refresh_cart()

    def action_backspace_coupon(self) -> None:
        if isinstance(self.screen, CheckoutModal):
            return
        if self.input_state != "coupon" or not self.session.coupon_text:
            return
        self.session.coupon_text = self.session.coupon_text[:-1]
        self._refresh_coupon()

    def action_cancel_active_mode(self) -> None:
        if isinstance(self.screen, CheckoutModal):
            return
        if self.input_state == "normal":
            return
        self.input_state = "normal"
        self._refresh_coupon()

    def action_place_order(self) -> None:
        self._log_debug(
            f"submit_enter lines={len(self.session.cart)} state={self.session.submitter.state.value} "
            f"screen={type(self.screen).__name__}"
        )
        if isinstance(self.screen, CheckoutModal):
            self._log_debug("submit_blocked reason=checkout_modal")
            return
        if self.session.submitter.is_submitting:
            self._log_debug("submit_blocked reason=in_flight")
            return
        if self.session.cart.is_empty:
            self.system_status = "Nothing to order yet"
            self._refresh_status()
            self._log_debug("submit_blocked reason=empty_cart")
            return
        self.push_screen(CheckoutModal(self.session.form), callback=self._on_checkout_done)

    def _on_checkout_done(self, form: DeliveryForm | None) -> None:
        if form is None:
            self._log_debug("submit_cancelled")
            return
        self.run_worker(self._submit_order(form), exclusive=True, group="order")

    async def _submit_order(self, form: DeliveryForm) -> None:
        self.system_status = "Placing order..."
        self._refresh_status()
        result = await self.session.place_order(form)
        if result is None:
            self._log_debug("submit_refused")
        elif result.ok:
            self._log_debug(f"submit_succeeded order_id={result.order_id}")
            self.cart_index = None
        else:
            self._log_debug(f"submit_failed error={result.error!r}")
        self.system_status = ""
        self._refresh_cart()

    def _cart_locked(self) -> bool:
        if not self.session.cart.is_frozen:
            return False
        self.system_status = "Order in progress, cart is locked"
        self._refresh_status()
        self._log_debug("cart_blocked reason=in_flight")
        return True

    def _on_notification(self, notification: Notification | None) -> None:
        try:
            toast = self.query_one("#toast", Static)
        except NoMatches:
            return
        toast.update(format_notification(notification))

    def _visible_menu(self) -> list[MenuItem]:
        return filter_menu(self.menu, self.category)

    def _selected_line_id(self) -> str | None:
        lines = self.session.cart.lines
        if self.cart_index is None or not (0 <= self.cart_index < len(lines)):
            return None
        return lines[self.cart_index].item_id

    def _move_cart_selection(self, delta: int) -> None:
        count = len(self.session.cart)
        if not count:
            return
        if self.cart_index is None:
            self.cart_index = 0 if delta > 0 else count - 1
        else:
            self.cart_index = (self.cart_index + delta) % count
        self._refresh_cart()

    def _refresh_all(self) -> None:
        self._refresh_menu()
        self._refresh_cart()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_menu(self) -> None:
        try:
            chips_widget = self.query_one("#categories", Static)
            menu_widget = self.query_one("#menu-list", Static)
        except NoMatches:
            return
        chips_widget.update(format_category_chips(categories(self.menu), self.category))

        if self.menu_loading:
            menu_widget.update("Loading menu...")
            return
        items = self._visible_menu()
        if not items:
            menu_widget.update("No items")
            return

        # Each menu entry takes two rows: the summary and its description.
        visible_rows = max(1, self._visible_rows(menu_widget) // 2)
        start, end = self._window_bounds(len(items), visible_rows, self.menu_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")
        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            pointer = "➤ " if idx == self.menu_index else "  "
            lines.append(pointer)
            lines.append_text(format_menu_item(items[idx]))
            lines.append(f"\n    {items[idx].description or ''}", style="dim")
        if end < len(items):
            lines.append("\n⋮", style="dim")
        menu_widget.update(lines)

    def _refresh_cart(self) -> None:
        try:
            cart_widget = self.query_one("#cart-list", Static)
        except NoMatches:
            return

        cart_lines = self.session.cart.lines
        if not cart_lines:
            self.cart_index = None
            cart_widget.update("No items yet. Add something tasty!")
        else:
            if self.cart_index is not None and self.cart_index >= len(cart_lines):
                self.cart_index = len(cart_lines) - 1
            lines = Text()
            for idx, line in enumerate(cart_lines):
                if idx > 0:
                    lines.append("\n")
                pointer = "➤ " if idx == self.cart_index else "  "
                lines.append(pointer)
                lines.append_text(format_cart_line(line))
            cart_widget.update(lines)

        self._refresh_coupon()
        self.query_one("#totals", Static).update(format_totals(self.session.pricing))
        self._refresh_status()

    def _refresh_coupon(self) -> None:
        try:
            bar = self.query_one("#coupon-bar", Static)
        except NoMatches:
            return
        text = Text()
        if self.input_state == "coupon":
            text.append(f"Coupon: {self.session.coupon_text}|", style="bold")
        else:
            text.append(f"Coupon: {self.session.coupon_text or '(press C to enter)'}")

        if self.session.coupon.is_applied:
            text.append("\nCoupon applied: 20% off on subtotal", style="#16a34a")
        needed = self.session.amount_needed_for_coupon
        if needed is not None:
            text.append(f"\nAdd items worth {CURRENCY_SYMBOL}{math.ceil(needed)} more to use this coupon", style="#d97706")
        bar.update(text)

    def _refresh_status(self) -> None:
        try:
            status = self.query_one("#status", Static)
        except NoMatches:
            return
        if self.session.submitter.is_submitting:
            status.update(self.system_status or "Placing order...")
            return
        hint = "Ctrl+S place order" if self.session.submitter.can_submit else "Add items to place an order"
        status.update(self.system_status or hint)
