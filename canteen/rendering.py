"""Rendering helpers for menu, cart and totals."""

from __future__ import annotations

from rich.text import Text

from canteen.config import COUPON_CODE, CURRENCY_SYMBOL
from canteen.models import CartLine, MenuItem, Notification, NotificationKind, PricingSnapshot


def money(value: float) -> str:
    return f"{CURRENCY_SYMBOL}{value:.2f}"


def category_chip_style(active: bool) -> str:
    if active:
        return "bold #ffffff on #2563eb"
    return "#334155 on #e2e8f0"


def format_category_chips(categories: list[str], active: str) -> Text:
    text = Text()
    for idx, category in enumerate(categories):
        if idx > 0:
            text.append(" ")
        text.append(f" {category} ", style=category_chip_style(category == active))
    return text


def format_menu_item(item: MenuItem) -> Text:
    """Render a menu row: name, category, price and availability."""
    text = Text()
    text.append(item.name, style="bold")
    text.append(f"  {item.category}", style="dim")
    text.append(f"  {money(item.price)}", style="bold #2563eb")
    if item.is_available:
        text.append("  Available 24x7", style="#16a34a")
    else:
        text.append("  Currently Unavailable", style="#ef4444")
    return text


def format_cart_line(line: CartLine) -> Text:
    text = Text()
    text.append(line.name)
    text.append(f"  {money(line.price)} × {line.qty}", style="dim")
    return text


def format_totals(snapshot: PricingSnapshot) -> Text:
    text = Text()
    text.append(f"Subtotal  {money(snapshot.subtotal)}\n")
    if snapshot.discount > 0:
        text.append(f"Coupon ({COUPON_CODE})  -{money(snapshot.discount)}\n", style="#15803d")
    text.append(f"Delivery  {money(snapshot.delivery_fee)}\n")
    text.append(f"Total  {money(snapshot.total)}", style="bold")
    return text


def format_notification(notification: Notification | None) -> Text:
    if notification is None:
        return Text("")
    if notification.kind is NotificationKind.ERROR:
        return Text(f" {notification.message} ", style="bold #ffffff on #dc2626")
    return Text(f" {notification.message} ", style="bold #ffffff on #0f172a")
