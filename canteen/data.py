"""Menu browsing helpers."""

from __future__ import annotations

from typing import Iterable

from canteen.models import MenuItem

ALL_CATEGORIES = "All"


def categories(menu: Iterable[MenuItem]) -> list[str]:
    """Return the category chips: "All" followed by categories in first-seen order."""
    seen: list[str] = []
    for item in menu:
        if item.category not in seen:
            seen.append(item.category)
    return [ALL_CATEGORIES, *seen]


def filter_menu(menu: list[MenuItem], category: str) -> list[MenuItem]:
    if category == ALL_CATEGORIES:
        return list(menu)
    return [item for item in menu if item.category == category]
