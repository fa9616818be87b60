"""Delivery details entry modal screen."""

from __future__ import annotations

import re

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from canteen.models import DeliveryForm

_PHONE_PATTERN = re.compile(r"[0-9]{10}")

# (attribute, label, required)
_FIELDS: tuple[tuple[str, str, bool], ...] = (
    ("customer_name", "Your Name", True),
    ("phone", "Phone", True),
    ("hostel", "Hostel Name", True),
    ("room", "Room Number", True),
    ("delivery_instructions", "Delivery instructions (optional)", False),
)


def validate_form(values: dict[str, str]) -> str:
    """Return an error message for the first invalid field, or "" when valid."""
    for attr, label, required in _FIELDS:
        if required and not values.get(attr, "").strip():
            return f"{label} is required."
    if not _PHONE_PATTERN.fullmatch(values["phone"].strip()):
        return "Phone must be 10 digits."
    return ""


class CheckoutModal(ModalScreen[DeliveryForm | None]):
    """Collect delivery details before placing an order."""

    CSS = """
    CheckoutModal {
        align: center middle;
        background: $background 60%;
    }

    #checkout-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #checkout-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #checkout-fields {
        color: white;
        margin-bottom: 1;
    }

    #checkout-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #checkout-help {
        color: #dddddd;
    }
    """

    def __init__(self, draft: DeliveryForm | None = None) -> None:
        super().__init__()
        draft = draft or DeliveryForm.empty()
        self.values: dict[str, str] = {attr: getattr(draft, attr) for attr, _, _ in _FIELDS}
        self.cursor_index = 0
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="checkout-dialog"):
            yield Static("Delivery Details", id="checkout-title")
            yield Static(id="checkout-fields")
            yield Static(id="checkout-error")
            yield Static("Tab/↑/↓ move. Enter place order. Esc cancel.", id="checkout-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key == "escape":
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self._confirm()
            event.stop()
            return

        if event.key in {"tab", "down"}:
            self.cursor_index = (self.cursor_index + 1) % len(_FIELDS)
            self._refresh_content()
            event.stop()
            return

        if event.key in {"shift+tab", "up"}:
            self.cursor_index = (self.cursor_index - 1) % len(_FIELDS)
            self._refresh_content()
            event.stop()
            return

        attr = _FIELDS[self.cursor_index][0]
        if event.key == "backspace":
            if self.values[attr]:
                self.values[attr] = self.values[attr][:-1]
                self.error = ""
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            if attr == "phone" and (not event.character.isdigit() or len(self.values[attr]) >= 10):
                event.stop()
                return
            self.values[attr] += event.character
            self.error = ""
            self._refresh_content()
            event.stop()

    def _confirm(self) -> None:
        self.error = validate_form(self.values)
        if self.error:
            self._refresh_content()
            return

        self.dismiss(
            DeliveryForm(
                customer_name=self.values["customer_name"].strip(),
                phone=self.values["phone"].strip(),
                hostel=self.values["hostel"].strip(),
                room=self.values["room"].strip(),
                delivery_instructions=self.values["delivery_instructions"].strip(),
            )
        )

    def _refresh_content(self) -> None:
        fields = Text()
        for idx, (attr, label, _) in enumerate(_FIELDS):
            if idx > 0:
                fields.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            cursor = "|" if idx == self.cursor_index else ""
            fields.append(f"{pointer}{label}: ", style="bold white" if idx == self.cursor_index else "white")
            fields.append(f"{self.values[attr]}{cursor}")
        self.query_one("#checkout-fields", Static).update(fields)
        self.query_one("#checkout-error", Static).update(self.error or "")
