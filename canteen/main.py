"""Entry point for the canteen ordering Textual app."""

from __future__ import annotations

from canteen.canteen_app import CanteenApp


def main() -> None:
    """Run the Textual application."""
    CanteenApp().run()


if __name__ == "__main__":
    main()
