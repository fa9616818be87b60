"""Editable seed menu pushed to an empty backend on first load."""

from __future__ import annotations

_IMG = "https://images.unsplash.com/{photo}?q=80&w=600&auto=format&fit=crop"


def _item(name: str, category: str, price: float, description: str, photo: str) -> dict[str, object]:
    return {
        "name": name,
        "category": category,
        "price": price,
        "description": description,
        "is_available": True,
        "image_url": _IMG.format(photo=photo),
    }


SEED_MENU: list[dict[str, object]] = [
    # Beverages
    _item("Tea", "Beverages", 10, "Hot tea", "photo-1513635269975-59663e0ac1ad"),
    _item("Coffee", "Beverages", 10, "Hot coffee", "photo-1509042239860-f550ce710b93"),
    _item("Banana Shake (1L)", "Beverages", 90, "Creamy banana shake, 1 litre", "photo-1586201375754-1421e0aa2bcc"),
    _item("Masala Chai", "Beverages", 15, "Freshly brewed spiced tea", "photo-1564890369478-c89ca6d9cde9"),
    _item("Cold Coffee", "Beverages", 60, "Chilled coffee with ice", "photo-1485808191679-5f86510681a2"),
    # Cold Drinks
    _item("Coca-Cola 250ml", "Cold Drinks", 35, "Chilled Coke 250ml", "photo-1513558161293-cdaf765ed2fd"),
    _item("Coca-Cola 500ml", "Cold Drinks", 50, "Chilled Coke 500ml", "photo-1513558161293-cdaf765ed2fd"),
    _item("Sprite 500ml", "Cold Drinks", 50, "Lemon-lime soda 500ml", "photo-1582719478250-c89cae4dc85b"),
    _item("Fanta 500ml", "Cold Drinks", 50, "Orange soda 500ml", "photo-1600289031468-904c0b8ee1f0"),
    _item("Thums Up 500ml", "Cold Drinks", 50, "Strong cola 500ml", "photo-1624722213088-23c5321135a4"),
    # Chips
    _item("Lays Classic Salted", "Chips", 20, "Classic salted potato chips", "photo-1541599540903-216a46ca1dc0"),
    _item("Lays Magic Masala", "Chips", 20, "Spicy masala chips", "photo-1541599540903-216a46ca1dc0"),
    _item("Kurkure Masala Munch", "Chips", 20, "Masaledar crunchy snack", "photo-1541599540903-216a46ca1dc0"),
    _item("Bingo Mad Angles", "Chips", 20, "Tangy triangle chips", "photo-1541599540903-216a46ca1dc0"),
    # Fast Food
    _item("Veg Maggie", "Fast Food", 45, "Masala maggie with veggies", "photo-1604908812464-07f2b02ab0ad"),
    _item("Paneer Sandwich", "Fast Food", 70, "Grilled sandwich with paneer", "photo-1604908554007-43c8fb1a8c54"),
    _item("French Fries", "Fast Food", 65, "Crispy golden fries", "photo-1541599540903-216a46ca1dc0"),
]
