"""Browsing helpers over restaurant and menu listings"""

from typing import Optional

from ..models.cart import Cart
from ..models.restaurant import Restaurant, MenuItem

ALL = "All"


def cuisines(restaurants: list[Restaurant]) -> list[str]:
    """Cuisine filter options, in first-seen order"""
    seen = dict.fromkeys(r.cuisine for r in restaurants if r.cuisine)
    return [ALL, *seen]


def filter_restaurants(
    restaurants: list[Restaurant],
    search: Optional[str] = None,
    cuisine: Optional[str] = None,
) -> list[Restaurant]:
    """
    Filter restaurants the way the home page does.

    Search matches the name or cuisine, case-insensitively.
    """
    results = restaurants

    # Filter by cuisine
    if cuisine and cuisine != ALL:
        results = [r for r in results if r.cuisine == cuisine]

    # Filter by search query
    if search:
        search_lower = search.lower()
        results = [
            r for r in results
            if search_lower in r.name.lower() or search_lower in (r.cuisine or "").lower()
        ]

    return results


def menu_categories(menu: list[MenuItem]) -> list[str]:
    seen = dict.fromkeys(m.category for m in menu if m.category)
    return [ALL, *seen]


def filter_menu(menu: list[MenuItem], category: Optional[str] = None) -> list[MenuItem]:
    if not category or category == ALL:
        return menu
    return [m for m in menu if m.category == category]


def quantity_in_cart(cart: Cart, item_id) -> int:
    """How many of a menu item the cart holds (0 if none)"""
    line = cart.find_line(item_id)
    return line.quantity if line else 0
