"""In-memory cart store for one client"""

import logging
from decimal import Decimal
from typing import Optional

from ..models.cart import Cart, CartLine, BillSummary
from ..models.order import PaymentMethod, PlaceOrderRequest, OrderItemRequest
from ..models.restaurant import MenuItem

logger = logging.getLogger(__name__)

CONFLICT_PROMPT = "Your cart has items from another restaurant. Clear cart and add new item?"


class CartStore:
    """
    Holds the single in-progress order draft.

    All lines belong to one restaurant. Adding an item from another
    restaurant is refused unless the caller passes replace=True after
    asking the user; the store itself never prompts.
    """

    def __init__(self):
        self.cart = Cart()

    @property
    def restaurant_id(self):
        return self.cart.restaurant_id

    @property
    def restaurant_name(self) -> str:
        return self.cart.restaurant_name

    @property
    def lines(self) -> list[CartLine]:
        return self.cart.lines

    @property
    def total(self) -> Decimal:
        return self.cart.total

    @property
    def item_count(self) -> int:
        return self.cart.item_count

    def can_add_without_conflict(self, restaurant_id) -> bool:
        """True if adding from restaurant_id keeps the cart single-restaurant"""
        return self.cart.is_empty or self.cart.restaurant_id == restaurant_id

    def add_item(
        self,
        item: MenuItem | CartLine,
        restaurant_id,
        restaurant_name: str,
        replace: bool = False,
    ) -> bool:
        """
        Add one unit of item to the cart.

        Args:
            item: Menu item (or existing cart line) being added
            restaurant_id: Restaurant the item belongs to
            restaurant_name: Display name of that restaurant
            replace: Discard lines from another restaurant (user confirmed)

        Returns:
            False if the add was refused because of a restaurant conflict
        """
        if not self.can_add_without_conflict(restaurant_id):
            if not replace:
                logger.debug(f"Refused add from restaurant {restaurant_id}: cart bound to {self.cart.restaurant_id}")
                return False
            logger.debug(f"Discarding {len(self.cart.lines)} lines to switch to restaurant {restaurant_id}")
            self.cart.lines = []

        self.cart.restaurant_id = restaurant_id
        self.cart.restaurant_name = restaurant_name

        item_id = item.item_id if isinstance(item, CartLine) else item.id
        existing_line = self.cart.find_line(item_id)

        if existing_line:
            existing_line.quantity += 1
        else:
            self.cart.lines.append(
                CartLine(
                    item_id=item_id,
                    name=item.name,
                    unit_price=item.unit_price if isinstance(item, CartLine) else item.price,
                    image_url=item.image_url,
                )
            )

        return True

    def remove_item(self, item_id) -> None:
        """Decrement a line by one, dropping it (and the binding) at zero"""
        line = self.cart.find_line(item_id)
        if not line:
            return

        if line.quantity > 1:
            line.quantity -= 1
        else:
            self.cart.lines = [l for l in self.cart.lines if l.item_id != item_id]

        if self.cart.is_empty:
            self.clear()

    def clear(self) -> None:
        """Empty the cart and drop the restaurant binding"""
        self.cart.lines = []
        self.cart.restaurant_id = None
        self.cart.restaurant_name = ""

    def summary(self, delivery_fee: Decimal) -> BillSummary:
        """Bill shown on the cart page"""
        subtotal = self.cart.total
        fee = Decimal("0") if self.cart.is_empty else Decimal(delivery_fee)
        return BillSummary(subtotal=subtotal, delivery_fee=fee, total=subtotal + fee)

    def to_order_request(
        self,
        delivery_address: str,
        payment_method: PaymentMethod = PaymentMethod.CASH,
        special_instructions: Optional[str] = None,
    ) -> PlaceOrderRequest:
        """Build the POST /orders body from the current lines"""
        return PlaceOrderRequest(
            restaurant_id=self.cart.restaurant_id,
            items=[
                OrderItemRequest(menu_item_id=line.item_id, quantity=line.quantity)
                for line in self.cart.lines
            ],
            delivery_address=delivery_address,
            payment_method=payment_method,
            special_instructions=special_instructions,
        )
