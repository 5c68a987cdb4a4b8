"""Cart models for the ordering client"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from .types import Money


class CartLine(BaseModel):
    """One menu item and its quantity in the cart"""
    item_id: int | str
    name: str
    unit_price: Money = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    image_url: Optional[str] = None

    @computed_field
    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


class Cart(BaseModel):
    """In-progress order draft, bound to at most one restaurant"""
    restaurant_id: Optional[int | str] = None
    restaurant_name: str = ""
    lines: list[CartLine] = []

    @computed_field
    @property
    def total(self) -> Money:
        return sum((line.unit_price * line.quantity for line in self.lines), Decimal("0"))

    @computed_field
    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def find_line(self, item_id) -> Optional[CartLine]:
        return next((line for line in self.lines if line.item_id == item_id), None)


class AddToCartRequest(BaseModel):
    """Request to add one unit of a menu item to the cart"""
    item_id: int | str
    name: str
    price: Money = Field(ge=0)
    image_url: Optional[str] = None
    restaurant_id: int | str
    restaurant_name: str
    confirm_replace: bool = False


class CheckoutRequest(BaseModel):
    """Delivery details entered on the cart page"""
    delivery_address: str = ""
    payment_method: str = "CASH"
    special_instructions: Optional[str] = None


class BillSummary(BaseModel):
    subtotal: Money
    delivery_fee: Money
    total: Money


class CartResponse(BaseModel):
    """Cart API response"""
    cart: Cart
    summary: Optional[BillSummary] = None
    message: Optional[str] = None
    requires_confirmation: bool = False
