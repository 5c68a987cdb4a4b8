"""Restaurant, menu and review models"""

from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import Field

from .order import ApiModel
from .types import Money


class Restaurant(ApiModel):
    """Restaurant listing"""
    id: int | str
    name: str
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    image_url: Optional[str] = None
    cuisine: Optional[str] = None
    opening_hours: Optional[str] = None
    rating: float = 0.0
    review_count: int = 0
    delivery_time: int = 30
    delivery_fee: Money = Decimal("30")
    min_order_amount: Money = Decimal("100")
    open: bool = True
    owner_id: Optional[int] = None


class RestaurantCreate(ApiModel):
    """Body of POST/PUT /restaurants"""
    name: str = Field(min_length=1)
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    image_url: Optional[str] = None
    cuisine: Optional[str] = None
    opening_hours: Optional[str] = None
    delivery_time: int = 30
    delivery_fee: Money = Decimal("30")
    min_order_amount: Money = Decimal("100")


class MenuItem(ApiModel):
    """Menu entry of a restaurant"""
    id: int | str
    name: str
    description: Optional[str] = None
    price: Money = Field(ge=0)
    image_url: Optional[str] = None
    category: Optional[str] = None
    vegetarian: bool = False
    available: bool = True
    restaurant_id: Optional[int | str] = None


class MenuItemCreate(ApiModel):
    """Body of POST /menu/restaurant/{id} and PUT /menu/{itemId}"""
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: Money = Field(gt=0)
    image_url: Optional[str] = None
    category: Optional[str] = None
    vegetarian: bool = False


class Review(ApiModel):
    id: Optional[int] = None
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    restaurant_id: Optional[int | str] = None
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None


class ReviewCreate(ApiModel):
    """Body of POST /reviews"""
    # Numeric ids from a URL path go upstream as numbers
    restaurant_id: Union[int, str] = Field(union_mode="left_to_right")
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = None
