"""Order models as served by the platform API"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .types import Money


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PREPARING = "PREPARING"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    CARD = "CARD"
    UPI = "UPI"


class ApiModel(BaseModel):
    """Base for payloads exchanged with the platform API in camelCase"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderItem(ApiModel):
    """Line of a placed order"""
    id: Optional[int] = None
    menu_item_id: Optional[int | str] = None
    name: str = Field(default="", alias="menuItemName")
    quantity: int
    price: Money = Decimal("0")
    subtotal: Money


class Order(ApiModel):
    """Placed order, read back from the platform"""
    id: int | str
    # Codes this client does not know are kept as plain strings
    status: Union[OrderStatus, str] = Field(union_mode="left_to_right")
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    restaurant_id: Optional[int | str] = None
    restaurant_name: Optional[str] = None
    items: list[OrderItem] = Field(default=[], alias="orderItems")
    delivery_address: Optional[str] = None
    subtotal: Money = Decimal("0")
    delivery_fee: Money = Decimal("0")
    total_amount: Money = Decimal("0")
    payment_method: Optional[str] = None
    payment_done: bool = False
    special_instructions: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderItemRequest(ApiModel):
    menu_item_id: int | str
    quantity: int = Field(gt=0)


class PlaceOrderRequest(ApiModel):
    """Body of POST /orders"""
    restaurant_id: int | str
    items: list[OrderItemRequest]
    delivery_address: str
    payment_method: PaymentMethod = PaymentMethod.CASH
    special_instructions: Optional[str] = None


class StatusUpdateRequest(BaseModel):
    status: OrderStatus
