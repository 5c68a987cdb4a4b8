# Client Models

from .cart import Cart, CartLine, AddToCartRequest, CheckoutRequest, BillSummary, CartResponse
from .order import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PlaceOrderRequest,
    OrderItemRequest,
    StatusUpdateRequest,
)
from .restaurant import Restaurant, RestaurantCreate, MenuItem, MenuItemCreate, Review, ReviewCreate
from .auth import Role, LoginRequest, RegisterRequest, AuthResponse

__all__ = [
    "Cart",
    "CartLine",
    "AddToCartRequest",
    "CheckoutRequest",
    "BillSummary",
    "CartResponse",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PaymentMethod",
    "PlaceOrderRequest",
    "OrderItemRequest",
    "StatusUpdateRequest",
    "Restaurant",
    "RestaurantCreate",
    "MenuItem",
    "MenuItemCreate",
    "Review",
    "ReviewCreate",
    "Role",
    "LoginRequest",
    "RegisterRequest",
    "AuthResponse",
]
