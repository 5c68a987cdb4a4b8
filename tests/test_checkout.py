from __future__ import annotations

import json
from decimal import Decimal

import pytest

from food_client.core.context import ClientContext
from food_client.models.order import Order
from food_client.models.restaurant import MenuItem
from food_client.services.api_client import ApiRejectedError, FoodApiClient
from food_client.services.checkout import CheckoutService, OrderValidationError

from .conftest import FakePlatform, order_json

pytestmark = pytest.mark.anyio


@pytest.fixture()
def checkout() -> CheckoutService:
    return CheckoutService(delivery_fee=Decimal("30"))


@pytest.fixture()
def filled(context: ClientContext) -> ClientContext:
    item = MenuItem(id=101, name="Paneer Tikka", price=Decimal("100"))
    context.cart.add_item(item, 1, "Spice Route")
    context.cart.add_item(item, 1, "Spice Route")
    return context


@pytest.mark.parametrize(
    ("address", "method", "message"),
    [
        ("", "CASH", "Please enter delivery address"),
        ("   ", "CASH", "Please enter delivery address"),
        ("12 MG Road", "CHEQUE", "Unsupported payment method: CHEQUE"),
    ],
)
async def test_validation_happens_before_any_request(
    filled: ClientContext,
    api: FoodApiClient,
    platform: FakePlatform,
    checkout: CheckoutService,
    address: str,
    method: str,
    message: str,
) -> None:
    with pytest.raises(OrderValidationError) as excinfo:
        await checkout.place_order(filled, api, address, method)

    assert excinfo.value.message == message
    assert platform.requests == []
    assert filled.cart.item_count == 2


async def test_empty_cart_is_rejected(
    context: ClientContext,
    api: FoodApiClient,
    platform: FakePlatform,
    checkout: CheckoutService,
) -> None:
    with pytest.raises(OrderValidationError):
        await checkout.place_order(context, api, "12 MG Road")

    assert platform.requests == []


async def test_successful_order_clears_cart(
    filled: ClientContext,
    api: FoodApiClient,
    platform: FakePlatform,
    checkout: CheckoutService,
) -> None:
    platform.on("POST", "/orders", order_json(77))

    order = await checkout.place_order(filled, api, "  12 MG Road ", "UPI", "No onions")

    assert order.id == 77
    assert filled.cart.lines == []
    assert filled.cart.restaurant_id is None

    body = json.loads(platform.last("POST", "/orders").content)
    assert body["deliveryAddress"] == "12 MG Road"
    assert body["paymentMethod"] == "UPI"
    assert body["specialInstructions"] == "No onions"
    assert body["items"] == [{"menuItemId": 101, "quantity": 2}]


async def test_rejected_order_keeps_cart(
    filled: ClientContext,
    api: FoodApiClient,
    platform: FakePlatform,
    checkout: CheckoutService,
) -> None:
    platform.on("POST", "/orders", {"message": "Restaurant is closed"}, status=400)
    before = filled.cart.cart.model_dump()

    with pytest.raises(ApiRejectedError):
        await checkout.place_order(filled, api, "12 MG Road")

    assert filled.cart.cart.model_dump() == before


async def test_summary_adds_delivery_fee(filled: ClientContext, checkout: CheckoutService) -> None:
    bill = checkout.summary(filled)

    assert bill.subtotal == Decimal("200")
    assert bill.delivery_fee == Decimal("30")
    assert bill.total == Decimal("230")


async def test_only_pending_orders_can_be_cancelled(
    api: FoodApiClient,
    platform: FakePlatform,
    checkout: CheckoutService,
) -> None:
    preparing = Order.model_validate(order_json(5, "PREPARING"))

    with pytest.raises(OrderValidationError):
        await checkout.cancel_order(api, preparing)
    assert platform.requests == []

    platform.on("PATCH", "/orders/6/cancel", order_json(6, "CANCELLED"))
    cancelled = await checkout.cancel_order(api, Order.model_validate(order_json(6, "PENDING")))
    assert cancelled.status.value == "CANCELLED"
