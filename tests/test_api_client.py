from __future__ import annotations

import json

import httpx
import pytest

from food_client.models.order import OrderStatus, PlaceOrderRequest, OrderItemRequest
from food_client.services.api_client import (
    GENERIC_ERROR_MESSAGE,
    ApiRejectedError,
    ApiTransportError,
    AuthenticationExpiredError,
    FoodApiClient,
    MalformedResponseError,
)

from .conftest import FakePlatform, auth_json, order_json, restaurant_json

pytestmark = pytest.mark.anyio


def _bound(api: FoodApiClient, token: str | None = "tok-123", expired: list | None = None) -> FoodApiClient:
    return api.bind(
        token_provider=lambda: token,
        on_unauthorized=(lambda: expired.append(True)) if expired is not None else None,
    )


async def test_requests_carry_bearer_token(platform: FakePlatform, api: FoodApiClient) -> None:
    platform.on("GET", "/orders/my", [order_json()])

    orders = await _bound(api).my_orders()

    assert orders[0].status == OrderStatus.PENDING
    assert platform.last("GET", "/orders/my").headers["Authorization"] == "Bearer tok-123"


async def test_login_is_sent_without_token(platform: FakePlatform, api: FoodApiClient) -> None:
    platform.on("POST", "/auth/login", auth_json())

    auth = await _bound(api).login("asha@example.com", "secret")

    request = platform.last("POST", "/auth/login")
    assert "Authorization" not in request.headers
    assert json.loads(request.content) == {"email": "asha@example.com", "password": "secret"}
    assert auth.token == "tok-123"
    assert auth.id == 7


async def test_no_token_means_no_header(platform: FakePlatform, api: FoodApiClient) -> None:
    platform.on("GET", "/restaurants", [])

    await _bound(api, token=None).list_restaurants()

    assert "Authorization" not in platform.last("GET", "/restaurants").headers


async def test_unauthorized_expires_session(platform: FakePlatform, api: FoodApiClient) -> None:
    platform.on("GET", "/orders/my", {"message": "Token expired"}, status=401)
    expired: list = []

    with pytest.raises(AuthenticationExpiredError):
        await _bound(api, expired=expired).my_orders()

    assert expired == [True]


async def test_rejection_uses_server_message(platform: FakePlatform, api: FoodApiClient) -> None:
    platform.on("PATCH", "/orders/5/cancel", {"message": "Order cannot be cancelled now"}, status=400)

    with pytest.raises(ApiRejectedError) as excinfo:
        await _bound(api).cancel_order(5)

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Order cannot be cancelled now"


async def test_rejection_without_message_uses_fallback(platform: FakePlatform, api: FoodApiClient) -> None:
    platform.on("GET", "/orders/all", None, status=500)

    with pytest.raises(ApiRejectedError) as excinfo:
        await _bound(api).all_orders()

    assert excinfo.value.status_code == 500
    assert excinfo.value.message == GENERIC_ERROR_MESSAGE


async def test_transport_failure(platform: FakePlatform, api: FoodApiClient) -> None:
    platform.on("GET", "/restaurants", httpx.ConnectError("connection refused"))

    with pytest.raises(ApiTransportError):
        await _bound(api).list_restaurants()


async def test_failures_are_not_retried(platform: FakePlatform, api: FoodApiClient) -> None:
    platform.on("GET", "/orders/agent", {"message": "down"}, status=503)

    with pytest.raises(ApiRejectedError):
        await _bound(api).agent_orders()

    assert len(platform.requests) == 1


async def test_status_update_sends_query_parameter(platform: FakePlatform, api: FoodApiClient) -> None:
    platform.on("PATCH", "/orders/3/status", order_json(3, "PREPARING"))

    order = await _bound(api).update_order_status(3, OrderStatus.PREPARING)

    request = platform.last("PATCH", "/orders/3/status")
    assert request.url.params["status"] == "PREPARING"
    assert request.content == b""
    assert order.status == OrderStatus.PREPARING


async def test_search_parameter_only_when_given(platform: FakePlatform, api: FoodApiClient) -> None:
    platform.on("GET", "/restaurants", [restaurant_json()])
    client = _bound(api)

    await client.list_restaurants()
    assert "search" not in platform.requests[-1].url.params

    restaurants = await client.list_restaurants(search="pizza")
    assert platform.requests[-1].url.params["search"] == "pizza"
    assert restaurants[0].name == "Spice Route"


async def test_place_order_sends_camel_case_body(platform: FakePlatform, api: FoodApiClient) -> None:
    platform.on("POST", "/orders", order_json(42))
    request = PlaceOrderRequest(
        restaurant_id=1,
        items=[OrderItemRequest(menu_item_id=101, quantity=2)],
        delivery_address="12 MG Road",
    )

    order = await _bound(api).place_order(request)

    body = json.loads(platform.last("POST", "/orders").content)
    assert body == {
        "restaurantId": 1,
        "items": [{"menuItemId": 101, "quantity": 2}],
        "deliveryAddress": "12 MG Road",
        "paymentMethod": "CASH",
        "specialInstructions": None,
    }
    assert order.id == 42
    assert order.items[0].name == "Paneer Tikka"


async def test_delete_menu_item_accepts_empty_response(platform: FakePlatform, api: FoodApiClient) -> None:
    platform.on("DELETE", "/menu/101", None, status=204)

    assert await _bound(api).delete_menu_item(101) is None


async def test_bound_clients_share_connection_pool(api: FoodApiClient) -> None:
    bound = _bound(api)

    assert bound._http_client is api._http_client
    await bound.close()
    assert not api._http_client.is_closed


async def test_non_json_success_body_is_malformed(platform: FakePlatform, api: FoodApiClient) -> None:
    platform.on("GET", "/restaurants", httpx.Response(200, text="<html>gateway</html>"))

    with pytest.raises(MalformedResponseError) as excinfo:
        await _bound(api).list_restaurants()

    assert excinfo.value.message == GENERIC_ERROR_MESSAGE


async def test_empty_body_on_list_endpoint_is_malformed(platform: FakePlatform, api: FoodApiClient) -> None:
    platform.on("GET", "/restaurants", None)

    with pytest.raises(MalformedResponseError):
        await _bound(api).list_restaurants()


async def test_payload_of_wrong_shape_is_malformed(platform: FakePlatform, api: FoodApiClient) -> None:
    platform.on("GET", "/orders/5", {"id": 5})
    platform.on("GET", "/orders/my", {"orders": []})

    with pytest.raises(MalformedResponseError):
        await _bound(api).get_order(5)
    with pytest.raises(MalformedResponseError):
        await _bound(api).my_orders()


async def test_unknown_order_status_is_kept(platform: FakePlatform, api: FoodApiClient) -> None:
    platform.on("GET", "/orders/my", [order_json(1, "READY"), order_json(2, "PREPARING")])

    orders = await _bound(api).my_orders()

    assert orders[0].status == "READY"
    assert orders[1].status is OrderStatus.PREPARING
