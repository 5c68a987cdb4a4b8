from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from food_client.core.context import ClientContext, ContextRegistry
from food_client.services.api_client import FoodApiClient

API_BASE_URL = "http://platform.test/api"


class FakePlatform:
    """Stands in for the platform REST API behind an httpx.MockTransport"""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        if (request.method, path) not in self.routes:
            return httpx.Response(404, json={"message": f"No route for {request.method} {path}"})

        status, body = self.routes[(request.method, path)]
        if callable(body):
            body = body(request)
        if isinstance(body, Exception):
            raise body
        if isinstance(body, httpx.Response):
            return body
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def last(self, method: str, path: str) -> httpx.Request:
        matches = [
            r for r in self.requests
            if r.method == method and r.url.path.removeprefix("/api") == path
        ]
        assert matches, f"no {method} {path} request was made"
        return matches[-1]


def auth_json(role: str = "CUSTOMER", name: str = "Asha", token: str = "tok-123") -> dict:
    return {
        "token": token,
        "id": 7,
        "name": name,
        "email": f"{name.lower()}@example.com",
        "role": role,
    }


def order_json(order_id: int = 1, status: str = "PENDING", total: float = 230.0, **extra: Any) -> dict:
    data = {
        "id": order_id,
        "status": status,
        "customerName": "Asha",
        "restaurantId": 1,
        "restaurantName": "Spice Route",
        "orderItems": [
            {"id": 11, "menuItemId": 101, "menuItemName": "Paneer Tikka", "quantity": 2, "price": 100.0, "subtotal": 200.0}
        ],
        "deliveryAddress": "12 MG Road",
        "subtotal": total - 30.0,
        "deliveryFee": 30.0,
        "totalAmount": total,
        "paymentMethod": "CASH",
        "createdAt": "2024-05-01T12:30:00",
    }
    data.update(extra)
    return data


def restaurant_json(restaurant_id: int = 1, name: str = "Spice Route", cuisine: str = "Indian", **extra: Any) -> dict:
    data = {
        "id": restaurant_id,
        "name": name,
        "cuisine": cuisine,
        "rating": 4.5,
        "deliveryFee": 30.0,
        "open": True,
        "ownerId": 3,
    }
    data.update(extra)
    return data


def menu_item_json(item_id: int = 101, name: str = "Paneer Tikka", price: float = 100.0, category: str = "Starters") -> dict:
    return {
        "id": item_id,
        "name": name,
        "price": price,
        "category": category,
        "vegetarian": True,
        "available": True,
        "restaurantId": 1,
    }


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def platform() -> FakePlatform:
    return FakePlatform()


@pytest.fixture()
def api(platform: FakePlatform) -> FoodApiClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(platform.handler))
    return FoodApiClient(API_BASE_URL, http_client=http_client)


@pytest.fixture()
def registry() -> ContextRegistry:
    return ContextRegistry()


@pytest.fixture()
def context(registry: ContextRegistry) -> ClientContext:
    return registry.create_context()


@pytest.fixture()
def client(api: FoodApiClient, registry: ContextRegistry):
    from food_client.main import app
    from food_client.routes.deps import get_api_client, get_registry

    app.dependency_overrides[get_api_client] = lambda: api
    app.dependency_overrides[get_registry] = lambda: registry
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def login_as(client: TestClient, platform: FakePlatform) -> Callable[[str], dict]:
    def _login(role: str) -> dict:
        platform.on("POST", "/auth/login", auth_json(role))
        response = client.post("/api/session/login", json={"email": "asha@example.com", "password": "secret"})
        assert response.status_code == 200
        return response.json()

    return _login
