"""
Platform API Client

HTTP client for the food-ordering platform's REST API.
Attaches the session's bearer token and reports expired sessions.
"""

import logging
from typing import Optional, Any, Callable

import httpx
from pydantic import BaseModel, ValidationError

from ..models.auth import AuthResponse, LoginRequest, RegisterRequest
from ..models.order import Order, OrderStatus, PlaceOrderRequest
from ..models.restaurant import (
    Restaurant,
    RestaurantCreate,
    MenuItem,
    MenuItemCreate,
    Review,
    ReviewCreate,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


class FoodApiError(Exception):
    """Base exception for ordering client errors"""

    def __init__(self, message: str = GENERIC_ERROR_MESSAGE):
        super().__init__(message)
        self.message = message


class ApiRejectedError(FoodApiError):
    """The platform refused the request (4xx/5xx other than an expired session)"""

    def __init__(self, status_code: int, message: str = GENERIC_ERROR_MESSAGE):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationExpiredError(FoodApiError):
    """The platform answered 401; the session is no longer valid"""

    def __init__(self, message: str = "Your session has expired. Please log in again."):
        super().__init__(message)


class ApiTransportError(FoodApiError):
    """The platform could not be reached"""

    def __init__(self, message: str = "Could not reach the server. Please try again."):
        super().__init__(message)


class MalformedResponseError(FoodApiError):
    """The platform answered 2xx with a body this client cannot read"""


def _validate(model: type[BaseModel], data: Any) -> Any:
    """Parse an upstream payload, mapping a bad shape onto MalformedResponseError"""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error(f"Unexpected {model.__name__} payload: {e}")
        raise MalformedResponseError() from e


def _validate_list(model: type[BaseModel], data: Any) -> list:
    if not isinstance(data, list):
        logger.error(f"Expected a list of {model.__name__}, got {type(data).__name__}")
        raise MalformedResponseError()
    return [_validate(model, item) for item in data]


def _error_message(response: httpx.Response) -> str:
    """Server-provided message, or the generic fallback"""
    try:
        payload = response.json()
    except ValueError:
        return GENERIC_ERROR_MESSAGE
    if isinstance(payload, dict):
        message = payload.get("message") or payload.get("error")
        if isinstance(message, str) and message.strip():
            return message
    return GENERIC_ERROR_MESSAGE


class FoodApiClient:
    """
    Client for the food-ordering platform API.

    Every request except login/register carries the bearer token from
    token_provider. A 401 on any of those runs on_unauthorized before
    raising AuthenticationExpiredError; a 401 on login is a plain rejection.
    Nothing is retried.
    """

    def __init__(
        self,
        api_base_url: str,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize platform client.

        Args:
            api_base_url: Base URL of the platform API (e.g. http://host/api)
            token_provider: Returns the current bearer token, if any
            on_unauthorized: Called when the platform answers 401
            timeout: Transport timeout in seconds
            http_client: Shared httpx client; one is created if omitted
        """
        self.base_url = api_base_url.rstrip("/")
        self.token_provider = token_provider
        self.on_unauthorized = on_unauthorized
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)

    def bind(
        self,
        token_provider: Optional[Callable[[], Optional[str]]],
        on_unauthorized: Optional[Callable[[], None]],
    ) -> "FoodApiClient":
        """View of this client acting for another session, sharing the connection pool"""
        return FoodApiClient(
            self.base_url,
            token_provider=token_provider,
            on_unauthorized=on_unauthorized,
            http_client=self._http_client,
        )

    async def close(self) -> None:
        """Close HTTP client if this instance created it"""
        if self._owns_http_client:
            await self._http_client.aclose()

    def _generate_headers(self, authenticated: bool) -> dict[str, str]:
        """Generate headers including the bearer token if available"""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        if authenticated and self.token_provider:
            token = self.token_provider()
            if token:
                headers["Authorization"] = f"Bearer {token}"

        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        params: Optional[dict] = None,
        authenticated: bool = True,
    ) -> Any:
        """Make an HTTP request and map failures onto the error taxonomy"""
        url = f"{self.base_url}{path}"
        headers = self._generate_headers(authenticated)

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                headers=headers,
                json=body,
                params=params,
            )
        except httpx.TransportError as e:
            logger.error(f"Request failed: {method} {path} - {e.__class__.__name__}: {e}")
            raise ApiTransportError() from e

        if response.status_code == 401 and authenticated:
            logger.info(f"Unauthorized: {method} {path}")
            if self.on_unauthorized:
                self.on_unauthorized()
            raise AuthenticationExpiredError()

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            raise ApiRejectedError(response.status_code, _error_message(response))

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Unreadable response: {method} {path} - {response.status_code}")
            raise MalformedResponseError() from e

    # ==================== Auth APIs ====================

    async def login(self, email: str, password: str) -> AuthResponse:
        """Exchange credentials for an identity and bearer token"""
        body = LoginRequest(email=email, password=password).model_dump(by_alias=True)
        data = await self._request("POST", "/auth/login", body=body, authenticated=False)
        return _validate(AuthResponse, data)

    async def register(self, request: RegisterRequest) -> AuthResponse:
        """Create an account and get its bearer token"""
        body = request.model_dump(mode="json", by_alias=True)
        data = await self._request("POST", "/auth/register", body=body, authenticated=False)
        return _validate(AuthResponse, data)

    async def me(self) -> dict:
        """Get the platform's view of the logged-in user"""
        return await self._request("GET", "/auth/me")

    # ==================== Restaurant APIs ====================

    async def list_restaurants(self, search: Optional[str] = None) -> list[Restaurant]:
        """List restaurants, optionally filtered by a search term"""
        params = {"search": search} if search else None
        data = await self._request("GET", "/restaurants", params=params)
        return _validate_list(Restaurant, data)

    async def get_restaurant(self, restaurant_id) -> Restaurant:
        """Get restaurant details"""
        return _validate(Restaurant, await self._request("GET", f"/restaurants/{restaurant_id}"))

    async def my_restaurants(self) -> list[Restaurant]:
        """Restaurants owned by the logged-in owner"""
        data = await self._request("GET", "/restaurants/my")
        return _validate_list(Restaurant, data)

    async def create_restaurant(self, request: RestaurantCreate) -> Restaurant:
        data = await self._request(
            "POST",
            "/restaurants",
            body=request.model_dump(mode="json", by_alias=True),
        )
        return _validate(Restaurant, data)

    async def update_restaurant(self, restaurant_id, request: RestaurantCreate) -> Restaurant:
        data = await self._request(
            "PUT",
            f"/restaurants/{restaurant_id}",
            body=request.model_dump(mode="json", by_alias=True),
        )
        return _validate(Restaurant, data)

    async def toggle_restaurant(self, restaurant_id) -> Restaurant:
        """Open or close a restaurant"""
        data = await self._request("PATCH", f"/restaurants/{restaurant_id}/toggle")
        return _validate(Restaurant, data)

    # ==================== Menu APIs ====================

    async def get_menu(self, restaurant_id) -> list[MenuItem]:
        """Get a restaurant's menu"""
        data = await self._request("GET", f"/menu/restaurant/{restaurant_id}")
        return _validate_list(MenuItem, data)

    async def add_menu_item(self, restaurant_id, request: MenuItemCreate) -> MenuItem:
        data = await self._request(
            "POST",
            f"/menu/restaurant/{restaurant_id}",
            body=request.model_dump(mode="json", by_alias=True),
        )
        return _validate(MenuItem, data)

    async def update_menu_item(self, item_id, request: MenuItemCreate) -> MenuItem:
        data = await self._request(
            "PUT",
            f"/menu/{item_id}",
            body=request.model_dump(mode="json", by_alias=True),
        )
        return _validate(MenuItem, data)

    async def toggle_menu_item(self, item_id) -> MenuItem:
        """Mark a menu item available or unavailable"""
        return _validate(MenuItem, await self._request("PATCH", f"/menu/{item_id}/toggle"))

    async def delete_menu_item(self, item_id) -> None:
        await self._request("DELETE", f"/menu/{item_id}")

    # ==================== Order APIs ====================

    async def place_order(self, request: PlaceOrderRequest) -> Order:
        """Submit a cart as an order"""
        data = await self._request(
            "POST",
            "/orders",
            body=request.model_dump(mode="json", by_alias=True),
        )
        return _validate(Order, data)

    async def my_orders(self) -> list[Order]:
        """Orders placed by the logged-in customer"""
        return _validate_list(Order, await self._request("GET", "/orders/my"))

    async def get_order(self, order_id) -> Order:
        return _validate(Order, await self._request("GET", f"/orders/{order_id}"))

    async def restaurant_orders(self, restaurant_id) -> list[Order]:
        """Orders received by one restaurant"""
        data = await self._request("GET", f"/orders/restaurant/{restaurant_id}")
        return _validate_list(Order, data)

    async def all_orders(self) -> list[Order]:
        """Every order on the platform (admin)"""
        return _validate_list(Order, await self._request("GET", "/orders/all"))

    async def agent_orders(self) -> list[Order]:
        """Orders assigned to the logged-in delivery agent"""
        return _validate_list(Order, await self._request("GET", "/orders/agent"))

    async def update_order_status(self, order_id, status: OrderStatus) -> Order:
        """Request a status transition; the platform decides if it is allowed"""
        data = await self._request(
            "PATCH",
            f"/orders/{order_id}/status",
            params={"status": OrderStatus(status).value},
        )
        return _validate(Order, data)

    async def cancel_order(self, order_id) -> Order:
        return _validate(Order, await self._request("PATCH", f"/orders/{order_id}/cancel"))

    # ==================== Review APIs ====================

    async def add_review(self, request: ReviewCreate) -> Review:
        data = await self._request(
            "POST",
            "/reviews",
            body=request.model_dump(mode="json", by_alias=True),
        )
        return _validate(Review, data)

    async def restaurant_reviews(self, restaurant_id) -> list[Review]:
        data = await self._request("GET", f"/reviews/restaurant/{restaurant_id}")
        return _validate_list(Review, data)
