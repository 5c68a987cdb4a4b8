# Client Services

from .api_client import (
    FoodApiClient,
    FoodApiError,
    ApiRejectedError,
    AuthenticationExpiredError,
    ApiTransportError,
    MalformedResponseError,
)
from .checkout import CheckoutService, OrderValidationError
from . import order_status

__all__ = [
    "FoodApiClient",
    "FoodApiError",
    "ApiRejectedError",
    "AuthenticationExpiredError",
    "ApiTransportError",
    "MalformedResponseError",
    "CheckoutService",
    "OrderValidationError",
    "order_status",
]
