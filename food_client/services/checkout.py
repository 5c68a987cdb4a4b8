"""
Checkout Flow

Validates the cart page form, submits the cart as an order and
clears the cart once the platform accepts it.
"""

import logging
from decimal import Decimal
from typing import Optional

from ..core.context import ClientContext
from ..models.cart import BillSummary
from ..models.order import Order, PaymentMethod
from .api_client import FoodApiClient, FoodApiError
from .order_status import is_cancellable

logger = logging.getLogger(__name__)


class OrderValidationError(FoodApiError):
    """Input rejected before any request was sent"""
    pass


class CheckoutService:
    """Places and cancels orders on behalf of one client context"""

    def __init__(self, delivery_fee: Decimal):
        self.delivery_fee = Decimal(delivery_fee)

    def summary(self, context: ClientContext) -> BillSummary:
        return context.cart.summary(self.delivery_fee)

    def validate(self, context: ClientContext, delivery_address: str, payment_method: str) -> PaymentMethod:
        """Check the form; returns the parsed payment method"""
        if not context.cart.lines:
            raise OrderValidationError("Your cart is empty")

        if not delivery_address or not delivery_address.strip():
            raise OrderValidationError("Please enter delivery address")

        try:
            return PaymentMethod(payment_method)
        except ValueError:
            raise OrderValidationError(f"Unsupported payment method: {payment_method}")

    async def place_order(
        self,
        context: ClientContext,
        api: FoodApiClient,
        delivery_address: str,
        payment_method: str = PaymentMethod.CASH.value,
        special_instructions: Optional[str] = None,
    ) -> Order:
        """
        Submit the cart as an order.

        Validation happens before any network call. The cart is cleared
        only after the platform accepts the order; on any failure it is
        left as it was.

        Raises:
            OrderValidationError: form or cart invalid
            FoodApiError: the platform call failed
        """
        method = self.validate(context, delivery_address, payment_method)

        request = context.cart.to_order_request(
            delivery_address=delivery_address.strip(),
            payment_method=method,
            special_instructions=special_instructions or None,
        )

        order = await api.place_order(request)
        context.cart.clear()

        logger.info(f"Placed order {order.id} at {order.restaurant_name or request.restaurant_id}")
        return order

    async def cancel_order(self, api: FoodApiClient, order: Order) -> Order:
        """Cancel a customer's own order; only pending orders qualify"""
        if not is_cancellable(order.status):
            raise OrderValidationError("Only pending orders can be cancelled")
        return await api.cancel_order(order.id)
