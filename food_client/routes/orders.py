"""Customer order history routes"""

from fastapi import APIRouter, Depends

from ..core.context import ClientContext
from ..services.api_client import FoodApiClient
from ..services.checkout import CheckoutService
from ..services.order_status import present_order
from .deps import customer_only, get_client_api, get_checkout_service

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.get("")
async def my_orders(
    context: ClientContext = Depends(customer_only),
    api: FoodApiClient = Depends(get_client_api),
):
    """Orders placed by the logged-in customer"""
    orders = await api.my_orders()
    return {"orders": [present_order(o) for o in orders]}


@router.get("/{order_id}")
async def get_order(
    order_id: str,
    context: ClientContext = Depends(customer_only),
    api: FoodApiClient = Depends(get_client_api),
):
    return present_order(await api.get_order(order_id))


@router.post("/{order_id}/cancel")
async def cancel_order(
    order_id: str,
    context: ClientContext = Depends(customer_only),
    api: FoodApiClient = Depends(get_client_api),
    checkout: CheckoutService = Depends(get_checkout_service),
):
    """Cancel a pending order, then return the refreshed list"""
    order = await api.get_order(order_id)
    await checkout.cancel_order(api, order)
    orders = await api.my_orders()
    return {
        "message": "Order cancelled",
        "orders": [present_order(o) for o in orders],
    }
