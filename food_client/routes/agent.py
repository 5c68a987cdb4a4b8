"""Delivery agent routes"""

from fastapi import APIRouter, Depends

from ..core.context import ClientContext
from ..models.order import OrderStatus
from ..services.api_client import FoodApiClient
from ..services import order_status
from .deps import agent_only, get_client_api

router = APIRouter(prefix="/api/agent", tags=["Agent"])


@router.get("/orders")
async def agent_orders(
    context: ClientContext = Depends(agent_only),
    api: FoodApiClient = Depends(get_client_api),
):
    """Deliveries in progress and the ten most recent completed ones"""
    orders = await api.agent_orders()
    return {
        "in_progress": [order_status.present_order(o) for o in order_status.deliveries_in_progress(orders)],
        "completed": [order_status.present_order(o) for o in order_status.completed_deliveries(orders)],
        "total": len(orders),
    }


@router.post("/orders/{order_id}/deliver")
async def mark_delivered(
    order_id: str,
    context: ClientContext = Depends(agent_only),
    api: FoodApiClient = Depends(get_client_api),
):
    """Mark an order delivered; the platform decides whether that is allowed"""
    order = await api.update_order_status(order_id, OrderStatus.DELIVERED)
    return {
        "message": "Order marked as delivered!",
        "order": order_status.present_order(order),
    }
