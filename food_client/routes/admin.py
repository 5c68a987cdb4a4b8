"""Administrator routes"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.context import ClientContext
from ..models.order import OrderStatus, StatusUpdateRequest
from ..services.api_client import FoodApiClient
from ..services.checkout import OrderValidationError
from ..services import order_status
from .deps import admin_only, get_client_api

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/orders")
async def all_orders(
    status: str = Query(order_status.ALL, description="ALL or an order status"),
    context: ClientContext = Depends(admin_only),
    api: FoodApiClient = Depends(get_client_api),
):
    """Every order, filtered by status, with the transitions an admin may apply"""
    if status != order_status.ALL and status not in OrderStatus.__members__:
        raise HTTPException(status_code=422, detail=f"Unknown status: {status}")

    orders = await api.all_orders()
    filtered = order_status.filter_by_status(orders, status)

    return {
        "orders": [
            {
                **order_status.present_order(o),
                "allowed_transitions": [s.value for s in order_status.allowed_manual_transitions(o.status)],
            }
            for o in filtered
        ],
        "filters": [order_status.ALL] + [s.value for s in order_status.ALL_STATUSES],
        "counts": order_status.count_by_status(orders),
        "stats": {
            "total_orders": len(orders),
            "active_orders": len(order_status.active_orders(orders)),
            "revenue": float(order_status.revenue(orders)),
        },
    }


@router.post("/orders/{order_id}/status")
async def set_order_status(
    order_id: str,
    request: StatusUpdateRequest,
    context: ClientContext = Depends(admin_only),
    api: FoodApiClient = Depends(get_client_api),
):
    """Set an order's status by hand; cancellation is left to customers"""
    order = await api.get_order(order_id)
    if request.status not in order_status.allowed_manual_transitions(order.status):
        raise OrderValidationError(
            f"Cannot move order {order_id} from {order_status.status_code(order.status)} to {request.status.value}"
        )

    updated = await api.update_order_status(order_id, request.status)
    logger.info(f"Admin set order {order_id}: {order_status.status_code(order.status)} -> {request.status.value}")
    return {"message": "Status updated", "order": order_status.present_order(updated)}


@router.get("/restaurants")
async def all_restaurants(
    context: ClientContext = Depends(admin_only),
    api: FoodApiClient = Depends(get_client_api),
):
    restaurants = await api.list_restaurants()
    return {"restaurants": [r.model_dump(mode="json") for r in restaurants]}
