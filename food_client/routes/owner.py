"""Restaurant owner dashboard and management routes"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..core.context import ClientContext
from ..models.restaurant import RestaurantCreate, MenuItemCreate
from ..services.api_client import FoodApiClient
from ..services.checkout import OrderValidationError
from ..services import order_status
from .deps import owner_or_admin, get_client_api

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/owner", tags=["Owner"])


@router.get("/dashboard")
async def dashboard(
    restaurant_id: Optional[str] = Query(None, description="Restaurant to show; first owned if omitted"),
    context: ClientContext = Depends(owner_or_admin),
    api: FoodApiClient = Depends(get_client_api),
):
    """Owned restaurants, active orders of the selected one, and revenue"""
    restaurants = await api.my_restaurants()

    selected = None
    if restaurants:
        selected = next((r for r in restaurants if str(r.id) == restaurant_id), restaurants[0])

    orders = await api.restaurant_orders(selected.id) if selected else []
    active = order_status.active_orders(orders)

    return {
        "restaurants": [r.model_dump(mode="json") for r in restaurants],
        "selected_restaurant_id": selected.id if selected else None,
        "active_orders": [order_status.present_order(o) for o in active],
        "stats": {
            "total_orders": len(orders),
            "active_orders": len(active),
            "revenue": float(order_status.revenue(orders)),
            "restaurants": len(restaurants),
        },
    }


@router.post("/orders/{order_id}/advance")
async def advance_order(
    order_id: str,
    context: ClientContext = Depends(owner_or_admin),
    api: FoodApiClient = Depends(get_client_api),
):
    """Move an order one step forward in its lifecycle"""
    order = await api.get_order(order_id)
    upcoming = order_status.next_status(order.status)
    if upcoming is None:
        raise OrderValidationError(f"Order {order_id} is already {order_status.status_code(order.status)}")

    updated = await api.update_order_status(order_id, upcoming)
    logger.info(f"Order {order_id}: {order_status.status_code(order.status)} -> {upcoming.value}")
    return {
        "message": "Order status updated",
        "order": order_status.present_order(updated),
    }


# ==================== Restaurant management ====================

@router.get("/restaurants")
async def my_restaurants(
    context: ClientContext = Depends(owner_or_admin),
    api: FoodApiClient = Depends(get_client_api),
):
    restaurants = await api.my_restaurants()
    return {"restaurants": [r.model_dump(mode="json") for r in restaurants]}


@router.post("/restaurants")
async def create_restaurant(
    request: RestaurantCreate,
    context: ClientContext = Depends(owner_or_admin),
    api: FoodApiClient = Depends(get_client_api),
):
    restaurant = await api.create_restaurant(request)
    return {"message": "Restaurant created", "restaurant": restaurant.model_dump(mode="json")}


@router.put("/restaurants/{restaurant_id}")
async def update_restaurant(
    restaurant_id: str,
    request: RestaurantCreate,
    context: ClientContext = Depends(owner_or_admin),
    api: FoodApiClient = Depends(get_client_api),
):
    restaurant = await api.update_restaurant(restaurant_id, request)
    return {"message": "Restaurant updated", "restaurant": restaurant.model_dump(mode="json")}


@router.post("/restaurants/{restaurant_id}/toggle")
async def toggle_restaurant(
    restaurant_id: str,
    context: ClientContext = Depends(owner_or_admin),
    api: FoodApiClient = Depends(get_client_api),
):
    """Open or close a restaurant"""
    restaurant = await api.toggle_restaurant(restaurant_id)
    return {"message": "Restaurant status updated", "restaurant": restaurant.model_dump(mode="json")}


# ==================== Menu management ====================

@router.get("/restaurants/{restaurant_id}/menu")
async def get_menu(
    restaurant_id: str,
    context: ClientContext = Depends(owner_or_admin),
    api: FoodApiClient = Depends(get_client_api),
):
    menu = await api.get_menu(restaurant_id)
    return {"menu": [m.model_dump(mode="json") for m in menu]}


@router.post("/restaurants/{restaurant_id}/menu")
async def add_menu_item(
    restaurant_id: str,
    request: MenuItemCreate,
    context: ClientContext = Depends(owner_or_admin),
    api: FoodApiClient = Depends(get_client_api),
):
    item = await api.add_menu_item(restaurant_id, request)
    return {"message": "Menu item added", "item": item.model_dump(mode="json")}


@router.put("/menu/{item_id}")
async def update_menu_item(
    item_id: str,
    request: MenuItemCreate,
    context: ClientContext = Depends(owner_or_admin),
    api: FoodApiClient = Depends(get_client_api),
):
    item = await api.update_menu_item(item_id, request)
    return {"message": "Menu item updated", "item": item.model_dump(mode="json")}


@router.post("/menu/{item_id}/toggle")
async def toggle_menu_item(
    item_id: str,
    context: ClientContext = Depends(owner_or_admin),
    api: FoodApiClient = Depends(get_client_api),
):
    """Mark a menu item available or unavailable"""
    item = await api.toggle_menu_item(item_id)
    return {"message": "Availability updated", "item": item.model_dump(mode="json")}


@router.delete("/menu/{item_id}")
async def delete_menu_item(
    item_id: str,
    context: ClientContext = Depends(owner_or_admin),
    api: FoodApiClient = Depends(get_client_api),
):
    await api.delete_menu_item(item_id)
    return {"message": "Menu item deleted"}
