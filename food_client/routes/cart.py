"""Cart and checkout routes"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..core.cart import CONFLICT_PROMPT
from ..core.context import ClientContext
from ..models.cart import AddToCartRequest, CheckoutRequest, CartResponse
from ..models.restaurant import MenuItem
from ..services.api_client import FoodApiClient
from ..services.checkout import CheckoutService
from ..services.order_status import present_order
from .deps import customer_only, get_client_api, get_checkout_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def _cart_response(context: ClientContext, checkout: CheckoutService, message: str = None) -> dict:
    response = CartResponse(
        cart=context.cart.cart,
        summary=checkout.summary(context),
        message=message,
    )
    return response.model_dump(mode="json")


@router.get("")
async def get_cart(
    context: ClientContext = Depends(customer_only),
    checkout: CheckoutService = Depends(get_checkout_service),
):
    """Cart contents, bill summary and the address to prefill"""
    data = _cart_response(context, checkout)
    data["default_address"] = context.session.current.address or ""
    return data


@router.post("/items")
async def add_to_cart(
    request: AddToCartRequest,
    context: ClientContext = Depends(customer_only),
    checkout: CheckoutService = Depends(get_checkout_service),
):
    """
    Add one unit of a menu item.

    If the cart holds items from another restaurant and the request has
    not confirmed replacing them, nothing changes and 409 is returned
    with the question to put to the user.
    """
    item = MenuItem(
        id=request.item_id,
        name=request.name,
        price=request.price,
        image_url=request.image_url,
    )

    added = context.cart.add_item(
        item,
        request.restaurant_id,
        request.restaurant_name,
        replace=request.confirm_replace,
    )

    if not added:
        response = CartResponse(
            cart=context.cart.cart,
            summary=checkout.summary(context),
            message=CONFLICT_PROMPT,
            requires_confirmation=True,
        )
        return JSONResponse(status_code=409, content=response.model_dump(mode="json"))

    return _cart_response(context, checkout, message=f"Added {request.name} to cart")


@router.delete("/items/{item_id}")
async def remove_from_cart(
    item_id: str,
    context: ClientContext = Depends(customer_only),
    checkout: CheckoutService = Depends(get_checkout_service),
):
    """Remove one unit of an item; unknown items are ignored"""
    line = next((l for l in context.cart.lines if str(l.item_id) == item_id), None)
    if line:
        context.cart.remove_item(line.item_id)
    return _cart_response(context, checkout)


@router.delete("")
async def clear_cart(
    context: ClientContext = Depends(customer_only),
    checkout: CheckoutService = Depends(get_checkout_service),
):
    """Clear all items from cart"""
    context.cart.clear()
    return _cart_response(context, checkout, message="Cart cleared")


@router.post("/checkout")
async def place_order(
    request: CheckoutRequest,
    context: ClientContext = Depends(customer_only),
    api: FoodApiClient = Depends(get_client_api),
    checkout: CheckoutService = Depends(get_checkout_service),
):
    """Place the order; the cart empties only once the platform accepts it"""
    order = await checkout.place_order(
        context,
        api,
        delivery_address=request.delivery_address,
        payment_method=request.payment_method,
        special_instructions=request.special_instructions,
    )
    return {
        "message": "Order placed successfully!",
        "order": present_order(order),
        "redirect": "/orders",
    }
