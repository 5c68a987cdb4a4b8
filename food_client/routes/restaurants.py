"""Restaurant browsing routes"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from ..core.context import ClientContext
from ..models.restaurant import ReviewCreate
from ..services.api_client import FoodApiClient
from ..services import catalog
from .deps import get_context, get_client_api, customer_only

router = APIRouter(prefix="/api/restaurants", tags=["Restaurants"])


class ReviewForm(BaseModel):
    """Review form on the restaurant page"""
    rating: int = Field(default=5, ge=1, le=5)
    comment: Optional[str] = None


@router.get("")
async def list_restaurants(
    search: Optional[str] = Query(None, description="Name or cuisine search"),
    cuisine: Optional[str] = Query(None, description="Filter by cuisine"),
    api: FoodApiClient = Depends(get_client_api),
):
    """List restaurants with the cuisine filter options"""
    restaurants = await api.list_restaurants()
    results = catalog.filter_restaurants(restaurants, search=search, cuisine=cuisine)
    return {
        "restaurants": [r.model_dump(mode="json") for r in results],
        "cuisines": catalog.cuisines(restaurants),
        "total": len(results),
    }


@router.get("/{restaurant_id}")
async def get_restaurant(
    restaurant_id: str,
    category: Optional[str] = Query(None, description="Filter menu by category"),
    context: ClientContext = Depends(get_context),
    api: FoodApiClient = Depends(get_client_api),
):
    """Restaurant page: details, menu and reviews"""
    restaurant = await api.get_restaurant(restaurant_id)
    menu = await api.get_menu(restaurant_id)
    reviews = await api.restaurant_reviews(restaurant_id)

    return {
        "restaurant": restaurant.model_dump(mode="json"),
        "categories": catalog.menu_categories(menu),
        "menu": [
            {
                **item.model_dump(mode="json"),
                "in_cart": catalog.quantity_in_cart(context.cart.cart, item.id),
            }
            for item in catalog.filter_menu(menu, category)
        ],
        "reviews": [r.model_dump(mode="json") for r in reviews],
    }


@router.post("/{restaurant_id}/reviews")
async def add_review(
    restaurant_id: str,
    form: ReviewForm,
    context: ClientContext = Depends(customer_only),
    api: FoodApiClient = Depends(get_client_api),
):
    """Post a review, then return the refreshed list"""
    await api.add_review(
        ReviewCreate(restaurant_id=restaurant_id, rating=form.rating, comment=form.comment)
    )
    reviews = await api.restaurant_reviews(restaurant_id)
    return {"reviews": [r.model_dump(mode="json") for r in reviews]}
