"""Login, registration and current-identity routes"""

from typing import Optional

from fastapi import APIRouter, Depends

from ..core.context import ClientContext
from ..core.session import Session
from ..models.auth import Role, LoginRequest, RegisterRequest
from ..services.api_client import FoodApiClient
from .deps import get_context, get_client_api

router = APIRouter(prefix="/api/session", tags=["Session"])

NAV_LINKS = {
    Role.CUSTOMER: [
        {"to": "/", "label": "Restaurants"},
        {"to": "/orders", "label": "My Orders"},
    ],
    Role.RESTAURANT_OWNER: [
        {"to": "/owner/dashboard", "label": "Dashboard"},
        {"to": "/owner/restaurants", "label": "My Restaurants"},
    ],
    Role.DELIVERY_AGENT: [
        {"to": "/agent/orders", "label": "Deliveries"},
    ],
    Role.ADMIN: [
        {"to": "/admin", "label": "Admin Panel"},
        {"to": "/", "label": "Restaurants"},
    ],
}

HOME_PAGES = {
    Role.CUSTOMER: "/",
    Role.RESTAURANT_OWNER: "/owner/dashboard",
    Role.DELIVERY_AGENT: "/agent/orders",
    Role.ADMIN: "/admin",
}


def _user_view(session: Optional[Session]) -> Optional[dict]:
    if session is None:
        return None
    return session.model_dump(mode="json", exclude={"token"})


def session_state(context: ClientContext) -> dict:
    """What the navigation bar needs to render"""
    current = context.session.current
    return {
        "authenticated": current is not None,
        "user": _user_view(current),
        "nav_links": NAV_LINKS.get(current.role, []) if current else [],
        "home": HOME_PAGES.get(current.role, "/") if current else "/login",
        "cart_count": context.cart.item_count if current and current.role == Role.CUSTOMER else 0,
    }


@router.get("")
async def get_session(context: ClientContext = Depends(get_context)):
    """Current identity and navigation for its role"""
    return session_state(context)


@router.post("/login")
async def login(
    request: LoginRequest,
    context: ClientContext = Depends(get_context),
    api: FoodApiClient = Depends(get_client_api),
):
    """Log in; a rejection leaves the current session untouched"""
    await context.session.login(api, request.email, request.password)
    return session_state(context)


@router.post("/register")
async def register(
    request: RegisterRequest,
    context: ClientContext = Depends(get_context),
    api: FoodApiClient = Depends(get_client_api),
):
    """Create an account and log in with it"""
    await context.session.register(api, request)
    return session_state(context)


@router.post("/logout")
async def logout(context: ClientContext = Depends(get_context)):
    """Log out; safe to call repeatedly"""
    context.logout()
    return session_state(context)
