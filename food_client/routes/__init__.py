# Client Routes

from .session import router as session_router
from .restaurants import router as restaurants_router
from .cart import router as cart_router
from .orders import router as orders_router
from .owner import router as owner_router
from .agent import router as agent_router
from .admin import router as admin_router

__all__ = [
    "session_router",
    "restaurants_router",
    "cart_router",
    "orders_router",
    "owner_router",
    "agent_router",
    "admin_router",
]
