"""
Ordering Client Application

Web client for the food-ordering platform: session, cart and
role dashboards on top of the platform's REST API.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .routes import (
    session_router,
    restaurants_router,
    cart_router,
    orders_router,
    owner_router,
    agent_router,
    admin_router,
)
from .core.config import settings
from .services.api_client import (
    ApiRejectedError,
    ApiTransportError,
    MalformedResponseError,
    AuthenticationExpiredError,
    FoodApiError,
)
from .services.checkout import OrderValidationError

# Load environment variables
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "config", ".env"))

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Ordering client starting up...")
    logger.info(f"Platform API: {settings.api_base_url}")
    logger.info(f"Session persistence: {'enabled' if settings.session_persistence_enabled else 'memory only'}")

    yield

    logger.info("Ordering client shutting down...")
    from .routes import deps
    if deps.api_client:
        await deps.api_client.close()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Web client for browsing restaurants, ordering food and managing deliveries",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(OrderValidationError)
async def validation_error_handler(request: Request, exc: OrderValidationError):
    return JSONResponse(status_code=422, content={"detail": exc.message})


@app.exception_handler(AuthenticationExpiredError)
async def auth_expired_handler(request: Request, exc: AuthenticationExpiredError):
    return JSONResponse(status_code=401, content={"detail": exc.message, "redirect": "/login"})


@app.exception_handler(ApiRejectedError)
async def rejected_handler(request: Request, exc: ApiRejectedError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(ApiTransportError)
async def transport_error_handler(request: Request, exc: ApiTransportError):
    return JSONResponse(status_code=502, content={"detail": exc.message})


@app.exception_handler(MalformedResponseError)
async def malformed_response_handler(request: Request, exc: MalformedResponseError):
    return JSONResponse(status_code=502, content={"detail": exc.message})


@app.exception_handler(FoodApiError)
async def client_error_handler(request: Request, exc: FoodApiError):
    logger.error(f"Unhandled client error on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=500, content={"detail": exc.message})


# Include routers
app.include_router(session_router)
app.include_router(restaurants_router)
app.include_router(cart_router)
app.include_router(orders_router)
app.include_router(owner_router)
app.include_router(agent_router)
app.include_router(admin_router)


@app.get("/")
async def home():
    return {
        "message": "Food Ordering Client API",
        "docs": "/docs",
        "endpoints": {
            "session": "/api/session",
            "restaurants": "/api/restaurants",
            "cart": "/api/cart",
            "orders": "/api/orders",
            "owner": "/api/owner/dashboard",
            "agent": "/api/agent/orders",
            "admin": "/api/admin/orders",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "food-ordering-client",
        "api_configured": bool(settings.api_base_url),
        "session_persistence": settings.session_persistence_enabled,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "food_client.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
