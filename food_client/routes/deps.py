"""Route dependencies: client context, bound API client, role guards"""

import re
from typing import Iterator, Optional

from fastapi import Depends, HTTPException, Request, Response

from ..core.config import settings
from ..core.context import ClientContext, ContextRegistry, context_registry
from ..models.auth import Role
from ..services.api_client import FoodApiClient, AuthenticationExpiredError
from ..services.checkout import CheckoutService

CLIENT_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")

# Initialize services (replaced through dependency_overrides in tests)
api_client: Optional[FoodApiClient] = None


def get_api_client() -> FoodApiClient:
    """Get or create the shared platform client"""
    global api_client
    if api_client is None:
        api_client = FoodApiClient(
            api_base_url=settings.api_base_url,
            timeout=settings.api_timeout_seconds,
        )
    return api_client


def get_registry() -> ContextRegistry:
    return context_registry


def get_checkout_service() -> CheckoutService:
    return CheckoutService(delivery_fee=settings.default_delivery_fee)


def get_context(
    request: Request,
    response: Response,
    registry: ContextRegistry = Depends(get_registry),
) -> Iterator[ClientContext]:
    """
    Context for the calling browser, issuing a cookie on first visit.

    The registry keeps the context after the request only if it holds state.
    """
    client_id = request.cookies.get(settings.session_cookie_name)
    if client_id and not CLIENT_ID_PATTERN.match(client_id):
        client_id = None

    context = registry.get_or_create_context(client_id)
    if context.client_id != client_id:
        response.set_cookie(
            settings.session_cookie_name,
            context.client_id,
            httponly=True,
            samesite="lax",
        )
    try:
        yield context
    finally:
        registry.retain(context)


def get_client_api(
    context: ClientContext = Depends(get_context),
    api: FoodApiClient = Depends(get_api_client),
) -> FoodApiClient:
    """Platform client acting for the calling browser's session"""
    return api.bind(
        token_provider=lambda: context.session.token,
        on_unauthorized=context.expire_session,
    )


def require_roles(*roles: Role):
    """Guard for routes limited to some roles"""

    def guard(context: ClientContext = Depends(get_context)) -> ClientContext:
        if not context.session.is_authenticated:
            raise AuthenticationExpiredError("Please log in to continue")
        if roles and not context.session.has_role(*roles):
            raise HTTPException(status_code=403, detail="You do not have access to this page")
        return context

    return guard


customer_only = require_roles(Role.CUSTOMER)
owner_or_admin = require_roles(Role.RESTAURANT_OWNER, Role.ADMIN)
agent_only = require_roles(Role.DELIVERY_AGENT)
admin_only = require_roles(Role.ADMIN)
any_user = require_roles()
