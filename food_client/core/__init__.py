# Core modules

from .config import settings
from .cart import CartStore
from .session import SessionStore, SessionSnapshot
from .context import ClientContext, ContextRegistry

__all__ = ["settings", "CartStore", "SessionStore", "SessionSnapshot", "ClientContext", "ContextRegistry"]
