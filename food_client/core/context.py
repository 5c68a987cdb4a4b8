"""Per-browser client state: one session store and one cart store"""

import uuid
import logging
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Optional
from dataclasses import dataclass, field

from .cart import CartStore
from .config import settings
from .session import SessionStore, SessionStorage, FileSessionStorage, MemorySessionStorage

logger = logging.getLogger(__name__)


@dataclass
class ClientContext:
    """State owned by one browser"""
    client_id: str
    created_at: datetime
    session: SessionStore
    cart: CartStore = field(default_factory=CartStore)

    @property
    def holds_state(self) -> bool:
        """Logged in or carrying a cart"""
        return self.session.is_authenticated or bool(self.cart.lines)

    def expire_session(self) -> None:
        """Authentication failure: drop identity and the cart with it"""
        self.session.expire()
        self.cart.clear()

    def logout(self) -> None:
        self.session.logout()
        self.cart.clear()


class ContextRegistry:
    """
    Creates and tracks client contexts keyed by browser cookie.

    Only contexts holding state stay registered, at most max_contexts of
    them; the least recently used one is dropped first. A dropped context
    comes back from its persisted snapshot on the next request.
    """

    def __init__(self, session_store_dir: Optional[str] = None, max_contexts: int = 10000):
        self.session_store_dir = session_store_dir
        self.max_contexts = max_contexts
        self.contexts: OrderedDict[str, ClientContext] = OrderedDict()

    def _storage_for(self, client_id: str) -> SessionStorage:
        if self.session_store_dir:
            return FileSessionStorage(self.session_store_dir, client_id)
        return MemorySessionStorage()

    def _build(self, client_id: Optional[str]) -> ClientContext:
        client_id = client_id or uuid.uuid4().hex
        context = ClientContext(
            client_id=client_id,
            created_at=datetime.now(timezone.utc),
            session=SessionStore(self._storage_for(client_id)),
        )
        context.session.hydrate()
        return context

    def _register(self, context: ClientContext) -> None:
        self.contexts[context.client_id] = context
        self.contexts.move_to_end(context.client_id)
        while len(self.contexts) > self.max_contexts:
            evicted, _ = self.contexts.popitem(last=False)
            logger.info(f"Evicted idle client context {evicted}")

    def create_context(self, client_id: Optional[str] = None) -> ClientContext:
        """Create, hydrate and register a context"""
        context = self._build(client_id)
        self._register(context)
        logger.debug(f"Created client context {context.client_id}")
        return context

    def get_context(self, client_id: str) -> Optional[ClientContext]:
        return self.contexts.get(client_id)

    def get_or_create_context(self, client_id: Optional[str] = None) -> ClientContext:
        """
        Get the registered context, or a freshly hydrated one.

        A new context is not registered here; call retain() once the
        request is done with it.
        """
        if client_id and client_id in self.contexts:
            self.contexts.move_to_end(client_id)
            return self.contexts[client_id]
        return self._build(client_id)

    def retain(self, context: ClientContext) -> None:
        """Keep a context that holds state, forget one that does not"""
        if context.holds_state:
            self._register(context)
        else:
            self.drop_context(context.client_id)

    def drop_context(self, client_id: str) -> bool:
        """Forget a context; its persisted snapshot is kept"""
        if client_id in self.contexts:
            del self.contexts[client_id]
            return True
        return False


# Process-wide registry, handed to routes through dependency injection
context_registry = ContextRegistry(settings.session_store_dir, settings.max_client_contexts)
