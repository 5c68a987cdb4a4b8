"""Session management for the authenticated client identity"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Optional, Protocol, TYPE_CHECKING

import jwt
from pydantic import BaseModel, ValidationError

from ..models.auth import Role, AuthResponse, RegisterRequest

if TYPE_CHECKING:
    from ..services.api_client import FoodApiClient

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class Session(BaseModel):
    """Authenticated identity and its bearer token"""
    name: str
    role: Role
    token: str
    user_id: Optional[int] = None
    email: Optional[str] = None
    address: Optional[str] = None

    @classmethod
    def from_auth_response(cls, auth: AuthResponse) -> "Session":
        return cls(
            name=auth.name,
            role=auth.role,
            token=auth.token,
            user_id=auth.id,
            email=auth.email,
            address=auth.address,
        )


class SessionSnapshot(BaseModel):
    """
    Persisted form of a session.

    The record carries a version so that fields can be added later:
    unknown fields are ignored on read and new optional fields default,
    while a snapshot written by a newer version is rejected.
    """
    version: int = SNAPSHOT_VERSION
    session: Session
    saved_at: datetime

    def serialize(self) -> str:
        return self.model_dump_json()

    @classmethod
    def deserialize(cls, raw: str) -> Optional["SessionSnapshot"]:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding unreadable session snapshot")
            return None

        if not isinstance(data, dict):
            logger.warning("Discarding malformed session snapshot")
            return None

        version = data.get("version", 0)
        if not isinstance(version, int) or not 1 <= version <= SNAPSHOT_VERSION:
            logger.warning(f"Discarding session snapshot with unsupported version {version!r}")
            return None

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Discarding invalid session snapshot: {e.error_count()} errors")
            return None


def token_expired(token: str) -> bool:
    """Check the exp claim of a JWT bearer token; opaque tokens never expire here"""
    try:
        jwt.decode(token, options={"verify_signature": False, "verify_exp": True})
    except jwt.ExpiredSignatureError:
        return True
    except jwt.InvalidTokenError:
        return False
    return False


class SessionStorage(Protocol):
    """Where session snapshots survive reloads"""

    def load(self) -> Optional[str]: ...

    def save(self, raw: str) -> None: ...

    def erase(self) -> None: ...


class MemorySessionStorage:
    """Snapshot storage that lives as long as the process"""

    def __init__(self):
        self.raw: Optional[str] = None

    def load(self) -> Optional[str]:
        return self.raw

    def save(self, raw: str) -> None:
        self.raw = raw

    def erase(self) -> None:
        self.raw = None


class FileSessionStorage:
    """Snapshot storage as one JSON file per client"""

    def __init__(self, directory: str, key: str):
        self.path = os.path.join(directory, f"{key}.json")
        os.makedirs(directory, exist_ok=True)

    def load(self) -> Optional[str]:
        if not os.path.exists(self.path):
            return None
        with open(self.path, "r", encoding="utf-8") as f:
            return f.read()

    def save(self, raw: str) -> None:
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(raw)
        os.replace(tmp_path, self.path)

    def erase(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)


class SessionStore:
    """Holds the current authenticated identity and persists it"""

    def __init__(self, storage: Optional[SessionStorage] = None):
        self.storage = storage or MemorySessionStorage()
        self.current: Optional[Session] = None

    @property
    def token(self) -> Optional[str]:
        return self.current.token if self.current else None

    @property
    def is_authenticated(self) -> bool:
        return self.current is not None

    def has_role(self, *roles: Role) -> bool:
        return self.current is not None and self.current.role in roles

    def hydrate(self) -> Optional[Session]:
        """Restore the session persisted by a previous page load"""
        raw = self.storage.load()
        if raw is None:
            return None

        snapshot = SessionSnapshot.deserialize(raw)
        if snapshot is None or token_expired(snapshot.session.token):
            self.storage.erase()
            self.current = None
            return None

        self.current = snapshot.session
        logger.info(f"Restored session for {snapshot.session.name} ({snapshot.session.role.value})")
        return self.current

    def _activate(self, session: Session) -> Session:
        snapshot = SessionSnapshot(session=session, saved_at=datetime.now(timezone.utc))
        self.storage.save(snapshot.serialize())
        self.current = session
        return session

    async def login(self, api: "FoodApiClient", email: str, password: str) -> Session:
        """Log in through the platform API; errors propagate unchanged"""
        auth = await api.login(email, password)
        session = self._activate(Session.from_auth_response(auth))
        logger.info(f"Logged in {session.name} as {session.role.value}")
        return session

    async def register(self, api: "FoodApiClient", request: RegisterRequest) -> Session:
        """Register through the platform API and log straight in"""
        auth = await api.register(request)
        session = self._activate(Session.from_auth_response(auth))
        logger.info(f"Registered {session.name} as {session.role.value}")
        return session

    def logout(self) -> None:
        """Forget the identity and its persisted snapshot"""
        if self.current:
            logger.info(f"Logged out {self.current.name}")
        self.current = None
        self.storage.erase()

    def expire(self) -> None:
        """Authentication failure detected on a remote call"""
        if self.current:
            logger.info(f"Session for {self.current.name} expired")
        self.current = None
        self.storage.erase()
