"""Authentication models"""

from enum import Enum
from typing import Optional

from pydantic import AliasChoices, Field

from .order import ApiModel


class Role(str, Enum):
    CUSTOMER = "CUSTOMER"
    RESTAURANT_OWNER = "RESTAURANT_OWNER"
    DELIVERY_AGENT = "DELIVERY_AGENT"
    ADMIN = "ADMIN"


class LoginRequest(ApiModel):
    email: str
    password: str


class RegisterRequest(ApiModel):
    """Body of POST /auth/register"""
    name: str = Field(min_length=1)
    email: str
    password: str = Field(min_length=1)
    phone: Optional[str] = None
    address: Optional[str] = None
    role: Role = Role.CUSTOMER


class AuthResponse(ApiModel):
    """Identity and bearer token returned by login/register"""
    token: str
    id: Optional[int] = Field(default=None, validation_alias=AliasChoices("id", "userId"))
    name: str
    email: Optional[str] = None
    role: Role
    address: Optional[str] = None
