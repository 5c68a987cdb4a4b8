"""Ordering Client Configuration"""

from decimal import Decimal
from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Food Ordering Client"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 3000

    # Platform API
    api_base_url: str = "http://localhost:8080/api"
    api_timeout_seconds: float = 30.0

    # Session persistence; None keeps snapshots in memory only
    session_store_dir: Optional[str] = None
    session_cookie_name: str = "food_client_id"
    max_client_contexts: int = 10000

    # Checkout
    default_delivery_fee: Decimal = Decimal("30")

    class Config:
        env_file = "config/.env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def session_persistence_enabled(self) -> bool:
        """Check if session snapshots are written to disk"""
        return bool(self.session_store_dir)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
