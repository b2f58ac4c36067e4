"""Storefront Cart Configuration"""

from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Storefront Cart"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 8002

    # Money
    currency: str = "INR"
    default_shipping_fee: float = 0.0

    # Cart partitions
    cart_key_prefix: str = "identity:cart"
    guest_cart_key: str = "identity:cart:guest"

    # Storage medium: "memory" or "file"
    storage_backend: str = "memory"
    storage_dir: Optional[str] = None

    class Config:
        env_file = "config/.env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
