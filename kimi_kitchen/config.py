"""Centralized configuration from environment variables.

All configuration that varies between environments (local dev, CI, production)
is read from environment variables here. Import from this module instead of
reading os.environ directly in service code.
"""
import os
from functools import lru_cache


class Settings:
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: str = os.getenv("DB_PORT", "5432")
    DB_NAME: str = os.getenv("DB_NAME", "kimi_kitchen")
    DB_USER: str = os.getenv("DB_USER", "kimi_app")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")

    # Auth tokens
    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me-in-production")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "720"))

    # Inventory
    LOW_STOCK_THRESHOLD: float = float(os.getenv("LOW_STOCK_THRESHOLD", "10"))
    PURCHASE_TOTAL_TOLERANCE: float = float(os.getenv("PURCHASE_TOTAL_TOLERANCE", "0.01"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    CORS_ORIGINS: list[str] = os.getenv(
        "CORS_ORIGINS", "http://localhost:5173,http://localhost:3000"
    ).split(",")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
