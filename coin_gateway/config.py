"""
Configuration module for Coin Gateway.
All settings are loaded from environment variables (or a local .env file).
"""
import logging

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Runtime
    address: str
    port: int = Field(ge=0, le=65535)

    # Database
    database_url: str = "sqlite:///./coin_gateway.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout_seconds: int = 30

    # Logging
    log_level: str = "INFO"

    # Upstream market data
    upstream_base_url: str = "https://api.coingecko.com/api/v3"
    upstream_user_agent: str = "coin-gateway/1.0"
    upstream_timeout_seconds: float | None = None

    # Password hashing
    argon2_time_cost: int = 3
    argon2_memory_cost_kib: int = 65536
    argon2_parallelism: int = 4

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


def load_settings() -> Settings:
    """Build settings from the environment, logging why startup cannot proceed."""
    try:
        return Settings()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        raise
