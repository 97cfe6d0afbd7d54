"""
Main application entry point.
Loads configuration, configures logging and serves the gateway with uvicorn.
"""
import logging
import sys

import uvicorn
from pydantic import ValidationError

from coin_gateway.api.app import create_app
from coin_gateway.config import load_settings

logger = logging.getLogger(__name__)


def _configure_logging(level: str):
    # Log to stdout for container log collectors
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )


def main():
    """Run the application."""
    _configure_logging("INFO")
    try:
        settings = load_settings()
    except ValidationError:
        sys.exit(1)

    _configure_logging(settings.log_level)
    logger.info(
        "Configuration loaded",
        extra={
            "address": settings.address,
            "port": settings.port,
            "log_level": settings.log_level,
            "upstream_base_url": settings.upstream_base_url,
            "db_pool_size": settings.db_pool_size,
        },
    )
    logger.info(f"Server running at http://{settings.address}:{settings.port}")

    uvicorn.run(
        create_app(settings),
        host=settings.address,
        port=settings.port,
        log_level=settings.log_level.lower(),
        lifespan="on",
        access_log=True,
    )


if __name__ == "__main__":
    main()
