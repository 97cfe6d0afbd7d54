"""
Application factory. Builds every shared component once and hands it to the
routes through ``app.state``.
"""
from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from coin_gateway.api import auth, routes
from coin_gateway.config import Settings
from coin_gateway.database import build_engine, build_session_factory, init_db
from coin_gateway.schemas import ErrorResponse
from coin_gateway.security.credentials import CredentialManager
from coin_gateway.store import UserStore
from coin_gateway.upstream.base import UpstreamClient
from coin_gateway.upstream.coingecko import CoinGeckoClient
from coin_gateway.usage_counter import UsageCounter

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings,
    upstream: UpstreamClient | None = None,
    engine: Engine | None = None,
    credentials: CredentialManager | None = None,
) -> FastAPI:
    owns_engine = engine is None
    if owns_engine:
        engine = build_engine(settings)
    session_factory = build_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Coin Gateway...")
        try:
            init_db(engine)
            logger.info("Application started successfully")
            yield
        except Exception as e:
            logger.error(f"Startup failed: {e}", exc_info=True)
            raise
        finally:
            logger.info("Shutting down Coin Gateway...")
            if owns_engine:
                engine.dispose()
            logger.info("Shutdown complete")

    app = FastAPI(title="Coin Gateway", version="1.0.0", lifespan=lifespan)

    app.state.usage_counter = UsageCounter()
    app.state.upstream = upstream or CoinGeckoClient(
        base_url=settings.upstream_base_url,
        user_agent=settings.upstream_user_agent,
        timeout_seconds=settings.upstream_timeout_seconds,
    )
    app.state.credentials = credentials or CredentialManager(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost_kib,
        parallelism=settings.argon2_parallelism,
    )
    app.state.user_store = UserStore(session_factory)

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
        response = None
        start = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers["x-request-id"] = request_id
            return response
        finally:
            latency_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.info(
                "request_complete",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code if response else 500,
                    "latency_ms": latency_ms,
                },
            )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(_: Request, exc: Exception):
        logger.error(f"Unhandled API exception: {exc}", exc_info=True)
        payload = ErrorResponse(error="Internal server error")
        return JSONResponse(status_code=500, content=payload.model_dump())

    app.include_router(routes.router)
    app.include_router(auth.router)
    return app
