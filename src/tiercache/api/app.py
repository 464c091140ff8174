# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""FastAPI application factory."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from tiercache import __version__
from tiercache.api.middleware import RequestMiddleware, ResponseCacheMiddleware
from tiercache.api.routes import cache, health
from tiercache.core.config import get_settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    from tiercache.core.logging import setup_logging

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    yield

    if settings.use_redis:
        from tiercache.cache.redis import close_redis_remote

        await close_redis_remote()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="tiercache",
        description="TTL cache with a remote backend and local fallback",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    app.include_router(health.router, prefix="/api/v1", tags=["health"])
    app.include_router(cache.router, prefix="/api/v1", tags=["cache"])
    app.add_middleware(
        ResponseCacheMiddleware,
        prefixes=settings.response_cache_prefixes,
        ttl=settings.response_cache_ttl,
    )
    app.add_middleware(RequestMiddleware)

    return app
