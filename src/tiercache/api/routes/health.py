# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from tiercache import __version__

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


class ReadyResponse(BaseModel):
    status: str
    cache_backend: str


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", service="tiercache", version=__version__)


@router.get("/ready", response_model=ReadyResponse)
async def ready() -> ReadyResponse:
    """Report which tier is serving; the service is ready either way."""
    from tiercache.cache.service import get_cache_service

    service = get_cache_service()
    if not service.remote_enabled:
        return ReadyResponse(status="ready", cache_backend="local")

    from tiercache.cache.redis import get_redis_remote

    try:
        reachable = await get_redis_remote().ping()
    except Exception as exc:
        return ReadyResponse(status="degraded", cache_backend=f"local (redis: {exc})")
    if not reachable:
        return ReadyResponse(status="degraded", cache_backend="local (redis: no pong)")
    return ReadyResponse(status="ready", cache_backend="redis")
