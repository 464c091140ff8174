# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache management API endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from tiercache.api.auth import require_api_key
from tiercache.cache.base import TTLMode

router = APIRouter()


class CacheEntryRequest(BaseModel):
    value: Any
    ttl: float | None = Field(default=None, gt=0)
    mode: TTLMode = TTLMode.EX


class CacheEntryResponse(BaseModel):
    key: str
    value: Any


class CacheClearResponse(BaseModel):
    cleared: int
    message: str


class CacheStatsResponse(BaseModel):
    hits: int
    remote_hits: int
    local_hits: int
    misses: int
    remote_errors: int
    total: int
    hit_rate: float
    local_size: int
    remote_enabled: bool


@router.get("/cache/entries/{key}", response_model=CacheEntryResponse)
async def get_entry(
    key: str,
    _auth: str = Depends(require_api_key),
) -> CacheEntryResponse:
    from tiercache.cache.service import get_cache_service

    value = await get_cache_service().get(key)
    if value is None:
        raise HTTPException(status_code=404, detail=f"No cache entry for {key!r}")
    return CacheEntryResponse(key=key, value=value)


@router.put("/cache/entries/{key}", response_model=CacheEntryResponse)
async def put_entry(
    key: str,
    body: CacheEntryRequest,
    _auth: str = Depends(require_api_key),
) -> CacheEntryResponse:
    from tiercache.cache.service import get_cache_service

    await get_cache_service().set(key, body.value, ttl=body.ttl, mode=body.mode)
    return CacheEntryResponse(key=key, value=body.value)


@router.delete("/cache/entries/{key}", status_code=204)
async def delete_entry(
    key: str,
    _auth: str = Depends(require_api_key),
) -> Response:
    from tiercache.cache.service import get_cache_service

    await get_cache_service().delete(key)
    return Response(status_code=204)


@router.post("/cache/clear", response_model=CacheClearResponse)
async def clear_cache(
    _auth: str = Depends(require_api_key),
) -> CacheClearResponse:
    """Flush the local cache tier of this process."""
    from tiercache.cache.service import get_cache_service

    count = get_cache_service().clear_local()
    return CacheClearResponse(cleared=count, message=f"Cleared {count} cached entries")


@router.get("/cache/stats", response_model=CacheStatsResponse)
async def cache_stats(
    _auth: str = Depends(require_api_key),
) -> CacheStatsResponse:
    """Show cache hit/miss statistics and current local size."""
    from tiercache.cache.service import get_cache_service

    service = get_cache_service()
    stats = service.stats
    return CacheStatsResponse(
        hits=stats.hits,
        remote_hits=stats.remote_hits,
        local_hits=stats.local_hits,
        misses=stats.misses,
        remote_errors=stats.remote_errors,
        total=stats.total,
        hit_rate=round(stats.hit_rate, 4),
        local_size=service.local.size(),
        remote_enabled=service.remote_enabled,
    )
