# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Two-tier TTL cache: remote backend with a process-local fallback."""

from tiercache.cache.base import RemoteHandle, TTLMode
from tiercache.cache.codec import JsonCodec, ValueCodec
from tiercache.cache.local import LocalStore
from tiercache.cache.service import (
    CacheService,
    CacheStats,
    get_cache_service,
    reset_cache_service,
)

__all__ = [
    "CacheService",
    "CacheStats",
    "JsonCodec",
    "LocalStore",
    "RemoteHandle",
    "TTLMode",
    "ValueCodec",
    "get_cache_service",
    "reset_cache_service",
]
