# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""tiercache - TTL cache with a remote backend and local fallback."""

__version__ = "0.1.0"

from tiercache.cache.service import CacheService, get_cache_service

__all__ = ["CacheService", "__version__", "get_cache_service"]
