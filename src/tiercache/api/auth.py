# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""API key authentication dependency for cache administration routes."""

from __future__ import annotations

import secrets

from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader

from tiercache.core.config import get_settings

_api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def require_api_key(
    api_key: str | None = Security(_api_key_header),
) -> str:
    """Validate the X-API-Key header.

    With no keys configured the admin routes are open, which is only
    sensible for local development.
    """
    settings = get_settings()

    if not settings.api_keys:
        return "anonymous"

    if not api_key:
        raise HTTPException(status_code=401, detail="Missing X-API-Key header")

    if not any(secrets.compare_digest(api_key, k) for k in settings.api_keys):
        raise HTTPException(status_code=403, detail="Invalid API key")

    return api_key
