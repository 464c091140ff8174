# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Request middleware for logging, request ID tracking, and GET response caching."""

from __future__ import annotations

import json
import logging
import time
import uuid
from collections.abc import Sequence

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

logger = logging.getLogger("tiercache.api.middleware")

_RESPONSE_KEY_PREFIX = "response:"


def response_cache_key(request: Request) -> str:
    """Build the cache key for a request from its path and query string."""
    query = request.url.query
    return f"{_RESPONSE_KEY_PREFIX}{request.url.path}" + (f"?{query}" if query else "")


class ResponseCacheMiddleware(BaseHTTPMiddleware):
    """Serve successful JSON GET responses from the cache.

    * Only ``GET`` requests whose path starts with one of *prefixes* are
      considered.
    * A cached body is returned directly with ``X-Cache: HIT``.
    * Otherwise the request proceeds; a 2xx JSON response is stored for
      *ttl* seconds and returned with ``X-Cache: MISS``.
    * Any failure while reading or storing the body leaves the response
      untouched.
    """

    def __init__(self, app: ASGIApp, prefixes: Sequence[str] = (), ttl: int = 300) -> None:
        super().__init__(app)
        self._prefixes = tuple(prefixes)
        self._ttl = ttl

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method != "GET" or not request.url.path.startswith(self._prefixes):
            return await call_next(request)

        from tiercache.cache.service import get_cache_service

        cache = get_cache_service()
        key = response_cache_key(request)

        cached = await cache.get(key)
        if cached is not None:
            logger.info("Serving from cache: %s", key)
            return JSONResponse(content=cached, headers={"X-Cache": "HIT"})

        response = await call_next(request)
        if not 200 <= response.status_code < 300:
            return response
        if not response.headers.get("content-type", "").startswith("application/json"):
            return response

        body = b"".join([chunk async for chunk in response.body_iterator])
        try:
            await cache.set(key, json.loads(body), ttl=self._ttl)
        except ValueError as exc:
            logger.error("Cache error for %s: %s", key, exc)

        headers = dict(response.headers)
        headers.pop("content-length", None)
        headers["X-Cache"] = "MISS"
        return Response(
            content=body,
            status_code=response.status_code,
            headers=headers,
        )


class RequestMiddleware(BaseHTTPMiddleware):
    """Adds request logging and X-Request-ID header to every response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = uuid.uuid4().hex
        start = time.monotonic()

        response = await call_next(request)

        duration_ms = round((time.monotonic() - start) * 1000, 1)
        response.headers["X-Request-ID"] = request_id

        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )

        return response
