# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from tiercache.cache.local import LocalStore


class FakeClock:
    """Manually advanced time source for LocalStore tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def wall_clock() -> FakeClock:
    return FakeClock(start=1_700_000_000.0)


@pytest.fixture
def local_store(clock: FakeClock, wall_clock: FakeClock) -> LocalStore:
    return LocalStore(max_entries=1000, clock=clock, wall_clock=wall_clock)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep a developer's TIERCACHE_* environment out of the tests."""
    import os

    for name in list(os.environ):
        if name.startswith("TIERCACHE_"):
            monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Reset the cache service and Redis owner singletons between tests."""
    import tiercache.cache.redis as redis_mod
    from tiercache.cache.service import reset_cache_service

    reset_cache_service()
    redis_mod._remote = None
    yield
    reset_cache_service()
    redis_mod._remote = None
