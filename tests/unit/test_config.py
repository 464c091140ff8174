# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from tiercache.core.config import Settings


class TestSettings:
    def test_defaults(self) -> None:
        s = Settings()
        assert s.use_redis is False
        assert s.redis_url == "redis://localhost:6379/0"
        assert s.cache_default_ttl == 300
        assert s.cache_local_max_entries == 1000
        assert s.cache_remote_timeout is None
        assert s.api_keys == []
        assert s.response_cache_prefixes == []

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("true", True), ("TRUE", True), ("1", True), ("yes", True), ("false", False), ("no", False)],
    )
    def test_use_redis_tokens(self, monkeypatch, raw: str, expected: bool) -> None:
        monkeypatch.setenv("TIERCACHE_USE_REDIS", raw)
        assert Settings().use_redis is expected

    def test_empty_switch_means_local_only(self, monkeypatch) -> None:
        monkeypatch.setenv("TIERCACHE_USE_REDIS", "")
        assert Settings().use_redis is False

    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("TIERCACHE_REDIS_URL", "redis://cache:6380/1")
        monkeypatch.setenv("TIERCACHE_CACHE_DEFAULT_TTL", "60")
        monkeypatch.setenv("TIERCACHE_CACHE_REMOTE_TIMEOUT", "0.5")
        monkeypatch.setenv("TIERCACHE_API_KEYS", '["key-alpha","key-beta"]')
        s = Settings()
        assert s.redis_url == "redis://cache:6380/1"
        assert s.cache_default_ttl == 60
        assert s.cache_remote_timeout == 0.5
        assert s.api_keys == ["key-alpha", "key-beta"]

    def test_comma_separated_prefixes(self) -> None:
        s = Settings(response_cache_prefixes="/api/v1/services, /api/v1/providers")
        assert s.response_cache_prefixes == ["/api/v1/services", "/api/v1/providers"]

    def test_comma_separated_api_keys_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("TIERCACHE_API_KEYS", "key-alpha,key-beta")
        assert Settings().api_keys == ["key-alpha", "key-beta"]

    def test_comma_separated_prefixes_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv(
            "TIERCACHE_RESPONSE_CACHE_PREFIXES", "/api/v1/services, /api/v1/providers"
        )
        assert Settings().response_cache_prefixes == ["/api/v1/services", "/api/v1/providers"]

    def test_single_api_key_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("TIERCACHE_API_KEYS", "key-alpha")
        assert Settings().api_keys == ["key-alpha"]
