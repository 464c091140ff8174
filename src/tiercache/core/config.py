# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

import json
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _parse_str_list(v: object) -> list[str]:
    """Accept a JSON array or a comma-separated string from the environment."""
    if isinstance(v, str):
        stripped = v.strip()
        if stripped.startswith("["):
            try:
                v = json.loads(stripped)
            except ValueError:
                pass
        else:
            return [item.strip() for item in stripped.split(",") if item.strip()]
    if isinstance(v, list):
        return [str(item).strip() for item in v if str(item).strip()]
    return []


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TIERCACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
    )

    # Remote backend switch; false means local-only mode
    use_redis: bool = False
    redis_url: str = "redis://localhost:6379/0"
    redis_password: str = ""
    redis_key_prefix: str = "tiercache:"
    redis_socket_timeout: float = 2.0

    # Cache service
    cache_default_ttl: int = 300  # seconds (default 5 minutes)
    cache_local_max_entries: int = 1000
    cache_remote_timeout: float | None = None

    # HTTP response cache; empty until a host app mounts routes worth caching
    response_cache_prefixes: Annotated[list[str], NoDecode] = []
    response_cache_ttl: int = 300

    @field_validator("response_cache_prefixes", mode="before")
    @classmethod
    def _parse_response_cache_prefixes(cls, v: object) -> list[str]:
        return _parse_str_list(v)

    @field_validator("use_redis", mode="before")
    @classmethod
    def _parse_use_redis(cls, v: object) -> object:
        # Accept the same loose truthy tokens operators put in USE_REDIS
        if isinstance(v, str):
            return v.strip().lower() in {"1", "true", "yes", "on"}
        return v

    # API server
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    api_keys: Annotated[list[str], NoDecode] = []

    @field_validator("api_keys", mode="before")
    @classmethod
    def _parse_api_keys(cls, v: object) -> list[str]:
        return _parse_str_list(v)

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"


def get_settings() -> Settings:
    return Settings()
