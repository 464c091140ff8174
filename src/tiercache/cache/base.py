# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Remote backend capability interface and TTL modes."""

from __future__ import annotations

import abc
from collections.abc import Callable
from enum import StrEnum


class TTLMode(StrEnum):
    """How a TTL argument is interpreted.

    The names follow the Redis ``SET`` options so the same flag can be
    handed to the remote backend unchanged.
    """

    EX = "EX"  # relative, seconds
    PX = "PX"  # relative, milliseconds
    EXAT = "EXAT"  # absolute unix time, seconds
    PXAT = "PXAT"  # absolute unix time, milliseconds


class RemoteHandle(abc.ABC):
    """Capability interface exposed by the owner of a remote key/value client.

    Implementations may raise any exception on connectivity or protocol
    problems; callers treat every failure the same way.
    """

    @abc.abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored text for *key*, or ``None`` if it is not set."""

    @abc.abstractmethod
    async def set(
        self,
        key: str,
        value: str,
        mode: TTLMode | None = None,
        ttl: float | None = None,
    ) -> None:
        """Store *value* under *key*, expiring according to *mode* and *ttl*.

        Args:
            key: Cache key.
            value: Encoded text to store.
            mode: How *ttl* is interpreted.  Ignored when *ttl* is ``None``.
            ttl: Expiry amount.  ``None`` leaves expiry to the backend.
        """

    @abc.abstractmethod
    async def delete(self, key: str) -> None:
        """Remove *key*.  Deleting a missing key is not an error."""


# Zero-argument lookup returning the remote handle, or None when not ready.
RemoteAccessor = Callable[[], "RemoteHandle | None"]
