# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Value codecs translating between caller values and stored text."""

from __future__ import annotations

import abc
import json
from typing import Any

from pydantic_core import PydanticSerializationError, to_jsonable_python

from tiercache.core.exceptions import CodecError


class ValueCodec(abc.ABC):
    """Encode arbitrary values to text and back."""

    @abc.abstractmethod
    def encode(self, value: Any) -> str:
        """Return the text form of *value*.  Raises :class:`CodecError`."""

    @abc.abstractmethod
    def decode(self, raw: str) -> Any:
        """Return the value represented by *raw*."""


class JsonCodec(ValueCodec):
    """JSON codec that tolerates foreign, non-JSON text on decode.

    Pydantic models, dataclasses, datetimes and UUIDs are converted with
    :func:`pydantic_core.to_jsonable_python`, so they read back as their
    JSON-compatible form (dicts, ISO strings) rather than the original type.

    Args:
        passthrough_strings: Store ``str`` values verbatim instead of
            JSON-quoting them.  Strings that happen to be valid JSON
            (``"42"``, ``"true"``) then read back parsed.
    """

    def __init__(self, passthrough_strings: bool = False) -> None:
        self._passthrough_strings = passthrough_strings

    def encode(self, value: Any) -> str:
        if self._passthrough_strings and isinstance(value, str):
            return value
        try:
            return json.dumps(to_jsonable_python(value), separators=(",", ":"))
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            raise CodecError(f"Cannot encode value of type {type(value).__name__}") from exc

    def decode(self, raw: str) -> Any:
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            return raw
