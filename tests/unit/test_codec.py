# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for value codecs."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

import pytest
from pydantic import BaseModel

from tiercache.cache.codec import JsonCodec
from tiercache.core.exceptions import CodecError


class Booking(BaseModel):
    booking_id: str
    starts_at: datetime


class TestJsonCodec:
    def test_strings_are_quoted(self) -> None:
        assert JsonCodec().encode("v") == '"v"'

    def test_compact_output(self) -> None:
        assert JsonCodec().encode({"a": [1, 2]}) == '{"a":[1,2]}'

    def test_passthrough_strings(self) -> None:
        codec = JsonCodec(passthrough_strings=True)
        assert codec.encode("v") == "v"
        assert codec.encode({"a": 1}) == '{"a":1}'

    def test_decode_json(self) -> None:
        assert JsonCodec().decode('{"name":"Ava"}') == {"name": "Ava"}

    def test_decode_falls_back_to_raw(self) -> None:
        assert JsonCodec().decode("plain text") == "plain text"
        assert JsonCodec().decode("") == ""

    def test_pydantic_model_encoded_as_json_object(self) -> None:
        booking = Booking(booking_id="b-1", starts_at=datetime(2026, 1, 2, 9, 30, tzinfo=UTC))
        codec = JsonCodec()
        decoded = codec.decode(codec.encode(booking))
        assert decoded == {"booking_id": "b-1", "starts_at": "2026-01-02T09:30:00Z"}
        assert Booking.model_validate(decoded) == booking

    def test_uuid_encoded_as_string(self) -> None:
        value = uuid.UUID("12345678-1234-5678-1234-567812345678")
        assert JsonCodec().encode(value) == '"12345678-1234-5678-1234-567812345678"'

    def test_unencodable_raises_codec_error(self) -> None:
        with pytest.raises(CodecError):
            JsonCodec().encode(object())
