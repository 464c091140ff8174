# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for tiercache."""


class TiercacheError(Exception):
    """Base exception for all tiercache errors."""


class ConfigurationError(TiercacheError):
    """Invalid or missing configuration."""


class RemoteUnavailableError(TiercacheError):
    """The remote cache backend is disabled or not ready."""


class CodecError(TiercacheError):
    """A value could not be encoded to or decoded from its text form."""
