"""Exceptions raised by the link discovery engine."""

from __future__ import annotations


class EngineError(Exception):
    """Base class for engine failures."""


class ProviderError(EngineError):
    """A single structured search query failed."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProviderQuotaExceeded(ProviderError):
    """The structured search provider reported quota exhaustion."""


class ProviderNotConfigured(ProviderError):
    """The structured search client was called without usable credentials."""


class GenerationError(EngineError):
    """The generative client call failed."""


class GenerationRateLimited(GenerationError):
    """The generative service rejected the call for rate or quota reasons."""


class FallbackInvocationFailure(EngineError):
    """The generative fallback failed and no other strategy remains."""
