"""Failure types raised by embeddings clients."""

from __future__ import annotations

from dataclasses import dataclass


class EmbeddingError(RuntimeError):
    """Base class for every failure of an embedding call."""


class EmbeddingTransportError(EmbeddingError):
    """The request never produced an HTTP response (connect error, timeout)."""


class ResponseShapeError(EmbeddingError):
    """A 200 response that cannot be mapped back onto the submitted documents."""


@dataclass(eq=False)
class ProviderError(EmbeddingError):
    message: str
    status_code: int | None = None
    response_text: str | None = None

    def __str__(self) -> str:
        if self.status_code is None:
            return f"ProviderError({self.message})"
        return f"ProviderError(status={self.status_code}, message={self.message})"


@dataclass(eq=False)
class RateLimitExhaustedError(ProviderError):
    """A 429 whose reset headers gave no usable wait time."""

    status_code: int | None = 429

    def __str__(self) -> str:
        return f"RateLimitExhaustedError(status={self.status_code}, message={self.message})"
