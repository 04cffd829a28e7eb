"""Embedding client interface and factory."""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

from vecbatch.embeddings.types import Embedding


@runtime_checkable
class EmbeddingsClient(Protocol):
    MAX_DOCUMENTS: int

    @property
    def ndims(self) -> int:
        """Length of the vectors this client returns, 0 when unknown."""

    async def embed(self, texts: Sequence[str]) -> list[Embedding]:
        """Embed one batch, returning vectors in input order."""

    async def aclose(self) -> None:
        """Release any underlying client resources."""


def create_embeddings_client(mode: str, model: str, **kwargs: Any) -> EmbeddingsClient:
    if mode == "mock":
        from vecbatch.embeddings.mock import MockEmbeddingsClient

        return MockEmbeddingsClient(model=model, **kwargs)
    if mode == "openai":
        from vecbatch.embeddings.openai import OpenAIEmbeddingsClient

        return OpenAIEmbeddingsClient(model, **kwargs)
    raise ValueError(f"Unsupported embeddings mode: {mode}")
