"""Embeddings client interfaces."""

from vecbatch.embeddings.batch import embed_documents, iter_batches
from vecbatch.embeddings.client import EmbeddingsClient, create_embeddings_client
from vecbatch.embeddings.errors import (
    EmbeddingError,
    EmbeddingTransportError,
    ProviderError,
    RateLimitExhaustedError,
    ResponseShapeError,
)
from vecbatch.embeddings.types import Embedding, EmbeddingRequest

__all__ = [
    "Embedding",
    "EmbeddingError",
    "EmbeddingRequest",
    "EmbeddingTransportError",
    "EmbeddingsClient",
    "ProviderError",
    "RateLimitExhaustedError",
    "ResponseShapeError",
    "create_embeddings_client",
    "embed_documents",
    "iter_batches",
]
