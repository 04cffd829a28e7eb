"""Caller-side chunking for document sets larger than one request."""

from __future__ import annotations

import logging
from typing import Callable, Iterator, Sequence

from vecbatch.embeddings.client import EmbeddingsClient
from vecbatch.embeddings.types import Embedding

logger = logging.getLogger(__name__)


def iter_batches(documents: Sequence[str], size: int) -> Iterator[list[str]]:
    if size <= 0:
        raise ValueError("batch size must be positive")
    for start in range(0, len(documents), size):
        yield list(documents[start : start + size])


async def embed_documents(
    client: EmbeddingsClient,
    documents: Sequence[str],
    *,
    batch_size: int | None = None,
    on_batch: Callable[[int, int], None] | None = None,
) -> list[Embedding]:
    """Embed any number of documents one batch at a time.

    Batches run sequentially and results keep the input order. ``on_batch`` is
    called with ``(documents_done, documents_total)`` after every batch.
    """
    size = min(batch_size or client.MAX_DOCUMENTS, client.MAX_DOCUMENTS)
    total = len(documents)
    results: list[Embedding] = []
    for index, batch in enumerate(iter_batches(documents, size), start=1):
        logger.debug("Embedding batch %d (%d documents)", index, len(batch))
        results.extend(await client.embed(batch))
        if on_batch is not None:
            on_batch(len(results), total)
    return results
